from .validation import validate_num_vertices, validate_adjacency, validate_colors, validate_color, validate_vertex


def create_graph_store(num_vertices, adjacency, initial_colors=None):
    """
    GraphStore - vertex count, symmetric weight matrix and the color array.

    The weight matrix is fixed after construction. The color array (vAttr)
    is mutated in place by the engine, one write per vertex per superstep.
    Neighbor lists are derived once so sparse iteration sees exactly the
    same edges as the dense scan.
    """
    validate_num_vertices(num_vertices)
    weights = validate_adjacency(num_vertices, adjacency)
    if initial_colors is None:
        initial_colors = [0] * num_vertices
    initial_colors = validate_colors(num_vertices, initial_colors)

    state = {
        "num_vertices": num_vertices,
        "weights": weights,
        "neighbors": [
            tuple(j for j in range(num_vertices) if weights[i][j] != 0)
            for i in range(num_vertices)
        ],
        "initial_colors": tuple(initial_colors),
        "colors": list(initial_colors)
    }

    def get_num_vertices():
        return state["num_vertices"]

    def weight(i, j):
        return state["weights"][i][j]

    def is_adjacent(i, j):
        return state["weights"][i][j] != 0

    def neighbors(i):
        return state["neighbors"][i]

    def edges():
        # Each undirected edge once, as (i, j, weight) with i < j
        return [
            (i, j, state["weights"][i][j])
            for i in range(state["num_vertices"])
            for j in state["neighbors"][i]
            if i < j
        ]

    def read_color(vertex):
        return state["colors"][vertex]

    def write_color(vertex, color):
        validate_vertex(state["num_vertices"], vertex)
        validate_color(vertex, color)
        state["colors"][vertex] = color
        return color

    def colors():
        # Live view for the engine's phases; callers outside the engine use snapshot()
        return state["colors"]

    def snapshot():
        return tuple(state["colors"])

    def restore():
        state["colors"] = list(state["initial_colors"])

    def get_state():
        return {
            "num_vertices": state["num_vertices"],
            "colors": list(state["colors"]),
            "initial_colors": list(state["initial_colors"]),
            "edges": edges()
        }

    return {
        "num_vertices": get_num_vertices,
        "weight": weight,
        "is_adjacent": is_adjacent,
        "neighbors": neighbors,
        "edges": edges,
        "read_color": read_color,
        "write_color": write_color,
        "colors": colors,
        "snapshot": snapshot,
        "restore": restore,
        "get_state": get_state,
        "type": "GraphStore"
    }

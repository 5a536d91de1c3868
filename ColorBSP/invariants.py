"""
Invariant bookkeeping for the coloring engine.

The predicates are plain functions over a graph store, a message board and
a color sequence, so tests can call them directly. The assert_* helpers are
what the engine runs at its barriers when check_invariants is on; a failure
there is an engine or plugin bug and raises AssertionError.
"""


def conflicting_edges(graph, colors):
    """Adjacent pairs (i < j) that share a color."""
    return [(i, j) for i, j, _ in graph["edges"]() if colors[i] == colors[j]]


def is_proper_coloring(graph, colors):
    return not conflicting_edges(graph, colors)


def asymmetric_board_cells(board, num_vertices):
    board_state = board["get_state"]()
    sent, msg = board_state["sent"], board_state["msg"]
    return [
        (i, j)
        for i in range(num_vertices)
        for j in range(i + 1, num_vertices)
        if sent[i][j] != sent[j][i] or msg[i][j] != msg[j][i]
    ]


def unfaithful_sent_flags(graph, board, colors):
    """
    Pairs whose sent flag disagrees with adjacency or with color equality.

    After a Sending phase: sent[i][j] implies an edge, and on every edge
    sent[i][j] holds exactly when colors[i] == colors[j]. This also covers
    the continuous safety condition: an adjacent pair with nothing pending
    has different colors.
    """
    n = graph["num_vertices"]()
    bad = []
    for i in range(n):
        for j in range(n):
            sent = board["is_sent"](i, j)
            if not graph["is_adjacent"](i, j):
                if sent:
                    bad.append((i, j))
            elif sent != (colors[i] == colors[j]):
                bad.append((i, j))
    return bad


def assert_sending_invariants(graph, board):
    colors = graph["snapshot"]()
    n = graph["num_vertices"]()

    asymmetric = asymmetric_board_cells(board, n)
    if asymmetric:
        raise AssertionError(f"\033[31mMessage board not symmetric at {asymmetric}\033[0m")

    unfaithful = unfaithful_sent_flags(graph, board, colors)
    if unfaithful:
        raise AssertionError(f"\033[31mSent flags disagree with colors at {unfaithful} (colors={list(colors)})\033[0m")


def assert_proper_coloring(graph):
    conflicts = conflicting_edges(graph, graph["snapshot"]())
    if conflicts:
        raise AssertionError(f"\033[31mColoring is not proper, conflicting edges: {conflicts}\033[0m")

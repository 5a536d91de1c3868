"""
Precondition checks for engine construction and runs.

Every check raises ValueError on a contract violation, before any engine
state is built. Nothing here is a retry path.
"""

from numbers import Real


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def validate_num_vertices(num_vertices):
    if not _is_int(num_vertices):
        raise ValueError(f"\033[31mnum_vertices must be an int, got {type(num_vertices).__name__}\033[0m")
    if num_vertices <= 1:
        raise ValueError(f"\033[31mnum_vertices must be greater than 1, got {num_vertices}\033[0m")
    return num_vertices


def validate_adjacency(num_vertices, adjacency):
    """
    Check that adjacency is a square, symmetric, zero-diagonal matrix of
    real weights sized num_vertices. Returns a list-of-lists copy.
    """
    try:
        rows = [list(row) for row in adjacency]
    except TypeError:
        raise ValueError("\033[31madjacency must be a sequence of rows\033[0m")

    if len(rows) != num_vertices:
        raise ValueError(f"\033[31madjacency has {len(rows)} rows, expected {num_vertices}\033[0m")

    for i, row in enumerate(rows):
        if len(row) != num_vertices:
            raise ValueError(f"\033[31madjacency row {i} has {len(row)} entries, expected {num_vertices}\033[0m")
        for j, weight in enumerate(row):
            if isinstance(weight, bool) or not isinstance(weight, Real):
                raise ValueError(f"\033[31madjacency[{i}][{j}] is not a real number: {weight!r}\033[0m")

    for i in range(num_vertices):
        if rows[i][i] != 0:
            raise ValueError(f"\033[31madjacency[{i}][{i}] is a self-loop ({rows[i][i]})\033[0m")
        for j in range(i + 1, num_vertices):
            if rows[i][j] != rows[j][i]:
                raise ValueError(
                    f"\033[31madjacency is not symmetric: [{i}][{j}]={rows[i][j]} but [{j}][{i}]={rows[j][i]}\033[0m"
                )
    return rows


def validate_color(vertex, color):
    if not _is_int(color) or color < 0:
        raise ValueError(f"\033[31mcolor of vertex {vertex} must be a non-negative int, got {color!r}\033[0m")
    return color


def validate_colors(num_vertices, colors):
    colors = list(colors)
    if len(colors) != num_vertices:
        raise ValueError(f"\033[31mexpected {num_vertices} colors, got {len(colors)}\033[0m")
    for vertex, color in enumerate(colors):
        validate_color(vertex, color)
    return colors


def validate_max_iterations(max_iterations):
    if not _is_int(max_iterations):
        raise ValueError(f"\033[31mmax_iterations must be an int, got {type(max_iterations).__name__}\033[0m")
    if max_iterations <= 0:
        raise ValueError(f"\033[31mmax_iterations must be positive, got {max_iterations}\033[0m")
    return max_iterations


def validate_vertex(num_vertices, vertex):
    if not _is_int(vertex) or not 0 <= vertex < num_vertices:
        raise ValueError(f"\033[31mvertex {vertex!r} out of range [0, {num_vertices})\033[0m")
    return vertex


def validate_max_workers(max_workers):
    if max_workers is None:
        return max_workers
    if not _is_int(max_workers) or max_workers <= 0:
        raise ValueError(f"\033[31mmax_workers must be a positive int or None, got {max_workers!r}\033[0m")
    return max_workers

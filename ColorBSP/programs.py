"""
Pluggable per-edge and per-vertex programs for collision-driven coloring.

- Edge programs take (board, colors, src, dst, weight) and write only the
  (src, dst) and (dst, src) board cells.
- Merge functions fold two payloads into one and must be associative and
  commutative, so aggregation order never changes the result.
- Vertex programs take (vertex, color, message) and return the next color.

Recoloring is nondeterministic by contract: any color in [0, num_colors)
is a legal answer to a collision. The choice is delegated to a decision
provider `choose(vertex, color, num_colors) -> color`, so tests can swap
seeded, scripted or adversarial sources without touching the engine.
"""

import random
import threading


# =============================================================================
# EDGE PROGRAM
# =============================================================================

def collision_edge_program(board, colors, src, dst, weight):
    """
    Send a True message both ways when src and dst share a color, otherwise
    clear both directions. Afterwards sent[src][dst] == (colors[src] == colors[dst]).
    """
    if colors[src] == colors[dst]:
        board["send"](src, dst, True)
        board["send"](dst, src, True)
    else:
        board["clear"](src, dst)
        board["clear"](dst, src)


# =============================================================================
# MERGER
# =============================================================================

def merge_or(a, b):
    return a or b


# =============================================================================
# VERTEX PROGRAM
# =============================================================================

def create_recolor_vertex_program(num_colors, choose):
    """
    Build the recoloring vertex program.

    A True message means some neighbor currently shares this vertex's color,
    so the decision provider picks a new one (possibly the same). A False
    message keeps the current color.
    """
    def vertex_program(vertex, color, message):
        if not message:
            return color
        new_color = choose(vertex, color, num_colors)
        if isinstance(new_color, bool) or not isinstance(new_color, int) or not 0 <= new_color < num_colors:
            raise ValueError(
                f"\033[31mDecision provider chose {new_color!r} for vertex {vertex}, expected a color in [0, {num_colors})\033[0m"
            )
        return new_color

    return vertex_program


# =============================================================================
# DECISION PROVIDERS
# =============================================================================

def create_seeded_chooser(seed=None):
    """
    Deterministic pseudo-random chooser.

    Each vertex draws from its own stream seeded by (seed, vertex), so the
    k-th choice of a vertex is the same whatever order vertices are visited
    in, or whether they are evaluated on several threads.
    """
    streams = {}
    lock = threading.Lock()

    def choose(vertex, color, num_colors):
        with lock:
            if vertex not in streams:
                streams[vertex] = random.Random(f"{seed}:{vertex}")
            return streams[vertex].randrange(num_colors)

    return choose


def create_scripted_chooser(script):
    """
    Replay a fixed sequence of colors per vertex: {vertex: [c0, c1, ...]}.
    A vertex with an exhausted (or missing) script keeps its current color.
    """
    queues = {vertex: list(colors) for vertex, colors in script.items()}
    lock = threading.Lock()

    def choose(vertex, color, num_colors):
        with lock:
            queue = queues.get(vertex)
            if queue:
                return queue.pop(0)
        return color

    return choose


def keep_color_chooser(vertex, color, num_colors):
    """Adversarial provider: always re-chooses the current color."""
    return color

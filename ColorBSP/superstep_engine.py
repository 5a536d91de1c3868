"""
Pregel BSP (Bulk Synchronous Parallel) graph-coloring engine in functional style.

The engine is a plain dict built by coloring_engine(); functions take it as
their first argument and return it (or a result), so runs compose the same
way the rest of the package does:

    e = coloring_engine(3, [[0, 1, 1], [1, 0, 1], [1, 1, 0]], debug=False)
    iterations = run(e, max_iterations=10)
    colors = inspect(e)

State machine:
    Init -> Sending -> Aggregating -> (Sending -> Aggregating)* -> Terminated

- Init runs the vertex program once per vertex with no message.
- The first superstep always runs; after that the loop exits when a Sending
  phase sent nothing, or when the superstep counter exceeds max_iterations.
- Sending finishes for every ordered pair before Aggregating starts, and
  Aggregating finishes for every vertex before the next Sending starts,
  whether or not work inside a phase runs on a thread pool.

run() returns the number of completed supersteps. A count <= max_iterations
guarantees a proper coloring; a larger count means the bound was exceeded.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from multiprocessing import cpu_count

from .graph_store import create_graph_store
from .message_board import create_message_board, create_sparse_message_board
from .permutation import generate_permutation, first_selector, create_random_selector
from .programs import (
    collision_edge_program,
    merge_or,
    create_recolor_vertex_program,
    create_seeded_chooser
)
from .invariants import assert_sending_invariants, assert_proper_coloring
from .validation import validate_max_iterations, validate_max_workers


DEFAULT_MAX_ITERATIONS = 1000

INIT = "Init"
SENDING = "Sending"
AGGREGATING = "Aggregating"
TERMINATED = "Terminated"


def stringify_truncated(obj, max_len=100):
    """Truncate string representation for display."""
    s = str(obj)
    return s if len(s) <= max_len else s[:max_len] + "..."


# =============================================================================
# CORE DATA CONSTRUCTOR
# =============================================================================

def coloring_engine(
    num_vertices,
    adjacency,
    initial_colors=None,
    choose=None,
    select=None,
    edge_program=None,
    merge=None,
    vertex_program=None,
    sparse=False,
    parallel=False,
    max_workers=None,
    check_invariants=False,
    debug=True
):
    """
    Create a coloring engine over a symmetric weight matrix.

    Args:
        num_vertices: Number of vertices, > 1
        adjacency: num_vertices x num_vertices symmetric weights, 0 = no edge
        initial_colors: Starting colors (default all 0)
        choose: Decision provider for recoloring (default seeded chooser)
        select: Permutation selector for visiting order (default identity)
        edge_program, merge, vertex_program: Pluggable programs
        sparse: Iterate adjacency lists and use a pair-keyed message board
        parallel: Run per-vertex work inside each phase on a thread pool
        max_workers: Thread pool size (default cpu_count())
        check_invariants: Assert board and coloring invariants at each barrier
        debug: Print phase tracing

    Returns:
        Engine state dict in the Init state
    """
    validate_max_workers(max_workers)
    graph = create_graph_store(num_vertices, adjacency, initial_colors)
    board = create_sparse_message_board(num_vertices) if sparse else create_message_board(num_vertices)

    if vertex_program is None:
        vertex_program = create_recolor_vertex_program(num_vertices, choose or create_seeded_chooser())

    if debug:
        mode = "sparse" if sparse else "dense"
        print(f"\033[36m[INIT] Coloring engine: {num_vertices} vertices, {len(graph['edges']())} edges, {mode} board\033[0m")
        if parallel:
            print(f"\033[36m[INIT] Parallel mode enabled with {max_workers or cpu_count()} workers\033[0m")

    return {
        "type": "ColoringEngine",
        "graph": graph,
        "board": board,
        "edge_program": edge_program or collision_edge_program,
        "merge": merge or merge_or,
        "vertex_program": vertex_program,
        "select": select or first_selector,
        "sparse": sparse,
        "parallel": parallel,
        "max_workers": max_workers if max_workers else cpu_count(),
        "check_invariants": check_invariants,
        "debug": debug,
        "state": INIT,
        "superstep": 0,
        "termination_reason": None
    }


# =============================================================================
# PHASES
# =============================================================================

def _init(e):
    """Init: one no-message vertex program pass, then enter Sending."""
    graph = e["graph"]
    for vertex in range(graph["num_vertices"]()):
        graph["write_color"](vertex, e["vertex_program"](vertex, graph["read_color"](vertex), False))
    e["state"] = SENDING
    if e["debug"]:
        print(f"\033[36m[INIT] Starting colors: {stringify_truncated(list(graph['snapshot']()))}\033[0m")
    return e


def _destinations_of(e, src):
    graph = e["graph"]
    if e["sparse"]:
        return graph["neighbors"](src)
    return range(graph["num_vertices"]())


def _send_from(e, src):
    graph = e["graph"]
    colors = graph["colors"]()
    for dst in _destinations_of(e, src):
        if graph["is_adjacent"](src, dst):
            e["edge_program"](e["board"], colors, src, dst, graph["weight"](src, dst))


def sending_phase(e):
    """
    Sending: clear the board, then run the edge program on every adjacent
    ordered pair. Returns the list of (src, dst) pairs with a sent flag.
    """
    e["state"] = SENDING
    graph = e["graph"]
    board = e["board"]
    num_vertices = graph["num_vertices"]()

    board["reset"]()

    if e["parallel"]:
        with ThreadPoolExecutor(max_workers=min(num_vertices, e["max_workers"])) as executor:
            futures = [executor.submit(_send_from, e, src) for src in range(num_vertices)]
            for future in as_completed(futures):
                future.result()
    else:
        for src in range(num_vertices):
            _send_from(e, src)

    if e["check_invariants"]:
        assert_sending_invariants(graph, board)

    sent_pairs = board["sent_pairs"]()
    if e["debug"]:
        print(f"\033[35m[SEND] Superstep {e['superstep'] + 1}: {len(sent_pairs)} messages {stringify_truncated(sent_pairs)}\033[0m")
    return sent_pairs


def _sources_of(e, dst):
    # Only adjacent sources can hold a sent flag, so the column is permuted
    # over dst's neighbors in both board modes
    neighbors = e["graph"]["neighbors"](dst)
    return [neighbors[i] for i in generate_permutation(len(neighbors), e["select"])]


def _collect_message(e, dst):
    """Fold every incoming payload for dst. Returns None when nothing was sent."""
    board = e["board"]
    merged = None
    for src in _sources_of(e, dst):
        if board["is_sent"](src, dst):
            payload = board["payload"](src, dst)
            merged = payload if merged is None else e["merge"](merged, payload)
    return merged


def _evaluate(e, dst, message):
    color = e["graph"]["read_color"](dst)
    return dst, color, e["vertex_program"](dst, color, message)


def aggregating_phase(e):
    """
    Aggregating: visit destinations in a generated order; for each one with
    at least one incoming message, merge the payloads and write back the
    vertex program's color.

    Returns {"active_vertices": [...], "recolored": [(vertex, old, new), ...]}.
    """
    e["state"] = AGGREGATING
    graph = e["graph"]
    destinations = generate_permutation(graph["num_vertices"](), e["select"])

    active = []
    recolored = []

    if e["parallel"]:
        messages = {}
        for dst in destinations:
            message = _collect_message(e, dst)
            if message is not None:
                messages[dst] = message
        active = list(messages)

        if messages:
            with ThreadPoolExecutor(max_workers=min(len(messages), e["max_workers"])) as executor:
                futures = [executor.submit(_evaluate, e, dst, message) for dst, message in messages.items()]
                results = [future.result() for future in as_completed(futures)]
            for dst, old, new in results:
                graph["write_color"](dst, new)
                if new != old:
                    recolored.append((dst, old, new))
    else:
        for dst in destinations:
            message = _collect_message(e, dst)
            if message is None:
                continue
            active.append(dst)
            _, old, new = _evaluate(e, dst, message)
            graph["write_color"](dst, new)
            if new != old:
                recolored.append((dst, old, new))

    if e["debug"]:
        for dst, old, new in recolored:
            print(f"\033[32m[RECOLOR] vertex {dst}: {old} -> {new}\033[0m")
        print(f"\033[35m[AGGREGATE] Superstep {e['superstep'] + 1}: active={stringify_truncated(active)}, recolored={len(recolored)}\033[0m")

    return {"active_vertices": active, "recolored": recolored}


# =============================================================================
# EXECUTION
# =============================================================================

def run_step(e):
    """
    Execute a single superstep (Sending then Aggregating). Returns (e, step_info):
    - superstep: The completed superstep number
    - sent_pairs: Ordered pairs that carried a message
    - active_vertices: Destinations that received at least one message
    - recolored: (vertex, old, new) for every color change
    - colors: Color snapshot after Aggregating
    """
    if e["state"] == TERMINATED:
        raise ValueError("\033[31mEngine already terminated, call reset() before stepping again\033[0m")
    if e["state"] == INIT:
        _init(e)

    sent_pairs = sending_phase(e)
    aggregated = aggregating_phase(e)
    e["superstep"] += 1
    e["state"] = SENDING

    step_info = {
        "superstep": e["superstep"],
        "sent_pairs": sent_pairs,
        "active_vertices": aggregated["active_vertices"],
        "recolored": aggregated["recolored"],
        "colors": e["graph"]["snapshot"]()
    }
    return e, step_info


def run(e, max_iterations=DEFAULT_MAX_ITERATIONS):
    """
    Run the coloring to termination.

    Args:
        e: Engine state in the Init state
        max_iterations: Superstep budget, > 0

    Returns:
        Number of completed supersteps. If it is <= max_iterations the
        coloring is proper; otherwise the bound was exceeded and no
        guarantee holds.
    """
    validate_max_iterations(max_iterations)
    if e["state"] != INIT:
        raise ValueError(f"\033[31mEngine is in state {e['state']}, a run needs a fresh or reset engine\033[0m")

    if e["debug"]:
        print(f"\033[36m\n[START] Beginning BSP coloring, max_iterations={max_iterations}\033[0m")

    _init(e)

    # The first superstep is unconditional; the exit check follows it
    e, step_info = run_step(e)
    while True:
        if not step_info["sent_pairs"]:
            e["termination_reason"] = "converged"
            break
        if e["superstep"] > max_iterations:
            e["termination_reason"] = "bound_exceeded"
            break
        e, step_info = run_step(e)

    e["state"] = TERMINATED

    if e["debug"]:
        print(f"\033[36m[TERMINATE] {e['termination_reason']} at superstep {e['superstep']}\033[0m")

    if e["check_invariants"] and e["termination_reason"] == "converged":
        assert_proper_coloring(e["graph"])

    if e["debug"]:
        print(f"\033[36m[COMPLETE] Finished after {e['superstep']} supersteps\033[0m")
        print(f"\033[36m[FINAL COLORS] {stringify_truncated(list(inspect(e)))}\033[0m")

    return e["superstep"]


def inspect(e):
    """Read-only snapshot of the current colors."""
    return e["graph"]["snapshot"]()


def reset(e):
    """
    Reset the engine to its initial colors. Returns the reset engine.
    """
    e["graph"]["restore"]()
    e["board"]["reset"]()
    e["superstep"] = 0
    e["state"] = INIT
    e["termination_reason"] = None

    if e["debug"]:
        print("\033[36m[RESET] Coloring state cleared\033[0m")

    return e


# =============================================================================
# STATE ACCESSORS (for composability)
# =============================================================================

def get_graph(e):
    """Get the graph store."""
    return e["graph"]

def get_board(e):
    """Get the message board."""
    return e["board"]

def get_state(e):
    """Get the state machine state."""
    return e["state"]

def get_superstep(e):
    """Get the number of completed supersteps."""
    return e["superstep"]

def get_termination_reason(e):
    """'converged', 'bound_exceeded', or None before termination."""
    return e["termination_reason"]


# =============================================================================
# OOP WRAPPER CLASS
# =============================================================================

class ColoringEngine:
    """
    Object-oriented wrapper around the functional API:
        engine = ColoringEngine(3, [[0, 1, 1], [1, 0, 1], [1, 1, 0]], debug=False)
        iterations = engine.run(max_iterations=10)
        colors = engine.inspect()
    """

    def __init__(self, num_vertices, adjacency, **kwargs):
        self._e = coloring_engine(num_vertices, adjacency, **kwargs)

    def run(self, max_iterations=DEFAULT_MAX_ITERATIONS):
        return run(self._e, max_iterations)

    def run_step(self):
        self._e, step_info = run_step(self._e)
        return step_info

    def inspect(self):
        return inspect(self._e)

    def reset(self):
        self._e = reset(self._e)
        return self

    @property
    def graph(self):
        return get_graph(self._e)

    @property
    def board(self):
        return get_board(self._e)

    @property
    def state(self):
        return get_state(self._e)

    @property
    def superstep(self):
        return get_superstep(self._e)

    @property
    def termination_reason(self):
        return get_termination_reason(self._e)

    @property
    def num_vertices(self):
        return self._e["graph"]["num_vertices"]()

    @property
    def debug(self):
        return self._e["debug"]

    @property
    def parallel(self):
        return self._e["parallel"]

    @property
    def max_workers(self):
        return self._e["max_workers"]


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

CONFIG_KEYS = {
    "num_vertices", "adjacency", "initial_colors", "seed",
    "sparse", "parallel", "max_workers", "max_iterations"
}


def create_coloring_engine(config, debug=True, check_invariants=False):
    """Create a ColoringEngine from a configuration dict."""
    unknown = set(config) - CONFIG_KEYS
    if unknown:
        raise ValueError(f"\033[31mUnknown config keys: {sorted(unknown)}\033[0m")
    for key in ("num_vertices", "adjacency"):
        if key not in config:
            raise ValueError(f"\033[31mConfig is missing required key '{key}'\033[0m")

    seed = config.get("seed")
    return ColoringEngine(
        config["num_vertices"],
        config["adjacency"],
        initial_colors=config.get("initial_colors"),
        choose=create_seeded_chooser(seed),
        select=create_random_selector(seed) if seed is not None else first_selector,
        sparse=config.get("sparse", False),
        parallel=config.get("parallel", False),
        max_workers=config.get("max_workers"),
        check_invariants=check_invariants,
        debug=debug
    )


def run_coloring_from_config(config, debug=True, check_invariants=False):
    """
    Create and run a coloring from a configuration dict.

    Returns {"iterations", "max_iterations", "within_bound",
    "termination_reason", "colors"}.
    """
    max_iterations = config.get("max_iterations", DEFAULT_MAX_ITERATIONS)
    validate_max_iterations(max_iterations)
    engine = create_coloring_engine(config, debug=debug, check_invariants=check_invariants)
    iterations = engine.run(max_iterations=max_iterations)
    return {
        "iterations": iterations,
        "max_iterations": max_iterations,
        "within_bound": iterations <= max_iterations,
        "termination_reason": engine.termination_reason,
        "colors": engine.inspect()
    }

__version__ = "0.1.0"

from .superstep_engine import (
    ColoringEngine,
    coloring_engine,
    run,
    run_step,
    inspect,
    reset,
    sending_phase,
    aggregating_phase,
    create_coloring_engine,
    run_coloring_from_config,
    DEFAULT_MAX_ITERATIONS
)
from .graph_store import create_graph_store
from .message_board import create_message_board, create_sparse_message_board
from .programs import (
    collision_edge_program,
    merge_or,
    create_recolor_vertex_program,
    create_seeded_chooser,
    create_scripted_chooser,
    keep_color_chooser
)
from .permutation import (
    generate_permutation,
    first_selector,
    last_selector,
    create_random_selector
)
from .invariants import conflicting_edges, is_proper_coloring

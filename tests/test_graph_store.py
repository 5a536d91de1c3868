import unittest
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ColorBSP.graph_store import create_graph_store
from ColorBSP.message_board import create_message_board, create_sparse_message_board


TRIANGLE = [
    [0, 1.0, 1.0],
    [1.0, 0, 1.0],
    [1.0, 1.0, 0]
]

PATH = [
    [0, 2.5, 0],
    [2.5, 0, 1],
    [0, 1, 0]
]


class TestGraphStore(unittest.TestCase):

    def test_triangle_structure(self):
        graph = create_graph_store(3, TRIANGLE)
        self.assertEqual(graph["num_vertices"](), 3)
        self.assertTrue(graph["is_adjacent"](0, 1))
        self.assertFalse(graph["is_adjacent"](1, 1))
        self.assertEqual(graph["neighbors"](0), (1, 2))
        self.assertEqual(graph["edges"](), [(0, 1, 1.0), (0, 2, 1.0), (1, 2, 1.0)])
        self.assertEqual(graph["type"], "GraphStore")

    def test_weights_and_missing_edges(self):
        graph = create_graph_store(3, PATH)
        self.assertEqual(graph["weight"](0, 1), 2.5)
        self.assertFalse(graph["is_adjacent"](0, 2))
        self.assertEqual(graph["neighbors"](1), (0, 2))
        self.assertEqual(graph["neighbors"](2), (1,))

    def test_default_colors_are_zero(self):
        graph = create_graph_store(3, TRIANGLE)
        self.assertEqual(graph["snapshot"](), (0, 0, 0))

    def test_write_and_restore_colors(self):
        graph = create_graph_store(3, PATH, initial_colors=[4, 1, 4])
        graph["write_color"](1, 7)
        self.assertEqual(graph["read_color"](1), 7)
        self.assertEqual(graph["snapshot"](), (4, 7, 4))

        graph["restore"]()
        self.assertEqual(graph["snapshot"](), (4, 1, 4))

    def test_snapshot_is_detached(self):
        graph = create_graph_store(3, TRIANGLE)
        snap = graph["snapshot"]()
        graph["write_color"](0, 2)
        self.assertEqual(snap, (0, 0, 0))

    def test_write_color_rejects_bad_color(self):
        graph = create_graph_store(3, TRIANGLE)
        for bad in (-1, None, 2.0, False):
            with self.assertRaises(ValueError):
                graph["write_color"](0, bad)
        self.assertEqual(graph["snapshot"](), (0, 0, 0))

    def test_write_color_rejects_bad_vertex(self):
        graph = create_graph_store(3, TRIANGLE)
        with self.assertRaises(ValueError):
            graph["write_color"](3, 0)

    def test_adjacency_is_copied(self):
        matrix = [row[:] for row in TRIANGLE]
        graph = create_graph_store(3, matrix)
        matrix[0][1] = 0
        self.assertTrue(graph["is_adjacent"](0, 1))

    def test_get_state(self):
        graph = create_graph_store(3, PATH, initial_colors=[0, 1, 0])
        state = graph["get_state"]()
        self.assertEqual(state["num_vertices"], 3)
        self.assertEqual(state["colors"], [0, 1, 0])
        self.assertEqual(state["edges"], [(0, 1, 2.5), (1, 2, 1)])


class TestGraphStoreValidation(unittest.TestCase):

    def test_rejects_too_few_vertices(self):
        with self.assertRaises(ValueError):
            create_graph_store(1, [[0]])
        with self.assertRaises(ValueError):
            create_graph_store(0, [])

    def test_rejects_non_int_vertex_count(self):
        with self.assertRaises(ValueError):
            create_graph_store(2.0, [[0, 1], [1, 0]])
        with self.assertRaises(ValueError):
            create_graph_store(True, [[0]])

    def test_rejects_non_square_matrix(self):
        with self.assertRaises(ValueError):
            create_graph_store(3, [[0, 1, 1], [1, 0, 1]])
        with self.assertRaises(ValueError):
            create_graph_store(2, [[0, 1], [1, 0, 0]])

    def test_rejects_asymmetric_matrix(self):
        with self.assertRaises(ValueError):
            create_graph_store(2, [[0, 1], [2, 0]])

    def test_rejects_self_loop(self):
        with self.assertRaises(ValueError):
            create_graph_store(2, [[1, 0], [0, 0]])

    def test_rejects_non_numeric_weight(self):
        with self.assertRaises(ValueError):
            create_graph_store(2, [[0, "1"], ["1", 0]])
        with self.assertRaises(ValueError):
            create_graph_store(2, [[0, True], [True, 0]])

    def test_rejects_non_sequence_matrix(self):
        with self.assertRaises(ValueError):
            create_graph_store(2, 42)

    def test_rejects_bad_initial_colors(self):
        with self.assertRaises(ValueError):
            create_graph_store(3, TRIANGLE, initial_colors=[0, 1])
        with self.assertRaises(ValueError):
            create_graph_store(3, TRIANGLE, initial_colors=[0, -1, 2])
        with self.assertRaises(ValueError):
            create_graph_store(3, TRIANGLE, initial_colors=[0, 1.5, 2])


class TestMessageBoards(unittest.TestCase):

    def _exercise_board(self, board):
        self.assertFalse(board["any_sent"]())

        board["send"](0, 1, True)
        board["send"](1, 0, True)
        self.assertTrue(board["is_sent"](0, 1))
        self.assertTrue(board["payload"](1, 0))
        self.assertFalse(board["is_sent"](0, 2))
        self.assertFalse(board["payload"](0, 2))
        self.assertTrue(board["any_sent"]())
        self.assertEqual(board["sent_pairs"](), [(0, 1), (1, 0)])

        board["clear"](0, 1)
        self.assertFalse(board["is_sent"](0, 1))
        self.assertFalse(board["payload"](0, 1))
        self.assertEqual(board["sent_pairs"](), [(1, 0)])

        state = board["get_state"]()
        self.assertEqual(state["sent"][1][0], True)
        self.assertEqual(state["sent"][0][1], False)
        self.assertEqual(len(state["msg"]), 3)

        board["reset"]()
        self.assertFalse(board["any_sent"]())
        self.assertEqual(board["sent_pairs"](), [])

    def test_dense_board(self):
        board = create_message_board(3)
        self.assertEqual(board["type"], "Dense")
        self._exercise_board(board)

    def test_sparse_board(self):
        board = create_sparse_message_board(3)
        self.assertEqual(board["type"], "Sparse")
        self._exercise_board(board)


if __name__ == '__main__':
    unittest.main()

def create_message_board(num_vertices):
    """
    Dense MessageBoard - msg[i][j] payloads and sent[i][j] flags.

    Per superstep:
    - reset() clears every cell at the start of Sending
    - send()/clear() are the only writers, called by the edge program
    - is_sent()/payload() are read during Aggregating
    """
    state = {
        "num_vertices": num_vertices,
        "msg": [[False] * num_vertices for _ in range(num_vertices)],
        "sent": [[False] * num_vertices for _ in range(num_vertices)]
    }

    def reset():
        n = state["num_vertices"]
        state["msg"] = [[False] * n for _ in range(n)]
        state["sent"] = [[False] * n for _ in range(n)]

    def send(src, dst, payload):
        state["msg"][src][dst] = payload
        state["sent"][src][dst] = True

    def clear(src, dst):
        state["msg"][src][dst] = False
        state["sent"][src][dst] = False

    def is_sent(src, dst):
        return state["sent"][src][dst]

    def payload(src, dst):
        return state["msg"][src][dst]

    def sent_pairs():
        n = state["num_vertices"]
        return [(i, j) for i in range(n) for j in range(n) if state["sent"][i][j]]

    def any_sent():
        return any(any(row) for row in state["sent"])

    def get_state():
        return {
            "msg": [list(row) for row in state["msg"]],
            "sent": [list(row) for row in state["sent"]]
        }

    return {
        "reset": reset,
        "send": send,
        "clear": clear,
        "is_sent": is_sent,
        "payload": payload,
        "sent_pairs": sent_pairs,
        "any_sent": any_sent,
        "get_state": get_state,
        "type": "Dense"
    }


def create_sparse_message_board(num_vertices):
    """
    Sparse MessageBoard - same interface as the dense board, keyed by
    (src, dst). A missing key reads as not sent with a False payload.
    """
    state = {
        "num_vertices": num_vertices,
        "msg": {},
        "sent": set()
    }

    def reset():
        state["msg"] = {}
        state["sent"] = set()

    def send(src, dst, payload):
        state["msg"][(src, dst)] = payload
        state["sent"].add((src, dst))

    def clear(src, dst):
        state["msg"].pop((src, dst), None)
        state["sent"].discard((src, dst))

    def is_sent(src, dst):
        return (src, dst) in state["sent"]

    def payload(src, dst):
        return state["msg"].get((src, dst), False)

    def sent_pairs():
        return sorted(state["sent"])

    def any_sent():
        return bool(state["sent"])

    def get_state():
        n = state["num_vertices"]
        return {
            "msg": [[state["msg"].get((i, j), False) for j in range(n)] for i in range(n)],
            "sent": [[(i, j) in state["sent"] for j in range(n)] for i in range(n)]
        }

    return {
        "reset": reset,
        "send": send,
        "clear": clear,
        "is_sent": is_sent,
        "payload": payload,
        "sent_pairs": sent_pairs,
        "any_sent": any_sent,
        "get_state": get_state,
        "type": "Sparse"
    }

"""
btree.py — B-Tree of Order 3 (2-3 Tree)
========================================
Generator-based insert and search.

Insert:
  1. Descend from the root, comparing against each node's keys
  2. Place the key in the leaf (sorted)
  3. While a node holds ORDER keys, split it: the middle key is promoted
     into the parent, left / right halves become siblings.  Splitting the
     root grows the tree by one level.

Search descends the same way and ends in "found" or "not_found".
No deletion.

Snapshot:
    {"root": node_id,
     "nodes": {node_id: {"id", "keys": [...], "children": [ids], "leaf": bool}}}
"""

from typing import Any, Dict, Generator, List, Sequence, Tuple

from algorithms.step import Step, StepBuilder


ORDER = 3            # max children; a node overflows at ORDER keys

OPERATIONS: List[Tuple[str, int]] = [
    ("insert", 10),
    ("insert", 20),
    ("insert", 5),      # first split: 10 becomes the root
    ("insert", 15),
    ("insert", 25),     # leaf [15, 20, 25] splits, 20 promoted
    ("insert", 30),
    ("search", 15),
    ("search", 12),
]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def insert(key):",                                  # 0
    "    node ← root",                                   # 1
    "    while node is not leaf:",                       # 2
    "        i ← first index with key < node.keys[i]",   # 3
    "        node ← node.children[i]",                   # 4
    "    node.keys.insert_sorted(key)",                  # 5
    "    while len(node.keys) == ORDER:",                # 6
    "        mid ← node.keys[1]; split node",            # 7
    "        push mid into parent (new root if none)",   # 8
    "        node ← parent",                             # 9
    "def search(key):",                                  # 10
    "    for k in node.keys: if key == k: found",        # 11
    "    if leaf: not found",                            # 12
    "    descend into child i",                          # 13
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def btree(operations: Sequence[Tuple[str, int]] = OPERATIONS) -> Generator[Step, None, None]:
    """
    Args:
        operations : ("insert", key) or ("search", key) pairs.
    """
    tree = _Tree()
    sb = StepBuilder(counters=("comparisons", "splits"))
    yield sb.emit("init", f"Empty B-Tree of order {ORDER} (max {ORDER - 1} keys per node)", tree.snapshot())

    for op, key in operations:
        if op == "insert":
            yield from _insert(sb, tree, key)
        elif op == "search":
            yield from _search(sb, tree, key)

    yield sb.done(
        f"Done. {tree.key_count()} keys in {len(tree.nodes)} nodes, height {tree.height()}",
        tree.snapshot(),
    )


# ---------------------------------------------------------------------------
# Tree storage
# ---------------------------------------------------------------------------
class _Tree:
    def __init__(self):
        self.nodes: Dict[str, Dict[str, Any]] = {}
        self.root: str = self.new_node(leaf=True)

    def new_node(self, keys=None, children=None, leaf: bool = True) -> str:
        node_id = f"n{len(self.nodes)}"
        self.nodes[node_id] = {
            "id": node_id,
            "keys": list(keys or []),
            "children": list(children or []),
            "leaf": leaf,
        }
        return node_id

    def snapshot(self) -> Dict[str, Any]:
        return {"root": self.root, "nodes": self.nodes}

    def key_count(self) -> int:
        return sum(len(n["keys"]) for n in self.nodes.values())

    def height(self) -> int:
        h, node = 1, self.nodes[self.root]
        while not node["leaf"]:
            node = self.nodes[node["children"][0]]
            h += 1
        return h


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------
def _descend(
    sb: StepBuilder,
    tree: _Tree,
    key: int,
    path: List[str],
    code_line: int,
) -> Generator[Step, None, Tuple[str, int, bool]]:
    """
    Walk from the root towards `key`, appending visited node ids to `path`.
    Returns (node_id, index, found) via StopIteration.value.
    """
    node_id = tree.root
    while True:
        path.append(node_id)
        node = tree.nodes[node_id]
        i = 0
        while i < len(node["keys"]):
            k = node["keys"][i]
            sb.count("comparisons")
            relation = "=" if key == k else ("<" if key < k else ">")
            yield sb.emit(
                "compare",
                f"Compare {key} with {k} in node {node['keys']}: {key} {relation} {k}",
                tree.snapshot(),
                code_line=code_line,
                variables={"key": key, "node_key": k, "i": i},
                node=node_id,
                key_index=i,
                path=list(path),
            )
            if key == k:
                return node_id, i, True
            if key < k:
                break
            i += 1

        if node["leaf"]:
            return node_id, i, False

        child = node["children"][i]
        yield sb.emit(
            "descend",
            f"Descend into child {i} of {node['keys']}",
            tree.snapshot(),
            code_line=4,
            variables={"key": key, "child_index": i},
            node=child,
            path=list(path),
        )
        node_id = child


def _insert(sb: StepBuilder, tree: _Tree, key: int) -> Generator[Step, None, None]:
    yield sb.emit(
        "insert",
        f"insert({key}): start at the root",
        tree.snapshot(),
        code_line=1,
        variables={"key": key},
        node=tree.root,
        phase="start",
    )
    path: List[str] = []
    node_id, i, found = yield from _descend(sb, tree, key, path, 3)
    if found:
        yield sb.emit(
            "duplicate",
            f"{key} is already in the tree, nothing to insert",
            tree.snapshot(),
            variables={"key": key},
            node=node_id,
        )
        return

    tree.nodes[node_id]["keys"].insert(i, key)
    yield sb.emit(
        "insert",
        f"Insert {key} into leaf → {tree.nodes[node_id]['keys']}",
        tree.snapshot(),
        code_line=5,
        variables={"key": key, "index": i},
        node=node_id,
        phase="placed",
    )

    # split upward while overfull
    while len(tree.nodes[node_id]["keys"]) >= ORDER:
        node = tree.nodes[node_id]
        mid = len(node["keys"]) // 2
        median = node["keys"][mid]
        yield sb.emit(
            "split",
            f"Node {node['keys']} overflows: split around {median}",
            tree.snapshot(),
            code_line=7,
            variables={"median": median},
            node=node_id,
            median=median,
        )

        right_id = tree.new_node(
            keys=node["keys"][mid + 1:],
            children=node["children"][mid + 1:],
            leaf=node["leaf"],
        )
        node["keys"] = node["keys"][:mid]
        node["children"] = node["children"][:mid + 1]
        sb.count("splits")

        path.pop()
        if path:
            parent_id = path[-1]
            parent = tree.nodes[parent_id]
            pos = parent["children"].index(node_id)
            parent["keys"].insert(pos, median)
            parent["children"].insert(pos + 1, right_id)
            description = f"Promote {median} into parent → {parent['keys']}"
        else:
            parent_id = tree.new_node(keys=[median], children=[node_id, right_id], leaf=False)
            tree.root = parent_id
            description = f"Root split: {median} becomes the new root"

        yield sb.emit(
            "split",
            description,
            tree.snapshot(),
            code_line=8,
            variables={"median": median},
            node=parent_id,
            median=median,
            left=node_id,
            right=right_id,
        )
        node_id = parent_id


def _search(sb: StepBuilder, tree: _Tree, key: int) -> Generator[Step, None, None]:
    yield sb.emit(
        "search",
        f"search({key}): start at the root",
        tree.snapshot(),
        code_line=10,
        variables={"key": key},
        node=tree.root,
    )
    path: List[str] = []
    node_id, i, found = yield from _descend(sb, tree, key, path, 11)
    if found:
        yield sb.emit(
            "found",
            f"Found {key} in node {tree.nodes[node_id]['keys']}",
            tree.snapshot(),
            code_line=11,
            variables={"key": key},
            node=node_id,
            key_index=i,
            path=path,
        )
    else:
        yield sb.emit(
            "not_found",
            f"Reached leaf {tree.nodes[node_id]['keys']}: {key} is not in the tree",
            tree.snapshot(),
            code_line=12,
            variables={"key": key},
            node=node_id,
            path=path,
        )

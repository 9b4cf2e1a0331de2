"""
tree_set.py — Binary Search Tree (TreeSet)
===========================================
Generator-based add / contains on an unbalanced BST.  One step per node
compared on the way down, then the outcome.

Snapshot: {"root": nested {"value", "left", "right"} dict or None, "size"}
"""

from typing import Generator, List, Optional, Sequence, Tuple

from algorithms.step import Step, StepBuilder


OPERATIONS: List[Tuple[str, int]] = [
    ("add", 50), ("add", 30), ("add", 70), ("add", 20),
    ("add", 40), ("add", 60), ("add", 80),
    ("contains", 40),
    ("contains", 55),
    ("add", 35),
]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def add(x):",                                     # 0
    "    node ← root",                                 # 1
    "    while node:",                                 # 2
    "        if x == node.value: return false",        # 3
    "        node ← x < node.value ? left : right",    # 4
    "    attach new node(x)",                          # 5
    "def contains(x):",                                # 6
    "    walk the same way; true on equal",            # 7
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def tree_set(operations: Sequence[Tuple[str, int]] = OPERATIONS) -> Generator[Step, None, None]:
    """
    Args:
        operations : ("add", value) or ("contains", value) pairs.
    """
    tree = {"root": None, "size": 0}
    sb = StepBuilder(counters=("comparisons",))
    yield sb.emit("init", "Empty TreeSet (binary search tree)", tree)

    for op, value in operations:
        path: List[int] = []
        parent: Optional[dict] = None
        node = tree["root"]
        found = False
        while node is not None:
            path.append(node["value"])
            sb.count("comparisons")
            if value == node["value"]:
                relation = "="
            else:
                relation = "<" if value < node["value"] else ">"
            yield sb.emit(
                "compare",
                f"{op}({value}): {value} {relation} {node['value']}"
                + ("" if relation == "=" else f", go {'left' if relation == '<' else 'right'}"),
                tree,
                code_line=4 if op == "add" else 7,
                variables={"x": value, "node": node["value"]},
                node=node["value"],
                path=list(path),
            )
            if relation == "=":
                found = True
                break
            parent = node
            node = node["left"] if relation == "<" else node["right"]

        if op == "add":
            if found:
                yield sb.emit(
                    "duplicate",
                    f"{value} is already in the set",
                    tree,
                    code_line=3,
                    variables={"x": value},
                    node=value,
                    path=path,
                )
                continue
            new = {"value": value, "left": None, "right": None}
            if parent is None:
                tree["root"] = new
                where = "as the root"
            elif value < parent["value"]:
                parent["left"] = new
                where = f"as left child of {parent['value']}"
            else:
                parent["right"] = new
                where = f"as right child of {parent['value']}"
            tree["size"] += 1
            yield sb.emit(
                "insert",
                f"Insert {value} {where}",
                tree,
                code_line=5,
                variables={"x": value, "size": tree["size"]},
                node=value,
                path=path + [value],
            )

        elif op == "contains":
            yield sb.emit(
                "found" if found else "not_found",
                f"contains({value}) → {'true' if found else 'false'}",
                tree,
                code_line=7,
                variables={"x": value, "result": found},
                node=value if found else None,
                path=path,
            )

    yield sb.done(f"Done. In-order: {in_order(tree['root'])}", tree)


def in_order(node: Optional[dict]) -> List[int]:
    if node is None:
        return []
    return in_order(node["left"]) + [node["value"]] + in_order(node["right"])

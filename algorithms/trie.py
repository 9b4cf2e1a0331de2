"""
trie.py — Prefix Tree
======================
Generator-based insert / search / starts_with on a character trie.

Snapshot: {"root": "n0", "nodes": {id: {"id", "char", "children": {ch: id}, "end": bool}}}
"""

from typing import Dict, Generator, List, Optional, Sequence, Tuple

from algorithms.step import Step, StepBuilder


OPERATIONS: List[Tuple[str, str]] = [
    ("insert", "cat"),
    ("insert", "car"),
    ("insert", "card"),
    ("insert", "care"),
    ("insert", "dog"),
    ("search", "car"),
    ("search", "cab"),
    ("starts_with", "car"),
]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def insert(word):",                                 # 0
    "    node ← root",                                   # 1
    "    for ch in word:",                               # 2
    "        node ← node.children.setdefault(ch, new)",  # 3
    "    node.end ← true",                               # 4
    "def search(word):",                                 # 5
    "    walk word; fail on a missing child",            # 6
    "    return node.end",                               # 7
    "def starts_with(prefix):",                          # 8
    "    walk prefix; collect words below",              # 9
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def trie(operations: Sequence[Tuple[str, str]] = OPERATIONS) -> Generator[Step, None, None]:
    """
    Args:
        operations : ("insert" | "search" | "starts_with", word) pairs.
    """
    nodes: Dict[str, dict] = {}

    def new_node(char: Optional[str]) -> str:
        nid = f"n{len(nodes)}"
        nodes[nid] = {"id": nid, "char": char, "children": {}, "end": False}
        return nid

    root = new_node(None)

    def snap():
        return {"root": root, "nodes": nodes}

    sb = StepBuilder(counters=("nodes_created",))
    yield sb.emit("init", "Empty trie (root only)", snap())

    for op, word in operations:
        node = root
        path = [root]
        missing: Optional[str] = None
        for i, ch in enumerate(word):
            child = nodes[node]["children"].get(ch)
            if child is None and op == "insert":
                child = new_node(ch)
                nodes[node]["children"][ch] = child
                sb.count("nodes_created")
                verb = f"create node '{ch}'"
            elif child is None:
                missing = ch
                break
            else:
                verb = f"follow existing '{ch}'"
            node = child
            path.append(node)
            yield sb.emit(
                "traverse",
                f"{op}(\"{word}\"): {verb}",
                snap(),
                code_line=3 if op == "insert" else (6 if op == "search" else 9),
                variables={"word": word, "i": i, "ch": ch},
                node=node,
                path=list(path),
            )

        if op == "insert":
            already = nodes[node]["end"]
            nodes[node]["end"] = True
            yield sb.emit(
                "insert",
                f'"{word}" ' + ("was already present" if already else "inserted: mark end of word"),
                snap(),
                code_line=4,
                variables={"word": word},
                node=node,
                path=path,
            )

        elif op == "search":
            hit = missing is None and nodes[node]["end"]
            if missing is not None:
                reason = f"no child '{missing}'"
            elif not hit:
                reason = "prefix exists but is not a word"
            else:
                reason = "end-of-word marker set"
            yield sb.emit(
                "found" if hit else "not_found",
                f'search("{word}") → {"true" if hit else "false"} ({reason})',
                snap(),
                code_line=7,
                variables={"word": word, "result": hit},
                node=node,
                path=path,
            )

        elif op == "starts_with":
            words = [] if missing is not None else _collect(nodes, node, word)
            yield sb.emit(
                "found" if words else "not_found",
                f'starts_with("{word}") → {words}',
                snap(),
                code_line=9,
                variables={"prefix": word, "matches": len(words)},
                node=node,
                path=path,
                words=words,
            )

    yield sb.done(f"Done. Trie holds {len(nodes)} nodes", snap())


def _collect(nodes: Dict[str, dict], nid: str, prefix: str) -> List[str]:
    out = [prefix] if nodes[nid]["end"] else []
    for ch, child in sorted(nodes[nid]["children"].items()):
        out.extend(_collect(nodes, child, prefix + ch))
    return out

"""
consistent_hashing.py — Consistent Hash Ring
=============================================
A scripted walk through a 360-position hash ring with virtual nodes.

  • Each server owns VIRTUAL_NODES points on the ring, hashed from
    "{server}#{i}"
  • A key belongs to the first virtual node clockwise at a position
    ≥ the key's position, wrapping past 359 back to 0
  • Adding a server moves only the keys the new server now owns
  • Removing a server reassigns only the keys it owned

Snapshot:
    {"servers": [...],
     "virtual_nodes": [{"id", "server", "position"}] sorted by position,
     "keys": [{"key", "position", "server"}]}
"""

from typing import Generator, List, Optional, Sequence, Set, Tuple

from algorithms.step import Step, StepBuilder


RING_SIZE = 360
VIRTUAL_NODES = 3

OPERATIONS: List[Tuple[str, str]] = [
    ("add_server", "Server-A"),
    ("add_server", "Server-B"),
    ("add_server", "Server-C"),
    ("add_key",    "user:1001"),
    ("add_key",    "user:1002"),
    ("add_key",    "session:abc"),
    ("add_key",    "cache:page1"),
    ("remove_server", "Server-B"),
]


def ring_hash(s: str) -> int:
    h = 0
    for ch in s:
        h = (h * 31 + ord(ch)) & 0x7FFFFFFF
    return h % RING_SIZE


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def add_server(s):",                               # 0
    "    for i in 0 … V-1: ring.put(hash(s#i), s)",     # 1
    "    move keys the new points now own",             # 2
    "def get_server(key):",                             # 3
    "    p ← hash(key)",                                # 4
    "    return first point clockwise with pos ≥ p",    # 5
    "def remove_server(s):",                            # 6
    "    ring.remove(all points of s)",                 # 7
    "    reassign keys that lived on s",                # 8
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def consistent_hashing(
    operations: Sequence[Tuple[str, str]] = OPERATIONS,
    virtual_nodes: int = VIRTUAL_NODES,
) -> Generator[Step, None, None]:
    """
    Args:
        operations    : ("add_server" | "remove_server" | "add_key", name) pairs.
        virtual_nodes : Ring points per server.
    """
    servers: List[str]      = []
    points:  List[dict]     = []
    keys:    List[dict]     = []

    def snap():
        return {"servers": servers, "virtual_nodes": points, "keys": keys}

    def owner(position: int) -> Optional[str]:
        for vn in points:
            if vn["position"] >= position:
                return vn["server"]
        return points[0]["server"] if points else None

    sb = StepBuilder(counters=("moved_keys",))
    yield sb.emit(
        "init",
        f"Empty hash ring with {RING_SIZE} positions, {virtual_nodes} virtual nodes per server",
        snap(),
    )

    for op, name in operations:
        if op == "add_server":
            if name in servers:
                continue
            servers.append(name)
            yield sb.emit(
                "add_server",
                f"add_server({name}): hash {virtual_nodes} virtual node(s) onto the ring",
                snap(),
                code_line=0,
                variables={"server": name},
                server=name,
            )
            for i in range(virtual_nodes):
                vnode = f"{name}#{i}"
                position = ring_hash(vnode)
                points.append({"id": vnode, "server": name, "position": position})
                points.sort(key=lambda vn: vn["position"])
                yield sb.emit(
                    "add_point",
                    f'Virtual node {i + 1}: hash("{vnode}") → position {position}',
                    snap(),
                    code_line=1,
                    variables={"server": name, "i": i, "position": position},
                    server=name,
                    point=vnode,
                    position=position,
                )
            moved = _reassign(keys, owner, only=None)
            if moved:
                sb.count("moved_keys", len(moved))
                yield sb.emit(
                    "rebalance",
                    f"{len(moved)} key(s) move to {name}: {', '.join(k for k, _, _ in moved)}",
                    snap(),
                    code_line=2,
                    variables={"server": name, "moved": len(moved)},
                    server=name,
                    moved=[{"key": k, "from": old, "to": new} for k, old, new in moved],
                )

        elif op == "add_key":
            position = ring_hash(name)
            server = owner(position)
            yield sb.emit(
                "add_key",
                f'hash("{name}") → position {position}',
                snap(),
                code_line=4,
                variables={"key": name, "position": position},
                key=name,
                position=position,
            )
            keys.append({"key": name, "position": position, "server": server})
            yield sb.emit(
                "find_server",
                f'Walk clockwise from {position}: "{name}" → {server}'
                if server else f'No servers on the ring: "{name}" is unassigned',
                snap(),
                code_line=5,
                variables={"key": name, "server": server},
                key=name,
                server=server,
            )

        elif op == "remove_server":
            if name not in servers:
                continue
            servers.remove(name)
            removed = [vn["id"] for vn in points if vn["server"] == name]
            points[:] = [vn for vn in points if vn["server"] != name]
            orphaned = [entry["key"] for entry in keys if entry["server"] == name]
            for entry in keys:
                if entry["server"] == name:
                    entry["server"] = None
            yield sb.emit(
                "remove_server",
                f"Remove {name} and its points {removed}; {len(orphaned)} key(s) orphaned",
                snap(),
                code_line=7,
                variables={"server": name, "orphaned": len(orphaned)},
                server=name,
                points=removed,
                orphaned=orphaned,
            )
            moved = _reassign(keys, owner, only=set(orphaned))
            sb.count("moved_keys", len(moved))
            yield sb.emit(
                "rebalance",
                f"Reassign {len(moved)} orphaned key(s); every other key stays put" if moved
                else f"No servers left; {len(orphaned)} key(s) stay unassigned" if orphaned
                else f"{name} owned no keys; nothing moves",
                snap(),
                code_line=8,
                variables={"server": name, "moved": len(moved)},
                server=name,
                moved=[{"key": k, "from": name, "to": new} for k, _, new in moved],
            )

    yield sb.done(
        f"Done. {len(servers)} server(s), {len(keys)} key(s), {sb.metrics['moved_keys']} key move(s) in total",
        snap(),
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _reassign(keys: List[dict], owner, only: Optional[Set[str]]) -> List[Tuple[str, Optional[str], Optional[str]]]:
    """
    Recompute owners.  With `only`, just the named keys are touched.
    Returns (key, old_server, new_server) for every key whose owner changed.
    """
    moved = []
    for entry in keys:
        if only is not None and entry["key"] not in only:
            continue
        new = owner(entry["position"])
        if new != entry["server"]:
            moved.append((entry["key"], entry["server"], new))
            entry["server"] = new
    return moved

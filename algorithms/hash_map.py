"""
hash_map.py — Hash Map with Separate Chaining
==============================================
Generator-based trace of put / get on a fixed table of buckets.
Each bucket is a chain (list) of {"key", "value", "hash"} entries.

Yields a Step at:
  1. Initialise empty buckets
  2. Hash computation (hash code + bucket index)
  3. put → new entry appended to the chain, or existing value updated
  4. get → walk the chain, "found" or "not_found"
"""

from typing import Any, Generator, List, Optional, Sequence, Tuple

from algorithms.step import Step, StepBuilder


BUCKETS = 8

OPERATIONS: List[Tuple[str, str, Optional[Any]]] = [
    ("put", "Alice",   25),
    ("put", "Bob",     30),
    ("put", "Charlie", 35),
    ("put", "Diana",   28),
    ("put", "Eve",     22),
    ("get", "Bob",     None),
    ("put", "Alice",   26),     # update
    ("get", "Frank",   None),   # miss
]


def hash_code(key: str) -> int:
    """Polynomial string hash kept to 31 bits (non-negative)."""
    h = 0
    for ch in key:
        h = (h * 31 + ord(ch)) & 0x7FFFFFFF
    return h


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def put(key, value):",                          # 0
    "    i ← hash(key) % capacity",                  # 1
    "    for e in buckets[i]:",                      # 2
    "        if e.key == key: e.value ← value; return",  # 3
    "    buckets[i].append((key, value))",           # 4
    "def get(key):",                                 # 5
    "    i ← hash(key) % capacity",                  # 6
    "    for e in buckets[i]:",                      # 7
    "        if e.key == key: return e.value",       # 8
    "    return null",                               # 9
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def hash_map(
    operations: Sequence[Tuple[str, str, Optional[Any]]] = OPERATIONS,
    buckets: int = BUCKETS,
) -> Generator[Step, None, None]:
    """
    Args:
        operations : ("put", key, value) or ("get", key, None) triples.
        buckets    : Number of buckets.
    """
    table: List[List[dict]] = [[] for _ in range(buckets)]
    size = 0

    def snap():
        return {"buckets": table, "size": size, "capacity": buckets}

    sb = StepBuilder(counters=("collisions",))
    yield sb.emit("init", f"Empty HashMap with {buckets} buckets", snap())

    for op, key, value in operations:
        h = hash_code(key)
        index = h % buckets
        yield sb.emit(
            "hash",
            f'hash("{key}") = {h} → bucket {h} % {buckets} = {index}',
            snap(),
            code_line=1 if op == "put" else 6,
            variables={"key": key, "hash": h, "index": index},
            key=key,
            bucket=index,
        )
        chain = table[index]
        existing = next((e for e in chain if e["key"] == key), None)

        if op == "put":
            if existing is not None:
                old = existing["value"]
                existing["value"] = value
                yield sb.emit(
                    "update",
                    f'Key "{key}" exists in bucket {index}: value {old} → {value}',
                    snap(),
                    code_line=3,
                    variables={"key": key, "old": old, "value": value},
                    key=key,
                    bucket=index,
                )
            else:
                collision = bool(chain)
                if collision:
                    sb.count("collisions")
                chain.append({"key": key, "value": value, "hash": h})
                size += 1
                yield sb.emit(
                    "put",
                    f'put("{key}", {value}) → bucket {index}'
                    + (f" (collision, chain length {len(chain)})" if collision else ""),
                    snap(),
                    code_line=4,
                    variables={"key": key, "value": value, "size": size},
                    key=key,
                    bucket=index,
                    collision=collision,
                )

        elif op == "get":
            yield sb.emit(
                "get",
                f'get("{key}") → scan bucket {index} ({len(chain)} entr{"y" if len(chain) == 1 else "ies"})',
                snap(),
                code_line=7,
                variables={"key": key, "index": index},
                key=key,
                bucket=index,
            )
            if existing is not None:
                yield sb.emit(
                    "found",
                    f'get("{key}") → {existing["value"]}',
                    snap(),
                    code_line=8,
                    variables={"key": key, "result": existing["value"]},
                    key=key,
                    bucket=index,
                )
            else:
                yield sb.emit(
                    "not_found",
                    f'get("{key}") → null (key not present)',
                    snap(),
                    code_line=9,
                    variables={"key": key, "result": None},
                    key=key,
                    bucket=index,
                )

    yield sb.done(f"Done. {size} entries, {sb.metrics['collisions']} collision(s)", snap())

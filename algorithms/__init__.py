"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every visualizer the engine knows about.

    from algorithms import REGISTRY, get_algorithm, generate_steps

REGISTRY is a dict:
    {
        "heap_sort": AlgoInfo(key, label, fn, pseudocode, tags, params, …),
        …
    }

Adding a visualizer is: write the generator, add one entry here.
"""

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from algorithms.step import Step

# ---------------------------------------------------------------------------
# Import all generator modules
# ---------------------------------------------------------------------------
from algorithms.array_list         import array_list         as _array_list,  PSEUDOCODE as _al_pc
from algorithms.linked_list        import linked_list        as _linked_list, PSEUDOCODE as _ll_pc
from algorithms.array_deque        import array_deque        as _deque,       PSEUDOCODE as _dq_pc
from algorithms.hash_map           import hash_map           as _hash_map,    PSEUDOCODE as _hm_pc
from algorithms.hash_table         import hash_table         as _hash_table,  PSEUDOCODE as _ht_pc
from algorithms.linked_hash_map    import linked_hash_map    as _lhm,         PSEUDOCODE as _lhm_pc
from algorithms.bloom_filter       import bloom_filter       as _bloom,       PSEUDOCODE as _bloom_pc
from algorithms.lru_cache          import lru_cache          as _lru,         PSEUDOCODE as _lru_pc
from algorithms.tree_set           import tree_set           as _tree_set,    PSEUDOCODE as _ts_pc
from algorithms.btree              import btree              as _btree,       PSEUDOCODE as _bt_pc
from algorithms.skip_list          import skip_list          as _skip_list,   PSEUDOCODE as _sl_pc
from algorithms.trie               import trie               as _trie,        PSEUDOCODE as _trie_pc
from algorithms.union_find         import union_find         as _uf,          PSEUDOCODE as _uf_pc
from algorithms.segment_tree       import segment_tree       as _seg_tree,    PSEUDOCODE as _seg_pc
from algorithms.heap_sort          import heap_sort          as _heap_sort,   PSEUDOCODE as _hs_pc
from algorithms.priority_queue     import priority_queue     as _pq,          PSEUDOCODE as _pq_pc
from algorithms.binary_search      import binary_search      as _bsearch,     PSEUDOCODE as _bs_pc
from algorithms.astar              import astar              as _astar,       PSEUDOCODE as _ast_pc
from algorithms.bfs                import bfs                as _bfs,         PSEUDOCODE as _bfs_pc
from algorithms.dfs                import dfs                as _dfs,         PSEUDOCODE as _dfs_pc
from algorithms.dijkstra           import dijkstra           as _dijkstra,    PSEUDOCODE as _dij_pc
from algorithms.topological_sort   import topological_sort   as _topo,        PSEUDOCODE as _topo_pc
from algorithms.knapsack           import knapsack           as _knapsack,    PSEUDOCODE as _ks_pc
from algorithms.consistent_hashing import consistent_hashing as _ch,          PSEUDOCODE as _ch_pc
from algorithms.raft               import raft               as _raft,        raft_compact as _raft_compact
from algorithms.raft               import PSEUDOCODE as _raft_pc
from algorithms.sorting import (
    bubble_sort    as _bubble,    BUBBLE_PSEUDOCODE    as _bubble_pc,
    selection_sort as _selection, SELECTION_PSEUDOCODE as _selection_pc,
    insertion_sort as _insertion, INSERTION_PSEUDOCODE as _insertion_pc,
    quick_sort     as _quick,     QUICK_PSEUDOCODE     as _quick_pc,
    merge_sort     as _merge,     MERGE_PSEUDOCODE     as _merge_pc,
)


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each visualizer
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "heap_sort"
    label:            str                    # human label, e.g. "Heap Sort"
    fn:               Callable               # the generator function
    pseudocode:       List[str]              # lines for the side-panel
    tags:             List[str] = field(default_factory=list)   # e.g. ["sorting", "array"]
    params:           List[str] = field(init=False, default_factory=list)  # keyword arguments fn accepts
    complexity_time:  str       = ""         # e.g. "O(n log n)"
    complexity_space: str       = ""         # e.g. "O(1)"
    description:      str       = ""         # one-liner for the card

    def __post_init__(self):
        self.params = list(inspect.signature(self.fn).parameters)

    @property
    def is_sorting(self) -> bool:
        return "sorting" in self.tags

    def to_dict(self, with_pseudocode: bool = False) -> dict:
        d = {
            "key":              self.key,
            "label":            self.label,
            "tags":             list(self.tags),
            "params":           list(self.params),
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
        }
        if with_pseudocode:
            d["pseudocode"] = list(self.pseudocode)
        return d


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    # -- linear structures --------------------------------------------------
    "array_list": AlgoInfo(
        key="array_list", label="ArrayList", fn=_array_list, pseudocode=_al_pc,
        tags=["data-structure", "array"],
        complexity_time="O(1) amortized add", complexity_space="O(n)",
        description="Dynamic array that doubles its capacity when full.",
    ),

    "linked_list": AlgoInfo(
        key="linked_list", label="Linked List", fn=_linked_list, pseudocode=_ll_pc,
        tags=["data-structure", "list"],
        complexity_time="O(1) head/tail insert, O(n) get", complexity_space="O(n)",
        description="Singly linked list with head and tail pointers.",
    ),

    "array_deque": AlgoInfo(
        key="array_deque", label="ArrayDeque", fn=_deque, pseudocode=_dq_pc,
        tags=["data-structure", "array", "queue"],
        complexity_time="O(1) amortized", complexity_space="O(n)",
        description="Circular buffer with wrapping head and tail; doubles when only the spare slot is left.",
    ),

    # -- hashing ------------------------------------------------------------
    "hash_map": AlgoInfo(
        key="hash_map", label="HashMap", fn=_hash_map, pseudocode=_hm_pc,
        tags=["data-structure", "hashing"],
        complexity_time="O(1) average", complexity_space="O(n)",
        description="Separate chaining: colliding keys share a bucket list.",
    ),

    "hash_table": AlgoInfo(
        key="hash_table", label="Hash Table (linear probing)", fn=_hash_table, pseudocode=_ht_pc,
        tags=["data-structure", "hashing"],
        complexity_time="O(1) average", complexity_space="O(n)",
        description="Open addressing: collisions step to the next slot; rehash above load factor 0.7.",
    ),

    "linked_hash_map": AlgoInfo(
        key="linked_hash_map", label="LinkedHashMap", fn=_lhm, pseudocode=_lhm_pc,
        tags=["data-structure", "hashing"],
        complexity_time="O(1)", complexity_space="O(n)",
        description="Hash map threaded on a linked list; iterates in insertion or access order.",
    ),

    "bloom_filter": AlgoInfo(
        key="bloom_filter", label="Bloom Filter", fn=_bloom, pseudocode=_bloom_pc,
        tags=["data-structure", "hashing", "probabilistic"],
        complexity_time="O(k)", complexity_space="O(m) bits",
        description="Three hash functions over a bit array. No false negatives, some false positives.",
    ),

    "lru_cache": AlgoInfo(
        key="lru_cache", label="LRU Cache", fn=_lru, pseudocode=_lru_pc,
        tags=["data-structure", "hashing", "cache"],
        complexity_time="O(1)", complexity_space="O(capacity)",
        description="Hash map plus recency list; the least recently used entry is evicted.",
    ),

    # -- trees --------------------------------------------------------------
    "tree_set": AlgoInfo(
        key="tree_set", label="TreeSet (BST)", fn=_tree_set, pseudocode=_ts_pc,
        tags=["data-structure", "tree"],
        complexity_time="O(h)", complexity_space="O(n)",
        description="Unbalanced binary search tree with add / contains.",
    ),

    "btree": AlgoInfo(
        key="btree", label="B-Tree", fn=_btree, pseudocode=_bt_pc,
        tags=["data-structure", "tree"],
        complexity_time="O(log n)", complexity_space="O(n)",
        description="Order-3 B-Tree. Full nodes split and push the median upward.",
    ),

    "skip_list": AlgoInfo(
        key="skip_list", label="Skip List", fn=_skip_list, pseudocode=_sl_pc,
        tags=["data-structure", "probabilistic"],
        complexity_time="O(log n) expected", complexity_space="O(n)",
        description="Layered linked lists; search drops a level whenever the next key is too big.",
    ),

    "trie": AlgoInfo(
        key="trie", label="Trie", fn=_trie, pseudocode=_trie_pc,
        tags=["data-structure", "tree", "strings"],
        complexity_time="O(L)", complexity_space="O(total chars)",
        description="Prefix tree: one node per character, shared prefixes share nodes.",
    ),

    "union_find": AlgoInfo(
        key="union_find", label="Union-Find", fn=_uf, pseudocode=_uf_pc,
        tags=["data-structure", "graph"],
        complexity_time="O(α(n))", complexity_space="O(n)",
        description="Disjoint sets with union by rank and path compression.",
    ),

    "segment_tree": AlgoInfo(
        key="segment_tree", label="Segment Tree", fn=_seg_tree, pseudocode=_seg_pc,
        tags=["data-structure", "tree", "range-query"],
        complexity_time="O(log n) query / update", complexity_space="O(n)",
        description="Range sums: each node stores the sum of its interval.",
    ),

    # -- heaps --------------------------------------------------------------
    "heap_sort": AlgoInfo(
        key="heap_sort", label="Heap Sort", fn=_heap_sort, pseudocode=_hs_pc,
        tags=["sorting", "heap", "array"],
        complexity_time="O(n log n)", complexity_space="O(1)",
        description="Build a max-heap, then repeatedly move the root behind the heap.",
    ),

    "priority_queue": AlgoInfo(
        key="priority_queue", label="Priority Queue", fn=_pq, pseudocode=_pq_pc,
        tags=["data-structure", "heap"],
        complexity_time="O(log n)", complexity_space="O(n)",
        description="Binary min-heap with sift-up on offer and sift-down on poll.",
    ),

    # -- searching & sorting ------------------------------------------------
    "binary_search": AlgoInfo(
        key="binary_search", label="Binary Search", fn=_bsearch, pseudocode=_bs_pc,
        tags=["searching", "array"],
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Halve the sorted window until the target is found or the window is empty.",
    ),

    "bubble_sort": AlgoInfo(
        key="bubble_sort", label="Bubble Sort", fn=_bubble, pseudocode=_bubble_pc,
        tags=["sorting", "array"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Swap adjacent out-of-order pairs; stops early after a pass with no swaps.",
    ),

    "selection_sort": AlgoInfo(
        key="selection_sort", label="Selection Sort", fn=_selection, pseudocode=_selection_pc,
        tags=["sorting", "array"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Select the minimum of the unsorted suffix and swap it into place.",
    ),

    "insertion_sort": AlgoInfo(
        key="insertion_sort", label="Insertion Sort", fn=_insertion, pseudocode=_insertion_pc,
        tags=["sorting", "array"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Shift larger elements right and drop each key into its slot.",
    ),

    "quick_sort": AlgoInfo(
        key="quick_sort", label="Quick Sort", fn=_quick, pseudocode=_quick_pc,
        tags=["sorting", "array", "divide-and-conquer"],
        complexity_time="O(n log n) average", complexity_space="O(log n)",
        description="Lomuto partition around the last element, then recurse on both sides.",
    ),

    "merge_sort": AlgoInfo(
        key="merge_sort", label="Merge Sort", fn=_merge, pseudocode=_merge_pc,
        tags=["sorting", "array", "divide-and-conquer"],
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Split in half, sort both halves, merge them back.",
    ),

    # -- graphs -------------------------------------------------------------
    "astar": AlgoInfo(
        key="astar", label="A* Search", fn=_astar, pseudocode=_ast_pc,
        tags=["graph", "shortest-path", "heuristic"],
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Grid search guided by the Manhattan heuristic. Optimal when h is admissible.",
    ),

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=_bfs, pseudocode=_bfs_pc,
        tags=["graph", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer by layer from a FIFO queue; finds fewest-hop paths.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", fn=_dfs, pseudocode=_dfs_pc,
        tags=["graph", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives down one branch at a time using an explicit stack.",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dijkstra, pseudocode=_dij_pc,
        tags=["graph", "shortest-path", "weighted"],
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Greedily settles the closest node. Optimal for non-negative weights.",
    ),

    "topological_sort": AlgoInfo(
        key="topological_sort", label="Topological Sort", fn=_topo, pseudocode=_topo_pc,
        tags=["graph", "ordering"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Kahn's algorithm: repeatedly remove a node with in-degree 0.",
    ),

    # -- dynamic programming ------------------------------------------------
    "knapsack": AlgoInfo(
        key="knapsack", label="0/1 Knapsack", fn=_knapsack, pseudocode=_ks_pc,
        tags=["dynamic-programming"],
        complexity_time="O(nW)", complexity_space="O(nW)",
        description="Fill the item × capacity table, then walk back to find the chosen items.",
    ),

    # -- distributed systems ------------------------------------------------
    "consistent_hashing": AlgoInfo(
        key="consistent_hashing", label="Consistent Hashing", fn=_ch, pseudocode=_ch_pc,
        tags=["distributed", "hashing"],
        complexity_time="O(log n) lookup", complexity_space="O(servers · vnodes)",
        description="Hash ring with virtual nodes; adding or removing a server moves only nearby keys.",
    ),

    "raft": AlgoInfo(
        key="raft", label="Raft Consensus", fn=_raft, pseudocode=_raft_pc,
        tags=["distributed", "consensus"],
        description="Leader election and log replication across a five-node cluster.",
    ),

    "raft_compact": AlgoInfo(
        key="raft_compact", label="Raft Consensus (compact)", fn=_raft_compact, pseudocode=_raft_pc,
        tags=["distributed", "consensus"],
        description="Same Raft narrative with the per-message steps folded together.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


def generate_steps(key: str, **params: Any) -> List[Step]:
    """
    Run a registered generator to completion and return its full trace.

    Raises ValueError for an unknown key or a parameter the generator does
    not accept.  Invalid parameter values surface as whatever the generator
    raises (ValueError for out-of-range input).
    """
    info = REGISTRY.get(key)
    if info is None:
        raise ValueError(f"Unknown algorithm: {key!r}")
    unknown = sorted(set(params) - set(info.params))
    if unknown:
        raise ValueError(f"{key} does not accept parameter(s): {', '.join(unknown)}")
    return list(info.fn(**params))


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
    "generate_steps",
]

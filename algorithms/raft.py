"""
raft.py — Raft Leader Election & Log Replication
=================================================
A SCRIPTED narrative, not a simulator: one election followed by one
replicated log entry, in a fixed order.

  1. The first node's election timer fires → candidate, term 1, votes
     for itself
  2. Followers grant votes in order until votes > N/2 → leader
  3. Leader sends heartbeats
  4. Client command is appended to the leader's log
  5. Entry replicated follower by follower until acks > N/2 → commit
  6. Followers holding the entry apply it

Term changes only on the election timeout.  `raft_compact` tells the same
story with fewer frames (no RequestVote broadcast, no per-follower
replicate frames).

Snapshot: {"nodes": [{"id", "state", "term", "voted_for", "log": [...],
                      "commit_index"}]}
"""

from typing import Dict, Generator, List, Sequence

from algorithms.step import Step, StepBuilder


NODE_IDS: List[str] = ["N1", "N2", "N3", "N4", "N5"]
COMMAND = "SET x=5"


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "# follower → candidate → leader",            # 0
    "on election timeout:",                       # 1
    "    state ← candidate; term += 1",           # 2
    "    voted_for ← self",                       # 3
    "    send RequestVote to all",                # 4
    "on votes > N/2:",                            # 5
    "    state ← leader; send heartbeats",        # 6
    "leader on client command:",                  # 7
    "    append entry to log",                    # 8
    "    replicate to followers",                 # 9
    "    if acks > N/2: commit entry",            # 10
    "followers apply committed entry",            # 11
]


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------
def raft(node_ids: Sequence[str] = NODE_IDS, detailed: bool = True) -> Generator[Step, None, None]:
    """
    Args:
        node_ids : Cluster members; the first one times out first.
        detailed : False → compact variant (see raft_compact).
    """
    nodes: List[Dict] = [
        {"id": nid, "state": "follower", "term": 0, "voted_for": None, "log": [], "commit_index": -1}
        for nid in node_ids
    ]
    n = len(nodes)
    majority = n // 2 + 1

    def snap():
        return {"nodes": nodes}

    sb = StepBuilder(counters=("messages",))
    yield sb.emit(
        "init",
        f"{n} nodes start as followers in term 0",
        snap(),
        code_line=0,
        variables={"nodes": n, "term": 0},
    )
    if not nodes:
        yield sb.done("Empty cluster: nothing to elect", snap())
        return

    # === LEADER ELECTION ===
    candidate = nodes[0]
    candidate.update(state="candidate", term=candidate["term"] + 1, voted_for=candidate["id"])
    term = candidate["term"]
    yield sb.emit(
        "timeout",
        f"{candidate['id']} election timeout! Becomes candidate, term → {term}",
        snap(),
        code_line=2,
        variables={"node": candidate["id"], "term": term},
        node=candidate["id"],
    )

    if detailed:
        sb.count("messages", n - 1)
        yield sb.emit(
            "request_vote",
            f"{candidate['id']} sends RequestVote(term={term}) to all nodes",
            snap(),
            code_line=4,
            variables={"from": candidate["id"], "term": term},
            node=candidate["id"],
            message="RequestVote",
        )

    votes = 1
    for voter in nodes[1:]:
        if votes > n / 2:
            break
        voter.update(term=term, voted_for=candidate["id"])
        votes += 1
        sb.count("messages")
        yield sb.emit(
            "vote",
            f"{voter['id']} grants its vote to {candidate['id']} ({votes}/{n})",
            snap(),
            code_line=5,
            variables={"voter": voter["id"], "candidate": candidate["id"], "votes": votes},
            node=voter["id"],
            edge={"from": voter["id"], "to": candidate["id"], "type": "vote"},
        )

    candidate["state"] = "leader"
    leader = candidate
    yield sb.emit(
        "become_leader",
        f"{leader['id']} has a majority ({votes}/{n}, needed {majority}): becomes LEADER",
        snap(),
        code_line=6,
        variables={"leader": leader["id"], "votes": votes, "needed": majority},
        node=leader["id"],
    )

    # === HEARTBEATS ===
    sb.count("messages", n - 1)
    yield sb.emit(
        "heartbeat",
        f"Leader {leader['id']} sends heartbeats to assert authority",
        snap(),
        code_line=6,
        variables={"leader": leader["id"]},
        node=leader["id"],
        message="Heartbeat",
    )

    # === LOG REPLICATION ===
    leader["log"].append({"term": term, "command": COMMAND, "committed": False})
    yield sb.emit(
        "append_entries",
        f'Client request "{COMMAND}": leader appends it at log index 0',
        snap(),
        code_line=8,
        variables={"command": COMMAND, "log_index": 0},
        node=leader["id"],
    )

    acks = 1
    for follower in nodes[1:]:
        if acks > n / 2:
            break
        follower["log"].append({"term": term, "command": COMMAND, "committed": False})
        acks += 1
        sb.count("messages")
        if detailed:
            yield sb.emit(
                "replicate",
                f"Replicate to {follower['id']} (acks: {acks}/{n})",
                snap(),
                code_line=9,
                variables={"follower": follower["id"], "acks": acks},
                node=follower["id"],
                edge={"from": leader["id"], "to": follower["id"], "type": "append"},
            )

    leader["log"][0]["committed"] = True
    leader["commit_index"] = 0
    if detailed:
        yield sb.emit(
            "commit",
            f"Majority acks ({acks}/{n}): leader commits index 0",
            snap(),
            code_line=10,
            variables={"commit_index": 0, "acks": acks},
            node=leader["id"],
        )

    for follower in nodes[1:]:
        if follower["log"]:
            follower["log"][0]["committed"] = True
            follower["commit_index"] = 0
    yield sb.emit(
        "commit",
        f'Followers apply committed entry "{COMMAND}"' if detailed
        else f'Majority ({acks}/{n}) stored "{COMMAND}": committed and applied',
        snap(),
        code_line=11,
        variables={"command": COMMAND, "acks": acks},
        node=leader["id"],
    )

    yield sb.done(
        f"Consensus reached. Leader {leader['id']}, term {term}, 1 committed entry",
        snap(),
    )


def raft_compact(node_ids: Sequence[str] = NODE_IDS) -> Generator[Step, None, None]:
    """Same scenario with fewer frames."""
    return raft(node_ids=node_ids, detailed=False)

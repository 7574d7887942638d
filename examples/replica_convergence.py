"""Replica convergence demo: two graph replicas diverge, then merge.

Architecture::

    Writes ──► replica-a ──┐
                           ├── merge (either direction) ──► same state
    Writes ──► replica-b ──┘

Demonstrates:
1. A replica is cloned from a source graph and both accept writes independently.
2. Removing a vertex on one replica purges its edges locally.
3. Merging in either direction yields identical state.
4. A snapshot can cross the wire as a plain dict (to_dict / from_dict).
"""

import json

import lwwgraph
from lwwgraph import ManualClock, ReplicatedGraph
from lwwgraph.analysis import edge_frame


def main():
    lwwgraph.configure_from_env()
    clock = ManualClock(start_ms=1_000)

    # --- Source graph ---
    replica_a = ReplicatedGraph(clock=clock, node_id="replica-a")
    for city in ("amsterdam", "berlin", "copenhagen", "dublin"):
        replica_a.add_vertex(city)
    replica_a.add_edge("amsterdam", "berlin")
    replica_a.add_edge("berlin", "copenhagen")
    replica_a.add_edge("copenhagen", "dublin")

    replica_b = replica_a.clone()
    print("Initial state (both replicas):")
    print(replica_a.render())

    # --- Divergent writes ---
    clock.advance(10)
    replica_a.add_vertex("edinburgh")
    replica_a.add_edge("dublin", "edinburgh")
    replica_b.remove_vertex("copenhagen")
    replica_b.add_edge("amsterdam", "dublin")

    print("\nreplica-a after local writes:")
    print(replica_a.render())
    print("\nreplica-b after local writes:")
    print(replica_b.render())

    # --- Exchange snapshots ---
    wire = json.dumps(replica_b.to_dict())
    remote_b = ReplicatedGraph.from_dict(json.loads(wire), clock=clock)

    merged_at_a = replica_a.merge(remote_b)
    merged_at_b = replica_b.merge(replica_a)

    print("\nMerged at replica-a:")
    print(merged_at_a.render())
    print("\nMerged at replica-b:")
    print(merged_at_b.render())
    print(f"\nConverged: {merged_at_a == merged_at_b}")
    print(f"Path amsterdam -> edinburgh: {merged_at_a.find_path('amsterdam', 'edinburgh')}")

    print("\nEdge table:")
    print(edge_frame(merged_at_a).to_string(index=False))


if __name__ == "__main__":
    main()

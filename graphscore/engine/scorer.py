"""Node scoring entry point.

Evaluates criteria, aggregates them into combined scores, then ranks and
normalizes. Scores are relative to the other nodes of the same snapshot and
are recomputed from scratch on every call.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum

from ..graph import GraphSnapshot
from .aggregator import aggregate
from .criteria import Criterion, evaluate
from .ranker import Ranker

logger = logging.getLogger(__name__)


class CriteriaProfile(Enum):
    """Predefined criterion sets."""
    INBOUND = "inbound"    # Nodes many others point to
    OUTBOUND = "outbound"  # Nodes that fan out
    BOTH = "both"          # Overall connectedness
    NONE = "none"          # Clears existing scores


CRITERIA_PROFILES: dict[CriteriaProfile, tuple[Criterion, ...]] = {
    CriteriaProfile.INBOUND: (Criterion.INBOUND_EDGES,),
    CriteriaProfile.OUTBOUND: (Criterion.OUTBOUND_EDGES,),
    CriteriaProfile.BOTH: (Criterion.INBOUND_EDGES, Criterion.OUTBOUND_EDGES),
    CriteriaProfile.NONE: (),
}


class Scorer:
    """Scores and ranks graph nodes by structural criteria."""

    def __init__(self, ranker: Ranker | None = None):
        self.ranker = ranker or Ranker()

    def score(self, snapshot: GraphSnapshot, *criteria: Criterion) -> GraphSnapshot:
        """Annotate nodes with combined scores and normalized ranks.

        The input snapshot is not modified. With no criteria, scores and
        ranks are cleared instead.

        Args:
            snapshot: Graph to score
            *criteria: Criteria to combine, in fold order

        Returns:
            New snapshot with the same edges and annotated nodes in rank order
        """
        if not criteria:
            return self.reset(snapshot)

        if snapshot.nodes is None:
            return GraphSnapshot(nodes=None, edges=snapshot.edges)

        combined = aggregate(snapshot, criteria)
        scored = [replace(n, score=combined.get(n.id)) for n in snapshot.nodes]
        ranked = self.ranker.rank_and_normalize(scored)

        logger.debug(
            "Scored %d of %d nodes by %s",
            len(combined),
            len(scored),
            ", ".join(c.value for c in criteria),
        )
        return GraphSnapshot(nodes=ranked, edges=snapshot.edges)

    def reset(self, snapshot: GraphSnapshot) -> GraphSnapshot:
        """Return a copy of the snapshot with every score and rank cleared."""
        if snapshot.nodes is None:
            return GraphSnapshot(nodes=None, edges=snapshot.edges)

        nodes = [replace(n, score=None, rank=None) for n in snapshot.nodes]
        return GraphSnapshot(nodes=nodes, edges=snapshot.edges)

    def breakdown(
        self,
        snapshot: GraphSnapshot,
        criteria: tuple[Criterion, ...] | list[Criterion]
    ) -> dict[str, dict[str, float]]:
        """Get the raw score each criterion gave each node.

        Returns:
            Mapping of node id to {criterion value: raw score}, listing only
            criteria that scored the node
        """
        result: dict[str, dict[str, float]] = {
            n.id: {} for n in snapshot.nodes or []
        }
        for criterion in criteria:
            for node_id, score in evaluate(snapshot, criterion).items():
                if score is not None:
                    result.setdefault(node_id, {})[criterion.value] = score
        return result


def score_nodes(snapshot: GraphSnapshot, *criteria: Criterion) -> GraphSnapshot:
    """Convenience function to score a snapshot with default settings.

    Args:
        snapshot: Graph to score
        *criteria: Criteria to combine; none clears scores and ranks

    Returns:
        Annotated snapshot
    """
    return Scorer().score(snapshot, *criteria)

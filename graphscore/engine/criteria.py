"""Structural scoring criteria.

Each criterion maps every node of a snapshot to an optional raw score in
[0, 1]. A node with no matching edges maps to None rather than 0, so that it
does not contribute to the combined score.
"""

from __future__ import annotations

import logging
from collections import Counter
from enum import Enum
from typing import Callable, Optional

from ..graph import GraphSnapshot

logger = logging.getLogger(__name__)

ScoreMap = dict[str, Optional[float]]


class Criterion(Enum):
    """Structural metrics a node can be scored by."""
    INBOUND_EDGES = "InboundEdges"    # Share of edges targeting the node
    OUTBOUND_EDGES = "OutboundEdges"  # Share of edges leaving the node


def _score_by_edges(snapshot: GraphSnapshot, by_target: bool) -> ScoreMap:
    """Score nodes by their share of all edges, counted at one endpoint."""
    scores: ScoreMap = {}
    if snapshot.nodes is None:
        return scores

    # Absent edges produce no scores; division is never attempted
    edges = snapshot.edges
    total_edges = len(edges) if edges is not None else None

    edge_counts: Counter[str] = Counter(
        edge.target if by_target else edge.source for edge in edges or []
    )

    for node in snapshot.nodes:
        count = edge_counts.get(node.id, 0)
        if count and total_edges:
            scores[node.id] = count / total_edges
        else:
            scores[node.id] = None

    return scores


def score_by_inbound_edges(snapshot: GraphSnapshot) -> ScoreMap:
    """Score nodes by the number of edges that target them."""
    return _score_by_edges(snapshot, by_target=True)


def score_by_outbound_edges(snapshot: GraphSnapshot) -> ScoreMap:
    """Score nodes by the number of edges that originate from them."""
    return _score_by_edges(snapshot, by_target=False)


EVALUATORS: dict[Criterion, Callable[[GraphSnapshot], ScoreMap]] = {
    Criterion.INBOUND_EDGES: score_by_inbound_edges,
    Criterion.OUTBOUND_EDGES: score_by_outbound_edges,
}


def evaluate(snapshot: GraphSnapshot, criterion: Criterion) -> ScoreMap:
    """Compute raw per-node scores for a single criterion.

    Args:
        snapshot: Graph to score
        criterion: Criterion selecting the evaluator

    Returns:
        Mapping of node id to raw score, None where the node had no match
    """
    scores = EVALUATORS[criterion](snapshot)
    logger.debug(
        "Criterion %s scored %d of %d nodes",
        criterion.value,
        sum(1 for s in scores.values() if s is not None),
        len(scores),
    )
    return scores


def criterion_from_name(name: str) -> Criterion:
    """Look up a criterion by value (``InboundEdges``) or short name (``inbound``).

    Raises:
        ValueError: If the name matches no criterion
    """
    key = name.strip().lower().replace("_", "").replace("-", "")
    for criterion in Criterion:
        aliases = {
            criterion.value.lower(),
            criterion.name.lower().replace("_", ""),
            criterion.value.lower().removesuffix("edges"),
        }
        if key in aliases:
            return criterion
    raise ValueError(f"Unknown criterion '{name}'")

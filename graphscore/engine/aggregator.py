"""Combines per-criterion scores into one score per node."""

from __future__ import annotations

import logging
from typing import Iterable

from ..graph import GraphSnapshot
from .criteria import Criterion, ScoreMap, evaluate

logger = logging.getLogger(__name__)


def fold_scores(combined: dict[str, float], scores: ScoreMap) -> dict[str, float]:
    """Add present scores into the combined map in place.

    Absent scores are skipped, so a node only appears in ``combined`` once
    some criterion has scored it.
    """
    for node_id, score in scores.items():
        if score is None:
            continue
        if node_id in combined:
            combined[node_id] += score
        else:
            combined[node_id] = score
    return combined


def aggregate(
    snapshot: GraphSnapshot,
    criteria: Iterable[Criterion]
) -> dict[str, float]:
    """Sum each node's scores across the given criteria.

    Args:
        snapshot: Graph to score
        criteria: Criteria to evaluate, folded in the given order

    Returns:
        Mapping of node id to combined score. Nodes no criterion scored are
        left out.
    """
    combined: dict[str, float] = {}
    for criterion in criteria:
        fold_scores(combined, evaluate(snapshot, criterion))

    logger.debug("Aggregated scores for %d nodes", len(combined))
    return combined

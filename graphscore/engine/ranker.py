"""Node ranking engine.

Orders scored nodes into dense, tie-aware ranks and rescales those ranks into
a bounded display range.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from ..graph import Node

logger = logging.getLogger(__name__)

# Display range for normalized ranks
RANK_RANGE_MIN = 1
RANK_RANGE_MAX = 100


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


class Ranker:
    """Assigns dense ranks to nodes by combined score."""

    def __init__(self, max_range: int = RANK_RANGE_MAX):
        """Initialize ranker.

        Args:
            max_range: Upper bound of the normalized rank range
        """
        if max_range < RANK_RANGE_MIN:
            raise ValueError(
                f"max_range must be at least {RANK_RANGE_MIN}, got {max_range}"
            )
        self.max_range = max_range

    def sort(self, nodes: Sequence[Node]) -> list[Node]:
        """Sort nodes by score, highest first.

        Unscored nodes go after every scored node. The sort is stable, so
        equal scores keep their input order.
        """
        return sorted(
            nodes,
            key=lambda n: (n.score is None, -n.score if n.score is not None else 0.0)
        )

    def rank(self, nodes: Sequence[Node]) -> list[Node]:
        """Rank nodes by score.

        Ranks start at 1 and only increase when the score drops, so ties
        share a rank and no rank number is skipped.

        Args:
            nodes: Nodes with combined scores (None for unscored)

        Returns:
            New nodes in ranked order; unscored nodes are left unranked
        """
        ranked = []
        previous_score: float | None = None
        current_rank = 1  # Lower rank number is better

        for node in self.sort(nodes):
            if node.score is None:
                ranked.append(replace(node, rank=None))
                continue

            if previous_score is not None and node.score < previous_score:
                current_rank += 1

            ranked.append(replace(node, rank=current_rank))
            previous_score = node.score

        return ranked

    def normalize(self, nodes: Sequence[Node]) -> list[Node]:
        """Rescale ranks into [1, max_range].

        The upper bound shrinks to the highest rank when fewer than
        ``max_range`` rank levels exist. Ratios are rounded up, so the top
        rank always stays 1 and tie groups are preserved.

        Args:
            nodes: Ranked nodes as returned by rank()

        Returns:
            New nodes with normalized ranks, in the same order
        """
        min_rank = 1 if nodes else None
        ranks = [n.rank for n in nodes if n.rank is not None]
        max_rank = max(ranks) if ranks else None

        if min_rank is None or max_rank is None:
            return list(nodes)

        lower = RANK_RANGE_MIN
        upper = max_rank if max_rank < self.max_range else self.max_range

        normalized = []
        for node in nodes:
            if node.rank is None:
                normalized.append(node)
                continue

            # All ranked nodes tied
            if max_rank == min_rank:
                rank = min_rank
            else:
                rank = lower + _ceil_div(
                    (node.rank - min_rank) * (upper - lower),
                    max_rank - min_rank
                )
            normalized.append(replace(node, rank=rank))

        logger.debug(
            "Normalized %d rank levels into [%d, %d]", max_rank, lower, upper
        )
        return normalized

    def rank_and_normalize(self, nodes: Sequence[Node]) -> list[Node]:
        """Rank nodes and rescale the ranks in one pass."""
        return self.normalize(self.rank(nodes))


def rank_nodes(
    nodes: Sequence[Node],
    max_range: int = RANK_RANGE_MAX
) -> list[Node]:
    """Convenience function to rank and normalize nodes with default settings.

    Args:
        nodes: Nodes with combined scores
        max_range: Upper bound of the normalized rank range

    Returns:
        Ranked nodes with normalized ranks
    """
    ranker = Ranker(max_range=max_range)
    return ranker.rank_and_normalize(nodes)

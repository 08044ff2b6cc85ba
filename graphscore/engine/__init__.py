"""Core scoring and ranking engine."""

from .criteria import Criterion
from .ranker import Ranker
from .scorer import Scorer, score_nodes

__all__ = ["Criterion", "Ranker", "Scorer", "score_nodes"]

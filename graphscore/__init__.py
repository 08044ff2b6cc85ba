"""graphscore - importance scores and ranks for directed graph nodes."""

__version__ = "1.0.0"

from .engine.criteria import Criterion
from .engine.scorer import Scorer, score_nodes
from .graph import Edge, GraphSnapshot, Node

__all__ = [
    "__version__",
    "Criterion",
    "Edge",
    "GraphSnapshot",
    "Node",
    "Scorer",
    "score_nodes",
]

"""JSON output formatter for scoring results.

Generates structured JSON for the rendering layer and other programmatic use.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from .. import __version__
from ..engine.criteria import Criterion
from ..engine.scorer import Scorer
from ..graph import GraphSnapshot, Node


def summarize(nodes: list[Node] | None, top_n: int = 5) -> dict:
    """Summary statistics for a scored node list."""
    nodes = nodes or []
    scored = [n for n in nodes if n.score is not None]
    ranked = sorted(
        (n for n in nodes if n.rank is not None),
        key=lambda n: n.rank
    )

    return {
        "total": len(nodes),
        "scored": len(scored),
        "ranked": len(ranked),
        "unranked": len(nodes) - len(ranked),
        "rank_levels": len({n.rank for n in ranked}),
        "top_nodes": [
            {"id": n.id, "score": n.score, "rank": n.rank}
            for n in ranked[:top_n]
        ],
    }


class JSONOutput:
    """JSON output formatter."""

    def __init__(self, scorer: Scorer | None = None):
        self.scorer = scorer or Scorer()

    def generate(
        self,
        snapshot: GraphSnapshot,
        criteria: tuple[Criterion, ...] | list[Criterion] = (),
        source: GraphSnapshot | None = None,
        include_breakdown: bool = False
    ) -> dict:
        """Generate JSON-serializable dictionary.

        Args:
            snapshot: Scored snapshot
            criteria: Criteria the snapshot was scored by
            source: Unscored input snapshot, needed for the breakdown
            include_breakdown: Whether to include per-criterion raw scores

        Returns:
            Dictionary ready for JSON serialization
        """
        result: dict[str, Any] = {
            "metadata": {
                "generated_at": datetime.now().isoformat(),
                "tool": "graphscore",
                "version": __version__,
                "criteria": [c.value for c in criteria],
                "node_count": snapshot.node_count,
                "edge_count": snapshot.edge_count,
            }
        }

        result["summary"] = summarize(snapshot.nodes)
        result["elements"] = snapshot.to_elements()

        if include_breakdown:
            result["score_breakdown"] = self.scorer.breakdown(
                source or snapshot, criteria
            )

        return result

    def to_json(
        self,
        snapshot: GraphSnapshot,
        indent: int = 2,
        **kwargs
    ) -> str:
        """Generate JSON string.

        Args:
            snapshot: Scored snapshot
            indent: JSON indentation level
            **kwargs: Additional arguments passed to generate()

        Returns:
            JSON formatted string
        """
        data = self.generate(snapshot, **kwargs)
        return json.dumps(data, indent=indent, default=str)

    def save(
        self,
        snapshot: GraphSnapshot,
        output_path: str | Path,
        **kwargs
    ) -> None:
        """Save JSON report to file."""
        content = self.to_json(snapshot, **kwargs)
        Path(output_path).write_text(content, encoding='utf-8')


def export_json(
    snapshot: GraphSnapshot,
    output_path: str | Path | None = None,
    **kwargs
) -> str | None:
    """Convenience function to export a scored snapshot to JSON.

    Args:
        snapshot: Scored snapshot
        output_path: Optional path to save file. If None, returns string.
        **kwargs: Additional arguments passed to JSONOutput.generate()

    Returns:
        JSON string if no output_path, None otherwise
    """
    output = JSONOutput()

    if output_path:
        output.save(snapshot, output_path, **kwargs)
        return None
    else:
        return output.to_json(snapshot, **kwargs)

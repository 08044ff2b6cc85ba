"""Tests for output modules (terminal, json)."""

import json

import pytest
from rich.console import Console

from graphscore import __version__
from graphscore.engine.criteria import Criterion
from graphscore.engine.scorer import score_nodes
from graphscore.graph import Edge, GraphSnapshot, Node
from graphscore.output.json_out import JSONOutput, export_json, summarize
from graphscore.output.terminal import TerminalOutput, print_results

_CRITERIA = (Criterion.INBOUND_EDGES, Criterion.OUTBOUND_EDGES)


def _make_snapshot() -> GraphSnapshot:
    """Small service graph with one isolated node."""
    return GraphSnapshot(
        nodes=[
            Node("productpage", data={"app": "productpage"}),
            Node("reviews"),
            Node("ratings"),
            Node("details"),
            Node("orphan"),
        ],
        edges=[
            Edge("productpage", "reviews"),
            Edge("productpage", "details"),
            Edge("reviews", "ratings"),
        ],
    )


def _make_scored() -> GraphSnapshot:
    return score_nodes(_make_snapshot(), *_CRITERIA)


def _recording_console() -> Console:
    return Console(record=True, width=120, no_color=True)


class TestSummarize:
    """Tests for summary statistics."""

    def test_counts(self):
        summary = summarize(_make_scored().nodes)

        assert summary["total"] == 5
        assert summary["scored"] == 4
        assert summary["ranked"] == 4
        assert summary["unranked"] == 1
        assert summary["rank_levels"] == 2
        assert summary["top_nodes"][0]["id"] == "productpage"
        assert summary["top_nodes"][0]["rank"] == 1

    def test_empty(self):
        summary = summarize(None)
        assert summary["total"] == 0
        assert summary["top_nodes"] == []


class TestJSONOutput:
    """Tests for JSON output formatter."""

    def test_generate_structure(self):
        """Test the report has metadata, summary and elements."""
        data = JSONOutput().generate(_make_scored(), criteria=_CRITERIA)

        assert data["metadata"]["tool"] == "graphscore"
        assert data["metadata"]["version"] == __version__
        assert data["metadata"]["criteria"] == ["InboundEdges", "OutboundEdges"]
        assert data["metadata"]["node_count"] == 5
        assert data["metadata"]["edge_count"] == 3
        assert "summary" in data
        assert len(data["elements"]["nodes"]) == 5
        assert "score_breakdown" not in data

    def test_elements_carry_ranks(self):
        """Test scored elements carry score and rank, unscored ones neither."""
        data = JSONOutput().generate(_make_scored(), criteria=_CRITERIA)
        by_id = {n["data"]["id"]: n["data"] for n in data["elements"]["nodes"]}

        assert by_id["productpage"]["rank"] == 1
        assert by_id["productpage"]["app"] == "productpage"
        assert "score" not in by_id["orphan"]
        assert "rank" not in by_id["orphan"]

    def test_breakdown(self):
        """Test per-criterion scores are reported from the source graph."""
        source = _make_snapshot()
        data = JSONOutput().generate(
            score_nodes(source, *_CRITERIA),
            criteria=_CRITERIA,
            source=source,
            include_breakdown=True,
        )

        breakdown = data["score_breakdown"]
        assert breakdown["productpage"] == {"OutboundEdges": pytest.approx(2 / 3)}
        assert breakdown["orphan"] == {}

    def test_to_json_is_valid(self):
        content = JSONOutput().to_json(_make_scored(), criteria=_CRITERIA)
        parsed = json.loads(content)
        assert parsed["summary"]["ranked"] == 4

    def test_save(self, tmp_path):
        out = tmp_path / "report.json"
        JSONOutput().save(_make_scored(), out, criteria=_CRITERIA)
        assert json.loads(out.read_text(encoding="utf-8"))["metadata"]["node_count"] == 5

    def test_export_json(self, tmp_path):
        assert export_json(_make_scored()) is not None
        out = tmp_path / "export.json"
        assert export_json(_make_scored(), out) is None
        assert out.exists()


class TestTerminalOutput:
    """Tests for rich terminal output."""

    def test_print_header(self):
        console = _recording_console()
        TerminalOutput(console=console, criteria=_CRITERIA).print_header(_make_scored())
        text = console.export_text()

        assert "GRAPHSCORE" in text
        assert "InboundEdges, OutboundEdges" in text
        assert "5 nodes" in text
        assert "3 edges" in text

    def test_print_header_without_criteria(self):
        console = _recording_console()
        TerminalOutput(console=console).print_header(_make_snapshot())
        assert "scores cleared" in console.export_text()

    def test_print_ranking(self):
        console = _recording_console()
        TerminalOutput(console=console, criteria=_CRITERIA).print_ranking(_make_scored())
        text = console.export_text()

        assert "NODE RANKING" in text
        assert "productpage" in text
        assert "orphan" in text
        assert "n/a" in text
        # Best ranked node is listed before the unranked one
        assert text.index("productpage") < text.index("orphan")

    def test_print_ranking_top_n(self):
        console = _recording_console()
        TerminalOutput(console=console, criteria=_CRITERIA).print_ranking(
            _make_scored(), top_n=2
        )
        text = console.export_text()

        assert "top 2 of 5" in text
        assert "orphan" not in text

    def test_print_ranking_empty(self):
        console = _recording_console()
        TerminalOutput(console=console).print_ranking(GraphSnapshot())
        assert "No nodes to rank" in console.export_text()

    def test_print_summary(self):
        console = _recording_console()
        TerminalOutput(console=console, criteria=_CRITERIA).print_summary(_make_scored())
        text = console.export_text()

        assert "SUMMARY" in text
        assert "Top Node: productpage" in text
        assert f"graphscore v{__version__}" in text

    def test_print_summary_empty(self):
        console = _recording_console()
        TerminalOutput(console=console).print_summary(GraphSnapshot())
        assert console.export_text().strip() == ""

    def test_print_results(self, capsys):
        print_results(_make_scored(), criteria=_CRITERIA, no_color=True)
        out = capsys.readouterr().out
        assert "NODE RANKING" in out

"""Rich terminal output for scoring results.

Provides formatted, color-coded terminal output using the Rich library.
Theme: Catppuccin Mocha (https://catppuccin.com/palette/)
"""

from __future__ import annotations

from rich.align import Align
from rich.box import ROUNDED
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from .. import __version__
from ..engine.criteria import Criterion
from ..engine.ranker import RANK_RANGE_MAX
from ..graph import GraphSnapshot, Node
from .json_out import summarize

# Catppuccin Mocha palette (subset)
MOCHA = {
    "mauve": "#cba6f7",
    "red": "#f38ba8",
    "peach": "#fab387",
    "yellow": "#f9e2af",
    "green": "#a6e3a1",
    "sapphire": "#74c7ec",
    "blue": "#89b4fa",
    "lavender": "#b4befe",
    "text": "#cdd6f4",
    "subtext1": "#bac2de",
    "subtext0": "#a6adc8",
    "overlay1": "#7f849c",
    "overlay0": "#6c7086",
    "surface2": "#585b70",
    "surface1": "#45475a",
    "crust": "#11111b",
}

MOCHA_THEME = Theme({
    "info": MOCHA["sapphire"],
    "warning": MOCHA["peach"],
    "danger": MOCHA["red"],
    "success": MOCHA["green"],
})


# ── Badge / display helpers ──────────────────────────────────────────────


def _rank_color(rank: int) -> str:
    """Pick a color by position within the normalized rank range."""
    if rank <= RANK_RANGE_MAX * 0.1:
        return MOCHA["green"]
    elif rank <= RANK_RANGE_MAX * 0.4:
        return MOCHA["yellow"]
    elif rank <= RANK_RANGE_MAX * 0.7:
        return MOCHA["peach"]
    return MOCHA["red"]


def _rank_badge(rank: int | None) -> Text:
    """Render a rank as a compact colored pill: e.g. `` 1 ``."""
    badge = Text()
    if rank is None:
        badge.append(" - ", style=MOCHA["overlay1"])
        return badge

    badge.append(f" {rank} ", style=f"bold {MOCHA['crust']} on {_rank_color(rank)}")
    return badge


def _score_bar(score: float | None, scale: float = 1.0, width: int = 20) -> Text:
    """Build a colored bar for a combined score.

    ``scale`` is the largest possible score, 1.0 per criterion.
    Returns a Rich Text object like: ████████████░░░░░░░░ 0.667
    """
    bar = Text()
    if score is None:
        bar.append("░" * width, style=MOCHA["surface2"])
        bar.append("  n/a", style=MOCHA["overlay1"])
        return bar

    filled = min(width, int(round(score / scale * width)))
    empty = width - filled

    bar.append("█" * filled, style=MOCHA["sapphire"])
    bar.append("░" * empty, style=MOCHA["surface2"])
    bar.append(f" {score:.3f}", style=f"bold {MOCHA['sapphire']}")
    return bar


# ── Main output class ────────────────────────────────────────────────────


class TerminalOutput:
    """Rich terminal output formatter."""

    def __init__(
        self,
        console: Console | None = None,
        no_color: bool = False,
        criteria: tuple[Criterion, ...] | list[Criterion] = (),
    ):
        """Initialize terminal output.

        Args:
            console: Optional Rich console instance
            no_color: If True, disable colored output
            criteria: Criteria the snapshot was scored by
        """
        if console:
            self.console = console
        elif no_color:
            self.console = Console(no_color=True, highlight=False)
        else:
            self.console = Console(theme=MOCHA_THEME)

        self.criteria = tuple(criteria)

    # ── Public API ────────────────────────────────────────────────────

    def print_header(self, snapshot: GraphSnapshot) -> None:
        """Print the banner and the criteria line."""
        self.console.print()
        self.console.print(
            Panel(
                Align.center(
                    Text(
                        "GRAPHSCORE - Node Importance Ranking",
                        style=f"bold {MOCHA['mauve']}",
                    )
                ),
                box=ROUNDED,
                border_style=MOCHA["mauve"],
                padding=(0, 1),
            )
        )

        criteria_text = Text()
        criteria_text.append("Criteria: ", style=MOCHA["subtext0"])
        if self.criteria:
            criteria_text.append(
                ", ".join(c.value for c in self.criteria),
                style=f"bold {MOCHA['lavender']}",
            )
        else:
            criteria_text.append("none (scores cleared)", style=MOCHA["overlay1"])

        criteria_text.append("  ")
        criteria_text.append(f"{snapshot.node_count} nodes", style=MOCHA["text"])
        criteria_text.append(" | ", style=MOCHA["surface2"])
        criteria_text.append(f"{snapshot.edge_count} edges", style=MOCHA["text"])

        self.console.print(criteria_text)
        self.console.print()

    def print_ranking(
        self,
        snapshot: GraphSnapshot,
        top_n: int | None = None,
    ) -> None:
        """Print nodes in rank order as a table.

        Args:
            snapshot: Scored snapshot
            top_n: Only show the first N nodes
        """
        nodes = _ranked_order(snapshot.nodes or [])
        if not nodes:
            self.console.print(
                f"[{MOCHA['yellow']}]No nodes to rank[/{MOCHA['yellow']}]"
            )
            return

        shown = nodes[:top_n] if top_n else nodes

        table = Table(
            box=ROUNDED,
            border_style=MOCHA["surface2"],
            header_style=f"bold {MOCHA['sapphire']}",
        )
        table.add_column("Rank", justify="center")
        table.add_column("Node", style=f"bold {MOCHA['text']}")
        table.add_column("Score")

        scale = float(max(1, len(self.criteria)))
        for node in shown:
            table.add_row(_rank_badge(node.rank), node.id, _score_bar(node.score, scale))

        title = "NODE RANKING"
        if len(shown) < len(nodes):
            title += f" (top {len(shown)} of {len(nodes)})"

        self.console.print(
            Panel(
                table,
                title=f"[bold {MOCHA['blue']}]{title}[/bold {MOCHA['blue']}]",
                title_align="left",
                box=ROUNDED,
                border_style=MOCHA["blue"],
                padding=(0, 1),
            )
        )

    def print_summary(self, snapshot: GraphSnapshot) -> None:
        """Print summary statistics and footer."""
        summary = summarize(snapshot.nodes)
        if not summary["total"]:
            return

        stats = Table(show_header=False, box=None, padding=(0, 2), show_edge=False)
        stats.add_column("Key", style=MOCHA["subtext0"], min_width=12)
        stats.add_column("Value", style=f"bold {MOCHA['text']}")
        stats.add_row("Scored:", str(summary["scored"]))
        stats.add_row("Ranked:", str(summary["ranked"]))
        stats.add_row("Unranked:", str(summary["unranked"]))
        stats.add_row("Rank levels:", str(summary["rank_levels"]))

        parts: list[RenderableType] = [stats]

        top = summary["top_nodes"]
        if top:
            top_text = Text()
            top_text.append("Top Node: ", style=f"bold {MOCHA['green']}")
            top_text.append(top[0]["id"], style=f"bold {MOCHA['text']}")
            top_text.append("  ")
            top_text.append_text(_rank_badge(top[0]["rank"]))
            parts.append(Text(""))
            parts.append(top_text)

        self.console.print()
        self.console.print(
            Panel(
                Group(*parts),
                title=f"[bold {MOCHA['lavender']}]SUMMARY[/bold {MOCHA['lavender']}]",
                title_align="left",
                box=ROUNDED,
                border_style=MOCHA["lavender"],
                padding=(0, 1),
            )
        )

        self.console.print()
        footer = f"graphscore v{__version__} | {summary['total']} nodes"
        self.console.print(Rule(style=MOCHA["surface2"]))
        self.console.print(Align.center(Text(footer, style=MOCHA["overlay1"])))
        self.console.print()


def _ranked_order(nodes: list[Node]) -> list[Node]:
    # Node order is not guaranteed by the scorer
    return sorted(nodes, key=lambda n: (n.rank is None, n.rank or 0))


def print_results(
    snapshot: GraphSnapshot,
    criteria: tuple[Criterion, ...] | list[Criterion] = (),
    top_n: int | None = None,
    no_color: bool = False,
) -> None:
    """Convenience function to print scoring results.

    Args:
        snapshot: Scored snapshot
        criteria: Criteria the snapshot was scored by
        top_n: Only show the first N nodes
        no_color: Disable colored output
    """
    output = TerminalOutput(no_color=no_color, criteria=criteria)
    output.print_header(snapshot)
    output.print_ranking(snapshot, top_n=top_n)
    output.print_summary(snapshot)

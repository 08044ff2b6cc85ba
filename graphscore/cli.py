"""graphscore CLI - Node Importance Ranking.

Command-line interface for scoring graph elements exported by the rendering
layer.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from . import __version__
from .engine.criteria import Criterion, criterion_from_name
from .engine.scorer import CRITERIA_PROFILES, CriteriaProfile, Scorer
from .graph import GraphSnapshot

# Valid criterion names for --criteria flag help text
_CRITERION_NAMES = ", ".join(c.value for c in Criterion)


def read_content(input_arg: str | None) -> str:
    """Read input content from a file path, '-' for stdin, or piped stdin.

    Args:
        input_arg: File path string, '-' for explicit stdin, or None to check
                   for piped stdin automatically.

    Returns:
        File content as a string.
    """
    if input_arg == '-' or (input_arg is None and not sys.stdin.isatty()):
        return sys.stdin.read()

    if input_arg is None:
        raise ValueError("input_arg must be a file path or '-' for stdin")

    path = Path(input_arg)

    # Guard against excessively large files
    max_size = 100 * 1024 * 1024  # 100 MB
    file_size = path.stat().st_size
    if file_size > max_size:
        raise ValueError(f"Input file exceeds {max_size // (1024 * 1024)}MB limit ({file_size // (1024 * 1024)}MB)")

    return path.read_text(encoding='utf-8')


def load_snapshot(input_arg: str | None) -> GraphSnapshot:
    """Read graph elements JSON and build a snapshot.

    Accepts either the elements object itself or a wrapper with an
    ``elements`` key, as produced by the JSON report.

    Raises:
        ValueError: If the content is not valid graph elements JSON
    """
    content = read_content(input_arg)
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Input is not valid JSON: {e}") from e

    if isinstance(data, dict) and isinstance(data.get("elements"), dict):
        data = data["elements"]

    return GraphSnapshot.from_elements(data)


def parse_criteria(criteria_str: str) -> list[Criterion]:
    """Parse a comma-separated list of criterion names into Criterion values.

    Args:
        criteria_str: Comma-separated names (e.g. 'InboundEdges,outbound')

    Returns:
        List of Criterion enum values, in the given order

    Raises:
        argparse.ArgumentTypeError: If any criterion name is invalid
    """
    result = []
    for name in criteria_str.split(','):
        if not name.strip():
            continue
        try:
            result.append(criterion_from_name(name))
        except ValueError:
            raise argparse.ArgumentTypeError(
                f"Invalid criterion '{name.strip()}'. Valid criteria: {_CRITERION_NAMES}"
            ) from None
    return result


def main(args: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog='graphscore',
        description='Node Importance Ranking - Score and rank graph nodes by edge structure',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  graphscore graph.json
  graphscore -                                     # read from stdin
  cat graph.json | graphscore                      # pipe input
  graphscore graph.json --profile inbound
  graphscore graph.json --criteria InboundEdges,OutboundEdges --format json
  graphscore graph.json --format json --breakdown --output scored.json
        """
    )

    parser.add_argument(
        'input',
        nargs='?',
        help='Graph elements JSON file, or "-" to read from stdin (omit when piping)'
    )

    parser.add_argument(
        '-c', '--criteria',
        metavar='CRIT[,CRIT...]',
        help=(
            f'Criteria to score by, in order (comma-separated; overrides --profile). '
            f'Valid values: {_CRITERION_NAMES}'
        )
    )

    parser.add_argument(
        '-p', '--profile',
        choices=[p.value for p in CriteriaProfile],
        default=CriteriaProfile.BOTH.value,
        help='Criteria profile (default: both)'
    )

    parser.add_argument(
        '-f', '--format',
        choices=['terminal', 'json'],
        default='terminal',
        help='Output format (default: terminal)'
    )

    parser.add_argument(
        '-o', '--output',
        type=Path,
        help='Output file (json format only; default: stdout)'
    )

    parser.add_argument(
        '--top',
        metavar='N',
        type=int,
        help='Only show the N best ranked nodes (terminal only)'
    )

    parser.add_argument(
        '--breakdown',
        action='store_true',
        help='Include per-criterion raw scores (json only)'
    )

    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Disable colored output (terminal only)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parsed_args = parser.parse_args(args)

    input_arg = parsed_args.input

    # Support piped stdin when no input argument is given
    if input_arg is None and not sys.stdin.isatty():
        input_arg = '-'

    if input_arg is None:
        parser.error('the following arguments are required: input (or pipe data via stdin)')

    # Validate file path when not reading from stdin
    if input_arg != '-':
        input_path = Path(input_arg)
        if not input_path.exists():
            print(f"Error: Input file not found: {input_arg}", file=sys.stderr)
            return 1
        if not input_path.is_file():
            print(f"Error: Input is not a file: {input_arg}", file=sys.stderr)
            return 1

    if parsed_args.criteria is not None:
        try:
            criteria = parse_criteria(parsed_args.criteria)
        except argparse.ArgumentTypeError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    else:
        criteria = list(CRITERIA_PROFILES[CriteriaProfile(parsed_args.profile)])

    try:
        if parsed_args.verbose:
            source = 'stdin' if input_arg == '-' else input_arg
            print(f"Reading graph: {source}", file=sys.stderr)

        snapshot = load_snapshot(input_arg)

        if parsed_args.verbose:
            print(
                f"Loaded {snapshot.node_count} nodes and {snapshot.edge_count} edges",
                file=sys.stderr
            )
            names = ", ".join(c.value for c in criteria) or "none"
            print(f"Scoring by: {names}", file=sys.stderr)

        scorer = Scorer()
        scored = scorer.score(snapshot, *criteria)

        if parsed_args.verbose:
            ranked = sum(1 for n in scored.nodes or [] if n.rank is not None)
            print(f"Ranked {ranked} nodes", file=sys.stderr)

        if parsed_args.format == 'terminal':
            from .output.terminal import TerminalOutput

            output = TerminalOutput(no_color=parsed_args.no_color, criteria=criteria)
            output.print_header(scored)
            output.print_ranking(scored, top_n=parsed_args.top)
            output.print_summary(scored)

        elif parsed_args.format == 'json':
            from .output.json_out import JSONOutput

            json_output = JSONOutput(scorer=scorer)
            content = json_output.to_json(
                scored,
                criteria=criteria,
                source=snapshot,
                include_breakdown=parsed_args.breakdown
            )

            if parsed_args.output:
                parsed_args.output.write_text(content, encoding='utf-8')
                print(f"Report saved to: {parsed_args.output}", file=sys.stderr)
            else:
                print(content)

        return 0

    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except (MemoryError, RecursionError):
        raise
    except Exception as e:
        print(f"Error ({type(e).__name__}): {e}", file=sys.stderr)
        if parsed_args.verbose:
            import traceback
            traceback.print_exc()
        else:
            print("Use --verbose for full traceback", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())

"""
Neuro Norms - Command Line Interface
Score a single test result or inspect the norm tables from the shell.
"""

import argparse
import sys
import logging

from neuronorms.engine import create_engine
from neuronorms.exceptions import NormsError
from neuronorms.norms.loader import available_tests

logger = logging.getLogger(__name__)


def cmd_score(args) -> None:
    engine = create_engine(args.test, args.config_dir)
    result = engine.standardize(args.age, args.raw)

    print("\n" + "=" * 60)
    print(f"{engine.name} - age {result.age:g}, raw score {result.raw_score:g}")
    print("=" * 60)
    print(f"  Normative mean:  {result.predicted_mean:.2f}")
    print(f"  Normative SD:    {result.predicted_sd:.2f}")
    print(f"  z-score:         {result.z_score:.2f}")
    print(f"  T-score:         {result.t_score:.0f}")
    print(f"  Percentile:      {result.percentile:.1f}")
    print("=" * 60)


def cmd_table(args) -> None:
    engine = create_engine(args.test, args.config_dir)
    lo, hi = engine.age_range

    display_df = engine.norm_table.to_frame()
    display_df.columns = ['Age Min', 'Age Max', 'Mean', 'SD']

    print("\n" + "=" * 60)
    print(f"{engine.name} - norms for ages {lo}-{hi}")
    print("=" * 60)
    print(display_df.to_string(index=False, float_format=lambda v: f"{v:.2f}"))


def cmd_list(args) -> None:
    for name in available_tests(args.config_dir):
        print(name)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="neuronorms",
        description="Age-normed z, T and percentile scores for neuropsychological tests",
    )
    parser.add_argument("--config-dir", default=None, help="Directory of test norm YAML files")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # score
    score_parser = subparsers.add_parser("score", help="Standardize one raw score")
    score_parser.add_argument("test", help="Test name, e.g. tmt_b")
    score_parser.add_argument("--age", type=float, required=True, help="Age in years")
    score_parser.add_argument("--raw", type=float, required=True, help="Raw score")

    # table
    table_parser = subparsers.add_parser("table", help="Show the merged norm table")
    table_parser.add_argument("test", help="Test name, e.g. tmt_b")

    # list
    subparsers.add_parser("list", help="List available tests")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "score": cmd_score,
        "table": cmd_table,
        "list": cmd_list,
    }

    try:
        commands[args.command](args)
    except NormsError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

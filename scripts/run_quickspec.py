#!/usr/bin/env python3
"""Discover equational laws of a bundled example signature.

Prints the signature, any missing-instance warnings and then every law in
discovery order. Round statistics go to the transcript file.

Usage:
    python scripts/run_quickspec.py lists [--seed N] [--max-size K] [--tests T]
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Load environment variables (QUICKCHECK_SEED)
load_dotenv()

from lawfinder.discovery import (
    ExploreConfig,
    quickspec,
    with_fixed_seed,
    with_max_term_size,
    with_max_tests,
    with_max_vars,
)
from lawfinder.discovery.examples import EXAMPLES
from lawfinder.verbose import VerboseLogger


def build_config(args: argparse.Namespace) -> ExploreConfig:
    setters = []
    if args.seed is not None:
        setters.append(with_fixed_seed(args.seed))
    if args.max_size is not None:
        setters.append(with_max_term_size(args.max_size))
    if args.tests is not None:
        setters.append(with_max_tests(args.tests))
    if args.max_vars is not None:
        setters.append(with_max_vars(args.max_vars))
    return ExploreConfig().with_options(*setters)


def main():
    parser = argparse.ArgumentParser(description="Discover laws of an example signature")
    parser.add_argument(
        "example",
        choices=sorted(EXAMPLES),
        help="Which bundled signature to explore",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Fixed random seed (default: QUICKCHECK_SEED or random)",
    )
    parser.add_argument(
        "--max-size", "-k",
        type=int,
        default=None,
        help="Largest term size to enumerate (default: 7)",
    )
    parser.add_argument(
        "--tests", "-t",
        type=int,
        default=None,
        help="Test cases per term (default: 1000)",
    )
    parser.add_argument(
        "--max-vars",
        type=int,
        default=None,
        help="Distinct variables per type (default: 3)",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default="results",
        help="Output directory for the transcript (default: results)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log round progress to stderr",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    transcript = output_dir / f"quickspec_{args.example}_{timestamp}.txt"

    signature = EXAMPLES[args.example](build_config(args))
    laws = quickspec(signature, reporter=VerboseLogger(log_file=transcript))
    print(f"\n{len(laws)} laws. Transcript: {transcript}")


if __name__ == "__main__":
    main()

import csv
import logging
import sys
from decimal import Decimal
from typing import Iterable, List, Optional, TextIO

from ledger import LedgerEngine
from models import AccountSummary

USAGE = "Usage: python main.py [--verbose] <input.csv>"
OUTPUT_HEADER = ["client", "available", "held", "total", "locked"]


def format_decimal(value: Decimal) -> str:
    """Format decimal with exactly 4 decimal places."""
    return f"{value:.4f}"


def write_summaries(summaries: Iterable[AccountSummary], out: TextIO) -> None:
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(OUTPUT_HEADER)
    for summary in sorted(summaries, key=lambda s: s.client_id):
        writer.writerow([
            summary.client_id,
            format_decimal(summary.available),
            format_decimal(summary.held),
            format_decimal(summary.total),
            str(summary.locked).lower(),
        ])


def main(argv: Optional[List[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)

    verbose = "--verbose" in args
    if verbose:
        args.remove("--verbose")

    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    if len(args) != 1:
        print(USAGE, file=sys.stderr)
        return 1

    filepath = args[0]
    engine = LedgerEngine()
    try:
        engine.process_file(filepath)
    except OSError as e:
        print(f"Cannot read {filepath}: {e}", file=sys.stderr)
        return 1

    write_summaries(engine.summaries(), sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())

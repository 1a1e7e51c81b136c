from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn

from .config import BuildConfig
from .errors import RenamerError, UsageError
from .locate import locate_identifier
from .query import USAGE, parse_query
from .report import report_references
from .session import check_with_save_analysis


log = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise UsageError(message=message, hint=f"usage: {USAGE}")


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stderr)
    logging.captureWarnings(True)


def main(argv: list[str] | None = None) -> int:
    ap = _ArgumentParser(
        prog="renamer",
        usage=USAGE,
        description="Print every reference to the identifier at path:line:column",
    )
    ap.add_argument("location", nargs="*", help="path:line:column, 1-based")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    try:
        args = ap.parse_args(argv)
        _setup_logging(args.verbose)

        query = parse_query(args.location)
        span = locate_identifier(query)
        log.debug("identifier at %s", span.format())

        store = check_with_save_analysis(BuildConfig.from_env())
        report_references(store, span)
    except UsageError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except RenamerError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

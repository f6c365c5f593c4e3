"""Command-line entry point: resolve doc comments of a declaration tree."""

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from apidoc.errors import ApiDocError
from apidoc.run_resolution import run_resolution

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the resolution process."""
    ap = argparse.ArgumentParser(
        description=(
            "Parse and cross-check the documentation comments of an analyzed "
            "package, resolving {@link} and {@inheritdoc} references."
        ),
    )
    ap.add_argument(
        "declarations",
        type=Path,
        help="YAML declaration tree produced by the language front end",
    )
    ap.add_argument(
        "--project-folder",
        type=Path,
        help="npm project holding package.json and node_modules "
        "(default: the declaration file's folder)",
    )
    ap.add_argument(
        "--config",
        help="Path to configuration file",
    )
    ap.add_argument(
        "--json",
        type=Path,
        help="Write the resolved documentation model and errors to this file",
    )
    ap.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log package loads and cache activity",
    )
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return run_resolution(args)
    except ApiDocError as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())

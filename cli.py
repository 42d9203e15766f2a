"""Command-line parsing helpers."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable

from core.mapping.fields import BUILTIN_CATEGORIES, canonical_categories


@dataclass
class RunOptions:
    """Parsed CLI options used by the run pipeline."""

    destination: Path
    title: str | None
    year: int | None
    skip: list[str] | None
    properties: list[str] | None
    overwrite: bool
    keep_xml: bool
    attach: bool
    config_path: Path | None
    verbose: bool

    def config_overrides(self) -> Dict[str, Any]:
        """Config sections set explicitly on the command line."""
        return {
            "metadata": {"skip": self.skip, "properties": self.properties},
            "output": {
                "overwrite": True if self.overwrite else None,
                "keep_xml": True if self.keep_xml else None,
                "attach": False if not self.attach else None,
            },
        }


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build a Matroska tag document from TMDb metadata and attach it with mkvpropedit.",
    )
    parser.add_argument(
        "destination",
        help="Matroska file to tag, or an .xml path to only write the tag document",
    )
    parser.add_argument("--title", help="Search TMDb for this title instead of parsing the file name")
    parser.add_argument("--year", type=int, help="Release year used to pick between search results")
    parser.add_argument(
        "--skip",
        action="append",
        help=f"Leave out a built-in field: {', '.join(BUILTIN_CATEGORIES)} (repeat or comma-separate)",
    )
    parser.add_argument(
        "--property",
        dest="properties",
        action="append",
        help="Add a TMDb detail field as an extra tag, e.g. budget,genres (repeat or comma-separate)",
    )
    parser.add_argument("--overwrite", action="store_true", help="Replace an existing tag document")
    parser.add_argument(
        "--keep-xml",
        action="store_true",
        help="Keep the intermediate tag document after attaching it",
    )
    parser.add_argument("--no-attach", action="store_true", help="Only write the tag document")
    parser.add_argument("--config", help="Path to a config.json file")
    parser.add_argument("--verbose", action="store_true", help="Show TMDb requests and tool commands")
    return parser


def _split_values(raw_values: Iterable[str] | None) -> list[str] | None:
    if raw_values is None:
        return None
    values: list[str] = []
    for item in raw_values:
        for raw in str(item).split(","):
            value = raw.strip()
            if value and value not in values:
                values.append(value)
    return values


def resolve_config_path(config: str | None) -> Path | None:
    """Resolve the config path from CLI arguments.

    Falls back to ``config.json`` in the working directory when present.
    """
    if config:
        return Path(config).expanduser().resolve()
    default_file = Path.cwd() / "config.json"
    if default_file.exists():
        return default_file.resolve()
    return None


def get_run_options(argv: list[str] | None = None) -> RunOptions:
    """Build a RunOptions instance from CLI arguments.

    Args:
        argv: Optional argument list.

    Returns:
        RunOptions with normalized paths and lists.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    skip = _split_values(args.skip)
    if skip is not None:
        try:
            skip = canonical_categories(skip)
        except ValueError as exc:
            parser.error(str(exc))
    if args.year is not None and not 1000 <= args.year <= 9999:
        parser.error(f"--year must be a 4-digit year, got {args.year}")

    return RunOptions(
        destination=Path(args.destination).expanduser().resolve(),
        title=args.title.strip() if args.title and args.title.strip() else None,
        year=args.year,
        skip=skip,
        properties=_split_values(args.properties),
        overwrite=bool(args.overwrite),
        keep_xml=bool(args.keep_xml),
        attach=not args.no_attach,
        config_path=resolve_config_path(args.config),
        verbose=bool(args.verbose),
    )

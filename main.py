#!/usr/bin/env python3
"""CLI entrypoint for the TMDb Matroska tag builder."""

from __future__ import annotations

from cli import get_run_options
from config import load_config
from core.run import run
from logger import get_logger

log = get_logger()


def main(argv: list[str] | None = None) -> int:
    """Run the CLI entrypoint.

    Returns:
        Process exit code.
    """
    options = get_run_options(argv)
    if options.verbose:
        log.set_level("DEBUG")

    if options.config_path:
        if not options.config_path.exists():
            log.error(f"Config path not found: {options.config_path}")
            return 2
        if options.config_path.is_dir():
            log.error(f"Config path must be a file: {options.config_path}")
            return 2

    try:
        cfg = load_config(options.config_path, options.config_overrides())
    except (OSError, ValueError) as exc:
        log.error(f"Could not load config: {exc}")
        return 2

    log.info("\nTMDb Matroska Tagger\n")
    try:
        return run(options, cfg)
    except KeyboardInterrupt:
        log.error("\nInterrupted.")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())

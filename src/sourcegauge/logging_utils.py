from __future__ import annotations

import logging
import sys


def configure_logging(*, verbose: bool, quiet: bool) -> None:
    """
    Route SourceGauge's log records to stderr for a CLI run.

    Per-file warnings (unreadable files, rejected sources) show at the default
    INFO level; `--quiet` keeps only those warnings and `--verbose` adds the
    per-batch debug counts with logger names. The CLI rejects both flags
    together before calling this.
    """

    if verbose:
        level = logging.DEBUG
        fmt = "SourceGauge [%(levelname)s] %(name)s: %(message)s"
    else:
        level = logging.WARNING if quiet else logging.INFO
        fmt = "SourceGauge: %(message)s"

    logging.basicConfig(level=level, format=fmt, stream=sys.stderr, force=True)

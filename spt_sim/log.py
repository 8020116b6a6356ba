"""
Logging setup for spt_sim.

The library only creates namespaced loggers; handlers are installed by the
command line (or an embedding application) through ``setup_logging``.
"""

from __future__ import annotations

import logging
import sys

_CONFIGURED = False
_NAMESPACE = "spt_sim"


def setup_logging(level: str = "WARNING", verbose: bool = False) -> None:
    """
    Configure console logging once per process.

    :param level: Level name, case-insensitive ("DEBUG", "INFO", ...).
    :param verbose: Include logger name and line number in each record.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    if verbose:
        fmt = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
    else:
        fmt = "%(asctime)s | %(levelname)-8s | %(message)s"

    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        msg = f"unknown log level {level!r}"
        raise ValueError(msg)

    logging.basicConfig(
        level=numeric,
        format=fmt,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``spt_sim`` namespace."""
    if name == _NAMESPACE or name.startswith(_NAMESPACE + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_NAMESPACE}.{name}")

"""
Opt-in logging for shelfkit.

Batch operations (restores, captures, imports) take ``logger=None, log=False``
and resolve them here:

    from shelfkit._logging import resolve_logger

    def restore_files(..., logger=None, log: bool = False):
        log = resolve_logger(logger=logger, enabled=log, name=__name__)
        log.debug("restoring %d file(s)", len(paths))

Nothing is emitted unless the caller passes a logger or sets ``log=True``.
"""
from __future__ import annotations

import logging


class NoopLogger:
    def debug(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        pass

    info = warning = error = exception = critical = debug


def resolve_logger(
    logger: logging.Logger | None = None,
    *,
    enabled: bool = False,
    name: str | None = None,
    level: int = logging.INFO,
) -> logging.Logger | NoopLogger:
    """
    Pick the logger a batch operation should write to.

    - A caller-supplied ``logger`` always wins.
    - ``enabled=True`` returns the named logger (default ``"shelfkit"``) at ``level``.
    - Otherwise a NoopLogger swallows every call.
    """
    if logger is not None:
        return logger
    if enabled:
        lg = logging.getLogger(name or "shelfkit")
        lg.setLevel(level)
        # Bubble to the root so pytest's caplog sees the records.
        lg.propagate = True
        return lg
    return NoopLogger()

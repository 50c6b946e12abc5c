# shelfkit/report.py
from typing import Tuple

from .restore.core import RestoreSummary


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def format_summary(summary: RestoreSummary) -> Tuple[str, str]:
    """
    Turn a RestoreSummary into ``(level, message)`` for display.

    level is "error" when anything failed, "info" when something was applied,
    otherwise "warning".
    """
    parts = []
    if summary.restored:
        parts.append(f"{summary.restored} applied")
    if summary.identical:
        parts.append(f"{summary.identical} already up-to-date")
    # Force-overridden files never reach the policy, so no diff was shown for them.
    reviewed = summary.conflicts - summary.forced
    if reviewed:
        parts.append(_plural(reviewed, "diff opened", "diffs opened"))
    if summary.conflict_marked:
        parts.append(_plural(summary.conflict_marked, "conflict marked", "conflicts marked"))
    if summary.skipped:
        parts.append(f"{summary.skipped} skipped")
    if summary.errors:
        parts.append(_plural(summary.errors, "error", "errors"))

    if parts:
        message = "Unshelve result: " + ", ".join(parts)
    else:
        message = "Unshelve result: No files were processed."

    if summary.errors:
        level = "error"
    elif summary.restored:
        level = "info"
    else:
        level = "warning"
    return level, message

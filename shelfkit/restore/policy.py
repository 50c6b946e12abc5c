# shelfkit/restore/policy.py
"""
How a conflicting file gets resolved.

The orchestrator never talks to a user directly; it hands each conflict to a
policy object and acts on the returned ``Resolution``. Policies may block
(e.g. while a diff view is open). Returning ``None`` or raising
``ResolutionCancelled`` means the user dismissed the question, which keeps the
current file.
"""
from __future__ import annotations

import difflib
import enum
from typing import Callable, Optional, Protocol, Union

__all__ = [
    "Resolution",
    "ResolutionCancelled",
    "ConflictPolicy",
    "StaticPolicy",
    "CallbackPolicy",
    "PromptPolicy",
    "coerce_resolution",
]


class Resolution(str, enum.Enum):
    APPLY = "apply"  # overwrite with the shelved version
    KEEP = "keep"  # leave the workspace file alone
    MARK = "mark"  # write inline conflict markers


class ResolutionCancelled(Exception):
    """The user dismissed the conflict prompt without choosing."""


class ConflictPolicy(Protocol):
    def resolve(
        self,
        entry_label: str,
        relative_path: str,
        current_file_path: str,
        shelf_file_path: str,
    ) -> Optional[Union[Resolution, str]]:
        ...


_ALIASES = {
    "apply": Resolution.APPLY,
    "keep": Resolution.KEEP,
    "skip": Resolution.KEEP,
    "mark": Resolution.MARK,
}


def coerce_resolution(choice: Optional[Union[Resolution, str]]) -> Resolution:
    """Map a policy's answer onto a Resolution; anything unrecognised keeps the file."""
    if isinstance(choice, Resolution):
        return choice
    if isinstance(choice, str):
        return _ALIASES.get(choice.strip().lower(), Resolution.KEEP)
    return Resolution.KEEP


class StaticPolicy:
    """Answers every conflict the same way. Handy for scripts and tests."""

    def __init__(self, choice: Union[Resolution, str]):
        self.choice = coerce_resolution(choice)
        self.calls: list[tuple[str, str, str, str]] = []

    def resolve(self, entry_label, relative_path, current_file_path, shelf_file_path):
        self.calls.append((entry_label, relative_path, current_file_path, shelf_file_path))
        return self.choice


class CallbackPolicy:
    """Adapts a plain function with the ``resolve`` signature."""

    def __init__(self, callback: Callable[[str, str, str, str], Optional[Union[Resolution, str]]]):
        self.callback = callback

    def resolve(self, entry_label, relative_path, current_file_path, shelf_file_path):
        return self.callback(entry_label, relative_path, current_file_path, shelf_file_path)


class PromptPolicy:
    """
    Terminal-style resolution.

    ``show`` receives a unified diff of current vs shelf (skipped when None);
    ``ask`` receives the question and returns the raw answer. EOF counts as a
    dismissal.
    """

    choices = {
        "a": Resolution.APPLY,
        "apply": Resolution.APPLY,
        "k": Resolution.KEEP,
        "keep": Resolution.KEEP,
        "m": Resolution.MARK,
        "mark": Resolution.MARK,
    }

    def __init__(
        self,
        ask: Callable[[str], str] = input,
        show: Optional[Callable[[str], None]] = None,
        encoding: str = "utf-8",
    ):
        self.ask = ask
        self.show = show
        self.encoding = encoding

    def render_diff(self, entry_label: str, relative_path: str, current_file_path: str, shelf_file_path: str) -> str:
        with open(current_file_path, encoding=self.encoding, errors="replace") as f:
            current = f.read().splitlines(keepends=True)
        with open(shelf_file_path, encoding=self.encoding, errors="replace") as f:
            shelved = f.read().splitlines(keepends=True)
        return "".join(
            difflib.unified_diff(
                current,
                shelved,
                fromfile=f"{relative_path} (Current)",
                tofile=f"{relative_path} (Shelf: {entry_label})",
            )
        )

    def resolve(self, entry_label, relative_path, current_file_path, shelf_file_path):
        if self.show is not None:
            self.show(self.render_diff(entry_label, relative_path, current_file_path, shelf_file_path))
        question = (
            f'File "{relative_path}" already contains changes. '
            "[a]pply shelf version, [k]eep current, [m]ark as conflict? "
        )
        try:
            answer = self.ask(question)
        except EOFError:
            raise ResolutionCancelled(relative_path) from None
        choice = self.choices.get((answer or "").strip().lower())
        if choice is None:
            raise ResolutionCancelled(relative_path)
        return choice

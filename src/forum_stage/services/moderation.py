"""Banned-term screening for user-supplied text."""

from __future__ import annotations

import re
from collections.abc import Iterable

from forum_stage.core.errors import PolicyError

__all__ = ["SlurFilter"]


class SlurFilter:
    """Case-insensitive substring match against a configured term list."""

    def __init__(self, terms: Iterable[str]) -> None:
        self.terms = [term for term in terms if term]
        # One pattern per term so terms inside a longer match are still found.
        self._patterns = [re.compile(re.escape(term), re.IGNORECASE) for term in self.terms]

    def check(self, text: str | None) -> list[str]:
        """Return every banned term found in ``text``, in order of first appearance.

        Matches are reported as they appear in ``text`` and de-duplicated
        case-insensitively. An empty list means the text is clean.
        """
        if not text:
            return []
        found: dict[str, re.Match[str]] = {}
        for pattern in self._patterns:
            match = pattern.search(text)
            if match is None:
                continue
            key = match.group(0).casefold()
            if key not in found or match.start() < found[key].start():
                found[key] = match
        ordered = sorted(found.values(), key=lambda match: (match.start(), -len(match.group(0))))
        return [match.group(0) for match in ordered]

    def ensure_clean(self, *texts: str | None) -> None:
        """Raise :class:`PolicyError` if any of ``texts`` contains a banned term.

        Fields are checked in order and the first offending one is reported
        with all of its matches.
        """
        for text in texts:
            matches = self.check(text)
            if matches:
                raise PolicyError(matches)

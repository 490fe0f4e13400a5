"""Issue tracker url builders driven by commit comments."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import List

from ..modification import Modification

logger = logging.getLogger(__name__)

_ISSUE_NUMBER = re.compile(r"\d+")


class IssueUrlBuilder(ABC):
    """Abstract base class for linking modifications to issues."""

    @abstractmethod
    def setup_modification(self, mods: List[Modification]) -> None:
        """Set ``issue_url`` on modifications whose comment references an issue."""
        pass


class DefaultIssueTrackerUrlBuilder(IssueUrlBuilder):
    """Uses the first number in the comment as the issue id (``{0}`` in url)."""

    def __init__(self, url: str) -> None:
        if not url:
            raise ValueError("url must be non-empty")
        try:
            url.format("1")
        except (IndexError, KeyError, ValueError, AttributeError) as e:
            raise ValueError(f"Invalid issue url template {url!r}: {e!r}")
        self._url = url

    def setup_modification(self, mods: List[Modification]) -> None:
        for mod in mods:
            match = _ISSUE_NUMBER.search(mod.comment or "")
            if match:
                mod.issue_url = self._url.format(match.group(0))


class RegexIssueTrackerUrlBuilder(IssueUrlBuilder):
    """Sets ``issue_url`` to ``replace`` expanded against the first ``find`` match in the comment.

    The comment itself is left untouched.
    """

    def __init__(self, find: str, replace: str) -> None:
        if not find:
            raise ValueError("find must be non-empty")
        try:
            self._find = re.compile(find)
        except re.error as e:
            raise ValueError(f"Invalid issue pattern {find!r}: {e}")
        self._replace = replace

    def setup_modification(self, mods: List[Modification]) -> None:
        linked = 0
        for mod in mods:
            comment = mod.comment or ""
            match = self._find.search(comment)
            if not match:
                continue
            try:
                mod.issue_url = match.expand(self._replace)
            except (re.error, IndexError) as e:
                logger.warning(f"Could not expand issue url {self._replace!r} for revision {mod.change_number}: {e}")
                continue
            linked += 1
        if mods and not linked:
            logger.warning(f"No issue references matched {self._find.pattern!r} in {len(mods)} modifications")

"""History parsers turning VCS log output into modifications."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List

from ..dates import parse_svn_date, to_utc
from ..errors import BadLogDataError
from ..modification import ChangeType, Modification

logger = logging.getLogger(__name__)


class HistoryParser(ABC):
    """Abstract base class for backend log parsers."""

    @abstractmethod
    def parse(self, text: str, from_time: datetime, to_time: datetime) -> List[Modification]:
        """
        Parse raw log output.

        Args:
            text: Standard output of the history command.
            from_time: Start of the polled window.
            to_time: End of the polled window.

        Returns:
            Modifications inside the window, in log order.

        Raises:
            BadLogDataError: If the output is malformed.
        """
        pass


SVN_ACTIONS: Dict[str, ChangeType] = {
    "A": ChangeType.ADDED,
    "M": ChangeType.MODIFIED,
    "D": ChangeType.REMOVED,
    "R": ChangeType.REPLACED,
}


class SvnHistoryParser(HistoryParser):
    """Parser for ``svn log --xml --verbose`` output."""

    def parse(self, text: str, from_time: datetime, to_time: datetime) -> List[Modification]:
        if not text or not text.strip():
            return []
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise BadLogDataError(str(e), text) from e

        window_start = to_utc(from_time)
        window_end = to_utc(to_time)
        mods: List[Modification] = []
        for entry in root.iter("logentry"):
            revision = self._parse_revision(entry, text)
            modified_time = self._parse_date(entry, text)
            # svn reports the revision in effect at the start date as well
            if modified_time < window_start or modified_time > window_end:
                continue
            mods.extend(self._entry_modifications(entry, revision, modified_time))
        return mods

    def _entry_modifications(self, entry: ET.Element, revision: int, modified_time: datetime) -> List[Modification]:
        author = (entry.findtext("author") or "").strip()
        comment = entry.findtext("msg") or ""
        paths = entry.findall("paths/path")
        if not paths:
            return [Modification(revision, author, modified_time, comment=comment)]

        mods = []
        for path in paths:
            action = (path.get("action") or "").upper()
            mods.append(
                Modification.from_path(
                    (path.text or "").strip(),
                    change_number=revision,
                    user_name=author,
                    modified_time=modified_time,
                    comment=comment,
                    type=SVN_ACTIONS.get(action, ChangeType.UNKNOWN),
                )
            )
        return mods

    @staticmethod
    def _parse_revision(entry: ET.Element, text: str) -> int:
        raw = entry.get("revision")
        try:
            revision = int(raw)
        except (TypeError, ValueError):
            raise BadLogDataError(f"Invalid revision attribute: {raw!r}", text)
        if revision < 0:
            raise BadLogDataError(f"Invalid revision attribute: {raw!r}", text)
        return revision

    @staticmethod
    def _parse_date(entry: ET.Element, text: str) -> datetime:
        raw = entry.findtext("date")
        if not raw:
            raise BadLogDataError(f"Missing date for revision {entry.get('revision')}", text)
        try:
            return parse_svn_date(raw)
        except ValueError as e:
            raise BadLogDataError(str(e), text) from e

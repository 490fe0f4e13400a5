"""Command-line assembly for external VCS tools."""

from __future__ import annotations

import shlex
from typing import Any, List, Optional

_UNSET: Any = object()


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def _quote(value: str) -> str:
    if any(ch.isspace() for ch in value) and not (value.startswith('"') and value.endswith('"')):
        return '"' + value.replace('"', '\\"') + '"'
    return value


class ProcessArgumentBuilder:
    """Build an argument string and the matching argv list.

    Tokens added through ``add_argument`` are kept verbatim in argv, so paths
    with backslashes survive; literal tokens from ``append_argument`` are split
    with posix shell rules.
    """

    def __init__(self) -> None:
        self._parts: List[str] = []
        self._argv: List[str] = []

    def add_argument(self, arg: Optional[str], value: Optional[str] = _UNSET) -> None:
        """Append a positional ``arg``, or ``arg value`` when a value is given.

        A blank positional is skipped; a blank value drops the flag as well.
        """
        if value is _UNSET:
            if _is_blank(arg):
                return
            self._parts.append(_quote(str(arg)))
            self._argv.append(str(arg))
            return
        if _is_blank(value):
            return
        self._parts.append(f"{arg} {_quote(str(value))}")
        self._argv.extend([str(arg), str(value)])

    def append_argument(self, literal: str) -> None:
        """Append a pre-formatted token unmodified."""
        if _is_blank(literal):
            return
        self._parts.append(literal)
        self._argv.extend(shlex.split(literal))

    def append_if(self, condition: bool, fmt: str, *values: Any) -> None:
        if condition:
            self.append_argument(fmt.format(*values))

    def to_argv(self) -> List[str]:
        return list(self._argv)

    def __str__(self) -> str:
        return " ".join(self._parts)

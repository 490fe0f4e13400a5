"""Web url builders that link modifications to a repository browser."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List
from urllib.parse import quote

from ..modification import Modification


class ModificationUrlBuilder(ABC):
    """Abstract base class for attaching web urls to modifications."""

    def __init__(self, url: str):
        if not url:
            raise ValueError("url must be non-empty")
        self._url = url

    @property
    def url(self) -> str:
        return self._url

    @abstractmethod
    def setup_modification(self, mods: List[Modification]) -> None:
        """
        Set ``url`` on each modification in place.

        Args:
            mods: Modifications produced by the current poll.
        """
        pass


class WebSvnUrlBuilder(ModificationUrlBuilder):
    """Formats ``{0}`` with the changed path and ``{1}`` with the revision."""

    def __init__(self, url: str):
        super().__init__(url)
        try:
            url.format("/trunk/file", 1)
        except (IndexError, KeyError, ValueError, AttributeError) as e:
            raise ValueError(f"Invalid url template {url!r}: {e!r}")

    def setup_modification(self, mods: List[Modification]) -> None:
        for mod in mods:
            mod.url = self._url.format(mod.path, mod.change_number)


class ViewCvsUrlBuilder(ModificationUrlBuilder):
    """Appends the changed path to the base url and pins the revision."""

    def setup_modification(self, mods: List[Modification]) -> None:
        base = self._url.rstrip("/")
        for mod in mods:
            path = quote(mod.path.lstrip("/"))
            mod.url = f"{base}/{path}?rev={mod.change_number}"

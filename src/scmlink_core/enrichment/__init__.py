from typing import Any, Dict, Optional

from .issues import DefaultIssueTrackerUrlBuilder, IssueUrlBuilder, RegexIssueTrackerUrlBuilder
from .urls import ModificationUrlBuilder, ViewCvsUrlBuilder, WebSvnUrlBuilder

from ..errors import ConfigurationError


def resolve_url_builder(config: Optional[Dict[str, Any]]) -> Optional[ModificationUrlBuilder]:
    """
    Resolve a web url builder from configuration.

    Config schema expectation:
    {
        "type": "websvn" | "viewcvs",
        "url": "https://svn.example.com/wsvn/{0}?rev={1}",
    }
    """
    if not config:
        return None
    builder_type = str(config.get("type", "websvn")).lower().strip()
    url = config.get("url") or ""
    try:
        if builder_type == "websvn":
            return WebSvnUrlBuilder(url)
        if builder_type == "viewcvs":
            return ViewCvsUrlBuilder(url)
    except ValueError as e:
        raise ConfigurationError(str(e), field="web_url_builder.url") from e
    raise ConfigurationError(f"Unknown web url builder: {builder_type}", field="web_url_builder.type")


def resolve_issue_url_builder(config: Optional[Dict[str, Any]]) -> Optional[IssueUrlBuilder]:
    """
    Resolve an issue tracker url builder from configuration.

    Config schema expectation:
    {
        "type": "default" | "regex",
        "url": "https://tracker/browse/{0}",        # default
        "find": "^.*(PRJ-\\d+).*$", "replace": "https://tracker/browse/\\1",  # regex
    }
    """
    if not config:
        return None
    builder_type = str(config.get("type", "default")).lower().strip()
    try:
        if builder_type == "default":
            return DefaultIssueTrackerUrlBuilder(config.get("url") or "")
        if builder_type == "regex":
            return RegexIssueTrackerUrlBuilder(config.get("find") or "", config.get("replace") or "")
    except ValueError as e:
        field = "issue_url_builder.url" if builder_type == "default" else "issue_url_builder.find"
        raise ConfigurationError(str(e), field=field) from e
    raise ConfigurationError(f"Unknown issue url builder: {builder_type}", field="issue_url_builder.type")


__all__ = [
    "DefaultIssueTrackerUrlBuilder",
    "IssueUrlBuilder",
    "ModificationUrlBuilder",
    "RegexIssueTrackerUrlBuilder",
    "ViewCvsUrlBuilder",
    "WebSvnUrlBuilder",
    "resolve_issue_url_builder",
    "resolve_url_builder",
]

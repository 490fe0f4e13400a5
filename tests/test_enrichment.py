from datetime import datetime, timezone

import pytest

from scmlink_core.enrichment import (
    DefaultIssueTrackerUrlBuilder,
    RegexIssueTrackerUrlBuilder,
    ViewCvsUrlBuilder,
    WebSvnUrlBuilder,
    resolve_issue_url_builder,
    resolve_url_builder,
)
from scmlink_core.errors import ConfigurationError
from scmlink_core.modification import Modification

WHEN = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _mods():
    return [
        Modification.from_path("/trunk/src/app.py", change_number=7, user_name="a", modified_time=WHEN, comment="PRJ-12 fix"),
        Modification.from_path("/trunk/my file.txt", change_number=8, user_name="b", modified_time=WHEN, comment="tidy"),
    ]


def test_websvn_builder_formats_path_and_revision():
    mods = _mods()
    WebSvnUrlBuilder("https://svn.example.com/wsvn{0}?rev={1}").setup_modification(mods)
    assert mods[0].url == "https://svn.example.com/wsvn/trunk/src/app.py?rev=7"


def test_viewcvs_builder_quotes_path():
    mods = _mods()
    ViewCvsUrlBuilder("https://viewcvs.example.com/repo/").setup_modification(mods)
    assert mods[1].url == "https://viewcvs.example.com/repo/trunk/my%20file.txt?rev=8"


def test_url_builder_requires_url():
    with pytest.raises(ValueError, match="url must be non-empty"):
        WebSvnUrlBuilder("")


def test_default_issue_builder_uses_first_number():
    mods = _mods()
    DefaultIssueTrackerUrlBuilder("https://jira/browse/PRJ-{0}").setup_modification(mods)
    assert mods[0].issue_url == "https://jira/browse/PRJ-12"
    assert mods[1].issue_url is None


def test_regex_issue_builder_expands_template():
    mods = _mods()
    RegexIssueTrackerUrlBuilder(r"(PRJ-\d+)", r"https://jira/browse/\1").setup_modification(mods)
    assert mods[0].issue_url == "https://jira/browse/PRJ-12"
    assert mods[0].comment == "PRJ-12 fix"
    assert mods[1].issue_url is None


def test_regex_issue_builder_no_match_is_not_an_error(caplog):
    mods = _mods()
    RegexIssueTrackerUrlBuilder(r"BUG-\d+", r"https://bugs/\g<0>").setup_modification(mods)
    assert all(m.issue_url is None for m in mods)
    assert "No issue references matched" in caplog.text


def test_regex_issue_builder_rejects_bad_pattern():
    with pytest.raises(ValueError, match="Invalid issue pattern"):
        RegexIssueTrackerUrlBuilder("(", "x")


def test_resolve_builders_from_config():
    assert resolve_url_builder(None) is None
    assert resolve_issue_url_builder({}) is None
    assert isinstance(resolve_url_builder({"type": "viewcvs", "url": "https://v"}), ViewCvsUrlBuilder)
    assert isinstance(resolve_issue_url_builder({"type": "regex", "find": "x", "replace": "y"}), RegexIssueTrackerUrlBuilder)


def test_resolve_unknown_builder_raises_configuration_error():
    with pytest.raises(ConfigurationError):
        resolve_url_builder({"type": "trac", "url": "https://t"})


@pytest.mark.parametrize("url", ["https://svn/wsvn{path}?rev={1}", "https://svn/wsvn{0}?rev={2}", "https://svn/{"])
def test_websvn_builder_rejects_unformattable_template(url):
    with pytest.raises(ValueError, match="Invalid url template"):
        WebSvnUrlBuilder(url)


def test_default_issue_builder_rejects_unformattable_template():
    with pytest.raises(ValueError, match="Invalid issue url template"):
        DefaultIssueTrackerUrlBuilder("https://jira/browse/{project}-{0}")


def test_regex_issue_builder_skips_bad_group_reference(caplog):
    mods = _mods()
    RegexIssueTrackerUrlBuilder(r"PRJ-(\d+)", r"https://jira/browse/\2").setup_modification(mods)
    assert all(m.issue_url is None for m in mods)
    assert "Could not expand issue url" in caplog.text


def test_resolve_bad_templates_raise_configuration_error():
    with pytest.raises(ConfigurationError) as excinfo:
        resolve_url_builder({"type": "websvn", "url": "https://svn/wsvn{path}"})
    assert excinfo.value.field == "web_url_builder.url"
    with pytest.raises(ConfigurationError) as excinfo:
        resolve_issue_url_builder({"type": "default", "url": "https://jira/browse/{project}-{0}"})
    assert excinfo.value.field == "issue_url_builder.url"

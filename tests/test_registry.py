import pytest

from scmlink_core.errors import ConfigurationError
from scmlink_core.enrichment import WebSvnUrlBuilder
from scmlink_core.vcs import NullSourceControl, SourceControlRegistry, Svn, create_source_control


def test_default_types_registered():
    registry = SourceControlRegistry()
    assert registry.list_types() == ["nullsourcecontrol", "svn"]


def test_create_svn_from_config_is_case_insensitive():
    provider = create_source_control(
        {
            "type": "SVN",
            "trunk_url": "https://repo/trunk",
            "web_url_builder": {"type": "websvn", "url": "https://web/{0}"},
        }
    )
    assert isinstance(provider, Svn)
    assert provider.config.executable == "svn"
    assert provider.config.auto_get_source is True
    assert isinstance(provider.url_builder, WebSvnUrlBuilder)
    assert provider.issue_url_builder is None


def test_unknown_type_lists_known_types():
    with pytest.raises(ConfigurationError, match="Known types: nullsourcecontrol, svn"):
        SourceControlRegistry().create({"type": "cvs"})


def test_missing_type():
    with pytest.raises(ConfigurationError) as excinfo:
        SourceControlRegistry().create({})
    assert excinfo.value.field == "source_control.type"


def test_invalid_svn_options_surface_as_configuration_error():
    with pytest.raises(ConfigurationError, match="tag_base_url is required"):
        create_source_control({"type": "svn", "tag_on_success": True})
    with pytest.raises(ConfigurationError, match="Invalid svn configuration"):
        create_source_control({"type": "svn", "trunkurl": "typo"})
    with pytest.raises(ConfigurationError, match="tag_message"):
        create_source_control({"type": "svn", "tag_message": "CI build {0}"})
    with pytest.raises(ConfigurationError) as excinfo:
        create_source_control({"type": "svn", "web_url_builder": {"url": "https://svn/wsvn{path}"}})
    assert excinfo.value.field == "web_url_builder.url"


def test_register_new_backend_without_touching_dispatch():
    registry = SourceControlRegistry()
    registry.register("Dummy", lambda config: NullSourceControl())
    assert isinstance(registry.create({"type": "dummy"}), NullSourceControl)


def test_register_rejects_blank_name():
    with pytest.raises(ValueError, match="non-empty"):
        SourceControlRegistry().register(" ", lambda config: NullSourceControl())

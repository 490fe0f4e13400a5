from pathlib import Path

import pytest

from scmlink_core.config import SvnConfig
from scmlink_core.errors import ConfigurationError
from scmlink_core.vcs import NullSourceControl, Svn
from scmlink_ops.config import load_project_config, validate_project_config


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_svn_config_defaults():
    config = SvnConfig()
    assert config.executable == "svn"
    assert config.auto_get_source is True
    assert config.tag_on_success is False
    assert config.trunk_url is None


def test_tagging_requires_base_url():
    with pytest.raises(ValueError, match="tag_base_url is required"):
        SvnConfig(tag_on_success=True)


def test_missing_env_secret_is_configuration_error(monkeypatch):
    monkeypatch.delenv("NOT_SET_PW", raising=False)
    with pytest.raises(ConfigurationError) as excinfo:
        SvnConfig(password="env:NOT_SET_PW").resolved_password()
    assert excinfo.value.field == "NOT_SET_PW"


def test_load_project_config_anchors_working_directory(tmp_path):
    path = _write(
        tmp_path / "proj" / "scmlink.toml",
        """
[project]
name = "p1"
working_directory = "work"

[source_control]
type = "svn"
trunk_url = "https://repo/trunk"
tag_on_success = true
tag_base_url = "https://repo/tags"

[source_control.issue_url_builder]
type = "default"
url = "https://issues/{0}"
""",
    )
    config = load_project_config(path)
    assert config.project.name == "p1"
    assert config.project.working_directory == str((tmp_path / "proj" / "work").resolve())
    provider = config.create_source_control()
    assert isinstance(provider, Svn)
    assert provider.tags_on_success


def test_source_control_defaults_to_null(tmp_path):
    path = _write(tmp_path / "scmlink.toml", '[project]\nname = "p"\n')
    assert isinstance(load_project_config(path).create_source_control(), NullSourceControl)


def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="Config file not found"):
        load_project_config(tmp_path / "nope.toml")


def test_load_invalid_toml(tmp_path):
    path = _write(tmp_path / "bad.toml", "[project\nname=")
    with pytest.raises(ConfigurationError, match="Invalid config TOML"):
        load_project_config(path)


def test_config_path_from_environment(tmp_path, monkeypatch):
    path = _write(tmp_path / "env.toml", '[project]\nname = "from-env"\n')
    monkeypatch.setenv("SCMLINK_CONFIG", str(path))
    assert load_project_config().project.name == "from-env"


def test_validate_project_config_reports_problems():
    assert validate_project_config({"project": {"name": "p"}}) == []
    errors = validate_project_config({"project": {}})
    assert errors == ["project.name: Field required"]
    errors = validate_project_config({"project": {"name": "p"}, "source_control": {"type": "git"}})
    assert len(errors) == 1 and "Unknown source control type" in errors[0]


@pytest.mark.parametrize("message", ["CI build {0}", "build {label} {branch}", "literal {"])
def test_tag_message_must_only_reference_label(message):
    with pytest.raises(ValueError, match="tag_message"):
        SvnConfig(tag_message=message)


def test_tag_message_with_escaped_braces_is_accepted():
    assert SvnConfig(tag_message="{{ci}} build {label}").tag_message == "{{ci}} build {label}"


def test_validate_project_config_reports_unset_password_variable(monkeypatch):
    monkeypatch.delenv("NOT_SET_PW", raising=False)
    data = {
        "project": {"name": "p"},
        "source_control": {"type": "svn", "trunk_url": "https://repo/trunk", "password": "env:NOT_SET_PW"},
    }
    errors = validate_project_config(data)
    assert len(errors) == 1 and "NOT_SET_PW" in errors[0]

    monkeypatch.setenv("NOT_SET_PW", "secret")
    assert validate_project_config(data) == []


def test_validate_project_config_reports_bad_url_template():
    data = {
        "project": {"name": "p"},
        "source_control": {
            "type": "svn",
            "issue_url_builder": {"type": "default", "url": "https://jira/browse/{project}-{0}"},
        },
    }
    errors = validate_project_config(data)
    assert len(errors) == 1 and "Invalid issue url template" in errors[0]

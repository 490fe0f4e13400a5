"""Typed provider configuration."""

from __future__ import annotations

import os
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import ConfigurationError
from .process import DEFAULT_TIMEOUT_SECONDS

DEFAULT_SVN_EXECUTABLE = "svn"


def resolve_secret(value: Optional[str]) -> Optional[str]:
    """Resolve ``env:NAME`` references against the environment."""
    if value is None or not value.startswith("env:"):
        return value
    name = value[len("env:"):].strip()
    resolved = os.getenv(name)
    if resolved is None:
        raise ConfigurationError(f"Environment variable {name} referenced by config is not set", field=name)
    return resolved


class UrlBuilderConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["websvn", "viewcvs"] = "websvn"
    url: str = Field(min_length=1)


class IssueUrlBuilderConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["default", "regex"] = "default"
    url: Optional[str] = None
    find: Optional[str] = None
    replace: Optional[str] = None

    @model_validator(mode="after")
    def _check_fields(self) -> "IssueUrlBuilderConfig":
        if self.type == "default" and not self.url:
            raise ValueError("issue_url_builder.url is required for the default builder")
        if self.type == "regex" and not (self.find and self.replace):
            raise ValueError("issue_url_builder.find and replace are required for the regex builder")
        return self


class SvnConfig(BaseModel):
    """Options recognized by the Subversion provider."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["svn"] = "svn"
    executable: str = DEFAULT_SVN_EXECUTABLE
    trunk_url: Optional[str] = None
    working_directory: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    tag_on_success: bool = False
    tag_message: str = "scmlink build {label}"
    tag_base_url: Optional[str] = None
    auto_get_source: bool = True
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    web_url_builder: Optional[UrlBuilderConfig] = None
    issue_url_builder: Optional[IssueUrlBuilderConfig] = None

    @model_validator(mode="after")
    def _check_tagging(self) -> "SvnConfig":
        if self.tag_on_success and not (self.tag_base_url or "").strip():
            raise ValueError("tag_base_url is required when tag_on_success is true")
        try:
            self.tag_message.format(label="build")
        except (IndexError, KeyError, ValueError, AttributeError) as e:
            raise ValueError(f"tag_message must only reference {{label}}: {e!r}")
        return self

    def resolved_password(self) -> Optional[str]:
        return resolve_secret(self.password)

    def builder_configs(self) -> tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        web = self.web_url_builder.model_dump() if self.web_url_builder else None
        issue = self.issue_url_builder.model_dump() if self.issue_url_builder else None
        return web, issue

"""Subversion provider."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..config import SvnConfig
from ..dates import format_command_date, parse_command_date
from ..enrichment import (
    IssueUrlBuilder,
    ModificationUrlBuilder,
    resolve_issue_url_builder,
    resolve_url_builder,
)
from ..errors import ConfigurationError
from ..filesystem import FileSystem, LocalFileSystem
from ..integration import IntegrationResult
from ..modification import Modification, last_change_number
from ..process import ProcessArgumentBuilder, ProcessExecutor, ProcessInfo
from .base import ProcessSourceControl
from .detector import MetadataDirectoryDetector, WorkingCopyDetector
from .history import HistoryParser, SvnHistoryParser

logger = logging.getLogger(__name__)

SVN_METADATA_DIRECTORIES = (".svn", "_svn")


class Svn(ProcessSourceControl):
    """Drive the ``svn`` client: poll history, checkout/update, tag on success."""

    def __init__(
        self,
        config: Optional[SvnConfig] = None,
        executor: Optional[ProcessExecutor] = None,
        history_parser: Optional[HistoryParser] = None,
        filesystem: Optional[FileSystem] = None,
        detector: Optional[WorkingCopyDetector] = None,
        url_builder: Optional[ModificationUrlBuilder] = None,
        issue_url_builder: Optional[IssueUrlBuilder] = None,
    ) -> None:
        super().__init__(history_parser or SvnHistoryParser(), executor, issue_url_builder)
        self.config = config or SvnConfig()
        self._password = self.config.resolved_password()
        self.url_builder = url_builder
        self._filesystem = filesystem or LocalFileSystem()
        self.detector = detector or MetadataDirectoryDetector(self._filesystem, SVN_METADATA_DIRECTORIES)
        # Modifications found by the last get_modifications call on this instance.
        self.mods: List[Modification] = []

    @classmethod
    def from_config(cls, config: Dict[str, Any], **collaborators: Any) -> "Svn":
        """Build a provider from a raw ``[source_control]`` table."""
        try:
            parsed = SvnConfig.model_validate(config)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid svn configuration: {e}") from e
        web, issue = parsed.builder_configs()
        collaborators.setdefault("url_builder", resolve_url_builder(web))
        collaborators.setdefault("issue_url_builder", resolve_issue_url_builder(issue))
        return cls(parsed, **collaborators)

    @staticmethod
    def format_command_date(date: datetime) -> str:
        return format_command_date(date)

    @staticmethod
    def parse_command_date(text: str) -> datetime:
        return parse_command_date(text)

    def get_modifications(self, from_result: IntegrationResult, to_result: IntegrationResult) -> List[Modification]:
        result = self.execute(self._history_process_info(from_result, to_result), "SVN history query")
        self.mods = self.parse_modifications(result, from_result.start_time, to_result.start_time)
        if self.url_builder is not None:
            self.url_builder.setup_modification(self.mods)
        self.fill_issue_url(self.mods)
        return self.mods

    def get_source(self, result: IntegrationResult, modifications: Optional[List[Modification]] = None) -> None:
        result.build_progress.signal_start_run_task("Getting source from SVN")

        if not self.config.auto_get_source:
            return

        mods = self.mods if modifications is None else modifications
        if self.has_working_copy(result):
            self.execute(self._update_process_info(result, mods), "SVN update")
        else:
            self._checkout_source(result)

    def label_source_control(
        self, result: IntegrationResult, modifications: Optional[List[Modification]] = None
    ) -> None:
        if self.config.tag_on_success and result.succeeded:
            mods = self.mods if modifications is None else modifications
            self.execute(self._label_process_info(result, mods), "SVN tag")

    @property
    def tags_on_success(self) -> bool:
        return self.config.tag_on_success

    @property
    def fetches_source(self) -> bool:
        return self.config.auto_get_source

    def has_working_copy(self, result: IntegrationResult) -> bool:
        return self.detector.is_working_copy(self._working_directory(result))

    def _checkout_source(self, result: IntegrationResult) -> None:
        if not (self.config.trunk_url or "").strip():
            raise ConfigurationError(
                "trunk_url must be specified in order to automatically checkout source from SVN "
                f"(working directory: {self._working_directory(result) or '<unset>'})",
                field="trunk_url",
            )
        self.execute(self._checkout_process_info(result), "SVN checkout")

    def _working_directory(self, result: IntegrationResult) -> str:
        return result.base_from_working_directory(self.config.working_directory)

    # HISTORY: log <trunk_url> -r "{start}:{end}" --verbose --xml <common switches>
    def _history_process_info(self, from_result: IntegrationResult, to_result: IntegrationResult) -> ProcessInfo:
        buffer = ProcessArgumentBuilder()
        buffer.add_argument("log")
        buffer.add_argument(self.config.trunk_url)
        buffer.append_argument(
            f'-r "{{{self.format_command_date(from_result.start_time)}}}:'
            f'{{{self.format_command_date(to_result.start_time)}}}"'
        )
        buffer.append_argument("--verbose --xml")
        self._append_common_switches(buffer)
        return self._new_process_info(buffer, to_result)

    def _checkout_process_info(self, result: IntegrationResult) -> ProcessInfo:
        buffer = ProcessArgumentBuilder()
        buffer.add_argument("checkout")
        buffer.add_argument(self.config.trunk_url)
        buffer.add_argument(self._working_directory(result))
        self._append_common_switches(buffer)
        return self._new_process_info(buffer, result)

    def _update_process_info(self, result: IntegrationResult, mods: List[Modification]) -> ProcessInfo:
        buffer = ProcessArgumentBuilder()
        buffer.add_argument("update")
        self._append_revision(buffer, last_change_number(mods))
        self._append_common_switches(buffer)
        return self._new_process_info(buffer, result)

    # TAG: copy -m "<message>" <source> <tag_base_url>/<label> [--revision N] <common switches>
    def _label_process_info(self, result: IntegrationResult, mods: List[Modification]) -> ProcessInfo:
        revision = last_change_number(mods)
        buffer = ProcessArgumentBuilder()
        buffer.add_argument("copy")
        buffer.add_argument("-m", self.config.tag_message.format(label=result.label))
        buffer.add_argument(self._tag_source(result, revision))
        buffer.add_argument(self._tag_destination(result.label))
        self._append_revision(buffer, revision)
        self._append_common_switches(buffer)
        return self._new_process_info(buffer, result)

    def _tag_source(self, result: IntegrationResult, revision: int) -> str:
        if revision == 0:
            separators = os.sep + (os.altsep or "")
            return self._working_directory(result).rstrip(separators)
        return self.config.trunk_url or ""

    def _tag_destination(self, label: str) -> str:
        return f"{(self.config.tag_base_url or '').rstrip('/')}/{label}"

    def _append_common_switches(self, buffer: ProcessArgumentBuilder) -> None:
        buffer.add_argument("--username", self.config.username)
        buffer.add_argument("--password", self._password)
        buffer.add_argument("--non-interactive")
        buffer.add_argument("--no-auth-cache")

    @staticmethod
    def _append_revision(buffer: ProcessArgumentBuilder, revision: int) -> None:
        buffer.append_if(revision > 0, "--revision {0}", revision)

    def _new_process_info(self, buffer: ProcessArgumentBuilder, result: IntegrationResult) -> ProcessInfo:
        working_directory = self._working_directory(result)
        if working_directory and not self._filesystem.directory_exists(working_directory):
            logger.info(f"Creating working directory {working_directory}")
            self._filesystem.create_directory(working_directory)
        return ProcessInfo(
            filename=self.config.executable,
            arguments=str(buffer),
            working_directory=working_directory or None,
            timeout=self.config.timeout,
            stream_encoding="utf-8",
            argv=buffer.to_argv(),
        )

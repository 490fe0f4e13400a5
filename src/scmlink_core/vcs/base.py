"""Source control provider contract."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ..enrichment import IssueUrlBuilder
from ..errors import ProcessFailedError, ProcessTimeoutError
from ..integration import IntegrationResult
from ..modification import Modification
from ..process import ProcessExecutor, ProcessInfo, ProcessResult
from .history import HistoryParser

logger = logging.getLogger(__name__)


class SourceControl(ABC):
    """Detect, fetch and label upstream changes for one project."""

    @abstractmethod
    def get_modifications(self, from_result: IntegrationResult, to_result: IntegrationResult) -> List[Modification]:
        """
        Query upstream history between two builds.

        Args:
            from_result: Context of the previous build; its start time opens the window.
            to_result: Context of the current build; its start time closes the window.

        Returns:
            Modifications in the window, empty when nothing changed.
        """

    @abstractmethod
    def get_source(self, result: IntegrationResult, modifications: Optional[List[Modification]] = None) -> None:
        """Materialize the working copy for ``result``."""

    @abstractmethod
    def label_source_control(
        self, result: IntegrationResult, modifications: Optional[List[Modification]] = None
    ) -> None:
        """Mark the built revision upstream when the build succeeded."""

    @property
    def tags_on_success(self) -> bool:
        return False

    @property
    def fetches_source(self) -> bool:
        """Whether ``get_source`` materializes a working copy."""
        return True

    def has_working_copy(self, result: IntegrationResult) -> bool:
        """Whether a working copy already exists for ``result``."""
        return True

    def initialize(self, project_name: str, working_directory: str) -> None:
        pass

    def purge(self, project_name: str, working_directory: str) -> None:
        pass


class ProcessSourceControl(SourceControl):
    """Base for providers that drive an external command-line client."""

    def __init__(
        self,
        history_parser: HistoryParser,
        executor: Optional[ProcessExecutor] = None,
        issue_url_builder: Optional[IssueUrlBuilder] = None,
    ) -> None:
        self._history_parser = history_parser
        self._executor = executor or ProcessExecutor()
        self.issue_url_builder = issue_url_builder

    @property
    def history_parser(self) -> HistoryParser:
        return self._history_parser

    def execute(self, info: ProcessInfo, operation: str = "Source control operation") -> ProcessResult:
        """Run ``info`` and raise on timeout or non-zero exit."""
        result = self._executor.execute(info)
        if result.timed_out:
            raise ProcessTimeoutError(
                f"{operation} has timed out after {info.timeout}s. "
                f"Process command: {info} (in {info.working_directory})",
                command=str(info),
                exit_code=result.exit_code,
                standard_output=result.standard_output,
                standard_error=result.standard_error,
            )
        if result.failed:
            raise ProcessFailedError(
                f"{operation} failed: {result.standard_error.strip()}. "
                f"Process command: {info} (in {info.working_directory}, exit code {result.exit_code})",
                command=str(info),
                exit_code=result.exit_code,
                standard_output=result.standard_output,
                standard_error=result.standard_error,
            )
        return result

    def parse_modifications(
        self, result: ProcessResult, from_time: datetime, to_time: datetime
    ) -> List[Modification]:
        mods = self._history_parser.parse(result.standard_output, from_time, to_time)
        logger.debug(f"Parsed {len(mods)} modifications")
        return mods

    def fill_issue_url(self, mods: List[Modification]) -> None:
        if self.issue_url_builder is not None:
            self.issue_url_builder.setup_modification(mods)

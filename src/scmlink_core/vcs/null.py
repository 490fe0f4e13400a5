"""Provider for projects without source control."""

from __future__ import annotations

from typing import List, Optional

from ..integration import IntegrationResult
from ..modification import Modification
from .base import SourceControl


class NullSourceControl(SourceControl):
    """Never reports changes and never touches a repository."""

    @property
    def fetches_source(self) -> bool:
        return False

    def get_modifications(self, from_result: IntegrationResult, to_result: IntegrationResult) -> List[Modification]:
        return []

    def get_source(self, result: IntegrationResult, modifications: Optional[List[Modification]] = None) -> None:
        pass

    def label_source_control(
        self, result: IntegrationResult, modifications: Optional[List[Modification]] = None
    ) -> None:
        pass

"""Poll, fetch and label sequencing for one project build."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from scmlink_core.integration import IntegrationResult
from scmlink_core.modification import Modification, last_change_number
from scmlink_core.vcs import SourceControl

logger = logging.getLogger(__name__)


class CycleState(str, Enum):
    IDLE = "idle"
    MODS_KNOWN = "mods_known"
    CHECKED_OUT = "checked_out"
    UPDATED = "updated"
    LABELLED = "labelled"


@dataclass
class CycleReport:
    """Outcome of one poll-build cycle."""
    state: CycleState
    modifications: List[Modification] = field(default_factory=list)
    built: bool = False
    succeeded: bool = False
    label: str = ""

    @property
    def last_change_number(self) -> int:
        return last_change_number(self.modifications)


class BuildCycle:
    """Track one project's provider calls through a poll-build cycle.

    Modifications found by ``poll`` are passed explicitly to ``fetch`` and
    ``label``; calls out of order still work and use whatever was polled last.
    """

    def __init__(self, provider: SourceControl) -> None:
        self.provider = provider
        self.state = CycleState.IDLE
        self.modifications: List[Modification] = []

    def poll(self, from_result: IntegrationResult, to_result: IntegrationResult) -> List[Modification]:
        self.modifications = self.provider.get_modifications(from_result, to_result)
        self.state = CycleState.MODS_KNOWN
        logger.info(f"Found {len(self.modifications)} modifications (last change {last_change_number(self.modifications)})")
        return self.modifications

    def fetch(self, result: IntegrationResult) -> None:
        if not self.provider.fetches_source:
            # get_source only signals progress; the state stays at MODS_KNOWN.
            self.provider.get_source(result, self.modifications)
            return
        existed = self.provider.has_working_copy(result)
        self.provider.get_source(result, self.modifications)
        self.state = CycleState.UPDATED if existed else CycleState.CHECKED_OUT

    def label(self, result: IntegrationResult) -> None:
        self.provider.label_source_control(result, self.modifications)
        if result.succeeded and self.provider.tags_on_success:
            self.state = CycleState.LABELLED
        else:
            self.state = CycleState.IDLE


def run_cycle(
    provider: SourceControl,
    from_result: IntegrationResult,
    to_result: IntegrationResult,
    build: Callable[[IntegrationResult], bool],
    force: bool = False,
    cycle: Optional[BuildCycle] = None,
) -> CycleReport:
    """Poll for changes and, when there are any (or ``force``), fetch, build and label.

    ``to_result`` is the context of the build being run; its ``succeeded`` flag
    is set from the return value of ``build``.
    """
    cycle = cycle or BuildCycle(provider)
    mods = cycle.poll(from_result, to_result)
    if not mods and not force:
        logger.info("No modifications detected; skipping build")
        return CycleReport(state=cycle.state, modifications=mods, label=to_result.label)

    cycle.fetch(to_result)
    to_result.build_progress.signal_start_run_task("Running build")
    to_result.succeeded = bool(build(to_result))
    cycle.label(to_result)
    return CycleReport(
        state=cycle.state,
        modifications=mods,
        built=True,
        succeeded=to_result.succeeded,
        label=to_result.label,
    )

from .config import ProjectConfig, load_project_config, validate_project_config
from .cycle import BuildCycle, CycleReport, CycleState, run_cycle

__all__ = [
    "BuildCycle",
    "CycleReport",
    "CycleState",
    "ProjectConfig",
    "load_project_config",
    "run_cycle",
    "validate_project_config",
]

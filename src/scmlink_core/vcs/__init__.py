from .base import ProcessSourceControl, SourceControl
from .detector import MetadataDirectoryDetector, WorkingCopyDetector
from .history import HistoryParser, SvnHistoryParser
from .null import NullSourceControl
from .registry import SourceControlRegistry, create_source_control, get_default_registry
from .svn import SVN_METADATA_DIRECTORIES, Svn

__all__ = [
    "HistoryParser",
    "MetadataDirectoryDetector",
    "NullSourceControl",
    "ProcessSourceControl",
    "SVN_METADATA_DIRECTORIES",
    "SourceControl",
    "SourceControlRegistry",
    "Svn",
    "SvnHistoryParser",
    "WorkingCopyDetector",
    "create_source_control",
    "get_default_registry",
]

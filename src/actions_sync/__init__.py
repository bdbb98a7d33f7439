"""
Actions marketplace synchronization.

Keeps the remote actions catalog in step with a local snapshot file,
uploading only what changed and trimming tag lists to the newest versions.
"""

from .config import SyncConfig
from .data_models import ParsedVersion, RunStatistics, SyncRunResult, UploadResult
from .exceptions import (
    ActionsSyncError,
    CandidateInputError,
    ConfigError,
    MarketplaceApiError,
)
from .orchestrator import SyncOrchestrator
from .version_trimmer import TagShape, compare_desc, parse_version, trim_to_latest

__all__ = [
    "SyncConfig",
    "SyncOrchestrator",
    "ParsedVersion",
    "RunStatistics",
    "SyncRunResult",
    "UploadResult",
    "TagShape",
    "compare_desc",
    "parse_version",
    "trim_to_latest",
    "ActionsSyncError",
    "CandidateInputError",
    "ConfigError",
    "MarketplaceApiError",
]

"""
Data models for actions marketplace synchronization.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ParsedVersion:
    """Structured view of a semantic-version-like tag."""

    major: int
    minor: int = 0
    patch: int = 0
    prerelease: str = ""  # e.g. "beta.1" for "v1.0.0-beta.1"


@dataclass(frozen=True)
class UploadResult:
    """Outcome of processing one candidate action."""

    success: bool
    action: str  # owner/name
    created: bool | None = None
    updated: bool | None = None
    skipped_not_updated: bool | None = None
    error: str | None = None
    status_code: int | None = None
    correlation_id: str | None = None

    @classmethod
    def uploaded(cls, action: str, created: bool, updated: bool) -> "UploadResult":
        """Result for an action that was submitted to the catalog."""
        return cls(success=True, action=action, created=created, updated=updated)

    @classmethod
    def skipped(cls, action: str) -> "UploadResult":
        """Result for an action whose upstream timestamp is unchanged."""
        return cls(
            success=True,
            action=action,
            created=False,
            updated=False,
            skipped_not_updated=True,
        )

    @classmethod
    def failed(
        cls,
        action: str,
        error: str,
        status_code: int | None = None,
        correlation_id: str | None = None,
    ) -> "UploadResult":
        """Result for an action that could not be submitted."""
        return cls(
            success=False,
            action=action,
            error=error,
            status_code=status_code,
            correlation_id=correlation_id,
        )

    @property
    def outcome(self) -> str:
        """Short label used in console output."""
        if not self.success:
            return "failed"
        if self.skipped_not_updated:
            return "skipped"
        if self.created:
            return "created"
        if self.updated:
            return "updated"
        return "no change"

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase shape consumed by the CI wrapper."""
        data: dict[str, Any] = {"success": self.success, "action": self.action}
        optional = {
            "created": self.created,
            "updated": self.updated,
            "skippedNotUpdated": self.skipped_not_updated,
            "error": self.error,
            "statusCode": self.status_code,
            "correlationId": self.correlation_id,
        }
        for key, value in optional.items():
            if value is not None:
                data[key] = value
        return data


@dataclass
class RunStatistics:
    """Aggregate counters for one synchronization run."""

    existing_count: int = 0
    uploaded_count: int = 0
    skipped_not_updated_count: int = 0
    failed_count: int = 0
    not_processed_count: int = 0  # dropped once the upload cap was reached

    def to_dict(self) -> dict[str, int]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "existingCount": self.existing_count,
            "uploadedCount": self.uploaded_count,
            "skippedNotUpdatedCount": self.skipped_not_updated_count,
            "failedCount": self.failed_count,
            "notProcessedCount": self.not_processed_count,
        }


@dataclass
class SyncRunResult:
    """Complete result from a synchronization run."""

    results: list[UploadResult] = field(default_factory=list)
    stats: RunStatistics = field(default_factory=RunStatistics)

    @property
    def failures(self) -> list[UploadResult]:
        """Results for actions that failed to upload."""
        return [result for result in self.results if not result.success]

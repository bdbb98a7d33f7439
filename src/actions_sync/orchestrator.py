"""
Incremental upload of candidate actions to the marketplace catalog.
"""

import json
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any, Protocol

from ..shared_utilities import get_logger
from ..shared_utilities.telemetry import trace_function, trace_operation
from .config import SyncConfig
from .data_models import RunStatistics, SyncRunResult, UploadResult
from .version_trimmer import TAG_INFO_FIELD, trim_to_latest

# Fields copied onto the submitted record when present on the candidate
OPTIONAL_FIELDS = (
    "actionType",
    "repoInfo",
    TAG_INFO_FIELD,
    "releaseInfo",
    "forkFound",
    "mirrorLastUpdated",
    "repoSize",
    "secretScanningEnabled",
    "dependabotEnabled",
    "dependabot",
    "vulnerabilityStatus",
    "ossf",
    "ossfScore",
    "ossfDateLastUpdate",
    "dependents",
    "verified",
)


class CatalogClient(Protocol):
    """Operations the orchestrator needs from the marketplace API."""

    def list_actions(self) -> list[dict[str, Any]]:
        """Return every action stored in the catalog."""
        ...

    def upsert_action(self, record: dict[str, Any]) -> Mapping[str, Any]:
        """Create or update an action, returning created/updated flags."""
        ...


def action_key(entry: Mapping[str, Any]) -> str | None:
    """Identity key of an action, or None when owner or name is missing."""
    owner = entry.get("owner")
    name = entry.get("name")
    if not owner or not name:
        return None
    return f"{owner}/{name}"


def project_action(candidate: Mapping[str, Any]) -> dict[str, Any]:
    """Copy a candidate onto the schema accepted by the catalog."""
    if action_key(candidate) is None:
        raise ValueError("Action is missing required owner or name")

    record = {"owner": candidate["owner"], "name": candidate["name"]}
    for field in OPTIONAL_FIELDS:
        value = candidate.get(field)
        if value is not None:
            record[field] = value
    return record


def normalize_timestamp(value: Any) -> datetime | None:
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.

    Naive timestamps are taken as UTC. Returns None for anything that
    cannot be parsed.
    """
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _updated_at(entry: Mapping[str, Any] | None) -> Any:
    if not entry:
        return None
    repo_info = entry.get("repoInfo")
    if not isinstance(repo_info, Mapping):
        return None
    return repo_info.get("updated_at")


def summarize_error(error: Exception) -> tuple[str, int | None, str | None]:
    """
    Build a human-readable summary of a submission error.

    Returns:
        Tuple of (summary, status code, correlation id)
    """
    message = getattr(error, "message", None) or str(error) or type(error).__name__
    code = getattr(error, "code", None)
    summary = f"{code}: {message}" if code else message

    status_code = getattr(error, "status_code", None)
    correlation_id = getattr(error, "correlation_id", None)
    return (
        summary,
        status_code if isinstance(status_code, int) else None,
        str(correlation_id) if correlation_id else None,
    )


class SyncOrchestrator:
    """
    Synchronizes candidate actions with the marketplace catalog.

    A run lists the catalog once, then walks the candidates in order,
    skipping those whose upstream timestamp is unchanged and uploading the
    rest. Per-action failures are recorded and never stop the run.
    """

    def __init__(self, client: CatalogClient, config: SyncConfig | None = None):
        """Initialize orchestrator.

        Args:
            client: Marketplace API client
            config: Sync policy settings (defaults apply when omitted)
        """
        self.client = client
        self.config = config or SyncConfig()
        self.logger = get_logger(__name__)

    def _fetch_existing(self) -> dict[str, dict[str, Any]]:
        """Index the catalog by owner/name, or return an empty index."""
        try:
            with trace_operation("list_actions"):
                existing = self.client.list_actions() or []
        except Exception as e:
            self.logger.warning(
                f"Could not list existing actions, uploading all candidates: {e}"
            )
            return {}

        index = {}
        for entry in existing:
            if not isinstance(entry, Mapping):
                continue
            key = action_key(entry)
            if key is None:
                continue
            index[key] = entry

        self.logger.info(f"Found {len(index)} existing actions in the catalog")
        return index

    def _is_unchanged(
        self, key: str, remote: Mapping[str, Any] | None, record: Mapping[str, Any]
    ) -> bool:
        """True when remote and candidate carry the same updated_at instant."""
        remote_value = _updated_at(remote)
        candidate_value = _updated_at(record)
        if remote_value is None or candidate_value is None:
            return False

        remote_time = normalize_timestamp(remote_value)
        candidate_time = normalize_timestamp(candidate_value)
        if remote_time is None or candidate_time is None:
            self.logger.bind(remote=remote_value, candidate=candidate_value).debug(
                f"Cannot compare updated_at for {key}, uploading"
            )
            return False

        return remote_time == candidate_time

    def _warn_if_oversized(self, key: str, record: Mapping[str, Any]) -> None:
        """Warn when a payload approaches the catalog's property size limit."""
        size = len(json.dumps(record, separators=(",", ":"), ensure_ascii=False))
        if size > self.config.payload_warning_chars:
            self.logger.warning(
                f"Payload for {key} is {size} characters, above the "
                f"{self.config.payload_warning_chars} character soft limit"
            )

    def _process_candidate(
        self,
        candidate: Mapping[str, Any],
        existing: Mapping[str, Mapping[str, Any]],
        position: int,
    ) -> UploadResult:
        """Skip, upload or fail a single candidate."""
        # Candidates without owner/name are reported by their input position
        key = action_key(candidate) or f"<index {position}>"
        try:
            record = project_action(candidate)
            if trim_to_latest(record, self.config.tag_window):
                self.logger.debug(
                    f"Trimmed tags for {key} to latest {self.config.tag_window}"
                )

            if self._is_unchanged(key, existing.get(key), record):
                self.logger.info(f"Skipping {key}: not updated since last sync")
                return UploadResult.skipped(key)

            self._warn_if_oversized(key, record)

            self.logger.info(f"Uploading: [{key}]")
            with trace_operation("upsert_action", {"action": key}):
                response = self.client.upsert_action(record) or {}

            result = UploadResult.uploaded(
                key,
                created=bool(response.get("created")),
                updated=bool(response.get("updated")),
            )
            self.logger.info(f"  Success - {result.outcome}")
            return result

        except Exception as e:
            summary, status_code, correlation_id = summarize_error(e)
            self.logger.bind(
                status_code=status_code,
                correlation_id=correlation_id,
                details=getattr(e, "details", None),
            ).error(f"  Failed: {key}: {summary}")
            return UploadResult.failed(
                key, summary, status_code=status_code, correlation_id=correlation_id
            )

    @trace_function("sync_actions_run")
    def run(
        self,
        candidates: Iterable[Mapping[str, Any]],
        max_uploads: int | None = None,
    ) -> SyncRunResult:
        """
        Synchronize candidates with the catalog.

        Args:
            candidates: Candidate actions in processing order
            max_uploads: Cap on uploaded (not skipped) actions; falls back to
                the configured cap when omitted

        Returns:
            SyncRunResult with per-action results and run statistics
        """
        if max_uploads is None:
            max_uploads = self.config.max_uploads

        candidate_list = list(candidates)
        existing = self._fetch_existing()
        stats = RunStatistics(existing_count=len(existing))
        results: list[UploadResult] = []
        seen: set[str] = set()

        self.logger.info(f"Processing {len(candidate_list)} candidate actions")

        for position, candidate in enumerate(candidate_list):
            if max_uploads is not None and stats.uploaded_count >= max_uploads:
                stats.not_processed_count = len(candidate_list) - position
                self.logger.info(
                    f"Upload limit of {max_uploads} reached, "
                    f"{stats.not_processed_count} actions left for the next run"
                )
                break

            key = action_key(candidate)
            if key is not None and key in seen:
                self.logger.warning(f"Ignoring duplicate candidate {key}")
                continue
            if key is not None:
                seen.add(key)

            result = self._process_candidate(candidate, existing, position)
            results.append(result)

            if not result.success:
                stats.failed_count += 1
            elif result.skipped_not_updated:
                stats.skipped_not_updated_count += 1
            else:
                stats.uploaded_count += 1

        self.logger.info(
            "Sync run complete",
            existing=stats.existing_count,
            uploaded=stats.uploaded_count,
            skipped=stats.skipped_not_updated_count,
            failed=stats.failed_count,
        )
        return SyncRunResult(results=results, stats=stats)

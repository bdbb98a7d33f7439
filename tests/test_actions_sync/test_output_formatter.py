"""Tests for sync output formatting."""

import json

import pytest

from src.actions_sync.data_models import RunStatistics, SyncRunResult, UploadResult
from src.actions_sync.output_formatter import (
    COUNT_END_MARKER,
    COUNT_START_MARKER,
    RESULTS_END_MARKER,
    RESULTS_START_MARKER,
    SyncOutputFormatter,
)


@pytest.fixture
def sample_run():
    """A run with one result of each kind."""
    return SyncRunResult(
        results=[
            UploadResult.uploaded("actions/checkout", created=True, updated=False),
            UploadResult.skipped("actions/cache"),
            UploadResult.failed("docker/login-action", "CONFLICT: a | b"),
        ],
        stats=RunStatistics(
            existing_count=120,
            uploaded_count=1,
            skipped_not_updated_count=1,
            failed_count=1,
            not_processed_count=4,
        ),
    )


class TestSyncOutputFormatter:
    """Test SyncOutputFormatter output."""

    def setup_method(self):
        """Set up formatter."""
        self.formatter = SyncOutputFormatter()

    def test_results_block_is_marked_json(self, sample_run):
        """Test that the block parses between its markers."""
        lines = self.formatter.format_results_block(sample_run).splitlines()

        assert lines[0] == RESULTS_START_MARKER
        assert lines[-1] == RESULTS_END_MARKER
        data = json.loads("\n".join(lines[1:-1]))
        assert [item["action"] for item in data] == [
            "actions/checkout",
            "actions/cache",
            "docker/login-action",
        ]
        assert data[1]["skippedNotUpdated"] is True
        assert data[2]["error"] == "CONFLICT: a | b"

    def test_results_block_for_empty_run(self):
        """Test an empty results list."""
        output = self.formatter.format_results_block(SyncRunResult())

        assert output == f"{RESULTS_START_MARKER}\n[]\n{RESULTS_END_MARKER}"

    def test_count_block(self):
        """Test the count block."""
        assert self.formatter.format_count_block(42) == (
            f"{COUNT_START_MARKER}\n42\n{COUNT_END_MARKER}"
        )

    def test_summary(self, sample_run):
        """Test the console summary."""
        summary = self.formatter.format_summary(sample_run)

        assert "Existing actions in catalog: 120" in summary
        assert "Skipped (not updated):       1" in summary
        assert "Not processed (limit):       4" in summary
        assert "docker/login-action: CONFLICT: a | b" in summary

    def test_summary_without_failures(self):
        """Test that the failures section is omitted when empty."""
        summary = self.formatter.format_summary(SyncRunResult())

        assert "Failures" not in summary
        assert "Not processed" not in summary

    def test_markdown_summary(self, sample_run):
        """Test the markdown step summary."""
        markdown = self.formatter.format_markdown_summary(sample_run)

        assert markdown.startswith("## Actions marketplace sync")
        assert "| Uploaded | 1 |" in markdown
        assert "| Not processed (limit) | 4 |" in markdown
        assert "- `docker/login-action`: CONFLICT: a \\| b" in markdown

    def test_append_markdown_summary(self, sample_run, tmp_path):
        """Test appending to an existing summary file."""
        path = tmp_path / "summary.md"
        path.write_text("# Earlier step\n", encoding="utf-8")

        self.formatter.append_markdown_summary(sample_run, path)

        content = path.read_text(encoding="utf-8")
        assert content.startswith("# Earlier step\n## Actions marketplace sync")

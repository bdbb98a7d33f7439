"""
Output formatting for sync results.

The results and count blocks are wrapped in start/end markers so the CI
wrapper can pick them out of the surrounding console output.
"""

import json
from pathlib import Path

from .data_models import SyncRunResult

RESULTS_START_MARKER = "__RESULTS_JSON_START__"
RESULTS_END_MARKER = "__RESULTS_JSON_END__"
COUNT_START_MARKER = "__COUNT_START__"
COUNT_END_MARKER = "__COUNT_END__"


class SyncOutputFormatter:
    """Formats sync run results for the console and CI summaries."""

    def format_results_block(self, run: SyncRunResult) -> str:
        """Format per-action results as a marked JSON block."""
        payload = json.dumps(
            [result.to_dict() for result in run.results],
            indent=2,
            ensure_ascii=False,
        )
        return "\n".join([RESULTS_START_MARKER, payload, RESULTS_END_MARKER])

    def format_count_block(self, count: int) -> str:
        """Format an action count as a marked block."""
        return "\n".join([COUNT_START_MARKER, str(count), COUNT_END_MARKER])

    def format_summary(self, run: SyncRunResult) -> str:
        """Format run statistics for console display."""
        stats = run.stats
        lines = [
            "Sync Summary",
            "=" * 40,
            f"Existing actions in catalog: {stats.existing_count}",
            f"Uploaded:                    {stats.uploaded_count}",
            f"Skipped (not updated):       {stats.skipped_not_updated_count}",
            f"Failed:                      {stats.failed_count}",
        ]
        if stats.not_processed_count:
            lines.append(
                f"Not processed (limit):       {stats.not_processed_count}"
            )

        failures = run.failures
        if failures:
            lines.append("")
            lines.append("Failures:")
            for result in failures:
                lines.append(f"  {result.action}: {result.error}")

        return "\n".join(lines)

    def format_markdown_summary(self, run: SyncRunResult) -> str:
        """Format run statistics as a markdown step summary."""
        stats = run.stats
        lines = [
            "## Actions marketplace sync",
            "",
            "| Metric | Count |",
            "|--------|------:|",
            f"| Existing actions | {stats.existing_count} |",
            f"| Uploaded | {stats.uploaded_count} |",
            f"| Skipped (not updated) | {stats.skipped_not_updated_count} |",
            f"| Failed | {stats.failed_count} |",
            f"| Not processed (limit) | {stats.not_processed_count} |",
        ]

        failures = run.failures
        if failures:
            lines.extend(["", "### Failures", ""])
            for result in failures:
                error = (result.error or "").replace("|", "\\|")
                lines.append(f"- `{result.action}`: {error}")

        return "\n".join(lines) + "\n"

    def append_markdown_summary(self, run: SyncRunResult, path: str | Path) -> None:
        """Append the markdown summary to a file such as GITHUB_STEP_SUMMARY."""
        summary_path = Path(path)
        summary_path.parent.mkdir(parents=True, exist_ok=True)
        with open(summary_path, "a", encoding="utf-8") as f:
            f.write(self.format_markdown_summary(run))

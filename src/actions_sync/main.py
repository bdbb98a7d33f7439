"""
Main CLI entry point for actions marketplace synchronization.
"""

import time

import click
from dotenv import load_dotenv

from ..shared_utilities import configure_logging, get_logger, get_logging_manager
from .candidates import load_candidates
from .client import ActionsMarketplaceClient
from .config import SyncConfig
from .exceptions import ActionsSyncError
from .orchestrator import SyncOrchestrator
from .output_formatter import SyncOutputFormatter

# Load environment variables from .env file
load_dotenv()

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def log_level_option(func):
    """Accept --log-level on the group and on each subcommand."""
    return click.option(
        "--log-level",
        type=click.Choice(LOG_LEVELS, case_sensitive=False),
        default=None,
        help="Logging level (default: $LOG_LEVEL or INFO)",
    )(func)


def _setup_logging(ctx: click.Context, log_level: str | None) -> None:
    """Configure logging, preferring the subcommand's level over the group's."""
    if log_level is None and ctx.parent is not None and ctx.parent.obj:
        log_level = ctx.parent.obj.get("log_level")
    configure_logging(level=log_level)


def _require(value: str | None, label: str) -> str:
    """Reject missing or empty positional arguments."""
    if value is None:
        click.echo(f"Error: {label} is required", err=True)
        raise click.Abort()
    if len(value) == 0:
        click.echo(f"Error: {label} cannot be empty (length: 0)", err=True)
        raise click.Abort()
    click.echo(f"{label} length: [{len(value)}]", err=True)
    return value


@click.group()
@log_level_option
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """
    Synchronize GitHub Actions metadata with the actions marketplace API.
    """
    ctx.obj = {"log_level": log_level}


@cli.command()
@click.argument("api_url", required=False)
@click.argument("actions_json", required=False)
@click.option(
    "--function-key",
    envvar="ACTIONS_API_FUNCTION_KEY",
    help="API function key (or set ACTIONS_API_FUNCTION_KEY env var)",
)
@click.option(
    "--max-uploads",
    type=click.IntRange(min=1),
    help="Maximum number of actions to upload in this run",
)
@click.option(
    "--summary-file",
    type=click.Path(dir_okay=False),
    envvar="GITHUB_STEP_SUMMARY",
    help="Append a markdown summary to this file (default: $GITHUB_STEP_SUMMARY)",
)
@log_level_option
@click.pass_context
def upload(
    ctx: click.Context,
    api_url: str | None,
    actions_json: str | None,
    function_key: str | None,
    max_uploads: int | None,
    summary_file: str | None,
    log_level: str | None,
) -> None:
    """
    Upload actions from ACTIONS_JSON to the marketplace at API_URL.

    Actions whose upstream update time matches the catalog are skipped, and
    each action's tag list is trimmed to the most recent versions before
    upload. Individual failures are reported without stopping the run.

    Examples:

        # Upload everything that changed
        actions-sync upload https://marketplace.example.net status.json

        # Upload at most 50 actions in this run
        actions-sync upload https://marketplace.example.net status.json --max-uploads 50
    """
    _setup_logging(ctx, log_level)
    logger = get_logger(__name__)
    logging_manager = get_logging_manager()

    api_url = _require(api_url, "API URL")
    actions_json = _require(actions_json, "Actions JSON file path")

    try:
        config = SyncConfig.from_env(
            api_url=api_url,
            function_key=function_key,
            max_uploads=max_uploads,
        )
        candidates = load_candidates(actions_json)
    except ActionsSyncError as e:
        logging_manager.log_operation_error("upload", e)
        click.echo(f"Error: {e}", err=True)
        raise click.Abort() from e

    client = ActionsMarketplaceClient(
        api_url=config.api_url,
        function_key=config.function_key,
        timeout=config.request_timeout,
    )
    orchestrator = SyncOrchestrator(client, config)
    formatter = SyncOutputFormatter()

    logger.info(f"Uploading [{len(candidates)}] actions...")
    logging_manager.log_operation_start("upload", actions=len(candidates))
    start = time.time()
    run = orchestrator.run(candidates)
    logging_manager.log_operation_complete(
        "upload",
        time.time() - start,
        uploaded=run.stats.uploaded_count,
        failed=run.stats.failed_count,
    )

    click.echo(formatter.format_results_block(run))
    click.echo(formatter.format_summary(run))

    if summary_file:
        try:
            formatter.append_markdown_summary(run, summary_file)
        except OSError as e:
            logger.warning(f"Could not write step summary to {summary_file}: {e}")


@cli.command()
@click.argument("api_url", required=False)
@click.argument("function_key", required=False)
@log_level_option
@click.pass_context
def count(
    ctx: click.Context,
    api_url: str | None,
    function_key: str | None,
    log_level: str | None,
) -> None:
    """
    Print the number of actions stored in the marketplace at API_URL.
    """
    _setup_logging(ctx, log_level)
    logger = get_logger(__name__)
    logging_manager = get_logging_manager()

    api_url = _require(api_url, "API URL")
    function_key = _require(function_key, "Function key")

    try:
        config = SyncConfig.from_env(api_url=api_url, function_key=function_key)
        client = ActionsMarketplaceClient(
            api_url=config.api_url,
            function_key=config.function_key,
            timeout=config.request_timeout,
        )
        logger.info("Getting actions count from API...")
        logging_manager.log_operation_start("count")
        start = time.time()
        actions = client.list_actions()
    except ActionsSyncError as e:
        logging_manager.log_operation_error("count", e)
        click.echo(f"Failed to get actions count: {e}", err=True)
        raise click.Abort() from e

    total = len(actions) if actions else 0
    logging_manager.log_operation_complete("count", time.time() - start, total=total)
    logger.info(f"Actions count: {total}")
    click.echo(SyncOutputFormatter().format_count_block(total))


main = cli

if __name__ == "__main__":
    cli()

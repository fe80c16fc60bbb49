"""Command line entry points for the labs (deploy/destroy/dynamodb-lab)."""

from __future__ import annotations

import asyncio
import logging
import os

import typer
from dotenv import load_dotenv

from cloud_labs.logging_config import ensure_logging
from cloud_labs.services.dependencies import (
    get_capstone_setup_service,
    get_capstone_teardown_service,
    get_dynamodb_lab_service,
)

logger = logging.getLogger(__name__)

app = typer.Typer(help="Provision and tear down the AWS lab infrastructure.", no_args_is_help=True)


@app.callback()
def init(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    load_dotenv(override=False)
    ensure_logging(logging.DEBUG if verbose else logging.INFO)
    logger.info("Using AWS Profile: %s", os.getenv("AWS_PROFILE") or "default")


@app.command("dynamodb-lab")
def dynamodb_lab() -> None:
    """Create a coffee-shop table, write and read the menu, then delete the table."""

    try:
        asyncio.run(get_dynamodb_lab_service().run())
    except Exception as exc:
        logger.error("Error: %s", exc)
        raise typer.Exit(code=1) from exc
    logger.info("Lab 04 - DynamoDB Basics completed!")


@app.command()
def deploy(
    cleanup_on_failure: bool = typer.Option(
        True,
        "--cleanup-on-failure/--keep-on-failure",
        help="Tear down what was created when a step fails",
    ),
) -> None:
    """Deploy the capstone project: S3 bucket, DynamoDB table and API Gateway."""

    try:
        summary = asyncio.run(get_capstone_setup_service().deploy(cleanup_on_failure=cleanup_on_failure))
    except Exception as exc:
        logger.error("Error: %s", exc)
        raise typer.Exit(code=1) from exc

    typer.echo(f"API URL: {summary.api.url}")
    typer.echo(f"API Key: {summary.api.api_key.value}")


@app.command()
def destroy() -> None:
    """Delete every resource created by `deploy`."""

    try:
        summary = asyncio.run(get_capstone_teardown_service().destroy())
    except Exception as exc:
        logger.error("Error: %s", exc)
        raise typer.Exit(code=1) from exc

    typer.echo(summary.model_dump_json(indent=2))


if __name__ == "__main__":
    app()

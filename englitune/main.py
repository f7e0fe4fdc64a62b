from __future__ import annotations

import asyncio
import json
import sys
from typing import List, Optional

import typer
import uvicorn

from englitune.api.app import create_app
from englitune.config import get_settings
from englitune.domain.errors import StoreError
from englitune.domain.models import ExclusionSet, OutputRecord
from englitune.infrastructure.db_factory import PoolManager
from englitune.queries.executor import get_random_transcripts_with_speaker
from englitune.reporter import print_records
from englitune.utils.logging import configure_logging, get_logger
from englitune.validation.pipeline import validate
from englitune.validation.result import Err

app = typer.Typer(help="englitune random transcript sampler CLI.")

log = get_logger(__name__)

EXIT_INVALID_PARAMS = 2


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} | "
        f"pool=({settings.db_pool_min_size},{settings.db_pool_max_size}) | "
        f"http={settings.http_host}:{settings.http_port} cors={settings.cors_origin}"
    )


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from settings)."),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port (default from settings)."),
) -> None:
    """
    Serve the HTTP API with uvicorn.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    uvicorn.run(
        create_app(settings),
        host=host or settings.http_host,
        port=port or settings.http_port,
        log_config=None,
    )


async def _sample(limit: int, excluded: ExclusionSet) -> List[OutputRecord]:
    manager = PoolManager(min_size=1, max_size=1)
    await manager.open()
    try:
        return await get_random_transcripts_with_speaker(manager.row_store(), limit, excluded)
    finally:
        await manager.close()


@app.command()
def sample(
    limit: Optional[str] = typer.Option(None, "--limit", "-l", help="Number of rows (1-100, default 1)."),
    excluded: Optional[str] = typer.Option(
        None,
        "--excluded",
        "-x",
        help="Speaker/sequence pairs to skip, e.g. 'p225=001,002;p226=003'.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print records as JSON instead of a table."),
) -> None:
    """
    Fetch random transcripts from the configured database.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    result = validate(limit, excluded)
    if isinstance(result, Err):
        typer.echo(result.message, err=True)
        raise typer.Exit(code=EXIT_INVALID_PARAMS)

    params = result.value
    try:
        records = asyncio.run(_sample(params.limit, params.excluded))
    except StoreError:
        log.exception("Sampling failed")
        typer.echo("Internal server error", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps([record.model_dump() for record in records], indent=2))
    else:
        print_records(records)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()

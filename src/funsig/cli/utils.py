"""CLI utilities."""

import json
from pathlib import Path
from typing import Any

import click

from funsig.config import FunsigConfig, load_config
from funsig.core.errors import ConfigError
from funsig.core.logging import configure_logging


def load_cli_config(ctx: click.Context, config_root: Path | None) -> FunsigConfig:
    """Load config for a command and apply its logging section.

    ``-v`` forces DEBUG and ``--json-logs`` forces JSON on every output.

    Raises:
        click.ClickException: If the config is invalid
    """
    try:
        config = load_config(config_root)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    obj = ctx.obj or {}
    logging_config = config.logging
    if obj.get("verbose"):
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    if obj.get("json_logs"):
        logging_config = logging_config.model_copy(
            update={
                "outputs": [
                    output.model_copy(update={"format": "json"})
                    for output in logging_config.outputs
                ]
            }
        )
    configure_logging(config=logging_config)
    return config


def write_json(data: Any, output: Path | None) -> None:
    """Write pretty JSON to a file, or to stdout when no file is given."""
    text = json.dumps(data, indent=2)
    if output is None:
        click.echo(text)
        return
    try:
        output.write_text(text + "\n", encoding="utf-8")
    except OSError as e:
        raise click.ClickException(f"Cannot write {output}: {e.strerror or e}") from e

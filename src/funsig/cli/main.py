"""funsig CLI - function signature extraction."""

import click

from funsig.cli.extract import extract_command
from funsig.cli.file import file_command
from funsig.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="funsig")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON lines")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, json_logs: bool) -> None:
    """funsig - extract function and class signatures from source code."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["json_logs"] = json_logs
    configure_logging(json_format=json_logs, level="DEBUG" if verbose else "INFO")


cli.add_command(extract_command, name="extract")
cli.add_command(file_command, name="file")


if __name__ == "__main__":
    cli()

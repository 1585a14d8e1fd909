"""funsig extract command - parse a directory tree."""

from pathlib import Path

import click

from funsig.cli.utils import load_cli_config, write_json
from funsig.core.progress import pluralize, status
from funsig.extract.engine import DeclarationExtractor


@click.command()
@click.option(
    "-d",
    "--directory",
    required=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory to scan",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Write JSON here instead of stdout",
)
@click.option(
    "-e",
    "--ext",
    "extensions",
    multiple=True,
    help="Extension to include, e.g. -e .ts (repeatable; default: auto-detect)",
)
@click.option(
    "--legacy-deps",
    is_flag=True,
    help="Emit a flat function list with heuristic dependOn edges",
)
@click.option(
    "--config-root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory holding .funsig.yaml (default: current directory)",
)
@click.pass_context
def extract_command(
    ctx: click.Context,
    directory: Path,
    output: Path | None,
    extensions: tuple[str, ...],
    legacy_deps: bool,
    config_root: Path | None,
) -> None:
    """Extract function and class declarations from every file under a directory."""
    config = load_cli_config(ctx, config_root)
    legacy = legacy_deps or config.extraction.legacy_dependencies
    exts = [e if e.startswith(".") else f".{e}" for e in extensions]

    extractor = DeclarationExtractor(config.extraction)
    status(f"Parsing directory {directory}")

    if legacy:
        functions = extractor.parse_directory_legacy(directory, exts)
        status(f"Found {pluralize(len(functions), 'function declaration')}", style="success")
        write_json([fn.to_dict() for fn in functions], output)
    else:
        files = extractor.parse_directory(directory, exts)
        count = sum(record.declaration_count for record in files)
        status(
            f"Found {pluralize(count, 'declaration')} in {pluralize(len(files), 'file')}",
            style="success",
        )
        write_json([record.to_dict() for record in files], output)

    if output is not None:
        status(f"Results written to {output}", style="success")

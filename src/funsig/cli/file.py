"""funsig file command - parse a single file."""

from pathlib import Path

import click

from funsig.cli.utils import load_cli_config, write_json
from funsig.extract.engine import DeclarationExtractor


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--legacy-deps", is_flag=True, help="Emit a flat function list with dependOn")
@click.option(
    "--config-root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory holding .funsig.yaml (default: current directory)",
)
@click.pass_context
def file_command(
    ctx: click.Context,
    path: Path,
    output: Path | None,
    legacy_deps: bool,
    config_root: Path | None,
) -> None:
    """Extract declarations from one file.

    Unsupported files produce an empty record rather than an error.
    """
    config = load_cli_config(ctx, config_root)
    extractor = DeclarationExtractor(config.extraction)
    if legacy_deps or config.extraction.legacy_dependencies:
        write_json([fn.to_dict() for fn in extractor.parse_file_legacy(path)], output)
    else:
        write_json(extractor.parse_file(path).to_dict(), output)

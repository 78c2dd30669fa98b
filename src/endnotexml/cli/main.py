"""Command-line interface for endnotexml.

Provides CLI commands for parsing and probing EndNote XML exports.
"""

import importlib.metadata
import sys
import time
from pathlib import Path

import click

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("endnotexml")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"  # Fallback for development


@click.group()
@click.version_option(version=__version__, prog_name="endnotexml")
def cli() -> None:
    """Streaming importer for EndNote XML bibliographic exports.

    Use 'endnotexml COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("input_path", type=click.Path(exists=True))
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    required=True,
    help="Output JSONL file path",
)
@click.option(
    "--recursive",
    "-r",
    is_flag=True,
    help="Search recursively in subdirectories (for folder input)",
)
@click.option(
    "--keyword-separator",
    type=str,
    default=",",
    show_default=True,
    help="Separator used to join keywords into the keywords field",
)
@click.option(
    "--log",
    "log_path",
    type=click.Path(),
    default=None,
    help="Append structured JSONL audit events to this file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def parse(
    input_path: str,
    output: str,
    recursive: bool,
    keyword_separator: str,
    log_path: str | None,
    verbose: bool,
) -> None:
    """Parse EndNote XML exports to JSONL.

    INPUT_PATH can be a single .xml file or a folder containing exports.

    Examples
    --------
        endnotexml parse library.xml -o output.jsonl
        endnotexml parse exports/ -o all_records.jsonl --recursive
    """
    from endnotexml import ImportConfig, write_jsonl
    from endnotexml.audit import AuditLogger, generate_run_id
    from endnotexml.parse import ingest_file, ingest_folder

    input_path_obj = Path(input_path)
    logger = AuditLogger(generate_run_id(), Path(log_path)) if log_path else None
    started = time.monotonic()

    if verbose:
        click.echo(f"Processing: {input_path}", err=True)

    try:
        config = ImportConfig(keyword_separator=keyword_separator)

        if logger is not None:
            logger.run_started(sys.argv, config.to_dict())

        if input_path_obj.is_file():
            if verbose:
                click.echo(f"Parsing file: {input_path_obj.name}", err=True)
            records, result = ingest_file(input_path_obj, config=config, logger=logger)
            errors = list(result.errors)
        else:
            if verbose:
                click.echo(f"Parsing folder: {input_path} (recursive={recursive})", err=True)
            records, report = ingest_folder(
                input_path_obj, recursive=recursive, config=config, logger=logger
            )
            errors = [f"{r.filename}: {e}" for r in report.file_results for e in r.errors]
            if verbose:
                click.echo(f"Files processed: {report.total_files}", err=True)

        if input_path_obj.is_file() and errors:
            raise click.ClickException("; ".join(errors))

        for message in errors:
            click.secho(f"Warning: {message}", fg="yellow", err=True)

        if verbose:
            click.echo(f"Found {len(records)} records", err=True)
            click.echo(f"Writing to: {output}", err=True)

        written = write_jsonl(records, output)

        if logger is not None:
            logger.run_finished("success", time.monotonic() - started, written)

        click.secho(f"✓ Successfully wrote {written} records to {output}", fg="green")

    except Exception as e:
        if logger is not None:
            logger.error(type(e).__name__, str(e))
            logger.run_finished("failed", time.monotonic() - started)
        message = e.format_message() if isinstance(e, click.ClickException) else str(e)
        click.secho(f"Error: {message}", fg="red", err=True)
        sys.exit(1)

    finally:
        if logger is not None:
            logger.close()


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
def probe(input_path: str) -> None:
    """Check whether INPUT_PATH looks like an EndNote XML export.

    Only the first 50 lines are inspected. Exits with status 0 if the file
    is recognized, 1 otherwise.
    """
    from endnotexml import is_endnote_xml

    if is_endnote_xml(input_path):
        click.echo(f"{input_path}: EndNote XML")
        return

    click.echo(f"{input_path}: not recognized")
    sys.exit(1)


if __name__ == "__main__":
    cli()

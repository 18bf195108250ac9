"""CLI entrypoint for vodup tools."""

import configparser
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from vodup.config import ConfigError, load_upload_config

app = typer.Typer(
    name="vodup",
    help="Upload and publish videos to Volcengine VOD",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool):
    """Route log records to a rich handler when verbose, stay silent otherwise."""
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    if not verbose:
        root_logger.setLevel(logging.WARNING)
        root_logger.addHandler(logging.NullHandler())
        return

    from rich.logging import RichHandler

    handler = RichHandler(console=err_console, show_time=False, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG)


def fail(message: str):
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(code=1)


@app.command()
def batch(
    spacename: Annotated[str, typer.Option("--spacename", help="VOD space name")],
    inputdir: Annotated[Path, typer.Option("--inputdir", help="Directory with videos to upload")],
    outputdir: Annotated[Path, typer.Option("--outputdir", help="Where uploaded videos are moved")],
    config: Annotated[Path | None, typer.Option(help="Upload config YAML path")] = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="List videos only, don't upload")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
):
    """Upload every video in a directory, publish it and move it to the output directory."""
    from vodup.config import load_env_credentials
    from vodup.pipeline.batch_upload import find_videos, upload_directory
    from vodup.pipeline.report import print_report, read_report, write_report
    from vodup.vod.client import VodClient, create_service

    setup_logging(verbose)

    try:
        upload_cfg = load_upload_config(config)
    except ConfigError as e:
        fail(str(e))

    for directory in (inputdir, outputdir):
        if not directory.is_dir():
            fail(f"Directory {directory} does not exist")

    if dry_run:
        console.print("[yellow]DRY RUN - nothing will be uploaded[/yellow]")
        try:
            videos = find_videos(inputdir, outputdir, upload_cfg)
        except OSError as e:
            fail(str(e))
        for video in videos:
            console.print(f"  {escape(str(video))}")
        console.print(f"\nFound {len(videos)} videos")
        return

    try:
        credentials = load_env_credentials()
    except ConfigError as e:
        fail(str(e))

    client = VodClient(create_service(credentials, upload_cfg.region), upload_cfg.publish_status)

    console.print(f"[bold]Uploading {escape(str(inputdir))} to space {escape(spacename)}...[/bold]")
    result = upload_directory(
        client=client,
        space_name=spacename,
        input_dir=inputdir,
        output_dir=outputdir,
        config=upload_cfg,
        console=console,
    )

    report_path = outputdir / upload_cfg.results_file
    console.print(f"\nCreating {escape(str(report_path))}")
    try:
        write_report(result.outcomes, report_path)
    except OSError as e:
        fail(f"Cannot write {report_path}: {e}")

    if result.outcomes:
        print_report(read_report(report_path), console)
    console.print(f"  Uploaded: {result.uploaded}")
    console.print(f"  Published: {result.published}")
    console.print(f"  Failed: {result.failed}")

    if result.aborted:
        fail(str(result.error))


@app.command()
def upload(
    spacename: Annotated[str, typer.Option("--spacename", help="VOD space name")],
    filepath: Annotated[Path, typer.Option("--filepath", help="Video file to upload")],
    title: Annotated[str | None, typer.Option("--title", help="Media title (default: file name)")] = None,
    uploadpath: Annotated[
        str | None, typer.Option("--uploadpath", help="Remote file name (default: file name)")
    ] = None,
    config_file: Annotated[
        Path | None, typer.Option("--config-file", help="Credentials INI (default: ./config.ini)")
    ] = None,
    config: Annotated[Path | None, typer.Option(help="Upload config YAML path")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
):
    """Upload and publish a single file, printing one comma-separated result line."""
    from vodup.config import load_credentials_file
    from vodup.pipeline.single_upload import SingleUploadResult, resolve_title, upload_single
    from vodup.vod.client import VodClient, create_service

    setup_logging(verbose)
    title = resolve_title(filepath, title)

    try:
        credentials = load_credentials_file(config_file)
        upload_cfg = load_upload_config(config)
    except ConfigError as e:
        typer.echo(SingleUploadResult(file_path=str(filepath), title=title, error=str(e)).summary_line())
        raise typer.Exit(code=1)

    client = VodClient(create_service(credentials, upload_cfg.region), upload_cfg.publish_status)
    result = upload_single(client, spacename, filepath, title=title, upload_path=uploadpath)
    typer.echo(result.summary_line())


@app.command()
def report(
    path: Annotated[Path, typer.Argument(help="Path to a results.ini file")],
):
    """Show the outcomes recorded in a results file."""
    from vodup.pipeline.report import print_report, read_report

    try:
        entries = read_report(path)
    except (OSError, configparser.Error) as e:
        fail(f"Cannot read {path}: {e}")

    print_report(entries, console, title=str(path))
    published = sum(1 for entry in entries if entry.published)
    console.print(f"  Files: {len(entries)}, Published: {published}")


@app.command()
def version():
    """Show version information."""
    from vodup import __version__

    console.print(f"vodup version {__version__}")


def batch_main():
    typer.run(batch)


def upload_main():
    typer.run(upload)


if __name__ == "__main__":
    app()

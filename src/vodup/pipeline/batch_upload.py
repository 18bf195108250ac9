"""Upload pipeline for a directory of video files."""

import logging
import shutil
from collections.abc import Container, Iterator
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from vodup.config import UploadConfig
from vodup.pipeline._shared import BatchResult, UploadOutcome
from vodup.vod.client import VodClient
from vodup.vod.errors import VodError

logger = logging.getLogger(__name__)


def is_video_file(path: Path, extensions: Container[str]) -> bool:
    """Exact, case-sensitive extension check (".MP4" is not ".mp4")."""
    return path.suffix in extensions


def iter_files(directory: Path, skip: Container[Path] = ()) -> Iterator[Path]:
    """
    Yield every file under a directory, depth first, in name order.

    Subdirectories are descended where they sort, not after the files.
    Symlinks are yielded as entries and never descended, so link cycles
    cannot revisit a file. Directories in `skip` (compared resolved) are not
    descended.
    """
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if entry.is_dir() and not entry.is_symlink():
            if entry.resolve() in skip:
                continue
            yield from iter_files(entry, skip)
        else:
            yield entry


def move_file(path: Path, output_dir: Path) -> Path:
    """Move a file into output_dir under the same name, never overwriting."""
    target = output_dir / path.name
    if target.exists():
        raise FileExistsError(f"Cannot move {path}: {target} already exists")
    shutil.move(str(path), str(target))
    return target


def upload_file(client: VodClient, space_name: str, path: Path) -> UploadOutcome:
    """
    Upload one file and publish it.

    Upload errors are recorded in the outcome, except credential errors which
    are raised since every later call would fail the same way.
    """
    file_name = path.name

    try:
        _, vid = client.upload(space_name, path, title=file_name)
    except VodError as e:
        if e.is_credential_error:
            raise
        return UploadOutcome(file_name=file_name, error=e)

    try:
        published = client.publish(vid)
    except VodError as e:
        return UploadOutcome(file_name=file_name, vid=vid, uploaded=True, error=e)

    return UploadOutcome(file_name=file_name, vid=vid, uploaded=True, published=published)


def find_videos(input_dir: Path, output_dir: Path, config: UploadConfig) -> list[Path]:
    """List the files a batch upload would process."""
    skip = {output_dir.resolve()}
    return [p for p in iter_files(input_dir, skip) if is_video_file(p, config.video_extensions)]


def upload_directory(
    client: VodClient,
    space_name: str,
    input_dir: Path,
    output_dir: Path,
    config: UploadConfig | None = None,
    console: Console | None = None,
) -> BatchResult:
    """
    Upload every video under input_dir, moving each uploaded file to output_dir.

    Flow per file:
    1. Upload with the file name as title
    2. Publish the new media
    3. Move the source file to output_dir

    A credential error, a failed move or an unreadable directory stops the
    walk. The returned result then holds the outcomes collected so far and the
    error that stopped it.

    Args:
        client: VOD client used for upload and publish
        space_name: Target VOD space
        input_dir: Directory to scan recursively
        output_dir: Where uploaded files are moved
        config: Upload configuration (extensions)
        console: Rich console for output

    Returns:
        BatchResult with one outcome per processed file
    """
    if config is None:
        config = UploadConfig()
    if console is None:
        console = Console()

    result = BatchResult()
    skip = {output_dir.resolve()}

    try:
        for path in iter_files(input_dir, skip):
            if not is_video_file(path, config.video_extensions):
                continue

            console.print(f"Uploading video: [bold]{escape(path.name)}[/bold]")
            try:
                outcome = upload_file(client, space_name, path)
            except VodError as e:
                logger.debug("Stopping at %s: %s", path, e)
                result.error = e
                return result

            result.outcomes.append(outcome)
            if not outcome.uploaded:
                console.print(f"  [red]Upload failed:[/red] {escape(outcome.error_message)}")
                continue
            if not outcome.published:
                console.print(f"  [yellow]Publish failed:[/yellow] {escape(outcome.error_message)}")

            move_file(path, output_dir)
    except OSError as e:
        result.error = e

    return result

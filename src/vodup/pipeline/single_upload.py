"""Upload pipeline for a single file."""

from dataclasses import dataclass
from pathlib import Path

from vodup.vod.client import VodClient
from vodup.vod.errors import VodError


@dataclass(frozen=True)
class SingleUploadResult:
    """Result of one upload + publish cycle."""

    file_path: str
    title: str
    upload_path: str = ""
    uploaded: bool = False
    published: bool = False
    error: str = ""

    def summary_line(self) -> str:
        """
        Format as `filepath, title, uploadPath, uploaded, published, errorMessage`.

        A field containing a comma, a double quote or a line break is wrapped
        in double quotes with inner quotes doubled, as in CSV.
        """
        return ", ".join(
            _quote(field)
            for field in (
                self.file_path,
                self.title,
                self.upload_path,
                str(self.uploaded).lower(),
                str(self.published).lower(),
                self.error,
            )
        )


def _quote(field: str) -> str:
    if any(c in field for c in ',"\r\n'):
        return '"' + field.replace('"', '""') + '"'
    return field


def resolve_title(file_path: Path, title: str | None = None) -> str:
    """Title to use for a file: the given one, or the file's base name."""
    return title or file_path.name


def upload_single(
    client: VodClient,
    space_name: str,
    file_path: Path,
    title: str | None = None,
    upload_path: str | None = None,
) -> SingleUploadResult:
    """
    Upload one file, then publish it.

    Args:
        client: VOD client
        space_name: Target VOD space
        file_path: Local file to upload
        title: Media title (default: the file's base name)
        upload_path: Remote file name (default: the file's base name)

    Returns:
        SingleUploadResult; publishing is skipped when the upload fails
    """
    title = resolve_title(file_path, title)

    try:
        remote_name, vid = client.upload(space_name, file_path, title, upload_path)
    except VodError as e:
        return SingleUploadResult(file_path=str(file_path), title=title, error=str(e))

    try:
        published = client.publish(vid)
    except VodError as e:
        return SingleUploadResult(
            file_path=str(file_path),
            title=title,
            upload_path=remote_name,
            uploaded=True,
            error=str(e),
        )

    return SingleUploadResult(
        file_path=str(file_path),
        title=title,
        upload_path=remote_name,
        uploaded=True,
        published=published,
    )

"""Shared fixtures: a fake VOD service returning SDK-shaped responses."""

from pathlib import Path
from types import SimpleNamespace

import pytest

from vodup.vod.client import VodClient


def make_response(code: str = "", vid: str = "", file_name: str = ""):
    """Build an object shaped like the SDK's protobuf responses."""
    return SimpleNamespace(
        ResponseMetadata=SimpleNamespace(Error=SimpleNamespace(Code=code)),
        Result=SimpleNamespace(
            Data=SimpleNamespace(Vid=vid, SourceInfo=SimpleNamespace(FileName=file_name))
        ),
    )


class FakeVodService:
    """
    Stand-in for volcengine's VodService.

    `upload_errors` / `publish_errors` map a file name (or vid) to an error
    code string, or to an exception to raise. Codes are raised as a plain
    Exception holding the code, the way the SDK reports 4xx responses.
    `vids` overrides the vid returned for a file name.
    """

    def __init__(self, upload_errors=None, publish_errors=None, vids=None):
        self.upload_errors = upload_errors or {}
        self.publish_errors = publish_errors or {}
        self.vids = vids or {}
        self.upload_requests = []
        self.publish_requests = []

    def upload_media(self, request):
        self.upload_requests.append(request)
        name = Path(request.FilePath).name
        error = self.upload_errors.get(name)
        if isinstance(error, Exception):
            raise error
        if error:
            raise Exception(error)
        return make_response(vid=self.vids.get(name, f"v-{name}"), file_name=request.FileName)

    def update_media_publish_status(self, request):
        self.publish_requests.append(request)
        error = self.publish_errors.get(request.Vid)
        if isinstance(error, Exception):
            raise error
        if error:
            raise Exception(error)
        return make_response()

    @property
    def uploaded_names(self) -> list[str]:
        return [Path(r.FilePath).name for r in self.upload_requests]


@pytest.fixture
def service():
    return FakeVodService()


@pytest.fixture
def client(service):
    return VodClient(service)


@pytest.fixture
def dirs(tmp_path):
    """Empty input and output directories."""
    input_dir = tmp_path / "in"
    output_dir = tmp_path / "out"
    input_dir.mkdir()
    output_dir.mkdir()
    return input_dir, output_dir


def touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\x00video")
    return path

"""Tests for vodup.pipeline.single_upload."""

from pathlib import Path

from conftest import FakeVodService
from vodup.pipeline.single_upload import SingleUploadResult, resolve_title, upload_single
from vodup.vod.client import VodClient


class TestUploadSingle:
    """Tests for upload_single()."""

    def test_title_defaults_to_base_name(self, client, service):
        result = upload_single(client, "space", Path("/tmp/x.mp4"))
        assert result.title == "x.mp4"
        assert '"Title": "x.mp4"' in service.upload_requests[0].Functions

    def test_title_and_upload_path_override(self, client, service):
        result = upload_single(
            client, "space", Path("/tmp/x.mp4"), title="Launch", upload_path="2024/launch.mp4"
        )
        assert result.title == "Launch"
        assert result.upload_path == "2024/launch.mp4"
        assert service.upload_requests[0].FileName == "2024/launch.mp4"

    def test_success(self, client, service):
        result = upload_single(client, "space", Path("/tmp/x.mp4"))
        assert result.uploaded and result.published
        assert result.error == ""
        assert service.publish_requests[0].Vid == "v-x.mp4"

    def test_upload_failure_skips_publish(self):
        service = FakeVodService(upload_errors={"x.mp4": "InvalidCredential"})
        result = upload_single(VodClient(service), "space", Path("/tmp/x.mp4"))
        assert result == SingleUploadResult(
            file_path="/tmp/x.mp4", title="x.mp4", error="InvalidCredential"
        )
        assert not service.publish_requests

    def test_publish_failure(self):
        service = FakeVodService(publish_errors={"v-x.mp4": "InvalidVid"})
        result = upload_single(VodClient(service), "space", Path("/tmp/x.mp4"))
        assert result.uploaded is True
        assert result.published is False
        assert result.upload_path == "x.mp4"
        assert result.error == "InvalidVid"


class TestSummaryLine:
    """Tests for SingleUploadResult.summary_line()."""

    def test_success_line(self):
        result = SingleUploadResult("/tmp/x.mp4", "x.mp4", "x.mp4", True, True)
        assert result.summary_line() == "/tmp/x.mp4, x.mp4, x.mp4, true, true, "

    def test_failure_line(self):
        result = SingleUploadResult("/tmp/x.mp4", "x.mp4", error="boom")
        assert result.summary_line() == "/tmp/x.mp4, x.mp4, , false, false, boom"

    def test_fields_with_commas_are_quoted(self):
        """Commas or quotes in a field should not shift the columns."""
        result = SingleUploadResult(
            "/tmp/x.mp4", 'Cats, "live"', error="Cannot read config.ini: a, b"
        )
        assert result.summary_line() == (
            '/tmp/x.mp4, "Cats, ""live""", , false, false, "Cannot read config.ini: a, b"'
        )


def test_resolve_title():
    assert resolve_title(Path("/a/b/c.mkv")) == "c.mkv"
    assert resolve_title(Path("/a/b/c.mkv"), "Title") == "Title"

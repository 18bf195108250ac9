"""Volcengine VOD client initialization and upload/publish calls."""

import json
import logging
import re
from pathlib import Path
from typing import Any

from volcengine.vod.models.request.request_vod_pb2 import (
    VodUpdateMediaPublishStatusRequest,
    VodUploadMediaRequest,
)
from volcengine.vod.VodService import VodService

from vodup.config import Credentials
from vodup.vod.errors import CREDENTIAL_ERROR_CODES, VodError

logger = logging.getLogger(__name__)

PUBLISHED = "Published"

# service error codes look like "InvalidCredential" or "InvalidParameter.SpaceName"
_CODE_TOKEN = re.compile(r"[A-Z][A-Za-z0-9]*(\.[A-Za-z0-9]+)*")


def create_service(credentials: Credentials, region: str = "cn-north-1") -> VodService:
    """Create a VOD service with explicitly injected credentials."""
    service = VodService(region)
    service.set_ak(credentials.access_key)
    service.set_sk(credentials.secret_key)
    return service


def build_functions(title: str) -> str:
    """Upload functions payload that sets the media title."""
    return json.dumps([{"Name": "AddOptionInfo", "Input": {"Title": title}}])


def _error_code(resp: Any) -> str:
    return resp.ResponseMetadata.Error.Code


def _code_from_text(text: str) -> str | None:
    """Error code embedded in a raw JSON response body, if any."""
    try:
        body = json.loads(text)
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    error = (body.get("ResponseMetadata") or {}).get("Error") or {}
    return error.get("Code") or None


def _code_from_exception(exc: Exception) -> str | None:
    """
    Service error code carried by an SDK exception, if any.

    The SDK raises a plain Exception holding either the response's Error
    message (with a Code field), the bare code string, or the raw JSON body.
    Network failures raise other exception types and carry no code.
    """
    arg = exc.args[0] if exc.args else None
    code = getattr(arg, "Code", None)
    if isinstance(code, str) and code:
        return code

    text = str(exc)
    code = _code_from_text(text)
    if code:
        return code

    if text in CREDENTIAL_ERROR_CODES:
        return text
    if type(exc) is Exception and _CODE_TOKEN.fullmatch(text):
        return text
    return None


def _call(method, request, action: str):
    """Run one SDK call and turn any failure into a VodError."""
    try:
        resp = method(request)
    except Exception as e:
        code = _code_from_exception(e)
        if code:
            logger.debug("%s failed with %s", action, code)
            raise VodError.from_code(code) from e
        raise VodError.transport(e) from e

    code = _error_code(resp)
    if code:
        logger.debug("%s failed with %s", action, code)
        raise VodError.from_code(code)
    return resp


class VodClient:
    """Upload and publish media in a VOD space."""

    def __init__(self, service: VodService, publish_status: str = PUBLISHED):
        self.service = service
        self.publish_status = publish_status

    def upload(
        self,
        space_name: str,
        local_path: Path,
        title: str,
        remote_name: str | None = None,
    ) -> tuple[str, str]:
        """
        Upload a local file to a space.

        Args:
            space_name: Target VOD space
            local_path: File to upload
            title: Media title stored with the upload
            remote_name: Remote file name (default: the local base name)

        Returns:
            Tuple of (resolved remote file name, vid)

        Raises:
            VodError: on transport, service or credential failure
        """
        remote_name = remote_name or Path(local_path).name

        request = VodUploadMediaRequest()
        request.SpaceName = space_name
        request.FilePath = str(local_path)
        request.FileName = remote_name
        request.Functions = build_functions(title)

        logger.debug("Uploading %s to space %s as %s", local_path, space_name, remote_name)
        resp = _call(self.service.upload_media, request, "UploadMedia")

        data = resp.Result.Data
        source_info = getattr(data, "SourceInfo", None)
        resolved = getattr(source_info, "FileName", "") or remote_name
        logger.debug("Uploaded %s: vid=%s", local_path, data.Vid)
        return resolved, data.Vid

    def publish(self, vid: str) -> bool:
        """
        Set a media's publish status.

        Returns:
            True when the status update succeeded

        Raises:
            VodError: on transport, service or credential failure
        """
        request = VodUpdateMediaPublishStatusRequest()
        request.Vid = vid
        request.Status = self.publish_status

        _call(self.service.update_media_publish_status, request, "UpdateMediaPublishStatus")
        logger.debug("Set %s to %s", vid, self.publish_status)
        return True

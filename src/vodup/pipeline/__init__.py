"""Pipelines for uploading and publishing videos."""

from ._shared import BatchResult, UploadOutcome
from .batch_upload import upload_directory
from .report import read_report, write_report
from .single_upload import SingleUploadResult, upload_single

__all__ = [
    "BatchResult",
    "UploadOutcome",
    "upload_directory",
    "read_report",
    "write_report",
    "SingleUploadResult",
    "upload_single",
]

"""VOD client and error types."""

from vodup.vod.client import VodClient, create_service
from vodup.vod.errors import ErrorKind, VodError

__all__ = ["VodClient", "create_service", "ErrorKind", "VodError"]

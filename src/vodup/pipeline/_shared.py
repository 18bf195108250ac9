"""Shared types for upload pipelines."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class UploadOutcome:
    """Result of uploading and publishing one file."""

    file_name: str
    vid: str = ""
    uploaded: bool = False
    published: bool = False
    error: Exception | None = None

    @property
    def error_message(self) -> str:
        return str(self.error) if self.error is not None else ""


@dataclass
class BatchResult:
    """Outcomes of a directory upload, plus the error that stopped it early."""

    outcomes: list[UploadOutcome] = field(default_factory=list)
    error: Exception | None = None

    @property
    def aborted(self) -> bool:
        return self.error is not None

    @property
    def uploaded(self) -> int:
        return sum(1 for o in self.outcomes if o.uploaded)

    @property
    def published(self) -> int:
        return sum(1 for o in self.outcomes if o.published)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o.error is not None)

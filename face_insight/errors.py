"""Exception hierarchy shared across the pipeline stages."""

from __future__ import annotations


class FaceInsightError(RuntimeError):
    """Base class for failures raised by a pipeline stage."""


class CaptureFailure(FaceInsightError):
    """Raised when the capture collaborator cannot produce a photo."""


class UploadError(FaceInsightError):
    """Raised when the image host rejects an upload or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class AnalysisError(FaceInsightError):
    """Raised when the face-analysis service rejects a request or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class MalformedEncodingError(ValueError):
    """Raised when an encoded image carries no transport marker."""


class InterpretationError(ValueError):
    """Raised when an analysis payload holds no face record to interpret."""

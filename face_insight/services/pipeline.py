"""Orchestrates capture, upload, analysis and interpretation of one photo."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar

from ..clients.azure_face import AzureFaceClient
from ..clients.base import RemoteServiceClient
from ..clients.imgur import ImgurClient
from ..config import AppConfig
from ..errors import (
    AnalysisError,
    CaptureFailure,
    InterpretationError,
    MalformedEncodingError,
    UploadError,
)
from ..io.capture import CaptureOptions, ImageSource
from ..utils.encoding import strip_transport_prefix
from .interpreter import AnalysisFact, interpret_faces

logger = logging.getLogger(__name__)

T = TypeVar("T")

CAPTURE_ERROR = "Error: Phone couldn't take the photo."
UPLOAD_ERROR = "Error: Imgur couldn't return a link."
ANALYSIS_ERROR = "Error: Azure couldn't analyze the photo."


class PipelineStage(str, Enum):
    """Where a pipeline run currently is."""

    IDLE = "idle"
    CAPTURING = "capturing"
    UPLOADING = "uploading"
    ANALYZING = "analyzing"
    INTERPRETING = "interpreting"
    DONE = "done"
    FAILED = "failed"


class StageStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"
    NO_RESULT = "no_result"


@dataclass(frozen=True)
class StageResult(Generic[T]):
    """Tagged outcome of a single pipeline stage."""

    status: StageStatus
    value: T | None = None
    error: Exception | None = None

    @classmethod
    def ok(cls, value: T) -> StageResult[T]:
        return cls(StageStatus.OK, value=value)

    @classmethod
    def failed(cls, error: Exception) -> StageResult[T]:
        return cls(StageStatus.FAILED, error=error)

    @classmethod
    def no_result(cls) -> StageResult[T]:
        return cls(StageStatus.NO_RESULT)


@dataclass(slots=True)
class PipelineState:
    """Mutable state owned by a single :class:`PipelineOrchestrator`."""

    image: str | None = None
    image_url: str | None = None
    loading: bool = False
    error: str | None = None
    analysis: list[AnalysisFact] = field(default_factory=list)
    stage: PipelineStage = PipelineStage.IDLE
    failed_stage: PipelineStage | None = None


@dataclass(frozen=True, slots=True)
class PipelineSnapshot:
    """Read-only view of :class:`PipelineState` handed to presentation code."""

    image: str | None
    image_url: str | None
    loading: bool
    error: str | None
    analysis: tuple[AnalysisFact, ...]
    stage: PipelineStage
    failed_stage: PipelineStage | None

    def as_dict(self) -> dict[str, Any]:
        return {
            "stage": self.stage.value,
            "failed_stage": self.failed_stage.value if self.failed_stage else None,
            "loading": self.loading,
            "error": self.error,
            "image_url": self.image_url,
            "facts": [fact.as_dict() for fact in self.analysis],
        }


class ImageHost(Protocol):
    async def upload(self, payload: str) -> str | None:
        """Upload a stripped base64 payload and return its public URL."""


class FaceAnalyzer(Protocol):
    async def analyze(self, image_url: str) -> Sequence[dict[str, Any]]:
        """Return the per-face attribute records for ``image_url``."""


Listener = Callable[[PipelineSnapshot], None]


class PipelineOrchestrator:
    """Runs the capture → upload → analyze → interpret pipeline.

    Stages run strictly one after another and the first failure ends the run
    with a single user-facing error message. Overlapping calls to
    :meth:`analyze` are not serialised and share the same state.
    """

    def __init__(
        self,
        source: ImageSource,
        image_host: ImageHost,
        face_analyzer: FaceAnalyzer,
        *,
        options: CaptureOptions | None = None,
    ) -> None:
        self._source = source
        self._image_host = image_host
        self._face_analyzer = face_analyzer
        self._options = options or CaptureOptions()
        self._state = PipelineState()
        self._listeners: list[Listener] = []

    @classmethod
    def from_config(cls, config: AppConfig, source: ImageSource) -> PipelineOrchestrator:
        """Build an orchestrator wired to the Imgur and Azure clients."""
        image_host = ImgurClient(config)
        face_analyzer = AzureFaceClient(config)
        image_host.load()
        face_analyzer.load()
        return cls(
            source,
            image_host,
            face_analyzer,
            options=CaptureOptions.from_config(config),
        )

    def close(self) -> None:
        """Release the HTTP sessions of clients built by :meth:`from_config`."""
        for client in (self._image_host, self._face_analyzer):
            if isinstance(client, RemoteServiceClient):
                client.close()

    def snapshot(self) -> PipelineSnapshot:
        state = self._state
        return PipelineSnapshot(
            image=state.image,
            image_url=state.image_url,
            loading=state.loading,
            error=state.error,
            analysis=tuple(state.analysis),
            stage=state.stage,
            failed_stage=state.failed_stage,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with a snapshot after every state change.

        Exceptions raised by a listener are logged and do not interrupt the run.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def analyze(self) -> PipelineSnapshot:
        """Run the pipeline once and return the resulting snapshot."""
        state = self._state
        state.error = None
        state.failed_stage = None
        self._enter(PipelineStage.CAPTURING)

        captured = await self._capture()
        if captured.status is not StageStatus.OK:
            return self._fail(CAPTURE_ERROR, captured.error)
        state.image = captured.value
        state.image_url = None
        state.loading = True
        self._enter(PipelineStage.UPLOADING)

        uploaded = await self._upload(captured.value)
        if uploaded.status is StageStatus.FAILED:
            # loading stays set on upload failure.
            return self._fail(UPLOAD_ERROR, uploaded.error)
        if uploaded.status is StageStatus.NO_RESULT:
            logger.warning("Upload produced no link; the run stops without an error.")
            self._notify()
            return self.snapshot()
        state.image_url = uploaded.value
        self._enter(PipelineStage.ANALYZING)

        analyzed = await self._analyze(uploaded.value)
        state.loading = False
        if analyzed.status is not StageStatus.OK:
            return self._fail(ANALYSIS_ERROR, analyzed.error)
        self._enter(PipelineStage.INTERPRETING)

        interpreted = self._interpret(analyzed.value)
        if interpreted.status is not StageStatus.OK:
            return self._fail(ANALYSIS_ERROR, interpreted.error)
        state.analysis = interpreted.value
        self._enter(PipelineStage.DONE)
        logger.info("Analysis complete with %d fact(s).", len(state.analysis))
        return self.snapshot()

    # ----- Stages ------------------------------------------------------------

    async def _capture(self) -> StageResult[str]:
        try:
            image = await asyncio.to_thread(self._source.capture, self._options)
        except CaptureFailure as exc:
            return StageResult.failed(exc)
        return StageResult.ok(image)

    async def _upload(self, image: str) -> StageResult[str]:
        try:
            link = await self._image_host.upload(strip_transport_prefix(image))
        except (MalformedEncodingError, UploadError) as exc:
            return StageResult.failed(exc)
        if link is None:
            return StageResult.no_result()
        return StageResult.ok(link)

    async def _analyze(self, image_url: str) -> StageResult[Sequence[dict[str, Any]]]:
        try:
            faces = await self._face_analyzer.analyze(image_url)
        except AnalysisError as exc:
            return StageResult.failed(exc)
        return StageResult.ok(faces)

    @staticmethod
    def _interpret(faces: Sequence[dict[str, Any]]) -> StageResult[list[AnalysisFact]]:
        try:
            return StageResult.ok(interpret_faces(faces))
        except InterpretationError as exc:
            return StageResult.failed(exc)

    # ----- State transitions -------------------------------------------------

    def _enter(self, stage: PipelineStage) -> None:
        logger.debug("Pipeline stage %s -> %s", self._state.stage.value, stage.value)
        self._state.stage = stage
        self._notify()

    def _fail(self, message: str, error: Exception | None) -> PipelineSnapshot:
        state = self._state
        logger.warning("Pipeline failed while %s: %s", state.stage.value, error)
        state.failed_stage = state.stage
        state.stage = PipelineStage.FAILED
        state.error = message
        self._notify()
        return self.snapshot()

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Pipeline listener %r failed", listener)

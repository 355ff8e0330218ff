"""Top-level package for the Face Insight library."""

from .config import AppConfig
from .io.capture import CaptureOptions, FileImageSource
from .services.interpreter import AnalysisFact
from .services.pipeline import PipelineOrchestrator, PipelineSnapshot, PipelineStage
from .settings_store import SettingsStore

__all__ = [
    "AnalysisFact",
    "AppConfig",
    "CaptureOptions",
    "FileImageSource",
    "PipelineOrchestrator",
    "PipelineSnapshot",
    "PipelineStage",
    "SettingsStore",
]

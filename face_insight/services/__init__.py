"""Service layer for interpreting analyses and orchestrating the pipeline."""

from .interpreter import AnalysisFact, interpret_attributes, interpret_faces
from .pipeline import PipelineOrchestrator, PipelineSnapshot, PipelineStage, PipelineState

__all__ = [
    "AnalysisFact",
    "PipelineOrchestrator",
    "PipelineSnapshot",
    "PipelineStage",
    "PipelineState",
    "interpret_attributes",
    "interpret_faces",
]

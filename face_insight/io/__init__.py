"""Capture sources that feed photos into the pipeline."""

from .capture import CaptureOptions, FileImageSource, ImageSource

__all__ = ["CaptureOptions", "FileImageSource", "ImageSource"]

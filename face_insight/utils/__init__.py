"""Utility helpers for the Face Insight library."""

from .encoding import strip_transport_prefix, tag_transport_prefix
from .logs import configure_logging
from .text import capitalize

__all__ = ["capitalize", "configure_logging", "strip_transport_prefix", "tag_transport_prefix"]

"""HTTP clients for the image host and the face-analysis service."""

from .azure_face import AzureFaceClient
from .base import RemoteServiceClient
from .imgur import ImgurClient

__all__ = ["AzureFaceClient", "ImgurClient", "RemoteServiceClient"]

"""Media domain ports."""

from .background_remover import BackgroundRemover
from .storage import BlobStorePort
from .transformer import ImageTransformer

__all__ = [
    "BackgroundRemover",
    "BlobStorePort",
    "ImageTransformer",
]

"""Pillow adapter for ImageTransformer."""

import io
import logging

from PIL import Image, ImageOps, UnidentifiedImageError

from cutout.domain.media.port.transformer import ImageTransformer
from cutout.domain.shared.error import TransformError

logger = logging.getLogger(__name__)


class PillowMirrorTransformer(ImageTransformer):
    """Flips images left-to-right and re-encodes them as PNG, keeping alpha."""

    def mirror(self, image: bytes) -> bytes:
        try:
            with Image.open(io.BytesIO(image)) as source:
                source.load()
                if source.mode not in ("RGBA", "LA", "RGB", "L"):
                    source = source.convert("RGBA")
                flipped = ImageOps.mirror(source)

            buffer = io.BytesIO()
            flipped.save(buffer, format="PNG")
            return buffer.getvalue()
        except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
            logger.error("Image mirror failed: %s", e)
            raise TransformError("Image processing failed", details=str(e)) from e

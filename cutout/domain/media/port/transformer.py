from abc import abstractmethod
from typing import Protocol

from cutout.domain.shared.port import Port


class ImageTransformer(Port, Protocol):
    @abstractmethod
    def mirror(self, image: bytes) -> bytes:
        """Flip ``image`` left-to-right and encode it as PNG. Raises TransformError."""
        ...

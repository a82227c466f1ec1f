from abc import abstractmethod
from typing import Protocol

from cutout.domain.shared.port import Port


class BackgroundRemover(Port, Protocol):
    @abstractmethod
    async def remove(self, image: bytes) -> bytes:
        """Return ``image`` with its background cut away.

        Raises UpstreamServiceError when the service answers with a failure
        or cannot be reached.
        """
        ...

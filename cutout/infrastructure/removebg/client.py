"""remove.bg adapter for BackgroundRemover."""

import base64
import logging

import httpx

from cutout.config import RemovalConfig
from cutout.domain.media.port.background_remover import BackgroundRemover
from cutout.domain.shared.error import UpstreamServiceError

logger = logging.getLogger(__name__)


class RemoveBgClient(BackgroundRemover):
    """Calls the remove.bg API with the image inlined as base64 form data."""

    def __init__(self, config: RemovalConfig, http_client: httpx.AsyncClient) -> None:
        self._config = config
        self._http = http_client

    async def remove(self, image: bytes) -> bytes:
        data = {
            "image_file_b64": base64.b64encode(image).decode("ascii"),
            "size": self._config.size,
        }

        try:
            response = await self._http.post(
                self._config.api_url,
                data=data,
                headers={"X-Api-Key": self._config.api_key},
            )
        except httpx.RequestError as e:
            logger.exception("remove.bg request failed: %s", e)
            raise UpstreamServiceError(
                "remove.bg failed",
                code="removal_unavailable",
                details=str(e) or type(e).__name__,
            ) from e

        if not response.is_success:
            logger.error(
                "remove.bg failed: status=%d, body=%s",
                response.status_code,
                response.text,
            )
            raise UpstreamServiceError(
                "remove.bg failed",
                code="removal_failed",
                details=response.text,
            )

        return response.content

"""xAI Grok image adapter."""

from __future__ import annotations

import base64
import binascii
from typing import Any, Mapping, Optional

import requests

from poster_image_api.core.contracts import GenerationRequest
from poster_image_api.core.errors import ProviderError
from poster_image_api.core.utils import poster_filename
from .base import DEFAULT_MIME_TYPE, GeneratedImage, summarize_detail


API_URL = "https://api.x.ai/v1/images/generations"
DEFAULT_MODEL = "grok-2-image"
DEFAULT_REQUEST_TIMEOUT = 120.0


class GrokAdapter:
    name = "grok"

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        self.model = model
        self.timeout = timeout
        self._api_key = api_key
        self._session = session or requests.Session()

    def _payload(self, request: GenerationRequest) -> Mapping[str, Any]:
        # Grok picks its own dimensions; width/height are not part of the API.
        return {
            "model": self.model,
            "prompt": request.prompt,
            "n": 1,
            "response_format": "b64_json",
        }

    def generate(self, request: GenerationRequest) -> GeneratedImage:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        try:
            response = self._session.post(
                API_URL,
                headers=headers,
                json=self._payload(request),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise ProviderError(f"Grok request failed: {exc}") from exc

        if not response.ok:
            detail = summarize_detail(response.text)
            raise ProviderError(
                f"Grok API error: {response.status_code} - {detail}",
                status_code=response.status_code,
            )

        try:
            result = response.json()
        except ValueError as exc:
            raise ProviderError(f"Grok returned invalid JSON: {summarize_detail(response.text)}") from exc

        data = result.get("data") if isinstance(result, Mapping) else None
        if not data:
            raise ProviderError("No image data in Grok response")
        encoded = data[0].get("b64_json") if isinstance(data[0], Mapping) else None
        if not encoded:
            raise ProviderError("No image data in Grok response")
        try:
            image_bytes = base64.b64decode(encoded)
        except (binascii.Error, ValueError) as exc:
            raise ProviderError("Grok returned undecodable image data") from exc
        return GeneratedImage(
            image_bytes=image_bytes,
            mime_type=DEFAULT_MIME_TYPE,
            filename=poster_filename(),
        )

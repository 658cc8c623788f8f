"""OpenAI DALL-E image adapter."""

from __future__ import annotations

import base64
import binascii
from typing import Any, Dict, Optional

import openai
from openai import OpenAI

from poster_image_api.core.contracts import GenerationRequest
from poster_image_api.core.errors import ProviderError
from poster_image_api.core.utils import poster_filename
from .base import DEFAULT_MIME_TYPE, GeneratedImage, summarize_detail


DEFAULT_MODEL = "dall-e-3"
DALL_E_2_MODEL = "dall-e-2"

SIZE_WIDE = "1792x1024"
SIZE_TALL = "1024x1792"
SIZE_SQUARE = "1024x1024"


def map_size(width: int, height: int) -> str:
    """Bucket arbitrary dimensions into one of the three DALL-E 3 sizes."""
    ratio = width / height
    if ratio > 1.5:
        return SIZE_WIDE
    if ratio < 0.67:
        return SIZE_TALL
    return SIZE_SQUARE


def _request_kwargs(model: str, request: GenerationRequest) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = {
        "model": model,
        "prompt": request.prompt,
        "n": 1,
        "response_format": "b64_json",
    }
    if model == DALL_E_2_MODEL:
        # DALL-E 2 has no quality tiers and no non-square sizes.
        kwargs["size"] = SIZE_SQUARE
    else:
        kwargs["size"] = map_size(request.width, request.height)
        kwargs["quality"] = "hd"
    return kwargs


class OpenAIAdapter:
    name = "openai"

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL, *, client: Optional[OpenAI] = None) -> None:
        self.model = model
        self._api_key = api_key
        self._openai_client = client

    def _client(self) -> OpenAI:
        if self._openai_client is None:
            # One request per style; failures surface to the caller instead of retrying.
            self._openai_client = OpenAI(api_key=self._api_key, max_retries=0)
        return self._openai_client

    def generate(self, request: GenerationRequest) -> GeneratedImage:
        try:
            response = self._client().images.generate(**_request_kwargs(self.model, request))
        except openai.APIStatusError as exc:
            detail = summarize_detail(exc.response.text if exc.response is not None else exc.message)
            raise ProviderError(
                f"OpenAI API error: {exc.status_code} - {detail}",
                status_code=exc.status_code,
            ) from exc
        except openai.APIError as exc:
            raise ProviderError(f"OpenAI request failed: {exc}") from exc

        data = getattr(response, "data", None) or []
        if not data:
            raise ProviderError("No image data in OpenAI response")
        encoded = getattr(data[0], "b64_json", None)
        if not encoded:
            raise ProviderError("No image data in OpenAI response")
        try:
            image_bytes = base64.b64decode(encoded)
        except (binascii.Error, ValueError) as exc:
            raise ProviderError("OpenAI returned undecodable image data") from exc
        return GeneratedImage(
            image_bytes=image_bytes,
            mime_type=DEFAULT_MIME_TYPE,
            filename=poster_filename(),
        )

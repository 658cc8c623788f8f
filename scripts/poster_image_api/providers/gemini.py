"""Gemini image adapter (also serves Nano Banana Pro)."""

from __future__ import annotations

import base64
import logging
from typing import Any, Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from poster_image_api.core.contracts import GenerationRequest
from poster_image_api.core.errors import ProviderError
from poster_image_api.core.utils import poster_filename
from .base import DEFAULT_MIME_TYPE, GeneratedImage, summarize_detail


logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash-image"
NANO_BANANA_PRO_MODEL = "gemini-3-pro-image-preview"
IMAGEN_MODEL_PREFIX = "imagen-"


def is_imagen_model(model: str) -> bool:
    return model.startswith(IMAGEN_MODEL_PREFIX)


def _build_content_config() -> types.GenerateContentConfig:
    return types.GenerateContentConfig(response_modalities=["IMAGE", "TEXT"])


def _inline_bytes(part: Any) -> Optional[tuple[bytes, Optional[str]]]:
    inline_data = getattr(part, "inline_data", None)
    if inline_data is None:
        return None
    data = getattr(inline_data, "data", None)
    if not data:
        return None
    if isinstance(data, str):
        data = base64.b64decode(data)
    return data, getattr(inline_data, "mime_type", None)


class GeminiAdapter:
    """Single-turn ``generateContent`` call asking for image and text output.

    Imagen model ids go through ``generate_images`` instead, one image per call.

    Gemini chooses its own output dimensions; the requested width and height
    are not forwarded.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        *,
        name: str = "gemini",
        label: str = "Gemini",
        client: Optional[genai.Client] = None,
    ) -> None:
        self.name = name
        self.label = label
        self.model = model
        self._api_key = api_key
        self._genai_client = client

    def _client(self) -> genai.Client:
        if self._genai_client is None:
            self._genai_client = genai.Client(api_key=self._api_key)
        return self._genai_client

    def _api_error(self, exc: genai_errors.APIError) -> ProviderError:
        status = getattr(exc, "code", None)
        detail = summarize_detail(getattr(exc, "details", None) or getattr(exc, "message", None) or str(exc))
        return ProviderError(f"{self.label} API error: {status} - {detail}", status_code=status)

    def generate(self, request: GenerationRequest) -> GeneratedImage:
        if is_imagen_model(self.model):
            return self._generate_images(request)
        return self._generate_content(request)

    def _generate_images(self, request: GenerationRequest) -> GeneratedImage:
        try:
            response = self._client().models.generate_images(
                model=self.model,
                prompt=request.prompt,
                config=types.GenerateImagesConfig(number_of_images=1),
            )
        except genai_errors.APIError as exc:
            raise self._api_error(exc) from exc

        generated = getattr(response, "generated_images", None) or []
        for item in generated:
            image = getattr(item, "image", None) or item
            data = getattr(image, "image_bytes", None)
            if not data:
                continue
            return GeneratedImage(
                image_bytes=data,
                mime_type=getattr(image, "mime_type", None) or DEFAULT_MIME_TYPE,
                filename=poster_filename(),
            )
        raise ProviderError(f"No image data found in {self.label} response")

    def _generate_content(self, request: GenerationRequest) -> GeneratedImage:
        contents = [types.Content(role="user", parts=[types.Part(text=request.prompt)])]
        try:
            response = self._client().models.generate_content(
                model=self.model,
                contents=contents,
                config=_build_content_config(),
            )
        except genai_errors.APIError as exc:
            raise self._api_error(exc) from exc

        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            raise ProviderError(f"No candidates in {self.label} response")
        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None)
        if not parts:
            raise ProviderError(f"No content parts in {self.label} response")

        for part in parts:
            found = _inline_bytes(part)
            if found is None:
                continue
            data, mime_type = found
            logger.debug("%s returned %d bytes (%s)", self.label, len(data), mime_type)
            return GeneratedImage(
                image_bytes=data,
                mime_type=mime_type or DEFAULT_MIME_TYPE,
                filename=poster_filename(),
            )
        raise ProviderError(f"No image data found in {self.label} response")

"""Provider adapter interfaces."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Protocol

from poster_image_api.core.contracts import GenerationRequest


DEFAULT_MIME_TYPE = "image/png"
_MAX_ERROR_DETAIL = 2000


@dataclass
class GeneratedImage:
    image_bytes: bytes
    mime_type: str
    filename: str


class ProviderAdapter(Protocol):
    name: str
    model: str

    def generate(self, request: GenerationRequest) -> GeneratedImage:
        ...


def summarize_detail(detail: Any) -> str:
    """Render a vendor error body as a single line of text."""
    if detail is None:
        return ""
    if isinstance(detail, (bytes, bytearray)):
        detail = bytes(detail).decode("utf-8", errors="replace")
    if not isinstance(detail, str):
        detail = json.dumps(detail, ensure_ascii=False, default=str)
    detail = detail.strip().replace("\n", " ")
    if len(detail) > _MAX_ERROR_DETAIL:
        detail = detail[:_MAX_ERROR_DETAIL].rstrip() + "..."
    return detail

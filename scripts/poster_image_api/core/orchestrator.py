"""Sequential multi-style poster generation."""

from __future__ import annotations

import base64
import logging
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Sequence

from .contracts import (
    CancelSignal,
    GenerationRequest,
    GenerationRun,
    SizeDefinition,
    StyleDefinition,
    StyleOutcome,
    ToolUpdate,
    UpdateCallback,
)
from .errors import ConfigurationError, ProviderError
from .styles import render_prompt
from .utils import ensure_out_dir

if TYPE_CHECKING:
    from poster_image_api.providers.base import ProviderAdapter


logger = logging.getLogger(__name__)


def progress_text(index: int, total: int, style: StyleDefinition) -> str:
    return f"正在生成第 {index}/{total} 張海報（{style.name}）..."


class GenerationOrchestrator:
    """Run one provider over a list of styles, one call at a time.

    Progress is reported before every call and the cancellation signal is
    polled right after, so a cancelled run still returns the outcomes of the
    styles that already finished. A failing style is recorded and the loop
    moves on.
    """

    def __init__(
        self,
        provider: Optional["ProviderAdapter"],
        *,
        provider_name: Optional[str] = None,
        output_root: Optional[Path] = None,
        on_update: Optional[UpdateCallback] = None,
        signal: Optional[CancelSignal] = None,
    ) -> None:
        self.provider = provider
        self.provider_name = provider_name or getattr(provider, "name", "unknown")
        self.output_root = output_root
        self.on_update = on_update
        self.signal = signal

    def _emit(self, index: int, total: int, style: StyleDefinition) -> None:
        if self.on_update is None:
            return
        self.on_update(
            ToolUpdate(
                text=progress_text(index, total, style),
                details={"progress": index, "total": total},
            )
        )

    def _cancelled(self) -> bool:
        return self.signal is not None and self.signal.is_set()

    def _generate_one(
        self,
        provider: "ProviderAdapter",
        event_info: str,
        style: StyleDefinition,
        size: SizeDefinition,
        out_dir: Path,
    ) -> StyleOutcome:
        request = GenerationRequest(
            prompt=render_prompt(style, event_info),
            width=size.width,
            height=size.height,
            style_id=style.id,
        )
        try:
            image = provider.generate(request)
            output_path = out_dir / f"{style.id}-{image.filename}"
            output_path.write_bytes(image.image_bytes)
        except ProviderError as exc:
            logger.warning("Style %s failed on %s: %s", style.id, self.provider_name, exc)
            return StyleOutcome(style.id, style.name, None, False, error=str(exc))
        except Exception as exc:
            logger.exception("Unexpected error generating style %s", style.id)
            return StyleOutcome(style.id, style.name, None, False, error=str(exc) or type(exc).__name__)

        logger.info("Style %s written to %s", style.id, output_path)
        return StyleOutcome(
            style_id=style.id,
            style_name=style.name,
            output_path=output_path,
            success=True,
            image_data=base64.b64encode(image.image_bytes).decode("ascii"),
            mime_type=image.mime_type,
        )

    def run(self, event_info: str, styles: Sequence[StyleDefinition], size: SizeDefinition) -> GenerationRun:
        if not styles:
            raise ConfigurationError("No matching styles found")
        if self.provider is None:
            raise ConfigurationError(f"Provider {self.provider_name} not available")

        out_dir = ensure_out_dir(self.output_root)
        total = len(styles)
        logger.info(
            "Generating %d poster(s) with %s at %s into %s",
            total,
            self.provider_name,
            size.name,
            out_dir,
        )

        outcomes: List[StyleOutcome] = []
        cancelled = False
        for index, style in enumerate(styles, start=1):
            self._emit(index, total, style)
            if self._cancelled():
                logger.info("Cancelled before style %s (%d/%d)", style.id, index, total)
                cancelled = True
                break
            outcomes.append(self._generate_one(self.provider, event_info, style, size, out_dir))

        return GenerationRun(
            outcomes=outcomes,
            output_dir=out_dir,
            size=size,
            provider=self.provider_name,
            cancelled=cancelled,
        )

"""Public API for Poster Designer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from poster_image_api.core.config import default_config
from poster_image_api.core.contracts import (
    CancelSignal,
    CredentialLookup,
    NotifyCallback,
    PosterConfig,
    ToolResult,
    UpdateCallback,
)
from poster_image_api.core.errors import ConfigurationError
from poster_image_api.core.orchestrator import GenerationOrchestrator
from poster_image_api.core.report import build_tool_result, error_result
from poster_image_api.core.router import normalize_provider
from poster_image_api.core.styles import resolve_size, select_styles
from poster_image_api.providers import provider_credential, resolve_provider_adapter


logger = logging.getLogger(__name__)

TOOL_NAME = "design_poster"
TOOL_LABEL = "設計海報"

TOOL_PARAMETERS: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "event_info": {
            "type": "string",
            "description": "活動資訊，包含主題、主領、時間、地點、活動程序等",
        },
        "styles": {
            "type": "array",
            "items": {"type": "string"},
            "description": "指定要使用的風格 ID 列表，不指定則使用所有預設風格",
        },
        "size": {
            "type": "string",
            "description": "圖片尺寸：a4, a4-landscape, instagram, instagram-story, facebook（預設 a4）",
        },
        "provider": {
            "type": "string",
            "description": "圖片生成服務：gemini, nano-banana-pro, grok, openai（預設 gemini）",
        },
    },
    "required": ["event_info"],
}


def build_tool_description(config: Optional[PosterConfig] = None) -> str:
    config = config or default_config()
    styles = "\n".join(f"- {s.id}: {s.name} - {s.description}" for s in config.styles)
    sizes = ", ".join(f"{key} ({size.name})" for key, size in config.sizes.items())
    return (
        "設計活動邀請卡/海報。根據活動資訊自動產生多種風格的設計草稿。\n\n"
        f"可用風格：\n{styles}\n\n"
        f"可用尺寸：{sizes}"
    )


def design_poster(
    event_info: str,
    styles: Optional[Sequence[str]] = None,
    size: Optional[str] = None,
    provider: Optional[str] = None,
    *,
    model: Optional[str] = None,
    config: Optional[PosterConfig] = None,
    credentials: Optional[CredentialLookup] = None,
    on_update: Optional[UpdateCallback] = None,
    signal: Optional[CancelSignal] = None,
    output_root: Optional[Path] = None,
) -> ToolResult:
    """Generate one poster draft per selected style.

    Configuration problems (no matching style, unusable provider) come back as
    a single error result before any file or network work. Provider failures
    for individual styles are reported inside the summary instead.
    """
    config = config or default_config()
    size_def = resolve_size(config, size)
    selected = select_styles(config.styles, styles)
    if not selected:
        return error_result("錯誤：找不到指定的風格", "No matching styles found")

    provider_name = normalize_provider(provider, config.default_provider)
    try:
        adapter = resolve_provider_adapter(provider_name, config, credentials, model=model)
    except ConfigurationError as exc:
        return error_result(f"錯誤：{exc}", str(exc))
    if adapter is None:
        return error_result(
            f"錯誤：圖片生成服務 {provider_name} 不可用。請確認 API 金鑰已設定。",
            f"Provider {provider_name} not available",
        )

    orchestrator = GenerationOrchestrator(
        adapter,
        provider_name=provider_name,
        output_root=output_root or config.output_root,
        on_update=on_update,
        signal=signal,
    )
    run = orchestrator.run(event_info, selected, size_def)
    logger.info(
        "Poster run finished: %d succeeded, %d failed%s",
        len(run.successful),
        len(run.failed),
        " (cancelled)" if run.cancelled else "",
    )
    return build_tool_result(run)


def list_styles(config: Optional[PosterConfig] = None, notify: Optional[NotifyCallback] = None) -> str:
    config = config or default_config()
    lines = ["可用的海報設計風格：", ""]
    for style in config.styles:
        lines.extend([style.id, f"  名稱：{style.name}", f"  說明：{style.description}", ""])
    text = "\n".join(lines)
    if notify is not None:
        notify(text, "info")
    return text


def list_sizes(config: Optional[PosterConfig] = None, notify: Optional[NotifyCallback] = None) -> str:
    config = config or default_config()
    lines = ["可用的海報尺寸：", ""]
    for key, size in config.sizes.items():
        lines.append(f"{key}: {size.name} ({size.width}x{size.height})")
    text = "\n".join(lines) + "\n"
    if notify is not None:
        notify(text, "info")
    return text


def list_providers(
    config: Optional[PosterConfig] = None,
    credentials: Optional[CredentialLookup] = None,
    notify: Optional[NotifyCallback] = None,
) -> str:
    config = config or default_config()
    lines = ["可用的圖片生成服務：", ""]
    for name, descriptor in config.providers.items():
        if not descriptor.enabled:
            status = "停用"
        elif provider_credential(name, config, credentials):
            status = "可用"
        else:
            status = f"未設定 {descriptor.api_key_env}"
        marker = " (預設)" if name == config.default_provider else ""
        lines.append(f"{name}{marker}: {descriptor.default_model} [{status}]")
        lines.append(f"  模型：{', '.join(descriptor.available_models)}")
    text = "\n".join(lines) + "\n"
    if notify is not None:
        notify(text, "info")
    return text

"""Summary text and result payloads for finished generation runs."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping

from .contracts import ContentBlock, GenerationRun, ImageContent, StyleOutcome, TextContent, ToolResult


_STRIPPED_KEYS = {"image_data"}


def _serialize(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, bytes):
        return f"<bytes:{len(value)}>"
    if is_dataclass(value):
        return {k: _serialize(v) for k, v in asdict(value).items()}
    if isinstance(value, Mapping):
        return {str(k): _serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    return str(value)


def outcome_details(outcome: StyleOutcome) -> Dict[str, Any]:
    payload = _serialize(outcome)
    for key in _STRIPPED_KEYS:
        payload.pop(key, None)
    return payload


def build_summary(run: GenerationRun) -> str:
    successful = run.successful
    failed = run.failed

    lines = ["海報設計完成！", "", f"尺寸：{run.size.name}", f"成功：{len(successful)} 張"]
    if successful:
        lines.extend(["", "生成的海報："])
        lines.extend(f"- {outcome.style_name}: {outcome.output_path}" for outcome in successful)
    if failed:
        lines.extend(["", f"失敗：{len(failed)} 張"])
        lines.extend(f"- {outcome.style_name}: {outcome.error}" for outcome in failed)
    if run.cancelled:
        lines.extend(["", "已取消：其餘風格未生成"])
    return "\n".join(lines) + "\n"


def build_details(run: GenerationRun) -> Dict[str, Any]:
    return {
        "output_dir": str(run.output_dir),
        "size": _serialize(run.size),
        "provider": run.provider,
        "results": [outcome_details(outcome) for outcome in run.outcomes],
        "successful": len(run.successful),
        "failed": len(run.failed),
        "cancelled": run.cancelled,
    }


def build_tool_result(run: GenerationRun) -> ToolResult:
    content: List[ContentBlock] = [TextContent(text=build_summary(run))]
    for outcome in run.successful:
        if outcome.image_data and outcome.mime_type:
            content.append(ImageContent(data=outcome.image_data, mime_type=outcome.mime_type))
    return ToolResult(content=content, details=build_details(run))


def error_result(text: str, error: str) -> ToolResult:
    return ToolResult(content=[TextContent(text=text)], details={"error": error})

"""Core data contracts for Poster Designer."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Protocol, Sequence, Tuple, Union


PLACEHOLDER = "{eventInfo}"

NotifyLevel = Literal["info", "warning", "error"]
CredentialLookup = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class StyleDefinition:
    id: str
    name: str
    description: str
    prompt_template: str


@dataclass(frozen=True)
class SizeDefinition:
    width: int
    height: int
    name: str

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Size '{self.name}' must have positive dimensions.")


@dataclass(frozen=True)
class ProviderDescriptor:
    api_key_env: str
    enabled: bool
    default_model: str
    available_models: Tuple[str, ...]
    alt_api_key_envs: Tuple[str, ...] = ()


@dataclass(frozen=True)
class PosterConfig:
    default_size_key: str
    sizes: Mapping[str, SizeDefinition]
    styles: Tuple[StyleDefinition, ...]
    default_provider: str
    providers: Mapping[str, ProviderDescriptor]
    output_root: Optional[Path] = None

    def __post_init__(self) -> None:
        seen = set()
        for style in self.styles:
            if style.id in seen:
                raise ValueError(f"Duplicate style id '{style.id}'.")
            seen.add(style.id)
        if self.default_size_key not in self.sizes:
            raise ValueError(f"Default size '{self.default_size_key}' is not a known size.")

    @property
    def default_size(self) -> SizeDefinition:
        return self.sizes[self.default_size_key]


@dataclass(frozen=True)
class GenerationRequest:
    prompt: str
    width: int
    height: int
    style_id: Optional[str] = None


@dataclass
class StyleOutcome:
    style_id: str
    style_name: str
    output_path: Optional[Path]
    success: bool
    error: Optional[str] = None
    image_data: Optional[str] = None
    mime_type: Optional[str] = None


@dataclass
class GenerationRun:
    outcomes: List[StyleOutcome]
    output_dir: Path
    size: SizeDefinition
    provider: str
    cancelled: bool = False

    @property
    def successful(self) -> List[StyleOutcome]:
        return [outcome for outcome in self.outcomes if outcome.success]

    @property
    def failed(self) -> List[StyleOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.success]


@dataclass
class TextContent:
    text: str
    type: Literal["text"] = "text"


@dataclass
class ImageContent:
    data: str
    mime_type: str
    type: Literal["image"] = "image"


ContentBlock = Union[TextContent, ImageContent]


@dataclass
class ToolUpdate:
    text: str
    details: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class ToolResult:
    content: Sequence[ContentBlock]
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_error(self) -> bool:
        return "error" in self.details


class CancelSignal(Protocol):
    def is_set(self) -> bool:
        ...


UpdateCallback = Callable[[ToolUpdate], None]
NotifyCallback = Callable[[str, NotifyLevel], None]

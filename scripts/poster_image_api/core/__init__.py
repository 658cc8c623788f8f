"""Core contracts and helpers."""

from .contracts import (
    GenerationRequest,
    GenerationRun,
    PosterConfig,
    ProviderDescriptor,
    SizeDefinition,
    StyleDefinition,
    StyleOutcome,
    ToolResult,
    ToolUpdate,
)
from .errors import ConfigurationError, PosterDesignerError, ProviderError

__all__ = [
    "ConfigurationError",
    "GenerationRequest",
    "GenerationRun",
    "PosterConfig",
    "PosterDesignerError",
    "ProviderDescriptor",
    "ProviderError",
    "SizeDefinition",
    "StyleDefinition",
    "StyleOutcome",
    "ToolResult",
    "ToolUpdate",
]

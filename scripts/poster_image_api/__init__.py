"""Poster Designer public surface."""

from .api import build_tool_description, design_poster, list_providers, list_sizes, list_styles
from .core import ConfigurationError, PosterConfig, ProviderError, ToolResult, ToolUpdate
from .core.config import default_config

__all__ = [
    "build_tool_description",
    "design_poster",
    "list_providers",
    "list_sizes",
    "list_styles",
    "default_config",
    "ConfigurationError",
    "PosterConfig",
    "ProviderError",
    "ToolResult",
    "ToolUpdate",
]

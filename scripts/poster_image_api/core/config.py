"""Stock style, size and provider catalog."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Optional

from .contracts import PosterConfig, ProviderDescriptor, SizeDefinition, StyleDefinition


DEFAULT_SIZE_KEY = "a4"
DEFAULT_PROVIDER = "gemini"

_TJC_TEMPLATE = """Design a professional event poster for True Jesus Church.
Style: Clean, reverent, dignified.
Use appropriate religious imagery that aligns with True Jesus Church values.
Avoid: crosses with human figures, Catholic/Orthodox iconography, overly decorative or flashy elements, anything inappropriate for a conservative Christian church.
Colors: Prefer blue, white, gold, or earth tones.
Typography: Clear, readable, professional.
Include subtle Christian elements like dove, bible, wheat, or simple geometric patterns.

Event details:
{eventInfo}"""

_CHRISTIAN_TEMPLATE = """Design an event poster suitable for a Christian church event.
Style: Modern, welcoming, spiritually uplifting.
Use general Christian design elements that are broadly acceptable across denominations.
Include: soft lighting, nature elements, community/fellowship themes, subtle religious symbols.
Avoid: controversial imagery, extreme or provocative designs, denominational-specific symbols.
Colors: Warm and inviting palette.
Typography: Modern yet respectful.

Event details:
{eventInfo}"""

_CREATIVE_TEMPLATE = """Design a creative and eye-catching event poster.
Style: Bold, innovative, artistic freedom.
Be creative with colors, typography, and visual elements.
Match the event theme with imaginative interpretations.
Can use abstract art, modern design trends, unique layouts, striking visuals.
Make it memorable and visually impactful while still clearly communicating the event information.

Event details:
{eventInfo}"""


def default_styles() -> tuple[StyleDefinition, ...]:
    return (
        StyleDefinition(
            id="tjc-style",
            name="真耶穌教會風格",
            description="符合活動主題與真耶穌教會的風格，排除一切不適合的設計",
            prompt_template=_TJC_TEMPLATE,
        ),
        StyleDefinition(
            id="christian-general",
            name="一般基督教風格",
            description="符合活動主題與多數基督教可接受的設計元素，避免過度偏激的設計",
            prompt_template=_CHRISTIAN_TEMPLATE,
        ),
        StyleDefinition(
            id="creative-free",
            name="創意自由風格",
            description="符合活動即可，可以天馬行空的設計",
            prompt_template=_CREATIVE_TEMPLATE,
        ),
    )


def default_sizes() -> dict[str, SizeDefinition]:
    return {
        "a4": SizeDefinition(2480, 3508, "A4 (300dpi)"),
        "a4-landscape": SizeDefinition(3508, 2480, "A4 Landscape"),
        "instagram": SizeDefinition(1080, 1080, "Instagram Square"),
        "instagram-story": SizeDefinition(1080, 1920, "Instagram Story"),
        "facebook": SizeDefinition(1200, 630, "Facebook Post"),
    }


def default_providers() -> dict[str, ProviderDescriptor]:
    return {
        "gemini": ProviderDescriptor(
            api_key_env="GEMINI_API_KEY",
            enabled=True,
            default_model="gemini-2.5-flash-image",
            available_models=(
                "gemini-2.5-flash-image",
                "gemini-3-pro-image-preview",
                "imagen-4.0-generate-001",
            ),
        ),
        "nano-banana-pro": ProviderDescriptor(
            api_key_env="GEMINI_API_KEY",
            enabled=True,
            default_model="gemini-3-pro-image-preview",
            available_models=("gemini-3-pro-image-preview",),
        ),
        "grok": ProviderDescriptor(
            api_key_env="GROK_API_KEY",
            alt_api_key_envs=("XAI_API_KEY",),
            enabled=True,
            default_model="grok-2-image",
            available_models=("grok-2-image",),
        ),
        "openai": ProviderDescriptor(
            api_key_env="OPENAI_API_KEY",
            enabled=True,
            default_model="dall-e-3",
            available_models=("dall-e-3", "dall-e-2"),
        ),
    }


def default_config(output_root: Optional[Path] = None) -> PosterConfig:
    """Build a fresh copy of the stock configuration.

    Every call returns an independent value, so tests and embedding hosts can
    hold several configurations side by side.
    """
    return PosterConfig(
        default_size_key=DEFAULT_SIZE_KEY,
        sizes=MappingProxyType(default_sizes()),
        styles=default_styles(),
        default_provider=DEFAULT_PROVIDER,
        providers=MappingProxyType(default_providers()),
        output_root=output_root,
    )

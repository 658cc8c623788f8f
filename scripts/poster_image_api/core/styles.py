"""Style selection, size lookup and prompt rendering."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .contracts import PLACEHOLDER, PosterConfig, SizeDefinition, StyleDefinition


logger = logging.getLogger(__name__)


def select_styles(
    styles: Sequence[StyleDefinition],
    requested_ids: Optional[Sequence[str]] = None,
) -> List[StyleDefinition]:
    """Return the catalog styles to generate, always in catalog order.

    ``None`` selects the whole catalog and a bare string counts as one id.
    Unknown ids are dropped without error, so the result may be empty.
    """
    if requested_ids is None:
        return list(styles)
    if isinstance(requested_ids, str):
        requested_ids = [requested_ids]
    wanted = set(requested_ids)
    selected = [style for style in styles if style.id in wanted]
    unknown = wanted.difference(style.id for style in styles)
    if unknown:
        logger.debug("Ignoring unknown style ids: %s", ", ".join(sorted(unknown)))
    return selected


def render_prompt(style: StyleDefinition, event_info: str) -> str:
    return style.prompt_template.replace(PLACEHOLDER, event_info, 1)


def resolve_size(config: PosterConfig, key: Optional[str] = None) -> SizeDefinition:
    size_key = key or config.default_size_key
    return config.sizes.get(size_key, config.default_size)

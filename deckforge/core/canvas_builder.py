"""
Canvas Builder for Deckforge

Stage 3: turns an archetype and an aspect-ratio tag into concrete canvas
dimensions and the row and column halves of its grid for the Renderer.
"""

from typing import Dict, List, Optional, Tuple

from deckforge.models.deck import Canvas, GridSpec
from deckforge.models.layout import LayoutArchetype
from deckforge.utils.logger import setup_logger

logger = setup_logger(__name__)

# Pixel resolution per aspect-ratio tag. Text fitting math depends on these.
CANVAS_RESOLUTIONS: Dict[str, Tuple[int, int]] = {
    "16:9": (1920, 1080),
    "4:3": (1024, 768),
    "widescreen": (2560, 1080),
}

DEFAULT_ASPECT_RATIO = "16:9"

GRID_SEPARATOR = "/"


def parse_grid_rows(rows: str) -> List[Tuple[List[str], str]]:
    """
    Split the row half of a grid-template into (area names, size) pairs.

    Example:
        >>> parse_grid_rows('"title title" 120px "body visual" 1fr')
        [(['title', 'title'], '120px'), (['body', 'visual'], '1fr')]
    """
    result: List[Tuple[List[str], str]] = []
    parts = rows.split('"')
    # parts alternates: [prefix, areas, size, areas, size, ...]
    for index in range(1, len(parts), 2):
        areas = parts[index].split()
        size = parts[index + 1].strip() if index + 1 < len(parts) else ""
        result.append((areas, size or "auto"))
    return result


class CanvasBuilder:
    """Builds the canvas and grid for a slide."""

    def build_canvas(self, aspect_ratio: Optional[str]) -> Canvas:
        tag = aspect_ratio or DEFAULT_ASPECT_RATIO
        if tag not in CANVAS_RESOLUTIONS:
            logger.warning(f"Unknown aspect ratio '{tag}', falling back to '{DEFAULT_ASPECT_RATIO}'")
            tag = DEFAULT_ASPECT_RATIO
        width, height = CANVAS_RESOLUTIONS[tag]
        return Canvas(width=width, height=height, aspect_ratio=tag)

    def build_grid(self, archetype: LayoutArchetype) -> GridSpec:
        template = archetype.grid_template
        rows, separator, columns = template.partition(GRID_SEPARATOR)
        if not separator:
            logger.warning(f"Archetype '{archetype.id}' grid has no column section")
        return GridSpec(rows=rows.strip(), columns=columns.strip(), areas=template)

    def build(self, archetype: LayoutArchetype, aspect_ratio: Optional[str]) -> Tuple[Canvas, GridSpec]:
        """
        Build canvas and grid for a slide.

        Args:
            archetype: Selected archetype
            aspect_ratio: '16:9', '4:3' or 'widescreen'

        Returns:
            (Canvas, GridSpec)
        """
        return self.build_canvas(aspect_ratio), self.build_grid(archetype)

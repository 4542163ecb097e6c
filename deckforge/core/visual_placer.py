"""
Visual Placer for Deckforge

Stage 5: attaches a placement contract to image blocks. No pixels are read
or cropped; a downstream image renderer honours the contract.
"""

from typing import List

from deckforge.models.blocks import BlockKind, ContentBlock, ImagePlacement
from deckforge.models.layout import LayoutArchetype
from deckforge.utils.logger import setup_logger

logger = setup_logger(__name__)

DEFAULT_VISUAL_ASPECT_RATIO = "16:9"


class VisualPlacer:
    """Places image blocks into the archetype's visual region."""

    def place(self, blocks: List[ContentBlock], archetype: LayoutArchetype) -> List[ContentBlock]:
        target = archetype.regions.visual.aspect_ratio or DEFAULT_VISUAL_ASPECT_RATIO
        placed: List[ContentBlock] = []

        for block in blocks:
            if block.kind != BlockKind.IMAGE:
                placed.append(block)
                continue

            placement = ImagePlacement(
                fitting_mode="cover",
                target_aspect_ratio=target,
                focal_point="center",
            )
            content = block.content.model_copy(update={"placement": placement})
            placed.append(block.model_copy(update={"content": content}))
            logger.debug(f"Block {block.id}: cover-fit to {target}")

        return placed

"""
Block Extractor for Deckforge

Stage 1 of the slide pipeline: converts one outline slide into an ordered
list of typed content blocks with layout metadata.

Emission rules:
- one title block when the title is non-empty (must-show, heavy)
- one bullets block per content entry, in order; the first
  MUST_SHOW_BULLET_LIMIT are must-show, the rest nice-to-have
- at most one image block, from the first image (must-show, heavy)
- at most one chart block holding the raw statistics (must-show, heavy)
- one trailing notes block when the outline carries speaker notes

A slide with no content yields an empty list; nothing here raises.
"""

from typing import Any, List, Optional

from deckforge.models.blocks import (
    BlockKind,
    BulletsPayload,
    ChartPayload,
    ContentBlock,
    ImagePayload,
    NotesPayload,
    Priority,
    TitlePayload,
    VisualWeight,
)
from deckforge.models.outline import SlideOutline
from deckforge.utils.logger import setup_logger

logger = setup_logger(__name__)

# Bullets at positions below this index are must-show
MUST_SHOW_BULLET_LIMIT = 3


def has_statistics(statistics: Any) -> bool:
    """Whether a raw statistics payload carries anything chartable."""
    if statistics is None:
        return False
    if isinstance(statistics, dict):
        return bool(statistics.get("data"))
    if isinstance(statistics, (list, tuple)):
        return len(statistics) > 0
    if isinstance(statistics, str):
        return bool(statistics.strip())
    return False


class BlockExtractor:
    """Turns an outline slide into content blocks."""

    def extract(self, slide: SlideOutline, slide_number: Optional[int] = None) -> List[ContentBlock]:
        """
        Extract the ordered block list for one slide.

        Args:
            slide: Outline slide
            slide_number: Position used in block IDs (defaults to slide.slide_number, then 1)

        Returns:
            Ordered list of ContentBlock
        """
        number = slide_number or slide.slide_number or 1
        blocks: List[ContentBlock] = []

        if slide.title:
            blocks.append(ContentBlock(
                id=f"title-{number}",
                kind=BlockKind.TITLE,
                content=TitlePayload(text=slide.title),
                priority=Priority.MUST_SHOW,
                estimated_length=len(slide.title),
                visual_weight=VisualWeight.HEAVY,
                intent=slide.slide_type,
            ))

        for index, item in enumerate(slide.content):
            blocks.append(ContentBlock(
                id=f"content-{number}-{index}",
                kind=BlockKind.BULLETS,
                content=BulletsPayload(items=[item]),
                priority=Priority.MUST_SHOW if index < MUST_SHOW_BULLET_LIMIT else Priority.NICE_TO_HAVE,
                estimated_length=len(item),
                visual_weight=VisualWeight.MEDIUM,
                intent="supporting-detail",
            ))

        if slide.images:
            image = slide.images[0]
            blocks.append(ContentBlock(
                id=f"image-{number}",
                kind=BlockKind.IMAGE,
                content=ImagePayload(
                    url=image.url,
                    alt=image.alt,
                    width=image.width,
                    height=image.height,
                    license=image.license,
                    source=image.source,
                ),
                priority=Priority.MUST_SHOW,
                estimated_length=0,
                visual_weight=VisualWeight.HEAVY,
                intent="visual-support",
            ))

        if has_statistics(slide.statistics):
            blocks.append(ContentBlock(
                id=f"chart-{number}",
                kind=BlockKind.CHART,
                content=ChartPayload(raw=slide.statistics),
                priority=Priority.MUST_SHOW,
                estimated_length=0,
                visual_weight=VisualWeight.HEAVY,
                intent="data-visualization",
            ))

        if slide.speaker_notes:
            blocks.append(ContentBlock(
                id=f"notes-{number}",
                kind=BlockKind.NOTES,
                content=NotesPayload(text=slide.speaker_notes),
                priority=Priority.NICE_TO_HAVE,
                estimated_length=len(slide.speaker_notes),
                visual_weight=VisualWeight.LIGHT,
                intent="speaker-notes",
            ))

        logger.debug(f"Slide {number}: extracted {len(blocks)} blocks")
        return blocks


def extract_blocks(slide: SlideOutline, slide_number: Optional[int] = None) -> List[ContentBlock]:
    """Convenience function wrapping BlockExtractor.extract()."""
    return BlockExtractor().extract(slide, slide_number)

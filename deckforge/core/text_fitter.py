"""
Text Fitter for Deckforge

Stage 4: shrink-to-fit font sizing for title and bullet blocks.

Font metrics are approximated: the average glyph is taken to be 0.6x the
font size wide, and 80% of the canvas width is usable. Each block is sized
independently in a single pass:

    estimated_width = text_length * 0.6 * min_size
    available_width = canvas_width * 0.8
    font_size = max_size                                  if estimated <= available
              = max(min_size, floor(max_size * available / estimated))  otherwise
"""

import math
from typing import List, Tuple

from deckforge.models.blocks import BlockKind, ContentBlock
from deckforge.models.deck import Canvas
from deckforge.models.theme_config import DesignTokens
from deckforge.utils.logger import setup_logger

logger = setup_logger(__name__)

GLYPH_WIDTH_RATIO = 0.6
AVAILABLE_WIDTH_RATIO = 0.8


def text_length_of(block: ContentBlock) -> int:
    """Characters to fit: the title text or the longest bullet line."""
    payload = block.content
    if block.kind == BlockKind.TITLE:
        return len(payload.text)
    if block.kind == BlockKind.BULLETS:
        return payload.text_length
    return block.estimated_length


def size_range(block: ContentBlock, theme: DesignTokens) -> Tuple[int, int]:
    if block.kind == BlockKind.TITLE:
        return theme.sizes.title_min, theme.sizes.title_max
    return theme.sizes.body_min, theme.sizes.body_max


def fit_font_size(text_length: int, min_size: int, max_size: int, canvas_width: int) -> int:
    """Compute the fitted font size for a single line of text."""
    if text_length <= 0:
        return max_size

    estimated_width = text_length * GLYPH_WIDTH_RATIO * min_size
    available_width = canvas_width * AVAILABLE_WIDTH_RATIO

    if estimated_width <= available_width:
        return max_size

    scaled = math.floor(max_size * available_width / estimated_width)
    return max(min_size, min(max_size, scaled))


class TextFitter:
    """Assigns fitted font sizes to title and bullet blocks."""

    def fit(self, blocks: List[ContentBlock], canvas: Canvas, theme: DesignTokens) -> List[ContentBlock]:
        fitted: List[ContentBlock] = []
        for block in blocks:
            if not block.is_text:
                fitted.append(block)
                continue

            min_size, max_size = size_range(block, theme)
            font_size = fit_font_size(text_length_of(block), min_size, max_size, canvas.width)
            if font_size < max_size:
                logger.debug(f"Block {block.id}: shrunk to {font_size}px (max {max_size}px)")
            fitted.append(block.with_styling(font_size=font_size))
        return fitted

"""
Layout Balancer for Deckforge

Stage 7: vertical rhythm and text-heavy detection.

- Vertical rhythm: the first text block (title or bullets) gets margin 0,
  every later text block gets RHYTHM_SPACING_PX.
- Text-heavy: when title and bullet text together exceed TEXT_HEAVY_THRESHOLD
  characters and the slide has no image or chart, the leading block's
  intent gets NEEDS_VISUAL_SUFFIX. Content is never changed.
"""

from dataclasses import dataclass
from typing import List

from deckforge.models.blocks import ContentBlock
from deckforge.utils.logger import setup_logger

logger = setup_logger(__name__)

TEXT_HEAVY_THRESHOLD = 800
NEEDS_VISUAL_SUFFIX = "-needs-visual"
RHYTHM_SPACING_PX = 24


@dataclass
class BalanceReport:
    total_text_length: int
    has_visual: bool

    @property
    def needs_visual(self) -> bool:
        return self.total_text_length > TEXT_HEAVY_THRESHOLD and not self.has_visual


def analyze_balance(blocks: List[ContentBlock]) -> BalanceReport:
    return BalanceReport(
        total_text_length=sum(block.estimated_length for block in blocks if block.is_text),
        has_visual=any(block.is_visual for block in blocks),
    )


class LayoutBalancer:
    """Applies spacing rhythm and flags text-heavy slides."""

    def balance(self, blocks: List[ContentBlock]) -> List[ContentBlock]:
        balanced: List[ContentBlock] = []
        seen_text = False
        for block in blocks:
            if block.is_text:
                margin = RHYTHM_SPACING_PX if seen_text else 0
                block = block.with_styling(margin_top=margin)
                seen_text = True
            balanced.append(block)

        report = analyze_balance(balanced)
        if report.needs_visual and balanced:
            leading = balanced[0]
            if not leading.intent.endswith(NEEDS_VISUAL_SUFFIX):
                balanced[0] = leading.model_copy(update={"intent": leading.intent + NEEDS_VISUAL_SUFFIX})
            logger.info(
                f"Slide text totals {report.total_text_length} characters with no visual, "
                f"flagged '{balanced[0].intent}'"
            )

        return balanced

"""
Consistency Checker for Deckforge

Stage 9 (deck level): compares layout properties across every rendered
slide. Findings are reported, never raised; export always proceeds.

Checks:
- title alignment: the title row starts at the same pixel offset on every
  titled slide (fixed row heights above it plus the title block's margin)
- footer baseline: the footer area sits in the last grid row with the same
  fixed height on every slide
- colour compliance: WCAG AA contrast of text on background (4.5) and of
  the primary colour on background (3.0, large text)
- spacing rhythm: first text block margin 0, later text blocks 24px
"""

import re
from typing import List, Optional

from deckforge.core.canvas_builder import parse_grid_rows
from deckforge.core.layout_balancer import RHYTHM_SPACING_PX
from deckforge.models.blocks import BlockKind
from deckforge.models.deck import ConsistencyReport, SlideLayout
from deckforge.models.theme_config import DesignTokens
from deckforge.utils.color_contrast import (
    AA_LARGE_TEXT,
    AA_NORMAL_TEXT,
    get_contrast_ratio,
)
from deckforge.utils.logger import setup_logger

logger = setup_logger(__name__)

CONSISTENT = "consistent"
INCONSISTENT = "inconsistent"
NOT_APPLICABLE = "not-applicable"

_PIXELS = re.compile(r"^(\d+(?:\.\d+)?)px$")


def _fixed_px(size: str) -> Optional[float]:
    match = _PIXELS.match(size.strip())
    return float(match.group(1)) if match else None


def title_offset(slide: SlideLayout) -> Optional[float]:
    """
    Pixel offset of the slide's title, or None when it cannot be fixed
    (title area missing or a flexible row sits above it).
    """
    title_area = slide.archetype.regions.title.first_area
    offset = 0.0
    for areas, size in parse_grid_rows(slide.grid.rows):
        if title_area in areas:
            title = next((block for block in slide.blocks if block.kind == BlockKind.TITLE), None)
            margin = title.styling.margin_top if title and title.styling and title.styling.margin_top else 0
            return offset + margin
        height = _fixed_px(size)
        if height is None:
            return None
        offset += height
    return None


def footer_row(slide: SlideLayout) -> Optional[str]:
    """Height of the footer row if the footer area is the last grid row, else None."""
    rows = parse_grid_rows(slide.grid.rows)
    if not rows:
        return None
    areas, size = rows[-1]
    footer_area = slide.archetype.regions.footer.first_area
    if footer_area not in areas:
        return None
    return size


class ConsistencyChecker:
    """Validates cross-slide layout invariants."""

    def check(self, slides: List[SlideLayout], theme: DesignTokens) -> ConsistencyReport:
        issues: List[str] = []

        title_alignment = self._check_titles(slides, issues)
        footer_baseline = self._check_footers(slides, issues)
        color_compliance = self._check_colors(theme, issues)
        spacing_rhythm = self._check_rhythm(slides, issues)

        if issues:
            logger.warning(f"Consistency check found {len(issues)} issue(s)")
        else:
            logger.info(f"Consistency check passed for {len(slides)} slide(s)")

        return ConsistencyReport(
            title_alignment=title_alignment,
            footer_baseline=footer_baseline,
            color_compliance=color_compliance,
            spacing_rhythm=spacing_rhythm,
            issues=issues,
        )

    def _check_titles(self, slides: List[SlideLayout], issues: List[str]) -> str:
        offsets = {}
        for slide in slides:
            if not any(block.kind == BlockKind.TITLE for block in slide.blocks):
                continue
            offsets[slide.slide_number] = title_offset(slide)

        if not offsets:
            return NOT_APPLICABLE

        distinct = set(offsets.values())
        if len(distinct) == 1 and None not in distinct:
            return CONSISTENT

        reference = next(iter(offsets.values()))
        for number, offset in offsets.items():
            if offset is None or offset != reference:
                issues.append(f"Slide {number}: title offset {offset} differs from {reference}")
        return INCONSISTENT

    def _check_footers(self, slides: List[SlideLayout], issues: List[str]) -> str:
        if not slides:
            return NOT_APPLICABLE

        heights = {slide.slide_number: footer_row(slide) for slide in slides}
        for number, height in heights.items():
            if height is None:
                issues.append(f"Slide {number}: footer is not in the last grid row")

        distinct = set(heights.values())
        if None in distinct:
            return INCONSISTENT
        if len(distinct) > 1:
            issues.append(f"Footer row heights differ across slides: {sorted(distinct)}")
            return INCONSISTENT
        return CONSISTENT

    def _check_colors(self, theme: DesignTokens, issues: List[str]) -> bool:
        colors = theme.colors
        compliant = True

        text_ratio = get_contrast_ratio(colors.text, colors.background)
        if text_ratio < AA_NORMAL_TEXT:
            issues.append(
                f"Text contrast {text_ratio:.2f}:1 on background is below {AA_NORMAL_TEXT}:1"
            )
            compliant = False

        primary_ratio = get_contrast_ratio(colors.primary, colors.background)
        if primary_ratio < AA_LARGE_TEXT:
            issues.append(
                f"Primary contrast {primary_ratio:.2f}:1 on background is below {AA_LARGE_TEXT}:1"
            )
            compliant = False

        return compliant

    def _check_rhythm(self, slides: List[SlideLayout], issues: List[str]) -> bool:
        compliant = True
        for slide in slides:
            text_blocks = [block for block in slide.blocks if block.is_text]
            for index, block in enumerate(text_blocks):
                expected = 0 if index == 0 else RHYTHM_SPACING_PX
                actual = block.styling.margin_top if block.styling else None
                if actual != expected:
                    issues.append(
                        f"Slide {slide.slide_number}: block {block.id} margin {actual} (expected {expected})"
                    )
                    compliant = False
        return compliant

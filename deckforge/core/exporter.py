"""
Exporter for Deckforge

Stage 10 (deck level): serialises a finished deck into JSON, Markdown and
one self-contained HTML document. PDF and PowerPoint are placeholder
strings; no binaries are generated.
"""

import json
from html import escape
from typing import Any, Dict, List

from deckforge.models.blocks import BlockKind
from deckforge.models.deck import (
    ConsistencyReport,
    ExportFormats,
    SlideLayout,
    VisualAssetsSummary,
)
from deckforge.models.outline import PitchDeckOutline
from deckforge.models.theme_config import DesignTokens
from deckforge.utils.logger import setup_logger

logger = setup_logger(__name__)

PDF_PLACEHOLDER = "PDF generation requires headless browser rendering"
POWERPOINT_PLACEHOLDER = "PPTX mapping requires shape conversion"

NAVIGATION_SCRIPT = """
(function () {
  var slides = document.querySelectorAll('.slide');
  var current = 0;
  function show(index) {
    if (index < 0 || index >= slides.length) { return; }
    current = index;
    slides[current].scrollIntoView({ behavior: 'smooth' });
  }
  document.addEventListener('keydown', function (event) {
    if (event.key === 'ArrowRight' || event.key === 'PageDown') {
      event.preventDefault();
      show(current + 1);
    } else if (event.key === 'ArrowLeft' || event.key === 'PageUp') {
      event.preventDefault();
      show(current - 1);
    }
  });
})();
""".strip()

DOCUMENT_STYLES = """
body { margin: 0; padding: 0; font-family: var(--font-body); background: #f5f5f5; }
.presentation-container { margin: 0 auto; padding: 20px; }
.slide {
  margin: 20px auto;
  position: relative;
  width: fit-content;
  border-radius: var(--border-radius);
  box-shadow: var(--shadow-medium);
  overflow: hidden;
}
.slide-number {
  position: absolute;
  bottom: 10px;
  right: 10px;
  background: var(--color-primary);
  color: var(--color-background);
  padding: 5px 10px;
  border-radius: var(--border-radius);
  font-size: 12px;
}
""".strip()


def build_json_export(
    outline: PitchDeckOutline,
    slides: List[SlideLayout],
    theme: DesignTokens,
    visual_assets: VisualAssetsSummary,
    consistency: ConsistencyReport,
) -> str:
    """Full structural dump of the deck, pretty-printed."""
    document: Dict[str, Any] = {
        "outline": outline.model_dump(mode="json"),
        "slides": [slide.model_dump(mode="json") for slide in slides],
        "theme": theme.model_dump(mode="json"),
        "visual_assets": visual_assets.model_dump(mode="json"),
        "consistency": consistency.model_dump(mode="json"),
    }
    return json.dumps(document, indent=2, ensure_ascii=False)


def build_markdown_export(outline: PitchDeckOutline, slides: List[SlideLayout]) -> str:
    lines: List[str] = [f"# {outline.title}", ""]
    if outline.subtitle:
        lines += [f"## {outline.subtitle}", ""]
    lines += ["---", ""]

    for slide in slides:
        lines += [f"## Slide {slide.slide_number}", ""]
        for block in slide.blocks:
            if block.kind == BlockKind.TITLE:
                lines += [f"### {block.content.text}", ""]
            elif block.kind == BlockKind.BULLETS:
                lines += [f"- {item}" for item in block.content.items]
                lines.append("")
            elif block.kind == BlockKind.IMAGE:
                lines += [f"![{block.content.alt or 'Image'}]({block.content.url or '#'})", ""]
        lines += ["---", ""]

    return "\n".join(lines)


def _unique(items: List[str]) -> List[str]:
    seen = set()
    ordered = []
    for item in items:
        if item not in seen:
            seen.add(item)
            ordered.append(item)
    return ordered


def build_html_export(outline: PitchDeckOutline, slides: List[SlideLayout], theme: DesignTokens) -> str:
    """One standalone HTML document with every slide, shared styles and key navigation."""
    variables = "\n".join(f"  {line}" for line in theme.to_css_variables().splitlines())
    slide_styles = "\n".join(_unique([slide.render_data.style_sheet for slide in slides]))

    sections = []
    for slide in slides:
        sections.append(
            f'<section class="slide" id="slide-{slide.slide_number}" data-slide="{slide.slide_number}">'
            f"{slide.render_data.markup}"
            f'<div class="slide-number">{slide.slide_number}</div>'
            f"</section>"
        )

    title = escape(outline.title or "Pitch Deck")
    return "\n".join([
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="UTF-8">',
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
        f"<title>{title}</title>",
        "<style>",
        ":root {",
        variables,
        "}",
        DOCUMENT_STYLES,
        slide_styles,
        "</style>",
        "</head>",
        "<body>",
        '<main class="presentation-container">',
        "\n".join(sections),
        "</main>",
        "<script>",
        NAVIGATION_SCRIPT,
        "</script>",
        "</body>",
        "</html>",
    ])


class Exporter:
    """Produces every export format from a finished deck."""

    def export(
        self,
        outline: PitchDeckOutline,
        slides: List[SlideLayout],
        theme: DesignTokens,
        visual_assets: VisualAssetsSummary,
        consistency: ConsistencyReport,
    ) -> ExportFormats:
        formats = ExportFormats(
            json=build_json_export(outline, slides, theme, visual_assets, consistency),
            markdown=build_markdown_export(outline, slides),
            html=build_html_export(outline, slides, theme),
            pdf=PDF_PLACEHOLDER,
            powerpoint=POWERPOINT_PLACEHOLDER,
        )
        logger.info(f"Exported {len(slides)} slide(s) to json, markdown and html")
        return formats

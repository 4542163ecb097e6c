"""
Renderer for Deckforge

Stage 8: a pure function of (blocks, archetype, theme, canvas) producing the
slide's markup fragment, its stylesheet and layout measurements.

Markup is one grid container sized to the canvas with one child per block,
placed by grid-area on the block's region:

    title                        -> title region
    subtitle, bullets, quote,
    table                        -> body region (first area)
    image, chart, logo           -> visual region (last area)
    footer                       -> footer region
    notes                        -> not rendered

All visual styling comes from theme token variables; the only per-block
literal is the fitted font size.
"""

from html import escape
from typing import Callable, Dict, List, Optional

from deckforge.core.layout_balancer import RHYTHM_SPACING_PX
from deckforge.models.blocks import BlockKind, ContentBlock
from deckforge.models.deck import Canvas, LayoutMeasurements, RenderData, VisualAreas
from deckforge.models.layout import LayoutArchetype
from deckforge.models.theme_config import DesignTokens
from deckforge.utils.chart_type_mapper import ChartTypeMapper
from deckforge.utils.logger import setup_logger

logger = setup_logger(__name__)

TITLE_LINE_HEIGHT_RATIO = 1.2
VISUAL_AREA_PER_BLOCK = 0.3

BASE_STYLES = """
.slide-container {
  font-family: var(--font-body);
  color: var(--color-text);
  background: var(--color-background);
  position: relative;
  overflow: hidden;
  box-sizing: border-box;
}
.slide-grid {
  padding: var(--spacing-lg);
  gap: var(--spacing-md);
  box-sizing: border-box;
}
.block { display: flex; flex-direction: column; justify-content: center; }
.block--spaced { margin-top: var(--rhythm-gap); }
.title-block {
  font-family: var(--font-heading);
  font-size: var(--title-size);
  font-weight: 700;
  line-height: var(--line-height);
  color: var(--color-primary);
}
.subtitle-block { font-size: var(--body-size); color: var(--color-muted); }
.content-block { font-size: var(--body-size); line-height: var(--line-height); }
.content-block ul { margin: 0; padding-left: var(--spacing-md); }
.quote-block { font-style: italic; border-left: var(--border-width) solid var(--color-accent); padding-left: var(--spacing-sm); }
.table-block table { border-collapse: collapse; }
.table-block th, .table-block td { border: var(--border-width) solid var(--color-muted); padding: var(--spacing-xs); }
.visual-block { align-items: center; }
.image-content {
  max-width: 100%;
  max-height: 100%;
  border-radius: var(--border-radius);
  box-shadow: var(--shadow-medium);
}
.chart-content { width: 100%; height: 100%; color: var(--color-text); }
.footer-block { font-size: var(--body-size); color: var(--color-muted); }
""".strip()


def build_style_sheet(theme: DesignTokens) -> str:
    """Theme variables under :root followed by the block rules."""
    variables = theme.to_css_variables().splitlines()
    variables.append(f"--rhythm-gap: {RHYTHM_SPACING_PX}px;")
    root = ":root {\n" + "\n".join(f"  {line}" for line in variables) + "\n}"
    return f"{root}\n{BASE_STYLES}"


def region_for(block: ContentBlock, archetype: LayoutArchetype) -> Optional[str]:
    """Grid area a block is placed in, or None when it is not rendered."""
    regions = archetype.regions
    if block.kind == BlockKind.TITLE:
        return regions.title.first_area
    if block.kind in (BlockKind.SUBTITLE, BlockKind.BULLETS, BlockKind.QUOTE, BlockKind.TABLE):
        return regions.body.first_area
    if block.kind in (BlockKind.IMAGE, BlockKind.CHART, BlockKind.LOGO):
        return regions.visual.last_area
    if block.kind == BlockKind.FOOTER:
        return regions.footer.first_area
    return None


def estimate_text_height(blocks: List[ContentBlock], theme: DesignTokens) -> float:
    height = 0.0
    for block in blocks:
        if block.kind == BlockKind.TITLE:
            height += theme.sizes.title_max * TITLE_LINE_HEIGHT_RATIO
        elif block.kind == BlockKind.BULLETS:
            height += theme.sizes.body_max * theme.sizes.line_height * len(block.content.items)
    return height


def calculate_visual_areas(blocks: List[ContentBlock], archetype: LayoutArchetype) -> VisualAreas:
    count = sum(1 for block in blocks if block.is_visual)
    return VisualAreas(
        visual_block_count=count,
        total_visual_area=round(count * VISUAL_AREA_PER_BLOCK, 4),
        layout=archetype.name,
    )


# ============================================================================
# BLOCK MARKUP
# ============================================================================

def _open_div(block: ContentBlock, css_class: str, area: str) -> str:
    classes = ["block", css_class]
    if block.styling is not None and block.styling.margin_top:
        classes.append("block--spaced")

    styles = [f"grid-area: {area};"]
    if block.styling is not None and block.styling.font_size is not None:
        styles.append(f"font-size: {block.styling.font_size}px;")
    if block.styling is not None and block.styling.alignment:
        styles.append(f"text-align: {block.styling.alignment};")

    return (
        f'<div id="{escape(block.id)}" class="{" ".join(classes)}" '
        f'data-kind="{block.kind.value}" style="{" ".join(styles)}">'
    )


def _title_html(block: ContentBlock, area: str) -> str:
    return f"{_open_div(block, 'title-block', area)}{escape(block.content.text)}</div>"


def _subtitle_html(block: ContentBlock, area: str) -> str:
    return f"{_open_div(block, 'subtitle-block', area)}{escape(block.content.text)}</div>"


def _bullets_html(block: ContentBlock, area: str) -> str:
    items = "".join(f"<li>{escape(item)}</li>" for item in block.content.items)
    return f"{_open_div(block, 'content-block', area)}<ul>{items}</ul></div>"


def _quote_html(block: ContentBlock, area: str) -> str:
    payload = block.content
    cite = f"<cite>{escape(payload.attribution)}</cite>" if payload.attribution else ""
    return (
        f"{_open_div(block, 'quote-block', area)}"
        f"<blockquote>{escape(payload.text)}{cite}</blockquote></div>"
    )


def _table_html(block: ContentBlock, area: str) -> str:
    payload = block.content
    head = "".join(f"<th>{escape(header)}</th>" for header in payload.headers)
    rows = "".join(
        "<tr>" + "".join(f"<td>{escape(cell)}</td>" for cell in row) + "</tr>"
        for row in payload.rows
    )
    return (
        f"{_open_div(block, 'table-block', area)}"
        f"<table><thead><tr>{head}</tr></thead><tbody>{rows}</tbody></table></div>"
    )


def _image_html(block: ContentBlock, area: str) -> str:
    payload = block.content
    attributes = [
        f'src="{escape(payload.url or "#")}"',
        f'alt="{escape(payload.alt)}"',
        'class="image-content"',
    ]
    if payload.placement is not None:
        placement = payload.placement
        attributes.append(
            f'style="object-fit: {escape(placement.fitting_mode)}; '
            f'object-position: {escape(placement.focal_point)};"'
        )
        attributes.append(f'data-aspect-ratio="{escape(placement.target_aspect_ratio)}"')
    return f"{_open_div(block, 'visual-block', area)}<img {' '.join(attributes)} /></div>"


def _chart_html(block: ContentBlock, area: str) -> str:
    payload = block.content
    svg = payload.svg or ""
    label = ChartTypeMapper.get_chart_type_display_name(payload.chart_type)
    return (
        f"{_open_div(block, 'visual-block', area)}"
        f'<div class="chart-content" data-chart-type="{escape(payload.chart_type)}" '
        f'role="img" aria-label="{escape(label)}">{svg}</div></div>'
    )


def _logo_html(block: ContentBlock, area: str) -> str:
    payload = block.content
    return (
        f"{_open_div(block, 'visual-block', area)}"
        f'<img src="{escape(payload.url or "#")}" alt="{escape(payload.alt)}" class="image-content" /></div>'
    )


def _footer_html(block: ContentBlock, area: str) -> str:
    return f"{_open_div(block, 'footer-block', area)}{escape(block.content.text)}</div>"


BLOCK_RENDERERS: Dict[BlockKind, Callable[[ContentBlock, str], str]] = {
    BlockKind.TITLE: _title_html,
    BlockKind.SUBTITLE: _subtitle_html,
    BlockKind.BULLETS: _bullets_html,
    BlockKind.QUOTE: _quote_html,
    BlockKind.TABLE: _table_html,
    BlockKind.IMAGE: _image_html,
    BlockKind.CHART: _chart_html,
    BlockKind.LOGO: _logo_html,
    BlockKind.FOOTER: _footer_html,
}


class Renderer:
    """Renders balanced blocks into markup, stylesheet and measurements."""

    def render(
        self,
        blocks: List[ContentBlock],
        archetype: LayoutArchetype,
        theme: DesignTokens,
        canvas: Canvas,
    ) -> RenderData:
        children: List[str] = []
        for block in blocks:
            area = region_for(block, archetype)
            renderer = BLOCK_RENDERERS.get(block.kind)
            if area is None or renderer is None:
                continue
            children.append(renderer(block, area))

        markup = (
            f'<div class="slide-container" data-archetype="{escape(archetype.id)}" '
            f'style="width: {canvas.width}px; height: {canvas.height}px;">'
            f'<div class="slide-grid" style="display: grid; '
            f'grid-template: {escape(archetype.grid_template)}; height: 100%; width: 100%;">'
            f"{''.join(children)}"
            f"</div></div>"
        )

        measurements = LayoutMeasurements(
            estimated_text_height=estimate_text_height(blocks, theme),
            visual_areas=calculate_visual_areas(blocks, archetype),
        )
        logger.debug(f"Rendered {len(children)} of {len(blocks)} blocks into '{archetype.id}'")

        return RenderData(
            markup=markup,
            style_sheet=build_style_sheet(theme),
            measurements=measurements,
        )

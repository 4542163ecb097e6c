"""
Chart Synthesizer for Deckforge

Stage 6: turns the raw statistics held by a chart block into normalised data
points, theme colours, formatting hints and SVG markup.

Six chart forms are drawn on an 800x400 canvas: pie, doughnut, bar, line,
timeline and funnel. Unknown chart types are drawn as bars. Geometry is
computed first as plain primitives (slices, rects, points, rows, steps) so it
can be inspected independently of the markup.
"""

import math
import re
from dataclasses import dataclass
from html import escape
from typing import Any, Callable, Dict, List, Optional, Tuple

from deckforge.models.blocks import (
    BlockKind,
    ChartFormatting,
    ChartPayload,
    ContentBlock,
    DataPoint,
)
from deckforge.models.theme_config import DesignTokens
from deckforge.utils.chart_type_mapper import (
    DEFAULT_CHART_TYPE,
    infer_chart_type,
    resolve_chart_type,
)
from deckforge.utils.logger import setup_logger

logger = setup_logger(__name__)

# ============================================================================
# CHART GEOMETRY
# ============================================================================

CHART_WIDTH = 800
CHART_HEIGHT = 400

PIE_CENTER_X = 400
PIE_CENTER_Y = 200
PIE_RADIUS = 120
PIE_LABEL_RADIUS_RATIO = 0.7
DOUGHNUT_HOLE_RADIUS = PIE_RADIUS // 2

BAR_WIDTH = 60
BAR_SPACING = 20
BAR_LEFT = 100
PLOT_TOP = 80
PLOT_HEIGHT = 250

LINE_LEFT = 100
LINE_WIDTH = 600

TIMELINE_ROW_HEIGHT = 60
TIMELINE_START_Y = 100
TIMELINE_AXIS_X = 100

FUNNEL_MAX_WIDTH = 400
FUNNEL_STEP_HEIGHT = 50
FUNNEL_BAR_HEIGHT = 40
FUNNEL_START_Y = 100

# Colours used after the theme's primary/secondary/accent are exhausted
CHART_PALETTE = [
    "#3B82F6", "#10B981", "#F59E0B", "#EF4444", "#8B5CF6",
    "#06B6D4", "#84CC16", "#F97316", "#EC4899", "#6366F1",
]

NO_DATA_MESSAGE = "No chart data available"

_SCALE_SUFFIXES = {
    "k": 1e3, "thousand": 1e3,
    "m": 1e6, "mm": 1e6, "million": 1e6,
    "b": 1e9, "bn": 1e9, "billion": 1e9,
    "t": 1e12, "trillion": 1e12,
}

_NUMBER_PATTERN = re.compile(
    r"(-?\d[\d,]*(?:\.\d+)?)\s*(trillion|billion|million|thousand|bn|mm|[kmbt])?\b",
    re.IGNORECASE,
)


# ============================================================================
# NORMALISATION
# ============================================================================

def parse_magnitude(text: str) -> Optional[Tuple[float, str]]:
    """
    Extract the first number in a string, expanding K/M/B suffixes.

    Returns:
        (value, matched text) or None when no number is present

    Example:
        >>> parse_magnitude("$4.2B market")
        (4200000000.0, '4.2B')
    """
    match = _NUMBER_PATTERN.search(text)
    if not match:
        return None
    value = float(match.group(1).replace(",", ""))
    suffix = (match.group(2) or "").lower()
    value *= _SCALE_SUFFIXES.get(suffix, 1)
    return value, match.group(0).strip()


def _coerce_value(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        parsed = parse_magnitude(value)
        if parsed is None:
            return None
        number = parsed[0]
    else:
        return None
    return number if math.isfinite(number) else None


def _point_from_string(text: str, index: int) -> Optional[DataPoint]:
    if ":" in text:
        label, _, rest = text.partition(":")
        value = _coerce_value(rest)
        if value is None:
            return None
        return DataPoint(label=label.strip() or f"Item {index + 1}", value=value)

    parsed = parse_magnitude(text)
    if parsed is None:
        return None
    value, matched = parsed
    if not math.isfinite(value):
        return None
    label = text.replace(matched, " ", 1).strip(" $%-,.")
    return DataPoint(label=" ".join(label.split()) or f"Item {index + 1}", value=value)


def _point_from_item(item: Any, index: int) -> Optional[DataPoint]:
    if isinstance(item, DataPoint):
        return item

    if isinstance(item, dict):
        value = _coerce_value(item.get("value"))
        if value is None:
            return None
        label = item.get("label") or item.get("name") or f"Item {index + 1}"
        return DataPoint(label=str(label), value=value, color=item.get("color"))

    if isinstance(item, (list, tuple)) and len(item) == 2:
        value = _coerce_value(item[1])
        if value is None:
            return None
        return DataPoint(label=str(item[0]), value=value)

    if isinstance(item, str):
        return _point_from_string(item, index)

    value = _coerce_value(item)
    if value is None:
        return None
    return DataPoint(label=f"Item {index + 1}", value=value)


def normalize_statistics(raw: Any) -> Tuple[Optional[str], Optional[str], List[DataPoint]]:
    """
    Normalise a raw statistics payload.

    Accepts a list of {label, value} mappings, (label, value) pairs, bare
    numbers or strings such as "NA: 40", or a mapping {type, title, data}
    wrapping such a list. Entries with no numeric value are dropped.

    Returns:
        (declared chart type or None, declared title or None, data points)
    """
    declared_type = None
    declared_title = None
    items = raw

    if isinstance(raw, dict):
        declared_type = raw.get("type") or raw.get("chart_type")
        declared_title = raw.get("title")
        items = raw.get("data") or []

    if not isinstance(items, (list, tuple)):
        items = [items]

    points: List[DataPoint] = []
    for index, item in enumerate(items):
        point = _point_from_item(item, index)
        if point is None:
            logger.debug(f"Skipping non-numeric statistic: {item!r}")
            continue
        points.append(point)

    return declared_type, declared_title, points


# ============================================================================
# FORMATTING
# ============================================================================

def format_compact(value: float) -> str:
    """
    Compact number formatting for chart labels.

    Example:
        >>> format_compact(1234)
        '1.2K'
        >>> format_compact(3_400_000)
        '3.4M'
    """
    magnitude = abs(value)
    for threshold, suffix in ((1e12, "T"), (1e9, "B"), (1e6, "M"), (1e3, "K")):
        if magnitude >= threshold:
            text = f"{value / threshold:.1f}"
            if text.endswith(".0"):
                text = text[:-2]
            return f"{text}{suffix}"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"


def round_percentages(values: List[float], decimals: int = 1) -> List[float]:
    """
    Percentages of the total, each rounded on its own.

    Every label reads as its own share, so three equal slices show 33.3%
    each and the labels need not add up to exactly 100.
    """
    total = sum(values)
    if total <= 0:
        return [0.0 for _ in values]
    return [round(value / total * 100, decimals) for value in values]


def series_color(index: int, colors: List[str], point: Optional[DataPoint] = None) -> str:
    if point is not None and point.color:
        return point.color
    if index < len(colors):
        return colors[index]
    return CHART_PALETTE[index % len(CHART_PALETTE)]


def _num(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


# ============================================================================
# GEOMETRY PRIMITIVES
# ============================================================================

@dataclass
class PieSlice:
    label: str
    value: float
    percentage: float
    start_angle: float
    end_angle: float
    color: str
    label_x: float
    label_y: float

    @property
    def sweep(self) -> float:
        return self.end_angle - self.start_angle


@dataclass
class BarRect:
    label: str
    value: float
    x: float
    y: float
    width: float
    height: float
    color: str


@dataclass
class LinePoint:
    label: str
    value: float
    x: float
    y: float


@dataclass
class TimelineRow:
    label: str
    value: float
    y: float
    color: str
    is_last: bool


@dataclass
class FunnelStep:
    label: str
    value: float
    x: float
    y: float
    width: float
    color: str


def pie_slices(data: List[DataPoint], colors: List[str]) -> List[PieSlice]:
    """Slice angles proportional to value/total; negative values count as zero."""
    values = [max(point.value, 0.0) for point in data]
    total = sum(values)
    if total <= 0:
        return []

    percentages = round_percentages(values)
    label_radius = PIE_RADIUS * PIE_LABEL_RADIUS_RATIO

    slices: List[PieSlice] = []
    current = 0.0
    for index, (point, value) in enumerate(zip(data, values)):
        sweep = value / total * 360
        start, end = current, current + sweep
        middle = math.radians((start + end) / 2)
        slices.append(PieSlice(
            label=point.label,
            value=point.value,
            percentage=percentages[index],
            start_angle=start,
            end_angle=end,
            color=series_color(index, colors, point),
            label_x=PIE_CENTER_X + label_radius * math.cos(middle),
            label_y=PIE_CENTER_Y + label_radius * math.sin(middle),
        ))
        current = end
    return slices


def bar_rects(data: List[DataPoint], colors: List[str]) -> List[BarRect]:
    """Bar height proportional to value/max; negatives and non-positive maxima draw flat bars."""
    max_value = max((point.value for point in data), default=0.0)

    rects: List[BarRect] = []
    for index, point in enumerate(data):
        if max_value > 0:
            height = max(point.value, 0.0) / max_value * PLOT_HEIGHT
        else:
            height = 0.0
        rects.append(BarRect(
            label=point.label,
            value=point.value,
            x=BAR_LEFT + index * (BAR_WIDTH + BAR_SPACING),
            y=PLOT_TOP + PLOT_HEIGHT - height,
            width=BAR_WIDTH,
            height=height,
            color=series_color(index, colors, point),
        ))
    return rects


def line_points(data: List[DataPoint]) -> List[LinePoint]:
    """X evenly spaced by index, y interpolated between min and max."""
    if not data:
        return []

    values = [point.value for point in data]
    low, high = min(values), max(values)
    steps = len(data) - 1

    points: List[LinePoint] = []
    for index, point in enumerate(data):
        x = LINE_LEFT + (index / steps * LINE_WIDTH if steps else 0)
        if high == low:
            y = PLOT_TOP + PLOT_HEIGHT / 2
        else:
            y = PLOT_TOP + PLOT_HEIGHT - (point.value - low) / (high - low) * PLOT_HEIGHT
        points.append(LinePoint(label=point.label, value=point.value, x=x, y=y))
    return points


def timeline_rows(data: List[DataPoint], colors: List[str]) -> List[TimelineRow]:
    return [
        TimelineRow(
            label=point.label,
            value=point.value,
            y=TIMELINE_START_Y + index * TIMELINE_ROW_HEIGHT,
            color=series_color(index, colors, point),
            is_last=index == len(data) - 1,
        )
        for index, point in enumerate(data)
    ]


def funnel_steps(data: List[DataPoint], colors: List[str]) -> List[FunnelStep]:
    """Step width proportional to value/first value, capped at the funnel mouth."""
    if not data:
        return []

    reference = data[0].value
    if reference <= 0:
        reference = max(point.value for point in data)

    steps: List[FunnelStep] = []
    for index, point in enumerate(data):
        if reference > 0:
            width = min(max(point.value, 0.0) / reference, 1.0) * FUNNEL_MAX_WIDTH
        else:
            width = 0.0
        steps.append(FunnelStep(
            label=point.label,
            value=point.value,
            x=CHART_WIDTH / 2 - width / 2,
            y=FUNNEL_START_Y + index * FUNNEL_STEP_HEIGHT,
            width=width,
            color=series_color(index, colors, point),
        ))
    return steps


# ============================================================================
# SVG RENDERING
# ============================================================================

def _svg_open(title: str, height: int = CHART_HEIGHT) -> List[str]:
    parts = [
        f'<svg viewBox="0 0 {CHART_WIDTH} {height}" xmlns="http://www.w3.org/2000/svg" role="img">',
        f"<title>{escape(title)}</title>",
    ]
    if title:
        parts.append(
            f'<text x="{CHART_WIDTH // 2}" y="30" text-anchor="middle" font-size="18" '
            f'font-weight="bold" fill="currentColor">{escape(title)}</text>'
        )
    return parts


def render_placeholder_svg(title: str = "") -> str:
    parts = _svg_open(title)
    parts.append(
        f'<text x="{CHART_WIDTH // 2}" y="{CHART_HEIGHT // 2}" text-anchor="middle" '
        f'font-size="14" fill="#6B7280">{NO_DATA_MESSAGE}</text>'
    )
    parts.append("</svg>")
    return "".join(parts)


def _slice_markup(pie_slice: PieSlice) -> str:
    if pie_slice.sweep >= 360:
        return (
            f'<circle class="chart-slice" cx="{PIE_CENTER_X}" cy="{PIE_CENTER_Y}" r="{PIE_RADIUS}" '
            f'fill="{pie_slice.color}" stroke="#fff" stroke-width="2"/>'
        )

    start = math.radians(pie_slice.start_angle)
    end = math.radians(pie_slice.end_angle)
    x1 = PIE_CENTER_X + PIE_RADIUS * math.cos(start)
    y1 = PIE_CENTER_Y + PIE_RADIUS * math.sin(start)
    x2 = PIE_CENTER_X + PIE_RADIUS * math.cos(end)
    y2 = PIE_CENTER_Y + PIE_RADIUS * math.sin(end)
    large_arc = 1 if pie_slice.sweep > 180 else 0
    return (
        f'<path class="chart-slice" d="M {PIE_CENTER_X} {PIE_CENTER_Y} L {_num(x1)} {_num(y1)} '
        f'A {PIE_RADIUS} {PIE_RADIUS} 0 {large_arc} 1 {_num(x2)} {_num(y2)} Z" '
        f'fill="{pie_slice.color}" stroke="#fff" stroke-width="2"/>'
    )


def render_pie_svg(data: List[DataPoint], colors: List[str], title: str = "",
                   hole_color: Optional[str] = None) -> str:
    slices = pie_slices(data, colors)
    if not slices:
        return render_placeholder_svg(title)

    parts = _svg_open(title)
    parts.append("<g>")
    for pie_slice in slices:
        if pie_slice.sweep <= 0:
            continue
        parts.append(_slice_markup(pie_slice))
    if hole_color is not None:
        parts.append(
            f'<circle class="chart-hole" cx="{PIE_CENTER_X}" cy="{PIE_CENTER_Y}" '
            f'r="{DOUGHNUT_HOLE_RADIUS}" fill="{hole_color}"/>'
        )
    for pie_slice in slices:
        if pie_slice.sweep <= 0:
            continue
        parts.append(
            f'<text class="chart-label" x="{_num(pie_slice.label_x)}" y="{_num(pie_slice.label_y)}" '
            f'text-anchor="middle" font-size="12">{pie_slice.percentage:.1f}%</text>'
        )
    parts.append("</g>")

    # Legend
    parts.append('<g transform="translate(550, 80)">')
    for index, pie_slice in enumerate(slices):
        parts.append(
            f'<g transform="translate(0, {index * 25})">'
            f'<rect x="0" y="0" width="15" height="15" fill="{pie_slice.color}"/>'
            f'<text x="20" y="12" font-size="12">{escape(pie_slice.label)}: '
            f'{format_compact(pie_slice.value)}</text></g>'
        )
    parts.append("</g></svg>")
    return "".join(parts)


def render_doughnut_svg(data: List[DataPoint], colors: List[str], title: str = "",
                        hole_color: str = "#FFFFFF") -> str:
    return render_pie_svg(data, colors, title, hole_color=hole_color)


def render_bar_svg(data: List[DataPoint], colors: List[str], title: str = "") -> str:
    if not data:
        return render_placeholder_svg(title)

    rects = bar_rects(data, colors)
    baseline = PLOT_TOP + PLOT_HEIGHT

    parts = _svg_open(title)
    parts.append("<g>")
    for rect in rects:
        center = rect.x + rect.width / 2
        parts.append(
            f'<rect class="chart-bar" x="{_num(rect.x)}" y="{_num(rect.y)}" width="{_num(rect.width)}" '
            f'height="{_num(rect.height)}" fill="{rect.color}" rx="4" ry="4"/>'
            f'<text x="{_num(center)}" y="{baseline + 20}" text-anchor="middle" font-size="12">'
            f"{escape(rect.label)}</text>"
            f'<text x="{_num(center)}" y="{_num(rect.y - 5)}" text-anchor="middle" font-size="11">'
            f"{format_compact(rect.value)}</text>"
        )
    parts.append("</g>")
    axis_end = BAR_LEFT - 10 + len(rects) * (BAR_WIDTH + BAR_SPACING)
    parts.append(
        f'<line x1="{BAR_LEFT - 10}" y1="{PLOT_TOP}" x2="{BAR_LEFT - 10}" y2="{baseline}" stroke="#ccc" stroke-width="1"/>'
        f'<line x1="{BAR_LEFT - 10}" y1="{baseline}" x2="{axis_end}" y2="{baseline}" stroke="#ccc" stroke-width="1"/>'
    )
    parts.append("</svg>")
    return "".join(parts)


def render_line_svg(data: List[DataPoint], colors: List[str], title: str = "") -> str:
    points = line_points(data)
    if not points:
        return render_placeholder_svg(title)

    stroke = series_color(0, colors)
    baseline = PLOT_TOP + PLOT_HEIGHT
    path = " ".join(
        f"{'M' if index == 0 else 'L'} {_num(point.x)} {_num(point.y)}"
        for index, point in enumerate(points)
    )

    parts = _svg_open(title)
    for row in range(5):
        y = PLOT_TOP + row * PLOT_HEIGHT / 4
        parts.append(
            f'<line x1="{LINE_LEFT}" y1="{_num(y)}" x2="{LINE_LEFT + LINE_WIDTH}" y2="{_num(y)}" '
            f'stroke="#f0f0f0" stroke-width="1"/>'
        )
    parts.append(f'<path class="chart-line" d="{path}" fill="none" stroke="{stroke}" stroke-width="3"/>')
    for point in points:
        parts.append(
            f'<circle class="chart-point" cx="{_num(point.x)}" cy="{_num(point.y)}" r="4" fill="{stroke}"/>'
            f'<text x="{_num(point.x)}" y="{baseline + 20}" text-anchor="middle" font-size="12">'
            f"{escape(point.label)}</text>"
        )
    parts.append(
        f'<line x1="{LINE_LEFT}" y1="{PLOT_TOP}" x2="{LINE_LEFT}" y2="{baseline}" stroke="#ccc" stroke-width="1"/>'
        f'<line x1="{LINE_LEFT}" y1="{baseline}" x2="{LINE_LEFT + LINE_WIDTH}" y2="{baseline}" stroke="#ccc" stroke-width="1"/>'
    )
    parts.append("</svg>")
    return "".join(parts)


def render_timeline_svg(data: List[DataPoint], colors: List[str], title: str = "") -> str:
    rows = timeline_rows(data, colors)
    if not rows:
        return render_placeholder_svg(title)

    parts = _svg_open(title, TIMELINE_START_Y + len(rows) * TIMELINE_ROW_HEIGHT)
    for row in rows:
        rule_end = 28 if row.is_last else TIMELINE_ROW_HEIGHT + 12
        parts.append(
            f'<g class="timeline-row" transform="translate(0, {_num(row.y)})">'
            f'<circle cx="{TIMELINE_AXIS_X}" cy="20" r="8" fill="{row.color}"/>'
            f'<line x1="{TIMELINE_AXIS_X}" y1="28" x2="{TIMELINE_AXIS_X}" y2="{rule_end}" stroke="#ddd" stroke-width="2"/>'
            f'<rect x="120" y="10" width="400" height="20" fill="{row.color}" opacity="0.1" rx="10"/>'
            f'<text x="130" y="24" font-size="14">{escape(row.label)}: {format_compact(row.value)}</text>'
            f"</g>"
        )
    parts.append("</svg>")
    return "".join(parts)


def render_funnel_svg(data: List[DataPoint], colors: List[str], title: str = "") -> str:
    steps = funnel_steps(data, colors)
    if not steps:
        return render_placeholder_svg(title)

    parts = _svg_open(title, FUNNEL_START_Y + len(steps) * FUNNEL_STEP_HEIGHT + 50)
    for step in steps:
        parts.append(
            f'<g class="funnel-step" transform="translate(0, {_num(step.y)})">'
            f'<rect x="{_num(step.x)}" y="0" width="{_num(step.width)}" height="{FUNNEL_BAR_HEIGHT}" '
            f'fill="{step.color}" rx="5"/>'
            f'<text x="{CHART_WIDTH // 2}" y="25" text-anchor="middle" font-size="12" fill="white">'
            f"{escape(step.label)}: {format_compact(step.value)}</text>"
            f"</g>"
        )
    parts.append("</svg>")
    return "".join(parts)


CHART_RENDERERS: Dict[str, Callable[..., str]] = {
    "pie": render_pie_svg,
    "bar": render_bar_svg,
    "line": render_line_svg,
    "timeline": render_timeline_svg,
    "funnel": render_funnel_svg,
}


def render_chart_svg(chart_type: str, data: List[DataPoint], colors: List[str],
                     title: str = "", background: str = "#FFFFFF") -> str:
    """
    Render a chart as SVG markup.

    Unknown chart types are drawn as bar charts. Empty data, or pie data
    whose total is not positive, renders a "No chart data available"
    placeholder.
    """
    if chart_type == "doughnut":
        return render_doughnut_svg(data, colors, title, hole_color=background)
    renderer = CHART_RENDERERS.get(chart_type)
    if renderer is None:
        logger.debug(f"No renderer for chart type '{chart_type}', drawing bar chart")
        renderer = render_bar_svg
    return renderer(data, colors, title)


# ============================================================================
# STAGE
# ============================================================================

class ChartSynthesizer:
    """Synthesizes chart payloads for chart blocks."""

    def synthesize(self, blocks: List[ContentBlock], theme: DesignTokens, intent: str = "") -> List[ContentBlock]:
        slide_title = next(
            (block.content.text for block in blocks if block.kind == BlockKind.TITLE),
            "",
        )
        result: List[ContentBlock] = []
        for block in blocks:
            if block.kind != BlockKind.CHART:
                result.append(block)
                continue
            payload = self.build_payload(block.content, theme, intent, slide_title)
            result.append(block.model_copy(update={"content": payload}))
        return result

    def build_payload(self, payload: ChartPayload, theme: DesignTokens, intent: str = "",
                      default_title: str = "") -> ChartPayload:
        declared_type, declared_title, data = normalize_statistics(payload.raw)

        chart_type = resolve_chart_type(declared_type)
        if chart_type is None:
            if declared_type:
                logger.warning(f"Unknown chart type '{declared_type}', drawing {DEFAULT_CHART_TYPE} chart")
                chart_type = DEFAULT_CHART_TYPE
            else:
                chart_type = infer_chart_type(intent)

        title = declared_title or payload.title or default_title
        colors = [theme.colors.primary, theme.colors.secondary, theme.colors.accent]
        svg = render_chart_svg(chart_type, data, colors, title, theme.colors.background)

        if not data:
            logger.warning(f"Chart '{title}' has no numeric data, rendering placeholder")
        logger.debug(f"Chart '{title}': {chart_type} with {len(data)} points")

        return payload.model_copy(update={
            "chart_type": chart_type,
            "title": title or None,
            "data": data,
            "colors": colors,
            "formatting": ChartFormatting(),
            "svg": svg,
        })

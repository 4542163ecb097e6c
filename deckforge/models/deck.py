"""
Deck Models for Deckforge

SlideLayout is produced once per slide by the Renderer stage and never
changes afterwards. CompletePitchDeck is the aggregate root returned to
callers.
"""

from typing import Dict, List

from pydantic import BaseModel, Field, model_serializer

from .blocks import ContentBlock
from .layout import LayoutArchetype
from .outline import PitchDeckOutline
from .theme_config import DesignTokens


class Canvas(BaseModel):
    width: int
    height: int
    aspect_ratio: str

    class Config:
        frozen = True


class GridSpec(BaseModel):
    """The archetype grid split into its row and column halves."""
    rows: str = Field(..., description="Row areas and sizes (before the '/')")
    columns: str = Field(..., description="Column sizes (after the '/')")
    areas: str = Field(..., description="The full grid-template string")

    class Config:
        frozen = True


class VisualAreas(BaseModel):
    visual_block_count: int = 0
    total_visual_area: float = 0.0
    layout: str = ""

    class Config:
        frozen = True


class LayoutMeasurements(BaseModel):
    estimated_text_height: float = 0.0
    visual_areas: VisualAreas = Field(default_factory=VisualAreas)

    class Config:
        frozen = True


class RenderData(BaseModel):
    markup: str
    style_sheet: str
    measurements: LayoutMeasurements

    class Config:
        frozen = True


class SlideLayout(BaseModel):
    """A fully laid-out slide."""
    slide_number: int = Field(..., ge=1)
    archetype: LayoutArchetype
    blocks: List[ContentBlock] = Field(default_factory=list)
    canvas: Canvas
    grid: GridSpec
    render_data: RenderData

    class Config:
        frozen = True


class VisualAssetsSummary(BaseModel):
    total_images: int = 0
    total_svgs: int = 0
    total_charts: int = 0
    image_breakdown: Dict[str, int] = Field(default_factory=dict)
    svg_breakdown: Dict[str, int] = Field(default_factory=dict)


class ExportFormats(BaseModel):
    json_export: str = Field(..., alias="json", description="Full structural dump")
    markdown: str
    html: str
    pdf: str = Field(..., description="Placeholder: no PDF binary is generated")
    powerpoint: str = Field(..., description="Placeholder: no PPTX binary is generated")

    class Config:
        populate_by_name = True

    @model_serializer(mode="wrap")
    def _dump_json_key(self, handler):
        # Always emit the wire name, including inside CompletePitchDeck dumps
        data = handler(self)
        return {("json" if key == "json_export" else key): value for key, value in data.items()}


class ConsistencyReport(BaseModel):
    title_alignment: str = "not-applicable"
    footer_baseline: str = "not-applicable"
    color_compliance: bool = True
    spacing_rhythm: bool = True
    issues: List[str] = Field(default_factory=list)


class CompletePitchDeck(BaseModel):
    """The finished deck: outline, rendered slides, theme, exports and checks."""
    outline: PitchDeckOutline
    slides: List[SlideLayout]
    theme: DesignTokens
    visual_assets: VisualAssetsSummary
    export_formats: ExportFormats
    consistency: ConsistencyReport

"""
Content Block Models for Deckforge

A content block is the atomic, typed unit of slide content. Each block kind
carries its own payload model; the payload union is discriminated on `kind`
so a block's content shape is always known from its kind.

Blocks are frozen. Pipeline stages return new blocks via model_copy().
"""

from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator


class BlockKind(str, Enum):
    """Kinds of content block a slide can hold."""
    TITLE = "title"
    SUBTITLE = "subtitle"
    BULLETS = "bullets"
    QUOTE = "quote"
    IMAGE = "image"
    CHART = "chart"
    TABLE = "table"
    LOGO = "logo"
    FOOTER = "footer"
    NOTES = "notes"


class Priority(str, Enum):
    MUST_SHOW = "must-show"
    NICE_TO_HAVE = "nice-to-have"


class VisualWeight(str, Enum):
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"


TEXT_KINDS = {BlockKind.TITLE, BlockKind.BULLETS}
VISUAL_KINDS = {BlockKind.IMAGE, BlockKind.CHART}


class BlockStyling(BaseModel):
    """Layout styling attached to a block by the fitting and balancing stages."""

    font_size: Optional[int] = Field(default=None, description="Fitted font size in pixels")
    color: Optional[str] = Field(default=None, description="Text color override")
    alignment: Optional[Literal["left", "center", "right"]] = None
    margin_top: Optional[int] = Field(default=None, description="Vertical rhythm margin in pixels")

    class Config:
        frozen = True


# ============================================================================
# PAYLOAD VARIANTS
# ============================================================================

class TitlePayload(BaseModel):
    kind: Literal["title"] = "title"
    text: str = ""

    class Config:
        frozen = True


class SubtitlePayload(BaseModel):
    kind: Literal["subtitle"] = "subtitle"
    text: str = ""

    class Config:
        frozen = True


class BulletsPayload(BaseModel):
    kind: Literal["bullets"] = "bullets"
    items: List[str] = Field(default_factory=list)

    class Config:
        frozen = True

    @property
    def text_length(self) -> int:
        """Length of the longest line; each bullet wraps independently."""
        return max((len(item) for item in self.items), default=0)


class QuotePayload(BaseModel):
    kind: Literal["quote"] = "quote"
    text: str = ""
    attribution: Optional[str] = None

    class Config:
        frozen = True


class ImagePlacement(BaseModel):
    """Placement contract for a downstream image renderer (no pixels are touched)."""

    fitting_mode: str = Field(default="cover", description="CSS object-fit style fitting mode")
    target_aspect_ratio: str = Field(..., description="Aspect ratio of the archetype's visual region")
    focal_point: str = Field(default="center", description="Crop anchor")

    class Config:
        frozen = True


class ImagePayload(BaseModel):
    kind: Literal["image"] = "image"
    url: str = "#"
    alt: str = ""
    width: Optional[int] = None
    height: Optional[int] = None
    license: Optional[str] = None
    source: Optional[str] = None
    placement: Optional[ImagePlacement] = None

    class Config:
        frozen = True


class DataPoint(BaseModel):
    """A single labelled value in a chart series."""

    label: str
    value: float
    color: Optional[str] = None

    class Config:
        frozen = True


class ChartFormatting(BaseModel):
    number_format: str = "compact"
    currency: str = "USD"
    percentage: bool = True

    class Config:
        frozen = True


class ChartPayload(BaseModel):
    """
    Chart content.

    `raw` keeps the statistics exactly as supplied by the outline; the chart
    synthesizer fills in the normalised `data`, theme `colors`, `formatting`
    and the rendered `svg`.
    """
    kind: Literal["chart"] = "chart"
    chart_type: str = "bar"
    title: Optional[str] = None
    raw: Any = None
    data: List[DataPoint] = Field(default_factory=list)
    colors: List[str] = Field(default_factory=list)
    formatting: Optional[ChartFormatting] = None
    svg: Optional[str] = None

    class Config:
        frozen = True


class TablePayload(BaseModel):
    kind: Literal["table"] = "table"
    headers: List[str] = Field(default_factory=list)
    rows: List[List[str]] = Field(default_factory=list)

    class Config:
        frozen = True


class LogoPayload(BaseModel):
    kind: Literal["logo"] = "logo"
    url: str = "#"
    alt: str = ""

    class Config:
        frozen = True


class FooterPayload(BaseModel):
    kind: Literal["footer"] = "footer"
    text: str = ""

    class Config:
        frozen = True


class NotesPayload(BaseModel):
    kind: Literal["notes"] = "notes"
    text: str = ""

    class Config:
        frozen = True


BlockPayload = Annotated[
    Union[
        TitlePayload,
        SubtitlePayload,
        BulletsPayload,
        QuotePayload,
        ImagePayload,
        ChartPayload,
        TablePayload,
        LogoPayload,
        FooterPayload,
        NotesPayload,
    ],
    Field(discriminator="kind"),
]


class ContentBlock(BaseModel):
    """A typed unit of slide content plus its layout metadata."""

    id: str = Field(..., description="Identifier, unique within the slide")
    kind: BlockKind
    content: BlockPayload
    priority: Priority = Priority.MUST_SHOW
    estimated_length: int = Field(default=0, ge=0, description="Character count used for fitting and balance")
    visual_weight: VisualWeight = VisualWeight.MEDIUM
    intent: str = Field(default="", description="Intent tag, e.g. 'market' or 'supporting-detail'")
    styling: Optional[BlockStyling] = None

    class Config:
        frozen = True

    @model_validator(mode="after")
    def _kind_matches_payload(self):
        if self.content.kind != self.kind.value:
            raise ValueError(
                f"block kind '{self.kind.value}' does not match payload kind '{self.content.kind}'"
            )
        return self

    @property
    def is_text(self) -> bool:
        return self.kind in TEXT_KINDS

    @property
    def is_visual(self) -> bool:
        return self.kind in VISUAL_KINDS

    def with_styling(self, **updates) -> "ContentBlock":
        """Return a copy of the block with the given styling fields replaced."""
        current = self.styling or BlockStyling()
        return self.model_copy(update={"styling": current.model_copy(update=updates)})

"""
Outline Models for Deckforge

Inputs to the layout pipeline: the slide outline produced by the (external)
outline-generation collaborator, image descriptors returned by image search,
and the generation request itself.
"""

import math
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


def json_native(value: Any) -> Any:
    """
    Convert a statistics payload to the values JSON can hold, so a JSON dump
    of the payload reads back as the same value.

    Example:
        >>> json_native([("NA", 40), ("EU", float("nan"))])
        [['NA', 40], ['EU', None]]
    """
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, dict):
        return {str(key): json_native(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_native(item) for item in value]
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


class ImageDescriptor(BaseModel):
    """A candidate image returned by the image search collaborator."""
    url: str = Field(..., description="Image URL")
    width: Optional[int] = Field(default=None, description="Source width in pixels")
    height: Optional[int] = Field(default=None, description="Source height in pixels")
    license: Optional[str] = Field(default=None, description="License identifier")
    alt: str = Field(default="", description="Alternative text")
    source: Optional[str] = Field(default=None, description="Provider name")


class SlideOutline(BaseModel):
    """One slide of the outline, before layout."""
    slide_number: Optional[int] = Field(default=None, description="1-indexed position in the outline")
    slide_type: str = Field(default="content", description="Intent tag, e.g. 'market', 'problem'")
    title: str = Field(default="")
    content: List[str] = Field(default_factory=list, description="Bullet text, in order")
    key_points: List[str] = Field(default_factory=list)
    statistics: Any = Field(
        default=None,
        description="Raw statistics: list of {label, value} / strings / numbers, or {type, title, data}"
    )
    images: List[ImageDescriptor] = Field(default_factory=list)
    visual_suggestions: List[str] = Field(default_factory=list)
    speaker_notes: Optional[str] = Field(default=None)

    @field_validator("statistics", mode="before")
    @classmethod
    def _statistics_json_native(cls, value: Any) -> Any:
        return json_native(value)


class PitchDeckOutline(BaseModel):
    """Ordered slide outline plus deck-level prose."""
    title: str = Field(default="")
    subtitle: str = Field(default="")
    slides: List[SlideOutline] = Field(default_factory=list)
    executive_summary: str = Field(default="")
    company_overview: str = Field(default="")
    call_to_action: str = Field(default="")


class PitchDeckRequest(BaseModel):
    """A deck generation request."""
    company_name: str = Field(..., min_length=1)
    industry: Optional[str] = None
    target_audience: Optional[str] = None
    funding_stage: Optional[str] = None
    business_type: Optional[str] = None
    specific_topics: List[str] = Field(default_factory=list)
    research_depth: Literal["basic", "comprehensive", "expert"] = "comprehensive"
    theme: Optional[str] = Field(default=None, description="modern, corporate, startup (settings default when omitted)")
    slide_aspect_ratio: Optional[Literal["16:9", "4:3", "widescreen"]] = None

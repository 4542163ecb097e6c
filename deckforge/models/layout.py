"""
Layout Models for Deckforge

Defines layout archetypes (named slide grid templates) and the process-wide,
read-only archetype catalog used by the ArchetypeSelector.
"""

from typing import Dict, FrozenSet, List, Optional
from pydantic import BaseModel, Field, field_serializer


class ArchetypeRegion(BaseModel):
    """Where one content region of an archetype sits in the grid."""
    area: str = Field(..., description="Grid area name(s), e.g. 'title' or 'left right'")
    max_lines: Optional[int] = Field(default=None, description="Maximum title lines")
    columns: Optional[int] = Field(default=None, description="Body column count")
    aspect_ratio: Optional[str] = Field(default=None, description="Visual region aspect ratio, e.g. '16:9'")
    height: Optional[str] = Field(default=None, description="Fixed region height, e.g. '60px'")

    class Config:
        frozen = True

    @property
    def first_area(self) -> str:
        return self.area.split()[0]

    @property
    def last_area(self) -> str:
        return self.area.split()[-1]


class ArchetypeRegions(BaseModel):
    """The four regions every archetype maps."""
    title: ArchetypeRegion
    body: ArchetypeRegion
    visual: ArchetypeRegion
    footer: ArchetypeRegion

    class Config:
        frozen = True


class LayoutArchetype(BaseModel):
    """A named, reusable slide grid template."""
    id: str = Field(..., description="Archetype ID (e.g., 'title-bullets-visual')")
    name: str = Field(..., description="Human-readable archetype name")
    description: str = Field(default="")
    regions: ArchetypeRegions
    grid_template: str = Field(..., description="CSS grid-template: row areas/sizes, then '/', then columns")
    suitable_for: FrozenSet[str] = Field(
        default_factory=frozenset,
        description="Slide intent tags this archetype is designed for"
    )

    class Config:
        frozen = True

    @field_serializer("suitable_for")
    def _serialize_suitable_for(self, value: FrozenSet[str]) -> List[str]:
        return sorted(value)


# ============================================================================
# ARCHETYPE CATALOG
# ============================================================================
# Order matters: exact-intent selection picks the first archetype that lists
# the intent, so 'before-after' resolves to big-visual-caption.

_FOOTER = ArchetypeRegion(area="footer", height="60px")

ARCHETYPE_CATALOG: List[LayoutArchetype] = [
    LayoutArchetype(
        id="title-bullets-visual",
        name="Title + Bullets + Visual",
        description="Traditional slide with title, bullet points, and supporting visual",
        regions=ArchetypeRegions(
            title=ArchetypeRegion(area="title", max_lines=2),
            body=ArchetypeRegion(area="body", columns=1),
            visual=ArchetypeRegion(area="visual", aspect_ratio="16:9"),
            footer=_FOOTER,
        ),
        grid_template='"title title" 120px "body visual" 1fr "footer footer" 60px / 1fr 1fr',
        suitable_for=frozenset({"problem", "solution", "product", "marketing"}),
    ),
    LayoutArchetype(
        id="big-visual-caption",
        name="Big Visual + Caption",
        description="Large visual with a short caption",
        regions=ArchetypeRegions(
            title=ArchetypeRegion(area="title", max_lines=1),
            body=ArchetypeRegion(area="caption", columns=1),
            visual=ArchetypeRegion(area="visual", aspect_ratio="16:9"),
            footer=_FOOTER,
        ),
        grid_template='"title title" 120px "visual visual" 1fr "caption caption" 80px "footer footer" 60px / 1fr 1fr',
        suitable_for=frozenset({"hero", "demo", "before-after"}),
    ),
    LayoutArchetype(
        id="two-column-comparison",
        name="Two-Column Comparison",
        description="Side-by-side comparison layout",
        regions=ArchetypeRegions(
            title=ArchetypeRegion(area="title", max_lines=2),
            body=ArchetypeRegion(area="left right", columns=2),
            visual=ArchetypeRegion(area="left right", aspect_ratio="1:1"),
            footer=_FOOTER,
        ),
        grid_template='"title title" 120px "left right" 1fr "footer footer" 60px / 1fr 1fr',
        suitable_for=frozenset({"comparison", "before-after", "competition"}),
    ),
    LayoutArchetype(
        id="data-insight",
        name="Data Insight",
        description="Headline number or chart with supporting takeaways",
        regions=ArchetypeRegions(
            title=ArchetypeRegion(area="title", max_lines=2),
            body=ArchetypeRegion(area="insights", columns=1),
            visual=ArchetypeRegion(area="chart", aspect_ratio="4:3"),
            footer=_FOOTER,
        ),
        grid_template='"title title" 120px "chart insights" 1fr "footer footer" 60px / 3fr 2fr',
        suitable_for=frozenset({"market", "market-size", "traction", "financials", "metrics", "business-model"}),
    ),
    LayoutArchetype(
        id="agenda",
        name="Agenda",
        description="Clean agenda or outline slide",
        regions=ArchetypeRegions(
            title=ArchetypeRegion(area="title", max_lines=1),
            body=ArchetypeRegion(area="body", columns=1),
            visual=ArchetypeRegion(area="accent", aspect_ratio="4:1"),
            footer=_FOOTER,
        ),
        grid_template='"title title" 120px "body accent" 1fr "footer footer" 60px / 2fr 1fr',
        suitable_for=frozenset({"agenda", "outline", "roadmap"}),
    ),
    LayoutArchetype(
        id="section-break",
        name="Section Break",
        description="Minimal section divider slide",
        regions=ArchetypeRegions(
            title=ArchetypeRegion(area="center", max_lines=3),
            body=ArchetypeRegion(area="center", columns=1),
            visual=ArchetypeRegion(area="center", aspect_ratio="16:9"),
            footer=_FOOTER,
        ),
        grid_template='"center center" 1fr "footer footer" 60px / 1fr 1fr',
        suitable_for=frozenset({"section", "break", "transition"}),
    ),
]

ARCHETYPES_BY_ID: Dict[str, LayoutArchetype] = {archetype.id: archetype for archetype in ARCHETYPE_CATALOG}

# System default used when neither intent nor content heuristics pick an archetype
DEFAULT_ARCHETYPE_ID = "title-bullets-visual"
COMPARISON_ARCHETYPE_ID = "two-column-comparison"
BIG_VISUAL_ARCHETYPE_ID = "big-visual-caption"


def get_archetype(archetype_id: str) -> LayoutArchetype:
    """Get an archetype by ID, falling back to the system default."""
    return ARCHETYPES_BY_ID.get(archetype_id, ARCHETYPES_BY_ID[DEFAULT_ARCHETYPE_ID])


def find_archetypes_for_intent(intent: str) -> List[LayoutArchetype]:
    """All catalog archetypes whose suitable_for contains the intent, in catalog order."""
    return [archetype for archetype in ARCHETYPE_CATALOG if intent in archetype.suitable_for]

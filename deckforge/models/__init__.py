"""
Models Package for Deckforge

Contains all Pydantic models for content blocks, archetypes, design tokens,
outlines and rendered decks.
"""

from .blocks import (
    BlockKind,
    Priority,
    VisualWeight,
    BlockStyling,
    TitlePayload,
    SubtitlePayload,
    BulletsPayload,
    QuotePayload,
    ImagePlacement,
    ImagePayload,
    DataPoint,
    ChartFormatting,
    ChartPayload,
    TablePayload,
    LogoPayload,
    FooterPayload,
    NotesPayload,
    ContentBlock
)

from .layout import (
    ArchetypeRegion,
    ArchetypeRegions,
    LayoutArchetype,
    ARCHETYPE_CATALOG,
    DEFAULT_ARCHETYPE_ID,
    get_archetype
)

from .theme_config import (
    DesignTokens,
    THEME_REGISTRY,
    DEFAULT_THEME_ID,
    get_design_tokens,
    get_available_themes
)

from .outline import (
    ImageDescriptor,
    SlideOutline,
    PitchDeckOutline,
    PitchDeckRequest
)

from .deck import (
    Canvas,
    GridSpec,
    VisualAreas,
    LayoutMeasurements,
    RenderData,
    SlideLayout,
    VisualAssetsSummary,
    ExportFormats,
    ConsistencyReport,
    CompletePitchDeck
)

__all__ = [
    # Content blocks
    'BlockKind',
    'Priority',
    'VisualWeight',
    'BlockStyling',
    'TitlePayload',
    'SubtitlePayload',
    'BulletsPayload',
    'QuotePayload',
    'ImagePlacement',
    'ImagePayload',
    'DataPoint',
    'ChartFormatting',
    'ChartPayload',
    'TablePayload',
    'LogoPayload',
    'FooterPayload',
    'NotesPayload',
    'ContentBlock',

    # Archetypes
    'ArchetypeRegion',
    'ArchetypeRegions',
    'LayoutArchetype',
    'ARCHETYPE_CATALOG',
    'DEFAULT_ARCHETYPE_ID',
    'get_archetype',

    # Themes
    'DesignTokens',
    'THEME_REGISTRY',
    'DEFAULT_THEME_ID',
    'get_design_tokens',
    'get_available_themes',

    # Outline / request
    'ImageDescriptor',
    'SlideOutline',
    'PitchDeckOutline',
    'PitchDeckRequest',

    # Rendered deck
    'Canvas',
    'GridSpec',
    'VisualAreas',
    'LayoutMeasurements',
    'RenderData',
    'SlideLayout',
    'VisualAssetsSummary',
    'ExportFormats',
    'ConsistencyReport',
    'CompletePitchDeck'
]

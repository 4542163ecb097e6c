"""
Core Module for Deckforge

Contains the layout pipeline stages and the slide/deck pipelines that
compose them.
"""

from .block_extractor import BlockExtractor, MUST_SHOW_BULLET_LIMIT
from .archetype_selector import ArchetypeSelector, ArchetypeSelection
from .canvas_builder import CanvasBuilder, CANVAS_RESOLUTIONS, parse_grid_rows
from .text_fitter import TextFitter, fit_font_size
from .visual_placer import VisualPlacer
from .chart_synthesizer import ChartSynthesizer, render_chart_svg
from .layout_balancer import (
    LayoutBalancer,
    TEXT_HEAVY_THRESHOLD,
    NEEDS_VISUAL_SUFFIX,
    RHYTHM_SPACING_PX
)
from .renderer import Renderer
from .consistency_checker import ConsistencyChecker
from .exporter import Exporter
from .pipeline import SlidePipeline, DeckPipeline, build_deck, summarize_visual_assets

__all__ = [
    # Per-slide stages
    'BlockExtractor',
    'MUST_SHOW_BULLET_LIMIT',
    'ArchetypeSelector',
    'ArchetypeSelection',
    'CanvasBuilder',
    'CANVAS_RESOLUTIONS',
    'parse_grid_rows',
    'TextFitter',
    'fit_font_size',
    'VisualPlacer',
    'ChartSynthesizer',
    'render_chart_svg',
    'LayoutBalancer',
    'TEXT_HEAVY_THRESHOLD',
    'NEEDS_VISUAL_SUFFIX',
    'RHYTHM_SPACING_PX',
    'Renderer',

    # Deck-level stages
    'ConsistencyChecker',
    'Exporter',

    # Pipelines
    'SlidePipeline',
    'DeckPipeline',
    'build_deck',
    'summarize_visual_assets',
]

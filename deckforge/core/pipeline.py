"""
Slide and Deck Pipelines for Deckforge

SlidePipeline runs stages 1-8 for one slide:

    BlockExtractor -> ArchetypeSelector -> CanvasBuilder -> TextFitter
      -> VisualPlacer -> ChartSynthesizer -> LayoutBalancer -> Renderer

DeckPipeline renders every slide (sequentially or in parallel), restores
outline order, then runs the deck-level ConsistencyChecker and Exporter once
all slides are done.

Slides share nothing mutable: the theme and archetype catalog are frozen, and
each stage returns new blocks rather than changing its input.
"""

import asyncio
import time
from typing import List, Optional

from config.settings import get_settings
from deckforge.core.archetype_selector import ArchetypeSelector
from deckforge.core.block_extractor import BlockExtractor
from deckforge.core.canvas_builder import CanvasBuilder
from deckforge.core.chart_synthesizer import ChartSynthesizer
from deckforge.core.consistency_checker import ConsistencyChecker
from deckforge.core.exporter import Exporter
from deckforge.core.layout_balancer import LayoutBalancer
from deckforge.core.renderer import Renderer
from deckforge.core.text_fitter import TextFitter
from deckforge.core.visual_placer import VisualPlacer
from deckforge.models.blocks import BlockKind
from deckforge.models.deck import CompletePitchDeck, SlideLayout, VisualAssetsSummary
from deckforge.models.outline import PitchDeckOutline, SlideOutline
from deckforge.models.theme_config import DesignTokens, get_design_tokens
from deckforge.utils.logger import setup_logger

logger = setup_logger(__name__)

DEFAULT_IMAGE_SOURCE = "presentation-image"


class SlidePipeline:
    """Runs the per-slide stages for one theme and aspect ratio."""

    def __init__(self, theme: DesignTokens, aspect_ratio: str):
        self.theme = theme
        self.aspect_ratio = aspect_ratio
        self.extractor = BlockExtractor()
        self.selector = ArchetypeSelector()
        self.canvas_builder = CanvasBuilder()
        self.text_fitter = TextFitter()
        self.visual_placer = VisualPlacer()
        self.chart_synthesizer = ChartSynthesizer()
        self.balancer = LayoutBalancer()
        self.renderer = Renderer()

    def process(self, slide: SlideOutline, slide_number: int) -> SlideLayout:
        """
        Lay out a single slide.

        Args:
            slide: Outline slide
            slide_number: 1-indexed position in the deck

        Returns:
            Immutable SlideLayout
        """
        intent = slide.slide_type

        blocks = self.extractor.extract(slide, slide_number)
        archetype = self.selector.select(blocks, intent)
        canvas, grid = self.canvas_builder.build(archetype, self.aspect_ratio)
        blocks = self.text_fitter.fit(blocks, canvas, self.theme)
        blocks = self.visual_placer.place(blocks, archetype)
        blocks = self.chart_synthesizer.synthesize(blocks, self.theme, intent)
        blocks = self.balancer.balance(blocks)
        render_data = self.renderer.render(blocks, archetype, self.theme, canvas)

        logger.debug(f"Slide {slide_number}: '{archetype.id}' with {len(blocks)} blocks")

        return SlideLayout(
            slide_number=slide_number,
            archetype=archetype,
            blocks=blocks,
            canvas=canvas,
            grid=grid,
            render_data=render_data,
        )


def summarize_visual_assets(slides: List[SlideLayout]) -> VisualAssetsSummary:
    """Count images and charts across the deck."""
    image_breakdown = {}
    svg_breakdown = {}
    total_images = 0
    total_svgs = 0
    total_charts = 0

    for slide in slides:
        for block in slide.blocks:
            if block.kind == BlockKind.IMAGE:
                total_images += 1
                source = block.content.source or DEFAULT_IMAGE_SOURCE
                image_breakdown[source] = image_breakdown.get(source, 0) + 1
            elif block.kind == BlockKind.CHART:
                total_charts += 1
                if block.content.svg:
                    total_svgs += 1
                    chart_type = block.content.chart_type
                    svg_breakdown[chart_type] = svg_breakdown.get(chart_type, 0) + 1

    return VisualAssetsSummary(
        total_images=total_images,
        total_svgs=total_svgs,
        total_charts=total_charts,
        image_breakdown=image_breakdown,
        svg_breakdown=svg_breakdown,
    )


class DeckPipeline:
    """
    Builds a CompletePitchDeck from an outline.

    Theme and aspect ratio default to DEFAULT_THEME_ID / DEFAULT_ASPECT_RATIO
    from settings. Unknown values fall back with a warning.
    """

    def __init__(self, max_parallel_slides: Optional[int] = None):
        settings = get_settings()
        self.settings = settings
        self.max_parallel_slides = max_parallel_slides or settings.MAX_PARALLEL_SLIDES
        self.consistency_checker = ConsistencyChecker()
        self.exporter = Exporter()

    def _slide_pipeline(self, theme: Optional[str], aspect_ratio: Optional[str]) -> SlidePipeline:
        tokens = get_design_tokens(theme or self.settings.DEFAULT_THEME_ID)
        return SlidePipeline(tokens, aspect_ratio or self.settings.DEFAULT_ASPECT_RATIO)

    def build(
        self,
        outline: PitchDeckOutline,
        theme: Optional[str] = None,
        aspect_ratio: Optional[str] = None,
    ) -> CompletePitchDeck:
        """Render every slide in order, then run the deck-level stages."""
        start_time = time.time()
        pipeline = self._slide_pipeline(theme, aspect_ratio)

        slides = [
            pipeline.process(slide, index + 1)
            for index, slide in enumerate(outline.slides)
        ]

        deck = self._finish(outline, slides, pipeline.theme)
        logger.info(f"Built {len(slides)} slide(s) in {time.time() - start_time:.2f}s")
        return deck

    async def build_async(
        self,
        outline: PitchDeckOutline,
        theme: Optional[str] = None,
        aspect_ratio: Optional[str] = None,
    ) -> CompletePitchDeck:
        """
        Render slides concurrently in worker threads, then run the deck-level stages.

        At most max_parallel_slides slides are in flight at once. Slide order is
        restored by slide number regardless of completion order.
        """
        start_time = time.time()
        pipeline = self._slide_pipeline(theme, aspect_ratio)
        semaphore = asyncio.Semaphore(self.max_parallel_slides)

        async def render(slide: SlideOutline, slide_number: int) -> SlideLayout:
            async with semaphore:
                return await asyncio.to_thread(pipeline.process, slide, slide_number)

        tasks = [render(slide, index + 1) for index, slide in enumerate(outline.slides)]
        slides = list(await asyncio.gather(*tasks))

        deck = self._finish(outline, slides, pipeline.theme)
        logger.info(
            f"Built {len(slides)} slide(s) in parallel "
            f"(max {self.max_parallel_slides}) in {time.time() - start_time:.2f}s"
        )
        return deck

    def _finish(self, outline: PitchDeckOutline, slides: List[SlideLayout], theme: DesignTokens) -> CompletePitchDeck:
        # Deck-level barrier: every slide is rendered before these run
        slides = sorted(slides, key=lambda slide: slide.slide_number)
        consistency = self.consistency_checker.check(slides, theme)
        visual_assets = summarize_visual_assets(slides)
        export_formats = self.exporter.export(outline, slides, theme, visual_assets, consistency)

        return CompletePitchDeck(
            outline=outline,
            slides=slides,
            theme=theme,
            visual_assets=visual_assets,
            export_formats=export_formats,
            consistency=consistency,
        )


def build_deck(
    outline: PitchDeckOutline,
    theme: Optional[str] = None,
    aspect_ratio: Optional[str] = None,
) -> CompletePitchDeck:
    """Convenience function wrapping DeckPipeline().build()."""
    return DeckPipeline().build(outline, theme, aspect_ratio)

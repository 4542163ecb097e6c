"""
Pitch Deck Service for Deckforge

Orchestrates one deck generation: research, outline, optional image and
speaker-notes enrichment, then the layout pipeline.

Failure policy:
- research or outline failure, or an empty outline: DeckGenerationError,
  no partial deck is returned
- image search or speaker-notes failure for a slide: logged, the slide
  continues without the enrichment
"""

import asyncio
import time
from typing import Dict, List, Optional

from config.settings import get_settings
from deckforge.core.pipeline import DeckPipeline
from deckforge.models.deck import CompletePitchDeck
from deckforge.models.outline import PitchDeckOutline, PitchDeckRequest, SlideOutline
from deckforge.services.collaborators import (
    ImageSearchProvider,
    OutlineProvider,
    ResearchProvider,
    TextGenerator,
)
from deckforge.utils.logger import setup_logger

logger = setup_logger(__name__)

# Slide intents that read better with a photo or illustration
IMAGE_SLIDE_TYPES = {
    "title", "hero", "problem", "solution", "product", "team", "demo", "before-after",
}

MAX_IMAGE_KEYWORDS = 3


class DeckGenerationError(Exception):
    """Exception raised when a deck cannot be generated at all."""

    def __init__(self, message: str, company_name: Optional[str] = None):
        self.message = message
        self.company_name = company_name
        super().__init__(f"Deck generation failed: {message}")


def needs_image(slide: SlideOutline) -> bool:
    if slide.images:
        return False
    return slide.slide_type in IMAGE_SLIDE_TYPES or bool(slide.visual_suggestions)


def image_keywords(slide: SlideOutline, request: PitchDeckRequest) -> List[str]:
    """Search keywords for a slide: visual suggestions, then key points, then the title."""
    keywords = list(slide.visual_suggestions[:MAX_IMAGE_KEYWORDS])
    if not keywords:
        keywords = list(slide.key_points[:MAX_IMAGE_KEYWORDS])
    if not keywords and slide.title:
        keywords = [slide.title]
    if request.industry:
        keywords.append(request.industry)
    return keywords


def speaker_notes_prompt(slide: SlideOutline, request: PitchDeckRequest) -> str:
    lines = [
        "Write concise speaker notes for one pitch deck slide.",
        f"Company: {request.company_name}",
        f"Industry: {request.industry or 'Not specified'}",
        f"Audience: {request.target_audience or 'Investors'}",
        f"Slide type: {slide.slide_type}",
        f"Slide title: {slide.title}",
        "",
        "Slide content:",
    ]
    lines += [f"- {item}" for item in slide.content]
    if slide.key_points:
        lines += ["", "Key points to emphasise:"]
        lines += [f"- {point}" for point in slide.key_points]
    lines += ["", "Keep it to a few sentences a presenter can say aloud."]
    return "\n".join(lines)


def fallback_speaker_notes(slide: SlideOutline) -> Optional[str]:
    if slide.key_points:
        return f"Key points: {', '.join(slide.key_points)}"
    return None


class PitchDeckService:
    """
    Generates complete pitch decks from requests.

    Usage:
        service = PitchDeckService(research, outline_provider, text_generator, image_search)
        deck = await service.generate(PitchDeckRequest(company_name="Acme"))
    """

    def __init__(
        self,
        research: ResearchProvider,
        outline_provider: OutlineProvider,
        text_generator: Optional[TextGenerator] = None,
        image_search: Optional[ImageSearchProvider] = None,
        pipeline: Optional[DeckPipeline] = None,
    ):
        self.settings = get_settings()
        self.research = research
        self.outline_provider = outline_provider
        self.text_generator = text_generator
        self.image_search = image_search
        self.pipeline = pipeline or DeckPipeline()

    async def generate(self, request: PitchDeckRequest) -> CompletePitchDeck:
        """
        Generate a complete deck.

        Raises:
            DeckGenerationError: If research or outline generation fails, or
                the outline has no slides
        """
        start_time = time.time()
        logger.info(f"Starting pitch deck generation for: {request.company_name}")

        outline = await self.create_outline(request)
        outline = await self.enrich_outline(outline, request)

        theme = request.theme or self.settings.DEFAULT_THEME_ID
        aspect_ratio = request.slide_aspect_ratio or self.settings.DEFAULT_ASPECT_RATIO

        if self.settings.PARALLEL_SLIDE_PROCESSING:
            deck = await self.pipeline.build_async(outline, theme, aspect_ratio)
        else:
            deck = self.pipeline.build(outline, theme, aspect_ratio)

        logger.info(
            f"Pitch deck for {request.company_name} ready: {len(deck.slides)} slides "
            f"in {time.time() - start_time:.2f}s"
        )
        return deck

    async def create_outline(self, request: PitchDeckRequest) -> PitchDeckOutline:
        """Research the request and build its outline."""
        try:
            insights = await self.research.gather_insights(request)
        except Exception as e:
            logger.error(f"Research failed for {request.company_name}: {str(e)}")
            raise DeckGenerationError(f"research failed: {str(e)}", request.company_name) from e

        logger.info(
            f"Gathered insights in {len(insights)} categories",
            extra={"categories": sorted(insights.keys())}
        )

        try:
            outline = await self.outline_provider.build_outline(request, insights)
        except Exception as e:
            logger.error(f"Outline generation failed for {request.company_name}: {str(e)}")
            raise DeckGenerationError(f"outline generation failed: {str(e)}", request.company_name) from e

        if outline is None or not outline.slides:
            raise DeckGenerationError("no outline available", request.company_name)

        return outline

    async def enrich_outline(self, outline: PitchDeckOutline, request: PitchDeckRequest) -> PitchDeckOutline:
        """Attach images and speaker notes where collaborators are available."""
        slides = list(outline.slides)

        if self.image_search is not None and self.settings.IMAGE_SEARCH_ENABLED:
            slides = await self._add_images(slides, request)

        if self.text_generator is not None and self.settings.INCLUDE_SPEAKER_NOTES:
            slides = await self._add_speaker_notes(slides, request)

        return outline.model_copy(update={"slides": slides})

    async def _add_images(self, slides: List[SlideOutline], request: PitchDeckRequest) -> List[SlideOutline]:
        targets = [index for index, slide in enumerate(slides) if needs_image(slide)]
        if not targets:
            return slides

        limit = self.settings.IMAGE_SEARCH_LIMIT
        tasks = [
            self.image_search.search(image_keywords(slides[index], request), limit)
            for index in targets
        ]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        enriched = list(slides)
        found = 0
        for index, result in zip(targets, results):
            if isinstance(result, Exception):
                logger.warning(
                    f"Image search failed for slide {index + 1}: {str(result)}",
                    extra={"slide_type": slides[index].slide_type}
                )
                continue
            if result:
                enriched[index] = slides[index].model_copy(update={"images": list(result)[:limit]})
                found += 1

        logger.info(f"Image search attached images to {found} of {len(targets)} slide(s)")
        return enriched

    async def _add_speaker_notes(self, slides: List[SlideOutline], request: PitchDeckRequest) -> List[SlideOutline]:
        targets = [index for index, slide in enumerate(slides) if not slide.speaker_notes]
        if not targets:
            return slides

        tasks = [
            self.text_generator.generate(speaker_notes_prompt(slides[index], request))
            for index in targets
        ]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        limit = self.settings.SPEAKER_NOTES_MAX_CHARS
        enriched = list(slides)
        for index, result in zip(targets, results):
            if isinstance(result, Exception):
                logger.warning(f"Speaker notes failed for slide {index + 1}: {str(result)}")
                notes = fallback_speaker_notes(slides[index])
            else:
                notes = (result or "").strip()[:limit] or fallback_speaker_notes(slides[index])

            if notes:
                enriched[index] = slides[index].model_copy(update={"speaker_notes": notes})

        return enriched


async def generate_pitch_deck(
    request: PitchDeckRequest,
    research: ResearchProvider,
    outline_provider: OutlineProvider,
    text_generator: Optional[TextGenerator] = None,
    image_search: Optional[ImageSearchProvider] = None,
) -> CompletePitchDeck:
    """Convenience function wrapping PitchDeckService.generate()."""
    service = PitchDeckService(research, outline_provider, text_generator, image_search)
    return await service.generate(request)

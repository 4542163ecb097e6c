"""
Deckforge

Content-to-layout synthesis for pitch decks: turns a flat slide outline into
laid-out, theme-consistent slides with JSON, Markdown and HTML exports.
"""

__version__ = "1.0.0"

from deckforge.models import (
    CompletePitchDeck,
    PitchDeckOutline,
    PitchDeckRequest,
    SlideOutline,
    get_available_themes,
)
from deckforge.core import DeckPipeline, SlidePipeline, build_deck
from deckforge.services import PitchDeckService, DeckGenerationError

__all__ = [
    '__version__',
    'CompletePitchDeck',
    'PitchDeckOutline',
    'PitchDeckRequest',
    'SlideOutline',
    'get_available_themes',
    'DeckPipeline',
    'SlidePipeline',
    'build_deck',
    'PitchDeckService',
    'DeckGenerationError',
]

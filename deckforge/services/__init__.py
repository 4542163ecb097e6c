"""
Services Package for Deckforge

Collaborator interfaces and the deck generation orchestration service.
"""

from .collaborators import (
    ResearchProvider,
    OutlineProvider,
    TextGenerator,
    ImageSearchProvider,
    CollaboratorError
)
from .deck_service import PitchDeckService, DeckGenerationError, generate_pitch_deck

__all__ = [
    'ResearchProvider',
    'OutlineProvider',
    'TextGenerator',
    'ImageSearchProvider',
    'CollaboratorError',
    'PitchDeckService',
    'DeckGenerationError',
    'generate_pitch_deck',
]

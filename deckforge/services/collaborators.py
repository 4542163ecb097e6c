"""
Collaborator Interfaces for Deckforge

The layout pipeline consumes outlines; producing them needs outside help.
These abstract interfaces describe the collaborators PitchDeckService
composes. Concrete implementations live elsewhere (an HTTP image search
client ships in deckforge.clients).

Lifecycle of one deck generation:
1. ResearchProvider.gather_insights()   - category -> ranked insight strings
2. OutlineProvider.build_outline()      - request + insights -> PitchDeckOutline
3. ImageSearchProvider.search()         - optional, per slide needing a visual
4. TextGenerator.generate()             - optional, speaker notes
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from deckforge.models.outline import ImageDescriptor, PitchDeckOutline, PitchDeckRequest


class ResearchProvider(ABC):
    """Supplies ranked textual insights per topic category."""

    @abstractmethod
    async def gather_insights(self, request: PitchDeckRequest) -> Dict[str, List[str]]:
        """
        Gather insights for a deck request.

        Returns:
            Mapping of category name (e.g. 'market_size', 'competition') to
            insight strings, best first
        """
        pass


class OutlineProvider(ABC):
    """Turns a request and its research into a slide outline."""

    @abstractmethod
    async def build_outline(
        self,
        request: PitchDeckRequest,
        insights: Dict[str, List[str]]
    ) -> PitchDeckOutline:
        pass


class TextGenerator(ABC):
    """Free-text generation from a prompt."""

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        pass


class ImageSearchProvider(ABC):
    """Finds candidate images for keywords. Pixels are never fetched."""

    @abstractmethod
    async def search(self, keywords: List[str], limit: int = 3) -> List[ImageDescriptor]:
        pass


class CollaboratorError(Exception):
    """Exception raised when a collaborator call fails."""

    def __init__(self, collaborator: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.collaborator = collaborator
        self.message = message
        self.details = details or {}
        super().__init__(f"Collaborator '{collaborator}' failed: {message}")

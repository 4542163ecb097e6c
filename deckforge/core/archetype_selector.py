"""
Archetype Selector for Deckforge

Stage 2 of the slide pipeline: maps a slide's blocks and intent tag to a
layout archetype from the catalog.

Selection order:
1. Exact match: first catalog archetype whose suitable_for lists the intent
2. Content heuristics (only when nothing matched):
   ┌──────────────────────────────────────┬───────────────────────────┐
   │  CONTENT                             │  ARCHETYPE                │
   ├──────────────────────────────────────┼───────────────────────────┤
   │  chart block + at least one bullet   │  two-column-comparison    │
   │  image block + at most two bullets   │  big-visual-caption       │
   │  anything else                       │  title-bullets-visual     │
   └──────────────────────────────────────┴───────────────────────────┘

The selection is a total, deterministic function of (blocks, intent).
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from deckforge.models.blocks import BlockKind, ContentBlock
from deckforge.models.layout import (
    ARCHETYPE_CATALOG,
    BIG_VISUAL_ARCHETYPE_ID,
    COMPARISON_ARCHETYPE_ID,
    DEFAULT_ARCHETYPE_ID,
    LayoutArchetype,
    get_archetype,
)
from deckforge.utils.logger import setup_logger

logger = setup_logger(__name__)

# Image slides with more bullets than this keep the default archetype
BIG_VISUAL_MAX_BULLETS = 2


@dataclass
class ArchetypeSelection:
    """Result of archetype selection for a slide."""
    archetype: LayoutArchetype
    matched_intent: bool          # True when picked by exact intent match
    reason: str                   # Short explanation for logs/debugging


class ArchetypeSelector:
    """Chooses a layout archetype for a slide."""

    def __init__(self, catalog: Optional[Sequence[LayoutArchetype]] = None):
        """
        Initialize ArchetypeSelector.

        Args:
            catalog: Archetype catalog to search (defaults to ARCHETYPE_CATALOG)
        """
        self.catalog = list(catalog) if catalog is not None else ARCHETYPE_CATALOG

    def select(self, blocks: List[ContentBlock], intent: str) -> LayoutArchetype:
        """Return the archetype for the slide."""
        return self.analyze(blocks, intent).archetype

    def analyze(self, blocks: List[ContentBlock], intent: str) -> ArchetypeSelection:
        """Select an archetype and report why it was chosen."""
        intent_tag = (intent or "").strip().lower()

        for archetype in self.catalog:
            if intent_tag and intent_tag in archetype.suitable_for:
                logger.debug(f"Intent '{intent_tag}' matched archetype '{archetype.id}'")
                return ArchetypeSelection(archetype, True, f"intent '{intent_tag}'")

        return self._select_by_content(blocks, intent_tag)

    def _select_by_content(self, blocks: List[ContentBlock], intent_tag: str) -> ArchetypeSelection:
        """Heuristic fallback when no archetype lists the intent."""
        has_image = any(block.kind == BlockKind.IMAGE for block in blocks)
        has_chart = any(block.kind == BlockKind.CHART for block in blocks)
        bullet_count = sum(1 for block in blocks if block.kind == BlockKind.BULLETS)

        if has_chart and bullet_count > 0:
            archetype_id = COMPARISON_ARCHETYPE_ID
            reason = "chart with supporting bullets"
        elif has_image and bullet_count <= BIG_VISUAL_MAX_BULLETS:
            archetype_id = BIG_VISUAL_ARCHETYPE_ID
            reason = f"image with {bullet_count} bullet(s)"
        else:
            archetype_id = DEFAULT_ARCHETYPE_ID
            reason = "default"

        archetype = self._by_id(archetype_id)
        logger.debug(
            f"No archetype for intent '{intent_tag}', heuristic picked '{archetype.id}' ({reason})"
        )
        return ArchetypeSelection(archetype, False, reason)

    def _by_id(self, archetype_id: str) -> LayoutArchetype:
        for archetype in self.catalog:
            if archetype.id == archetype_id:
                return archetype
        # Custom catalogs without the named archetype fall back to their first entry
        return self.catalog[0] if self.catalog else get_archetype(archetype_id)


def select_archetype(blocks: List[ContentBlock], intent: str) -> LayoutArchetype:
    """Convenience function wrapping ArchetypeSelector.select()."""
    return ArchetypeSelector().select(blocks, intent)

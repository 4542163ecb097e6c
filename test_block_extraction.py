"""
Test Suite for Deckforge Block Extraction and Archetype Selection

Tests:
1. Title, bullets, image, chart and notes blocks are emitted in order
2. First three bullets are must-show, the rest nice-to-have
3. Empty slides yield an empty block list; a statistics string yields a chart
4. Block payloads are tagged by kind and blocks are immutable
5. Exact intent match picks the first listing archetype
6. Heuristic fallback: chart + bullets, image + few bullets, default
"""

import sys
sys.path.insert(0, '.')

import pytest
from pydantic import ValidationError


def _outline_slide(**overrides):
    from deckforge.models import ImageDescriptor, SlideOutline

    values = {
        "slide_number": 2,
        "slide_type": "problem",
        "title": "Payments are broken",
        "content": [
            "Merchants wait 3 days for settlement",
            "Fees average 2.9% per transaction",
            "Chargebacks are manual",
            "Cross-border adds 4% FX markup",
            "Reconciliation takes a full-time hire",
        ],
        "images": [
            ImageDescriptor(url="https://img.example/a.jpg", width=1600, height=900, alt="Checkout"),
            ImageDescriptor(url="https://img.example/b.jpg"),
        ],
        "statistics": [{"label": "NA", "value": 40}, {"label": "EU", "value": 60}],
        "speaker_notes": "Lead with the merchant story.",
    }
    values.update(overrides)
    return SlideOutline(**values)


def test_block_order_and_ids():
    """Test 1: Blocks are emitted in a fixed order with stable IDs."""
    print("\n[TEST 1] Block Order and IDs")
    print("-" * 50)

    from deckforge.core.block_extractor import BlockExtractor
    from deckforge.models import BlockKind, Priority, VisualWeight

    blocks = BlockExtractor().extract(_outline_slide())
    kinds = [block.kind for block in blocks]
    print(f"  Kinds: {[kind.value for kind in kinds]}")

    assert kinds == [BlockKind.TITLE] + [BlockKind.BULLETS] * 5 + [
        BlockKind.IMAGE, BlockKind.CHART, BlockKind.NOTES
    ]
    assert [block.id for block in blocks] == [
        "title-2",
        "content-2-0", "content-2-1", "content-2-2", "content-2-3", "content-2-4",
        "image-2", "chart-2", "notes-2",
    ]
    assert len({block.id for block in blocks}) == len(blocks)
    print("  ✓ IDs unique and ordered")

    title = blocks[0]
    assert title.priority == Priority.MUST_SHOW
    assert title.visual_weight == VisualWeight.HEAVY
    assert title.intent == "problem"
    assert title.estimated_length == len("Payments are broken")

    image = blocks[6]
    assert image.content.url == "https://img.example/a.jpg", "Only the first image is used"
    assert image.priority == Priority.MUST_SHOW
    assert image.visual_weight == VisualWeight.HEAVY

    chart = blocks[7]
    assert chart.content.raw == [{"label": "NA", "value": 40}, {"label": "EU", "value": 60}]
    assert chart.priority == Priority.MUST_SHOW

    notes = blocks[8]
    assert notes.priority == Priority.NICE_TO_HAVE
    assert notes.content.text == "Lead with the merchant story."
    print("  ✓ TEST 1 PASSED!")


def test_bullet_priority_threshold():
    """Test 2: First MUST_SHOW_BULLET_LIMIT bullets are must-show."""
    print("\n[TEST 2] Bullet Priority Threshold")
    print("-" * 50)

    from deckforge.core.block_extractor import BlockExtractor, MUST_SHOW_BULLET_LIMIT
    from deckforge.models import BlockKind, Priority

    assert MUST_SHOW_BULLET_LIMIT == 3
    blocks = BlockExtractor().extract(_outline_slide())
    bullets = [block for block in blocks if block.kind == BlockKind.BULLETS]

    priorities = [block.priority for block in bullets]
    print(f"  Priorities: {[p.value for p in priorities]}")
    assert priorities == [Priority.MUST_SHOW] * 3 + [Priority.NICE_TO_HAVE] * 2
    assert [block.content.items[0] for block in bullets] == _outline_slide().content
    assert all(block.intent == "supporting-detail" for block in bullets)
    print("  ✓ TEST 2 PASSED!")


def test_empty_slide():
    """Test 3: A slide with no content yields no blocks."""
    print("\n[TEST 3] Empty Slide")
    print("-" * 50)

    from deckforge.core.block_extractor import BlockExtractor
    from deckforge.models import SlideOutline

    assert BlockExtractor().extract(SlideOutline()) == []
    print("  ✓ Empty outline -> []")

    blocks = BlockExtractor().extract(SlideOutline(title="", statistics={"type": "pie", "data": []}))
    assert blocks == [], "Statistics without data produce no chart block"

    assert BlockExtractor().extract(SlideOutline(statistics="   ")) == []
    blocks = BlockExtractor().extract(SlideOutline(slide_number=4, statistics="$4.2B market"))
    assert [block.id for block in blocks] == ["chart-4"]
    assert blocks[0].content.raw == "$4.2B market"
    print("  ✓ A single statistic string becomes a chart block")

    from deckforge.core.pipeline import build_deck
    from deckforge.models import PitchDeckOutline

    outline = PitchDeckOutline(slides=[SlideOutline(slide_type="market", title="Market", statistics="$4.2B market")])
    deck = build_deck(outline)
    chart = next(block for block in deck.slides[0].blocks if block.kind.value == "chart").content
    assert [(p.label, p.value) for p in chart.data] == [("market", 4.2e9)]
    print("  ✓ TEST 3 PASSED!")


def test_payloads_are_tagged_and_frozen():
    """Test 4: Payload kind must match block kind; blocks cannot be mutated."""
    print("\n[TEST 4] Tagged, Immutable Blocks")
    print("-" * 50)

    from deckforge.models import BlockKind, ContentBlock, TitlePayload

    with pytest.raises(ValidationError):
        ContentBlock(id="x", kind=BlockKind.BULLETS, content=TitlePayload(text="Oops"))
    print("  ✓ Mismatched payload rejected")

    block = ContentBlock(id="b", kind=BlockKind.BULLETS, content={"kind": "bullets", "items": ["a", "bbb"]})
    assert block.content.text_length == 3
    with pytest.raises(ValidationError):
        block.intent = "changed"
    styled = block.with_styling(font_size=20)
    assert block.styling is None
    assert styled.styling.font_size == 20
    print("  ✓ TEST 4 PASSED!")


def test_exact_intent_match():
    """Test 5: Intent listed in suitable_for wins, first in catalog order."""
    print("\n[TEST 5] Exact Intent Match")
    print("-" * 50)

    from deckforge.core.archetype_selector import ArchetypeSelector
    from deckforge.core.block_extractor import BlockExtractor

    selector = ArchetypeSelector()
    blocks = BlockExtractor().extract(_outline_slide())

    cases = {
        "market": "data-insight",
        "problem": "title-bullets-visual",
        "comparison": "two-column-comparison",
        "before-after": "big-visual-caption",
        "roadmap": "agenda",
        "section": "section-break",
    }
    for intent, expected in cases.items():
        selection = selector.analyze(blocks, intent)
        print(f"  {intent:14s} -> {selection.archetype.id}")
        assert selection.archetype.id == expected
        assert selection.matched_intent
        assert intent in selection.archetype.suitable_for

    from deckforge.core.archetype_selector import select_archetype
    from deckforge.core.block_extractor import extract_blocks
    from deckforge.models.layout import find_archetypes_for_intent

    assert [a.id for a in find_archetypes_for_intent("before-after")] == [
        "big-visual-caption", "two-column-comparison"
    ]
    assert extract_blocks(_outline_slide()) == blocks
    assert select_archetype(blocks, "market").id == "data-insight"
    print("  ✓ TEST 5 PASSED!")


def test_heuristic_fallback():
    """Test 6: Unmatched intents fall back on content heuristics."""
    print("\n[TEST 6] Heuristic Fallback")
    print("-" * 50)

    from deckforge.core.archetype_selector import ArchetypeSelector
    from deckforge.core.block_extractor import BlockExtractor
    from deckforge.models import DEFAULT_ARCHETYPE_ID

    selector = ArchetypeSelector()
    extractor = BlockExtractor()

    # Image + exactly one bullet -> big visual
    slide = _outline_slide(slide_type="vision", content=["One line"], statistics=None)
    assert selector.select(extractor.extract(slide), "vision").id == "big-visual-caption"
    print("  ✓ image + 1 bullet -> big-visual-caption")

    # Chart + bullets -> comparison (checked before the image rule)
    slide = _outline_slide(slide_type="vision")
    assert selector.select(extractor.extract(slide), "vision").id == "two-column-comparison"
    print("  ✓ chart + bullets -> two-column-comparison")

    # Image + three bullets -> default
    slide = _outline_slide(slide_type="vision", content=["a", "b", "c"], statistics=None)
    assert selector.select(extractor.extract(slide), "vision").id == DEFAULT_ARCHETYPE_ID
    print("  ✓ image + 3 bullets -> default")

    # Nothing at all -> default
    assert selector.select([], "").id == DEFAULT_ARCHETYPE_ID

    # Deterministic
    blocks = extractor.extract(_outline_slide(slide_type="vision"))
    assert len({selector.select(blocks, "vision").id for _ in range(5)}) == 1
    print("  ✓ TEST 6 PASSED!")


def main():
    print("=" * 60)
    print("DECKFORGE BLOCK EXTRACTION + ARCHETYPE TESTS")
    print("=" * 60)

    tests = [
        test_block_order_and_ids,
        test_bullet_priority_threshold,
        test_empty_slide,
        test_payloads_are_tagged_and_frozen,
        test_exact_intent_match,
        test_heuristic_fallback,
    ]
    results = []
    for test in tests:
        try:
            test()
            results.append(True)
        except Exception as e:
            print(f"  ✗ {test.__name__} FAILED: {e}")
            results.append(False)

    print("\n" + "=" * 60)
    print(f"RESULTS: {sum(results)}/{len(results)} tests passed")
    print("=" * 60)
    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())

"""
Test Suite for Deckforge PitchDeckService

Uses in-memory collaborators (no network, no LLM).

Tests:
1. Research -> outline -> images -> notes -> rendered deck
2. Research or outline failure raises DeckGenerationError
3. Image search and speaker-notes failures degrade per slide
4. Generated notes are truncated; existing notes are kept
5. Prompt and keyword helpers
"""

import asyncio
import sys
sys.path.insert(0, '.')

import pytest

from deckforge.models import ImageDescriptor, PitchDeckOutline, PitchDeckRequest, SlideOutline
from deckforge.services.collaborators import (
    CollaboratorError,
    ImageSearchProvider,
    OutlineProvider,
    ResearchProvider,
    TextGenerator,
)


class FakeResearch(ResearchProvider):
    def __init__(self, fail=False):
        self.fail = fail

    async def gather_insights(self, request):
        if self.fail:
            raise CollaboratorError("research", "search backend timed out")
        return {
            "market_size": [f"{request.industry} market worth $4.2B"],
            "competition": ["Incumbents charge 2.9%"],
        }


class FakeOutline(OutlineProvider):
    def __init__(self, slides=None, fail=False):
        self.slides = slides
        self.fail = fail
        self.received_insights = None

    async def build_outline(self, request, insights):
        if self.fail:
            raise CollaboratorError("outline", "model returned invalid JSON")
        self.received_insights = insights
        slides = self.slides if self.slides is not None else _default_slides()
        return PitchDeckOutline(title=request.company_name, subtitle=request.industry or "", slides=slides)


class FakeImageSearch(ImageSearchProvider):
    def __init__(self, failing_keyword=None):
        self.failing_keyword = failing_keyword
        self.calls = []

    async def search(self, keywords, limit=3):
        self.calls.append((list(keywords), limit))
        if self.failing_keyword in keywords:
            raise CollaboratorError("image_search", "HTTP 503")
        return [
            ImageDescriptor(url=f"https://img.example/{keywords[0].replace(' ', '-')}-{n}.jpg", source="fake")
            for n in range(limit + 2)
        ]


class FakeTextGenerator(TextGenerator):
    def __init__(self, reply="Open with the customer story.", fail=False):
        self.reply = reply
        self.fail = fail
        self.prompts = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        if self.fail:
            raise CollaboratorError("text_generator", "quota exceeded")
        return self.reply


def _default_slides():
    return [
        SlideOutline(slide_type="problem", title="Settlement is slow",
                     content=["3-day payouts", "High fees"], key_points=["slow settlement"]),
        SlideOutline(slide_type="market", title="Market",
                     statistics=[{"label": "NA", "value": 40}, {"label": "EU", "value": 60}],
                     key_points=["$4.2B", "growing 12%"]),
        SlideOutline(slide_type="team", title="Team", content=["Ex-Stripe"],
                     speaker_notes="Keep this one short."),
    ]


def _request():
    return PitchDeckRequest(company_name="Acme Pay", industry="fintech", theme="modern")


def _service(**overrides):
    from deckforge.services.deck_service import PitchDeckService

    collaborators = {
        "research": FakeResearch(),
        "outline_provider": FakeOutline(),
        "text_generator": FakeTextGenerator(),
        "image_search": FakeImageSearch(),
    }
    collaborators.update(overrides)
    return PitchDeckService(**collaborators), collaborators


def test_generate_deck():
    """Test 1: Full generation with every collaborator available."""
    print("\n[TEST 1] Generate Deck")
    print("-" * 50)

    service, fakes = _service()
    deck = asyncio.run(service.generate(_request()))

    print(f"  slides={len(deck.slides)} archetypes={[s.archetype.id for s in deck.slides]}")
    assert len(deck.slides) == 3
    assert deck.outline.title == "Acme Pay"
    assert "market_size" in fakes["outline_provider"].received_insights

    # problem and team slides need images; market does not
    searched = [keywords for keywords, _ in fakes["image_search"].calls]
    assert searched == [["slow settlement", "fintech"], ["Team", "fintech"]]
    assert all(limit == 3 for _, limit in fakes["image_search"].calls)
    problem, market, team = deck.outline.slides
    assert len(problem.images) == 3, "Results are capped at IMAGE_SEARCH_LIMIT"
    assert market.images == []
    assert deck.visual_assets.image_breakdown == {"fake": 2}

    # notes generated for slides without them
    assert len(fakes["text_generator"].prompts) == 2
    assert problem.speaker_notes == "Open with the customer story."
    assert team.speaker_notes == "Keep this one short."
    notes = [b for b in deck.slides[0].blocks if b.kind.value == "notes"]
    assert notes and notes[0].content.text == "Open with the customer story."
    print("  ✓ TEST 1 PASSED!")


def test_generation_failures():
    """Test 2: Research/outline failures abort generation."""
    print("\n[TEST 2] Generation Failures")
    print("-" * 50)

    from deckforge.services.deck_service import DeckGenerationError

    service, _ = _service(research=FakeResearch(fail=True))
    with pytest.raises(DeckGenerationError) as exc_info:
        asyncio.run(service.generate(_request()))
    print(f"  {exc_info.value}")
    assert str(exc_info.value).startswith("Deck generation failed: research failed")
    assert exc_info.value.company_name == "Acme Pay"
    assert isinstance(exc_info.value.__cause__, CollaboratorError)

    service, _ = _service(outline_provider=FakeOutline(fail=True))
    with pytest.raises(DeckGenerationError) as exc_info:
        asyncio.run(service.generate(_request()))
    assert "outline generation failed" in str(exc_info.value)

    service, _ = _service(outline_provider=FakeOutline(slides=[]))
    with pytest.raises(DeckGenerationError) as exc_info:
        asyncio.run(service.generate(_request()))
    assert "no outline available" in str(exc_info.value)
    print("  ✓ TEST 2 PASSED!")


def test_enrichment_degrades():
    """Test 3: One failing image search and a failing text generator."""
    print("\n[TEST 3] Enrichment Degrades")
    print("-" * 50)

    service, _ = _service(
        image_search=FakeImageSearch(failing_keyword="slow settlement"),
        text_generator=FakeTextGenerator(fail=True),
    )
    deck = asyncio.run(service.generate(_request()))

    problem, market, team = deck.outline.slides
    assert problem.images == [], "Failed search leaves the slide without images"
    assert len(team.images) == 3
    assert problem.speaker_notes == "Key points: slow settlement"
    assert market.speaker_notes == "Key points: $4.2B, growing 12%"
    assert team.speaker_notes == "Keep this one short."
    assert len(deck.slides) == 3
    print("  ✓ Deck still produced")

    # Without optional collaborators nothing is enriched
    service, _ = _service(image_search=None, text_generator=None)
    deck = asyncio.run(service.generate(_request()))
    assert deck.outline.slides[0].images == []
    assert deck.outline.slides[0].speaker_notes is None
    print("  ✓ TEST 3 PASSED!")


def test_notes_truncation():
    """Test 4: Long generated notes are cut at SPEAKER_NOTES_MAX_CHARS."""
    print("\n[TEST 4] Notes Truncation")
    print("-" * 50)

    from config.settings import get_settings

    limit = get_settings().SPEAKER_NOTES_MAX_CHARS
    service, _ = _service(text_generator=FakeTextGenerator(reply="  " + "n" * (limit + 400) + "  "))
    deck = asyncio.run(service.generate(_request()))
    notes = deck.outline.slides[0].speaker_notes
    assert len(notes) == limit
    assert notes == "n" * limit

    service, _ = _service(text_generator=FakeTextGenerator(reply="   "))
    deck = asyncio.run(service.generate(_request()))
    assert deck.outline.slides[0].speaker_notes == "Key points: slow settlement"
    print("  ✓ Blank replies fall back to key points")
    print("  ✓ TEST 4 PASSED!")


def test_helpers():
    """Test 5: needs_image, image_keywords and the notes prompt."""
    print("\n[TEST 5] Helpers")
    print("-" * 50)

    from deckforge.services.deck_service import image_keywords, needs_image, speaker_notes_prompt

    request = _request()
    assert needs_image(SlideOutline(slide_type="product"))
    assert needs_image(SlideOutline(slide_type="financials", visual_suggestions=["growth chart"]))
    assert not needs_image(SlideOutline(slide_type="financials"))
    assert not needs_image(SlideOutline(slide_type="product", images=[ImageDescriptor(url="u")]))

    slide = SlideOutline(slide_type="product", title="Dashboard",
                         visual_suggestions=["a", "b", "c", "d"], key_points=["k"])
    assert image_keywords(slide, request) == ["a", "b", "c", "fintech"]
    assert image_keywords(SlideOutline(), PitchDeckRequest(company_name="X")) == []

    prompt = speaker_notes_prompt(_default_slides()[0], request)
    assert "Company: Acme Pay" in prompt
    assert "Slide type: problem" in prompt
    assert "- 3-day payouts" in prompt
    assert "- slow settlement" in prompt
    print("  ✓ TEST 5 PASSED!")


def main():
    print("=" * 60)
    print("DECKFORGE PITCH DECK SERVICE TESTS")
    print("=" * 60)

    tests = [
        test_generate_deck,
        test_generation_failures,
        test_enrichment_degrades,
        test_notes_truncation,
        test_helpers,
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

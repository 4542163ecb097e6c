"""
Test Suite for Deckforge Layout Balancing

Tests:
1. Vertical rhythm: first text block 0px, later text blocks 24px
2. Text-heavy slides without visuals get the needs-visual suffix
3. Slides at or under the threshold, or with a visual, are not flagged
"""

import sys
sys.path.insert(0, '.')


def _bullets(lengths, number=1):
    from deckforge.models import BlockKind, BulletsPayload, ContentBlock
    return [
        ContentBlock(
            id=f"content-{number}-{index}",
            kind=BlockKind.BULLETS,
            content=BulletsPayload(items=["w" * length]),
            estimated_length=length,
            intent="supporting-detail",
        )
        for index, length in enumerate(lengths)
    ]


def test_vertical_rhythm():
    """Test 1: Margins follow the rhythm; visual blocks are untouched."""
    print("\n[TEST 1] Vertical Rhythm")
    print("-" * 50)

    from deckforge.core.layout_balancer import LayoutBalancer, RHYTHM_SPACING_PX
    from deckforge.models import BlockKind, ContentBlock, ImagePayload, TitlePayload

    title = ContentBlock(id="title-1", kind=BlockKind.TITLE, content=TitlePayload(text="T"),
                         estimated_length=1, intent="problem")
    image = ContentBlock(id="image-1", kind=BlockKind.IMAGE, content=ImagePayload(url="u"))
    blocks = [title] + _bullets([10, 10]) + [image]

    balanced = LayoutBalancer().balance(blocks)
    margins = [block.styling.margin_top if block.styling else None for block in balanced]
    print(f"  margins: {margins}")
    assert RHYTHM_SPACING_PX == 24
    assert margins == [0, 24, 24, None]

    # Without a title the first bullet starts the rhythm
    balanced = LayoutBalancer().balance(_bullets([5, 5, 5]))
    assert [block.styling.margin_top for block in balanced] == [0, 24, 24]
    print("  ✓ TEST 1 PASSED!")


def test_text_heavy_flag():
    """Test 2: Five bullets totalling more than 800 characters."""
    print("\n[TEST 2] Text-Heavy Detection")
    print("-" * 50)

    from deckforge.core.layout_balancer import LayoutBalancer, NEEDS_VISUAL_SUFFIX, TEXT_HEAVY_THRESHOLD

    assert TEXT_HEAVY_THRESHOLD == 800
    assert NEEDS_VISUAL_SUFFIX == "-needs-visual"

    blocks = _bullets([161, 160, 160, 160, 160])
    assert sum(block.estimated_length for block in blocks) == 801

    balanced = LayoutBalancer().balance(blocks)
    print(f"  leading intent: {balanced[0].intent}")
    assert balanced[0].intent.endswith("-needs-visual")
    assert balanced[0].intent == "supporting-detail-needs-visual"
    assert all(not block.intent.endswith("-needs-visual") for block in balanced[1:])
    assert balanced[0].content == blocks[0].content, "Content is never changed"

    # Re-balancing does not stack suffixes
    again = LayoutBalancer().balance(balanced)
    assert again[0].intent == "supporting-detail-needs-visual"
    print("  ✓ TEST 2 PASSED!")


def test_not_flagged():
    """Test 3: Exactly 800 characters, or a visual present, is not text-heavy."""
    print("\n[TEST 3] Not Flagged")
    print("-" * 50)

    from deckforge.core.layout_balancer import LayoutBalancer, analyze_balance
    from deckforge.models import BlockKind, ChartPayload, ContentBlock

    blocks = _bullets([160, 160, 160, 160, 160])
    assert analyze_balance(blocks).total_text_length == 800
    balanced = LayoutBalancer().balance(blocks)
    assert not balanced[0].intent.endswith("-needs-visual")
    print("  ✓ 800 characters not flagged")

    chart = ContentBlock(id="chart-1", kind=BlockKind.CHART, content=ChartPayload(raw=[1]))
    balanced = LayoutBalancer().balance(_bullets([500, 500]) + [chart])
    assert not balanced[0].intent.endswith("-needs-visual")
    print("  ✓ Visual present not flagged")

    assert LayoutBalancer().balance([]) == []
    print("  ✓ TEST 3 PASSED!")


def main():
    print("=" * 60)
    print("DECKFORGE LAYOUT BALANCING TESTS")
    print("=" * 60)

    tests = [test_vertical_rhythm, test_text_heavy_flag, test_not_flagged]
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

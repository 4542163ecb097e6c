"""
Test Suite for Deckforge Canvas, Text Fitting and Visual Placement

Tests:
1. Aspect ratio tags map to fixed resolutions; unknown tags fall back
2. Grid template splits into rows and columns verbatim
3. Short titles get the theme maximum, long titles shrink inside bounds
4. Font sizes never leave [min, max] for any theme, text length or canvas
5. Image blocks get a cover-fit placement for the visual region
"""

import sys
sys.path.insert(0, '.')


def _title_block(text):
    from deckforge.models import BlockKind, ContentBlock, TitlePayload
    return ContentBlock(id="title-1", kind=BlockKind.TITLE, content=TitlePayload(text=text),
                        estimated_length=len(text))


def _bullet_block(text, index=0):
    from deckforge.models import BlockKind, BulletsPayload, ContentBlock
    return ContentBlock(id=f"content-1-{index}", kind=BlockKind.BULLETS,
                        content=BulletsPayload(items=[text]), estimated_length=len(text))


def test_canvas_resolutions():
    """Test 1: Canvas dimensions per aspect ratio tag."""
    print("\n[TEST 1] Canvas Resolutions")
    print("-" * 50)

    from deckforge.core.canvas_builder import CanvasBuilder

    builder = CanvasBuilder()
    expected = {"16:9": (1920, 1080), "4:3": (1024, 768), "widescreen": (2560, 1080)}
    for tag, (width, height) in expected.items():
        canvas = builder.build_canvas(tag)
        print(f"  {tag:10s} -> {canvas.width}x{canvas.height}")
        assert (canvas.width, canvas.height, canvas.aspect_ratio) == (width, height, tag)

    fallback = builder.build_canvas("21:9")
    assert (fallback.width, fallback.height, fallback.aspect_ratio) == (1920, 1080, "16:9")
    assert builder.build_canvas(None).aspect_ratio == "16:9"
    print("  ✓ Unknown tag falls back to 16:9")
    print("  ✓ TEST 1 PASSED!")


def test_grid_split():
    """Test 2: Grid template rows/columns are preserved verbatim."""
    print("\n[TEST 2] Grid Split")
    print("-" * 50)

    from deckforge.core.canvas_builder import CanvasBuilder, parse_grid_rows
    from deckforge.models import get_archetype

    archetype = get_archetype("title-bullets-visual")
    grid = CanvasBuilder().build_grid(archetype)
    print(f"  rows: {grid.rows}")
    print(f"  columns: {grid.columns}")

    assert grid.rows == '"title title" 120px "body visual" 1fr "footer footer" 60px'
    assert grid.columns == "1fr 1fr"
    assert grid.areas == archetype.grid_template

    rows = parse_grid_rows(grid.rows)
    assert rows == [
        (["title", "title"], "120px"),
        (["body", "visual"], "1fr"),
        (["footer", "footer"], "60px"),
    ]
    print("  ✓ TEST 2 PASSED!")


def test_title_shrink_to_fit():
    """Test 3: Modern theme on a 1920px canvas."""
    print("\n[TEST 3] Title Shrink-to-Fit")
    print("-" * 50)

    from deckforge.core.canvas_builder import CanvasBuilder
    from deckforge.core.text_fitter import TextFitter, fit_font_size
    from deckforge.models import get_design_tokens

    theme = get_design_tokens("modern")
    canvas = CanvasBuilder().build_canvas("16:9")
    fitter = TextFitter()

    assert theme.sizes.title_min == 28 and theme.sizes.title_max == 48

    # 91 chars * 0.6 * 28 = 1528.8 <= 1536
    short_title = "x" * 91
    fitted = fitter.fit([_title_block(short_title)], canvas, theme)[0]
    print(f"  91 chars -> {fitted.styling.font_size}px")
    assert fitted.styling.font_size == 48

    # 120 chars * 0.6 * 28 = 2016 > 1536 -> floor(48 * 1536 / 2016) = 36
    long_title = "y" * 120
    fitted = fitter.fit([_title_block(long_title)], canvas, theme)[0]
    print(f"  120 chars -> {fitted.styling.font_size}px")
    assert fitted.styling.font_size == 36
    assert 28 < fitted.styling.font_size < 48

    # Very long titles stop at the minimum
    assert fit_font_size(1000, 28, 48, 1920) == 28
    # Zero-length text takes the maximum
    assert fit_font_size(0, 28, 48, 1920) == 48
    fitted = fitter.fit([_title_block("")], canvas, theme)[0]
    assert fitted.styling.font_size == 48
    print("  ✓ TEST 3 PASSED!")


def test_font_size_bounds():
    """Test 4: Fitted sizes stay within the theme's title/body bounds."""
    print("\n[TEST 4] Font Size Bounds")
    print("-" * 50)

    from deckforge.core.canvas_builder import CanvasBuilder
    from deckforge.core.text_fitter import TextFitter
    from deckforge.models import THEME_REGISTRY

    fitter = TextFitter()
    builder = CanvasBuilder()
    checked = 0

    for theme in THEME_REGISTRY.values():
        for tag in ("16:9", "4:3", "widescreen"):
            canvas = builder.build_canvas(tag)
            for length in (0, 1, 40, 150, 400, 5000):
                blocks = fitter.fit([_title_block("t" * length), _bullet_block("b" * length)], canvas, theme)
                title, bullet = blocks
                assert theme.sizes.title_min <= title.styling.font_size <= theme.sizes.title_max
                assert theme.sizes.body_min <= bullet.styling.font_size <= theme.sizes.body_max
                checked += 2

    print(f"  ✓ {checked} fitted sizes within bounds")
    print("  ✓ TEST 4 PASSED!")


def test_visual_placement():
    """Test 5: Images get cover-fit placement; other blocks pass through."""
    print("\n[TEST 5] Visual Placement")
    print("-" * 50)

    from deckforge.core.visual_placer import VisualPlacer
    from deckforge.models import BlockKind, ContentBlock, ImagePayload, get_archetype

    image = ContentBlock(id="image-1", kind=BlockKind.IMAGE, content=ImagePayload(url="https://img.example/x.png"))
    title = _title_block("Hello")

    archetype = get_archetype("data-insight")
    placed = VisualPlacer().place([title, image], archetype)

    assert placed[0] == title
    placement = placed[1].content.placement
    print(f"  placement: {placement}")
    assert placement.fitting_mode == "cover"
    assert placement.focal_point == "center"
    assert placement.target_aspect_ratio == "4:3"
    assert image.content.placement is None, "Input block is not mutated"

    placed = VisualPlacer().place([image], get_archetype("two-column-comparison"))
    assert placed[0].content.placement.target_aspect_ratio == "1:1"
    print("  ✓ TEST 5 PASSED!")


def main():
    print("=" * 60)
    print("DECKFORGE CANVAS + TEXT FITTING TESTS")
    print("=" * 60)

    tests = [
        test_canvas_resolutions,
        test_grid_split,
        test_title_shrink_to_fit,
        test_font_size_bounds,
        test_visual_placement,
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

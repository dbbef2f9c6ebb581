import math
from collections import defaultdict

import pytest

from panelcut.generators.modern import (
    MODERN_STYLES,
    generate_basketweave,
    generate_brick,
    generate_chevron,
    generate_circles,
    generate_diamond,
    generate_honeycomb,
    generate_rectangular,
    generate_slats,
)
from panelcut.params import StyleParameters
from panelcut.rng import create_stream

VARIATIONS = {
    "slats": ("staggered", "tapered"),
    "rectangular": ("nested", "alternating"),
    "diamond": ("elongated", "double"),
    "honeycomb": ("partial", "centerdot"),
    "chevron": ("nested", "broken"),
    "triangle": ("alternate", "subdivided"),
    "circles": ("concentric", "mixed"),
    "basketweave": ("weave", "rotated"),
    "brick": ("standard", "soldier"),
}


def _run(generator, width=400.0, height=600.0, seed=42, **params):
    stream = create_stream(seed)
    return generator(width, height, stream, StyleParameters(**params)), stream


def _distance(p, q):
    return math.hypot(q[0] - p[0], q[1] - p[1])


def _distance_to_line(point, line):
    dx = line.x2 - line.x1
    dy = line.y2 - line.y1
    return abs(dx * (point[1] - line.y1) - dy * (point[0] - line.x1)) / math.hypot(dx, dy)


def _rectangles(lines):
    """(along_start, along_end, across_start, across_end) for each closed 4-line slot."""
    rects = []
    for idx in range(0, len(lines), 4):
        first, second = lines[idx], lines[idx + 1]
        if first.y1 == first.y2:
            rects.append((first.x1, first.x2, second.y1, second.y2))
        else:
            rects.append((first.y1, first.y2, second.x1, second.x2))
    return rects


def _assert_webs(rects, min_gap):
    bands = defaultdict(list)
    for a1, a2, c1, c2 in rects:
        bands[round(c1, 6)].append((a1, a2, c2))
    ordered = sorted(bands)
    for key in ordered:
        spans = sorted(bands[key])
        for left, right in zip(spans, spans[1:]):
            assert right[0] - left[1] >= min_gap - 1e-9
    for lower, upper in zip(ordered, ordered[1:]):
        assert upper - max(span[2] for span in bands[lower]) >= min_gap - 1e-9


def test_registry_lists_every_style():
    assert set(MODERN_STYLES) == set(VARIATIONS)


@pytest.mark.parametrize("name", sorted(VARIATIONS))
@pytest.mark.parametrize("variation_index", [0, 1])
def test_every_variation_emits_geometry(name, variation_index):
    bundle, _ = _run(MODERN_STYLES[name], variation=VARIATIONS[name][variation_index])

    assert not bundle.is_empty()


@pytest.mark.parametrize("name", sorted(VARIATIONS))
def test_generators_are_deterministic(name):
    first, _ = _run(MODERN_STYLES[name], seed=7, density=0.3)
    second, _ = _run(MODERN_STYLES[name], seed=7, density=0.3)

    assert first == second


def test_honeycomb_regression_seed_42():
    bundle, stream = _run(generate_honeycomb, 400.0, 600.0, 42, density=0.5)

    # First draw 0.5047 selects the centre-dot variation; 14 x 22 cells.
    assert stream.draws == 1
    assert len(bundle.lines) == 308 * 6
    assert len(bundle.arcs) == 308 * 3
    assert bundle.circles == ()

    first = bundle.lines[0]
    assert (first.x1, first.y1, first.x2, first.y2) == pytest.approx(
        (-1.428942, -40.63125, -1.428942, -25.36875), abs=1e-5
    )
    arc = bundle.arcs[0]
    assert (arc.cx, arc.cy, arc.r) == pytest.approx((-19.052559, -33.0, 4.477), abs=1e-5)
    assert arc.start == pytest.approx(math.pi / 20.0)
    assert arc.end == pytest.approx(2.0 * math.pi / 3.0 - math.pi / 20.0)


def test_forced_variation_matching_the_draw_changes_nothing():
    natural, _ = _run(generate_honeycomb)
    forced, _ = _run(generate_honeycomb, variation="centerdot")

    assert natural == forced


def test_forced_variation_still_consumes_the_draw():
    _, natural = _run(generate_slats)
    _, forced = _run(generate_slats, variation="tapered")
    _, bogus = _run(generate_slats, variation="zigzag")

    assert natural.draws == forced.draws == bogus.draws == 2


def test_brick_always_draws_soldier_interval():
    _, standard = _run(generate_brick, variation="standard")
    _, soldier = _run(generate_brick, variation="soldier")

    assert standard.draws == soldier.draws == 2


def test_circles_draw_per_cell_only_for_concentric_rings():
    mixed, mixed_stream = _run(generate_circles, variation="mixed")
    _, concentric_stream = _run(generate_circles, variation="concentric")

    assert mixed_stream.draws == 2
    assert concentric_stream.draws > 2
    assert mixed.arcs == ()
    assert mixed.circles


def test_nested_rectangle_bridge_holds_minimum_at_small_scale():
    # 800 x 800 at density 1 gives a 40 unit cell.
    bundle, _ = _run(
        generate_rectangular, 800.0, 800.0, 1, density=1.0, scale=0.1, min_bridge_gap=2.0, variation="nested"
    )
    top_left, top_right = bundle.lines[0], bundle.lines[1]

    assert top_left.x1 == pytest.approx(18.0)
    assert top_right.x1 - top_left.x2 >= 2.0 - 1e-9
    assert (top_right.x1 - top_left.x2) / 2.0 == pytest.approx(1.0)


def test_nested_rectangle_without_minimum_uses_fixed_fraction():
    bundle, _ = _run(generate_rectangular, 800.0, 800.0, 1, density=1.0, scale=0.1, variation="nested")
    top_left, top_right = bundle.lines[0], bundle.lines[1]

    assert top_right.x1 - top_left.x2 == pytest.approx(2.0 * 0.09 * 4.0)


@pytest.mark.parametrize("scale", [0.1, 0.25, 0.5, 0.85, 1.0])
def test_nested_rectangle_bridges_never_shrink_below_minimum(scale):
    bundle, _ = _run(
        generate_rectangular, 800.0, 800.0, 3, density=1.0, scale=scale, min_bridge_gap=2.0, variation="nested"
    )
    lines = bundle.lines[:8]
    horizontal_gap = lines[1].x1 - lines[0].x2
    vertical_gap = lines[3].y1 - lines[2].y2

    assert horizontal_gap >= 2.0 - 1e-9
    assert vertical_gap >= 2.0 - 1e-9


@pytest.mark.parametrize("scale", [0.1, 0.3, 0.6, 0.84, 1.0])
def test_double_diamond_vertex_bridges_hold_minimum(scale):
    bundle, _ = _run(
        generate_diamond, 800.0, 800.0, 5, density=1.0, scale=scale, min_bridge_gap=1.5, variation="double"
    )
    sides = bundle.lines[:4]
    for idx in range(4):
        end = (sides[idx].x2, sides[idx].y2)
        nxt = sides[(idx + 1) % 4]
        assert _distance(end, (nxt.x1, nxt.y1)) >= 1.5 - 1e-9


@pytest.mark.parametrize("scale", [0.3, 0.6, 0.925])
def test_honeycomb_bridges_hold_minimum(scale):
    bundle, _ = _run(
        generate_honeycomb, 800.0, 800.0, 5, density=1.0, scale=scale, min_bridge_gap=1.0, variation="centerdot"
    )
    sides = bundle.lines[:6]
    for idx in range(6):
        end = (sides[idx].x2, sides[idx].y2)
        nxt = sides[(idx + 1) % 6]
        assert _distance(end, (nxt.x1, nxt.y1)) >= 1.0 - 1e-9

    dots = bundle.arcs[:3]
    for idx in range(3):
        end = dots[idx].endpoints[1]
        start = dots[(idx + 1) % 3].endpoints[0]
        assert _distance(end, start) >= 1.0 - 1e-9


def test_concentric_ring_bridges_hold_minimum():
    bundle, _ = _run(generate_circles, 800.0, 800.0, 11, density=1.0, min_bridge_gap=2.0, variation="concentric")

    assert bundle.arcs
    for arc in bundle.arcs:
        chord = 2.0 * arc.r * math.sin((math.pi / 2.0 - arc.span) / 2.0)
        assert chord >= 2.0 - 1e-9


def test_large_minimum_gap_degrades_to_closed_cutouts():
    bundle, _ = _run(
        generate_rectangular, 800.0, 800.0, 1, density=1.0, scale=0.1, min_bridge_gap=5.0, variation="nested"
    )
    first_four = bundle.lines[:4]

    # A closed square: each side starts where the previous one ended.
    for idx in range(4):
        assert (first_four[idx].x2, first_four[idx].y2) == pytest.approx(
            (first_four[(idx + 1) % 4].x1, first_four[(idx + 1) % 4].y1)
        )


def test_web_wider_than_cell_leaves_nothing_to_cut():
    bundle, _ = _run(generate_rectangular, 800.0, 800.0, 1, density=1.0, min_bridge_gap=50.0)

    assert bundle.is_empty()


def test_slats_orientation_follows_second_draw():
    bundle, _ = _run(generate_slats, 400.0, 600.0, 42, variation="tapered")
    horizontal = all(line.y1 == line.y2 for line in bundle.lines)
    vertical = all(line.x1 == line.x2 for line in bundle.lines)

    assert horizontal != vertical


def test_tapered_slats_widen_across_the_panel():
    bundle, _ = _run(generate_slats, 400.0, 400.0, 42, variation="tapered")
    pairs = [bundle.lines[i:i + 2] for i in range(0, len(bundle.lines), 2)]
    widths = [
        abs((b.y1 - a.y1) if a.y1 == a.y2 else (b.x1 - a.x1))
        for a, b in pairs
    ]

    assert widths == sorted(widths)
    assert widths[-1] > widths[0]


@pytest.mark.parametrize("scale, min_gap", [(1.0, 5.0), (1.0, 2.0), (0.6, 2.0), (0.6, 4.0)])
def test_nested_chevron_arms_leave_minimum_web(scale, min_gap):
    # 800 x 800 at density 1 gives a 60 x 40 chevron cell.
    bundle, _ = _run(
        generate_chevron, 800.0, 800.0, 1, density=1.0, scale=scale, min_bridge_gap=min_gap, variation="nested"
    )
    first = bundle.lines[0]
    left_arms = [
        line
        for line in bundle.lines[:6]
        if line.x2 == pytest.approx(first.x2) and line.y1 == pytest.approx(first.y1) and line.x1 < line.x2
    ]

    assert len(left_arms) >= 2
    for outer, inner in zip(left_arms, left_arms[1:]):
        assert _distance_to_line((inner.x1, inner.y1), outer) >= min_gap - 1e-9


@pytest.mark.parametrize("scale", [0.1, 0.3, 0.6, 1.0])
def test_broken_chevron_gaps_hold_minimum(scale):
    bundle, _ = _run(
        generate_chevron, 800.0, 800.0, 1, density=1.0, scale=scale, min_bridge_gap=3.0, variation="broken"
    )
    lines = bundle.lines[:4]

    for outer, inner in ((lines[0], lines[1]), (lines[2], lines[3])):
        assert _distance((outer.x2, outer.y2), (inner.x1, inner.y1)) >= 3.0 - 1e-9


@pytest.mark.parametrize("scale", [0.2, 0.5, 0.7, 1.0])
def test_rotated_basketweave_vertex_bridges_hold_minimum(scale):
    bundle, _ = _run(
        generate_basketweave, 800.0, 800.0, 2, density=1.0, scale=scale, min_bridge_gap=2.0, variation="rotated"
    )
    sides = bundle.lines[:4]

    for idx in range(4):
        end = (sides[idx].x2, sides[idx].y2)
        nxt = sides[(idx + 1) % 4]
        assert _distance(end, (nxt.x1, nxt.y1)) >= 2.0 - 1e-9


@pytest.mark.parametrize("scale", [0.2, 0.4, 0.8, 1.0])
def test_staggered_slat_webs_hold_minimum(scale):
    bundle, _ = _run(
        generate_slats, 800.0, 800.0, 4, density=1.0, scale=scale, min_bridge_gap=3.0, variation="staggered"
    )

    assert bundle.lines
    _assert_webs(_rectangles(bundle.lines), 3.0)


@pytest.mark.parametrize("variation", ["standard", "soldier"])
@pytest.mark.parametrize("scale", [0.1, 0.3, 0.6, 0.78, 1.0])
def test_brick_mortar_holds_minimum(scale, variation):
    bundle, _ = _run(
        generate_brick, 800.0, 800.0, 6, density=1.0, scale=scale, min_bridge_gap=2.0, variation=variation
    )

    assert bundle.lines
    _assert_webs(_rectangles(bundle.lines), 2.0)

import math
from collections import defaultdict

import pytest

from panelcut.generators.sacred import (
    SACRED_STYLES,
    generate_fibonacci,
    generate_flower_of_life,
    generate_mandala,
    generate_metatron,
    generate_sri_yantra,
    generate_starwars,
    generate_torus,
    tile_layout,
)
from panelcut.params import StyleParameters
from panelcut.rng import create_stream


def _run(generator, width=400.0, height=400.0, seed=42, **params):
    stream = create_stream(seed)
    return generator(width, height, stream, StyleParameters(**params)), stream


def test_registry_lists_every_style():
    assert set(SACRED_STYLES) == {
        "floweroflife",
        "metatron",
        "starwars",
        "sriyantra",
        "mandala",
        "fibonacci",
        "torus",
    }


@pytest.mark.parametrize("name", sorted(SACRED_STYLES))
def test_motifs_are_centred_and_deterministic(name):
    first, _ = _run(SACRED_STYLES[name], seed=3)
    second, _ = _run(SACRED_STYLES[name], seed=3)

    assert first == second
    min_x, min_y, max_x, max_y = first.bounds()
    assert min_x < 200.0 < max_x
    assert min_y < 200.0 < max_y


def test_metatron_has_thirteen_tangent_circles_and_all_connections():
    bundle, stream = _run(generate_metatron)
    r = 400.0 * 0.16 * 0.9

    assert stream.draws == 0
    assert len(bundle.lines) == 78
    assert len(bundle.circles) == 13
    assert all(c.r == pytest.approx(r) for c in bundle.circles)
    centre, neighbour = bundle.circles[0], bundle.circles[1]
    assert math.hypot(neighbour.cx - centre.cx, neighbour.cy - centre.cy) == pytest.approx(r)


def test_starwars_connects_thirteen_points_without_circles():
    bundle, stream = _run(generate_starwars)

    assert stream.draws == 0
    assert len(bundle.lines) == 78
    assert bundle.circles == ()


def test_sri_yantra_is_three_triangles_in_a_circle():
    bundle, _ = _run(generate_sri_yantra)

    assert len(bundle.lines) == 9
    assert len(bundle.circles) == 1
    assert bundle.circles[0].r == pytest.approx(400.0 * 0.35 * 0.9)


def test_flower_of_life_rings_and_arc_completeness():
    bundle, stream = _run(generate_flower_of_life)
    stream_copy = create_stream(42)
    rings = 2 + int(stream_copy.next() * 2)

    assert stream.draws == 1
    spans = defaultdict(float)
    for arc in bundle.arcs:
        spans[(arc.cx, arc.cy, arc.r)] += arc.span
    assert len(spans) + len(bundle.circles) == 1 + 3 * rings * (rings + 1)
    for total in spans.values():
        assert total == pytest.approx(2.0 * math.pi)


def test_mandala_spokes_and_rings_follow_draws():
    bundle, stream = _run(generate_mandala)
    replay = create_stream(42)
    rings = 3 + int(replay.next() * 4)
    order = (6, 8, 10, 12, 16)[int(replay.next() * 5)]

    assert stream.draws == 2 + rings
    spokes = [line for line in bundle.lines if (line.x1, line.y1) == (200.0, 200.0)]
    assert len(spokes) == order
    ring_circles = [c for c in bundle.circles if (c.cx, c.cy) == (200.0, 200.0)]
    assert len(ring_circles) == rings


def test_fibonacci_spiral_arcs_join_end_to_start():
    bundle, stream = _run(generate_fibonacci)
    iterations = 6 + int(create_stream(42).next() * 3)

    assert stream.draws == 1
    assert len(bundle.arcs) == iterations
    assert len(bundle.lines) == 4 + iterations
    assert len(bundle.circles) == 1
    for previous, current in zip(bundle.arcs, bundle.arcs[1:]):
        assert previous.endpoints[1] == pytest.approx(current.endpoints[0])
        assert current.r == pytest.approx(previous.r / ((1.0 + math.sqrt(5.0)) / 2.0))


def test_torus_weaves_alternate_loops():
    bundle, _ = _run(generate_torus)
    loops = 6 + int(create_stream(42).next() * 4)
    even_loops = (loops + 1) // 2

    assert len(bundle.arcs) == even_loops * 3 + (loops - even_loops) * 6
    for arc in bundle.arcs:
        assert arc.span == pytest.approx(math.pi / 3.0 - math.pi / 12.0)


@pytest.mark.parametrize("min_gap", [5.0, 15.0, 40.0])
def test_torus_weave_gaps_hold_minimum_bridge(min_gap):
    # 400 x 600 at density 0.5: major radius 108, loop radius 43.2.
    bundle, _ = _run(generate_torus, 400.0, 600.0, 42, min_bridge_gap=min_gap)

    assert bundle.arcs
    for arc in bundle.arcs:
        chord = 2.0 * arc.r * math.sin((math.pi / 3.0 - arc.span) / 2.0)
        assert chord >= min_gap - 1e-9


def test_torus_loops_too_small_for_the_bridge_are_cut_whole():
    bundle, _ = _run(generate_torus, 400.0, 600.0, 42, min_bridge_gap=100.0)
    loops = 6 + int(create_stream(42).next() * 4)

    assert bundle.arcs == ()
    assert len(bundle.circles) == loops
    assert {round(circle.r, 6) for circle in bundle.circles} == {43.2}


def test_tile_layout_repeats_the_motif_on_a_centred_grid():
    stream = create_stream(1)
    params = StyleParameters(layout_mode="tiled")
    bundle = tile_layout(generate_sri_yantra, 400.0, 600.0, stream, params)

    # Tile side 200: a 2 x 3 grid.
    assert len(bundle.circles) == 6
    assert len(bundle.lines) == 54
    xs = sorted({round(c.cx, 6) for c in bundle.circles})
    ys = sorted({round(c.cy, 6) for c in bundle.circles})
    assert xs == [100.0, 300.0]
    assert ys == [100.0, 300.0, 500.0]


def test_tile_layout_centres_a_partial_grid():
    bundle = tile_layout(generate_sri_yantra, 500.0, 400.0, create_stream(1), StyleParameters(), tile_fraction=0.5)

    # ceil(500 / 200) = 3 columns spanning 600, shifted left by 50.
    xs = sorted({round(c.cx, 6) for c in bundle.circles})
    assert xs == [50.0, 250.0, 450.0]

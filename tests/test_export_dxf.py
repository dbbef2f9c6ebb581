import io
import math

import ezdxf
import pytest

from panelcut.export.dxf import build_dxf_document, dxf_string, unit_factor, write_dxf
from panelcut.geometry import Arc, Circle, Fill, GeometryBundle, Line
from panelcut.shapes import frame_outline


def _pattern():
    return GeometryBundle(
        lines=(Line(1.0, 2.0, 3.0, 4.0),),
        circles=(Circle(5.0, 5.0, 1.0),),
        arcs=(Arc(0.0, 0.0, 2.0, 0.0, math.pi / 2.0), Arc(1.0, 1.0, 0.5, 0.3, 0.3 + 2.0 * math.pi)),
        fills=(Fill.rect(0.0, 0.0, 1.0, 1.0),),
    )


def test_layers_and_entities():
    doc = build_dxf_document(_pattern(), frame_outline(10.0, 20.0, "rectangle"))
    msp = doc.modelspace()

    assert doc.layers.get("FRAME").color == 1
    assert doc.layers.get("PATTERN").color == 3
    assert len(msp.query('LINE[layer=="FRAME"]')) == 4
    assert len(msp.query('LINE[layer=="PATTERN"]')) == 1
    # The full-turn arc is written as a circle.
    assert len(msp.query('CIRCLE[layer=="PATTERN"]')) == 2
    assert len(msp.query("ARC")) == 1
    assert len(msp.query("LWPOLYLINE")) == 1


def test_arc_angles_are_degrees():
    msp = build_dxf_document(_pattern()).modelspace()
    arc = msp.query("ARC")[0]

    assert arc.dxf.radius == pytest.approx(2.0)
    assert arc.dxf.start_angle % 360.0 == pytest.approx(0.0)
    assert arc.dxf.end_angle % 360.0 == pytest.approx(90.0)


def test_millimetres_scale_coordinates_and_header():
    doc = build_dxf_document(_pattern(), unit="mm")
    line = doc.modelspace().query("LINE")[0]

    assert doc.header["$INSUNITS"] == 4
    assert (line.dxf.start.x, line.dxf.start.y) == pytest.approx((25.4, 50.8))
    assert (line.dxf.end.x, line.dxf.end.y) == pytest.approx((76.2, 101.6))


def test_inches_header():
    assert build_dxf_document(_pattern()).header["$INSUNITS"] == 1
    assert unit_factor("inches") == 1.0
    assert unit_factor("mm") == 25.4


def test_unknown_unit_raises():
    with pytest.raises(ValueError):
        build_dxf_document(_pattern(), unit="furlongs")


def test_string_round_trips_through_reader():
    text = dxf_string(_pattern(), frame_outline(10.0, 10.0, "circle"))
    doc = ezdxf.read(io.StringIO(text))

    assert len(doc.modelspace().query('CIRCLE[layer=="FRAME"]')) == 1


def test_write_dxf_creates_parent_directories(tmp_path):
    target = write_dxf(tmp_path / "out" / "panel.dxf", _pattern())

    assert target.exists()
    assert len(ezdxf.readfile(str(target)).modelspace().query("LINE")) == 1

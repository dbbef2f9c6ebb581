"""Example pipeline: synthesise a bridged honeycomb panel and export it."""

from pathlib import Path

from panelcut import frame_outline, synthesize_modern, write_dxf, write_svg

WIDTH, HEIGHT = 400.0, 600.0
OUTPUT = Path("out")


def main() -> None:
    params = {"subStyle": "honeycomb", "density": 0.5, "scale": 0.6, "minBridgeGap": 2.0}
    bundle = synthesize_modern(WIDTH, HEIGHT, 42, params)
    print(f"Honeycomb: {bundle.counts()}")

    write_svg(OUTPUT / "honeycomb.svg", bundle, WIDTH, HEIGHT)
    # Preview units to a 24 x 36 inch panel.
    to_inches = 24.0 / WIDTH
    write_dxf(
        OUTPUT / "honeycomb.dxf",
        bundle.scaled(to_inches),
        frame_outline(WIDTH, HEIGHT).scaled(to_inches),
        unit="mm",
    )


if __name__ == "__main__":
    main()

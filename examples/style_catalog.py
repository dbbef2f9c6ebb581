"""Example pipeline: render every style of both families to SVG."""

from pathlib import Path

from panelcut import FAMILIES, render_svg

WIDTH, HEIGHT = 300.0, 450.0
OUTPUT = Path("out") / "catalog"


def main() -> None:
    OUTPUT.mkdir(parents=True, exist_ok=True)
    for family, synthesizer in FAMILIES.items():
        for style in synthesizer.style_names():
            bundle = synthesizer.synthesize(WIDTH, HEIGHT, 2024, {"subStyle": style})
            path = OUTPUT / f"{family}_{style}.svg"
            path.write_text(render_svg(bundle, WIDTH, HEIGHT), encoding="utf-8")
            print(f"{family}/{style}: {bundle.counts()} -> {path}")


if __name__ == "__main__":
    main()

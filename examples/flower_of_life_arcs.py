"""Example pipeline: decompose a Flower of Life into cuttable arcs."""

from collections import Counter

from panelcut import synthesize_sacred


def main() -> None:
    bundle = synthesize_sacred(400.0, 400.0, 7, {"subStyle": "floweroflife", "density": 0.8})
    per_circle = Counter((round(a.cx, 3), round(a.cy, 3)) for a in bundle.arcs)

    print(f"Arcs: {len(bundle.arcs)} across {len(per_circle)} circles")
    for (cx, cy), count in sorted(per_circle.items())[:5]:
        print(f"  circle at ({cx:.3f}, {cy:.3f}) -> {count} arcs")


if __name__ == "__main__":
    main()

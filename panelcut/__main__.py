import argparse
import logging
import sys
from typing import Optional, Sequence

from panelcut import (
    FAMILIES,
    PANEL_SHAPES,
    ParameterError,
    StyleParameters,
    UNIT_FACTORS,
    clip_to_panel,
    frame_outline,
    get_family,
    write_dxf,
    write_svg,
)

logger = logging.getLogger(__name__)

# Width of the synthesis space; height follows the panel's aspect ratio.
PREVIEW_WIDTH = 400.0


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Synthesise decorative panel cut patterns")
    parser.add_argument("family", choices=sorted(FAMILIES), help="Pattern family")
    parser.add_argument("--sub-style", help="Generator name within the family (default: family default)")
    parser.add_argument("--seed", type=int, default=42, help="Pattern seed (default: 42)")
    parser.add_argument("--density", type=float, help="Density in [0, 1] (default: 0.5)")
    parser.add_argument("--scale", type=float, help="Cutout-to-cell size fraction in (0, 1]")
    parser.add_argument(
        "--min-bridge-gap",
        type=float,
        help="Minimum uncut bridge width, in panel inches",
    )
    parser.add_argument("--layout-mode", choices=["centered", "tiled"], help="Layout of centred motifs")
    parser.add_argument("--variation", help="Force one of the style's two variations")
    parser.add_argument("--panel-width", type=float, default=24.0, help="Panel width in inches (default: 24)")
    parser.add_argument("--panel-height", type=float, default=36.0, help="Panel height in inches (default: 36)")
    parser.add_argument("--unit", choices=sorted(UNIT_FACTORS), default="inches", help="DXF output unit")
    parser.add_argument("--shape", choices=PANEL_SHAPES, default="rectangle", help="Panel outline")
    parser.add_argument("--dxf-output-path", help="Write the pattern and frame as DXF to the given path")
    parser.add_argument("--svg-output-path", help="Write an SVG preview to the given path")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    if args.panel_width <= 0 or args.panel_height <= 0:
        parser.error("panel dimensions must be positive")

    view_w = PREVIEW_WIDTH
    view_h = PREVIEW_WIDTH * args.panel_height / args.panel_width
    # Bridge widths are given in panel inches; synthesis runs in preview units.
    min_bridge_gap = None
    if args.min_bridge_gap is not None:
        min_bridge_gap = args.min_bridge_gap * view_w / args.panel_width

    try:
        params = StyleParameters.from_mapping(
            {
                "subStyle": args.sub_style,
                "density": args.density,
                "scale": args.scale,
                "minBridgeGap": min_bridge_gap,
                "layoutMode": args.layout_mode,
                "variation": args.variation,
            }
        )
    except ParameterError as exc:
        logger.error("Invalid parameters: %s", exc)
        raise SystemExit(2)

    synthesizer = get_family(args.family)
    style = params.sub_style or synthesizer.default_style

    logger.info(
        "Synthesising %s/%s for a %gx%g panel (seed %d)",
        args.family,
        style,
        args.panel_width,
        args.panel_height,
        args.seed,
    )
    bundle = synthesizer.synthesize(view_w, view_h, args.seed, params)
    pattern = clip_to_panel(bundle, view_w, view_h, args.shape)
    frame = frame_outline(view_w, view_h, args.shape)

    counts = pattern.counts()
    print(f"Pattern: {args.family}/{style} seed={args.seed}")
    print(
        f"  {counts['lines']} lines, {counts['circles']} circles, "
        f"{counts['arcs']} arcs, {counts['fills']} fills"
    )

    if args.svg_output_path:
        svg_path = write_svg(args.svg_output_path, pattern, view_w, view_h, args.shape)
        print(f"SVG preview written to {svg_path}")

    if args.dxf_output_path:
        to_panel = args.panel_width / view_w
        dxf_path = write_dxf(
            args.dxf_output_path,
            pattern.scaled(to_panel),
            frame.scaled(to_panel),
            unit=args.unit,
        )
        print(f"DXF document written to {dxf_path}")


if __name__ == "__main__":
    main(sys.argv[1:])

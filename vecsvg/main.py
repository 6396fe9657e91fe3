#!/usr/bin/env python3
"""
VecSVG - Main Entry Point

Converts a JSON scene file to SVG.
Run with: python -m vecsvg.main scene.json -o scene.svg
"""

import argparse
import logging
import sys

from . import __version__
from .core.settings import ExportSettings
from .io.project_io import SceneFormatError, load_scene
from .io.svg_exporter import SVGExporter, export_svg

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vecsvg",
        description="Export a VecSVG scene file as an SVG document."
    )
    parser.add_argument("scene", help="scene file (JSON)")
    parser.add_argument("-o", "--output",
                        help="SVG file to write (default: standard output)")
    parser.add_argument("--no-indent", action="store_true",
                        help="write the SVG without pretty printing")
    parser.add_argument("--generator", default=ExportSettings.generator,
                        help="tool name written in the leading comment")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log skipped elements and other details")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv=None) -> int:
    """Main entry point for the vecsvg command."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s"
    )

    settings = ExportSettings(
        generator=args.generator,
        indent="" if args.no_indent else ExportSettings.indent
    )

    try:
        root = load_scene(args.scene)
        if args.output:
            export_svg(root, args.output, settings)
        else:
            sys.stdout.write(SVGExporter(settings).export_as_string(root))
    except (OSError, SceneFormatError) as e:
        logger.error(f"Export failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

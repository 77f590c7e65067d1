"""
Command line interface: decode an STL file and print it as block-shaded ASCII art
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from .config import Settings
from .errors import ASCIIDecodeError, STLError
from .loader import FORMATS, load_file
from .logging_config import setup_logging
from .projection import ProjectFrom, project
from .render import render_image, render_text

logger = logging.getLogger(__name__)


def build_parser(settings):
    parser = argparse.ArgumentParser(
        prog='stl2ascii',
        description='Render STL models as ASCII art in the terminal',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  stl2ascii model.stl
  stl2ascii model.stl -v top -s 100
  stl2ascii model.stl --summary --png preview.png
        """
    )

    parser.add_argument('input', help='Input STL file (binary or ASCII)')
    parser.add_argument('-s', '--size', type=int, default=settings.grid_size,
                       help=f'Grid resolution (default: {settings.grid_size})')
    parser.add_argument('-v', '--view', default=settings.view.name.lower(),
                       choices=[d.name.lower() for d in ProjectFrom],
                       help=f'Viewing direction (default: {settings.view.name.lower()})')
    parser.add_argument('-f', '--format', default='auto', choices=FORMATS,
                       help='STL encoding of the input (default: auto)')
    parser.add_argument('--summary', action='store_true',
                       help='Print header, triangle count and dimensions before the drawing')
    parser.add_argument('--png', help='Also save the projection as a PNG image')
    parser.add_argument('--allow-partial', action='store_true',
                       help='Render the triangles read before an ASCII parse error instead of failing')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--log-file', help='Also write logs to this file')
    return parser


def main(argv=None):
    """Command-line interface"""
    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"[!] Error: invalid environment setting: {e}", file=sys.stderr)
        return 1

    parser = build_parser(settings)
    args = parser.parse_args(argv)
    if args.size < 1:
        parser.error("--size must be at least 1")

    setup_logging(logging.DEBUG if args.debug else settings.log_level, args.log_file)

    # Check if input file exists
    if not Path(args.input).exists():
        print(f"[!] Error: File not found: {args.input}", file=sys.stderr)
        return 1

    try:
        mesh = load_file(args.input, args.format)
    except ASCIIDecodeError as e:
        if not (args.allow_partial and e.partial_mesh is not None):
            logger.debug("ASCII decode failed", exc_info=True)
            print(f"[!] Error: {e}", file=sys.stderr)
            return 1
        logger.warning("Using %d triangles read before error: %s", e.partial_mesh.triangle_count, e)
        mesh = e.partial_mesh
    except (STLError, OSError) as e:
        logger.debug("Decode failed", exc_info=True)
        print(f"[!] Error: {e}", file=sys.stderr)
        return 1

    if args.summary:
        sys.stdout.write(mesh.summary())

    grid = project(mesh, args.size, ProjectFrom.parse(args.view))
    sys.stdout.write(render_text(grid))

    if args.png:
        try:
            render_image(grid).save(args.png)
        except OSError as e:
            logger.debug("Saving image failed", exc_info=True)
            print(f"[!] Error: could not write {args.png}: {e}", file=sys.stderr)
            return 1
        logger.info("Wrote preview image: %s", os.path.abspath(args.png))
    return 0


if __name__ == '__main__':
    sys.exit(main())

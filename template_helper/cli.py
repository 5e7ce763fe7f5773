"""
Command-line interface for template_helper.

Usage:
    template-helper render data.json hero --mode advanced --media media.json
    template-helper render data.json card.title --mode html
    template-helper css
    template-helper version
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import HelperConfig
from .exceptions import TemplateHelperError
from .helper import TemplateHelper
from .media.library import MediaLibrary
from .utils.logger import LOG_LEVELS, configure_logging

logger = logging.getLogger(__name__)

RENDER_MODES = {
    "img": lambda helper, path, args: helper.img(path, args.size),
    "responsive": lambda helper, path, args: helper.responsive_img(path),
    "advanced": lambda helper, path, args: helper.advanced_img(path),
    "html": lambda helper, path, args: helper.html(path),
    "safe-html": lambda helper, path, args: helper.safe_html(path),
    "attr": lambda helper, path, args: helper.attr(path),
    "url": lambda helper, path, args: helper.url(path),
    "js": lambda helper, path, args: helper.js(path),
    "xml": lambda helper, path, args: helper.xml(path),
    "raw": lambda helper, path, args: helper.raw(path),
}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="template-helper",
        description="Render template fragments from a JSON data bag",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  template-helper render page.json hero --mode advanced --media media.json
  template-helper render page.json card.title --mode html
  template-helper css > advanced-img.css
  template-helper version
        """,
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Log level (default: WARNING)"
    )
    parser.add_argument(
        "--plain-log",
        action="store_true",
        help="Plain log output instead of rich formatting"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    render_parser = subparsers.add_parser("render", help="Render one value of a data bag")
    render_parser.add_argument("data", help="JSON file with the data bag (an object)")
    render_parser.add_argument("path", help="Dotted path of the value to render")
    render_parser.add_argument(
        "-m", "--mode",
        choices=sorted(RENDER_MODES),
        default="html",
        help="What to render (default: html)"
    )
    render_parser.add_argument(
        "--media",
        help="JSON file with attachments for id-based images"
    )
    render_parser.add_argument(
        "--size",
        default=None,
        help="Image size name for --mode img"
    )
    render_parser.add_argument(
        "--separator",
        default=".",
        help="Path separator (default: .)"
    )
    render_parser.add_argument(
        "-o", "--output",
        help="Output file path (default: stdout)"
    )

    css_parser = subparsers.add_parser("css", help="Print the advanced image stylesheet")
    css_parser.add_argument(
        "--prefix",
        default="lx-img",
        help="Container class prefix (default: lx-img)"
    )

    subparsers.add_parser("version", help="Show version information")

    return parser


def _load_json(path: Path):
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def cmd_render(args) -> int:
    """Handle render command."""
    data_path = Path(args.data)
    if not data_path.exists():
        print(f"Error: File not found: {data_path}", file=sys.stderr)
        return 1

    data = _load_json(data_path)
    if not isinstance(data, dict):
        print(f"Error: {data_path} must contain a JSON object", file=sys.stderr)
        return 1

    library = None
    if args.media:
        media_path = Path(args.media)
        if not media_path.exists():
            print(f"Error: File not found: {media_path}", file=sys.stderr)
            return 1
        library = MediaLibrary.from_dict(_load_json(media_path))
        logger.info(f"Loaded {len(library.attachments)} attachments from {media_path}")

    config = HelperConfig(separator=args.separator)
    helper = TemplateHelper(data, config=config, image_host=library)
    fragment = RENDER_MODES[args.mode](helper, args.path, args)

    if not fragment:
        logger.warning(f"Nothing rendered for '{args.path}' (mode={args.mode})")

    if args.output:
        Path(args.output).write_text(fragment, encoding="utf-8")
        logger.info(f"Saved: {args.output}")
    else:
        sys.stdout.write(fragment + "\n")

    return 0


def cmd_css(args) -> int:
    """Handle css command."""
    helper = TemplateHelper(config=HelperConfig(image_class_prefix=args.prefix))
    sys.stdout.write(helper.advanced_img_css())
    return 0


def cmd_version(args=None) -> int:
    """Handle version command."""
    from .version import __version__
    print(f"template-helper v{__version__}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level, rich=not args.plain_log)

    commands = {
        "render": cmd_render,
        "css": cmd_css,
        "version": cmd_version,
    }

    if args.command not in commands:
        parser.print_help()
        return 0

    try:
        return commands[args.command](args)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON: {e}", file=sys.stderr)
        return 1
    except TemplateHelperError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)

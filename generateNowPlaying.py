import argparse
import logging

from dotenv import load_dotenv

from nowplaying.feeds import FeedSettings, TIMEOUT
from nowplaying.generator import main
from nowplaying.style import StyleConfig, ValueFlow


def build_parser():
    parser = argparse.ArgumentParser(description="Render the latest read/watched/listened items as an SVG block")
    parser.add_argument("output_svg", nargs="?", default="now-playing.svg", help="Path to the output SVG file")
    parser.add_argument("--width", type=int, default=StyleConfig.block_width_px, help="Block width in pixels")
    parser.add_argument("--label-width", type=int, default=StyleConfig.label_column_width_px, help="Width reserved for the label column in pixels")
    parser.add_argument("--max-lines", type=int, default=StyleConfig.max_lines_per_value, help="Maximum lines per value before ellipsizing")
    parser.add_argument("--slack", type=int, default=StyleConfig.separator_slack_chars, help="Extra characters (0-10) a value may exceed its line budget by before it wraps")
    parser.add_argument("--natural-flow", action="store_true", help="Start values right after their label instead of at a fixed column")
    parser.add_argument("--show-missing-author", action="store_true", help="Render a missing author/artist as an em-dash instead of omitting it")
    parser.add_argument("--timeout", type=float, default=TIMEOUT, help="Per-request timeout in seconds")
    parser.add_argument("--debug", action="store_true", help="Log normalized records and other details")
    return parser


def parse_args(argv=None):
    """Return (args, style); an invalid style exits through the parser with status 2."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        style = StyleConfig(
            block_width_px=args.width,
            label_column_width_px=args.label_width,
            max_lines_per_value=args.max_lines,
            separator_slack_chars=args.slack,
            value_flow=ValueFlow.NATURAL if args.natural_flow else ValueFlow.COLUMN,
            show_missing_secondary=args.show_missing_author,
        )
    except ValueError as exc:
        parser.error(str(exc))
    return args, style


if __name__ == "__main__":
    args, style = parse_args()

    # Credentials and feed URLs may come from a .env file next to the script
    load_dotenv()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO, format="%(message)s")

    main(args.output_svg, style=style, settings=FeedSettings.from_env(timeout=args.timeout))

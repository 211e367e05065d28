"""
Command-line interface.

    python -m diffusionmap                      # open the map window
    python -m diffusionmap --dump 1850          # print the snapshot as JSON
    python -m diffusionmap --dump 1850 --layer syndromes
"""
import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from diffusionmap.config import DEFAULT_YEAR
from diffusionmap.logging_config import parse_level, setup_logging
from diffusionmap.model.errors import DiffusionMapError
from diffusionmap.model.layers import Layer, DEFAULT_LAYER
from diffusionmap.model.snapshot import default_builder

logger = logging.getLogger("diffusionmap.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="diffusionmap", description="Jiangsu warm-disease diffusion map")
    parser.add_argument("--year", type=int, default=DEFAULT_YEAR, help="Year shown when the window opens")
    parser.add_argument(
        "--layer",
        choices=[layer.value for layer in Layer],
        default=DEFAULT_LAYER.value,
        help="Active data layer",
    )
    parser.add_argument("--dump", type=int, metavar="YEAR", help="Print the snapshot for YEAR as JSON and exit")
    parser.add_argument("--log-level", default="info", help="debug, info, warning, error")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    return parser


def dump_snapshot(year: int, layer: Layer) -> str:
    snapshot = default_builder().build(year, layer)
    return json.dumps(snapshot.to_dict(), ensure_ascii=False, indent=2)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        level = parse_level(args.log_level)
    except ValueError as e:
        parser.error(str(e))

    layer = Layer(args.layer)

    if args.dump is not None:
        # stdout is reserved for the JSON document
        setup_logging(level=level, log_file=args.log_file, stream=sys.stderr)
        try:
            print(dump_snapshot(args.dump, layer))
        except DiffusionMapError as e:
            logger.error(str(e))
            return 2
        return 0

    # Imported late so --dump works without a display
    from diffusionmap.main import main as run_gui
    return run_gui(year=args.year, layer=layer, log_level=level, log_file=args.log_file)


if __name__ == "__main__":
    sys.exit(main())

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from fsmlayout import DiagramGenerator, FSMLayoutError, StateMachine, render_to_png

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Lay out state machine diagrams")
    parser.add_argument(
        "path",
        nargs="?",
        help="Path to a machine description (omit with --random)",
    )
    parser.add_argument(
        "--random",
        type=int,
        metavar="N",
        help="Lay out a random machine with N states instead of reading a file",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed used with --random",
    )
    parser.add_argument("-o", "--output", help="Write a PNG preview to this path")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print the layout trace",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    if (args.path is None) == (args.random is None):
        parser.error("give either a description file or --random N")

    generator = DiagramGenerator()
    try:
        if args.random is not None:
            machine = StateMachine.random(args.random, seed=args.seed)
            result = generator.generate(machine, debug=args.debug)
        else:
            text = Path(args.path).read_text(encoding="utf-8")
            result = generator.generate(text, debug=args.debug)
            machine = generator.machine
    except (OSError, FSMLayoutError) as exc:
        logger.error("%s", exc)
        return 1

    for state, position in result.positions.items():
        print(f"{state}: {position}")
    print(f"crossings: {result.crossings}")

    if args.debug:
        print(generator.get_trace().dump())
    if args.output:
        render_to_png(machine, result, args.output)
        print(f"wrote {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

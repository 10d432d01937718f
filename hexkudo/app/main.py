"""
Command-line entry point for the Hexkudo engine.

Sub-commands:
- generate: build a puzzle and write it as JSON (optionally render it)
- solve: solve a saved puzzle's clues and report solver statistics
- render: draw a saved puzzle to an image file
- shapes: list the available grid shapes and their cell counts
"""
import argparse
import json
import logging
import sys
from typing import List, Optional

from hexkudo.app.engine import get_grid, new_puzzle
from hexkudo.config import load_config
from hexkudo.core.difficulty import difficulty_score
from hexkudo.core.errors import HexkudoError
from hexkudo.core.hex_grid import SHAPE_BUILDERS
from hexkudo.core.puzzle import Puzzle
from hexkudo.core.solver import solve
from hexkudo.core.types import Difficulty

logger = logging.getLogger(__name__)

DIFFICULTY_CHOICES = [d.name.lower() for d in Difficulty]


def _configure_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def cmd_generate(args) -> int:
    config = load_config(args.config)
    puzzle = new_puzzle(args.shape, args.size, args.difficulty, seed=args.seed, config=config)
    if args.out:
        puzzle.save(args.out)
    else:
        print(puzzle.to_json())
    if args.image:
        from hexkudo.render.puzzle_render import render_puzzle
        render_puzzle(puzzle, args.image, title=f"{puzzle.difficulty.label} #{puzzle.seed}")
    print(f"{puzzle!r} seed={puzzle.seed}", file=sys.stderr)
    return 0


def cmd_solve(args) -> int:
    config = load_config(args.config)
    puzzle = Puzzle.load(args.puzzle)
    result = solve(puzzle.grid, puzzle.clues, puzzle.links, config=config.solver)
    report = {
        "status": result.status.value,
        "stats": result.stats.as_dict(),
        "score": difficulty_score(result.stats, puzzle.clue_count, puzzle.size, config.difficulty),
    }
    if result.solution is not None:
        report["matches_stored_solution"] = result.solution == puzzle.solution
    print(json.dumps(report, indent=2))
    return 0 if result.is_unique else 1


def cmd_render(args) -> int:
    from hexkudo.render.puzzle_render import render_puzzle
    puzzle = Puzzle.load(args.puzzle)
    render_puzzle(puzzle, args.out, show_solution=args.solution, radius=args.radius)
    return 0


def cmd_shapes(args) -> int:
    for name in sorted(SHAPE_BUILDERS):
        try:
            grid = get_grid(name, args.size)
        except HexkudoError as exc:
            print(f"{name:<14} size {args.size}: {exc}")
            continue
        stats = grid.get_statistics()
        print(f"{name:<14} size {args.size}: {stats['cells']} cells, {stats['symmetries']} symmetries")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hexkudo",
        description="Hexkudo hexagonal path puzzle engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate --shape hexagon --size 3 --difficulty medium --seed 42 --out p.json
  %(prog)s solve p.json
  %(prog)s render p.json --out p.png --solution
  %(prog)s shapes --size 4
        """,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    parser.add_argument("--debug", action="store_true", help="Debug logging")
    parser.add_argument("--config", help="JSON config file (default: $HEXKUDO_CONFIG)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    gen = subparsers.add_parser("generate", help="Build a new puzzle")
    gen.add_argument("--shape", default="hexagon", choices=sorted(SHAPE_BUILDERS))
    gen.add_argument("--size", type=int, default=3, help="Grid size (default: 3)")
    gen.add_argument("--difficulty", default="easy", choices=DIFFICULTY_CHOICES)
    gen.add_argument("--seed", type=int, help="Seed for a reproducible puzzle")
    gen.add_argument("--out", help="Write JSON here instead of stdout")
    gen.add_argument("--image", help="Also render the puzzle to this image file")
    gen.set_defaults(func=cmd_generate)

    sol = subparsers.add_parser("solve", help="Solve a saved puzzle")
    sol.add_argument("puzzle", help="Puzzle JSON file")
    sol.set_defaults(func=cmd_solve)

    ren = subparsers.add_parser("render", help="Render a saved puzzle")
    ren.add_argument("puzzle", help="Puzzle JSON file")
    ren.add_argument("--out", required=True, help="Image file (png, pdf, svg)")
    ren.add_argument("--solution", action="store_true", help="Show the hidden numbers")
    ren.add_argument("--radius", type=float, default=40.0, help="Hexagon radius")
    ren.set_defaults(func=cmd_render)

    shp = subparsers.add_parser("shapes", help="List grid shapes")
    shp.add_argument("--size", type=int, default=3)
    shp.set_defaults(func=cmd_shapes)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose, args.debug)

    if not getattr(args, "func", None):
        parser.print_help()
        return 2

    try:
        return args.func(args)
    except (HexkudoError, ValueError, OSError) as exc:
        logger.error(f"{args.command} failed: {exc}")
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

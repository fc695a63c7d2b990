"""Command-line interface for the Dancing Links Sudoku engine."""

import argparse
import json
import logging
import math
import sys

from tqdm import tqdm

from .core.errors import InvalidPuzzleError
from .core.grid import GridLayout, PuzzleGrid
from .pentomino import PentominoSolver
from .solvers import LogicSolver, Solver, SudokuDLXSolver, Validity

PENTOMINO_SIZES = ["3x20", "4x15", "5x12", "6x10"]


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Dancing Links Sudoku: step-by-step hints, validity checks and exact cover",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check that a puzzle has exactly one solution
  python -m dlxsudoku.cli check --puzzle "53..7...."

  # Get the next hint, with the full explanation
  python -m dlxsudoku.cli hint --big --puzzle "53..7...."

  # Solve with the logic solver and Dancing Links
  python -m dlxsudoku.cli solve --algorithm all --puzzle "53..7...."

  # Count the 6x10 pentomino tilings
  python -m dlxsudoku.cli pentomino --size 6x10
        """
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log solver progress"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Puzzle options shared by the sudoku commands
    puzzle_args = argparse.ArgumentParser(add_help=False)
    puzzle_args.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (row-major, '.' or 0 for empty cells)"
    )
    puzzle_args.add_argument(
        "--diagonals", action="store_true",
        help="Both main diagonals are houses (X-sudoku)"
    )
    puzzle_args.add_argument(
        "--block", type=str, default=None,
        help="Block shape as HxW, e.g. 2x3 for 6x6 puzzles"
    )

    # Check command
    check_parser = subparsers.add_parser(
        "check", parents=[puzzle_args], help="Count the solutions of a puzzle"
    )
    check_parser.add_argument(
        "--givens-only", action="store_true",
        help="Ignore solved cells and check the puzzle as given"
    )

    # Hint command
    hint_parser = subparsers.add_parser(
        "hint", parents=[puzzle_args], help="Show the next deduction"
    )
    hint_parser.add_argument(
        "--big", action="store_true",
        help="Show the full explanation instead of the technique name"
    )
    hint_parser.add_argument(
        "--technique", "-t", type=str, default=None,
        help="Only try this technique (e.g. 'X-Wing')"
    )

    # Solve command
    solve_parser = subparsers.add_parser(
        "solve", parents=[puzzle_args], help="Solve a puzzle"
    )
    solve_parser.add_argument(
        "--algorithm", "-a",
        choices=["logic", "dlx", "all"],
        default="logic",
        help="Solving algorithm to use (default: logic)"
    )
    solve_parser.add_argument(
        "--stats", "-s", action="store_true",
        help="Show detailed solving statistics"
    )

    # Grade command
    grade_parser = subparsers.add_parser(
        "grade", help="Run the logic solver on a file of puzzles"
    )
    grade_parser.add_argument(
        "--input", "-i", type=str, required=True,
        help="File with one puzzle per line"
    )
    grade_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for results (JSON format)"
    )

    # Pentomino command
    pento_parser = subparsers.add_parser(
        "pentomino", help="Count pentomino tilings of a rectangle"
    )
    pento_parser.add_argument(
        "--size", choices=PENTOMINO_SIZES, default="6x10",
        help="Board size as HxW (default: 6x10)"
    )
    pento_parser.add_argument(
        "--all", action="store_true",
        help="Count mirror images as different tilings"
    )
    pento_parser.add_argument(
        "--show", type=int, default=0,
        help="Print the first N tilings"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "check":
        cmd_check(args)
    elif args.command == "hint":
        cmd_hint(args)
    elif args.command == "solve":
        cmd_solve(args)
    elif args.command == "grade":
        cmd_grade(args)
    elif args.command == "pentomino":
        cmd_pentomino(args)


def parse_layout(args, text):
    """Build the grid layout from the puzzle options, or None for a plain grid."""
    size = math.isqrt(len("".join(text.split())))
    if args.block is None and not args.diagonals:
        return None
    block_height = block_width = 0
    if args.block is not None:
        try:
            block_height, block_width = (int(part) for part in args.block.lower().split("x"))
        except ValueError:
            raise InvalidPuzzleError(f"Block shape must look like 2x3, got {args.block!r}")
    return GridLayout(size=size, block_height=block_height, block_width=block_width,
                      diagonals=args.diagonals)


def load_puzzle(args):
    """Parse the puzzle argument, exiting on bad input."""
    try:
        return PuzzleGrid.from_string(args.puzzle, parse_layout(args, args.puzzle))
    except InvalidPuzzleError as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)


def cmd_check(args):
    """Handle the check command."""
    grid = load_puzzle(args)
    result = SudokuDLXSolver().check(grid, givens_only=args.givens_only)

    if result.validity == Validity.NO_SOLUTION:
        print("0 solutions: the puzzle cannot be solved")
    elif result.validity == Validity.MULTIPLE:
        print("many solutions: the puzzle has more than one solution")
    else:
        print("1 solution: the puzzle is valid")
        if not result.consistent:
            print("Warning: some entries do not match the solution")


def cmd_hint(args):
    """Handle the hint command."""
    grid = load_puzzle(args)
    solver = Solver()
    if args.technique:
        try:
            solver = Solver([solver.technique(args.technique)])
        except ValueError as e:
            print(str(e))
            sys.exit(1)

    step = solver.get_next_step(grid)
    if step is None:
        if args.technique:
            print(solver.techniques[0].not_applicable_message)
        else:
            print("No technique applies. Try checking the puzzle.")
        return

    print(step.big_hint if args.big else step.small_hint)
    if args.big:
        print(f"Changes: {', '.join(cell.label for cell in step.changed_cells)}")
        if step.explaining_cells:
            print(f"Because of: {', '.join(cell.label for cell in step.explaining_cells)}")


def cmd_solve(args):
    """Handle the solve command."""
    grid = load_puzzle(args)

    print("Input puzzle:")
    print(grid.render())
    print()

    # Get solvers
    solver_map = {
        "logic": ("Logic", LogicSolver()),
        "dlx": ("DLX", SudokuDLXSolver()),
    }
    if args.algorithm == "all":
        solvers = dict(solver_map.values())
    else:
        name, solver = solver_map[args.algorithm]
        solvers = {name: solver}

    # Solve with each algorithm
    for name, solver in solvers.items():
        print(f"Solving with {name}...")
        solution, stats = solver.solve(grid)

        if stats.solved:
            print(f"✓ Solved in {stats.time_seconds:.4f}s")
        else:
            print(f"✗ Failed to solve")
        if args.stats:
            print(f"  Time: {stats.time_seconds:.4f}s")
            print(f"  Iterations: {stats.iterations:,}")
            print(f"  Nodes: {stats.nodes_explored:,}")
            print(f"  Memory: {stats.memory_bytes / 1024:.2f} KB")
            for technique, count in stats.extra.get("techniques", {}).items():
                print(f"  {technique}: {count}")
        if solution is not None:
            print(solution.render())
        print()


def cmd_grade(args):
    """Handle the grade command."""
    with open(args.input) as f:
        puzzles = [line.strip() for line in f if line.strip() and not line.startswith("#")]

    solver = LogicSolver()
    results = []
    for text in tqdm(puzzles, desc="Grading"):
        try:
            grid = PuzzleGrid.from_string(text)
        except InvalidPuzzleError as e:
            results.append({"puzzle": text, "error": str(e)})
            continue
        _, stats = solver.solve(grid)
        results.append({
            "puzzle": text,
            "solved": stats.solved,
            "steps": stats.iterations,
            "hardest": solver.hardest_technique(),
            "techniques": stats.extra.get("techniques", {}),
        })

    solved = sum(1 for r in results if r.get("solved"))
    print(f"Solved {solved}/{len(results)} puzzles with logic alone")
    hardest = {}
    for r in results:
        if r.get("hardest"):
            hardest[r["hardest"]] = hardest.get(r["hardest"], 0) + 1
    for technique in Solver().techniques:
        if technique.name in hardest:
            print(f"  {technique.name}: {hardest[technique.name]}")

    if args.output:
        with open(args.output, "w") as f:
            json.dump(results, f, indent=2)
        print(f"\nResults saved to {args.output}")


def cmd_pentomino(args):
    """Handle the pentomino command."""
    height, width = (int(part) for part in args.size.split("x"))
    solver = PentominoSolver(width=width, height=height)

    print(f"Searching {height}x{width} tilings...")
    solutions = solver.solve(unique=not args.all)
    kind = "tilings" if args.all else "distinct tilings"
    print(f"There are {len(solutions)} {kind}.")

    for grid in solutions[:args.show]:
        print()
        print(solver.format_solution(grid))


if __name__ == "__main__":
    main()

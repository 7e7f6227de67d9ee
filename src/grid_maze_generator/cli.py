import argparse
import logging
import sys

from .config import Algorithm, GenerationConfig
from .evaluator import Evaluator
from .grid import InvalidDimension
from .maze import Maze
from .persistence import MazeFormatError

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Generate a perfect grid maze (randomized Prim's or Kruskal's)")
    p.add_argument("--algo", choices=["prim", "kruskal", "custom"], default="prim", help="Carving algorithm")
    p.add_argument("--width", type=int, default=16, help="Maze width in cells")
    p.add_argument("--height", type=int, default=16, help="Maze height in cells")
    p.add_argument("--seed", type=int, default=0, help="Random seed; 0 draws a fresh seed every run")
    p.add_argument("--goal-center", action="store_true", help="Place the goal in the center instead of the far corner")
    p.add_argument("--load", type=str, default=None, help="Load a saved maze (JSON) instead of generating")
    p.add_argument("--save", type=str, default=None, help="Save the maze as JSON to this path")
    p.add_argument("--out", type=str, default=None, help="Output filename for a PNG drawing of the maze")
    p.add_argument("--ascii", action="store_true", help="Print the maze as text")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    try:
        if args.load:
            maze = Maze.load(args.load, goal_in_center=args.goal_center)
            print(f"Loaded maze from {args.load}")
        else:
            config = GenerationConfig(
                width=args.width,
                height=args.height,
                seed=args.seed,
                algorithm=Algorithm.parse(args.algo),
                goal_in_center=args.goal_center,
            )
            maze = Maze(config)
    except (InvalidDimension, MazeFormatError, FileNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    cfg = maze.config
    print(f"Maze size: {maze.width}x{maze.height}. Start={maze.start} Goal={maze.goal}")
    print(f"Algorithm: {cfg.algorithm.name.lower()} seed={cfg.seed} goal_in_center={cfg.goal_in_center}")

    summary = Evaluator(maze.grid, maze.start, maze.goal).summary()
    print(f"Open walls: {summary['open_edges']} / cells: {summary['cells']} perfect={summary['perfect']}")
    print(f"Path length start->goal: {summary['path_length']}")
    if not cfg.algorithm.is_perfect:
        print("Note: custom algorithm opens every wall; this is not a perfect maze.")

    if args.ascii:
        print()
        print(maze.to_ascii())

    if args.save:
        maze.save(args.save)
        print(f"Saved maze to {args.save}")

    if args.out:
        maze.render(savepath=args.out)

    print("Done.")
    return 0

if __name__ == "__main__":
    sys.exit(main())

import argparse
import sys
import os
import logging

# Ensure project root is in path so we can import 'maze_lab' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_lab.config import CARVERS, SOLVERS, ConfigError, MazeConfig


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def add_maze_options(p: argparse.ArgumentParser):
    defaults = MazeConfig()
    p.add_argument("--width", type=int, default=defaults.width, help="Maze width (rounded up to odd)")
    p.add_argument("--height", type=int, default=defaults.height, help="Maze height (rounded up to odd)")
    p.add_argument("--seed", type=int, default=defaults.seed, help="Random seed (32-bit)")
    p.add_argument("--algo", type=str, default=defaults.carver, choices=CARVERS, help="Generation algorithm")
    p.add_argument("--solver", type=str, default=defaults.solver, choices=SOLVERS, help="Solver algorithm")


def build_config(args) -> MazeConfig:
    cfg = MazeConfig(
        carver=args.algo,
        solver=args.solver,
        width=args.width,
        height=args.height,
        seed=args.seed,
    )
    for name in ("gen_rate", "solve_rate", "frame_rate_cap", "cell_size", "show_grid_lines"):
        if getattr(args, name, None) is not None:
            setattr(cfg, name, getattr(args, name))
    return cfg.normalized()


def run_generate(args, cfg: MazeConfig, logger):
    from maze_lab.core.events import describe_event
    from maze_lab.engine.session import MODE_GENERATE, MODE_SOLVE, MazeSession

    session = MazeSession(cfg)
    logger.info(f"Generating {cfg.width}x{cfg.height} maze with {cfg.carver.upper()} (seed={cfg.seed})...")
    session.start(MODE_GENERATE)
    session.gen.run_to_completion()
    logger.info(f"Carve events: {len(session.event_log)}")

    if args.trace:
        for ev in session.event_log:
            print(describe_event(ev))

    if args.solve:
        session.start(MODE_SOLVE)
        session.solve.run_to_completion()

    overlay = set(session.path)
    for y, row in enumerate(session.grid.to_bitmap()):
        print(''.join('*' if (x, y) in overlay else ch for x, ch in enumerate(row)))

    if args.solve:
        result = session.solve_result
        if result.found:
            print(f"Done. {cfg.solver.upper()} path cost: {result.cost} (visited {len(session.visited)})")
        else:
            print(f"Done. {cfg.solver.upper()} found no path (visited {len(session.visited)})")


def run_play(args, cfg: MazeConfig, logger):
    from maze_lab.engine.session import MODE_GENERATE, MazeSession
    from maze_lab.viz.app import MazeApp

    session = MazeSession(cfg)
    # Boot like the web app: resolve the run first, then animate the recording
    session.start(MODE_GENERATE, prerecord=True)

    logger.info("Visual mode enabled - Opening window...")
    app = MazeApp(session)
    app.init_window()
    app.run_loop()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Maze Lab: animated maze generation and pathfinding")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Carve a maze headlessly and print it")
    add_maze_options(gen_parser)
    gen_parser.add_argument("--solve", action="store_true", help="Solve the maze and overlay the path")
    gen_parser.add_argument("--trace", action="store_true", help="Print every carve event")

    # Play Command
    play_parser = subparsers.add_parser("play", help="Open the interactive window")
    add_maze_options(play_parser)
    play_parser.add_argument("--gen-rate", dest="gen_rate", type=int, help="Generation events per second")
    play_parser.add_argument("--solve-rate", dest="solve_rate", type=int, help="Solver events per second")
    play_parser.add_argument("--fps", dest="frame_rate_cap", type=int, help="Frame rate cap (15-120)")
    play_parser.add_argument("--cell", dest="cell_size", type=int, help="Cell size in pixels")
    play_parser.add_argument("--grid-lines", dest="show_grid_lines", action="store_true", default=None,
                             help="Draw grid lines")

    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("maze_lab")

    if args.command is None:
        parser.print_help()
        return

    try:
        cfg = build_config(args)
    except ConfigError as e:
        parser.error(str(e))

    logger.info(f"Running command: {args.command}")

    if args.command == "generate":
        run_generate(args, cfg, logger)
    elif args.command == "play":
        run_play(args, cfg, logger)


if __name__ == "__main__":
    main()

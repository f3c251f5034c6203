import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_lab.core.grid import Grid
from maze_lab.core.events import Path, SolveDone, Visit
from maze_lab.algo.dfs import RecursiveBacktracker
from maze_lab.algo.prim import PrimsAlgorithm
from maze_lab.algo.solvers import BFS, DFS, AStar, SOLVERS

LOOPY = [
    "#######",
    "#.....#",
    "#.###.#",
    "#.....#",
    "#.###.#",
    "#.....#",
    "#######",
]


def run(solver_cls, grid):
    solver = solver_cls(grid)
    events = solver.run_all()
    return solver, events


class TestSolvers(unittest.TestCase):
    def create_simple_maze(self):
        # Single corridor from (1,1) down and across to (5,5)
        return Grid.from_bitmap([
            "#######",
            "#.#####",
            "#.#####",
            "#.....#",
            "#####.#",
            "#####.#",
            "#######",
        ])

    def carved(self, cls=RecursiveBacktracker, seed=42, w=21, h=21):
        grid = Grid(w, h)
        cls(grid, seed=seed).run_all()
        return grid

    def test_bfs_optimality(self):
        grid = self.create_simple_maze()
        bfs, events = run(BFS, grid)

        # Expected path: (1,1) (1,2) (1,3) (2,3) (3,3) (4,3) (5,3) (5,4) (5,5)
        self.assertEqual(len(bfs.path), 9)
        self.assertEqual(bfs.path[0], (1, 1))
        self.assertEqual(bfs.path[-1], (5, 5))
        self.assertEqual(events[-1], SolveDone(found=True, cost=8))

    def test_event_order(self):
        grid = self.create_simple_maze()
        for name, cls in SOLVERS.items():
            with self.subTest(solver=name):
                _, events = run(cls, grid)
                self.assertEqual(events[0], Visit((1, 1)))
                kinds = [type(e) for e in events]
                first_path = kinds.index(Path)
                # Visits, then path cells, then exactly one SolveDone
                self.assertTrue(all(k is Visit for k in kinds[:first_path]))
                self.assertTrue(all(k is Path for k in kinds[first_path:-1]))
                self.assertIs(kinds[-1], SolveDone)

                path = [e.cell for e in events if isinstance(e, Path)]
                self.assertEqual(path[0], grid.start)
                self.assertEqual(path[-1], grid.goal)
                for (ax, ay), (bx, by) in zip(path, path[1:]):
                    self.assertEqual(abs(ax - bx) + abs(ay - by), 1)

    def test_golden_maze_costs(self):
        grid = self.carved()
        bfs, _ = run(BFS, grid)
        astar, _ = run(AStar, grid)
        dfs, _ = run(DFS, grid)

        self.assertTrue(bfs.found)
        self.assertEqual(bfs.path[0], (1, 1))
        self.assertEqual(bfs.path[-1], (19, 19))
        self.assertEqual(bfs.cost, 48)
        self.assertEqual(astar.cost, 48)
        # Perfect maze: only one route, so even DFS finds it
        self.assertEqual(dfs.cost, 48)

        self.assertEqual(bfs.visited_count, 139)
        self.assertEqual(dfs.visited_count, 139)
        self.assertEqual(astar.visited_count, 118)

    def test_prim_maze_costs(self):
        grid = self.carved(PrimsAlgorithm)
        costs = {name: run(cls, grid)[0].cost for name, cls in SOLVERS.items()}
        self.assertEqual(costs, {"bfs": 36, "dfs": 36, "astar": 36})

    def test_agreement_across_seeds(self):
        for carver in (RecursiveBacktracker, PrimsAlgorithm):
            for seed in (0, 3, 11, 99):
                grid = self.carved(carver, seed=seed, w=25, h=15)
                bfs, _ = run(BFS, grid)
                astar, _ = run(AStar, grid)
                dfs, _ = run(DFS, grid)
                self.assertEqual(bfs.cost, astar.cost)
                self.assertGreaterEqual(dfs.cost, bfs.cost)
                self.assertTrue(bfs.found and astar.found and dfs.found)

    def test_loops(self):
        grid = Grid.from_bitmap(LOOPY)
        bfs, _ = run(BFS, grid)
        astar, _ = run(AStar, grid)
        dfs, _ = run(DFS, grid)
        self.assertEqual(bfs.cost, 8)
        self.assertEqual(astar.cost, 8)
        self.assertGreaterEqual(dfs.cost, 8)
        self.assertEqual(len(set(dfs.path)), len(dfs.path))

    def test_no_path(self):
        grid = self.carved()
        # Seal the goal off
        gx, gy = grid.goal
        for nx, ny in list(grid.open_neighbors(gx, gy)):
            grid.set_wall(nx, ny)

        for name, cls in SOLVERS.items():
            with self.subTest(solver=name):
                solver, events = run(cls, grid)
                self.assertEqual(events[-1], SolveDone(found=False, cost=0))
                self.assertFalse(any(isinstance(e, Path) for e in events))
                self.assertEqual(solver.path, [])
                self.assertFalse(solver.found)

    def test_all_walls(self):
        grid = Grid(7, 7) # All walls
        for cls in SOLVERS.values():
            _, events = run(cls, grid)
            self.assertEqual(events[-1], SolveDone(found=False, cost=0))

    def test_solving_does_not_mutate(self):
        grid = self.carved()
        before = grid.cells.tobytes()
        for cls in SOLVERS.values():
            run(cls, grid)
        self.assertEqual(grid.cells.tobytes(), before)

    def test_start_equals_goal(self):
        grid = Grid.from_bitmap(["#####", "#.###", "#####"])
        grid.start = grid.goal = (1, 1)
        for cls in SOLVERS.values():
            solver, events = run(cls, grid)
            self.assertEqual(events, [Visit((1, 1)), Path((1, 1)), SolveDone(found=True, cost=0)])

if __name__ == '__main__':
    unittest.main()

import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_lab.config import ConfigError, MazeConfig

class TestConfig(unittest.TestCase):
    def test_defaults(self):
        cfg = MazeConfig().normalized()
        self.assertEqual((cfg.width, cfg.height), (41, 31))
        self.assertEqual((cfg.gen_rate, cfg.solve_rate, cfg.frame_rate_cap), (6, 12, 60))
        self.assertEqual(cfg.seed, 42)

    def test_coercion(self):
        cfg = MazeConfig(width=20, height=8, gen_rate=0, solve_rate=-3,
                         frame_rate_cap=500, seed=-1).normalized()
        self.assertEqual((cfg.width, cfg.height), (21, 9))
        self.assertEqual(cfg.gen_rate, 1)
        self.assertEqual(cfg.solve_rate, 1)
        self.assertEqual(cfg.frame_rate_cap, 120)
        self.assertEqual(cfg.seed, 0xFFFFFFFF)

        self.assertEqual(MazeConfig(frame_rate_cap=5).normalized().frame_rate_cap, 15)
        self.assertEqual(MazeConfig(width="23").normalized().width, 23)

    def test_normalized_returns_copy(self):
        cfg = MazeConfig(width=20)
        cfg.normalized()
        self.assertEqual(cfg.width, 20)

    def test_errors(self):
        with self.assertRaises(ConfigError):
            MazeConfig(carver="kruskal").normalized()
        with self.assertRaises(ConfigError):
            MazeConfig(solver="dijkstra").normalized()
        with self.assertRaises(ConfigError):
            MazeConfig(width=3).normalized()
        with self.assertRaises(ConfigError):
            MazeConfig(height="tall").normalized()
        self.assertTrue(issubclass(ConfigError, ValueError))

    def test_to_dict(self):
        d = MazeConfig(carver="prim").to_dict()
        self.assertEqual(d["carver"], "prim")
        self.assertIn("frame_rate_cap", d)

if __name__ == '__main__':
    unittest.main()

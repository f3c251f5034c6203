import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_lab.core.grid import Grid
from maze_lab.core.events import (
    MAGIC, Backtrack, Carve, Done, EventLog, Init, Path, SolveDone, Visit,
    decode_events, describe_event, encode_events,
)
from maze_lab.algo.dfs import RecursiveBacktracker
from maze_lab.algo.solvers import BFS

class TestEvents(unittest.TestCase):
    def test_events_are_immutable(self):
        ev = Carve((1, 1), (3, 1))
        with self.assertRaises(AttributeError):
            ev.to_cell = (5, 5)

    def test_codec_full_run(self):
        grid = Grid(15, 11)
        events = RecursiveBacktracker(grid, seed=9).run_all()
        events += BFS(grid).run_all()

        data = encode_events(events, grid.width, grid.height)
        self.assertTrue(data.startswith(b"MAZELOG"))
        w, h, decoded = decode_events(data)
        self.assertEqual((w, h), (15, 11))
        self.assertEqual(decoded, events)

    def test_codec_sizes(self):
        header = len(encode_events([]))
        self.assertEqual(header, 7 + 8)
        self.assertEqual(len(encode_events([Init((1, 1))])) - header, 5)
        self.assertEqual(len(encode_events([Carve((1, 1), (3, 1))])) - header, 9)
        self.assertEqual(len(encode_events([Done()])) - header, 1)
        self.assertEqual(len(encode_events([SolveDone(True, 12)])) - header, 6)

    def test_bad_input(self):
        with self.assertRaises(ValueError):
            decode_events(b"NOTALOG" + bytes(8))
        with self.assertRaises(ValueError):
            decode_events(encode_events([]) + b"\xff")
        with self.assertRaises(ValueError):
            encode_events(["carve"])

    def test_truncated_log(self):
        full = encode_events([Init((1, 1)), Carve((1, 1), (3, 1)), Done()], 5, 5)
        for cut in (len(MAGIC) + 3, len(full) - 5, len(full) - 2):
            with self.subTest(cut=cut):
                with self.assertRaisesRegex(ValueError, "Truncated"):
                    decode_events(full[:cut])

    def test_event_log(self):
        log = EventLog(21, 21)
        self.assertFalse(log)
        log.record(Init((1, 1)))
        log.record(Carve((1, 1), (1, 3)))
        log.record(Done())
        self.assertEqual(len(log), 3)
        self.assertEqual(list(log), [Init((1, 1)), Carve((1, 1), (1, 3)), Done()])

        copy = EventLog.from_bytes(log.to_bytes())
        self.assertEqual((copy.width, copy.height), (21, 21))
        self.assertEqual(copy.events, log.events)

    def test_describe(self):
        self.assertEqual(describe_event(Init((3, 5))), "Init: place starting cell")
        self.assertEqual(describe_event(Carve((1, 1), (3, 1))), "Carve: 1,1 -> 3,1")
        self.assertEqual(describe_event(Backtrack((3, 1), (1, 1))), "Backtrack: 3,1 <- 1,1")
        self.assertEqual(describe_event(Visit((2, 4))), "Visit: 2,4")
        self.assertEqual(describe_event(Path((2, 4))), "Path step: 2,4")
        self.assertEqual(describe_event(SolveDone(True, 36)), "Solved (cost 36)")
        self.assertEqual(describe_event(SolveDone(False, 0)), "No path")
        self.assertEqual(describe_event(Done()), "Generation done")
        self.assertEqual(describe_event(None), "")

if __name__ == '__main__':
    unittest.main()

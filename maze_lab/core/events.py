import struct
from dataclasses import dataclass
from typing import ClassVar, Iterable, Iterator, List, Tuple, Union

Cell = Tuple[int, int]

# Event Types
EVT_INIT = 0x01
EVT_CARVE = 0x02
EVT_BACKTRACK = 0x03
EVT_DONE = 0x04
EVT_VISIT = 0x05
EVT_PATH = 0x06
EVT_SOLVE_DONE = 0x07

MAGIC = b"MAZELOG"


@dataclass(frozen=True)
class Init:
    cell: Cell
    tag: ClassVar[int] = EVT_INIT


@dataclass(frozen=True)
class Carve:
    from_cell: Cell
    to_cell: Cell
    tag: ClassVar[int] = EVT_CARVE


@dataclass(frozen=True)
class Backtrack:
    from_cell: Cell
    to_cell: Cell
    tag: ClassVar[int] = EVT_BACKTRACK


@dataclass(frozen=True)
class Done:
    tag: ClassVar[int] = EVT_DONE


@dataclass(frozen=True)
class Visit:
    cell: Cell
    tag: ClassVar[int] = EVT_VISIT


@dataclass(frozen=True)
class Path:
    cell: Cell
    tag: ClassVar[int] = EVT_PATH


@dataclass(frozen=True)
class SolveDone:
    found: bool
    cost: int
    tag: ClassVar[int] = EVT_SOLVE_DONE


Event = Union[Init, Carve, Backtrack, Done, Visit, Path, SolveDone]

CARVE_EVENTS = (Init, Carve, Backtrack, Done)


def describe_event(event) -> str:
    """One-line annotation for the step label."""
    if event is None:
        return ""
    if isinstance(event, Init):
        return "Init: place starting cell"
    if isinstance(event, Carve):
        (fx, fy), (tx, ty) = event.from_cell, event.to_cell
        return f"Carve: {fx},{fy} -> {tx},{ty}"
    if isinstance(event, Backtrack):
        (fx, fy), (tx, ty) = event.from_cell, event.to_cell
        return f"Backtrack: {fx},{fy} <- {tx},{ty}"
    if isinstance(event, Visit):
        return f"Visit: {event.cell[0]},{event.cell[1]}"
    if isinstance(event, Path):
        return f"Path step: {event.cell[0]},{event.cell[1]}"
    if isinstance(event, SolveDone):
        return f"Solved (cost {event.cost})" if event.found else "No path"
    if isinstance(event, Done):
        return "Generation done"
    return ""


def encode_events(events: Iterable[Event], width: int = 0, height: int = 0) -> bytes:
    """
    Packs events into the compact log format.
    Header: Magic "MAZELOG" + Width (4b) + Height (4b)
    Body: 1 byte type followed by 'H' (unsigned short) coordinates.
    """
    chunks = [MAGIC, struct.pack(">II", width, height)]
    for ev in events:
        if isinstance(ev, (Init, Visit, Path)):
            chunks.append(struct.pack(">BHH", ev.tag, ev.cell[0], ev.cell[1]))
        elif isinstance(ev, (Carve, Backtrack)):
            chunks.append(struct.pack(">BHHHH", ev.tag, *ev.from_cell, *ev.to_cell))
        elif isinstance(ev, Done):
            chunks.append(struct.pack(">B", ev.tag))
        elif isinstance(ev, SolveDone):
            chunks.append(struct.pack(">BBI", ev.tag, int(ev.found), ev.cost))
        else:
            raise ValueError(f"Cannot encode {ev!r}")
    return b"".join(chunks)


def decode_events(data: bytes) -> Tuple[int, int, List[Event]]:
    """Inverse of encode_events. Returns (width, height, events)."""
    if data[:len(MAGIC)] != MAGIC:
        raise ValueError("Invalid event log")
    try:
        return _decode_body(data, len(MAGIC))
    except struct.error as e:
        raise ValueError("Truncated event log") from e


def _decode_body(data: bytes, pos: int) -> Tuple[int, int, List[Event]]:
    width, height = struct.unpack_from(">II", data, pos)
    pos += 8

    events: List[Event] = []
    while pos < len(data):
        type_code = data[pos]
        pos += 1

        if type_code in (EVT_INIT, EVT_VISIT, EVT_PATH):
            x, y = struct.unpack_from(">HH", data, pos)
            pos += 4
            cls = {EVT_INIT: Init, EVT_VISIT: Visit, EVT_PATH: Path}[type_code]
            events.append(cls((x, y)))

        elif type_code in (EVT_CARVE, EVT_BACKTRACK):
            fx, fy, tx, ty = struct.unpack_from(">HHHH", data, pos)
            pos += 8
            cls = Carve if type_code == EVT_CARVE else Backtrack
            events.append(cls((fx, fy), (tx, ty)))

        elif type_code == EVT_DONE:
            events.append(Done())

        elif type_code == EVT_SOLVE_DONE:
            found, cost = struct.unpack_from(">BI", data, pos)
            pos += 5
            events.append(SolveDone(bool(found), cost))

        else:
            raise ValueError(f"Unknown event type 0x{type_code:02x} at offset {pos - 1}")

    return width, height, events


class EventLog:
    """
    Ordered record of one carving run.
    Knows the grid size it was recorded on so a replay can rebuild an empty grid.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.events: List[Event] = []

    def record(self, event: Event):
        self.events.append(event)

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    def __len__(self):
        return len(self.events)

    def __bool__(self):
        return bool(self.events)

    def to_bytes(self) -> bytes:
        return encode_events(self.events, self.width, self.height)

    @classmethod
    def from_bytes(cls, data: bytes) -> 'EventLog':
        width, height, events = decode_events(data)
        log = cls(width, height)
        log.events = events
        return log

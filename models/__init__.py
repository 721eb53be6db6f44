from models.student import Student
from models.seat import Seat, make_seat_id, parse_seat_id
from models.history import GridSnapshot, HistoryEntry
from models.selection import SelectionSet
from models.gesture import PointerEvent, PointerPhase, DragPayload, GestureState, GestureOutcome, Rect

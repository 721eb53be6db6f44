from typing import Iterable, Iterator, List, Set


class SelectionSet:
    """Seat ids currently multi-selected. Order carries no meaning."""

    def __init__(self, seat_ids: Iterable[str] = ()):
        self._ids: Set[str] = set(seat_ids)

    def toggle(self, seat_id: str, exclusive: bool = False):
        """Add or remove one seat.

        exclusive=True models a plain click: every other member is dropped
        before the toggle. exclusive=False models a modifier-click.
        """
        if exclusive:
            self._ids &= {seat_id}
        if seat_id in self._ids:
            self._ids.discard(seat_id)
        else:
            self._ids.add(seat_id)

    def select_all(self, active_seats: Iterable) -> None:
        self._ids = {seat.id for seat in active_seats}

    def add(self, seat_id: str):
        self._ids.add(seat_id)

    def update(self, seat_ids: Iterable[str]):
        self._ids.update(seat_ids)

    def discard(self, seat_id: str):
        self._ids.discard(seat_id)

    def clear(self):
        self._ids.clear()

    def ordered(self, grid) -> List[str]:
        """Member ids in row-major order of the grid; unknown ids go last."""
        order = {seat.id: i for i, seat in enumerate(grid.seats)}
        return sorted(self._ids, key=lambda sid: (order.get(sid, len(order)), sid))

    def as_set(self) -> Set[str]:
        return set(self._ids)

    def __contains__(self, seat_id) -> bool:
        return seat_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def __bool__(self) -> bool:
        return bool(self._ids)

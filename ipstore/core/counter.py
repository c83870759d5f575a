"""
Streaming Top-K frequency counter
Keeps an exact count per identifier plus a small ranked table of the K
most frequent identifiers, updated incrementally on every event
"""
from typing import Any, Dict, Hashable, List, Optional, Set, Tuple
import logging

logger = logging.getLogger(__name__)

Slot = Optional[Tuple[Hashable, int]]


class FrequencyCounter:
    """
    Exact frequency counter with an incrementally maintained Top-K table.

    Space: O(N) for the count map (N = distinct identifiers), O(K) for the table
    Update: O(1) amortized map lookup + O(K) scan-and-shift in the table
    Read: O(K)

    Ties are broken by arrival: the first identifier to reach a count ranks
    ahead of identifiers that reach the same count later, and an unranked
    identifier only enters a full table once its count exceeds the threshold.
    """

    def __init__(self, k: int = 100):
        """
        Initialize the counter

        Args:
            k: Capacity of the ranked table (must be >= 1)
        """
        if not isinstance(k, int) or isinstance(k, bool) or k < 1:
            raise ValueError(f"k must be a positive integer, got {k!r}")

        self.k = k
        self._counts: Dict[Hashable, int] = {}
        self._slots: List[Slot] = [None] * k
        self._ranked: Set[Hashable] = set()
        self._occupancy = 0
        self._total = 0

    def record_event(self, identifier: Hashable) -> None:
        """
        Count one occurrence of an identifier and restore the Top-K table

        Args:
            identifier: Any hashable value
        """
        old_count = self._counts.get(identifier, 0)
        new_count = old_count + 1

        if identifier in self._ranked:
            self._promote(self._index_of(identifier), identifier, new_count)
        elif self._occupancy < self.k:
            # Only first sightings land here: nothing is evicted before the table fills
            self._slots[self._occupancy] = (identifier, new_count)
            self._ranked.add(identifier)
            self._occupancy += 1
        elif old_count == self.threshold:
            last = self.k - 1
            evicted, _ = self._slots[last]
            self._ranked.discard(evicted)
            self._slots[last] = (identifier, old_count)
            self._ranked.add(identifier)
            self._promote(last, identifier, new_count)

        self._counts[identifier] = new_count
        self._total += 1

    def top_k(self) -> List[Hashable]:
        """
        Get the ranked identifiers

        Returns:
            Up to k identifiers, highest count first
        """
        return [slot[0] for slot in self._slots[:self._occupancy]]

    def ranked(self) -> List[Tuple[Hashable, int]]:
        """Get the ranked (identifier, count) pairs, highest count first"""
        return list(self._slots[:self._occupancy])

    def clear(self) -> None:
        """Reset to the empty state"""
        self._counts, self._slots, self._ranked = {}, [None] * self.k, set()
        self._occupancy = 0
        self._total = 0
        logger.debug(f"Cleared frequency counter (k={self.k})")

    def count(self, identifier: Hashable) -> int:
        """Get the exact count for an identifier (0 if never seen)"""
        return self._counts.get(identifier, 0)

    def is_ranked(self, identifier: Hashable) -> bool:
        """Check whether an identifier currently holds a table slot"""
        return identifier in self._ranked

    @property
    def threshold(self) -> int:
        """Count of the last slot once the table is full, else 0"""
        if self._occupancy < self.k:
            return 0
        return self._slots[self.k - 1][1]

    @property
    def occupancy(self) -> int:
        """Number of filled table slots"""
        return self._occupancy

    @property
    def total(self) -> int:
        """Number of events recorded since the last clear"""
        return self._total

    def _index_of(self, identifier: Hashable) -> int:
        # Same matching rule as set membership: identity, then equality
        for index in range(self._occupancy):
            slot_id = self._slots[index][0]
            if slot_id is identifier or slot_id == identifier:
                return index
        raise KeyError(identifier)

    def _promote(self, index: int, identifier: Hashable, count: int) -> None:
        """
        Move the entry at index to its sorted position with an updated count

        The entry is placed at the first slot whose count is below the new
        count; the slots between shift down by one, keeping their order.
        """
        target = index
        while target > 0 and self._slots[target - 1][1] < count:
            target -= 1

        self._slots[target + 1:index + 1] = self._slots[target:index]
        self._slots[target] = (identifier, count)

    def __len__(self) -> int:
        """Return number of distinct identifiers seen"""
        return len(self._counts)

    def __contains__(self, identifier: Any) -> bool:
        return identifier in self._counts

    def __getitem__(self, identifier: Hashable) -> int:
        """Support bracket notation"""
        return self.count(identifier)

    def __repr__(self) -> str:
        return (
            f"FrequencyCounter(k={self.k}, occupancy={self._occupancy}, "
            f"distinct={len(self._counts)}, total={self._total})"
        )

"""Weighted random selection over a set of unique elements.

Each element carries a non-negative integer weight. Drawing maps a uniform
integer in ``[1, total_weight]`` onto the element whose weight range contains
it, so an element is drawn with probability ``weight / total_weight``.

Weight ranges are laid out in insertion order and are recomputed from the
current weights whenever the container has been mutated since the last
draw. Lookup is a binary search over the prefix sums.
"""

import logging
import random
from bisect import bisect_left
from collections.abc import Hashable, Iterable, Iterator, Mapping
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Hashable)


class IndexCorruptedError(RuntimeError):
    """A value inside the sample domain matched no weight range."""


def _check_weight(weight: int) -> None:
    if isinstance(weight, bool) or not isinstance(weight, int):
        msg = f"Weight must be an int, got {type(weight).__name__}"
        raise TypeError(msg)
    if weight < 0:
        msg = f"Weight must be non-negative, got {weight}"
        raise ValueError(msg)


def _check_seed(seed: int) -> None:
    if isinstance(seed, bool) or not isinstance(seed, int):
        msg = f"Seed must be an int, got {type(seed).__name__}"
        raise TypeError(msg)
    if seed < 0:
        msg = f"Seed must be non-negative, got {seed}"
        raise ValueError(msg)


class WeightedSet(Generic[E]):
    """A set of unique elements with integer weights and a seeded sampler.

    Mutators mark the cumulative index dirty; the next draw rebuilds it, so
    calling :meth:`refresh` is never required. Each instance owns its own
    ``random.Random``, and two sets built with the same seed and the same
    sequence of mutations produce the same draws.

    Elements with weight 0 are stored and counted but never drawn.
    """

    def __init__(
        self,
        seed: int,
        items: Mapping[E, int] | Iterable[tuple[E, int]] | None = None,
    ) -> None:
        _check_seed(seed)
        self._seed = seed
        self._rng = random.Random(seed)
        self._weights: dict[E, int] = {}
        self._total_weight = 0
        self._order: list[E] = []
        self._bounds: list[int] = []
        self._dirty = False

        if items is None:
            return
        pairs = items.items() if isinstance(items, Mapping) else items
        for element, weight in pairs:
            if not self.insert(element, weight):
                msg = f"Duplicate element in initial items: {element!r}"
                raise ValueError(msg)

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------

    @property
    def seed(self) -> int:
        """The seed most recently given to the generator."""
        return self._seed

    def reseed(self, seed: int) -> None:
        """Replace the generator state. Elements and weights are kept."""
        _check_seed(seed)
        self._seed = seed
        self._rng.seed(seed)
        logger.debug("Reseeded weighted set with %d", seed)

    def copy(self, seed: int | None = None) -> "WeightedSet[E]":
        """Copy elements and weights into a set with a fresh generator.

        The copy is seeded with ``seed``, or with this set's last seed when
        omitted. Generator state is never shared between the two.
        """
        other = type(self)(self._seed if seed is None else seed)
        other._weights = dict(self._weights)
        other._total_weight = self._total_weight
        other._dirty = True
        return other

    def __copy__(self) -> "WeightedSet[E]":
        return self.copy()

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def insert(self, element: E, weight: int) -> bool:
        """Add ``element`` with ``weight``.

        Returns False, leaving the set unchanged, if the element is already
        present.
        """
        _check_weight(weight)
        if element in self._weights:
            return False
        self._weights[element] = weight
        self._total_weight += weight
        self._dirty = True
        return True

    def erase(self, element: E) -> int | None:
        """Remove ``element`` and return its weight, or None if absent."""
        weight = self._weights.pop(element, None)
        if weight is None:
            return None
        self._total_weight -= weight
        self._dirty = True
        return weight

    def modify(self, element: E, weight: int) -> int | None:
        """Set a new weight for ``element`` and return the previous one.

        Returns None if the element is absent.
        """
        _check_weight(weight)
        previous = self._weights.get(element)
        if previous is None:
            return None
        self._weights[element] = weight
        self._total_weight += weight - previous
        self._dirty = True
        return previous

    def clear(self) -> None:
        """Remove all elements."""
        self._weights.clear()
        self._total_weight = 0
        self._dirty = True
        logger.debug("Cleared weighted set")

    def refresh(self) -> None:
        """Rebuild the cumulative index from the current weights."""
        order: list[E] = []
        bounds: list[int] = []
        upper = 0
        for element, weight in self._weights.items():
            if weight == 0:
                continue
            upper += weight
            order.append(element)
            bounds.append(upper)
        self._order = order
        self._bounds = bounds
        self._dirty = False
        logger.debug(
            "Rebuilt index: %d drawable of %d elements, total weight %d",
            len(order),
            len(self._weights),
            self._total_weight,
        )

    update = refresh

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def total_weight(self) -> int:
        return self._total_weight

    def is_empty(self) -> bool:
        return not self._weights

    def contains(self, element: E) -> bool:
        return element in self._weights

    def weight(self, element: E) -> int | None:
        """Weight of ``element``, or None if absent."""
        return self._weights.get(element)

    def probability(self, element: E) -> float | None:
        """``weight / total_weight`` for ``element``.

        None if the element is absent or the total weight is zero.
        """
        weight = self._weights.get(element)
        if weight is None or self._total_weight == 0:
            return None
        return weight / self._total_weight

    def items(self) -> list[tuple[E, int]]:
        """``(element, weight)`` pairs in insertion order."""
        return list(self._weights.items())

    def ranges(self) -> dict[E, tuple[int, int]]:
        """Current inclusive weight range of each drawable element.

        Ranges are derived from the weights and shift as they change; they
        are not stable identifiers.
        """
        if self._dirty:
            self.refresh()
        result: dict[E, tuple[int, int]] = {}
        lower = 1
        for element, upper in zip(self._order, self._bounds):
            result[element] = (lower, upper)
            lower = upper + 1
        return result

    def __len__(self) -> int:
        return len(self._weights)

    def __contains__(self, element: object) -> bool:
        return element in self._weights

    def __iter__(self) -> Iterator[E]:
        return iter(list(self._weights))

    def __getitem__(self, element: E) -> int:
        return self._weights[element]

    def __setitem__(self, element: E, weight: int) -> None:
        if self.modify(element, weight) is None:
            self.insert(element, weight)

    def __delitem__(self, element: E) -> None:
        if self.erase(element) is None:
            raise KeyError(element)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeightedSet):
            return NotImplemented
        return self._weights == other._weights

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seed={self._seed!r}, items={self._weights!r})"

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def _draw_one(self) -> E:
        if self._dirty:
            self.refresh()
        r = self._rng.randint(1, self._total_weight)
        i = bisect_left(self._bounds, r)
        if i >= len(self._order):
            msg = f"Draw value {r} is outside every weight range"
            raise IndexCorruptedError(msg)
        return self._order[i]

    def draw(self) -> E | None:
        """Draw one element, or None if nothing has positive weight.

        A set holding ``None`` as an element cannot tell that draw apart from
        an empty domain here; check ``total_weight`` or use :meth:`sample`.
        """
        if self._total_weight == 0:
            return None
        return self._draw_one()

    __call__ = draw

    def sample(self, count: int) -> list[E]:
        """Draw ``count`` elements independently, with replacement."""
        if count < 0:
            msg = f"Sample count must be non-negative, got {count}"
            raise ValueError(msg)
        if self._total_weight == 0:
            return []
        return [self._draw_one() for _ in range(count)]

"""Domain-to-pixel scale mappings for continuous and categorical axes."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

# Tolerance when dividing bounds by a tick step, so 0.3 / 0.1 counts as 3.
_EPS = 1e-9


class UnknownCategoryError(KeyError):
    """Raised when a band scale is asked for a key outside its domain."""


def tick_increment(start: float, stop: float, count: int = 10) -> float:
    """Return a 1/2/5×10ⁿ step that splits ``[start, stop]`` into ~``count`` ticks.

    Returns 0 when no step exists (empty or non-finite span, ``count`` < 1).
    """

    if count < 1 or not (math.isfinite(start) and math.isfinite(stop)) or stop <= start:
        return 0.0
    raw = (stop - start) / count
    if not math.isfinite(raw):
        return 0.0
    power = math.floor(math.log10(raw))
    error = raw / 10**power
    if error >= math.sqrt(50):
        factor = 10
    elif error >= math.sqrt(10):
        factor = 5
    elif error >= math.sqrt(2):
        factor = 2
    else:
        factor = 1
    return factor * 10.0**power


def _decimals(step: float) -> int:
    return max(0, -math.floor(math.log10(step)))


def nice_domain(start: float, stop: float, count: int = 10) -> Tuple[float, float]:
    """Round a domain outward to multiples of its tick increment.

    The increment is recomputed on the widened domain until it settles. A
    reversed domain keeps its orientation; a zero-span domain is returned as is.
    """

    if start == stop or not (math.isfinite(start) and math.isfinite(stop)):
        return start, stop
    flipped = stop < start
    lo, hi = (stop, start) if flipped else (start, stop)

    previous = None
    for _ in range(10):
        step = tick_increment(lo, hi, count)
        if step <= 0 or step == previous:
            break
        digits = _decimals(step)
        lo = round(math.floor(lo / step + _EPS) * step, digits)
        hi = round(math.ceil(hi / step - _EPS) * step, digits)
        previous = step

    return (hi, lo) if flipped else (lo, hi)


def _check_pair(name: str, pair: Sequence[float]) -> Tuple[float, float]:
    if len(pair) != 2:
        raise ValueError(f"{name} must have exactly two bounds, got {len(pair)}")
    a, b = float(pair[0]), float(pair[1])
    if not (math.isfinite(a) and math.isfinite(b)):
        raise ValueError(f"{name} bounds must be finite, got {pair!r}")
    return a, b


@dataclass(frozen=True)
class LinearScale:
    """Linear interpolation from ``domain`` onto ``range``.

    A zero-span domain maps every value to the midpoint of the range, and
    ``invert`` returns the single domain value.
    """

    domain: Tuple[float, float]
    range: Tuple[float, float]

    def __post_init__(self) -> None:
        object.__setattr__(self, "domain", _check_pair("domain", self.domain))
        object.__setattr__(self, "range", _check_pair("range", self.range))

    @property
    def is_degenerate(self) -> bool:
        return self.domain[0] == self.domain[1]

    def map(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d0 == d1:
            return (r0 + r1) / 2
        return r0 + (float(value) - d0) / (d1 - d0) * (r1 - r0)

    __call__ = map

    def invert(self, pixel: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d0 == d1 or r0 == r1:
            return d0
        return d0 + (float(pixel) - r0) / (r1 - r0) * (d1 - d0)

    def nice(self, count: int = 10) -> "LinearScale":
        return LinearScale(nice_domain(self.domain[0], self.domain[1], count), self.range)

    def ticks(self, count: int = 10) -> List[float]:
        """Round tick values inside the domain, in domain order."""

        d0, d1 = self.domain
        lo, hi = min(d0, d1), max(d0, d1)
        if lo == hi:
            return [lo]
        step = tick_increment(lo, hi, count)
        if step <= 0:
            return []
        digits = _decimals(step)
        first = math.ceil(lo / step - _EPS)
        last = math.floor(hi / step + _EPS)
        values = [round(i * step, digits) for i in range(first, last + 1)]
        return values if d0 <= d1 else values[::-1]


@dataclass(frozen=True)
class BandScale:
    """Equal-width padded slots for an ordered set of discrete keys.

    Each key gets a slot of ``step = extent / n`` pixels. The band inside the
    slot is ``step * (1 - padding)`` wide and centered, so key ``i`` starts at
    ``range[0] + i * step + step * padding / 2``.
    """

    domain: Tuple[Hashable, ...]
    range: Tuple[float, float]
    padding: float = 0.0
    _positions: Dict[Hashable, int] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not 0.0 <= self.padding < 1.0:
            raise ValueError(f"padding must be in [0, 1), got {self.padding}")
        r0, r1 = _check_pair("range", self.range)
        if r1 <= r0:
            raise ValueError(f"band scale needs a positive pixel extent, got {self.range!r}")
        positions: Dict[Hashable, int] = {}
        for key in self.domain:
            positions.setdefault(key, len(positions))
        object.__setattr__(self, "range", (r0, r1))
        object.__setattr__(self, "domain", tuple(positions))
        object.__setattr__(self, "_positions", positions)

    @property
    def step(self) -> float:
        if not self.domain:
            return 0.0
        return (self.range[1] - self.range[0]) / len(self.domain)

    @property
    def bandwidth(self) -> float:
        return self.step * (1.0 - self.padding)

    def __contains__(self, key: object) -> bool:
        return key in self._positions

    def map(self, key: Hashable) -> float:
        """Return the start coordinate of ``key``'s band."""

        try:
            index = self._positions[key]
        except (KeyError, TypeError):
            raise UnknownCategoryError(key) from None
        step = self.step
        return self.range[0] + index * step + step * self.padding / 2

    __call__ = map

    def center(self, key: Hashable) -> float:
        return self.map(key) + self.bandwidth / 2

    def key_at(self, pixel: float) -> Optional[Hashable]:
        """Return the key whose band contains ``pixel``, or ``None``."""

        step = self.step
        if step <= 0 or not math.isfinite(pixel):
            return None
        index = math.floor((pixel - self.range[0]) / step)
        if not 0 <= index < len(self.domain):
            return None
        key = self.domain[index]
        start = self.map(key)
        if start <= pixel < start + self.bandwidth:
            return key
        return None


def make_scale(
    domain: Iterable,
    range: Sequence[float],
    kind: str = "linear",
    *,
    padding: float = 0.0,
    nice: bool = False,
):
    """Build a ``LinearScale`` (``kind="linear"``) or ``BandScale`` (``kind="band"``)."""

    kind = (kind or "linear").lower()
    if kind == "linear":
        scale = LinearScale(tuple(domain), tuple(range))
        return scale.nice() if nice else scale
    if kind == "band":
        return BandScale(tuple(domain), tuple(range), padding=padding)
    raise ValueError(f"Unknown scale kind: {kind!r}")

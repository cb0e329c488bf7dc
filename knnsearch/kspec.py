import numbers
from dataclasses import dataclass
from typing import Iterator, Sequence

from .errors import EmptySearchSpace, InvalidK


@dataclass(frozen=True)
class KSpec:
    """Candidate neighbor counts: non-empty, strictly increasing, all >= 1.

    Ranges parsed from ``A-B`` or ``A-B,S`` stay as ``range`` objects, so an
    oversized range is rejected by ``validate`` without being expanded.
    """

    values: Sequence[int]

    def __post_init__(self):
        if isinstance(self.values, range):
            values = self.values
            if len(values) == 0:
                raise EmptySearchSpace("no candidate k values given")
            if values.step < 1 or values[0] < 1:
                raise InvalidK(f"k range must be increasing from at least 1, got {values}")
        else:
            values = tuple(self.values)
            if not values:
                raise EmptySearchSpace("no candidate k values given")
            for value in values:
                if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
                    raise InvalidK(f"k values must be positive integers, got {value!r}")
            values = tuple(int(v) for v in values)
            if any(b <= a for a, b in zip(values, values[1:])):
                raise InvalidK(f"k values must be strictly increasing, got {values}")
        object.__setattr__(self, "values", values)

    def __iter__(self) -> Iterator[int]:
        return iter(self.values)

    def __len__(self):
        return len(self.values)

    def __str__(self):
        if len(self.values) == 1:
            return str(self.values[0])
        if isinstance(self.values, range):
            return f"{self.smallest}-{self.largest},{self.values.step}"
        return ",".join(map(str, self.values))

    @property
    def is_single(self) -> bool:
        return len(self.values) == 1

    @property
    def smallest(self) -> int:
        return self.values[0]

    @property
    def largest(self) -> int:
        return self.values[-1]

    def validate(self, train_size: int) -> "KSpec":
        if self.largest > train_size:
            raise InvalidK(
                f"k value {self.largest} exceeds the {train_size} available training records"
            )
        return self


def _parse_int(text: str, what: str) -> int:
    text = text.strip()
    if not text.isdecimal():
        raise InvalidK(f"failed to parse {what} for k value: {text!r}")
    return int(text)


def _parse_range(text: str):
    low, _, high = text.partition("-")
    low = _parse_int(low, "low value")
    high = _parse_int(high, "high value")
    if low == 0:
        raise InvalidK("low value for k range cannot be 0")
    if low > high:
        raise InvalidK("low value for k range cannot be greater than the high value")
    return low, high


def parse_k_spec(text) -> KSpec:
    """Parse ``N``, ``A-B`` or ``A-B,S`` into a KSpec.

    Ranges are inclusive of both ends: ``"2-8,2"`` gives 2, 4, 6 and 8.
    """
    if isinstance(text, KSpec):
        return text
    if isinstance(text, int) and not isinstance(text, bool):
        text = str(text)
    text = str(text).strip()

    if "," in text:
        range_text, _, step_text = text.partition(",")
        step = _parse_int(step_text, "step size")
        if step == 0:
            raise InvalidK("step size must be larger than 0")
        if "-" not in range_text:
            raise InvalidK("you must specify a range when using a k step")
        low, high = _parse_range(range_text)
        return KSpec(range(low, high + 1, step))

    if "-" in text:
        low, high = _parse_range(text)
        return KSpec(range(low, high + 1))

    value = _parse_int(text, "value")
    if value == 0:
        raise InvalidK("k value cannot be 0")
    return KSpec((value,))

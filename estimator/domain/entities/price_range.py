from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal


def round_half_away(value: float) -> int:
    """Round to the nearest whole amount, halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class PriceRange:
    min: int = 0
    max: int = 0

    @staticmethod
    def point(amount: int) -> "PriceRange":
        return PriceRange(min=amount, max=amount)

    @staticmethod
    def coerce(price: int | float | None = None, price_range: dict | "PriceRange" | None = None) -> "PriceRange":
        """Collapse a single price and/or a {min, max} mapping into a range."""
        if isinstance(price_range, PriceRange):
            return price_range
        if price_range:
            low = price_range.get("min")
            high = price_range.get("max")
            if low is None:
                low = high if high is not None else (price or 0)
            if high is None:
                high = low
            return PriceRange(min=low, max=high)
        return PriceRange.point(price or 0)

    @property
    def value(self) -> int:
        return self.max

    @property
    def is_zero(self) -> bool:
        return self.min == 0 and self.max == 0

    def __add__(self, other: "PriceRange") -> "PriceRange":
        return PriceRange(min=self.min + other.min, max=self.max + other.max)

    def increase_for(self, multiplier: float) -> "PriceRange":
        """Rounded amount added by applying ``multiplier`` to each bound."""
        return PriceRange(
            min=round_half_away(self.min * (multiplier - 1)),
            max=round_half_away(self.max * (multiplier - 1)),
        )

    def minus(self, amount: int) -> "PriceRange":
        return PriceRange(min=max(0, self.min - amount), max=max(0, self.max - amount))

    def clamped(self) -> "PriceRange":
        return PriceRange(min=max(0, self.min), max=max(0, self.max))

    def to_dict(self) -> dict[str, int]:
        return {"min": self.min, "max": self.max}

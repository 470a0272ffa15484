from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from estimator.domain.entities.price_range import PriceRange


@dataclass(frozen=True)
class BreakdownLine:
    type: str  # "capability", "industry", "scale_adder", "service_level", "addon", ...
    id: str
    name: str
    amount: int
    amount_range: PriceRange
    included: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "id": self.id,
            "name": self.name,
            "amount": self.amount,
            "amount_range": self.amount_range.to_dict(),
            "included": self.included,
        }


@dataclass(frozen=True)
class ServiceQuoteLine:
    service_id: str
    service_name: str
    base_price: int
    subtotal: int
    subtotal_range: PriceRange
    breakdown: tuple[BreakdownLine, ...] = ()
    is_monthly: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "service_id": self.service_id,
            "service_name": self.service_name,
            "base_price": self.base_price,
            "subtotal": self.subtotal,
            "subtotal_range": self.subtotal_range.to_dict(),
            "breakdown": [line.to_dict() for line in self.breakdown],
            "is_monthly": self.is_monthly,
        }


@dataclass(frozen=True)
class ActiveBundle:
    id: str
    name: str
    savings: int
    pitch: str = ""


@dataclass(frozen=True)
class Quote:
    services: tuple[ServiceQuoteLine, ...] = ()
    subtotal: int = 0
    subtotal_range: PriceRange = PriceRange()
    applied_bundles: tuple[ActiveBundle, ...] = ()
    bundle_discount: int = 0
    multi_service_discount: int = 0
    total_discount: int = 0
    final_total: int = 0
    final_total_range: PriceRange = PriceRange()
    anchor_price: int = 0
    anchor_range: PriceRange = PriceRange()
    has_monthly: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "services": [line.to_dict() for line in self.services],
            "subtotal": self.subtotal,
            "subtotal_range": self.subtotal_range.to_dict(),
            "applied_bundles": [
                {"id": b.id, "name": b.name, "savings": b.savings, "pitch": b.pitch}
                for b in self.applied_bundles
            ],
            "bundle_discount": self.bundle_discount,
            "multi_service_discount": self.multi_service_discount,
            "total_discount": self.total_discount,
            "final_total": self.final_total,
            "final_total_range": self.final_total_range.to_dict(),
            "anchor_price": self.anchor_price,
            "anchor_range": self.anchor_range.to_dict(),
            "has_monthly": self.has_monthly,
        }

from __future__ import annotations

from dataclasses import dataclass, field

from estimator.domain.entities.price_range import PriceRange


@dataclass(frozen=True)
class ServiceDefinition:
    id: str
    name: str
    base_price: PriceRange
    description: str = ""
    is_monthly: bool = False
    capabilities: tuple[str, ...] = ()  # applicable capability ids
    default_capabilities: tuple[str, ...] = ()  # pre-selected when the service is toggled on
    recommended: bool = False
    category: str | None = None
    icon: str | None = None


@dataclass(frozen=True)
class CapabilityDefinition:
    id: str
    name: str
    price: PriceRange = PriceRange()
    is_popular_bundle_part: bool = False
    pitch: str = ""
    icon: str | None = None


@dataclass(frozen=True)
class Industry:
    id: str
    name: str
    multiplier: float = 1.0
    adder: int = 0
    subtitle: str = ""
    icon: str | None = None


@dataclass(frozen=True)
class BusinessScale:
    id: str
    name: str
    multiplier: float = 1.0
    adder: int = 0
    description: str = ""
    icon: str | None = None


@dataclass(frozen=True)
class ServiceLevel:
    id: str  # "standard" | "premium" | "luxury"
    name: str
    multiplier: float = 1.0
    adder: int = 0
    description: str = ""
    features: tuple[str, ...] = ()
    popular: bool = False


@dataclass(frozen=True)
class Addon:
    id: str
    name: str
    price: PriceRange = PriceRange()
    description: str = ""
    icon: str | None = None


@dataclass(frozen=True)
class Bundle:
    id: str
    name: str
    included: tuple[str, ...]
    savings: int = 0
    bundle_price: int | None = None
    pitch: str = ""


@dataclass(frozen=True)
class PricingRules:
    currency: str = "USD"
    default_bundle_discount: float = 0.05
    anchor_multiplier: float = 1.0
    anchor_range_adder: PriceRange = PriceRange()
    monthly_management_adder: int = 0
    included_capabilities_by_service: dict[str, tuple[str, ...]] = field(default_factory=dict)


@dataclass(frozen=True)
class WizardStep:
    id: str
    label: str
    number: int
    microcopy: tuple[str, ...] = ()


@dataclass(frozen=True)
class Catalog:
    services: dict[str, ServiceDefinition]
    capabilities: dict[str, CapabilityDefinition]
    industries: dict[str, Industry]
    scales: dict[str, BusinessScale]
    service_levels: dict[str, ServiceLevel]
    addons: dict[str, Addon]
    bundles: tuple[Bundle, ...]
    rules: PricingRules
    steps: tuple[WizardStep, ...]
    default_service_level: str = "standard"

    @property
    def step_ids(self) -> tuple[str, ...]:
        return tuple(step.id for step in self.steps)

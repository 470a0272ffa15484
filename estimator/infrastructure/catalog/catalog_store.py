from __future__ import annotations

import logging
from typing import Any

from estimator.application.exceptions import CatalogLintError
from estimator.application.ports.catalog import CatalogPort
from estimator.domain.entities.catalog import (
    Addon,
    Bundle,
    BusinessScale,
    CapabilityDefinition,
    Catalog,
    Industry,
    PricingRules,
    ServiceDefinition,
    ServiceLevel,
    WizardStep,
)
from estimator.domain.entities.price_range import PriceRange
from estimator.infrastructure.catalog.catalog_data import RAW_CATALOG


logger = logging.getLogger(__name__)


def _ids(values: Any) -> tuple[str, ...]:
    return tuple(str(v) for v in (values or []))


def build_catalog(raw: dict[str, Any]) -> Catalog:
    """
    Normalize raw catalog tables.
    Prices always become a PriceRange; multiplier defaults to 1.0 and adder to 0.
    """
    raw_rules = raw.get("pricing_rules") or {}
    included_by_service = {
        service_id: _ids(cap_ids)
        for service_id, cap_ids in (raw_rules.get("included_capabilities_by_service") or {}).items()
    }
    rules = PricingRules(
        currency=raw_rules.get("currency", "USD"),
        default_bundle_discount=float(raw_rules.get("default_bundle_discount", 0.05)),
        anchor_multiplier=float(raw_rules.get("anchor_multiplier", 1.0)),
        anchor_range_adder=PriceRange.coerce(price_range=raw_rules.get("anchor_range_adder")),
        monthly_management_adder=raw_rules.get("monthly_management_adder", 0) or 0,
        included_capabilities_by_service=included_by_service,
    )

    services: dict[str, ServiceDefinition] = {}
    for s in raw.get("services") or []:
        default_caps = s.get("default_capabilities")
        services[s["id"]] = ServiceDefinition(
            id=s["id"],
            name=s.get("name", s["id"]),
            base_price=PriceRange.coerce(s.get("base_price"), s.get("base_price_range")),
            description=s.get("description", ""),
            is_monthly=bool(s.get("is_monthly", False)),
            capabilities=_ids(s.get("capabilities")),
            default_capabilities=(
                _ids(default_caps) if default_caps is not None else included_by_service.get(s["id"], ())
            ),
            recommended=bool(s.get("recommended", False)),
            category=s.get("category"),
            icon=s.get("icon"),
        )

    capabilities = {
        c["id"]: CapabilityDefinition(
            id=c["id"],
            name=c.get("name", c["id"]),
            price=PriceRange.coerce(c.get("price"), c.get("price_range")),
            is_popular_bundle_part=bool(c.get("is_popular_bundle_part", False)),
            pitch=c.get("pitch", ""),
            icon=c.get("icon"),
        )
        for c in raw.get("capabilities") or []
    }

    industries = {
        i["id"]: Industry(
            id=i["id"],
            name=i.get("name", i["id"]),
            multiplier=float(i.get("multiplier", 1.0)),
            adder=i.get("adder", 0) or 0,
            subtitle=i.get("subtitle", ""),
            icon=i.get("icon"),
        )
        for i in raw.get("industries") or []
    }

    scales = {
        sc["id"]: BusinessScale(
            id=sc["id"],
            name=sc.get("name", sc["id"]),
            multiplier=float(sc.get("multiplier", 1.0)),
            adder=sc.get("adder", 0) or 0,
            description=sc.get("description", ""),
            icon=sc.get("icon"),
        )
        for sc in raw.get("business_scales") or []
    }

    levels = {
        lv["id"]: ServiceLevel(
            id=lv["id"],
            name=lv.get("name", lv["id"]),
            multiplier=float(lv.get("multiplier", 1.0)),
            adder=lv.get("adder", 0) or 0,
            description=lv.get("description", ""),
            features=tuple(lv.get("features") or ()),
            popular=bool(lv.get("popular", False)),
        )
        for lv in raw.get("service_levels") or []
    }

    addons = {
        a["id"]: Addon(
            id=a["id"],
            name=a.get("name", a["id"]),
            price=PriceRange.coerce(a.get("price"), a.get("price_range")),
            description=a.get("description", ""),
            icon=a.get("icon"),
        )
        for a in raw.get("addons") or []
    }

    bundles = tuple(
        Bundle(
            id=b["id"],
            name=b.get("name", b["id"]),
            included=_ids(b.get("included")),
            savings=b.get("savings", 0) or 0,
            bundle_price=b.get("bundle_price"),
            pitch=b.get("pitch", ""),
        )
        for b in raw.get("bundles") or []
    )

    steps = tuple(
        WizardStep(
            id=st["id"],
            label=st.get("label", st["id"]),
            number=int(st.get("number", index + 1)),
            microcopy=tuple(st.get("microcopy") or ()),
        )
        for index, st in enumerate(raw.get("steps") or [])
    )

    return Catalog(
        services=services,
        capabilities=capabilities,
        industries=industries,
        scales=scales,
        service_levels=levels,
        addons=addons,
        bundles=bundles,
        rules=rules,
        steps=steps,
        default_service_level=raw.get("default_service_level", "standard"),
    )


def lint_catalog(catalog: Catalog) -> list[str]:
    """Report every dangling identifier reference in the catalog."""
    problems: list[str] = []

    for service in catalog.services.values():
        for cap_id in service.capabilities:
            if cap_id not in catalog.capabilities:
                problems.append(f"service '{service.id}' references unknown capability '{cap_id}'")
        for cap_id in service.default_capabilities:
            if cap_id not in catalog.capabilities:
                problems.append(f"service '{service.id}' defaults to unknown capability '{cap_id}'")

    for service_id, cap_ids in catalog.rules.included_capabilities_by_service.items():
        if service_id not in catalog.services:
            problems.append(f"included capabilities listed for unknown service '{service_id}'")
        for cap_id in cap_ids:
            if cap_id not in catalog.capabilities:
                problems.append(f"service '{service_id}' includes unknown capability '{cap_id}'")

    for bundle in catalog.bundles:
        if not bundle.included:
            problems.append(f"bundle '{bundle.id}' includes no items")
        for item_id in bundle.included:
            if item_id not in catalog.capabilities and item_id not in catalog.addons:
                problems.append(f"bundle '{bundle.id}' includes unknown item '{item_id}'")

    if catalog.default_service_level not in catalog.service_levels:
        problems.append(f"default service level '{catalog.default_service_level}' is not defined")

    step_ids = catalog.step_ids
    if len(set(step_ids)) != len(step_ids):
        problems.append("wizard steps contain duplicate ids")

    return problems


def check_catalog(catalog: Catalog, strict: bool = False) -> list[str]:
    """Run the lint once at startup. Strict mode raises instead of warning."""
    problems = lint_catalog(catalog)
    if problems and strict:
        raise CatalogLintError(problems)
    for problem in problems:
        logger.warning("Catalog lint", extra={"reason": problem})
    return problems


class CatalogStore(CatalogPort):
    def __init__(self, catalog: Catalog | None = None) -> None:
        self._catalog = catalog or build_catalog(RAW_CATALOG)

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def get_service(self, service_id: str) -> ServiceDefinition | None:
        return self._catalog.services.get(service_id)

    def get_capability(self, capability_id: str) -> CapabilityDefinition | None:
        return self._catalog.capabilities.get(capability_id)

    def get_industry(self, industry_id: str) -> Industry | None:
        return self._catalog.industries.get(industry_id)

    def get_scale(self, scale_id: str) -> BusinessScale | None:
        return self._catalog.scales.get(scale_id)

    def get_service_level(self, level_id: str) -> ServiceLevel | None:
        return self._catalog.service_levels.get(level_id)

    def get_addon(self, addon_id: str) -> Addon | None:
        return self._catalog.addons.get(addon_id)

    def get_bundle(self, bundle_id: str) -> Bundle | None:
        return next((b for b in self._catalog.bundles if b.id == bundle_id), None)

    def included_capabilities(self, service_id: str) -> tuple[str, ...]:
        return self._catalog.rules.included_capabilities_by_service.get(service_id, ())

from __future__ import annotations

import logging

from estimator.application.ports.catalog import CatalogPort
from estimator.domain.entities.price_range import PriceRange, round_half_away
from estimator.domain.entities.quote import ActiveBundle, BreakdownLine, Quote, ServiceQuoteLine
from estimator.domain.entities.selection_state import CommonConfig, ServiceConfig, StateSnapshot


class QuoteCalculator:
    """
    Pure pricing: no I/O, deterministic for a given selection and catalog.

    Lookup misses (unknown service, capability, add-on, industry ...) contribute
    nothing instead of raising; dangling references are reported by the
    catalog lint at startup.
    """

    def __init__(self, catalog: CatalogPort) -> None:
        self._catalog = catalog
        self._logger = logging.getLogger(__name__)

    def price_service(
        self,
        service_id: str,
        service_config: ServiceConfig | None,
        common_config: CommonConfig,
    ) -> ServiceQuoteLine:
        service = self._catalog.get_service(service_id)
        if not service:
            self._logger.debug("Unknown service priced as zero", extra={"service": service_id})
            return ServiceQuoteLine(
                service_id=service_id,
                service_name=service_id,
                base_price=0,
                subtotal=0,
                subtotal_range=PriceRange(),
            )

        config = service_config or ServiceConfig()
        subtotal = service.base_price
        breakdown: list[BreakdownLine] = []

        def add(line_type: str, item_id: str, name: str, amount: PriceRange, included: bool = False) -> None:
            nonlocal subtotal
            subtotal = subtotal + amount
            breakdown.append(
                BreakdownLine(
                    type=line_type,
                    id=item_id,
                    name=name,
                    amount=amount.value,
                    amount_range=amount,
                    included=included,
                )
            )

        included = self._catalog.included_capabilities(service_id)
        for cap_id in config.capabilities:
            capability = self._catalog.get_capability(cap_id)
            if not capability:
                continue
            if cap_id in included:
                add("capability", cap_id, capability.name, PriceRange(), included=True)
            else:
                add("capability", cap_id, capability.name, capability.price)

        if common_config.industry:
            industry = self._catalog.get_industry(common_config.industry)
            if industry:
                if industry.multiplier > 1:
                    add("industry", industry.id, f"{industry.name} Industry", subtotal.increase_for(industry.multiplier))
                if industry.adder > 0:
                    add("industry_adder", industry.id, f"{industry.name} Industry", PriceRange.point(industry.adder))

        if common_config.scale:
            scale = self._catalog.get_scale(common_config.scale)
            if scale:
                if scale.multiplier > 1:
                    add("scale_multiplier", scale.id, f"{scale.name} Scale", subtotal.increase_for(scale.multiplier))
                if scale.adder > 0:
                    add("scale_adder", scale.id, f"{scale.name} Adjustment", PriceRange.point(scale.adder))

        if config.service_level:
            level = self._catalog.get_service_level(config.service_level)
            if level:
                if level.multiplier > 1:
                    add(
                        "service_level_multiplier",
                        level.id,
                        f"{level.name} Level",
                        subtotal.increase_for(level.multiplier),
                    )
                if level.adder > 0:
                    add("service_level", level.id, f"{level.name} Level", PriceRange.point(level.adder))

        monthly_adder = self._catalog.rules.monthly_management_adder
        if service.is_monthly and monthly_adder > 0:
            add("monthly_management", service.id, "Monthly Management", PriceRange.point(monthly_adder))

        for addon_id in config.addons:
            addon = self._catalog.get_addon(addon_id)
            if addon:
                add("addon", addon.id, addon.name, addon.price)

        subtotal = subtotal.clamped()
        return ServiceQuoteLine(
            service_id=service.id,
            service_name=service.name,
            base_price=service.base_price.value,
            subtotal=subtotal.value,
            subtotal_range=subtotal,
            breakdown=tuple(breakdown),
            is_monthly=service.is_monthly,
        )

    def price_all(self, state: StateSnapshot) -> Quote:
        """Price every selected service and apply discounts. Accepts a snapshot or a live state."""
        lines: list[ServiceQuoteLine] = []
        subtotal = PriceRange()
        selected_items: list[str] = []

        for service_id in state.selected_services:
            config = state.service_configs.get(service_id) or ServiceConfig()
            line = self.price_service(service_id, config, state.common_config)
            lines.append(line)
            subtotal = subtotal + line.subtotal_range
            selected_items.extend(config.capabilities)
            selected_items.extend(config.addons)

        bundles = self.detect_bundles(selected_items)
        bundle_discount = sum(b.savings for b in bundles)

        multi_service_discount = 0
        if bundle_discount == 0 and len(lines) > 1:
            multi_service_discount = round_half_away(subtotal.value * self._catalog.rules.default_bundle_discount)

        total_discount = bundle_discount + multi_service_discount
        final_range = subtotal.minus(total_discount)

        rules = self._catalog.rules
        anchor_price = max(0, round_half_away(final_range.value * rules.anchor_multiplier))
        anchor_range = PriceRange(
            min=round_half_away(final_range.min * rules.anchor_multiplier + rules.anchor_range_adder.min),
            max=round_half_away(final_range.max * rules.anchor_multiplier + rules.anchor_range_adder.max),
        ).clamped()

        return Quote(
            services=tuple(lines),
            subtotal=subtotal.value,
            subtotal_range=subtotal,
            applied_bundles=tuple(bundles),
            bundle_discount=bundle_discount,
            multi_service_discount=multi_service_discount,
            total_discount=total_discount,
            final_total=final_range.value,
            final_total_range=final_range,
            anchor_price=anchor_price,
            anchor_range=anchor_range,
            has_monthly=any(line.is_monthly for line in lines),
        )

    def detect_bundles(self, selected_item_ids: list[str]) -> list[ActiveBundle]:
        """A bundle is active when every one of its items is somewhere in the selection."""
        present = set(selected_item_ids)
        active: list[ActiveBundle] = []
        for bundle in self._catalog.bundles:
            if bundle.included and all(item_id in present for item_id in bundle.included):
                active.append(
                    ActiveBundle(id=bundle.id, name=bundle.name, savings=bundle.savings, pitch=bundle.pitch)
                )
        return active

"""
Tests for quote pricing: per-service breakdowns, discounts and anchors.
"""

from __future__ import annotations

from estimator.application.use_cases.calculate_quote import QuoteCalculator
from estimator.domain.entities.price_range import PriceRange, round_half_away
from estimator.domain.entities.selection_state import CommonConfig, ServiceConfig, StateSnapshot
from estimator.infrastructure.catalog.catalog_store import CatalogStore, build_catalog


def _selection(
    *service_ids: str,
    configs: dict[str, ServiceConfig] | None = None,
    industry: str | None = None,
    scale: str | None = None,
) -> StateSnapshot:
    configs = dict(configs or {})
    for service_id in service_ids:
        configs.setdefault(service_id, ServiceConfig(service_level="standard"))
    return StateSnapshot(
        selected_services=service_ids,
        service_configs=configs,
        common_config=CommonConfig(industry=industry, scale=scale),
    )


def test_round_half_away():
    """Halves round away from zero, everything else to the nearest whole amount."""
    assert round_half_away(2.5) == 3
    assert round_half_away(0.5) == 1
    assert round_half_away(-2.5) == -3
    assert round_half_away(2.4) == 2
    assert round_half_away(29.7) == 30


def test_single_service_base_price(calculator):
    """One service at standard level with nothing else costs its base price."""
    quote = calculator.price_all(_selection("A"))

    assert quote.final_total == 100
    assert quote.final_total_range == PriceRange(100, 100)
    assert quote.services[0].breakdown == ()
    assert quote.total_discount == 0


def test_industry_multiplier_adds_rounded_increase(calculator):
    """A 1.3 industry multiplier on 100 adds a 30 line."""
    quote = calculator.price_all(_selection("A", industry="clinic"))

    line = quote.services[0]
    assert line.subtotal == 130
    assert quote.final_total == 130
    industry_line = line.breakdown[0]
    assert industry_line.type == "industry"
    assert industry_line.name == "Clinic Industry"
    assert industry_line.amount == 30


def test_industry_adder_without_multiplier(calculator):
    quote = calculator.price_all(_selection("A", industry="legal"))

    assert quote.final_total == 120
    assert [b.type for b in quote.services[0].breakdown] == ["industry_adder"]


def test_neutral_industry_adds_nothing(calculator):
    quote = calculator.price_all(_selection("A", industry="plain"))

    assert quote.final_total == 100
    assert quote.services[0].breakdown == ()


def test_two_services_get_fractional_discount(calculator):
    """Two services of 100 each and no bundle: 5% of 200 comes off."""
    quote = calculator.price_all(_selection("A", "B"))

    assert quote.subtotal == 200
    assert quote.bundle_discount == 0
    assert quote.multi_service_discount == 10
    assert quote.total_discount == 10
    assert quote.final_total == 190


def test_bundle_replaces_fractional_discount(calculator):
    """Completing a bundle uses its savings instead of the multi-service discount."""
    configs = {"A": ServiceConfig(capabilities=("p", "q", "r"), service_level="standard")}
    quote = calculator.price_all(_selection("A", "B", configs=configs))

    assert [b.id for b in quote.applied_bundles] == ["pqr"]
    assert quote.bundle_discount == 50
    assert quote.multi_service_discount == 0
    assert quote.total_discount == 50
    assert quote.final_total == 150


def test_bundle_items_may_span_services(calculator):
    configs = {
        "A": ServiceConfig(capabilities=("p",), service_level="standard"),
        "B": ServiceConfig(capabilities=("q", "r"), service_level="standard"),
    }
    quote = calculator.price_all(_selection("A", "B", configs=configs))

    assert quote.bundle_discount == 50


def test_partial_bundle_is_not_active(calculator):
    assert calculator.detect_bundles(["p", "q"]) == []
    assert [b.id for b in calculator.detect_bundles(["r", "q", "p", "extra"])] == ["pqr"]


def test_addon_adds_its_price(calculator):
    """An add-on of 25 on a 100 service gives 125 with a 25 breakdown line."""
    configs = {"A": ServiceConfig(service_level="standard", addons=("extra",))}
    quote = calculator.price_all(_selection("A", configs=configs))

    assert quote.final_total == 125
    addon_line = quote.services[0].breakdown[-1]
    assert addon_line.type == "addon"
    assert addon_line.id == "extra"
    assert addon_line.amount == 25


def test_included_capability_is_free(calculator):
    """Capabilities included with a service show up as zero lines flagged included."""
    line = calculator.price_service(
        "B",
        ServiceConfig(capabilities=("s",), service_level="standard"),
        CommonConfig(),
    )
    assert line.subtotal == 100
    assert line.breakdown[0].included is True
    assert line.breakdown[0].amount == 0

    paid = calculator.price_service(
        "A",
        ServiceConfig(capabilities=("s",), service_level="standard"),
        CommonConfig(),
    )
    assert paid.subtotal == 140
    assert paid.breakdown[0].included is False


def test_service_level_multiplier_then_adder(calculator):
    """Premium applies its multiplier to the running subtotal, then its flat adder."""
    line = calculator.price_service("A", ServiceConfig(service_level="premium"), CommonConfig())

    assert [(b.type, b.amount) for b in line.breakdown] == [
        ("service_level_multiplier", 20),
        ("service_level", 50),
    ]
    assert line.subtotal == 170


def test_multipliers_apply_to_each_bound(calculator):
    """Ranged prices scale both bounds, each rounded on its own."""
    line = calculator.price_service(
        "A",
        ServiceConfig(capabilities=("t",), service_level="standard"),
        CommonConfig(industry="clinic", scale="growing"),
    )

    assert line.subtotal_range == PriceRange(min=120 + 36 + 300, max=160 + 48 + 300)
    assert line.subtotal == line.subtotal_range.max


def test_breakdown_sums_to_subtotal(calculator):
    configs = {"A": ServiceConfig(capabilities=("s", "t"), service_level="premium", addons=("extra",))}
    quote = calculator.price_all(_selection("A", configs=configs, industry="clinic", scale="growing"))

    line = quote.services[0]
    assert line.base_price + sum(b.amount for b in line.breakdown) == line.subtotal


def test_unknown_ids_contribute_nothing(calculator):
    configs = {"A": ServiceConfig(capabilities=("nope",), service_level="gold", addons=("missing",))}
    quote = calculator.price_all(_selection("A", configs=configs, industry="mars", scale="galactic"))

    assert quote.final_total == 100

    ghost = calculator.price_service("ghost", None, CommonConfig())
    assert ghost.subtotal == 0
    assert ghost.subtotal_range.is_zero


def test_savings_larger_than_subtotal_clamp_to_zero(raw_catalog):
    raw_catalog["bundles"][0]["savings"] = 1000
    calculator = QuoteCalculator(CatalogStore(build_catalog(raw_catalog)))
    configs = {"A": ServiceConfig(capabilities=("p", "q", "r"), service_level="standard")}

    quote = calculator.price_all(_selection("A", configs=configs))

    assert quote.final_total == 0
    assert quote.final_total_range == PriceRange(0, 0)
    assert quote.anchor_price == 0
    assert quote.anchor_range == PriceRange(340, 525)


def test_negative_prices_clamp_service_subtotal(raw_catalog):
    raw_catalog["capabilities"].append({"id": "credit", "name": "Credit", "price": -500})
    calculator = QuoteCalculator(CatalogStore(build_catalog(raw_catalog)))

    line = calculator.price_service(
        "A",
        ServiceConfig(capabilities=("credit",), service_level="standard"),
        CommonConfig(),
    )
    assert line.subtotal == 0
    assert line.subtotal_range.min == 0


def test_monthly_adder_only_for_monthly_services(raw_catalog):
    raw_catalog["pricing_rules"]["monthly_management_adder"] = 30
    calculator = QuoteCalculator(CatalogStore(build_catalog(raw_catalog)))

    quote = calculator.price_all(_selection("A", "M"))

    by_id = {line.service_id: line for line in quote.services}
    assert by_id["A"].subtotal == 100
    assert by_id["M"].subtotal == 130
    assert by_id["M"].breakdown[-1].type == "monthly_management"
    assert quote.has_monthly is True


def test_anchor_pricing(calculator):
    quote = calculator.price_all(_selection("A"))

    assert quote.anchor_price == 160
    assert quote.anchor_range == PriceRange(min=500, max=685)


def test_empty_selection_prices_to_zero(calculator):
    quote = calculator.price_all(StateSnapshot())

    assert quote.services == ()
    assert quote.final_total == 0
    assert quote.total_discount == 0


def test_pricing_is_deterministic(calculator):
    snapshot = _selection("A", "B", industry="clinic", scale="growing")

    assert calculator.price_all(snapshot) == calculator.price_all(snapshot)


def test_shipped_setup_includes_its_core_capabilities(shipped_catalog):
    """New GHL Setup with its default capabilities costs exactly its base price."""
    calculator = QuoteCalculator(shipped_catalog)
    service = shipped_catalog.get_service("new_ghl_setup")
    configs = {
        "new_ghl_setup": ServiceConfig(capabilities=service.default_capabilities, service_level="standard"),
    }

    quote = calculator.price_all(_selection("new_ghl_setup", configs=configs))

    assert quote.final_total == 297
    assert quote.final_total_range == PriceRange(97, 297)
    assert all(b.included for b in quote.services[0].breakdown)
    assert quote.anchor_price == 475
    assert quote.anchor_range == PriceRange(495, 1000)


def test_shipped_two_services_discount(shipped_catalog):
    calculator = QuoteCalculator(shipped_catalog)

    quote = calculator.price_all(_selection("new_ghl_setup", "platform_migration"))

    assert quote.subtotal == 1294
    assert quote.multi_service_discount == 65
    assert quote.final_total == 1229
    assert quote.final_total_range == PriceRange(794 - 65, 1229)


def test_shipped_performance_bundle(shipped_catalog):
    calculator = QuoteCalculator(shipped_catalog)
    configs = {
        "new_ghl_setup": ServiceConfig(
            service_level="standard",
            addons=("ab_testing", "email_audit", "zoom_handoff"),
        ),
    }

    quote = calculator.price_all(_selection("new_ghl_setup", configs=configs))

    assert [b.id for b in quote.applied_bundles] == ["performance_pro"]
    assert quote.subtotal == 297 + 197 + 197 + 147
    assert quote.final_total == quote.subtotal - 94

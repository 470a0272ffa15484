from __future__ import annotations

from typing import Any

import pytest

from estimator.application.use_cases.calculate_quote import QuoteCalculator
from estimator.infrastructure.catalog.catalog_store import CatalogStore, build_catalog


def small_catalog() -> dict[str, Any]:
    """Round-number catalog so expected totals can be worked out by hand."""
    return {
        "services": [
            {"id": "A", "name": "Service A", "base_price": 100},
            {"id": "B", "name": "Service B", "base_price": 100},
            {"id": "M", "name": "Managed", "base_price": 100, "is_monthly": True},
        ],
        "capabilities": [
            {"id": "p", "name": "P", "price": 0},
            {"id": "q", "name": "Q", "price": 0},
            {"id": "r", "name": "R", "price": 0},
            {"id": "s", "name": "S", "price": 40},
            {"id": "t", "name": "T", "price": 60, "price_range": {"min": 20, "max": 60}},
        ],
        "industries": [
            {"id": "clinic", "name": "Clinic", "multiplier": 1.3},
            {"id": "legal", "name": "Legal", "adder": 20},
            {"id": "plain", "name": "Plain"},
        ],
        "business_scales": [
            {"id": "solo", "name": "Solo", "adder": 0},
            {"id": "growing", "name": "Growing", "adder": 300},
        ],
        "service_levels": [
            {"id": "standard", "name": "Standard", "adder": 0},
            {"id": "premium", "name": "Premium", "multiplier": 1.2, "adder": 50},
        ],
        "addons": [
            {"id": "extra", "name": "Extra", "price": 25},
        ],
        "bundles": [
            {"id": "pqr", "name": "PQR Bundle", "included": ["p", "q", "r"], "savings": 50},
        ],
        "pricing_rules": {
            "default_bundle_discount": 0.05,
            "anchor_multiplier": 1.6,
            "anchor_range_adder": {"min": 340, "max": 525},
            "included_capabilities_by_service": {"B": ["s"]},
        },
        "steps": [
            {"id": "services"},
            {"id": "scope"},
            {"id": "details"},
            {"id": "review"},
            {"id": "contact"},
        ],
    }


@pytest.fixture
def raw_catalog() -> dict[str, Any]:
    return small_catalog()


@pytest.fixture
def catalog() -> CatalogStore:
    return CatalogStore(build_catalog(small_catalog()))


@pytest.fixture
def calculator(catalog: CatalogStore) -> QuoteCalculator:
    return QuoteCalculator(catalog)


@pytest.fixture
def shipped_catalog() -> CatalogStore:
    return CatalogStore()

from __future__ import annotations

from abc import ABC, abstractmethod

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


class CatalogPort(ABC):
    """Read-only reference data. Every lookup returns None on a miss."""

    @property
    @abstractmethod
    def catalog(self) -> Catalog:
        raise NotImplementedError

    @property
    def rules(self) -> PricingRules:
        return self.catalog.rules

    @property
    def steps(self) -> tuple[WizardStep, ...]:
        return self.catalog.steps

    @property
    def bundles(self) -> tuple[Bundle, ...]:
        return self.catalog.bundles

    @abstractmethod
    def get_service(self, service_id: str) -> ServiceDefinition | None:
        raise NotImplementedError

    @abstractmethod
    def get_capability(self, capability_id: str) -> CapabilityDefinition | None:
        raise NotImplementedError

    @abstractmethod
    def get_industry(self, industry_id: str) -> Industry | None:
        raise NotImplementedError

    @abstractmethod
    def get_scale(self, scale_id: str) -> BusinessScale | None:
        raise NotImplementedError

    @abstractmethod
    def get_service_level(self, level_id: str) -> ServiceLevel | None:
        raise NotImplementedError

    @abstractmethod
    def get_addon(self, addon_id: str) -> Addon | None:
        raise NotImplementedError

    @abstractmethod
    def get_bundle(self, bundle_id: str) -> Bundle | None:
        raise NotImplementedError

    @abstractmethod
    def included_capabilities(self, service_id: str) -> tuple[str, ...]:
        """Capability ids priced at zero when chosen for this service."""
        raise NotImplementedError

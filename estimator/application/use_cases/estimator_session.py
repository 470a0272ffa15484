from __future__ import annotations

import logging
from dataclasses import fields, replace
from typing import Any, Callable

from estimator.application.ports.catalog import CatalogPort
from estimator.application.use_cases.calculate_quote import QuoteCalculator
from estimator.application.utils.state_helpers import primary_service_level
from estimator.domain.entities.quote import ActiveBundle, Quote
from estimator.domain.entities.selection_state import (
    CommonConfig,
    Preferences,
    ServiceConfig,
    StateSnapshot,
)


Listener = Callable[["EstimatorState"], None]


def _ordered_ids(values: Any) -> tuple[str, ...]:
    """Insertion-ordered, duplicate-free tuple of ids."""
    if values is None:
        return ()
    if isinstance(values, str):
        values = [values]
    return tuple(dict.fromkeys(str(v) for v in values))


def _merge(current: Any, partial: dict[str, Any]) -> Any:
    allowed = {f.name for f in fields(current)}
    unknown = set(partial) - allowed
    if unknown:
        raise TypeError(f"Unknown {type(current).__name__} fields: {sorted(unknown)}")
    return replace(current, **partial)


class EstimatorState:
    """
    Single source of truth for one estimator session.

    Every mutation recomputes the quote and notifies subscribers before it
    returns. Step changes are not validated by ``set_step``; use
    ``next_step`` or check ``validate_step`` first.
    """

    def __init__(self, catalog: CatalogPort, calculator: QuoteCalculator | None = None) -> None:
        self._catalog = catalog
        self._calculator = calculator or QuoteCalculator(catalog)
        self._listeners: dict[int, Listener] = {}
        self._next_token = 1
        self._logger = logging.getLogger(__name__)
        self._clear()
        self._recompute()

    # ---- observers ----

    def subscribe(self, listener: Listener) -> int:
        token = self._next_token
        self._next_token += 1
        self._listeners[token] = listener
        return token

    def unsubscribe(self, token: int) -> bool:
        return self._listeners.pop(token, None) is not None

    def _notify(self) -> None:
        for listener in list(self._listeners.values()):
            listener(self)

    def _changed(self) -> None:
        self._recompute()
        self._logger.debug(
            "State updated",
            extra={"step": self.current_step, "service": ",".join(self.selected_services)},
        )
        self._notify()

    def _recompute(self) -> None:
        self._quote = self._calculator.price_all(self)

    # ---- mutations ----

    def toggle_service(self, service_id: str) -> None:
        if service_id in self.selected_services:
            self.selected_services = [s for s in self.selected_services if s != service_id]
            self.service_configs.pop(service_id, None)
        else:
            self.selected_services.append(service_id)
            self.service_configs[service_id] = self._default_service_config(service_id)
        self._changed()

    def update_service_config(self, service_id: str, **partial: Any) -> None:
        current = self.service_configs.get(service_id) or self._default_service_config(service_id)
        for key in ("capabilities", "addons"):
            if key in partial:
                partial[key] = _ordered_ids(partial[key])
        self.service_configs[service_id] = _merge(current, partial)
        self._changed()

    def update_common_config(self, **partial: Any) -> None:
        self.common_config = _merge(self.common_config, partial)
        self._changed()

    def update_preferences(self, **partial: Any) -> None:
        self.preferences = _merge(self.preferences, partial)
        self._changed()

    def set_step(self, step_id: str) -> None:
        self.current_step = step_id
        self._changed()

    def reset(self) -> None:
        self._clear()
        self._changed()

    # ---- navigation ----

    def validate_step(self, step_id: str) -> bool:
        if step_id == "services":
            return len(self.selected_services) > 0
        if step_id == "scope":
            return bool(self.common_config.industry and self.common_config.scale)
        if step_id == "details":
            return all(
                (self.service_configs.get(service_id) or ServiceConfig()).service_level
                for service_id in self.selected_services
            )
        return True

    def next_step(self) -> bool:
        """Move forward one step if the current step is complete."""
        step_ids = self._catalog.catalog.step_ids
        if self.current_step not in step_ids or not self.validate_step(self.current_step):
            return False
        index = step_ids.index(self.current_step)
        if index + 1 >= len(step_ids):
            return False
        self.set_step(step_ids[index + 1])
        return True

    def previous_step(self) -> bool:
        step_ids = self._catalog.catalog.step_ids
        if self.current_step not in step_ids:
            return False
        index = step_ids.index(self.current_step)
        if index == 0:
            return False
        self.set_step(step_ids[index - 1])
        return True

    def go_to_step(self, step_id: str) -> bool:
        if step_id not in self._catalog.catalog.step_ids:
            return False
        self.set_step(step_id)
        return True

    # ---- derived ----

    @property
    def quote(self) -> Quote:
        return self._quote

    @property
    def active_bundles(self) -> tuple[ActiveBundle, ...]:
        return self._quote.applied_bundles

    @property
    def has_multiple_services(self) -> bool:
        return len(self.selected_services) > 1

    @property
    def has_monthly_service(self) -> bool:
        for service_id in self.selected_services:
            service = self._catalog.get_service(service_id)
            if service and service.is_monthly:
                return True
        return False

    @property
    def progress_percentage(self) -> float:
        step_ids = self._catalog.catalog.step_ids
        if self.current_step not in step_ids or len(step_ids) < 2:
            return 0.0
        return step_ids.index(self.current_step) / (len(step_ids) - 1) * 100

    @property
    def primary_service_level(self) -> str:
        return primary_service_level(self)

    def snapshot(self) -> StateSnapshot:
        return StateSnapshot(
            current_step=self.current_step,
            selected_services=tuple(self.selected_services),
            service_configs=dict(self.service_configs),
            common_config=self.common_config,
            preferences=self.preferences,
        )

    # ---- helpers ----

    def _clear(self) -> None:
        step_ids = self._catalog.catalog.step_ids
        self.current_step: str = step_ids[0] if step_ids else "services"
        self.selected_services: list[str] = []
        self.service_configs: dict[str, ServiceConfig] = {}
        self.common_config = CommonConfig()
        self.preferences = Preferences()

    def _default_service_config(self, service_id: str) -> ServiceConfig:
        service = self._catalog.get_service(service_id)
        return ServiceConfig(
            capabilities=service.default_capabilities if service else (),
            service_level=self._catalog.catalog.default_service_level,
            addons=(),
        )

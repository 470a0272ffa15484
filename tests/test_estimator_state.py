"""
Tests for the estimator session state: selection, navigation and change notification.
"""

from __future__ import annotations

import pytest

from estimator.application.use_cases.estimator_session import EstimatorState
from estimator.domain.entities.selection_state import ServiceConfig


def test_toggle_adds_default_config(catalog):
    state = EstimatorState(catalog)

    state.toggle_service("B")

    assert state.selected_services == ["B"]
    assert state.service_configs["B"] == ServiceConfig(capabilities=("s",), service_level="standard", addons=())
    assert state.quote.final_total == 100


def test_toggle_twice_restores_selection(catalog):
    """Toggling the same service twice leaves no trace of it."""
    state = EstimatorState(catalog)
    state.toggle_service("A")
    before = state.snapshot()

    state.toggle_service("B")
    state.toggle_service("B")

    assert state.snapshot() == before
    assert "B" not in state.service_configs


def test_toggle_removes_config_created_before_selection(catalog):
    state = EstimatorState(catalog)
    state.update_service_config("A", addons=["extra"])
    assert state.selected_services == []

    state.toggle_service("A")
    assert state.selected_services == ["A"]
    state.toggle_service("A")

    assert state.selected_services == []
    assert "A" not in state.service_configs


def test_quote_follows_every_mutation(catalog):
    state = EstimatorState(catalog)

    state.toggle_service("A")
    assert state.quote.final_total == 100

    state.update_common_config(industry="clinic")
    assert state.quote.final_total == 130

    state.update_service_config("A", addons=["extra"])
    assert state.quote.final_total == 155

    state.toggle_service("B")
    assert state.has_multiple_services is True
    assert state.quote.multi_service_discount > 0


def test_update_service_config_dedupes_and_keeps_order(catalog):
    state = EstimatorState(catalog)
    state.toggle_service("A")

    state.update_service_config("A", capabilities=["r", "p", "r", "q"])

    assert state.service_configs["A"].capabilities == ("r", "p", "q")
    assert [b.id for b in state.active_bundles] == ["pqr"]


def test_partial_updates_merge(catalog):
    state = EstimatorState(catalog)
    state.toggle_service("A")

    state.update_service_config("A", service_level="premium")
    state.update_common_config(industry="clinic")
    state.update_common_config(scale="growing")

    assert state.service_configs["A"].service_level == "premium"
    assert state.common_config.industry == "clinic"
    assert state.common_config.scale == "growing"


def test_unknown_fields_are_rejected(catalog):
    state = EstimatorState(catalog)
    state.toggle_service("A")

    with pytest.raises(TypeError):
        state.update_service_config("A", colour="blue")
    with pytest.raises(TypeError):
        state.update_common_config(region="EU")
    with pytest.raises(TypeError):
        state.update_preferences(theme="dark")


def test_listeners_are_notified_after_recompute(catalog):
    state = EstimatorState(catalog)
    seen: list[int] = []
    token = state.subscribe(lambda s: seen.append(s.quote.final_total))

    state.toggle_service("A")
    state.update_preferences(wants_video=True)
    assert seen == [100, 100]

    assert state.unsubscribe(token) is True
    state.toggle_service("B")
    assert seen == [100, 100]
    assert state.unsubscribe(token) is False


def test_step_gating(catalog):
    """Each step only lets the user move on once it is complete."""
    state = EstimatorState(catalog)
    assert state.current_step == "services"

    assert state.next_step() is False
    state.toggle_service("A")
    assert state.next_step() is True
    assert state.current_step == "scope"

    state.update_common_config(industry="clinic")
    assert state.next_step() is False
    state.update_common_config(scale="solo")
    assert state.next_step() is True
    assert state.current_step == "details"

    state.update_service_config("A", service_level=None)
    assert state.validate_step("details") is False
    state.update_service_config("A", service_level="standard")
    assert state.next_step() is True
    assert state.next_step() is True
    assert state.current_step == "contact"
    assert state.progress_percentage == 100.0

    assert state.next_step() is False


def test_previous_step_is_always_allowed(catalog):
    state = EstimatorState(catalog)
    assert state.previous_step() is False

    state.go_to_step("review")
    assert state.previous_step() is True
    assert state.current_step == "details"


def test_go_to_step_ignores_unknown_steps(catalog):
    state = EstimatorState(catalog)

    assert state.go_to_step("checkout") is False
    assert state.current_step == "services"
    assert state.go_to_step("review") is True
    assert state.progress_percentage == 75.0


def test_reset_returns_to_initial_state(catalog):
    """After a multi-step selection, reset clears everything back to the first step."""
    state = EstimatorState(catalog)
    state.toggle_service("A")
    state.toggle_service("B")
    state.update_common_config(industry="clinic", scale="growing")
    state.update_preferences(wants_video=True)
    state.next_step()
    state.next_step()

    state.reset()

    assert state.selected_services == []
    assert state.current_step == "services"
    assert state.service_configs == {}
    assert state.common_config.industry is None
    assert state.preferences.wants_video is False
    assert state.quote.final_total == 0


def test_monthly_and_primary_level(catalog):
    state = EstimatorState(catalog)
    state.toggle_service("A")
    assert state.has_monthly_service is False
    assert state.primary_service_level == "standard"

    state.toggle_service("M")
    state.update_service_config("M", service_level="premium")

    assert state.has_monthly_service is True
    assert state.primary_service_level == "premium"


def test_snapshot_is_detached(catalog):
    state = EstimatorState(catalog)
    state.toggle_service("A")
    snapshot = state.snapshot()

    state.toggle_service("B")

    assert snapshot.selected_services == ("A",)
    assert "B" not in snapshot.service_configs

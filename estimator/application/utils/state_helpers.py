from __future__ import annotations

from estimator.domain.entities.selection_state import StateSnapshot


SERVICE_LEVEL_ORDER = ("standard", "premium", "luxury")


def primary_service_level(state: StateSnapshot) -> str:
    """Highest service level chosen across the selected services."""
    highest = SERVICE_LEVEL_ORDER[0]
    for service_id in state.selected_services:
        config = state.service_configs.get(service_id)
        level = config.service_level if config else None
        if level in SERVICE_LEVEL_ORDER and SERVICE_LEVEL_ORDER.index(level) > SERVICE_LEVEL_ORDER.index(highest):
            highest = level
    return highest


def determine_pipeline_stage(state: StateSnapshot) -> str:
    """CRM pipeline stage key for the selection."""
    if "monthly_management" in state.selected_services:
        return "monthly_management"
    if "platform_migration" in state.selected_services:
        return "migration"
    return "setup"

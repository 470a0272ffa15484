from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ServiceConfig:
    capabilities: tuple[str, ...] = ()
    service_level: str | None = None
    addons: tuple[str, ...] = ()


@dataclass(frozen=True)
class CommonConfig:
    industry: str | None = None
    scale: str | None = None


@dataclass(frozen=True)
class Preferences:
    wants_video: bool = False
    show_all_addons: bool = False


@dataclass(frozen=True)
class StateSnapshot:
    current_step: str = "services"
    selected_services: tuple[str, ...] = ()
    service_configs: dict[str, ServiceConfig] = field(default_factory=dict)
    common_config: CommonConfig = CommonConfig()
    preferences: Preferences = Preferences()

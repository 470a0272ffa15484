from datetime import date
from typing import Any

from pydantic import BaseModel, Field


class ServiceConfigSchema(BaseModel):
    capabilities: list[str] | None = None
    service_level: str | None = None
    addons: list[str] | None = None


class CommonConfigSchema(BaseModel):
    industry: str | None = None
    scale: str | None = None


class PreferencesSchema(BaseModel):
    wants_video: bool = False
    show_all_addons: bool = False


class SelectionSchema(BaseModel):
    selected_services: list[str] = Field(default_factory=list)
    service_configs: dict[str, ServiceConfigSchema] = Field(default_factory=dict)
    common_config: CommonConfigSchema = Field(default_factory=CommonConfigSchema)
    preferences: PreferencesSchema = Field(default_factory=PreferencesSchema)


class ContactSchema(BaseModel):
    email: str
    first_name: str
    last_name: str | None = None
    phone: str | None = None
    company: str | None = None
    project_description: str | None = None


class EstimateResponseSchema(BaseModel):
    quote: dict[str, Any]
    final_total_display: str
    final_total_range_display: str
    anchor_range_display: str
    timeline_days: int
    estimated_delivery: date
    active_bundles: list[str] = Field(default_factory=list)


class SubmitQuoteRequestSchema(BaseModel):
    contact: ContactSchema
    selection: SelectionSchema


class SubmitQuoteResponseSchema(BaseModel):
    ok: bool
    contact_id: str | None = None
    final_total: int
    opportunity: dict[str, Any] | None = None


class RetryResponseSchema(BaseModel):
    ok: bool = True
    retried: int

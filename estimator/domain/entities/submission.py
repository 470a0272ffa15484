from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ContactInfo:
    email: str
    first_name: str
    last_name: str = ""
    phone: str = ""
    company: str = ""
    project_description: str = ""

    @staticmethod
    def normalize(
        email: str,
        first_name: str,
        last_name: str | None = None,
        phone: str | None = None,
        company: str | None = None,
        project_description: str | None = None,
    ) -> "ContactInfo":
        return ContactInfo(
            email=(email or "").strip(),
            first_name=(first_name or "").strip(),
            last_name=(last_name or "").strip(),
            phone=(phone or "").strip(),
            company=(company or "").strip(),
            project_description=(project_description or "").strip(),
        )


@dataclass(frozen=True)
class OpportunityResult:
    ok: bool = False
    skipped: bool = False
    reason: str | None = None
    status: int | None = None
    body: dict[str, Any] | None = None


@dataclass(frozen=True)
class SubmissionResult:
    success: bool
    error: str | None = None
    contact_id: str | None = None
    opportunity: OpportunityResult | None = None
    saved_for_retry: bool = False

from __future__ import annotations

import logging
from typing import Any, Callable

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from estimator.application.exceptions import CrmTransportError, CrmUpstreamError
from estimator.application.use_cases.inspect_crm import InspectCrmUseCase
from estimator.wiring.dependencies import get_inspect_crm_use_case


router = APIRouter()
logger = logging.getLogger(__name__)


def _run(check: Callable[[], dict[str, Any]], context: str) -> dict[str, Any] | JSONResponse:
    try:
        return check()
    except CrmUpstreamError as e:
        return JSONResponse(status_code=e.status, content={"ok": False, "status": e.status, "body": e.body})
    except CrmTransportError as e:
        logger.error("GHL unreachable", extra={"reason": context, "error": str(e)})
        return JSONResponse(status_code=502, content={"ok": False, "error": str(e)})


@router.get("/ghl-health")
def ghl_health(uc: InspectCrmUseCase = Depends(get_inspect_crm_use_case)):
    return _run(uc.health, "health")


@router.get("/ghl-pipelines")
def ghl_pipelines(uc: InspectCrmUseCase = Depends(get_inspect_crm_use_case)):
    return _run(uc.pipelines, "pipelines")


@router.get("/ghl-estimator-fields")
def ghl_estimator_fields(uc: InspectCrmUseCase = Depends(get_inspect_crm_use_case)):
    return _run(uc.estimator_fields, "estimator fields")


@router.get("/ghl-estimate-range-fields")
def ghl_estimate_range_fields(
    response: Response,
    uc: InspectCrmUseCase = Depends(get_inspect_crm_use_case),
):
    # Never cache, so newly created fields show up immediately.
    response.headers["Cache-Control"] = "no-store"
    return _run(uc.estimate_range_fields, "estimate range fields")

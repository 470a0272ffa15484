import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from estimator.api.ghl import router as ghl_router
from estimator.api.v1.quotes import router as quotes_router
from estimator.application.exceptions import CrmConfigurationError
from estimator.core.config import settings
from estimator.infrastructure.catalog.catalog_store import check_catalog
from estimator.wiring.dependencies import get_catalog

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("service", "step", "contact_id", "attempt", "status", "error", "reason"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

check_catalog(get_catalog().catalog, strict=settings.STRICT_CATALOG)

app = FastAPI(title="Service Estimator", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-GHL-Source"],
)

app.include_router(quotes_router, prefix="/api", tags=["quotes"])
app.include_router(ghl_router, prefix="/api", tags=["ghl"])


@app.exception_handler(CrmConfigurationError)
async def crm_configuration_error(request: Request, exc: CrmConfigurationError) -> JSONResponse:
    logging.getLogger(__name__).error("CRM not configured", extra={"error": str(exc)})
    return JSONResponse(status_code=500, content={"ok": False, "error": str(exc)})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}

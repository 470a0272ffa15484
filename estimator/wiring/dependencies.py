from functools import lru_cache
import logging

from estimator.application.ports.catalog import CatalogPort
from estimator.application.ports.crm import CrmPort
from estimator.application.ports.submission_outbox import SubmissionOutboxPort
from estimator.application.use_cases.calculate_quote import QuoteCalculator
from estimator.application.use_cases.estimator_session import EstimatorState
from estimator.application.use_cases.inspect_crm import InspectCrmUseCase
from estimator.application.use_cases.submit_quote import SubmitQuoteUseCase
from estimator.core.config import Settings, settings
from estimator.infrastructure.catalog.catalog_store import CatalogStore
from estimator.infrastructure.ghl.ghl_client import GHLClient
from estimator.infrastructure.ghl.mock_crm import MockCrm
from estimator.infrastructure.store.json_outbox import JsonSubmissionOutbox
from estimator.infrastructure.store.memory_outbox import MemorySubmissionOutbox


_outbox: SubmissionOutboxPort | None = None


@lru_cache
def get_catalog() -> CatalogPort:
    return CatalogStore()


def get_calculator() -> QuoteCalculator:
    return QuoteCalculator(get_catalog())


def new_estimator_state() -> EstimatorState:
    return EstimatorState(catalog=get_catalog(), calculator=get_calculator())


@lru_cache
def get_crm() -> CrmPort:
    """
    Real GHL client when a token is configured.
    Raises CrmConfigurationError outside dev/local when credentials are missing.
    """
    logger = logging.getLogger(__name__)
    logger.info(
        "GHL_ACCESS_TOKEN present=%s GHL_LOCATION_ID present=%s",
        bool(settings.GHL_ACCESS_TOKEN),
        bool(settings.GHL_LOCATION_ID),
    )

    if not settings.GHL_ACCESS_TOKEN and settings.is_local:
        logger.info("Using MockCrm (token missing, ENV=dev/local)")
        return MockCrm()

    logger.info("Using real GHLClient")
    return GHLClient()


def build_outbox(config: Settings) -> SubmissionOutboxPort:
    """JSON file outbox when FAILED_SUBMISSIONS_STORE is "json" (or "auto" in dev/local), else in-memory."""
    store = config.FAILED_SUBMISSIONS_STORE.lower()
    if store == "json" or (store == "auto" and config.is_local):
        return JsonSubmissionOutbox(
            data_dir=config.FAILED_SUBMISSIONS_DIR,
            limit=config.FAILED_SUBMISSIONS_LIMIT,
        )
    logging.getLogger(__name__).warning(
        "Failed submissions kept in memory only",
        extra={"reason": "set FAILED_SUBMISSIONS_STORE=json to persist them"},
    )
    return MemorySubmissionOutbox(limit=config.FAILED_SUBMISSIONS_LIMIT)


def get_outbox() -> SubmissionOutboxPort:
    global _outbox
    if _outbox is None:
        _outbox = build_outbox(settings)
    return _outbox


def get_submit_quote_use_case() -> SubmitQuoteUseCase:
    return SubmitQuoteUseCase(
        crm=get_crm(),
        outbox=get_outbox(),
        custom_fields=settings.GHL_CUSTOM_FIELDS,
        pipeline_id=settings.GHL_PIPELINE_ID,
        stage_ids=settings.stage_ids,
        max_retries=settings.SUBMIT_MAX_RETRIES,
        retry_delay=settings.SUBMIT_RETRY_DELAY_SECONDS,
    )


def get_inspect_crm_use_case() -> InspectCrmUseCase:
    return InspectCrmUseCase(crm=get_crm(), location_id=settings.GHL_LOCATION_ID)

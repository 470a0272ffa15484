from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    GHL_ACCESS_TOKEN: str | None = None
    GHL_LOCATION_ID: str | None = None
    GHL_BASE_URL: str = "https://services.leadconnectorhq.com"
    GHL_API_VERSION: str = "2021-07-28"
    GHL_TIMEOUT_SECONDS: float = 10.0

    # Opportunity creation is skipped unless a pipeline id is set.
    GHL_PIPELINE_ID: str | None = None
    GHL_STAGE_ID_SETUP: str | None = None
    GHL_STAGE_ID_MIGRATION: str | None = None
    GHL_STAGE_ID_MONTHLY: str | None = None

    # Logical field key -> GHL custom field id, e.g. {"final_quote_total": "abc123"}
    GHL_CUSTOM_FIELDS: dict[str, str] = {}

    SUBMIT_MAX_RETRIES: int = 3
    SUBMIT_RETRY_DELAY_SECONDS: float = 1.0

    # "auto": JSON file in dev/local, in-memory elsewhere. The in-memory outbox
    # is lost on restart and not shared between workers; use "json" with a
    # shared FAILED_SUBMISSIONS_DIR to keep failed submissions in production.
    FAILED_SUBMISSIONS_STORE: str = "auto"
    FAILED_SUBMISSIONS_DIR: str = "./data/outbox"
    FAILED_SUBMISSIONS_LIMIT: int = 10

    STRICT_CATALOG: bool = False
    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    @property
    def stage_ids(self) -> dict[str, str | None]:
        return {
            "setup": self.GHL_STAGE_ID_SETUP,
            "migration": self.GHL_STAGE_ID_MIGRATION,
            "monthly_management": self.GHL_STAGE_ID_MONTHLY,
        }

    @property
    def is_local(self) -> bool:
        return self.ENV.lower() in {"dev", "local"}


settings = Settings()

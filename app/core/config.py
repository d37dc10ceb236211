from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App settings
    PROJECT_NAME: str = "FinanceAnalytics"
    API_PREFIX: str = "/api"
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")

    # Lookback windows (months)
    HEATMAP_MONTHS: int = Field(default=3, ge=1)
    TREND_MONTHS: int = Field(default=6, ge=1)
    GROWTH_WINDOW_MONTHS: int = Field(default=3, ge=1)

    # Category trend thresholds (percent)
    GROWTH_THRESHOLD: float = 10.0
    DECLINE_THRESHOLD: float = -10.0
    INSIGHT_TREND_THRESHOLD: float = 15.0

    # Forecasting
    MOVING_AVERAGE_PERIODS: int = Field(default=3, ge=1)
    FORECAST_MODEL: str = Field(default="moving_average")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()

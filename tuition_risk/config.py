"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from tuition_risk.domain.models import RiskThresholds


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "tuition-risk"
    log_level: str = "INFO"

    # Text-completion service
    completion_api_base: str = "https://api.anthropic.com"
    completion_api_key: str = ""
    completion_api_version: str = "2023-06-01"
    completion_model: str = "claude-3-7-sonnet-20250219"
    completion_max_tokens: int = 1024
    completion_temperature: float = 0.5  # Low so repeated calls tend to agree

    # HTTP Client
    http_timeout_seconds: float = 30.0

    # Prediction routing
    ai_enabled: bool = True
    prediction_fallback_to_simulation: bool = False

    # Classifier thresholds
    medium_risk_delay_threshold: int = 5  # days
    medium_risk_late_payments_count: int = 2
    high_risk_overdue_debts_count: int = 2
    high_risk_average_delay_days: int = 10

    def risk_thresholds(self) -> RiskThresholds:
        """Build the classifier threshold set from configuration"""
        return RiskThresholds(
            medium_risk_delay_threshold=self.medium_risk_delay_threshold,
            medium_risk_late_payments_count=self.medium_risk_late_payments_count,
            high_risk_overdue_debts_count=self.high_risk_overdue_debts_count,
            high_risk_average_delay_days=self.high_risk_average_delay_days,
        )

    @property
    def use_ai(self) -> bool:
        """AI predictions need the flag on and a plausible API key"""
        return self.ai_enabled and len(self.completion_api_key) > 10


settings = Settings()

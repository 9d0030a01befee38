from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Core
    project_name: str = "Event Console Feedback API"
    api_v1_prefix: str = "/api/v1"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # ============================================
    # TOASTS
    # ============================================
    # Errors linger longer: they usually carry more text to read.
    toast_default_duration_ms: int = 5000
    toast_error_duration_ms: int = 7000

    # ============================================
    # WEBSOCKET
    # ============================================
    websocket_enabled: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    # Helper methods
    def default_duration_for(self, severity: str) -> int:
        """Return the default toast lifetime (ms) for a severity."""
        if severity == "error":
            return self.toast_error_duration_ms
        return self.toast_default_duration_ms


@lru_cache
def get_settings() -> Settings:
    return Settings()

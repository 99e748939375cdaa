import os
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///neattabs.db")

    # Inbound bridge (browser -> service)
    BRIDGE_SECRET_TOKEN: str = "change-me"
    BRIDGE_HOST: str = "127.0.0.1"
    BRIDGE_PORT: int = 8765

    # Outbound bridge (service -> browser)
    HOST_BRIDGE_URL: str = "http://127.0.0.1:8766/host"
    HOST_BRIDGE_TIMEOUT: int = 5
    HOST_BRIDGE_MAX_RETRIES: int = 2

    EVENT_WAIT_TIMEOUT_SECONDS: float = 10.0  # How long a request waits for its queued decision


settings = Settings()

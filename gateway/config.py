import os
from dataclasses import dataclass
from typing import Optional


def env(key: str, default: Optional[str] = None, required: bool = False) -> str:
    value = os.getenv(key)
    if value is None or value == "":
        if required:
            raise RuntimeError(f"Missing required env var: {key}")
        return "" if default is None else str(default)
    return value


def _env_float(key: str, default: str) -> float:
    raw = env(key, default=default, required=False)
    try:
        return float(raw)
    except ValueError as e:
        raise RuntimeError(f"{key} must be a number") from e


@dataclass(frozen=True)
class Settings:
    APP_ENV: str
    SERVICE_PORT: int
    RENDER_API_BASE_URL: str
    RENDER_API_GENERATE_PATH: str
    INTERNAL_API_KEY: str
    RENDER_API_TIMEOUT_S: float
    MAX_OBJECT_WIDTH_MM: float
    MAX_OBJECT_HEIGHT_MM: float
    DEBUG_PAYLOAD: bool


def load_settings() -> Settings:
    app_env = env("APP_ENV", default="development", required=False)
    service_port_raw = env("PORT", default=None, required=False) or env("SERVICE_PORT", default="9100", required=False)
    try:
        service_port = int(service_port_raw)
    except ValueError as e:
        raise RuntimeError("SERVICE_PORT must be an integer") from e

    base_url = env("RENDER_API_BASE_URL", required=True).strip()

    return Settings(
        APP_ENV=app_env,
        SERVICE_PORT=service_port,
        RENDER_API_BASE_URL=base_url,
        RENDER_API_GENERATE_PATH=env("RENDER_API_GENERATE_PATH", default="/api/vector/generate", required=False),
        INTERNAL_API_KEY=env("INTERNAL_API_KEY", default="", required=False),
        RENDER_API_TIMEOUT_S=_env_float("RENDER_API_TIMEOUT_S", "120"),
        MAX_OBJECT_WIDTH_MM=_env_float("MAX_OBJECT_WIDTH_MM", "210"),
        MAX_OBJECT_HEIGHT_MM=_env_float("MAX_OBJECT_HEIGHT_MM", "74.25"),
        DEBUG_PAYLOAD=env("GATEWAY_DEBUG_PAYLOAD", default="", required=False) == "1",
    )

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from gateway.config import Settings
from gateway.errors import RenderEngineError
from gateway.schemas import RenderJobRequest, RenderJobResult

logger = logging.getLogger(__name__)

_WARN_EVENTS = {
    401: "RENDER_API_UNAUTHORIZED",
    403: "RENDER_API_FORBIDDEN",
    503: "RENDER_API_UNAVAILABLE",
}


def api_url(base_url: str, path: str) -> str:
    base = str(base_url or "").strip().rstrip("/")
    p = str(path or "")
    if not p:
        return base
    return f"{base}{p}" if p.startswith("/") else f"{base}/{p}"


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(data, dict):
        for key in ("message", "detail", "error"):
            value = data.get(key)
            if value:
                return str(value)
    return response.reason_phrase


class RenderJobClient:
    def __init__(self, settings: Settings, transport: Optional[httpx.BaseTransport] = None):
        self._settings = settings
        self._transport = transport

    def _headers(self, token: str) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if self._settings.INTERNAL_API_KEY:
            headers["x-internal-key"] = self._settings.INTERNAL_API_KEY
        return headers

    def submit(self, payload: RenderJobRequest, token: str = "") -> RenderJobResult:
        url = api_url(self._settings.RENDER_API_BASE_URL, self._settings.RENDER_API_GENERATE_PATH)
        try:
            with httpx.Client(timeout=self._settings.RENDER_API_TIMEOUT_S, transport=self._transport) as client:
                response = client.post(url, json=payload.to_wire(), headers=self._headers(token))
        except httpx.HTTPError as e:
            logger.error("RENDER_API_REQUEST_FAILED", extra={"method": "POST", "url": url, "status": None, "error": str(e)})
            raise RenderEngineError(f"Render API unreachable: {e}") from e

        if response.is_error:
            status = response.status_code
            message = _error_message(response)
            if status in _WARN_EVENTS:
                logger.warning(_WARN_EVENTS[status], extra={"url": url})
            logger.error("RENDER_API_REQUEST_FAILED", extra={"method": "POST", "url": url, "status": status, "error": message})
            raise RenderEngineError(message, status_code=status)

        return parse_job_result(response)


def parse_job_result(response: httpx.Response) -> RenderJobResult:
    try:
        data: Any = response.json()
    except ValueError as e:
        raise RenderEngineError("Render API returned a non-JSON response", status_code=response.status_code) from e
    if not isinstance(data, dict):
        data = {}

    job_id = str(data.get("jobId") or data.get("job_id") or "").strip()
    if not job_id:
        raise RenderEngineError("Missing jobId from render API response", status_code=response.status_code)
    pdf_s3_key = str(data.get("pdf_s3_key") or "").strip()
    if not pdf_s3_key:
        raise RenderEngineError("Missing pdf_s3_key from render API response", status_code=response.status_code)

    engine_metrics = data.get("engine_metrics")
    return RenderJobResult(
        job_id=job_id,
        pdf_s3_key=pdf_s3_key,
        engine_metrics=engine_metrics if isinstance(engine_metrics, dict) else None,
    )

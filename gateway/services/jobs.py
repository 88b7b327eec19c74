from __future__ import annotations

import logging
import uuid
from typing import Any

from gateway.config import Settings
from gateway.errors import OutOfRangeValue
from gateway.schemas import JobSubmission, RenderJobParams, RenderJobRequest, SeriesRange
from gateway.services.coerce import coerce_str
from gateway.services.engine_client import RenderJobClient
from gateway.services.payload import build_render_payload
from gateway.services.series import ending_series
from gateway.utils.hash import payload_fingerprint

logger = logging.getLogger(__name__)


def new_job_id() -> str:
    return str(uuid.uuid4())


def _raw_len(raw: Any) -> int:
    return len(raw) if isinstance(raw, (list, tuple)) else 0


def check_object_limits(payload: RenderJobRequest, settings: Settings) -> None:
    w = payload.object_mm.w
    h = payload.object_mm.h
    if w > settings.MAX_OBJECT_WIDTH_MM:
        raise OutOfRangeValue(
            "object_mm.w",
            f"Object width ({w:g}mm) exceeds max allowed ({settings.MAX_OBJECT_WIDTH_MM:g}mm). Reduce width before generating.",
        )
    if h > settings.MAX_OBJECT_HEIGHT_MM:
        raise OutOfRangeValue(
            "object_mm.h",
            f"Object height ({h:g}mm) exceeds max allowed ({settings.MAX_OBJECT_HEIGHT_MM:g}mm). Reduce height before generating.",
        )


def series_ranges(payload: RenderJobRequest) -> list[SeriesRange]:
    entries = payload.series_list or [payload.series]
    return [
        SeriesRange(
            start=s.start,
            end=ending_series(s.start, s.count, s.increment),
            count=s.count,
            step=s.increment,
        )
        for s in entries
    ]


def prepare_payload(params: RenderJobParams, settings: Settings) -> RenderJobRequest:
    if not coerce_str(params.job_id):
        params = params.model_copy(update={"job_id": new_job_id()})

    payload = build_render_payload(params)
    check_object_limits(payload, settings)

    wire = payload.to_wire()
    dropped = {
        "series_list": _raw_len(params.series_list) - len(payload.series_list or []),
        "custom_fonts": _raw_len(params.custom_fonts) - len(payload.custom_fonts or []),
        "overlays": _raw_len(params.overlays) + _raw_len(params.svg_overlays) - len(payload.overlays or []),
    }
    logger.info(
        "RENDER_PAYLOAD_BUILT",
        extra={
            "job_id": payload.job_id,
            "payload_sha256": payload_fingerprint(wire),
            "series_count": len(payload.series_list or [payload.series]),
            "dropped": {k: v for k, v in dropped.items() if v},
        },
    )
    if settings.DEBUG_PAYLOAD:
        logger.info("RENDER_PAYLOAD", extra={"job_id": payload.job_id, "payload": wire})
    return payload


def submit_job(
    *,
    params: RenderJobParams,
    settings: Settings,
    client: RenderJobClient,
    token: str = "",
) -> JobSubmission:
    payload = prepare_payload(params, settings)
    ranges = series_ranges(payload)
    result = client.submit(payload, token=token)

    logger.info("RENDER_JOB_SUBMITTED", extra={"job_id": result.job_id, "pdf_s3_key": result.pdf_s3_key})
    return JobSubmission(
        job_id=result.job_id,
        pdf_s3_key=result.pdf_s3_key,
        payload_sha256=payload_fingerprint(payload.to_wire()),
        series=ranges,
        engine_metrics=result.engine_metrics,
    )

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from gateway.errors import MissingRequiredField, OutOfRangeValue
from gateway.schemas import (
    CustomFont,
    ObjectPlacementMm,
    OverlayConfig,
    RasterOverlayConfig,
    RenderJobParams,
    RenderJobRequest,
    SeriesConfig,
    SvgOverlayConfig,
)
from gateway.services.coerce import (
    coerce_bool,
    coerce_enum,
    coerce_str,
    finite_or_default,
    finite_or_none,
    positive_finite_list,
    to_number,
    whole_number,
)

ALIGNMENTS = ("left", "center", "right")
DEFAULT_ALIGNMENT = "center"
DEFAULT_STEP = 1


def svg_s3_key_for_document(document_id: str) -> str:
    # The backend stores uploaded SVGs at this key; it is not client-controlled.
    return f"documents/raw/{document_id}.svg"


@dataclass(frozen=True)
class RequiredFields:
    job_id: str
    document_id: str
    object_mm: ObjectPlacementMm


def _item_get(item: Any, key: str) -> Any:
    return item.get(key) if isinstance(item, Mapping) else None


def _is_missing(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def _optional_step(raw: Any) -> Optional[int | float]:
    step = to_number(raw)
    if math.isfinite(step) and step != DEFAULT_STEP:
        return whole_number(step)
    return None


def _positive_dimension(raw: Any, field: str) -> float:
    if _is_missing(raw):
        raise MissingRequiredField(field, f"{field} is required and must be > 0")
    value = finite_or_none(raw)
    if value is None or value <= 0:
        raise OutOfRangeValue(field, f"{field} is required and must be > 0")
    return value


def validate_required(params: RenderJobParams) -> RequiredFields:
    job_id = coerce_str(params.job_id)
    if not job_id:
        raise MissingRequiredField("job_id", "job_id is required")

    document_id = coerce_str(params.document_id)
    if not document_id:
        raise MissingRequiredField("documentId", "documentId is required")

    w = _positive_dimension(params.object_width_mm, "object_mm.w")
    h = _positive_dimension(params.object_height_mm, "object_mm.h")

    cut_margin_mm = to_number(params.object_cut_margin_mm)
    if not (math.isfinite(cut_margin_mm) and cut_margin_mm >= 0):
        cut_margin_mm = 0.0

    object_mm = ObjectPlacementMm(
        w=w,
        h=h,
        x_mm=finite_or_none(params.object_x_mm),
        y_mm=finite_or_none(params.object_y_mm),
        alignment=coerce_enum(params.object_alignment, ALIGNMENTS, DEFAULT_ALIGNMENT),
        rotation_deg=finite_or_default(params.object_rotation_deg, 0.0),
        keep_proportions=coerce_bool(params.object_keep_proportions),
        cut_margin_mm=cut_margin_mm,
    )
    return RequiredFields(job_id=job_id, document_id=document_id, object_mm=object_mm)


def validate_single_series(params: RenderJobParams) -> SeriesConfig:
    start = coerce_str(params.series_start, strip=False)
    if not start:
        raise MissingRequiredField("series.start", "series.start is required")

    count = to_number(params.series_count)
    if not (math.isfinite(count) and count > 0):
        cls = MissingRequiredField if _is_missing(params.series_count) else OutOfRangeValue
        raise cls("series.count", "series.count is required and must be > 0")
    if not count.is_integer():
        raise OutOfRangeValue("series.count", "series.count must be a whole number")

    x_mm = finite_or_none(params.series_x_mm)
    y_mm = finite_or_none(params.series_y_mm)
    if x_mm is None or y_mm is None:
        field = "series.x_mm" if x_mm is None else "series.y_mm"
        raise MissingRequiredField(field, "series requires object_mm coordinates (missing seriesXMm/seriesYMm)")

    font_family = coerce_str(params.series_font_family, strip=False)
    if not font_family:
        raise MissingRequiredField("series.font_family", "series.font_family is required")

    font_size_mm = to_number(params.series_font_size_mm)
    if not (math.isfinite(font_size_mm) and font_size_mm > 0):
        cls = MissingRequiredField if _is_missing(params.series_font_size_mm) else OutOfRangeValue
        raise cls("series.font_size_mm", "series.font_size_mm must be a number > 0")

    letter_spacing_mm = to_number(params.series_letter_spacing_mm)
    if not math.isfinite(letter_spacing_mm):
        cls = MissingRequiredField if params.series_letter_spacing_mm is None else OutOfRangeValue
        raise cls("series.letter_spacing_mm", "series.letter_spacing_mm must be a number")

    rotation_deg = to_number(params.series_rotation_deg)
    if not math.isfinite(rotation_deg):
        cls = MissingRequiredField if params.series_rotation_deg is None else OutOfRangeValue
        raise cls("series.rotation_deg", "series.rotation_deg must be a number")

    color = coerce_str(params.series_color)
    if not color:
        raise MissingRequiredField("series.color", "series.color is required")

    per_letter = positive_finite_list(params.per_letter_font_size_mm)

    return SeriesConfig(
        start=start,
        count=int(count),
        font_family=font_family,
        font_size_mm=font_size_mm,
        per_letter_font_size_mm=per_letter or None,
        x_mm=x_mm,
        y_mm=y_mm,
        letter_spacing_mm=letter_spacing_mm,
        rotation_deg=rotation_deg,
        color=color,
        step=_optional_step(params.series_step),
    )


def _series_entry(item: Any) -> Optional[SeriesConfig]:
    start = coerce_str(_item_get(item, "start"), strip=False)
    count = to_number(_item_get(item, "count"))
    font_family = coerce_str(_item_get(item, "fontFamily"), strip=False)
    font_size_mm = to_number(_item_get(item, "fontSizeMm"))
    x_mm = to_number(_item_get(item, "xMm"))
    y_mm = to_number(_item_get(item, "yMm"))
    letter_spacing_mm = to_number(_item_get(item, "letterSpacingMm"))
    rotation_deg = to_number(_item_get(item, "rotationDeg"))
    color = coerce_str(_item_get(item, "color"))

    if not (start and font_family and color):
        return None
    if not (math.isfinite(count) and count > 0 and count.is_integer()):
        return None
    if not (math.isfinite(font_size_mm) and font_size_mm > 0):
        return None
    if not all(math.isfinite(v) for v in (x_mm, y_mm, letter_spacing_mm, rotation_deg)):
        return None

    per_letter = positive_finite_list(_item_get(item, "perLetterFontSizeMm"))
    return SeriesConfig(
        start=start,
        count=int(count),
        font_family=font_family,
        font_size_mm=font_size_mm,
        per_letter_font_size_mm=per_letter or None,
        x_mm=x_mm,
        y_mm=y_mm,
        letter_spacing_mm=letter_spacing_mm,
        rotation_deg=rotation_deg,
        color=color,
        step=_optional_step(_item_get(item, "step")),
    )


def filter_series_list(raw: Any) -> list[SeriesConfig]:
    if not isinstance(raw, (list, tuple)):
        return []
    return [s for s in (_series_entry(item) for item in raw) if s is not None]


def filter_custom_fonts(raw: Any) -> list[CustomFont]:
    if not isinstance(raw, (list, tuple)):
        return []
    out: list[CustomFont] = []
    for item in raw:
        family = coerce_str(_item_get(item, "family"), strip=False)
        data_url = coerce_str(_item_get(item, "dataUrl"), strip=False)
        if not family or not data_url:
            continue
        out.append(CustomFont(family=family, data_url=data_url, mime=coerce_str(_item_get(item, "mime"), strip=False)))
    return out


def filter_raster_overlays(raw: Any) -> list[RasterOverlayConfig]:
    if not isinstance(raw, (list, tuple)):
        return []
    out: list[RasterOverlayConfig] = []
    for item in raw:
        data_url = coerce_str(_item_get(item, "dataUrl"), strip=False)
        x_mm = to_number(_item_get(item, "xMm"))
        y_mm = to_number(_item_get(item, "yMm"))
        w_mm = to_number(_item_get(item, "wMm"))
        h_mm = to_number(_item_get(item, "hMm"))
        rotation_deg = to_number(_item_get(item, "rotationDeg"))
        if not data_url:
            continue
        if not all(math.isfinite(v) for v in (x_mm, y_mm, w_mm, h_mm, rotation_deg)):
            continue
        if w_mm <= 0 or h_mm <= 0:
            continue
        out.append(
            RasterOverlayConfig(
                data_url=data_url,
                mime=coerce_str(_item_get(item, "mime"), strip=False),
                x_mm=x_mm,
                y_mm=y_mm,
                w_mm=w_mm,
                h_mm=h_mm,
                rotation_deg=rotation_deg,
            )
        )
    return out


def filter_svg_overlays(raw: Any) -> list[SvgOverlayConfig]:
    if not isinstance(raw, (list, tuple)):
        return []
    out: list[SvgOverlayConfig] = []
    for item in raw:
        x_mm = to_number(_item_get(item, "xMm"))
        y_mm = to_number(_item_get(item, "yMm"))
        scale = to_number(_item_get(item, "scale"))
        rotation_deg = to_number(_item_get(item, "rotationDeg"))
        svg_s3_key = coerce_str(_item_get(item, "svgS3Key"), strip=False)
        if not svg_s3_key:
            continue
        if not all(math.isfinite(v) for v in (x_mm, y_mm, scale, rotation_deg)):
            continue
        if scale <= 0:
            continue
        out.append(SvgOverlayConfig(x_mm=x_mm, y_mm=y_mm, scale=scale, rotation_deg=rotation_deg, svg_s3_key=svg_s3_key))
    return out


def build_render_payload(params: RenderJobParams | Mapping[str, Any]) -> RenderJobRequest:
    # Required fields raise; malformed optional items are dropped. A non-empty
    # series_list also fills `series` with its first entry for older consumers.
    if not isinstance(params, RenderJobParams):
        params = RenderJobParams.model_validate(dict(params))

    required = validate_required(params)

    series_list = filter_series_list(params.series_list)
    if series_list:
        series = series_list[0]
    else:
        series = validate_single_series(params)

    custom_fonts = filter_custom_fonts(params.custom_fonts)
    overlays: list[OverlayConfig] = [*filter_raster_overlays(params.overlays), *filter_svg_overlays(params.svg_overlays)]

    return RenderJobRequest(
        job_id=required.job_id,
        svg_s3_key=svg_s3_key_for_document(required.document_id),
        custom_fonts=custom_fonts or None,
        overlays=overlays or None,
        object_mm=required.object_mm,
        series=series,
        series_list=series_list or None,
    )

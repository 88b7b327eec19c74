from typing import Any, Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel


class RenderJobParams(BaseModel):
    # Untyped on purpose: coercion happens in build_render_payload.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore", frozen=True)

    job_id: Any = None
    document_id: Any = None

    object_width_mm: Any = None
    object_height_mm: Any = None
    object_x_mm: Any = None
    object_y_mm: Any = None
    object_alignment: Any = None
    object_rotation_deg: Any = None
    object_keep_proportions: Any = None
    object_cut_margin_mm: Any = None

    series_start: Any = None
    series_count: Any = None
    series_x_mm: Any = None
    series_y_mm: Any = None
    series_font_family: Any = None
    series_font_size_mm: Any = None
    per_letter_font_size_mm: Any = None
    series_letter_spacing_mm: Any = None
    series_rotation_deg: Any = None
    series_color: Any = None
    series_step: Any = None

    series_list: Any = None
    custom_fonts: Any = None
    overlays: Any = None
    svg_overlays: Any = None


class ObjectPlacementMm(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    w: float
    h: float
    x_mm: float | None = None
    y_mm: float | None = None
    alignment: Literal["left", "center", "right"] = "center"
    rotation_deg: float = 0.0
    keep_proportions: bool = False
    cut_margin_mm: float = 0.0


class SeriesConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    start: str
    count: int
    font_family: str
    font_size_mm: float
    per_letter_font_size_mm: list[float] | None = None
    anchor_space: Literal["object_mm"] = "object_mm"
    x_mm: float
    y_mm: float
    letter_spacing_mm: float
    rotation_deg: float
    color: str
    step: int | float | None = None

    @property
    def increment(self) -> int | float:
        return 1 if self.step is None else self.step


class CustomFont(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    family: str
    data_url: str
    mime: str


class RasterOverlayConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    data_url: str
    mime: str
    x_mm: float
    y_mm: float
    w_mm: float
    h_mm: float
    rotation_deg: float


class SvgOverlayConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["svg"] = "svg"
    x_mm: float
    y_mm: float
    scale: float
    rotation_deg: float
    svg_s3_key: str


OverlayConfig = RasterOverlayConfig | SvgOverlayConfig


class RenderJobRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    job_id: str
    svg_s3_key: str
    custom_fonts: list[CustomFont] | None = None
    overlays: list[OverlayConfig] | None = None
    object_mm: ObjectPlacementMm
    series: SeriesConfig
    series_list: list[SeriesConfig] | None = None

    def to_wire(self) -> dict[str, Any]:
        out = self.model_dump(exclude_none=True)
        # Auto-positioned objects are sent as explicit nulls.
        out["object_mm"] = self.object_mm.model_dump()
        return out


class RenderJobResult(BaseModel):
    job_id: str
    pdf_s3_key: str
    engine_metrics: dict[str, Any] | None = None


class SeriesRange(BaseModel):
    start: str
    end: str
    count: int
    step: int | float = 1


class JobSubmission(BaseModel):
    job_id: str
    pdf_s3_key: str
    payload_sha256: str
    series: list[SeriesRange]
    engine_metrics: dict[str, Any] | None = None

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, ClassVar, Dict, Optional, Type, Union

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EventKind(str, Enum):
    PERFORMANCE = "performance"
    SEO = "seo"
    FORM = "form"
    USER = "user"


DEVICE_CLASSES = frozenset({"mobile", "tablet", "desktop", "unknown"})


class EventIn(BaseModel):
    # Wire format is camelCase (tracking script); snake_case column names work too.
    # Unknown keys are ignored, missing ones are stored as NULL.
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    kind: ClassVar[EventKind]

    def to_row(self) -> dict:
        return self.model_dump()


def _scalar_to_text(v: Any) -> Any:
    # Campos de texto opacos: cualquier escalar JSON se guarda como texto.
    # Objetos y listas siguen sin ser válidos.
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, (int, float)):
        return str(v)
    return v


OpaqueText = Annotated[Optional[str], BeforeValidator(_scalar_to_text)]


def _normalize_device_type(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip().lower()
    return v if v in DEVICE_CLASSES else "unknown"


DeviceClass = Annotated[Optional[str], BeforeValidator(_scalar_to_text), AfterValidator(_normalize_device_type)]


class PerformanceEventIn(EventIn):
    kind: ClassVar[EventKind] = EventKind.PERFORMANCE

    page_url: OpaqueText = None
    load_time: Optional[float] = Field(default=None, ge=0)
    fcp: Optional[float] = Field(default=None, ge=0)
    lcp: Optional[float] = Field(default=None, ge=0)
    cls: Optional[float] = Field(default=None, ge=0)
    fid: Optional[float] = Field(default=None, ge=0)
    ttfb: Optional[float] = Field(default=None, ge=0)
    dom_ready: Optional[float] = Field(default=None, ge=0)
    device_type: DeviceClass = None


class SeoEventIn(EventIn):
    kind: ClassVar[EventKind] = EventKind.SEO

    page_url: OpaqueText = None
    title: OpaqueText = None
    meta_description: OpaqueText = None
    h1_count: Optional[int] = Field(default=None, ge=0)
    lighthouse_score: Optional[float] = Field(default=None, ge=0, le=100)
    images_without_alt: Optional[int] = Field(default=None, ge=0)
    internal_links: Optional[int] = Field(default=None, ge=0)
    external_links: Optional[int] = Field(default=None, ge=0)


class FormEventIn(EventIn):
    kind: ClassVar[EventKind] = EventKind.FORM

    form_type: OpaqueText = None
    page_url: OpaqueText = None
    referrer: OpaqueText = None
    device_type: DeviceClass = None
    conversion_source: OpaqueText = None


class UserEventIn(EventIn):
    kind: ClassVar[EventKind] = EventKind.USER

    session_id: OpaqueText = None
    page_url: OpaqueText = None
    referrer: OpaqueText = None
    device_type: DeviceClass = None
    screen_resolution: OpaqueText = None
    user_agent: OpaqueText = None
    time_on_page: Optional[float] = Field(default=None, ge=0)


TrackedEvent = Union[PerformanceEventIn, SeoEventIn, FormEventIn, UserEventIn]

EVENT_MODELS: Dict[EventKind, Type[EventIn]] = {
    EventKind.PERFORMANCE: PerformanceEventIn,
    EventKind.SEO: SeoEventIn,
    EventKind.FORM: FormEventIn,
    EventKind.USER: UserEventIn,
}


class TrackResult(BaseModel):
    success: bool = True
    message: str = "Data tracked successfully"


class PerformanceStats(BaseModel):
    total: int
    avg_load_time: Optional[float] = None


class FormStats(BaseModel):
    total: int


class UserStats(BaseModel):
    unique_sessions: int


class DashboardStats(BaseModel):
    performance: PerformanceStats
    forms: FormStats
    users: UserStats


class DashboardSummary(BaseModel):
    timestamp: datetime
    stats: DashboardStats


class HealthOut(BaseModel):
    status: str
    service: str
    version: str
    timestamp: datetime
    database: str

"""근무 관련 Pydantic 요청/응답 스키마 정의.

Shift Pydantic request/response schema definitions.
Covers shift CRUD, publishing, copying a week forward and shift templates.
Every mutation response carries the advisory conflict for the resulting
shift; conflicts never block a write.
"""

import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from app.engine import clock
from app.schemas.scheduling import ConflictResult, ShiftData


def _check_time(value: str | None) -> str | None:
    if value is not None:
        clock.parse_time(value)
    return value


class ShiftCreate(BaseModel):
    """근무 생성 요청 스키마.

    Shift creation request schema. ``hours`` is never accepted; it is
    derived from the times.

    Attributes:
        employee_id: 담당 직원 UUID (Assigned employee)
        date: 근무 날짜 (Calendar day)
        start_time: 시작 시각 HH:MM (Start time)
        end_time: 종료 시각 HH:MM (End time, after start on the same day)
    """

    employee_id: UUID
    date: datetime.date
    start_time: str
    end_time: str

    _validate_times = field_validator("start_time", "end_time")(_check_time)

    @model_validator(mode="after")
    def _check_order(self) -> "ShiftCreate":
        if clock.parse_time(self.start_time) >= clock.parse_time(self.end_time):
            raise ValueError(
                f"start_time {self.start_time} must be before end_time {self.end_time}"
            )
        return self


class ShiftUpdate(BaseModel):
    """근무 수정 요청 스키마 (부분 업데이트).

    Any change resets the shift to draft. The merged start/end order is
    checked by the service once the stored values are known.
    """

    employee_id: UUID | None = None
    date: datetime.date | None = None
    start_time: str | None = None
    end_time: str | None = None

    _validate_times = field_validator("start_time", "end_time")(_check_time)


class ShiftResponse(ShiftData):
    """근무 응답 스키마 — engine shift plus its store."""

    store_id: str


class ShiftMutationResponse(BaseModel):
    """근무 변경 응답 — 저장된 근무와 권고 충돌."""

    shift: ShiftResponse
    conflict: ConflictResult


class ShiftConflict(BaseModel):
    shift_id: str
    conflict: ConflictResult


class PublishRequest(BaseModel):
    """근무 게시 요청 스키마.

    Publishes the store's draft shifts in an inclusive date range, or only
    ``shift_ids`` when given. With ``require_clean`` nothing is published
    if any selected shift has a conflict.
    """

    date_from: datetime.date
    date_to: datetime.date
    shift_ids: list[UUID] | None = None
    require_clean: bool = False

    @model_validator(mode="after")
    def _check_range(self) -> "PublishRequest":
        if self.date_to < self.date_from:
            raise ValueError("date_to must not be before date_from")
        return self


class PublishResponse(BaseModel):
    published: bool
    published_count: int
    shift_ids: list[str] = Field(default_factory=list)
    conflicts: list[ShiftConflict] = Field(default_factory=list)


class CopyWeekRequest(BaseModel):
    """주간 근무 복사 요청 — copies the ISO week containing ``week_start``
    onto the following week as drafts. Identical shifts already present in
    the target week are skipped."""

    week_start: datetime.date


class CopyWeekResponse(BaseModel):
    """복사 결과 — created drafts and the advisory conflicts among them."""

    target_week_start: datetime.date
    created: list[ShiftResponse]
    conflicts: list[ShiftConflict] = Field(default_factory=list)
    skipped_count: int


# --- 근무 템플릿 (Shift templates) ---


class TemplateEntry(BaseModel):
    """템플릿 근무 한 건.

    One shift of a template. ``day_offset`` counts days from the week's
    Monday (0 = Monday, 6 = Sunday).
    """

    employee_id: UUID
    day_offset: int = Field(ge=0, le=6)
    start_time: str
    end_time: str

    _validate_times = field_validator("start_time", "end_time")(_check_time)

    @model_validator(mode="after")
    def _check_order(self) -> "TemplateEntry":
        if clock.parse_time(self.start_time) >= clock.parse_time(self.end_time):
            raise ValueError(
                f"start_time {self.start_time} must be before end_time {self.end_time}"
            )
        return self


class ShiftTemplateCreate(BaseModel):
    """근무 템플릿 저장 요청 스키마.

    Either list the ``entries`` explicitly, or give ``week_start`` to
    capture the store's shifts of that ISO week. Exactly one is required.

    Attributes:
        name: 템플릿 이름, 매장 내 고유 (Template name, unique per store)
        entries: 템플릿 근무 목록 (Explicit entries)
        week_start: 이 날짜가 속한 주를 템플릿으로 저장 (Week to capture)
    """

    name: str = Field(min_length=1, max_length=255)
    entries: list[TemplateEntry] | None = None
    week_start: datetime.date | None = None

    @model_validator(mode="after")
    def _check_source(self) -> "ShiftTemplateCreate":
        if (self.entries is None) == (self.week_start is None):
            raise ValueError("Provide exactly one of entries or week_start")
        return self


class ShiftTemplateResponse(BaseModel):
    id: str
    store_id: str
    name: str
    entries: list[TemplateEntry]
    created_at: datetime.datetime | None = None


class ApplyTemplateRequest(BaseModel):
    """템플릿 적용 요청 — stamps the template onto the ISO week containing
    ``week_start`` as drafts."""

    week_start: datetime.date


class ApplyTemplateResponse(BaseModel):
    """적용 결과 — 생성된 초안, 권고 충돌, 건너뛴 수.

    ``skipped_count`` counts entries identical to a shift already in the
    week and entries whose employee no longer exists.
    """

    template_id: str
    target_week_start: datetime.date
    created: list[ShiftResponse]
    conflicts: list[ShiftConflict] = Field(default_factory=list)
    skipped_count: int

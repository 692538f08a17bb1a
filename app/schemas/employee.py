"""직원 관련 Pydantic 요청/응답 스키마 정의.

Employee Pydantic request/response schema definitions.
Unavailable windows reuse the engine ``UnavailableTime`` type.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from app.schemas.scheduling import UnavailableTime


class EmployeeCreate(BaseModel):
    """직원 생성 요청 스키마.

    Employee creation request schema.

    Attributes:
        name: 이름 (Full name)
        weekly_limit: 주간 근무 한도(시간), 0이면 매장 상한만 적용
                      (Personal weekly limit in hours; 0 = store cap only)
        color: 타임라인 바 색상 (Bar color, optional)
        unavailable_times: 반복 근무 불가 시간 (Recurring unavailable windows)
    """

    name: str = Field(min_length=1, max_length=255)
    weekly_limit: float = Field(default=0, ge=0, le=168)
    color: str | None = Field(default=None, max_length=20)
    unavailable_times: list[UnavailableTime] = Field(default_factory=list)


class EmployeeUpdate(BaseModel):
    """직원 수정 요청 스키마 (부분 업데이트).

    ``unavailable_times`` replaces the whole list when provided.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    weekly_limit: float | None = Field(default=None, ge=0, le=168)
    color: str | None = Field(default=None, max_length=20)
    is_active: bool | None = None
    unavailable_times: list[UnavailableTime] | None = None


class EmployeeResponse(BaseModel):
    """직원 응답 스키마."""

    id: str  # 직원 UUID 문자열 (Employee UUID as string)
    store_id: str  # 소속 매장 UUID (Home store UUID)
    name: str
    weekly_limit: float
    color: str | None
    is_active: bool
    unavailable_times: list[UnavailableTime]
    created_at: datetime

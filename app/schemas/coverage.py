"""커버리지 분석 Pydantic 응답 스키마.

Coverage analysis response schemas.
"""

from datetime import date

from pydantic import BaseModel, Field

from app.schemas.scheduling import CoverageProblem, EmployeeWeeklyHours


class CoverageResponse(BaseModel):
    """기간 커버리지 분석 결과.

    Problems are listed per day in date order; ``counts`` tallies them by
    type for badge display.
    """

    store_id: str
    date_from: date
    date_to: date
    problems: list[CoverageProblem] = Field(default_factory=list)
    counts: dict[str, int] = Field(default_factory=dict)


class WeeklyHoursResponse(BaseModel):
    store_id: str
    week_start: date
    week_end: date
    employees: list[EmployeeWeeklyHours] = Field(default_factory=list)

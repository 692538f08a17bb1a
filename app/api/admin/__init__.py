"""관리자 API 라우터 패키지 — 모든 관리자 엔드포인트 통합.

Admin API Router package — Aggregates all admin-facing endpoints
into a single router for inclusion in the FastAPI application.

Included routers (Store setup):
    - stores: 매장, 요일별 운영 스케줄, 운영 예외, 공휴일 (Stores and opening hours)
    - labor_law: 노동시간 기준 (Daily overtime / weekly cap per store)
    - employees: 직원 및 근무 불가 시간 (Employees and unavailability)

Included routers (Scheduling board):
    - shifts: 근무 CRUD, 게시, 주간 복사 (Shifts, publish, copy week)
    - shift_templates: 근무 템플릿 저장/적용 (Save and apply weekly shift templates)
    - gestures: 근무 바 드래그/리사이즈 (Shift-bar drag/resize gestures)
    - timeline: 시각/픽셀 변환 (Time <-> pixel projection)
    - coverage: 커버리지 분석 및 주간 시간 요약 (Coverage analysis, weekly hours)
"""

from fastapi import APIRouter

# 매장 설정 라우터 임포트 — Store setup routers
from app.api.admin.stores import router as stores_router
from app.api.admin.labor_law import router as labor_law_router
from app.api.admin.employees import router as employees_router

# 스케줄 보드 라우터 임포트 — Scheduling board routers
from app.api.admin.shifts import router as shifts_router
from app.api.admin.shift_templates import router as shift_templates_router
from app.api.admin.gestures import router as gestures_router
from app.api.admin.timeline import router as timeline_router
from app.api.admin.coverage import router as coverage_router

admin_router: APIRouter = APIRouter()

# ---------------------------------------------------------------------------
# 매장 설정 라우터 등록 — Register store setup routers
# ---------------------------------------------------------------------------
admin_router.include_router(stores_router, prefix="/stores", tags=["Stores"])
# 노동시간 기준: /stores/{store_id}/labor-law (nested under stores)
admin_router.include_router(labor_law_router, tags=["Labor Law"])
# 직원: /stores/{store_id}/employees (nested under stores)
admin_router.include_router(employees_router, tags=["Employees"])

# ---------------------------------------------------------------------------
# 스케줄 보드 라우터 등록 — Register scheduling board routers
# ---------------------------------------------------------------------------
admin_router.include_router(shifts_router, tags=["Shifts"])
admin_router.include_router(shift_templates_router, tags=["Shift Templates"])
admin_router.include_router(gestures_router, tags=["Gestures"])
admin_router.include_router(timeline_router, prefix="/timeline", tags=["Timeline"])
admin_router.include_router(coverage_router, tags=["Coverage"])

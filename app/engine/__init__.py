"""스케줄링 엔진 패키지 — 순수 계산 계층 (I/O 없음).

Scheduling engine package — Pure computation layer with no I/O.

Modules:
    clock: 시각 계산 (ClockMath — parse/format/round/duration)
    timeline: 시각 <-> 픽셀 변환 (TimelineProjector)
    interaction: 드래그/리사이즈 상태 머신 (ShiftInteractionController)
    conflicts: 근무 충돌 검사 (ConflictValidator)
    coverage: 커버리지 분석 (CoverageAnalyzer)
    store_hours: 날짜별 유효 운영시간 결정 (Effective store day resolution)
"""

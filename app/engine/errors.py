"""스케줄링 엔진 예외 모듈.

Scheduling engine exceptions.
These are programmer/input errors raised by the pure engine and surfaced
immediately to the caller. Advisory conflicts are NOT exceptions; they are
returned as ``ConflictResult`` values.
"""


class SchedulingError(Exception):
    """엔진 예외의 공통 부모 — Base class for all engine errors."""


class FormatError(SchedulingError, ValueError):
    """잘못된 시각 문자열 — Malformed ``HH:MM`` time string or minute value."""


class ConfigurationError(SchedulingError, ValueError):
    """타임라인 기하 설정 오류 — Degenerate timeline geometry."""


class GestureStateError(SchedulingError):
    """제스처 상태 전이 오류 — Gesture event not valid in the current state.

    Raised when a gesture is started while another is active, or when an
    update/commit arrives while the controller is idle.
    """

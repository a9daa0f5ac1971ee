"""
领域异常 - 由 main.create_app 中注册的处理器转换为 HTTP 响应
"""


class HairCoachError(Exception):
    """所有领域异常的基类"""


class InvalidWeekday(HairCoachError, ValueError):
    def __init__(self, weekday):
        self.weekday = weekday
        super().__init__(f"Unrecognized weekday name: {weekday!r}")


class PersistenceError(HairCoachError):
    """文档写入失败，可由调用方重试"""


class StreakConflictError(PersistenceError):
    pass


class PlanGenerationError(HairCoachError):
    def __init__(self, message: str, status_code: int = None):
        self.status_code = status_code
        super().__init__(message)


class PlanValidationError(PlanGenerationError):
    """远程返回的计划不符合预期结构"""


class RegenerationPreconditionError(HairCoachError):
    pass

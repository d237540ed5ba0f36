class ScheduleError(Exception):
    """Base exception for schedule errors"""
    pass


class ScheduleNotFoundError(ScheduleError):
    """Requested day or week tracking does not exist"""
    pass


class InvalidScheduleError(ScheduleError):
    """Schedule document or update payload failed validation"""
    pass

from .time_controller import TimeController
from .time_service_manager import TimeServiceManager

__all__ = [
    "TimeController",
    "TimeServiceManager",
]

from .due_service import DueCardService
from .scheduler_service import SchedulerService

__all__ = ['DueCardService', 'SchedulerService']

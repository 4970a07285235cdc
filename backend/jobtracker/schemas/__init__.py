from jobtracker.schemas.analytics import DashboardMetricsOut
from jobtracker.schemas.application import (
    ApplicationCreate,
    ApplicationEvent,
    ApplicationStatsOut,
    CurrentStatus,
    EventAppended,
    EventCreate,
    JobApplication,
    JobBoardRef,
    MilestoneDatesUpdate,
    WorkflowRef,
)
from jobtracker.schemas.status import EventTypeOut, StatusOut

__all__ = [
    "ApplicationCreate",
    "ApplicationEvent",
    "ApplicationStatsOut",
    "CurrentStatus",
    "DashboardMetricsOut",
    "EventAppended",
    "EventCreate",
    "JobApplication",
    "JobBoardRef",
    "MilestoneDatesUpdate",
    "WorkflowRef",
    "StatusOut",
    "EventTypeOut",
]

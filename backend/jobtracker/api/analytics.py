from __future__ import annotations

from fastapi import APIRouter, Depends

from jobtracker.dependencies import get_application_service, get_current_user_id
from jobtracker.schemas.analytics import DashboardMetricsOut
from jobtracker.services.applications import ApplicationService


router = APIRouter()


@router.get("/dashboard", response_model=DashboardMetricsOut)
def dashboard(
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
) -> DashboardMetricsOut:
    return DashboardMetricsOut.model_validate(service.dashboard_metrics(user_id))

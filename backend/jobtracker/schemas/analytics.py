from __future__ import annotations

from pydantic import Field

from jobtracker.schemas.application import CamelModel


class MonthlyOverview(CamelModel):
    applications_this_month: int = Field(alias="applicationsThisMonth")
    applications_last_month: int = Field(alias="applicationsLastMonth")
    trend_vs_previous_month: float = Field(alias="trendVsPreviousMonth")
    daily_average: float = Field(alias="dailyAverage")


class StageConversion(CamelModel):
    from_status_id: str = Field(alias="fromStatusId")
    from_status_name: str = Field(alias="fromStatusName")
    to_status_id: str = Field(alias="toStatusId")
    to_status_name: str = Field(alias="toStatusName")
    total: int
    converted: int
    conversion_rate: float = Field(alias="conversionRate")


class StatusCount(CamelModel):
    status_id: str = Field(alias="statusId")
    status_name: str = Field(alias="statusName")
    count: int


class PipelineHealth(CamelModel):
    by_status: list[StatusCount] = Field(alias="byStatus")
    days_since_last_application: int = Field(alias="daysSinceLastApplication")


class JobBoardPerformance(CamelModel):
    name: str
    response_rate: float = Field(alias="responseRate")


class PerformanceInsights(CamelModel):
    top_job_board: JobBoardPerformance = Field(alias="topJobBoard")


class DashboardMetricsOut(CamelModel):
    total_applications: int = Field(alias="totalApplications")
    monthly_overview: MonthlyOverview = Field(alias="monthlyOverview")
    conversion_rates: list[StageConversion] = Field(alias="conversionRates")
    pipeline_health: PipelineHealth = Field(alias="pipelineHealth")
    performance_insights: PerformanceInsights = Field(alias="performanceInsights")

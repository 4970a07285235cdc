from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
OPTIONAL_DATE_PATTERN = r"^(\d{4}-\d{2}-\d{2})?$"

ApplicationType = Literal["cold", "warm"]
RoleType = Literal["manager", "engineer"]
LocationType = Literal["on-site", "hybrid", "remote"]


class CamelModel(BaseModel):
    class Config:
        populate_by_name = True
        from_attributes = True


class JobBoardRef(CamelModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)


class WorkflowRef(CamelModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)


class CurrentStatus(CamelModel):
    id: str
    name: str
    event_id: str | None = Field(default=None, alias="eventId")


class ApplicationEvent(CamelModel):
    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: str | None = None
    date: str


class JobApplication(CamelModel):
    id: str
    user_id: str = Field(alias="userId", min_length=1)
    company_name: str = Field(alias="companyName", min_length=1)
    role_name: str = Field(alias="roleName", min_length=1)
    job_posting_url: str | None = Field(default=None, alias="jobPostingUrl")
    notes: str | None = None
    job_board: JobBoardRef = Field(alias="jobBoard")
    workflow: WorkflowRef
    application_type: ApplicationType = Field(alias="applicationType")
    role_type: RoleType = Field(alias="roleType")
    location_type: LocationType = Field(alias="locationType")
    applied_date: str | None = Field(default=None, alias="appliedDate")
    phone_screen_date: str | None = Field(default=None, alias="phoneScreenDate")
    round1_date: str | None = Field(default=None, alias="round1Date")
    round2_date: str | None = Field(default=None, alias="round2Date")
    accepted_date: str | None = Field(default=None, alias="acceptedDate")
    declined_date: str | None = Field(default=None, alias="declinedDate")
    events: list[ApplicationEvent] = Field(default_factory=list)
    current_status: CurrentStatus = Field(alias="currentStatus")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    version: int = 1


class EventCreate(CamelModel):
    id: str | None = Field(default=None, min_length=1)
    title: str = Field(min_length=1)
    description: str | None = None
    date: str = Field(pattern=DATE_PATTERN)


class ApplicationCreate(CamelModel):
    company_name: str = Field(alias="companyName", min_length=1)
    role_name: str = Field(alias="roleName", min_length=1)
    job_posting_url: str | None = Field(default=None, alias="jobPostingUrl")
    notes: str | None = None
    job_board: JobBoardRef = Field(alias="jobBoard")
    workflow: WorkflowRef
    application_type: ApplicationType = Field(alias="applicationType")
    role_type: RoleType = Field(alias="roleType")
    location_type: LocationType = Field(alias="locationType")
    applied_date: str | None = Field(default=None, alias="appliedDate", pattern=OPTIONAL_DATE_PATTERN)
    phone_screen_date: str | None = Field(default=None, alias="phoneScreenDate", pattern=OPTIONAL_DATE_PATTERN)
    round1_date: str | None = Field(default=None, alias="round1Date", pattern=OPTIONAL_DATE_PATTERN)
    round2_date: str | None = Field(default=None, alias="round2Date", pattern=OPTIONAL_DATE_PATTERN)
    accepted_date: str | None = Field(default=None, alias="acceptedDate", pattern=OPTIONAL_DATE_PATTERN)
    declined_date: str | None = Field(default=None, alias="declinedDate", pattern=OPTIONAL_DATE_PATTERN)
    events: list[EventCreate] = Field(default_factory=list)
    current_status: CurrentStatus | None = Field(default=None, alias="currentStatus")


class MilestoneDatesUpdate(CamelModel):
    applied_date: str | None = Field(default=None, alias="appliedDate", pattern=OPTIONAL_DATE_PATTERN)
    phone_screen_date: str | None = Field(default=None, alias="phoneScreenDate", pattern=OPTIONAL_DATE_PATTERN)
    round1_date: str | None = Field(default=None, alias="round1Date", pattern=OPTIONAL_DATE_PATTERN)
    round2_date: str | None = Field(default=None, alias="round2Date", pattern=OPTIONAL_DATE_PATTERN)
    accepted_date: str | None = Field(default=None, alias="acceptedDate", pattern=OPTIONAL_DATE_PATTERN)
    declined_date: str | None = Field(default=None, alias="declinedDate", pattern=OPTIONAL_DATE_PATTERN)
    event_id: str | None = Field(default=None, alias="eventId")

    class Config:
        populate_by_name = True
        extra = "forbid"


class EventAppended(CamelModel):
    application: JobApplication
    event: ApplicationEvent


class ApplicationStatsOut(BaseModel):
    total: int = 0
    not_applied: int = 0
    applied: int = 0
    phone_screen: int = 0
    round_1: int = 0
    round_2: int = 0
    accepted: int = 0
    declined: int = 0

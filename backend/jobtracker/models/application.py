from __future__ import annotations

from sqlalchemy import Column, DateTime, Index, Integer, String, Text
from sqlalchemy.types import JSON

from jobtracker.database import Base


class ApplicationRow(Base):
    __tablename__ = "applications"
    __table_args__ = (Index("idx_applications_user_created", "user_id", "created_at"),)

    id = Column(String(64), primary_key=True)
    user_id = Column(String(128), nullable=False, index=True)
    company_name = Column(String(255), nullable=False)
    role_name = Column(String(255), nullable=False)
    job_posting_url = Column(String(1000))
    notes = Column(Text)
    job_board = Column(JSON, nullable=False)
    workflow = Column(JSON, nullable=False)
    application_type = Column(String(20), nullable=False)
    role_type = Column(String(20), nullable=False)
    location_type = Column(String(20), nullable=False)
    # Milestone dates stay opaque strings; they may arrive encrypted.
    applied_date = Column(String(512))
    phone_screen_date = Column(String(512))
    round1_date = Column(String(512))
    round2_date = Column(String(512))
    accepted_date = Column(String(512))
    declined_date = Column(String(512))
    events = Column(JSON, nullable=False, default=list)
    current_status = Column(JSON, nullable=False)
    current_status_id = Column(String(64), index=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
    version = Column(Integer, nullable=False, default=1)

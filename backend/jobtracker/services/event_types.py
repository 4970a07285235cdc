from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EventType:
    id: str
    name: str
    description: str


_EVENT_TYPES: tuple[EventType, ...] = (
    EventType("application_submitted", "Application Submitted", "Job application was submitted"),
    EventType("application_viewed", "Application Viewed", "Employer viewed your application"),
    EventType("follow_up_sent", "Follow-up Sent", "Sent follow-up message about application status"),
    EventType("email_received", "Email Received", "Received email from employer"),
    EventType("phone_screen_scheduled", "Phone Screen Scheduled", "Phone screening interview was scheduled"),
    EventType("phone_screen_completed", "Phone Screen Completed", "Phone screening interview was completed"),
    EventType("interview_scheduled", "Interview Scheduled", "In-person or video interview was scheduled"),
    EventType("interview_completed", "Interview Completed", "Interview was completed"),
    EventType("panel_interview_scheduled", "Panel Interview Scheduled", "Panel interview was scheduled"),
    EventType("panel_interview_completed", "Panel Interview Completed", "Panel interview was completed"),
    EventType("final_interview_scheduled", "Final Interview Scheduled", "Final round interview was scheduled"),
    EventType("final_interview_completed", "Final Interview Completed", "Final round interview was completed"),
    EventType("coding_challenge_assigned", "Coding Challenge Assigned", "Technical coding challenge was assigned"),
    EventType("coding_challenge_submitted", "Coding Challenge Submitted", "Technical coding challenge was submitted"),
    EventType("take_home_project_assigned", "Take-home Project Assigned", "Take-home project was assigned"),
    EventType("take_home_project_submitted", "Take-home Project Submitted", "Take-home project was submitted"),
    EventType("technical_assessment_scheduled", "Technical Assessment Scheduled", "Technical assessment was scheduled"),
    EventType("technical_assessment_completed", "Technical Assessment Completed", "Technical assessment was completed"),
    EventType("presentation_scheduled", "Presentation Scheduled", "Presentation to the team was scheduled"),
    EventType("presentation_completed", "Presentation Completed", "Presentation was completed"),
    EventType("offer_received", "Job Offer Received", "Job offer was received"),
    EventType("offer_accepted", "Job Offer Accepted", "Job offer was accepted"),
    EventType("offer_declined", "Job Offer Declined", "Job offer was declined"),
    EventType("offer_negotiated", "Offer Negotiated", "Negotiated terms of job offer"),
    EventType("counteroffer_received", "Counteroffer Received", "Employer provided counteroffer"),
    EventType("counteroffer_made", "Counteroffer Made", "Made counteroffer to employer"),
    EventType("rejected_by_employer", "Rejected by Employer", "Application was rejected by employer"),
    EventType("withdrew_application", "Withdrew Application", "Withdrew application from consideration"),
    EventType("reference_check_requested", "Reference Check Requested", "Employer requested references"),
    EventType("reference_check_completed", "Reference Check Completed", "Reference check was completed"),
    EventType("background_check_initiated", "Background Check Initiated", "Background check process was started"),
    EventType("background_check_completed", "Background Check Completed", "Background check was completed"),
    EventType("start_date_confirmed", "Start Date Confirmed", "Employment start date was confirmed"),
)


def get_all_event_types() -> tuple[EventType, ...]:
    return _EVENT_TYPES


def get_event_type_by_id(event_type_id: str) -> EventType | None:
    for event_type in _EVENT_TYPES:
        if event_type.id == event_type_id:
            return event_type
    return None

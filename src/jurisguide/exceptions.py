"""Exceptions raised at the boundaries of the adaptation core."""


class JurisGuideError(Exception):
    """Base class for JurisGuide errors."""


class EventSinkError(JurisGuideError):
    """The caller-supplied mediation event sink failed to record an event."""

    def __init__(self, case_id: str, message: str):
        super().__init__(f"Failed to record event for mediation case {case_id}: {message}")
        self.case_id = case_id

"""Mediation conversation monitoring."""

from .escalation import (
    EscalationRiskDetector,
    MediationEventSink,
    build_assessment_event,
    create_escalation_detector,
    detect_escalation_risk,
    record_escalation_assessment,
)

__all__ = [
    "EscalationRiskDetector",
    "MediationEventSink",
    "build_assessment_event",
    "create_escalation_detector",
    "detect_escalation_risk",
    "record_escalation_assessment",
]

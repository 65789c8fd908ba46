"""Escalation risk detection for mediation conversations.

Scoring is a pure function of the case timeline. Recording the result on the
timeline is the caller's job; ``record_escalation_assessment`` hands the
event to a caller-supplied sink.
"""

from types import MappingProxyType
from typing import Any, Mapping, Optional, Protocol, Sequence, Tuple

from jurisguide.config import settings
from jurisguide.core.models import (
    EscalationAssessment,
    EscalationFindings,
    MediationCase,
    MediationEventDraft,
    MediationTimelineEvent,
    RiskLevel,
    TimelineEventType,
)
from jurisguide.exceptions import EventSinkError
from jurisguide.utils.logging import get_logger

logger = get_logger(__name__)

HOSTILE_KEYWORDS: Tuple[str, ...] = (
    "angry",
    "frustrated",
    "unfair",
    "refuse",
    "demand",
    "threat",
)

# Strictly-greater-than thresholds: (hostile events, rapid exchanges).
HIGH_RISK_THRESHOLDS = (3, 5)
MEDIUM_RISK_THRESHOLDS = (1, 2)

RISK_GUIDANCE: Mapping[RiskLevel, Tuple[Tuple[str, ...], Tuple[str, ...]]] = MappingProxyType({
    RiskLevel.HIGH: (
        (
            "High frequency of hostile language detected",
            "Rapid message exchanges indicating tension",
        ),
        (
            "Consider introducing cooling-off period",
            "Suggest professional mediator intervention",
        ),
    ),
    RiskLevel.MEDIUM: (
        (
            "Some hostile language detected",
            "Increased communication frequency",
        ),
        (
            "Encourage respectful communication",
            "Focus on common interests",
        ),
    ),
    RiskLevel.LOW: (
        (),
        (
            "Continue current mediation approach",
            "Monitor for any changes in tone",
        ),
    ),
})

AI_MEDIATOR_PARTY = "ai_mediator"
ASSESSMENT_METADATA_TYPE = "escalation_assessment"


class MediationEventSink(Protocol):
    """Event log capability supplied by the caller."""

    async def add_mediation_event(self, case_id: str, event: MediationEventDraft) -> Any:
        ...


def is_hostile(event: MediationTimelineEvent) -> bool:
    content = event.content.lower()
    return any(keyword in content for keyword in HOSTILE_KEYWORDS)


class EscalationRiskDetector:
    """Heuristic hostility and tempo scanner over a mediation timeline."""

    def __init__(
        self,
        window_size: Optional[int] = None,
        rapid_exchange_threshold_ms: Optional[int] = None
    ):
        self.logger = logger.bind(component="escalation_risk_detector")
        if window_size is None:
            window_size = settings.escalation_window_size
        if rapid_exchange_threshold_ms is None:
            rapid_exchange_threshold_ms = settings.rapid_exchange_threshold_ms

        if window_size <= 0:
            raise ValueError(f"window_size must be positive, got {window_size}")
        if rapid_exchange_threshold_ms <= 0:
            raise ValueError(
                f"rapid_exchange_threshold_ms must be positive, got {rapid_exchange_threshold_ms}"
            )

        self.window_size = window_size
        self.rapid_exchange_threshold_ms = rapid_exchange_threshold_ms

    def analyze_timeline(self, timeline: Sequence[MediationTimelineEvent]) -> EscalationFindings:
        """
        Count hostile events and rapid exchanges in the most recent window.

        Consecutive pairs are compared by position, regardless of party.
        """
        recent = list(timeline)[-self.window_size:]

        hostile_count = sum(1 for event in recent if is_hostile(event))
        rapid_exchange_count = sum(
            1
            for previous, current in zip(recent, recent[1:])
            if (current.timestamp - previous.timestamp).total_seconds() * 1000
            < self.rapid_exchange_threshold_ms
        )

        return EscalationFindings(
            hostile_count=hostile_count,
            rapid_exchange_count=rapid_exchange_count,
            events_analyzed=len(recent),
        )

    def classify(self, findings: EscalationFindings) -> RiskLevel:
        for level, (hostile_limit, rapid_limit) in (
            (RiskLevel.HIGH, HIGH_RISK_THRESHOLDS),
            (RiskLevel.MEDIUM, MEDIUM_RISK_THRESHOLDS),
        ):
            if (findings.hostile_count > hostile_limit
                    or findings.rapid_exchange_count > rapid_limit):
                return level
        return RiskLevel.LOW

    def assess(self, case: MediationCase) -> EscalationAssessment:
        """
        Assess the escalation risk of a mediation case.

        Args:
            case: Mediation case; only its timeline is read

        Returns:
            Risk level with its fixed factors and recommendations
        """
        findings = self.analyze_timeline(case.timeline)
        risk_level = self.classify(findings)
        factors, recommendations = RISK_GUIDANCE[risk_level]

        self.logger.info(
            "Escalation risk assessed",
            case_id=case.id,
            risk_level=risk_level.value,
            hostile_count=findings.hostile_count,
            rapid_exchange_count=findings.rapid_exchange_count,
            events_analyzed=findings.events_analyzed,
        )

        return EscalationAssessment(
            risk_level=risk_level,
            factors=list(factors),
            recommendations=list(recommendations),
        )


def build_assessment_event(assessment: EscalationAssessment) -> MediationEventDraft:
    """Build the timeline event that records an assessment."""
    return MediationEventDraft(
        type=TimelineEventType.MESSAGE,
        content=f"Escalation Risk Assessment: {assessment.risk_level.value} risk detected",
        party=AI_MEDIATOR_PARTY,
        metadata={
            "type": ASSESSMENT_METADATA_TYPE,
            "riskLevel": assessment.risk_level.value,
            "factors": list(assessment.factors),
            "recommendations": list(assessment.recommendations),
        },
    )


def create_escalation_detector(
    window_size: Optional[int] = None,
    rapid_exchange_threshold_ms: Optional[int] = None
) -> EscalationRiskDetector:
    """Factory function to create an escalation risk detector."""
    return EscalationRiskDetector(
        window_size=window_size,
        rapid_exchange_threshold_ms=rapid_exchange_threshold_ms,
    )


def detect_escalation_risk(case: MediationCase) -> EscalationAssessment:
    return create_escalation_detector().assess(case)


async def record_escalation_assessment(
    case: MediationCase,
    sink: MediationEventSink,
    detector: Optional[EscalationRiskDetector] = None
) -> EscalationAssessment:
    """
    Assess a case and append the assessment to its timeline through ``sink``.

    Args:
        case: Mediation case to assess
        sink: Event log that records the assessment event
        detector: Detector to use; a default one is created if omitted

    Returns:
        The assessment that was recorded

    Raises:
        EventSinkError: If the sink fails to record the event
    """
    detector = detector or create_escalation_detector()
    assessment = detector.assess(case)
    event = build_assessment_event(assessment)

    try:
        await sink.add_mediation_event(case.id, event)
    except Exception as e:
        logger.error(
            "Failed to record escalation assessment",
            case_id=case.id,
            risk_level=assessment.risk_level.value,
            error=str(e),
        )
        raise EventSinkError(case.id, str(e)) from e

    return assessment

"""Core data models."""

from .models import (
    AdaptationContext,
    AdaptationMetadata,
    AdaptedGuidance,
    CommunicationContext,
    CommunicationMode,
    CommunicationStyle,
    ConflictResolution,
    CulturalAdaptation,
    CulturalProfile,
    DecisionMaking,
    EscalationAssessment,
    EscalationFindings,
    GuidanceStep,
    LegalCategory,
    LegalGuidance,
    LegalReference,
    Level,
    MediationCase,
    MediationEventDraft,
    MediationTimelineEvent,
    Resource,
    ResourceType,
    RiskLevel,
    StyleAdaptation,
    StyleExample,
    Structure,
    TimelineEventType,
    TimeOrientation,
    Tone,
    Urgency,
    UserPreference,
    ValidationReport,
    Vocabulary,
)

__all__ = [
    "AdaptationContext",
    "AdaptationMetadata",
    "AdaptedGuidance",
    "CommunicationContext",
    "CommunicationMode",
    "CommunicationStyle",
    "ConflictResolution",
    "CulturalAdaptation",
    "CulturalProfile",
    "DecisionMaking",
    "EscalationAssessment",
    "EscalationFindings",
    "GuidanceStep",
    "LegalCategory",
    "LegalGuidance",
    "LegalReference",
    "Level",
    "MediationCase",
    "MediationEventDraft",
    "MediationTimelineEvent",
    "Resource",
    "ResourceType",
    "RiskLevel",
    "StyleAdaptation",
    "StyleExample",
    "Structure",
    "TimelineEventType",
    "TimeOrientation",
    "Tone",
    "Urgency",
    "UserPreference",
    "ValidationReport",
    "Vocabulary",
]

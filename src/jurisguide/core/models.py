"""Core data models for the JurisGuide cultural adaptation core."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class JurisGuideModel(BaseModel):
    """Base model: snake_case attributes, camelCase wire names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class FrozenModel(JurisGuideModel):
    """Base model for values that must not change after construction."""

    model_config = ConfigDict(frozen=True)


def _plain_value(value: Any) -> Any:
    # Enum members hash by name, so lookups keyed by plain strings need the value.
    if isinstance(value, Enum):
        return value.value
    return value


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class CommunicationMode(str, Enum):
    """How a cultural background prefers information to be delivered."""
    DIRECT = "direct"
    INDIRECT = "indirect"
    FORMAL = "formal"
    CASUAL = "casual"


class DecisionMaking(str, Enum):
    """Who takes part in a decision."""
    INDIVIDUAL = "individual"
    COLLECTIVE = "collective"
    HIERARCHICAL = "hierarchical"


class ConflictResolution(str, Enum):
    """Preferred way of resolving a dispute."""
    CONFRONTATIONAL = "confrontational"
    MEDIATION = "mediation"
    AVOIDANCE = "avoidance"


class TimeOrientation(str, Enum):
    """Attitude toward schedules and deadlines."""
    LINEAR = "linear"
    FLEXIBLE = "flexible"
    RELATIONSHIP_BASED = "relationship-based"


class Level(str, Enum):
    """Three-step intensity scale."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Urgency(str, Enum):
    """Urgency of a legal request."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class LegalCategory(str, Enum):
    """Legal categories known to the guidance pipeline."""
    CONTRACT_DISPUTE = "contract_dispute"
    EMPLOYMENT_LAW = "employment_law"
    FAMILY_LAW = "family_law"
    CRIMINAL_LAW = "criminal_law"
    IMMIGRATION_LAW = "immigration_law"
    INTELLECTUAL_PROPERTY = "intellectual_property"
    REAL_ESTATE = "real_estate"
    PERSONAL_INJURY = "personal_injury"
    BUSINESS_LAW = "business_law"
    TAX_LAW = "tax_law"
    OTHER = "other"


class ResourceType(str, Enum):
    """Kind of resource attached to a guidance step."""
    DOCUMENT = "document"
    LINK = "link"
    CONTACT = "contact"


class Tone(str, Enum):
    FORMAL = "formal"
    CASUAL = "casual"
    DIPLOMATIC = "diplomatic"
    DIRECT = "direct"


class Vocabulary(str, Enum):
    SIMPLE = "simple"
    TECHNICAL = "technical"
    MIXED = "mixed"


class Structure(str, Enum):
    LINEAR = "linear"
    CIRCULAR = "circular"
    HIERARCHICAL = "hierarchical"


class UserPreference(str, Enum):
    """Register the requester asked for."""
    FORMAL = "formal"
    CASUAL = "casual"


class RiskLevel(str, Enum):
    """Escalation risk tiers."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TimelineEventType(str, Enum):
    """Kinds of mediation timeline events."""
    MESSAGE = "message"
    DOCUMENT = "document"
    PROPOSAL = "proposal"
    AGREEMENT = "agreement"


# ---------------------------------------------------------------------------
# Cultural analysis
# ---------------------------------------------------------------------------

class CulturalProfile(FrozenModel):
    """Fixed attribute tuple describing a cultural background."""
    background: str = Field(..., description="Background label the profile is keyed by")
    communication_style: CommunicationMode = Field(..., description="Preferred communication style")
    decision_making: DecisionMaking = Field(..., description="Decision-making pattern")
    conflict_resolution: ConflictResolution = Field(..., description="Conflict resolution preference")
    time_orientation: TimeOrientation = Field(..., description="Time orientation")
    authority_respect: Level = Field(..., description="Respect for authority")
    family_involvement: Level = Field(..., description="Family involvement in legal matters")


class AdaptationContext(FrozenModel):
    """Request-time parameters driving cultural rule selection."""
    user_background: str = Field(..., description="Cultural background label")
    legal_category: str = Field(LegalCategory.OTHER.value, description="Legal category of the request")
    jurisdiction: List[str] = Field(default_factory=list, description="Applicable jurisdictions")
    language: str = Field("en", description="Requester language code")
    urgency: str = Field(Urgency.MEDIUM.value, description="low, medium, high or critical")

    @field_validator("legal_category", "urgency", mode="before")
    @classmethod
    def _enum_to_value(cls, value: Any) -> Any:
        return _plain_value(value)


class CulturalAdaptation(FrozenModel):
    """Derived adaptation record; never persisted."""
    communication_adjustments: List[str] = Field(default_factory=list)
    process_modifications: List[str] = Field(default_factory=list)
    sensitivity_warnings: List[str] = Field(default_factory=list)
    recommended_approach: str = Field("", description="Recommended approach prose")
    cultural_considerations: List[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Legal guidance documents
# ---------------------------------------------------------------------------

class Resource(FrozenModel):
    """Supporting resource for a guidance step."""
    type: ResourceType = Field(..., description="document, link or contact")
    title: str = Field(..., description="Resource title")
    url: Optional[str] = Field(None, description="Resource URL")
    description: str = Field("", description="Resource description")


class GuidanceStep(FrozenModel):
    """A single ordered step of legal guidance."""
    order: int = Field(..., description="Position of the step")
    title: str = Field(..., description="Step title")
    description: str = Field("", description="What the requester should do")
    timeframe: str = Field("", description="When the step should happen")
    resources: List[Resource] = Field(default_factory=list)
    jurisdiction_specific: bool = Field(False, description="Whether the step depends on jurisdiction")


class LegalReference(FrozenModel):
    """A statute or regulation cited by guidance."""
    statute: str = Field(..., description="Statute or regulation name")
    jurisdiction: str = Field(..., description="Jurisdiction of the statute")
    description: str = Field("", description="Summary of the statute")
    url: Optional[str] = Field(None, description="Reference URL")


class LegalGuidance(FrozenModel):
    """Draft guidance document produced by the upstream generator."""
    query_id: str = Field(..., description="Identifier of the originating legal query")
    steps: List[GuidanceStep] = Field(default_factory=list)
    applicable_laws: List[LegalReference] = Field(default_factory=list)
    cultural_considerations: List[str] = Field(default_factory=list)
    next_actions: List[str] = Field(default_factory=list)
    confidence: float = Field(..., ge=0.0, le=1.0, description="Generator confidence")
    created_at: datetime = Field(..., description="Generation time")


class AdaptationMetadata(FrozenModel):
    """Audit metadata describing an adaptation."""
    adaptations_applied: List[str] = Field(
        default_factory=list, description="Distinct adaptation kinds, in a fixed order"
    )
    cultural_profile: str = Field(..., description="Background label the adaptation used")
    adaptation_confidence: float = Field(..., ge=0.0, le=1.0)


class AdaptedGuidance(LegalGuidance):
    """Culturally adapted guidance that keeps the original for audit."""
    cultural_adaptation: CulturalAdaptation
    original_guidance: LegalGuidance
    adaptation_metadata: AdaptationMetadata


# ---------------------------------------------------------------------------
# Communication style
# ---------------------------------------------------------------------------

class CommunicationContext(FrozenModel):
    """Inputs to communication style selection."""
    cultural_background: str = Field(..., description="Cultural background label")
    legal_category: str = Field(LegalCategory.OTHER.value)
    urgency: str = Field(Urgency.MEDIUM.value)
    language: str = Field("en")
    user_preference: Optional[str] = Field(None, description="formal or casual")
    jurisdiction: List[str] = Field(default_factory=list)

    @field_validator("legal_category", "urgency", "user_preference", mode="before")
    @classmethod
    def _enum_to_value(cls, value: Any) -> Any:
        return _plain_value(value)


class CommunicationStyle(FrozenModel):
    """Tone, vocabulary and structure triple controlling text rewrites."""
    name: str
    tone: Tone
    vocabulary: Vocabulary
    structure: Structure
    cultural_markers: List[str] = Field(default_factory=list)


class StyleExample(FrozenModel):
    """Illustrative before/after rewrite."""
    before: str
    after: str
    explanation: str


class StyleAdaptation(FrozenModel):
    """Selected style plus everything needed to apply it to text."""
    selected_style: CommunicationStyle
    adaptation_rules: List[str] = Field(default_factory=list)
    language_patterns: List[Tuple[str, str]] = Field(
        default_factory=list, description="Ordered (regex pattern, replacement) pairs"
    )
    cultural_nuances: List[str] = Field(default_factory=list)
    examples: List[StyleExample] = Field(default_factory=list)


class ValidationReport(FrozenModel):
    """Advisory findings about a piece of guidance text."""
    is_appropriate: bool
    issues: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Mediation
# ---------------------------------------------------------------------------

class MediationTimelineEvent(FrozenModel):
    """An event recorded on a mediation case timeline."""
    id: Optional[str] = Field(None, description="Event identifier")
    timestamp: datetime = Field(..., description="When the event happened")
    type: TimelineEventType = Field(TimelineEventType.MESSAGE)
    content: str = Field("", description="Event text")
    party: str = Field("", description="Party that produced the event")
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Naive and aware timestamps must stay comparable.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class MediationCase(FrozenModel):
    """The slice of a mediation case the escalation detector reads."""
    id: str = Field(..., description="Mediation case identifier")
    timeline: List[MediationTimelineEvent] = Field(default_factory=list)
    status: Optional[str] = Field(None, description="Case status")


class MediationEventDraft(FrozenModel):
    """A timeline event handed to the event log; the log assigns id and timestamp."""
    type: TimelineEventType = Field(TimelineEventType.MESSAGE)
    content: str
    party: str
    metadata: Dict[str, Any] = Field(default_factory=dict)


class EscalationFindings(FrozenModel):
    """Raw counts gathered from the scanned timeline window."""
    hostile_count: int = Field(0, ge=0)
    rapid_exchange_count: int = Field(0, ge=0)
    events_analyzed: int = Field(0, ge=0)


class EscalationAssessment(FrozenModel):
    """Escalation risk classification for a mediation case."""
    risk_level: RiskLevel
    factors: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)

"""Cultural sensitivity analysis.

Turns a request's cultural context into a ``CulturalAdaptation``: the wording
adjustments, process changes and warnings that later stages act on. Every
rule is a table keyed by a profile attribute, so adding a value is a table
edit.
"""

import re
from typing import Callable, List, Mapping, Tuple

from jurisguide.core.models import (
    AdaptationContext,
    CommunicationMode,
    ConflictResolution,
    CulturalAdaptation,
    CulturalProfile,
    DecisionMaking,
    LegalCategory,
    Level,
    TimeOrientation,
    Urgency,
    ValidationReport,
)
from jurisguide.cultural.profiles import get_cultural_profile
from jurisguide.utils.logging import get_logger

logger = get_logger(__name__)


# Marker statements that downstream stages key on.
FORMAL_MARKER = "Use formal language and titles"
DIPLOMATIC_MARKER = "Use diplomatic language to avoid direct confrontation"
ACCESSIBLE_MARKER = "Use accessible, everyday language"
COLLECTIVE_CONSULTATION_MARKER = "Allow time for family/community consultation"
HIERARCHY_MARKER = "Identify and respect decision-making hierarchy"
FLEXIBLE_SCHEDULING_MARKER = "Allow flexible scheduling for relationship priorities"
RELATIONSHIP_PRECEDENCE_MARKER = "Understand that relationship building may take precedence"

SENSITIVITY_PREFIX = "Cultural sensitivity: "

COMMUNICATION_ADJUSTMENTS: Mapping[CommunicationMode, Tuple[str, ...]] = {
    CommunicationMode.FORMAL: (
        FORMAL_MARKER,
        "Avoid casual expressions or slang",
        "Show respect for authority and hierarchy",
    ),
    CommunicationMode.INDIRECT: (
        DIPLOMATIC_MARKER,
        "Allow time for reflection and consultation",
        "Frame negative information sensitively",
    ),
    CommunicationMode.DIRECT: (
        "Provide clear, straightforward information",
        "Be explicit about expectations and deadlines",
        "Focus on facts and logical arguments",
    ),
    CommunicationMode.CASUAL: (
        ACCESSIBLE_MARKER,
        "Encourage questions and clarification",
        "Maintain friendly but professional tone",
    ),
}

LANGUAGE_ADJUSTMENTS: Tuple[str, ...] = (
    "Provide translations of key legal terms",
    "Explain legal concepts in simple language",
    "Consider cultural differences in legal systems",
)

DECISION_MAKING_MODIFICATIONS: Mapping[DecisionMaking, Tuple[str, ...]] = {
    DecisionMaking.COLLECTIVE: (
        COLLECTIVE_CONSULTATION_MARKER,
        "Provide information that can be shared with advisors",
        "Respect group decision-making processes",
    ),
    DecisionMaking.HIERARCHICAL: (
        HIERARCHY_MARKER,
        "Provide information to appropriate authority figures",
        "Allow for consultation with elders or leaders",
    ),
    DecisionMaking.INDIVIDUAL: (
        "Focus on individual rights and responsibilities",
        "Provide tools for independent decision-making",
        "Respect personal autonomy in choices",
    ),
}

TIME_ORIENTATION_MODIFICATIONS: Mapping[TimeOrientation, Tuple[str, ...]] = {
    TimeOrientation.RELATIONSHIP_BASED: (
        FLEXIBLE_SCHEDULING_MARKER,
        RELATIONSHIP_PRECEDENCE_MARKER,
        "Be patient with process-oriented approaches",
    ),
}

FAMILY_INVOLVEMENT_MODIFICATIONS: Mapping[Level, Tuple[str, ...]] = {
    Level.HIGH: (
        "Consider impact on extended family members",
        "Provide guidance on family communication",
        "Respect family privacy and honor concerns",
    ),
}

CONFLICT_RESOLUTION_WARNINGS: Mapping[ConflictResolution, Tuple[str, ...]] = {
    ConflictResolution.AVOIDANCE: (
        "Client may prefer to avoid direct confrontation",
        "Consider mediation or alternative dispute resolution",
        "Be sensitive to face-saving concerns",
    ),
}

AUTHORITY_RESPECT_WARNINGS: Mapping[Level, Tuple[str, ...]] = {
    Level.HIGH: (
        "Show appropriate respect for legal authorities",
        "Explain the role and importance of legal procedures",
        "Be mindful of power dynamics in legal settings",
    ),
}

ProfileCheck = Callable[[CulturalProfile], bool]

# Category -> (profile condition, warnings).
CATEGORY_WARNINGS: Mapping[str, Tuple[ProfileCheck, Tuple[str, ...]]] = {
    LegalCategory.FAMILY_LAW.value: (
        lambda profile: profile.family_involvement == Level.HIGH,
        (
            "Family law matters may involve extended family considerations",
            "Cultural marriage and family customs may be relevant",
            "Religious or traditional law may influence perspectives",
        ),
    ),
    LegalCategory.IMMIGRATION_LAW.value: (
        lambda profile: True,
        (
            "Immigration status may affect family and community",
            "Cultural identity and integration concerns may be present",
            "Language barriers may complicate legal processes",
        ),
    ),
    LegalCategory.CRIMINAL_LAW.value: (
        lambda profile: profile.authority_respect == Level.HIGH,
        (
            "Cultural attitudes toward law enforcement may vary",
            "Community reputation and honor may be significant concerns",
            "Family shame and social stigma may be factors",
        ),
    ),
}

# First matching entry wins.
RECOMMENDED_APPROACHES: Tuple[Tuple[ProfileCheck, str], ...] = (
    (
        lambda p: p.communication_style == CommunicationMode.INDIRECT
        and p.decision_making == DecisionMaking.COLLECTIVE,
        "Take a patient, consultative approach that allows for group discussion and "
        "consensus-building. Use diplomatic language and provide time for reflection.",
    ),
    (
        lambda p: p.communication_style == CommunicationMode.DIRECT
        and p.decision_making == DecisionMaking.INDIVIDUAL,
        "Provide clear, factual information and empower individual decision-making. "
        "Focus on practical steps and personal rights.",
    ),
    (
        lambda p: p.communication_style == CommunicationMode.FORMAL
        and p.authority_respect == Level.HIGH,
        "Maintain formal, respectful communication while clearly explaining legal "
        "authority and procedures. Show deference to cultural hierarchy.",
    ),
)

GENERIC_APPROACH = (
    "Adapt communication style to be respectful and culturally appropriate while "
    "ensuring clear understanding of legal processes."
)

CRITICAL_RELATIONSHIP_CLAUSE = (
    " Balance urgency with cultural time preferences by explaining the critical "
    "nature while respecting relationship priorities."
)

LANGUAGE_CONSIDERATIONS: Tuple[str, ...] = (
    "Legal terminology may not translate directly",
    "Cultural concepts of law and justice may differ",
    "Interpretation services may be needed for complex matters",
)

UNITED_STATES_CONSIDERATIONS: Tuple[str, ...] = (
    "U.S. legal system may differ significantly from home country",
    "Constitutional rights and common law principles may be unfamiliar",
)

EUROPEAN_UNION_CONSIDERATIONS: Tuple[str, ...] = (
    "EU legal framework emphasizes collective rights and privacy",
    "Multi-jurisdictional complexity may require cultural adaptation",
)

INSENSITIVE_TERMS: Tuple[str, ...] = (
    "you must",
    "required immediately",
    "no choice",
    "mandatory",
    "ignore family",
    "individual decision only",
)

# Whole-text rewrites used by ``adapt_guidance_text``.
FORMAL_TEXT_RULES: Tuple[Tuple[str, str], ...] = (
    (r"\byou\b", "you (or your family)"),
    (r"\bcontact\b", "respectfully contact"),
)

DIPLOMATIC_TEXT_RULES: Tuple[Tuple[str, str], ...] = (
    (r"\bmust\b", "should consider"),
    (r"\brequired\b", "recommended"),
)


def _is_english(language: str) -> bool:
    return language == "en"


def format_bullets(items: List[str], bullet: str = "•") -> str:
    """Render items as one bulleted line each."""
    return "\n".join(f"{bullet} {item}" for item in items)


class CulturalSensitivityAnalyzer:
    """Derives cultural adaptation records from request context."""

    def __init__(self):
        self.logger = logger.bind(component="cultural_sensitivity_analyzer")

    def analyze(self, context: AdaptationContext) -> CulturalAdaptation:
        """
        Analyze cultural context and build adaptation recommendations.

        Args:
            context: Request context; unknown backgrounds use the default profile

        Returns:
            Cultural adaptation record
        """
        profile = get_cultural_profile(context.user_background)

        adaptation = CulturalAdaptation(
            communication_adjustments=self.get_communication_adjustments(profile, context),
            process_modifications=self.get_process_modifications(profile),
            sensitivity_warnings=self.get_sensitivity_warnings(profile, context),
            recommended_approach=self.get_recommended_approach(profile, context),
            cultural_considerations=self.get_cultural_considerations(profile, context),
        )

        self.logger.debug(
            "Cultural context analyzed",
            background=context.user_background,
            profile=profile.background,
            adjustments=len(adaptation.communication_adjustments),
            modifications=len(adaptation.process_modifications),
            warnings=len(adaptation.sensitivity_warnings),
        )

        return adaptation

    def get_communication_adjustments(
        self,
        profile: CulturalProfile,
        context: AdaptationContext
    ) -> List[str]:
        adjustments = list(COMMUNICATION_ADJUSTMENTS.get(profile.communication_style, ()))

        if not _is_english(context.language):
            adjustments.extend(LANGUAGE_ADJUSTMENTS)

        return adjustments

    def get_process_modifications(self, profile: CulturalProfile) -> List[str]:
        modifications = list(DECISION_MAKING_MODIFICATIONS.get(profile.decision_making, ()))
        modifications.extend(TIME_ORIENTATION_MODIFICATIONS.get(profile.time_orientation, ()))
        modifications.extend(FAMILY_INVOLVEMENT_MODIFICATIONS.get(profile.family_involvement, ()))
        return modifications

    def get_sensitivity_warnings(
        self,
        profile: CulturalProfile,
        context: AdaptationContext
    ) -> List[str]:
        warnings = list(CONFLICT_RESOLUTION_WARNINGS.get(profile.conflict_resolution, ()))
        warnings.extend(AUTHORITY_RESPECT_WARNINGS.get(profile.authority_respect, ()))

        category_rule = CATEGORY_WARNINGS.get(context.legal_category)
        if category_rule is not None:
            applies, category_warnings = category_rule
            if applies(profile):
                warnings.extend(category_warnings)

        return warnings

    def get_recommended_approach(
        self,
        profile: CulturalProfile,
        context: AdaptationContext
    ) -> str:
        approach = next(
            (text for matches, text in RECOMMENDED_APPROACHES if matches(profile)),
            GENERIC_APPROACH,
        )

        if (context.urgency == Urgency.CRITICAL.value
                and profile.time_orientation == TimeOrientation.RELATIONSHIP_BASED):
            approach += CRITICAL_RELATIONSHIP_CLAUSE

        return approach

    def get_cultural_considerations(
        self,
        profile: CulturalProfile,
        context: AdaptationContext
    ) -> List[str]:
        considerations = [
            f"Communication style: {profile.communication_style.value}",
            f"Decision-making approach: {profile.decision_making.value}",
            f"Conflict resolution preference: {profile.conflict_resolution.value}",
        ]

        for jurisdiction in context.jurisdiction:
            if jurisdiction == "United States" and profile.background != "American":
                considerations.extend(UNITED_STATES_CONSIDERATIONS)
            elif jurisdiction == "European Union" and "European" not in profile.background:
                considerations.extend(EUROPEAN_UNION_CONSIDERATIONS)

        if not _is_english(context.language):
            considerations.extend(LANGUAGE_CONSIDERATIONS)

        return considerations

    def adapt_guidance_text(self, text: str, adaptation: CulturalAdaptation) -> str:
        """
        Rewrite free-form guidance text and prefix it with the cultural context.

        Args:
            text: Guidance text
            adaptation: Result of ``analyze``

        Returns:
            Text headed by a "Cultural Considerations:" block and the recommended approach
        """
        adapted = text

        if FORMAL_MARKER in adaptation.communication_adjustments:
            for pattern, replacement in FORMAL_TEXT_RULES:
                adapted = re.sub(pattern, replacement, adapted)

        if DIPLOMATIC_MARKER in adaptation.communication_adjustments:
            for pattern, replacement in DIPLOMATIC_TEXT_RULES:
                adapted = re.sub(pattern, replacement, adapted)

        prefix = (
            "Cultural Considerations:\n"
            f"{format_bullets(adaptation.cultural_considerations)}\n\n"
            f"Recommended Approach: {adaptation.recommended_approach}\n\n"
        )
        return prefix + adapted

    def validate(self, text: str, context: AdaptationContext) -> ValidationReport:
        """
        Check guidance text for culturally insensitive phrasing.

        Findings are advisory; an inappropriate result still carries usable text.
        """
        profile = get_cultural_profile(context.user_background)
        lowered = text.lower()
        issues: List[str] = []
        suggestions: List[str] = []

        for term in INSENSITIVE_TERMS:
            if term in lowered:
                issues.append(f'Potentially insensitive language: "{term}"')

                if profile.decision_making == DecisionMaking.COLLECTIVE:
                    suggestions.append("Consider family/community consultation time")
                if profile.communication_style == CommunicationMode.INDIRECT:
                    suggestions.append("Use more diplomatic language")

        if profile.authority_respect == Level.HIGH and "respect" not in lowered:
            suggestions.append("Add language showing respect for legal authorities")

        if profile.family_involvement == Level.HIGH and "family" not in lowered:
            suggestions.append("Consider mentioning family consultation or impact")

        return ValidationReport(
            is_appropriate=not issues,
            issues=issues,
            suggestions=list(dict.fromkeys(suggestions)),
        )


def create_sensitivity_analyzer() -> CulturalSensitivityAnalyzer:
    """Factory function to create a cultural sensitivity analyzer."""
    return CulturalSensitivityAnalyzer()


def analyze_cultural_context(context: AdaptationContext) -> CulturalAdaptation:
    """Analyze ``context`` with a fresh analyzer."""
    return create_sensitivity_analyzer().analyze(context)


def adapt_guidance_for_culture(text: str, adaptation: CulturalAdaptation) -> str:
    return create_sensitivity_analyzer().adapt_guidance_text(text, adaptation)


def validate_cultural_sensitivity(text: str, context: AdaptationContext) -> ValidationReport:
    return create_sensitivity_analyzer().validate(text, context)

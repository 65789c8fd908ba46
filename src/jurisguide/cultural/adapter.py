"""Cultural adaptation of legal guidance documents."""

import re
from typing import List, Optional, Pattern, Tuple

from jurisguide.core.models import (
    AdaptationContext,
    AdaptationMetadata,
    AdaptedGuidance,
    CulturalAdaptation,
    GuidanceStep,
    LegalGuidance,
    Resource,
    ResourceType,
)
from jurisguide.cultural.profiles import is_known_background
from jurisguide.cultural.sensitivity import (
    ACCESSIBLE_MARKER,
    COLLECTIVE_CONSULTATION_MARKER,
    DIPLOMATIC_MARKER,
    FLEXIBLE_SCHEDULING_MARKER,
    FORMAL_MARKER,
    HIERARCHY_MARKER,
    RELATIONSHIP_PRECEDENCE_MARKER,
    SENSITIVITY_PREFIX,
    CulturalSensitivityAnalyzer,
    format_bullets,
)
from jurisguide.utils.logging import get_logger, log_adaptation_context

logger = get_logger(__name__)

RewriteRules = Tuple[Tuple[Pattern[str], str], ...]


def _rules(*pairs: Tuple[str, str], flags: int = 0) -> RewriteRules:
    return tuple((re.compile(pattern, flags), replacement) for pattern, replacement in pairs)


FORMAL_RULES = _rules(
    (r"\bcan't\b", "cannot"),
    (r"\bwon't\b", "will not"),
    (r"\bdon't\b", "do not"),
    (r"\byou should\b", "it is recommended that you"),
    (r"\bcontact\b", "formally contact"),
    (r"\bask\b", "respectfully inquire"),
)

DIPLOMATIC_RULES = _rules(
    (r"\bmust\b", "should consider"),
    (r"\brequired\b", "recommended"),
    (r"\bneed to\b", "may wish to"),
    (r"\bhave to\b", "might consider"),
    (r"\bdemand\b", "respectfully request"),
    (r"\brefuse\b", "politely decline"),
)

ACCESSIBLE_RULES = _rules(
    (r"\bcommence\b", "start"),
    (r"\bterminate\b", "end"),
    (r"\butilize\b", "use"),
    (r"\bfacilitate\b", "help with"),
    (r"\bsubsequent\b", "next"),
    (r"\bprior to\b", "before"),
)

URGENT_WORDING = re.compile(r"immediately|right away|as soon as possible", re.IGNORECASE)
IMMEDIATELY = re.compile(r"immediately", re.IGNORECASE)
HIERARCHY_VERB = re.compile(r"\b(contact|speak)\b", re.IGNORECASE)

CONSULTATION_SUFFIX = (
    " Consider discussing this step with family members or trusted advisors before proceeding."
)
FLEXIBLE_WORDING = "when circumstances allow"
FLEXIBLE_TIMEFRAME = "when family/personal circumstances allow"
CONSULTATION_TIMEFRAME_NOTE = " (allowing time for consultation)"
DECISION_CONSULTATION_NOTE = " (after consulting with family/advisors)"

SCHEDULE_CONSULTATION_ACTION = "Schedule time for family/community consultation"
CONSULT_BEFORE_PROCEEDING_ACTION = "Consult with family/advisors before proceeding"
INTERPRETATION_ACTION = "Arrange for professional interpretation services if needed"

INTERPRETATION_RESOURCE = Resource(
    type=ResourceType.CONTACT,
    title="Language Interpretation Services",
    description="Professional legal interpreters for your language",
    url="https://www.courts.gov/interpretation-services",
)

CULTURAL_LEGAL_AID_RESOURCE = Resource(
    type=ResourceType.LINK,
    title="Cultural Legal Aid Resources",
    description="Legal assistance organizations serving your community",
    url="https://www.legalaid.org/cultural-services",
)

# Labels recorded in adaptation metadata, in reporting order.
COMMUNICATION_ADJUSTMENTS_APPLIED = "Communication style adjustments"
PROCESS_MODIFICATIONS_APPLIED = "Process modifications for cultural preferences"
SENSITIVITY_WARNINGS_APPLIED = "Cultural sensitivity warnings added"
CONSIDERATIONS_APPLIED = "Cultural considerations enhanced"

BASE_CONFIDENCE = 0.5
KNOWN_PROFILE_BONUS = 0.3
PER_ADAPTATION_BONUS = 0.02
MAX_ADAPTATION_BONUS = 0.2


def _apply_rules(text: str, rules: RewriteRules) -> str:
    for pattern, replacement in rules:
        text = pattern.sub(replacement, text)
    return text


def _respect_hierarchy(match: "re.Match[str]") -> str:
    verb = match.group(1)
    adverb = "Respectfully" if verb[0].isupper() else "respectfully"
    return f"{adverb} {verb.lower()} through appropriate channels"


def _needs_interpretation(adaptation: CulturalAdaptation) -> bool:
    return any(
        "translation" in adjustment.lower() or "interpretation" in adjustment.lower()
        for adjustment in adaptation.communication_adjustments
    )


class GuidanceAdaptationEngine:
    """Applies cultural adaptations to legal guidance documents."""

    def __init__(self, analyzer: Optional[CulturalSensitivityAnalyzer] = None):
        self.logger = logger.bind(component="guidance_adaptation_engine")
        self.analyzer = analyzer or CulturalSensitivityAnalyzer()

    def adapt(self, guidance: LegalGuidance, context: AdaptationContext) -> AdaptedGuidance:
        """
        Adapt a guidance document to the requester's cultural context.

        The result is a pure function of ``guidance`` and ``context``. The
        input document is copied for audit and never modified.

        Args:
            guidance: Draft guidance from the upstream generator
            context: Requester's cultural context

        Returns:
            Adapted guidance carrying the original document
        """
        adaptation = self.analyzer.analyze(context)

        steps = [self.adapt_step(step, adaptation) for step in guidance.steps]
        considerations = self.merge_cultural_considerations(
            guidance.cultural_considerations, adaptation
        )
        next_actions = self.adapt_next_actions(guidance.next_actions, adaptation)

        metadata = AdaptationMetadata(
            adaptations_applied=self.get_adaptations_applied(adaptation),
            cultural_profile=context.user_background,
            adaptation_confidence=self.calculate_confidence(context, adaptation),
        )

        adapted = AdaptedGuidance(
            query_id=guidance.query_id,
            steps=steps,
            applicable_laws=list(guidance.applicable_laws),
            cultural_considerations=considerations,
            next_actions=next_actions,
            confidence=guidance.confidence,
            created_at=guidance.created_at,
            cultural_adaptation=adaptation,
            original_guidance=guidance.model_copy(deep=True),
            adaptation_metadata=metadata,
        )

        self.logger.info(
            "Guidance adapted",
            query_id=guidance.query_id,
            steps=len(steps),
            adaptation_confidence=metadata.adaptation_confidence,
            **log_adaptation_context(
                context.user_background, context.legal_category, context.urgency,
                language=context.language,
            )
        )

        return adapted

    def adapt_step(self, step: GuidanceStep, adaptation: CulturalAdaptation) -> GuidanceStep:
        return step.model_copy(update={
            "description": self.adapt_description(step.description, adaptation),
            "timeframe": self.adapt_timeframe(step.timeframe, adaptation),
            "resources": self.add_cultural_resources(step.resources, adaptation),
        })

    def adapt_description(self, description: str, adaptation: CulturalAdaptation) -> str:
        """Rewrite a step description: wording first, then process changes."""
        adjustments = adaptation.communication_adjustments
        modifications = adaptation.process_modifications

        if FORMAL_MARKER in adjustments:
            description = _apply_rules(description, FORMAL_RULES)
        if DIPLOMATIC_MARKER in adjustments:
            description = _apply_rules(description, DIPLOMATIC_RULES)
        if ACCESSIBLE_MARKER in adjustments:
            description = _apply_rules(description, ACCESSIBLE_RULES)

        if COLLECTIVE_CONSULTATION_MARKER in modifications:
            description += CONSULTATION_SUFFIX
        if FLEXIBLE_SCHEDULING_MARKER in modifications:
            description = URGENT_WORDING.sub(FLEXIBLE_WORDING, description)

        return description

    def adapt_timeframe(self, timeframe: str, adaptation: CulturalAdaptation) -> str:
        modifications = adaptation.process_modifications

        if (FLEXIBLE_SCHEDULING_MARKER in modifications
                or RELATIONSHIP_PRECEDENCE_MARKER in modifications):
            if IMMEDIATELY.search(timeframe):
                timeframe = IMMEDIATELY.sub(FLEXIBLE_TIMEFRAME, timeframe)
            elif "within" in timeframe.lower():
                timeframe += CONSULTATION_TIMEFRAME_NOTE

        if FORMAL_MARKER in adaptation.communication_adjustments:
            timeframe = _apply_rules(timeframe, FORMAL_RULES)
        if ACCESSIBLE_MARKER in adaptation.communication_adjustments:
            timeframe = _apply_rules(timeframe, ACCESSIBLE_RULES)

        return timeframe

    def add_cultural_resources(
        self,
        resources: List[Resource],
        adaptation: CulturalAdaptation
    ) -> List[Resource]:
        cultural_resources = list(resources)

        if _needs_interpretation(adaptation):
            cultural_resources.append(INTERPRETATION_RESOURCE)

        if adaptation.cultural_considerations:
            cultural_resources.append(CULTURAL_LEGAL_AID_RESOURCE)

        return cultural_resources

    def merge_cultural_considerations(
        self,
        original: List[str],
        adaptation: CulturalAdaptation
    ) -> List[str]:
        """Merge considerations and prefixed warnings, dropping repeats in first-seen order."""
        merged = list(original)
        merged.extend(adaptation.cultural_considerations)
        merged.extend(f"{SENSITIVITY_PREFIX}{warning}" for warning in adaptation.sensitivity_warnings)
        return list(dict.fromkeys(merged))

    def adapt_next_actions(self, actions: List[str], adaptation: CulturalAdaptation) -> List[str]:
        modifications = adaptation.process_modifications
        collective = COLLECTIVE_CONSULTATION_MARKER in modifications
        hierarchical = HIERARCHY_MARKER in modifications

        adapted_actions = []
        for action in actions:
            lowered = action.lower()
            if collective and ("decide" in lowered or "choose" in lowered):
                action += DECISION_CONSULTATION_NOTE
            if hierarchical:
                action = HIERARCHY_VERB.sub(_respect_hierarchy, action, count=1)
            adapted_actions.append(action)

        if "consultative" in adaptation.recommended_approach:
            adapted_actions.append(SCHEDULE_CONSULTATION_ACTION)
        if collective:
            adapted_actions.append(CONSULT_BEFORE_PROCEEDING_ACTION)
        if _needs_interpretation(adaptation):
            adapted_actions.append(INTERPRETATION_ACTION)

        return adapted_actions

    def get_adaptations_applied(self, adaptation: CulturalAdaptation) -> List[str]:
        applied = []
        if adaptation.communication_adjustments:
            applied.append(COMMUNICATION_ADJUSTMENTS_APPLIED)
        if adaptation.process_modifications:
            applied.append(PROCESS_MODIFICATIONS_APPLIED)
        if adaptation.sensitivity_warnings:
            applied.append(SENSITIVITY_WARNINGS_APPLIED)
        if adaptation.cultural_considerations:
            applied.append(CONSIDERATIONS_APPLIED)
        return applied

    def calculate_confidence(
        self,
        context: AdaptationContext,
        adaptation: CulturalAdaptation
    ) -> float:
        """Score how well the adaptation is backed by known profile data, in [0, 1]."""
        confidence = BASE_CONFIDENCE

        if is_known_background(context.user_background):
            confidence += KNOWN_PROFILE_BONUS

        total_adaptations = (
            len(adaptation.communication_adjustments)
            + len(adaptation.process_modifications)
            + len(adaptation.cultural_considerations)
        )
        confidence += min(MAX_ADAPTATION_BONUS, total_adaptations * PER_ADAPTATION_BONUS)

        return max(0.0, min(1.0, confidence))

    def generate_summary(self, adapted: AdaptedGuidance) -> str:
        """Render a human-readable summary of an adaptation."""
        adaptation = adapted.cultural_adaptation
        metadata = adapted.adaptation_metadata

        sections = [
            f"Cultural Adaptation Summary for {metadata.cultural_profile} Background:",
            f"Recommended Approach: {adaptation.recommended_approach}",
        ]

        if adaptation.communication_adjustments:
            sections.append(
                "Communication Adjustments:\n"
                + format_bullets(adaptation.communication_adjustments)
            )
        if adaptation.process_modifications:
            sections.append(
                "Process Modifications:\n" + format_bullets(adaptation.process_modifications)
            )
        if adaptation.sensitivity_warnings:
            sections.append(
                "Cultural Sensitivity Considerations:\n"
                + format_bullets(adaptation.sensitivity_warnings, bullet="⚠️")
            )

        sections.append(
            f"Adaptation Confidence: {round(metadata.adaptation_confidence * 100)}%\n"
            f"Adaptations Applied: {', '.join(metadata.adaptations_applied)}"
        )

        return "\n\n".join(sections)


def create_guidance_adaptation_engine(
    analyzer: Optional[CulturalSensitivityAnalyzer] = None
) -> GuidanceAdaptationEngine:
    """Factory function to create a guidance adaptation engine."""
    return GuidanceAdaptationEngine(analyzer=analyzer)


def adapt_legal_guidance(guidance: LegalGuidance, context: AdaptationContext) -> AdaptedGuidance:
    """Adapt ``guidance`` for ``context`` with a default engine."""
    return create_guidance_adaptation_engine().adapt(guidance, context)


def generate_adaptation_summary(adapted: AdaptedGuidance) -> str:
    return create_guidance_adaptation_engine().generate_summary(adapted)

"""Communication style selection and text restyling.

Style selection runs as an ordered pipeline of overrides. Each stage copies
the style it receives and changes only what it owns:

1. cultural baseline (background -> style key)
2. user preference (vocabulary only)
3. legal category (tone, or vocabulary and structure)
4. urgency (tone and structure)

A later stage wins over an earlier one for the fields it sets.
"""

import re
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from jurisguide.core.models import (
    CommunicationContext,
    CommunicationMode,
    CommunicationStyle,
    LegalCategory,
    StyleAdaptation,
    StyleExample,
    Structure,
    Tone,
    Urgency,
    UserPreference,
    ValidationReport,
    Vocabulary,
)
from jurisguide.cultural.profiles import get_cultural_profile
from jurisguide.cultural.sensitivity import format_bullets
from jurisguide.utils.logging import get_logger, log_adaptation_context

logger = get_logger(__name__)

LanguagePattern = Tuple[str, str]
StyleOverride = Tuple[Dict[str, Any], str]

COMMUNICATION_STYLES: Mapping[str, CommunicationStyle] = MappingProxyType({
    "formal_respectful": CommunicationStyle(
        name="Formal Respectful",
        tone=Tone.FORMAL,
        vocabulary=Vocabulary.MIXED,
        structure=Structure.HIERARCHICAL,
        cultural_markers=["respect for authority", "hierarchical communication", "formal titles"],
    ),
    "diplomatic_indirect": CommunicationStyle(
        name="Diplomatic Indirect",
        tone=Tone.DIPLOMATIC,
        vocabulary=Vocabulary.SIMPLE,
        structure=Structure.CIRCULAR,
        cultural_markers=["face-saving", "indirect communication", "consensus-building"],
    ),
    "direct_practical": CommunicationStyle(
        name="Direct Practical",
        tone=Tone.DIRECT,
        vocabulary=Vocabulary.TECHNICAL,
        structure=Structure.LINEAR,
        cultural_markers=["efficiency", "individual rights", "straightforward communication"],
    ),
    "accessible_supportive": CommunicationStyle(
        name="Accessible Supportive",
        tone=Tone.CASUAL,
        vocabulary=Vocabulary.SIMPLE,
        structure=Structure.LINEAR,
        cultural_markers=["accessibility", "plain language", "supportive guidance"],
    ),
    "culturally_sensitive": CommunicationStyle(
        name="Culturally Sensitive",
        tone=Tone.DIPLOMATIC,
        vocabulary=Vocabulary.MIXED,
        structure=Structure.CIRCULAR,
        cultural_markers=["cultural awareness", "inclusive language", "community consideration"],
    ),
})

DEFAULT_STYLE_KEY = "accessible_supportive"

BACKGROUND_STYLE_KEYS: Mapping[str, str] = MappingProxyType({
    "Hispanic/Latino": "formal_respectful",
    "Asian": "diplomatic_indirect",
    "African": "culturally_sensitive",
    "Middle Eastern": "formal_respectful",
    "European": "direct_practical",
    "American": "direct_practical",
    "Indigenous": "culturally_sensitive",
})

USER_PREFERENCE_OVERRIDES: Mapping[str, StyleOverride] = MappingProxyType({
    UserPreference.FORMAL.value: ({"vocabulary": Vocabulary.TECHNICAL}, "formal preference"),
    UserPreference.CASUAL.value: ({"vocabulary": Vocabulary.SIMPLE}, "casual preference"),
})

SENSITIVE_CATEGORIES = frozenset({
    LegalCategory.FAMILY_LAW.value,
    LegalCategory.CRIMINAL_LAW.value,
    LegalCategory.IMMIGRATION_LAW.value,
    LegalCategory.PERSONAL_INJURY.value,
})

TECHNICAL_CATEGORIES = frozenset({
    LegalCategory.INTELLECTUAL_PROPERTY.value,
    LegalCategory.BUSINESS_LAW.value,
    LegalCategory.TAX_LAW.value,
})

# Applied in order; every group containing the category contributes.
CATEGORY_OVERRIDES: Tuple[Tuple[frozenset, StyleOverride], ...] = (
    (SENSITIVE_CATEGORIES, ({"tone": Tone.DIPLOMATIC}, "sensitive topic handling")),
    (
        TECHNICAL_CATEGORIES,
        ({"vocabulary": Vocabulary.TECHNICAL, "structure": Structure.LINEAR}, "technical precision"),
    ),
)

URGENCY_OVERRIDES: Mapping[str, StyleOverride] = MappingProxyType({
    Urgency.CRITICAL.value: (
        {"tone": Tone.DIRECT, "structure": Structure.LINEAR},
        "urgent action required",
    ),
    Urgency.LOW.value: (
        {"tone": Tone.DIPLOMATIC, "structure": Structure.CIRCULAR},
        "thoughtful consideration",
    ),
})

TONE_RULES: Mapping[Tone, Tuple[str, ...]] = MappingProxyType({
    Tone.FORMAL: (
        "Use formal titles and respectful language",
        "Avoid contractions and casual expressions",
        "Structure information hierarchically",
    ),
    Tone.DIPLOMATIC: (
        "Use indirect language to avoid confrontation",
        "Frame negative information sensitively",
        "Allow for face-saving alternatives",
    ),
    Tone.DIRECT: (
        "Provide clear, straightforward information",
        "Use active voice and specific instructions",
        "Focus on actionable steps",
    ),
    Tone.CASUAL: (
        "Use accessible, everyday language",
        "Encourage questions and clarification",
        "Maintain friendly but professional tone",
    ),
})

VOCABULARY_RULES: Mapping[Vocabulary, Tuple[str, ...]] = MappingProxyType({
    Vocabulary.SIMPLE: (
        "Explain legal terms in plain language",
        "Use short sentences and common words",
        "Provide definitions for technical terms",
    ),
    Vocabulary.TECHNICAL: (
        "Use precise legal terminology",
        "Include relevant statutes and regulations",
        "Maintain professional legal language",
    ),
    Vocabulary.MIXED: (
        "Balance technical accuracy with accessibility",
        "Explain complex terms when first introduced",
        "Use technical terms consistently",
    ),
})

STRUCTURE_RULES: Mapping[Structure, Tuple[str, ...]] = MappingProxyType({
    Structure.LINEAR: (
        "Present information in logical sequence",
        "Use numbered steps and clear progression",
        "Focus on cause-and-effect relationships",
    ),
    Structure.CIRCULAR: (
        "Provide context before specific instructions",
        "Allow for iterative understanding",
        "Connect information to broader implications",
    ),
    Structure.HIERARCHICAL: (
        "Present most important information first",
        "Organize by authority and precedence",
        "Respect decision-making hierarchy",
    ),
})

FORMAL_PATTERNS: Tuple[LanguagePattern, ...] = (
    (r"\byou should\b", "it is recommended that you"),
    (r"\byou need to\b", "it is necessary for you to"),
    (r"\bcontact\b", "formally contact"),
    (r"\bask\b", "respectfully inquire"),
)

DIPLOMATIC_PATTERNS: Tuple[LanguagePattern, ...] = (
    (r"\bmust\b", "should consider"),
    (r"\brequired\b", "recommended"),
    (r"\bdemand\b", "respectfully request"),
    (r"\brefuse\b", "politely decline"),
)

DIRECT_PATTERNS: Tuple[LanguagePattern, ...] = (
    (r"might consider", "should"),
    (r"\bit may be advisable to\b", "you need to"),
    (r"\bit may be advisable\b", "you need to"),
    (r"\bperhaps\b\s*", ""),
    (r"\bpossibly\b\s*", ""),
)

SIMPLE_VOCABULARY_PATTERNS: Tuple[LanguagePattern, ...] = (
    (r"commence", "start"),
    (r"terminate", "end"),
    (r"utilize", "use"),
    (r"facilitate", "help with"),
    (r"subsequent", "next"),
)

# (applies to style and context, pattern block), in substitution order.
PATTERN_BLOCKS: Tuple[
    Tuple[Callable[[CommunicationStyle, CommunicationContext], bool], Tuple[LanguagePattern, ...]],
    ...
] = (
    (
        lambda style, context: style.tone == Tone.FORMAL
        or context.user_preference == UserPreference.FORMAL.value,
        FORMAL_PATTERNS,
    ),
    (lambda style, context: style.tone == Tone.DIPLOMATIC, DIPLOMATIC_PATTERNS),
    (lambda style, context: style.tone == Tone.DIRECT, DIRECT_PATTERNS),
    (lambda style, context: style.vocabulary == Vocabulary.SIMPLE, SIMPLE_VOCABULARY_PATTERNS),
)

BACKGROUND_NUANCES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "Hispanic/Latino": (
        "Consider family involvement in decision-making",
        "Show respect for elder authority",
        "Use formal titles and respectful address",
    ),
    "Asian": (
        "Avoid direct confrontation or loss of face",
        "Allow time for consensus building",
        "Respect hierarchical communication patterns",
    ),
    "African": (
        "Consider community and extended family impact",
        "Respect oral tradition and storytelling",
        "Value collective decision-making processes",
    ),
    "Middle Eastern": (
        "Consider religious and traditional law perspectives",
        "Respect family honor and reputation concerns",
        "Be mindful of gender role considerations",
    ),
    "Indigenous": (
        "Consider community and extended family impact",
        "Respect traditional governance and elder wisdom",
        "Value collective decision-making and consensus",
        "Honor cultural protocols and traditional law",
    ),
})

LANGUAGE_NUANCES: Tuple[str, ...] = (
    "Provide key legal terms in both languages",
    "Explain concepts that may not translate directly",
    "Consider cultural differences in legal systems",
)

TONE_EXAMPLES: Mapping[Tone, StyleExample] = MappingProxyType({
    Tone.FORMAL: StyleExample(
        before="You need to contact the court immediately.",
        after=(
            "It is respectfully recommended that you formally contact the court "
            "at your earliest convenience."
        ),
        explanation="Formal tone shows respect for legal authority and uses respectful language.",
    ),
    Tone.DIPLOMATIC: StyleExample(
        before="You must refuse their demand.",
        after=(
            "You should consider politely declining their request while exploring "
            "alternative solutions."
        ),
        explanation="Diplomatic language avoids confrontation and suggests face-saving alternatives.",
    ),
    Tone.DIRECT: StyleExample(
        before="It may be advisable to perhaps contact a lawyer when possible.",
        after="Contact a lawyer today.",
        explanation="Direct language states the required action and its timing without hedging.",
    ),
    Tone.CASUAL: StyleExample(
        before="Subsequent to filing, the respondent shall be served.",
        after="After you file, the other side needs to get a copy.",
        explanation="A friendly, everyday register keeps the next step easy to follow.",
    ),
})

SIMPLE_VOCABULARY_EXAMPLE = StyleExample(
    before="You should commence litigation proceedings to facilitate resolution.",
    after="You should start a court case to help solve the problem.",
    explanation="Simple vocabulary makes legal concepts more accessible to non-lawyers.",
)

BACKGROUND_EXAMPLES: Mapping[str, StyleExample] = MappingProxyType({
    "Hispanic/Latino": StyleExample(
        before="Make this decision on your own.",
        after=(
            "Consider discussing this important decision with your family or trusted "
            "advisors before proceeding."
        ),
        explanation="Acknowledges the importance of family consultation in Hispanic/Latino culture.",
    ),
})

INSENSITIVE_PATTERNS: Tuple[str, ...] = (
    "you must",
    "no choice",
    "ignore family",
    "individual decision only",
)

CONTRACTIONS: Tuple[Tuple[str, str], ...] = (
    ("can't", "cannot"),
    ("won't", "will not"),
    ("don't", "do not"),
    ("shouldn't", "should not"),
    ("isn't", "is not"),
)

CONFRONTATIONAL_PHRASES: Tuple[str, ...] = (
    "must refuse",
    "you must reject",
    "demand that",
)


def _override(style: CommunicationStyle, override: Optional[StyleOverride]) -> CommunicationStyle:
    """Copy ``style`` with the override's fields set and its marker appended."""
    if override is None:
        return style
    updates, marker = override
    return style.model_copy(update={
        **updates,
        "cultural_markers": [*style.cultural_markers, marker],
    })


def base_style_for_culture(background: str) -> CommunicationStyle:
    key = BACKGROUND_STYLE_KEYS.get(background, DEFAULT_STYLE_KEY)
    return COMMUNICATION_STYLES[key].model_copy(deep=True)


def apply_user_preference(
    style: CommunicationStyle,
    context: CommunicationContext
) -> CommunicationStyle:
    if context.user_preference is None:
        return style
    return _override(style, USER_PREFERENCE_OVERRIDES.get(context.user_preference))


def apply_category_override(
    style: CommunicationStyle,
    context: CommunicationContext
) -> CommunicationStyle:
    for categories, override in CATEGORY_OVERRIDES:
        if context.legal_category in categories:
            style = _override(style, override)
    return style


def apply_urgency_override(
    style: CommunicationStyle,
    context: CommunicationContext
) -> CommunicationStyle:
    return _override(style, URGENCY_OVERRIDES.get(context.urgency))


# Override order after the cultural baseline; later stages win.
SELECTION_STAGES: Tuple[Callable[[CommunicationStyle, CommunicationContext], CommunicationStyle], ...] = (
    apply_user_preference,
    apply_category_override,
    apply_urgency_override,
)


class CommunicationStyleSelector:
    """Selects a communication style and the text rules that realize it."""

    def __init__(self):
        self.logger = logger.bind(component="communication_style_selector")

    def select(self, context: CommunicationContext) -> StyleAdaptation:
        """
        Select a communication style for the given context.

        Args:
            context: Communication context

        Returns:
            Style adaptation with rules, ordered text patterns, nuances and examples
        """
        style = base_style_for_culture(context.cultural_background)
        for stage in SELECTION_STAGES:
            style = stage(style, context)

        adaptation = StyleAdaptation(
            selected_style=style,
            adaptation_rules=self.generate_adaptation_rules(style),
            language_patterns=self.generate_language_patterns(style, context),
            cultural_nuances=self.generate_cultural_nuances(context),
            examples=self.generate_examples(style, context),
        )

        self.logger.debug(
            "Communication style selected",
            style=style.name,
            tone=style.tone.value,
            vocabulary=style.vocabulary.value,
            structure=style.structure.value,
            **log_adaptation_context(
                context.cultural_background, context.legal_category, context.urgency,
                user_preference=context.user_preference,
            )
        )

        return adaptation

    def generate_adaptation_rules(self, style: CommunicationStyle) -> List[str]:
        rules = list(TONE_RULES[style.tone])
        rules.extend(VOCABULARY_RULES[style.vocabulary])
        rules.extend(STRUCTURE_RULES[style.structure])
        return rules

    def generate_language_patterns(
        self,
        style: CommunicationStyle,
        context: CommunicationContext
    ) -> List[LanguagePattern]:
        patterns: List[LanguagePattern] = []
        for applies, block in PATTERN_BLOCKS:
            if applies(style, context):
                patterns.extend(block)
        return patterns

    def generate_cultural_nuances(self, context: CommunicationContext) -> List[str]:
        nuances = list(BACKGROUND_NUANCES.get(context.cultural_background, ()))
        if context.language != "en":
            nuances.extend(LANGUAGE_NUANCES)
        return nuances

    def generate_examples(
        self,
        style: CommunicationStyle,
        context: CommunicationContext
    ) -> List[StyleExample]:
        examples = [TONE_EXAMPLES[style.tone]]

        if style.vocabulary == Vocabulary.SIMPLE:
            examples.append(SIMPLE_VOCABULARY_EXAMPLE)

        background_example = BACKGROUND_EXAMPLES.get(context.cultural_background)
        if background_example is not None:
            examples.append(background_example)

        return examples

    def apply_to_text(self, text: str, adaptation: StyleAdaptation) -> str:
        """
        Apply a selected style to text.

        Patterns are applied in list order, case-insensitively. Non-empty
        cultural nuances are prepended as a bulleted block.
        """
        adapted = text
        for pattern, replacement in adaptation.language_patterns:
            adapted = re.sub(pattern, replacement, adapted, flags=re.IGNORECASE)

        if adaptation.cultural_nuances:
            adapted = (
                "Cultural Considerations:\n"
                f"{format_bullets(adaptation.cultural_nuances)}\n\n"
                f"{adapted}"
            )

        return adapted

    def validate(self, text: str, context: CommunicationContext) -> ValidationReport:
        """Flag insensitive phrasing and register mismatches. Never raises."""
        lowered = text.lower()
        issues: List[str] = []
        suggestions: List[str] = []

        for phrase in INSENSITIVE_PATTERNS:
            if phrase in lowered:
                issues.append(f'Potentially insensitive language: "{phrase}"')

        if context.user_preference == UserPreference.FORMAL.value:
            found = [(short, full) for short, full in CONTRACTIONS if short in lowered]
            if found:
                issues.append("Informal contractions used with formal preference")
                suggestions.extend(f'Use "{full}" instead of "{short}"' for short, full in found)

        profile = get_cultural_profile(context.cultural_background)
        if (profile.communication_style == CommunicationMode.INDIRECT
                and any(phrase in lowered for phrase in CONFRONTATIONAL_PHRASES)):
            issues.append("Direct confrontational language may be inappropriate")
            suggestions.append('Use more diplomatic language like "politely decline"')

        return ValidationReport(
            is_appropriate=not issues,
            issues=issues,
            suggestions=suggestions,
        )


def create_communication_style_selector() -> CommunicationStyleSelector:
    """Factory function to create a communication style selector."""
    return CommunicationStyleSelector()


def select_communication_style(context: CommunicationContext) -> StyleAdaptation:
    return create_communication_style_selector().select(context)


def apply_style_to_text(text: str, adaptation: StyleAdaptation) -> str:
    return create_communication_style_selector().apply_to_text(text, adaptation)


def validate_style_appropriateness(text: str, context: CommunicationContext) -> ValidationReport:
    return create_communication_style_selector().validate(text, context)

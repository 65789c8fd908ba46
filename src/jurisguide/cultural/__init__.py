"""Cultural and communication adaptation of legal guidance."""

from .adapter import (
    GuidanceAdaptationEngine,
    adapt_legal_guidance,
    create_guidance_adaptation_engine,
    generate_adaptation_summary,
)
from .communication_style import (
    CommunicationStyleSelector,
    apply_style_to_text,
    create_communication_style_selector,
    select_communication_style,
    validate_style_appropriateness,
)
from .profiles import (
    CULTURAL_PROFILES,
    DEFAULT_PROFILE,
    KNOWN_BACKGROUNDS,
    get_cultural_profile,
    is_known_background,
)
from .sensitivity import (
    CulturalSensitivityAnalyzer,
    adapt_guidance_for_culture,
    analyze_cultural_context,
    create_sensitivity_analyzer,
    validate_cultural_sensitivity,
)

__all__ = [
    "GuidanceAdaptationEngine",
    "adapt_legal_guidance",
    "create_guidance_adaptation_engine",
    "generate_adaptation_summary",
    "CommunicationStyleSelector",
    "apply_style_to_text",
    "create_communication_style_selector",
    "select_communication_style",
    "validate_style_appropriateness",
    "CULTURAL_PROFILES",
    "DEFAULT_PROFILE",
    "KNOWN_BACKGROUNDS",
    "get_cultural_profile",
    "is_known_background",
    "CulturalSensitivityAnalyzer",
    "adapt_guidance_for_culture",
    "analyze_cultural_context",
    "create_sensitivity_analyzer",
    "validate_cultural_sensitivity",
]

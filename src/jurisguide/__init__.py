"""
JurisGuide cultural adaptation core.

Deterministically adapts draft legal and mediation guidance to a requester's
cultural background, legal category, language and urgency, selects a matching
communication style, and scores escalation risk in mediation conversations.
"""

__version__ = "0.1.0"

from jurisguide.cultural.adapter import GuidanceAdaptationEngine, adapt_legal_guidance
from jurisguide.cultural.communication_style import (
    CommunicationStyleSelector,
    apply_style_to_text,
    select_communication_style,
)
from jurisguide.cultural.sensitivity import CulturalSensitivityAnalyzer, analyze_cultural_context
from jurisguide.mediation.escalation import EscalationRiskDetector, detect_escalation_risk
from jurisguide.utils.logging import configure_logging

__all__ = [
    "GuidanceAdaptationEngine",
    "adapt_legal_guidance",
    "CommunicationStyleSelector",
    "apply_style_to_text",
    "select_communication_style",
    "CulturalSensitivityAnalyzer",
    "analyze_cultural_context",
    "EscalationRiskDetector",
    "detect_escalation_risk",
    "configure_logging",
]

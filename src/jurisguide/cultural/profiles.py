"""Static registry of cultural profiles.

The registry is built once at import time and exposed read-only. Lookups are
total: an unknown background label resolves to ``DEFAULT_PROFILE``.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

from jurisguide.core.models import (
    CommunicationMode,
    ConflictResolution,
    CulturalProfile,
    DecisionMaking,
    Level,
    TimeOrientation,
)


def _profile(
    background: str,
    communication_style: CommunicationMode,
    decision_making: DecisionMaking,
    conflict_resolution: ConflictResolution,
    time_orientation: TimeOrientation,
    authority_respect: Level,
    family_involvement: Level,
) -> CulturalProfile:
    return CulturalProfile(
        background=background,
        communication_style=communication_style,
        decision_making=decision_making,
        conflict_resolution=conflict_resolution,
        time_orientation=time_orientation,
        authority_respect=authority_respect,
        family_involvement=family_involvement,
    )


DEFAULT_PROFILE = _profile(
    "Unknown",
    CommunicationMode.FORMAL,
    DecisionMaking.INDIVIDUAL,
    ConflictResolution.MEDIATION,
    TimeOrientation.LINEAR,
    Level.MEDIUM,
    Level.MEDIUM,
)

CULTURAL_PROFILES: Mapping[str, CulturalProfile] = MappingProxyType({
    "Hispanic/Latino": _profile(
        "Hispanic/Latino",
        CommunicationMode.FORMAL,
        DecisionMaking.COLLECTIVE,
        ConflictResolution.MEDIATION,
        TimeOrientation.RELATIONSHIP_BASED,
        Level.HIGH,
        Level.HIGH,
    ),
    "Asian": _profile(
        "Asian",
        CommunicationMode.INDIRECT,
        DecisionMaking.HIERARCHICAL,
        ConflictResolution.AVOIDANCE,
        TimeOrientation.RELATIONSHIP_BASED,
        Level.HIGH,
        Level.HIGH,
    ),
    "African": _profile(
        "African",
        CommunicationMode.INDIRECT,
        DecisionMaking.COLLECTIVE,
        ConflictResolution.MEDIATION,
        TimeOrientation.RELATIONSHIP_BASED,
        Level.HIGH,
        Level.HIGH,
    ),
    "Middle Eastern": _profile(
        "Middle Eastern",
        CommunicationMode.FORMAL,
        DecisionMaking.HIERARCHICAL,
        ConflictResolution.MEDIATION,
        TimeOrientation.RELATIONSHIP_BASED,
        Level.HIGH,
        Level.HIGH,
    ),
    "European": _profile(
        "European",
        CommunicationMode.DIRECT,
        DecisionMaking.INDIVIDUAL,
        ConflictResolution.CONFRONTATIONAL,
        TimeOrientation.LINEAR,
        Level.MEDIUM,
        Level.MEDIUM,
    ),
    "American": _profile(
        "American",
        CommunicationMode.DIRECT,
        DecisionMaking.INDIVIDUAL,
        ConflictResolution.CONFRONTATIONAL,
        TimeOrientation.LINEAR,
        Level.LOW,
        Level.LOW,
    ),
    "Indigenous": _profile(
        "Indigenous",
        CommunicationMode.INDIRECT,
        DecisionMaking.COLLECTIVE,
        ConflictResolution.MEDIATION,
        TimeOrientation.RELATIONSHIP_BASED,
        Level.HIGH,
        Level.HIGH,
    ),
})

KNOWN_BACKGROUNDS: Tuple[str, ...] = tuple(CULTURAL_PROFILES)


def get_cultural_profile(background: str) -> CulturalProfile:
    """Return the profile for ``background``, or the default profile."""
    return CULTURAL_PROFILES.get(background, DEFAULT_PROFILE)


def is_known_background(background: str) -> bool:
    return background in CULTURAL_PROFILES

"""Tests for the guidance adaptation engine."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from jurisguide.core.models import (
    AdaptationContext,
    AdaptedGuidance,
    CulturalAdaptation,
    GuidanceStep,
    LegalGuidance,
    LegalReference,
    Resource,
    ResourceType,
)
from jurisguide.cultural.adapter import (
    CONSULT_BEFORE_PROCEEDING_ACTION,
    INTERPRETATION_ACTION,
    SCHEDULE_CONSULTATION_ACTION,
    GuidanceAdaptationEngine,
    adapt_legal_guidance,
    generate_adaptation_summary,
)
from jurisguide.cultural.sensitivity import ACCESSIBLE_MARKER, FLEXIBLE_SCHEDULING_MARKER

CREATED_AT = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


def make_guidance(**overrides) -> LegalGuidance:
    data = dict(
        query_id="test-query-123",
        steps=[
            GuidanceStep(
                order=1,
                title="File Legal Complaint",
                description="You must contact the court immediately and demand action on your case.",
                timeframe="within 24 hours",
                resources=[
                    Resource(
                        type=ResourceType.LINK,
                        title="Court Filing System",
                        description="Online court filing portal",
                        url="https://courts.gov/filing",
                    )
                ],
                jurisdiction_specific=True,
            ),
            GuidanceStep(
                order=2,
                title="Prepare Documentation",
                description="You need to gather all evidence and refuse any settlement offers.",
                timeframe="within 1 week",
            ),
        ],
        applicable_laws=[
            LegalReference(
                statute="Civil Procedure Code Section 123",
                jurisdiction="United States",
                description="Rules for filing complaints",
                url="https://law.gov/civil-procedure",
            )
        ],
        cultural_considerations=["Consider local court procedures"],
        next_actions=["File complaint", "Schedule hearing"],
        confidence=0.85,
        created_at=CREATED_AT,
    )
    data.update(overrides)
    return LegalGuidance(**data)


def make_context(background="Hispanic/Latino", category="family_law", language="es", urgency="medium"):
    return AdaptationContext(
        user_background=background,
        legal_category=category,
        jurisdiction=["United States"],
        language=language,
        urgency=urgency,
    )


class TestGuidanceAdaptationEngine:
    """Test cases for GuidanceAdaptationEngine."""

    @pytest.fixture
    def engine(self):
        return GuidanceAdaptationEngine()

    @pytest.fixture
    def hispanic_result(self, engine):
        return engine.adapt(make_guidance(), make_context())

    def test_formal_collective_step_rewrite(self, hispanic_result):
        step = hispanic_result.steps[0]

        assert step.description == (
            "You must formally contact the court when circumstances allow and demand action "
            "on your case. Consider discussing this step with family members or trusted "
            "advisors before proceeding."
        )
        assert step.timeframe == "within 24 hours (allowing time for consultation)"
        assert step.order == 1
        assert step.title == "File Legal Complaint"
        assert step.jurisdiction_specific is True

    def test_cultural_resources_are_appended(self, hispanic_result):
        first, second = hispanic_result.steps

        assert [r.title for r in first.resources] == [
            "Court Filing System",
            "Language Interpretation Services",
            "Cultural Legal Aid Resources",
        ]
        assert [r.title for r in second.resources] == [
            "Language Interpretation Services",
            "Cultural Legal Aid Resources",
        ]

    def test_english_request_gets_no_interpretation(self, engine):
        result = engine.adapt(make_guidance(), make_context(language="en"))

        titles = [r.title for r in result.steps[1].resources]
        assert titles == ["Cultural Legal Aid Resources"]
        assert INTERPRETATION_ACTION not in result.next_actions

    def test_next_actions_for_collective_non_english_request(self, hispanic_result):
        assert hispanic_result.next_actions == [
            "File complaint",
            "Schedule hearing",
            CONSULT_BEFORE_PROCEEDING_ACTION,
            INTERPRETATION_ACTION,
        ]

    def test_considerations_merge_warnings_with_prefix(self, hispanic_result):
        considerations = hispanic_result.cultural_considerations

        assert considerations[0] == "Consider local court procedures"
        assert "Communication style: formal" in considerations
        assert "Cultural sensitivity: Show appropriate respect for legal authorities" in considerations
        assert len(considerations) == 15

    def test_metadata(self, hispanic_result):
        metadata = hispanic_result.adaptation_metadata

        assert metadata.cultural_profile == "Hispanic/Latino"
        assert metadata.adaptations_applied == [
            "Communication style adjustments",
            "Process modifications for cultural preferences",
            "Cultural sensitivity warnings added",
            "Cultural considerations enhanced",
        ]
        assert metadata.adaptation_confidence == pytest.approx(1.0)

    def test_document_fields_carried_over(self, hispanic_result):
        assert hispanic_result.query_id == "test-query-123"
        assert hispanic_result.confidence == 0.85
        assert hispanic_result.created_at == CREATED_AT
        assert hispanic_result.applicable_laws[0].statute == "Civil Procedure Code Section 123"

    def test_diplomatic_and_flexible_substitutions(self, engine):
        guidance = make_guidance(steps=[
            GuidanceStep(order=1, title="Contact", description="You must contact the court immediately.")
        ])

        result = engine.adapt(guidance, make_context(background="Asian", category="contract_dispute",
                                                     language="en", urgency="high"))

        assert result.steps[0].description == "You should consider contact the court when circumstances allow."

    def test_flexible_scheduling_covers_all_urgent_phrasings(self, engine):
        guidance = make_guidance(steps=[
            GuidanceStep(order=1, title="Respond",
                         description="Reply right away, or As Soon As Possible.",
                         timeframe="Immediately"),
        ])

        result = engine.adapt(guidance, make_context(background="Asian", language="en"))

        assert result.steps[0].description == "Reply when circumstances allow, or when circumstances allow."
        assert result.steps[0].timeframe == "when family/personal circumstances allow"

    def test_linear_profile_keeps_urgent_wording(self, engine):
        guidance = make_guidance(steps=[
            GuidanceStep(order=1, title="File", description="File immediately.", timeframe="within 2 days"),
        ])

        result = engine.adapt(guidance, make_context(background="American", language="en"))

        assert result.steps[0].description == "File immediately."
        assert result.steps[0].timeframe == "within 2 days"

    def test_hierarchical_next_actions(self, engine):
        guidance = make_guidance(next_actions=[
            "Contact the court clerk",
            "Speak with a lawyer",
            "Decide on a settlement",
        ])

        result = engine.adapt(guidance, make_context(background="Asian", language="en"))

        assert result.next_actions == [
            "Respectfully contact through appropriate channels the court clerk",
            "Respectfully speak through appropriate channels with a lawyer",
            "Decide on a settlement",
        ]

    def test_consultative_next_actions(self, engine):
        guidance = make_guidance(next_actions=["Decide whether to settle", "Choose a mediator"])

        result = engine.adapt(guidance, make_context(background="African", language="en"))

        assert result.next_actions == [
            "Decide whether to settle (after consulting with family/advisors)",
            "Choose a mediator (after consulting with family/advisors)",
            SCHEDULE_CONSULTATION_ACTION,
            CONSULT_BEFORE_PROCEEDING_ACTION,
        ]

    def test_accessible_language_rules(self, engine):
        adaptation = CulturalAdaptation(
            communication_adjustments=[ACCESSIBLE_MARKER],
            process_modifications=[FLEXIBLE_SCHEDULING_MARKER],
        )

        description = engine.adapt_description(
            "You may commence filing prior to the hearing.", adaptation
        )
        timeframe = engine.adapt_timeframe("subsequent to the hearing", adaptation)

        assert description == "You may start filing before the hearing."
        assert timeframe == "next to the hearing"

    def test_unknown_background_has_lower_confidence(self, engine):
        result = engine.adapt(make_guidance(), make_context(background="Unlisted", language="en"))

        assert result.adaptation_metadata.adaptation_confidence == pytest.approx(0.7)
        assert result.adaptation_metadata.adaptation_confidence < 0.8
        assert result.adaptation_metadata.cultural_profile == "Unlisted"

    def test_empty_guidance_adapts_to_empty_document(self, engine):
        guidance = LegalGuidance(query_id="empty", confidence=0.0, created_at=CREATED_AT)

        result = engine.adapt(guidance, make_context(language="en"))

        assert result.steps == []
        assert result.applicable_laws == []
        assert isinstance(result.cultural_adaptation, CulturalAdaptation)
        assert result.cultural_adaptation.recommended_approach
        assert CONSULT_BEFORE_PROCEEDING_ACTION in result.next_actions

    def test_input_guidance_is_not_modified(self, engine):
        guidance = make_guidance()
        snapshot = guidance.model_copy(deep=True)

        result = engine.adapt(guidance, make_context())

        assert guidance == snapshot
        assert result.original_guidance == snapshot
        assert result.original_guidance is not guidance
        assert result.original_guidance.steps[0] is not guidance.steps[0]

    def test_adapted_guidance_is_frozen(self, hispanic_result):
        with pytest.raises(ValidationError):
            hispanic_result.confidence = 0.1  # type: ignore[misc]
        with pytest.raises(ValidationError):
            hispanic_result.original_guidance.query_id = "changed"  # type: ignore[misc]

    def test_duplicate_considerations_are_removed(self, engine):
        guidance = make_guidance(cultural_considerations=[
            "Communication style: formal",
            "Cultural sensitivity: Show appropriate respect for legal authorities",
            "Communication style: formal",
        ])

        result = engine.adapt(guidance, make_context())

        considerations = result.cultural_considerations
        assert len(considerations) == len(set(considerations))
        assert considerations[0] == "Communication style: formal"

    def test_adaptation_is_deterministic(self, engine):
        guidance = make_guidance()
        context = make_context()

        first = engine.adapt(guidance, context)
        second = engine.adapt(guidance, context)

        assert first.model_dump_json() == second.model_dump_json()

    def test_wire_format_uses_camel_case(self, hispanic_result):
        data = hispanic_result.model_dump(mode="json", by_alias=True)

        assert data["queryId"] == "test-query-123"
        assert "culturalAdaptation" in data
        assert data["adaptationMetadata"]["adaptationConfidence"] == pytest.approx(1.0)
        assert data["originalGuidance"]["steps"][0]["jurisdictionSpecific"] is True

    def test_module_level_function(self, engine):
        assert adapt_legal_guidance(make_guidance(), make_context()) == engine.adapt(
            make_guidance(), make_context()
        )


class TestAdaptationSummary:
    """Test cases for adaptation summaries."""

    def test_summary_sections(self):
        adapted = adapt_legal_guidance(make_guidance(), make_context())

        summary = generate_adaptation_summary(adapted)

        assert summary.startswith("Cultural Adaptation Summary for Hispanic/Latino Background:")
        assert f"Recommended Approach: {adapted.cultural_adaptation.recommended_approach}" in summary
        assert "Communication Adjustments:\n• Use formal language and titles" in summary
        assert "Process Modifications:\n• Allow time for family/community consultation" in summary
        assert "⚠️ Show appropriate respect for legal authorities" in summary
        assert "Adaptation Confidence: 100%" in summary
        assert summary.endswith(
            "Adaptations Applied: Communication style adjustments, Process modifications for "
            "cultural preferences, Cultural sensitivity warnings added, Cultural considerations enhanced"
        )

    def test_summary_omits_empty_warning_section(self):
        adapted = adapt_legal_guidance(make_guidance(), make_context(background="American", category="other", language="en"))

        summary = generate_adaptation_summary(adapted)

        assert "Cultural Sensitivity Considerations:" not in summary
        assert "Adaptation Confidence: 98%" in summary

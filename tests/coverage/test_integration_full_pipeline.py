"""Integration/Coverage Tests - full pipeline

Scope:
- sticker text -> extraction -> planning -> UI driver -> report
- bundled dictionary and known-feature list
- uncheck gate on a rich sticker vs a sparse one
- semantic tier on top of the fuzzy cascade (fake backend)
- curation log filled across passes
"""

import pytest

from sticker_sync import (
    ActionType,
    CheckboxActionPlanner,
    PlanOptions,
    StickerSyncOrchestrator,
    TextFeatureExtractor,
    UnmatchedFeatureLog,
    load_feature_dictionary,
    plan_checkbox_actions,
)
from sticker_sync.semantic import SemanticEmbedder
from tests.fixtures import CHECKBOX_SNAPSHOTS, STICKERS


def actions_by_id(actions):
    return {a.checkbox_id: a.action for a in actions}


class TestFullPipeline:
    """Rich sticker against the vendor form"""

    @pytest.fixture
    def orchestrator(self, fake_driver):
        planner = CheckboxActionPlanner(dictionary=load_feature_dictionary(), options=PlanOptions())
        return StickerSyncOrchestrator(driver=fake_driver, planner=planner)

    def test_features_extracted(self):
        features = TextFeatureExtractor().extract(STICKERS["f250_lariat"])

        for expected in ("Leather Seats", "Backup Camera", "Four-Wheel Drive", "Sunroof", "Tow Package"):
            assert expected in features
        # vehicle data never becomes a feature
        assert not any("1FT7W2BT5NEC12345" in f or "Oxford White" in f for f in features)
        assert len(features) > 10

    def test_actions(self, orchestrator):
        """
        - dictionary aliases check the renamed boxes (camera, 4WD, blind spot)
        - Heated Seats is already checked and stays
        - Third Row / Navigation are not on the sticker and get unchecked
        """
        report = orchestrator.sync(STICKERS["f250_lariat"], CHECKBOX_SNAPSHOTS["f250_form"])
        actions = actions_by_id(report.plan.actions)

        assert actions == {
            "cb-01": ActionType.CHECK,
            "cb-02": ActionType.CHECK,
            "cb-03": ActionType.NONE,
            "cb-04": ActionType.CHECK,
            "cb-05": ActionType.CHECK,
            "cb-06": ActionType.UNCHECK,
            "cb-07": ActionType.UNCHECK,
            "cb-08": ActionType.CHECK,
            "cb-09": ActionType.CHECK,
            "cb-10": ActionType.CHECK,
        }
        assert report.plan.uncheck_allowed
        assert report.is_success
        assert sorted(report.applied) == ["cb-01", "cb-02", "cb-04", "cb-05", "cb-06", "cb-07", "cb-08", "cb-09", "cb-10"]

    def test_dictionary_confidence(self, orchestrator):
        report = orchestrator.sync(STICKERS["f250_lariat"], CHECKBOX_SNAPSHOTS["f250_form"])
        confidences = {a.checkbox_id: a.confidence for a in report.plan.actions}

        assert confidences["cb-01"] == 100.0  # Backup Camera -> Rear View Camera
        assert confidences["cb-09"] == 100.0  # Four-Wheel Drive -> Four Wheel Drive
        assert confidences["cb-10"] == 100.0  # Blind Spot Monitoring -> Blind Spot Monitor
        assert confidences["cb-06"] == 0.0

    def test_second_pass_is_stable(self, orchestrator):
        """Re-planning against the updated form leaves nothing to do"""
        first = orchestrator.sync(STICKERS["f250_lariat"], CHECKBOX_SNAPSHOTS["f250_form"])
        applied = {a.checkbox_id: a.action for a in first.plan.pending}
        updated = [
            {**cb, "checked": applied[cb["id"]] == ActionType.CHECK} if cb["id"] in applied else cb
            for cb in CHECKBOX_SNAPSHOTS["f250_form"]
        ]

        second = orchestrator.sync(STICKERS["f250_lariat"], updated)
        assert second.plan.pending == []


class TestSparseSticker:
    """Few features never uncheck"""

    def test_gate_keeps_checked_boxes(self):
        features = TextFeatureExtractor().extract(STICKERS["sparse"])
        actions = actions_by_id(plan_checkbox_actions(features, CHECKBOX_SNAPSHOTS["sparse_form"]))

        assert actions == {"s1": ActionType.CHECK, "s2": ActionType.NONE}


class TestSemanticPipeline:
    """Embedding tier fills the gap the dictionary and fuzzy tiers leave"""

    def test_synonym_only_semantic_can_find(self, fake_backend):
        planner = CheckboxActionPlanner(
            dictionary=load_feature_dictionary(),
            embedder=SemanticEmbedder(backend=fake_backend),
            options=PlanOptions(),
        )
        checkboxes = [
            {"id": "g", "label": "Glass Roof Panel", "checked": False},
            {"id": "t", "label": "Tow Package", "checked": False},
        ]
        result = planner.run(["Moonroof", "Tow Package"], checkboxes)

        assert actions_by_id(result.actions) == {"g": ActionType.CHECK, "t": ActionType.CHECK}
        assert [m.tier.value for m in result.matches] == ["semantic", "dictionary"]

    def test_backend_outage_keeps_fuzzy_results(self, failing_backend):
        planner = CheckboxActionPlanner(
            dictionary=load_feature_dictionary(),
            embedder=SemanticEmbedder(backend=failing_backend),
            options=PlanOptions(),
        )
        result = planner.run(
            TextFeatureExtractor().extract(STICKERS["f250_lariat"]),
            CHECKBOX_SNAPSHOTS["f250_form"],
        )

        assert result.semantic_degraded
        assert len(result.to_check) == 7


class TestCuration:
    """Unmatched features accumulate across vehicles"""

    def test_repeated_misses_become_suggestions(self):
        log = UnmatchedFeatureLog()
        planner = CheckboxActionPlanner(
            dictionary=load_feature_dictionary(), options=PlanOptions(), unmatched_log=log
        )
        sticker = "• Pro Power Onboard\n• Sunroof"
        boxes = [{"id": "s", "label": "Sunroof"}]
        for _ in range(3):
            planner.run(TextFeatureExtractor(known_features=[]).extract(sticker), boxes)

        suggestions = log.get_improvement_suggestions()
        assert [s["feature"] for s in suggestions] == ["Pro Power Onboard"]
        assert suggestions[0]["occurrences"] == 3

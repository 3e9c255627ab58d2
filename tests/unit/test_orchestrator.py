"""StickerSyncOrchestrator tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from sticker_sync.core.exceptions import DuplicateCheckboxException
from sticker_sync.dictionary import load_feature_dictionary
from sticker_sync.engine import (
    ActionType,
    CheckboxActionPlanner,
    PlanOptions,
    StickerSyncOrchestrator,
)
from sticker_sync.extraction import TextFeatureExtractor
from tests.fixtures import CHECKBOX_SNAPSHOTS, STICKERS

TWO_OPTIONS = "• Sunroof\n• Tow Package"
TWO_BOXES = [
    {"id": "s", "label": "Sunroof", "checked": False},
    {"id": "t", "label": "Tow Package", "checked": False},
]


@pytest.fixture
def planner():
    """Bundled dictionary, fuzzy only."""
    return CheckboxActionPlanner(dictionary=load_feature_dictionary(), options=PlanOptions())


@pytest.fixture
def make_orchestrator(planner):
    def _make(driver):
        return StickerSyncOrchestrator(driver=driver, planner=planner)
    return _make


def test_sync_success(make_orchestrator, fake_driver):
    """Pending actions reach the driver and are reported as applied."""
    report = make_orchestrator(fake_driver).sync(STICKERS["sparse"], CHECKBOX_SNAPSHOTS["sparse_form"])

    assert report.features[:2] == ["Sunroof", "Bluetooth"]
    assert report.applied == ["s1"]
    assert report.failed == []
    assert report.is_success

    # only the pending check is handed over; the gated uncheck never is
    sent = fake_driver.applied[0]
    assert [(a.checkbox_id, a.action) for a in sent] == [("s1", ActionType.CHECK)]


def test_sync_partial_failure(make_orchestrator, fake_driver):
    """Per-checkbox failures are collected, the rest still counts as applied."""
    fake_driver.outcomes = {"t": False}
    report = make_orchestrator(fake_driver).sync(TWO_OPTIONS, TWO_BOXES)

    assert report.applied == ["s"]
    assert report.failed == ["t"]
    assert report.errors == []
    assert not report.is_success


def test_sync_driver_raises(make_orchestrator, fake_driver):
    """A raising driver fails every pending action without escaping."""
    fake_driver.raises = RuntimeError("page detached")
    report = make_orchestrator(fake_driver).sync(TWO_OPTIONS, TWO_BOXES)

    assert report.applied == []
    assert report.failed == ["s", "t"]
    assert report.errors == ["RuntimeError: page detached"]
    assert report.summary()["errors"] == 1


def test_sync_missing_outcome(make_orchestrator):
    """Actions the driver never reported on are failures."""
    driver = MagicMock()
    driver.apply.return_value = {"s": True}
    report = make_orchestrator(driver).sync(TWO_OPTIONS, TWO_BOXES)

    assert report.applied == ["s"]
    assert report.failed == ["t"]


def test_sync_truthy_outcomes(make_orchestrator):
    """Drivers that report 1/0 instead of booleans are read by truthiness."""
    driver = MagicMock()
    driver.apply.return_value = {"s": 1, "t": 0}
    report = make_orchestrator(driver).sync(TWO_OPTIONS, TWO_BOXES)

    assert report.applied == ["s"]
    assert report.failed == ["t"]


def test_sync_nothing_pending(make_orchestrator):
    """The driver is not called when every checkbox is already right."""
    driver = MagicMock()
    boxes = [{"id": "s", "label": "Sunroof", "checked": True}]
    report = make_orchestrator(driver).sync("• Sunroof", boxes)

    driver.apply.assert_not_called()
    assert report.is_success
    assert report.plan.actions[0].action == ActionType.NONE


def test_sync_empty_sticker(make_orchestrator, fake_driver):
    report = make_orchestrator(fake_driver).sync(STICKERS["whitespace"], CHECKBOX_SNAPSHOTS["f250_form"])

    assert report.features == []
    assert report.plan.pending == []
    assert fake_driver.applied == []


def test_sync_options_per_pass(make_orchestrator, fake_driver):
    """coverage_threshold=0 lets two features uncheck the stale box."""
    report = make_orchestrator(fake_driver).sync(
        STICKERS["sparse"], CHECKBOX_SNAPSHOTS["sparse_form"], PlanOptions(coverage_threshold=0)
    )

    assert [a.checkbox_id for a in report.plan.to_uncheck] == ["s2"]
    assert report.applied == ["s1", "s2"]


def test_sync_duplicate_ids_raise(make_orchestrator, fake_driver):
    boxes = [{"id": "x", "label": "Sunroof"}, {"id": "x", "label": "Tow Package"}]
    with pytest.raises(DuplicateCheckboxException):
        make_orchestrator(fake_driver).sync(TWO_OPTIONS, boxes)
    assert fake_driver.applied == []


def test_custom_extractor(planner, fake_driver):
    extractor = TextFeatureExtractor(known_features=[])
    orchestrator = StickerSyncOrchestrator(driver=fake_driver, extractor=extractor, planner=planner)
    report = orchestrator.sync("Rear defroster is standard", [{"id": "d", "label": "Rear Defroster"}])

    # no pattern and no known-feature scan -> nothing extracted
    assert report.features == []
    assert report.plan.pending == []


def test_driver_required():
    with pytest.raises(ValueError):
        StickerSyncOrchestrator(driver=None)

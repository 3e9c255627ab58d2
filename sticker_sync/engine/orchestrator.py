"""Sticker Sync Orchestrator - sticker text -> checkbox updates

Coordinates one synchronisation pass:
1. Feature extraction from the sticker text
2. Action planning against the live checkbox snapshot
3. Handing pending actions to the UI driver
4. Collecting per-checkbox outcomes into a SyncReport

Driver outcomes are reported, never fed back into planning.
"""

from typing import Optional, Protocol, Sequence

from sticker_sync.core.logging import logger, sanitize_for_log
from sticker_sync.extraction import TextFeatureExtractor

from .planner import CheckboxActionPlanner, CheckboxInput, PlanOptions
from .result import CheckboxAction, SyncReport


class UIDriver(Protocol):
    """Applies checkbox actions to the live form.

    Implementations must report failures in the returned mapping instead of
    raising.
    """

    def apply(self, actions: Sequence[CheckboxAction]) -> dict[str, bool]:
        """
        Args:
            actions: pending check/uncheck actions

        Returns:
            {checkbox_id: success}
        """
        ...


class StickerSyncOrchestrator:
    """Extract -> plan -> apply for one vehicle.

    Usage:
        orchestrator = StickerSyncOrchestrator(driver=my_driver)
        report = orchestrator.sync(sticker_text, checkboxes)
        if not report.is_success:
            logger.warning(report.failed)
    """

    def __init__(
        self,
        driver: UIDriver,
        extractor: Optional[TextFeatureExtractor] = None,
        planner: Optional[CheckboxActionPlanner] = None,
    ):
        """
        Args:
            driver: UI driver (apply method implemented)
            extractor: feature extractor (default: bundled known features)
            planner: action planner (default: bundled dictionary)
        """
        if driver is None:
            raise ValueError("driver must not be None")

        self.driver = driver
        self.extractor = extractor or TextFeatureExtractor()
        self.planner = planner or CheckboxActionPlanner()

    def sync(
        self,
        sticker_text: str,
        checkboxes: Sequence[CheckboxInput],
        options: Optional[PlanOptions] = None,
    ) -> SyncReport:
        """
        Run one synchronisation pass.

        Args:
            sticker_text: raw sticker text from the document scraper
            checkboxes: live checkbox snapshot
            options: planning options for this pass

        Returns:
            SyncReport

        Raises:
            ValidationException: invalid checkbox snapshot (duplicate ids)
        """
        logger.info(f"Sticker sync started: {sanitize_for_log(sticker_text, 60)}")

        features = self.extractor.extract(sticker_text)
        plan = self.planner.run(features, checkboxes, options)
        report = SyncReport(features=features, plan=plan)

        pending = plan.pending
        if not pending:
            logger.info("Sticker sync completed: no checkbox changes needed")
            return report

        self._apply(pending, report)

        if report.failed:
            logger.warning(
                f"Sticker sync completed with failures: {len(report.failed)}/{len(pending)} "
                f"actions failed"
            )
        else:
            logger.info(f"Sticker sync completed: {len(report.applied)} actions applied")
        return report

    def _apply(self, pending: list[CheckboxAction], report: SyncReport) -> None:
        try:
            outcomes = self.driver.apply(pending)
        except Exception as e:
            logger.error(f"UI driver failed: {type(e).__name__}: {e}", exc_info=True)
            report.errors.append(f"{type(e).__name__}: {e}")
            report.failed.extend(a.checkbox_id for a in pending)
            return

        outcomes = outcomes or {}
        for action in pending:
            if action.checkbox_id not in outcomes:
                logger.warning(f"UI driver reported no outcome for checkbox '{action.checkbox_id}'")
                report.failed.append(action.checkbox_id)
            elif outcomes[action.checkbox_id]:
                report.applied.append(action.checkbox_id)
            else:
                report.failed.append(action.checkbox_id)

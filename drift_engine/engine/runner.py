"""
Drift Runner: score a batch of businesses.

For each business: select the engine from its connected sources, compute
the drift result, run change detection against the alert store, build the
executive summary and, when something changed (or a notification was
forced), render the status email for an external sender.

Businesses are processed sequentially. A failure in one business is logged
and reported in its result; it never aborts the batch.

Version: drift_runner_v1
"""

from collections.abc import Iterable
from typing import Optional

import structlog

from drift_engine.config import DriftConfig, Settings, get_settings
from drift_engine.models.runs import BusinessJob, BusinessRunResult
from drift_engine.notifications.templates import render_status_email
from drift_engine.storage.base import AlertStore
from drift_engine.utils.logging import business_context

from .change_detector import AlertChangeDetector
from .selector import get_engine, select_engine_id
from .summary import executive_summary


class DriftRunner:
    """
    Batch driver around the engines, change detector and summary generator.

    Attributes:
        store: Alert history backend
        config: Engine thresholds passed to every computation
        settings: Rendering settings (site URL, reason cap, details path)

    Example:
        >>> runner = DriftRunner(store=InMemoryAlertStore())
        >>> results = runner.run([job_a, job_b])
        >>> [r.ok for r in results]
        [True, True]
    """

    def __init__(
        self,
        store: AlertStore,
        config: Optional[DriftConfig] = None,
        settings: Optional[Settings] = None,
    ):
        self.store = store
        self.settings = settings or get_settings()
        self.config = config or DriftConfig.from_settings(self.settings)
        self.detector = AlertChangeDetector(store)
        self.logger = structlog.get_logger()

    def run(self, jobs: Iterable[BusinessJob], dry_run: bool = False) -> list[BusinessRunResult]:
        """
        Score every business, isolating per-business failures.

        Args:
            jobs: Businesses to score
            dry_run: Compute and compare without writing alert history

        Returns:
            One BusinessRunResult per job, in job order
        """
        results: list[BusinessRunResult] = []

        for job in jobs:
            with business_context(job.business_id, dry_run=dry_run):
                try:
                    results.append(self.run_one(job, dry_run=dry_run))
                except Exception as e:
                    self.logger.error(
                        "business_run_failed",
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                    results.append(BusinessRunResult(
                        business_id=job.business_id,
                        ok=False,
                        error=str(e),
                        error_type=type(e).__name__,
                    ))

        self.logger.info(
            "drift_run_complete",
            businesses=len(results),
            failed=sum(1 for r in results if not r.ok),
            changed=sum(1 for r in results if r.decision is not None and r.decision.changed),
            dry_run=dry_run,
        )

        return results

    def run_one(self, job: BusinessJob, dry_run: bool = False) -> BusinessRunResult:
        """
        Score a single business.

        Raises:
            InvalidInputError: If the job payload is malformed
            StorageError: If the alert store fails
        """
        engine_id = select_engine_id(job.connected_sources)
        drift = get_engine(engine_id, self.config).compute(job.payload)

        decision, record = self.detector.evaluate(
            job.business_id,
            drift,
            window_start=job.window_start,
            window_end=job.window_end,
            force_notify=job.force_notify,
            dry_run=dry_run,
        )

        summary = executive_summary(
            drift,
            business_id=job.business_id,
            business_name=job.business_name,
            monthly_revenue_cents=job.monthly_revenue_cents,
            details_path_template=self.settings.details_path_template,
        )

        email = None
        if decision.changed:
            email = render_status_email(
                business_name=job.business_name or job.business_id,
                status=drift.status,
                reasons=drift.reasons,
                window_start=job.window_start,
                window_end=job.window_end,
                business_id=job.business_id,
                base_url=self.settings.site_url,
                reason_cap=self.settings.reason_cap,
            )

        return BusinessRunResult(
            business_id=job.business_id,
            engine=engine_id,
            drift=drift,
            decision=decision,
            alert_written=record is not None,
            summary=summary,
            email=email,
        )

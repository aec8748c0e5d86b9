"""Background scheduler for periodic deployment inventory scans."""

import logging

from apscheduler.schedulers.background import BackgroundScheduler

logger = logging.getLogger(__name__)

scheduler = BackgroundScheduler(daemon=True)


def init_scheduler(app):
    """Initialize and start the background scheduler."""
    from config.settings import INVENTORY_SCAN_INTERVAL_HOURS, SCHEDULER_ENABLED

    if not SCHEDULER_ENABLED:
        logger.info("Scheduler disabled")
        return

    if scheduler.running:
        return

    scheduler.add_job(
        func=_run_inventory_scan,
        trigger="interval",
        hours=INVENTORY_SCAN_INTERVAL_HOURS,
        id="inventory_scan",
        replace_existing=True,
    )

    scheduler.start()
    logger.info("Scheduler started: inventory scan every %d hour(s)", INVENTORY_SCAN_INTERVAL_HOURS)


def _run_inventory_scan():
    """Periodically scan deployments and refresh the stored report."""
    logger.info("Running scheduled inventory scan...")

    try:
        from web.services import get_scanner, run_and_store_scan

        if not get_scanner().is_configured():
            logger.info("Azure not configured, skipping scan")
            return

        report = run_and_store_scan()
        logger.info(
            "Inventory scan complete: %d deployment(s), retirement data %s",
            report.summary.get("total", 0),
            "included" if report.enriched else "unavailable",
        )

    except Exception:
        logger.exception("Inventory scan job failed")

"""
Report sinks for observability.

Sinks are injected into the detector. The only shared instance is the
Prometheus sink returned by `get_prometheus_sink()`, which detectors pick
up when metrics are enabled and no sinks are passed.

Author: Yobie Benjamin
Date: 2026-10-18
"""

from threading import Lock
from typing import Optional, Protocol

from loguru import logger
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

from campaignlens.core.types import FraudReport


class ReportSink(Protocol):
    """Receives every finished report."""

    def record(self, report: FraudReport) -> None:
        ...


class LoggingReportSink:
    """Logs the verdict and summary of each report."""

    def __init__(self, level: str = "INFO"):
        self.level = level

    def record(self, report: FraudReport) -> None:
        if report.error:
            logger.warning(
                f"Campaign {report.campaign_id} could not be analyzed: {report.message}"
            )
            return

        logger.log(
            self.level,
            f"Campaign {report.campaign_id} scored {report.overall_risk_score}/100 "
            f"({report.risk_level.value}) -> {report.recommendation.value}",
        )
        logger.debug(report.summary)


class PrometheusReportSink:
    """
    Prometheus metrics for fraud reports.

    Example:
        ```python
        registry = CollectorRegistry()
        sink = PrometheusReportSink(registry=registry)
        detector = CampaignFraudDetector(sinks=[sink])
        ```
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        """
        Initialize metrics.

        Args:
            registry: Prometheus registry (None = global registry)
        """
        self.registry = registry

        self.reports_total = Counter(
            "campaignlens_reports_total",
            "Total number of campaign fraud reports",
            ["risk_level", "recommendation"],
            registry=registry,
        )

        self.errors_total = Counter(
            "campaignlens_report_errors_total",
            "Reports that could not analyze their input",
            registry=registry,
        )

        self.risk_score = Histogram(
            "campaignlens_risk_score",
            "Distribution of overall risk scores",
            buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
            registry=registry,
        )

        self.ai_analyses_total = Counter(
            "campaignlens_ai_analyses_total",
            "AI analyses by outcome",
            ["result"],
            registry=registry,
        )

        self.known_fraud_matches_total = Counter(
            "campaignlens_known_fraud_matches_total",
            "Reports matching known fraudulent campaigns",
            ["high_risk"],
            registry=registry,
        )

    def record(self, report: FraudReport) -> None:
        if report.error:
            self.errors_total.inc()
            return

        self.reports_total.labels(
            risk_level=report.risk_level.value,
            recommendation=report.recommendation.value,
        ).inc()
        self.risk_score.observe(report.overall_risk_score)

        ai_result = "skipped" if report.analysis.ai_analysis.skipped else "completed"
        self.ai_analyses_total.labels(result=ai_result).inc()

        fraud_check = report.analysis.known_fraud_check
        if fraud_check.matches_found:
            self.known_fraud_matches_total.labels(
                high_risk=str(fraud_check.high_risk).lower()
            ).inc()

    def export_metrics(self) -> bytes:
        """
        Export metrics in Prometheus format.

        Returns:
            Metrics in Prometheus text format
        """
        return generate_latest(self.registry or REGISTRY)

    def get_content_type(self) -> str:
        """Get content type for metrics endpoint."""
        return CONTENT_TYPE_LATEST


# Global sink registered on the default Prometheus registry
_global_sink: Optional[PrometheusReportSink] = None
_sink_lock = Lock()


def get_prometheus_sink() -> PrometheusReportSink:
    """
    Get the process-wide Prometheus sink.

    Metric names can only be registered once per registry, so every
    detector created with metrics enabled shares this instance.
    """
    global _global_sink

    if _global_sink is None:
        with _sink_lock:
            if _global_sink is None:
                _global_sink = PrometheusReportSink()

    return _global_sink

"""Observability sinks for CampaignLens reports."""

from campaignlens.observability.sinks import (
    LoggingReportSink,
    PrometheusReportSink,
    ReportSink,
    get_prometheus_sink,
)

__all__ = ["ReportSink", "LoggingReportSink", "PrometheusReportSink", "get_prometheus_sink"]

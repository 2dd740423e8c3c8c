"""Prometheus metrics for monitoring report volume, row outcomes, and failures"""

from prometheus_client import Counter, Histogram

from aging_report.domain.models import Report

# Report metrics
report_counter = Counter(
    "aging_report_generated_total",
    "Total aging reports generated",
    ["report_type"],  # overdue | 30_37 | 37_44 | 24_31
)

rows_processed_counter = Counter(
    "aging_rows_processed_total",
    "Spreadsheet rows classified",
    ["outcome"],  # accepted | excluded
)

rows_excluded_counter = Counter(
    "aging_rows_excluded_total",
    "Rows left out of a report, by reason",
    ["reason"],
)

malformed_balance_counter = Counter(
    "aging_malformed_balance_total",
    "Non-empty balance cells that did not parse cleanly",
)

# Collaborator failures
row_source_failures_counter = Counter(
    "aging_row_source_failures_total",
    "Uploaded spreadsheets that could not be read",
)

render_failures_counter = Counter(
    "aging_render_failures_total",
    "Reports that could not be rendered to PDF",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_report(report: Report) -> None:
    """Record row outcome metrics for one report run"""
    stats = report.diagnostics
    report_counter.labels(report_type=report.report_type.value).inc()

    rows_processed_counter.labels(outcome="accepted").inc(stats.rows_accepted)
    rows_processed_counter.labels(outcome="excluded").inc(stats.rows_excluded)

    for reason, count in stats.exclusions.items():
        rows_excluded_counter.labels(reason=reason.value).inc(count)

    if stats.malformed_balances:
        malformed_balance_counter.inc(stats.malformed_balances)

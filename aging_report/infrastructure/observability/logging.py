"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from aging_report.config import settings
from aging_report.domain.models import Report


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_report(request_id: str, report: Report, duration_ms: float) -> None:
    """Log structured report outcome for analysis"""
    stats = report.diagnostics
    logging.info(
        "Report generated",
        extra={
            "request_id": request_id,
            "step": "report_complete",
            "report_type": report.report_type.value,
            "date_range": report.range_description,
            "rows_seen": stats.rows_seen,
            "rows_accepted": stats.rows_accepted,
            "rows_excluded": stats.rows_excluded,
            "malformed_balances": stats.malformed_balances,
            "total_outstanding": str(report.total_outstanding),
            "duration_ms": duration_ms,
        },
    )

    if stats.malformed_balances:
        logging.warning(
            "Balance cells could not be fully parsed",
            extra={"request_id": request_id, "malformed_balances": stats.malformed_balances},
        )

"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from cashflow_gateway.config import settings


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

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_analysis_loaded(
    request_id: str,
    analysis_id: str,
    found: bool,
    dscr_band: Optional[str],
    duration_ms: float,
) -> None:
    """Log structured analysis lookup outcome"""
    logging.info(
        "Analysis lookup completed",
        extra={
            "request_id": request_id,
            "analysis_id": analysis_id,
            "step": "analysis_lookup",
            "outcome": "found" if found else "not_found",
            "dscr_band": dscr_band,
            "duration_ms": duration_ms,
        },
    )


def log_report_rendered(
    request_id: str,
    analysis_id: str,
    report_type: str,
    size_bytes: int,
    duration_ms: float,
) -> None:
    """Log structured PDF render outcome"""
    logging.info(
        "Report rendered",
        extra={
            "request_id": request_id,
            "analysis_id": analysis_id,
            "step": "report_rendered",
            "report_type": report_type,
            "size_bytes": size_bytes,
            "duration_ms": duration_ms,
        },
    )

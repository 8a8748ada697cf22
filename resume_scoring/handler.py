"""Serverless entry point: one scoring request per invocation."""

from __future__ import annotations

import json
import logging
from typing import Any

import sentry_sdk

from resume_scoring.core.config import settings
from resume_scoring.services import get_orchestrator

logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

logger = logging.getLogger(__name__)


def lambda_handler(event: Any, context: Any = None) -> dict[str, Any]:
    status = get_orchestrator().handle(event)
    logger.info(
        "invocation_complete application_id=%s success=%s status_code=%s",
        status.application_id,
        status.success,
        status.status_code,
    )
    return {
        "statusCode": status.status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(status.response_body()),
    }

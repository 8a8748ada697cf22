from __future__ import annotations

import logging
from typing import Any

import httpx

from resume_scoring.schemas import ErrorCallbackPayload, ScoreCallbackPayload

logger = logging.getLogger(__name__)


class CallbackClient:
    """One-shot POST of a score or error report to the hiring-platform backend.

    Delivery is attempted exactly once. Failures are logged and reported as
    ``False``; nothing is retried or queued.
    """

    def __init__(
        self,
        *,
        callback_path: str,
        timeout_s: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._callback_path = "/" + callback_path.lstrip("/")
        self._timeout_s = timeout_s
        self._transport = transport

    def callback_url(self, target: str) -> str:
        return f"{target.rstrip('/')}{self._callback_path}"

    def _post(self, target: str, body: dict[str, Any], application_id: str, kind: str) -> bool:
        url = self.callback_url(target)
        try:
            with httpx.Client(timeout=self._timeout_s, transport=self._transport) as client:
                response = client.post(url, json=body)
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.exception(
                "callback_delivery_failed kind=%s application_id=%s url=%s: %s",
                kind,
                application_id,
                url,
                exc,
            )
            return False
        logger.info(
            "callback_delivered kind=%s application_id=%s status=%s",
            kind,
            application_id,
            response.status_code,
        )
        return True

    def deliver_score(self, target: str, payload: ScoreCallbackPayload) -> bool:
        body = payload.model_dump(by_alias=True, mode="json", exclude_none=True)
        return self._post(target, body, payload.application_id, "score")

    def deliver_error(self, target: str, payload: ErrorCallbackPayload) -> bool:
        body = payload.model_dump(by_alias=True, mode="json")
        return self._post(target, body, payload.application_id, "error")

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any

from resume_scoring.core.config import Settings, get_factor_weights, settings
from resume_scoring.integrations import (
    CallbackClient,
    DocumentTextExtractor,
    ExtractionError,
    get_document_extractor,
    is_pdf_reference,
    resolve_document_reference,
)
from resume_scoring.schemas import (
    ErrorReport,
    ExtractionInfo,
    InvalidScoringRequest,
    ProcessingInfo,
    ScoringInfo,
    ScoringRequest,
    build_error_payload,
    build_score_payload,
    read_correlation,
)
from resume_scoring.scoring import aggregate

logger = logging.getLogger(__name__)


class InvocationState(str, Enum):
    RECEIVED = "received"
    EXTRACTING = "extracting"
    SCORING = "scoring"
    REPORTING = "reporting"
    FAILED = "failed"
    REPORTING_ERROR = "reporting_error"
    DONE = "done"


@dataclass(frozen=True)
class InvocationStatus:
    success: bool
    application_id: str | None
    message: str
    score: int | None = None
    extraction_used: bool = False
    callback_delivered: bool = False
    fatal: bool = False
    error_type: str | None = None
    failed_in: InvocationState | None = None
    state: InvocationState = InvocationState.DONE
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def status_code(self) -> int:
        if self.success:
            return 200
        return 400 if self.fatal else 500

    def response_body(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "score": self.score,
            "message": self.message,
            "applicationId": self.application_id or "unknown",
            "extractionUsed": self.extraction_used,
            "callbackDelivered": self.callback_delivered,
            **({"errorType": self.error_type} if self.error_type else {}),
            **self.body,
        }


@dataclass(frozen=True)
class CandidateText:
    text: str
    extraction_used: bool
    info: ExtractionInfo


def parse_event(event: Any) -> Mapping[str, Any]:
    """Unwrap a serverless-style ``{"body": "<json>"}`` event or accept a plain mapping."""
    body = event
    if isinstance(event, Mapping) and "body" in event:
        body = event["body"]
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        try:
            body = json.loads(body)
        except json.JSONDecodeError as exc:
            raise InvalidScoringRequest(f"Scoring request body is not valid JSON: {exc.msg}") from exc
    if not isinstance(body, Mapping):
        raise InvalidScoringRequest("Scoring request body must be a JSON object.")
    return body


class ScoringOrchestrator:
    """Runs one scoring request end to end and reports it to the callback target.

    RECEIVED -> (EXTRACTING) -> SCORING -> REPORTING -> DONE, or
    FAILED -> REPORTING_ERROR -> DONE when anything after request validation raises.
    """

    def __init__(
        self,
        *,
        callback_client: CallbackClient,
        extractor: DocumentTextExtractor | None = None,
        default_callback_target: str | None = None,
        resume_bucket: str | None = None,
    ) -> None:
        self._callback = callback_client
        self._extractor = extractor
        self._default_callback_target = default_callback_target
        self._resume_bucket = resume_bucket

    def _transition(self, application_id: str | None, state: InvocationState) -> InvocationState:
        logger.debug("scoring_state application_id=%s state=%s", application_id, state.value)
        return state

    def validate_event(self, event: Any) -> tuple[Mapping[str, Any], str, str]:
        payload = parse_event(event)
        application_id, target = read_correlation(payload, default_callback_target=self._default_callback_target)
        return payload, application_id, target

    def _candidate_text(self, request: ScoringRequest) -> CandidateText:
        bio = request.candidate.bio
        resume_url = request.candidate.resume_url

        def _fallback(warning: str | None) -> CandidateText:
            return CandidateText(
                text=bio,
                extraction_used=False,
                info=ExtractionInfo(
                    has_resume=bool(resume_url),
                    resume_url=resume_url or None,
                    text_extracted=False,
                    text_length=len(bio),
                    source="bio",
                    warning=warning,
                ),
            )

        if not is_pdf_reference(resume_url):
            return _fallback(None)

        self._transition(request.application_id, InvocationState.EXTRACTING)
        if self._extractor is None:
            logger.warning("resume_extraction_skipped application_id=%s reason=no_extractor", request.application_id)
            return _fallback("no_extractor")

        try:
            reference = resolve_document_reference(resume_url, default_bucket=self._resume_bucket)
            lines = self._extractor.extract_lines(reference)
        except ExtractionError as exc:
            logger.warning(
                "resume_extraction_failed application_id=%s code=%s error=%s",
                request.application_id,
                exc.code,
                exc,
            )
            return _fallback(exc.code)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "resume_extraction_failed application_id=%s code=unexpected error=%r",
                request.application_id,
                exc,
            )
            return _fallback("unexpected")

        text = "\n".join(line.strip() for line in lines if line and line.strip())
        if not text:
            logger.warning("resume_extraction_empty application_id=%s", request.application_id)
            return _fallback("empty_document")

        return CandidateText(
            text=text,
            extraction_used=True,
            info=ExtractionInfo(
                has_resume=True,
                resume_url=resume_url,
                text_extracted=True,
                text_length=len(text),
                source="extracted_resume",
            ),
        )

    def handle(self, event: Any) -> InvocationStatus:
        state = InvocationState.RECEIVED
        try:
            payload, application_id, target = self.validate_event(event)
        except InvalidScoringRequest as exc:
            logger.error("scoring_request_rejected error=%s", exc)
            return InvocationStatus(
                success=False,
                application_id=None,
                message=str(exc),
                fatal=True,
                error_type=type(exc).__name__,
                failed_in=state,
            )

        try:
            request = ScoringRequest.from_payload(payload, default_callback_target=self._default_callback_target)
            candidate = self._candidate_text(request)

            state = self._transition(application_id, InvocationState.SCORING)
            result = aggregate(request.job, request.candidate, candidate.text, candidate.extraction_used)

            state = self._transition(application_id, InvocationState.REPORTING)
            score_payload = build_score_payload(
                request,
                result,
                weights=get_factor_weights(),
                processing_info=ProcessingInfo(
                    extraction=candidate.info,
                    scoring=ScoringInfo(
                        total_required_skills=len(request.job.required_skills),
                        total_user_skills=len(request.candidate.skills),
                        job_level=request.job.level,
                        job_title=request.job.title,
                        has_job_description=bool(request.job.description),
                    ),
                ),
            )
        except Exception as exc:  # noqa: BLE001
            failed_in = state
            self._transition(application_id, InvocationState.FAILED)
            logger.exception("scoring_failed application_id=%s state=%s", application_id, failed_in.value)
            report = ErrorReport.from_exception(application_id, exc)
            self._transition(application_id, InvocationState.REPORTING_ERROR)
            error_payload = build_error_payload(report)
            delivered = self._callback.deliver_error(target, error_payload)
            self._transition(application_id, InvocationState.DONE)
            return InvocationStatus(
                success=False,
                application_id=application_id,
                message=report.error_message,
                callback_delivered=delivered,
                error_type=report.error_type,
                failed_in=failed_in,
                body={"errorDetails": error_payload.model_dump(by_alias=True, mode="json")["errorDetails"]},
            )

        delivered = self._callback.deliver_score(target, score_payload)
        self._transition(application_id, InvocationState.DONE)
        logger.info(
            "scoring_complete application_id=%s score=%s extraction_used=%s callback_delivered=%s",
            application_id,
            result.final_score,
            result.extraction_used,
            delivered,
        )
        dumped = score_payload.model_dump(by_alias=True, mode="json", exclude_none=True)
        return InvocationStatus(
            success=True,
            application_id=application_id,
            message="Resume scored successfully",
            score=result.final_score,
            extraction_used=result.extraction_used,
            callback_delivered=delivered,
            body={
                key: dumped[key]
                for key in ("breakdown", "matchedSkills", "recommendation", "details", "processingInfo")
                if key in dumped
            },
        )


def build_orchestrator(config: Settings) -> ScoringOrchestrator:
    return ScoringOrchestrator(
        callback_client=CallbackClient(callback_path=config.callback_path, timeout_s=config.callback_timeout_s),
        extractor=get_document_extractor(config),
        default_callback_target=config.backend_url or None,
        resume_bucket=config.resume_bucket,
    )


@lru_cache(maxsize=1)
def get_orchestrator() -> ScoringOrchestrator:
    return build_orchestrator(settings)

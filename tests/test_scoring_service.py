import json
import sys
import unittest
from pathlib import Path
from unittest import mock

import httpx

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_scoring.integrations import CallbackClient, ExtractionError  # noqa: E402
from resume_scoring.schemas import InvalidScoringRequest  # noqa: E402
from resume_scoring.services import InvocationState, ScoringOrchestrator, parse_event  # noqa: E402

CALLBACK_PATH = "/api/users/update-application-score"


def _payload(**overrides):
    payload = {
        "applicationId": "app-123",
        "backendUrl": "http://backend.test",
        "jobTitle": "Senior Backend Engineer",
        "jobDescription": "Build Python APIs with Django and PostgreSQL",
        "jobLevel": "senior",
        "requiredSkills": ["Python", "Django", "PostgreSQL"],
        "userSkills": ["python", "django"],
        "userBio": "Backend engineer with 5 years of experience building Python APIs.",
        "userRole": "Backend Engineer",
    }
    payload.update(overrides)
    return payload


class _StaticExtractor:
    def __init__(self, lines=None, error=None):
        self.lines = lines or []
        self.error = error
        self.references = []

    def extract_lines(self, reference):
        self.references.append(reference)
        if self.error is not None:
            raise self.error
        return self.lines


class ParseEventTests(unittest.TestCase):
    def test_accepts_wrapped_and_plain_events(self):
        self.assertEqual(parse_event({"body": '{"applicationId": "a"}'}), {"applicationId": "a"})
        self.assertEqual(parse_event({"body": b'{"applicationId": "a"}'}), {"applicationId": "a"})
        self.assertEqual(parse_event({"applicationId": "a"}), {"applicationId": "a"})

    def test_rejects_non_object_bodies(self):
        for event in ({"body": "not json"}, {"body": "[1, 2]"}, "42"):
            with self.subTest(event=event):
                with self.assertRaises(InvalidScoringRequest):
                    parse_event(event)


class ScoringOrchestratorTests(unittest.TestCase):
    def setUp(self):
        self.requests = []
        self.callback_status = 200

        def handler(request):
            self.requests.append(request)
            return httpx.Response(self.callback_status, json={"ok": True})

        self.callback = CallbackClient(callback_path=CALLBACK_PATH, transport=httpx.MockTransport(handler))

    def _orchestrator(self, extractor=None, default_callback_target=None):
        return ScoringOrchestrator(
            callback_client=self.callback,
            extractor=extractor,
            default_callback_target=default_callback_target,
        )

    def _sent(self, index=0):
        return json.loads(self.requests[index].content)

    def test_scores_bio_and_reports_to_backend(self):
        status = self._orchestrator().handle({"body": json.dumps(_payload())})

        self.assertTrue(status.success)
        self.assertEqual(status.status_code, 200)
        self.assertEqual(status.state, InvocationState.DONE)
        self.assertTrue(status.callback_delivered)
        self.assertEqual(len(self.requests), 1)
        self.assertEqual(str(self.requests[0].url), f"http://backend.test{CALLBACK_PATH}")

        sent = self._sent()
        self.assertEqual(sent["applicationId"], "app-123")
        self.assertEqual(sent["score"], status.score)
        self.assertEqual(sent["matchedSkills"], ["Python", "Django"])
        self.assertFalse(sent["extractionUsed"])
        self.assertEqual(sent["processingInfo"]["extraction"]["source"], "bio")
        self.assertEqual(sent["processingInfo"]["scoring"]["totalRequiredSkills"], 3)
        self.assertIn("skillsMatch", sent["details"])

    def test_missing_application_id_is_fatal_without_callback(self):
        status = self._orchestrator(default_callback_target="http://backend.test").handle(
            _payload(applicationId=None)
        )
        self.assertFalse(status.success)
        self.assertTrue(status.fatal)
        self.assertIsNone(status.application_id)
        self.assertEqual(status.status_code, 400)
        self.assertEqual(self.requests, [])

    def test_missing_callback_target_is_fatal(self):
        status = self._orchestrator().handle(_payload(backendUrl=""))
        self.assertTrue(status.fatal)
        self.assertEqual(self.requests, [])

    def test_default_callback_target_and_trailing_slash(self):
        status = self._orchestrator(default_callback_target="http://fallback.test/").handle(
            _payload(backendUrl=None)
        )
        self.assertTrue(status.success)
        self.assertEqual(str(self.requests[0].url), f"http://fallback.test{CALLBACK_PATH}")

    def test_extraction_failure_falls_back_to_bio(self):
        extractor = _StaticExtractor(error=ExtractionError("textract down", code="service_error"))
        status = self._orchestrator(extractor=extractor).handle(
            _payload(resumeUrl="https://hire-resumes.s3.amazonaws.com/resumes/cv.pdf")
        )

        self.assertTrue(status.success)
        self.assertFalse(status.extraction_used)
        self.assertEqual(len(extractor.references), 1)
        sent = self._sent()
        self.assertFalse(sent["extractionUsed"])
        self.assertEqual(sent["processingInfo"]["extraction"]["warning"], "service_error")
        self.assertTrue(sent["processingInfo"]["extraction"]["hasResume"])

    def test_unexpected_extractor_error_falls_back_to_bio(self):
        extractor = _StaticExtractor(error=TimeoutError("slow"))
        status = self._orchestrator(extractor=extractor).handle(_payload(resumeUrl="s3://bucket/cv.pdf"))
        self.assertTrue(status.success)
        self.assertEqual(self._sent()["processingInfo"]["extraction"]["warning"], "unexpected")

    def test_extracted_text_replaces_bio(self):
        extractor = _StaticExtractor(
            lines=["Jane Doe", "Senior Backend Engineer", "Python, Django, PostgreSQL", "  "]
        )
        status = self._orchestrator(extractor=extractor).handle(_payload(resumeUrl="s3://bucket/cv.pdf"))

        self.assertTrue(status.success)
        self.assertTrue(status.extraction_used)
        sent = self._sent()
        self.assertTrue(sent["extractionUsed"])
        self.assertEqual(sent["processingInfo"]["extraction"]["source"], "extracted_resume")
        self.assertEqual(sent["matchedSkills"], ["Python", "Django", "PostgreSQL"])

    def test_empty_document_falls_back_to_bio(self):
        extractor = _StaticExtractor(lines=["", "   "])
        status = self._orchestrator(extractor=extractor).handle(_payload(resumeUrl="s3://bucket/cv.pdf"))
        self.assertFalse(status.extraction_used)
        self.assertEqual(self._sent()["processingInfo"]["extraction"]["warning"], "empty_document")

    def test_non_pdf_resume_is_not_extracted(self):
        extractor = _StaticExtractor(lines=["should not be read"])
        status = self._orchestrator(extractor=extractor).handle(_payload(resumeUrl="s3://bucket/cv.docx"))
        self.assertTrue(status.success)
        self.assertEqual(extractor.references, [])

    def test_scoring_failure_sends_error_report(self):
        with mock.patch(
            "resume_scoring.services.scoring_service.aggregate",
            side_effect=RuntimeError("scoring exploded"),
        ):
            status = self._orchestrator().handle(_payload())

        self.assertFalse(status.success)
        self.assertFalse(status.fatal)
        self.assertEqual(status.status_code, 500)
        self.assertEqual(status.failed_in, InvocationState.SCORING)
        self.assertEqual(status.error_type, "RuntimeError")
        self.assertTrue(status.callback_delivered)

        sent = self._sent()
        self.assertEqual(sent["applicationId"], "app-123")
        self.assertIs(sent["error"], True)
        self.assertEqual(sent["errorDetails"]["errorType"], "RuntimeError")
        self.assertEqual(sent["errorDetails"]["errorMessage"], "scoring exploded")
        self.assertNotIn("score", sent)

    def test_callback_failure_does_not_fail_scoring(self):
        self.callback_status = 503
        with self.assertLogs("resume_scoring.integrations.callback", level="ERROR"):
            status = self._orchestrator().handle(_payload())
        self.assertTrue(status.success)
        self.assertFalse(status.callback_delivered)
        self.assertEqual(len(self.requests), 1)

    def test_malformed_callback_address_is_logged_not_raised(self):
        for target in ("http://[::1", "http://exa\x00mple.com"):
            with self.subTest(target=target):
                with self.assertLogs("resume_scoring.integrations.callback", level="ERROR"):
                    status = self._orchestrator().handle(_payload(backendUrl=target))
                self.assertTrue(status.success)
                self.assertFalse(status.callback_delivered)
                self.assertEqual(status.state, InvocationState.DONE)
        self.assertEqual(self.requests, [])

    def test_response_body_shape(self):
        body = self._orchestrator().handle(_payload()).response_body()
        self.assertTrue(body["success"])
        self.assertEqual(body["applicationId"], "app-123")
        self.assertEqual(body["message"], "Resume scored successfully")
        self.assertIn("breakdown", body)
        self.assertIn("recommendation", body)

        fatal = self._orchestrator().handle({"jobTitle": "x"}).response_body()
        self.assertFalse(fatal["success"])
        self.assertEqual(fatal["applicationId"], "unknown")
        self.assertEqual(fatal["errorType"], "InvalidScoringRequest")


if __name__ == "__main__":
    unittest.main()

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Any, Protocol
from urllib.parse import unquote, urlparse

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from pypdf import PdfReader
from pypdf.errors import PyPdfError

from resume_scoring.core.config import Settings

logger = logging.getLogger(__name__)


class ExtractionError(RuntimeError):
    def __init__(self, message: str, *, code: str = "extraction_failed"):
        super().__init__(message)
        self.code = code


@dataclass(frozen=True)
class DocumentReference:
    bucket: str
    key: str

    @property
    def uri(self) -> str:
        return f"s3://{self.bucket}/{self.key}"


class DocumentTextExtractor(Protocol):
    def extract_lines(self, reference: DocumentReference) -> list[str]:
        """Return the document's text lines in reading order."""


def is_pdf_reference(resume_url: str | None) -> bool:
    return bool(resume_url) and ".pdf" in resume_url.lower()


def resolve_document_reference(resume_url: str, *, default_bucket: str | None = None) -> DocumentReference:
    """Turn a stored-resume pointer into a bucket/key pair.

    Accepts virtual-hosted object URLs (``https://<bucket>.s3.<region>.amazonaws.com/<key>``),
    path-style URLs (``https://s3.<region>.amazonaws.com/<bucket>/<key>``), ``s3://bucket/key``
    and bare keys when a default bucket is configured.
    """
    raw = (resume_url or "").strip()
    if not raw:
        raise ExtractionError("Resume reference is empty.", code="malformed_reference")

    parsed = urlparse(raw)
    if parsed.scheme == "s3":
        bucket, key = parsed.netloc, unquote(parsed.path.lstrip("/"))
    elif parsed.scheme in {"http", "https"}:
        host = (parsed.hostname or "").lower()
        path = unquote(parsed.path.lstrip("/"))
        if host.startswith("s3.") or host.startswith("s3-"):
            bucket, _, key = path.partition("/")
        else:
            bucket, key = host.split(".")[0], path
    elif not parsed.scheme and default_bucket:
        bucket, key = default_bucket, raw.lstrip("/")
    else:
        raise ExtractionError(f"Unsupported resume reference '{raw}'.", code="malformed_reference")

    if not bucket or not key:
        raise ExtractionError(f"Resume reference '{raw}' has no bucket or key.", code="malformed_reference")
    return DocumentReference(bucket=bucket, key=key)


def _client_config(timeout_s: float) -> Config:
    return Config(
        connect_timeout=timeout_s,
        read_timeout=timeout_s,
        retries={"max_attempts": 1, "mode": "standard"},
    )


class TextractExtractor:
    """Line-level text detection through the Textract DetectDocumentText API."""

    def __init__(
        self,
        *,
        region: str,
        endpoint_url: str | None = None,
        timeout_s: float = 20.0,
        client: Any | None = None,
    ) -> None:
        self._client = client or boto3.client(
            "textract",
            region_name=region,
            endpoint_url=endpoint_url,
            config=_client_config(timeout_s),
        )

    def extract_lines(self, reference: DocumentReference) -> list[str]:
        try:
            response = self._client.detect_document_text(
                Document={"S3Object": {"Bucket": reference.bucket, "Name": reference.key}}
            )
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "ClientError")
            raise ExtractionError(f"Textract rejected {reference.uri}: {code}", code="service_error") from exc
        except BotoCoreError as exc:
            raise ExtractionError(f"Textract call failed for {reference.uri}: {exc}", code="service_error") from exc

        return [
            block["Text"]
            for block in response.get("Blocks", [])
            if block.get("BlockType") == "LINE" and block.get("Text")
        ]


class PdfTextExtractor:
    """Downloads the PDF from the object store and extracts lines locally with pypdf."""

    def __init__(
        self,
        *,
        region: str,
        timeout_s: float = 20.0,
        client: Any | None = None,
    ) -> None:
        self._client = client or boto3.client("s3", region_name=region, config=_client_config(timeout_s))

    def _download(self, reference: DocumentReference) -> bytes:
        try:
            response = self._client.get_object(Bucket=reference.bucket, Key=reference.key)
            return response["Body"].read()
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "ClientError")
            raise ExtractionError(f"Could not download {reference.uri}: {code}", code="service_error") from exc
        except BotoCoreError as exc:
            raise ExtractionError(f"Could not download {reference.uri}: {exc}", code="service_error") from exc

    def extract_lines(self, reference: DocumentReference) -> list[str]:
        data = self._download(reference)
        try:
            reader = PdfReader(BytesIO(data))
            lines: list[str] = []
            for page in reader.pages:
                page_text = page.extract_text() or ""
                lines.extend(line.strip() for line in page_text.splitlines() if line.strip())
        except PyPdfError as exc:
            raise ExtractionError(f"PDF parsing failed for {reference.uri}: {exc}", code="unreadable_document") from exc
        return lines


def get_document_extractor(config: Settings) -> DocumentTextExtractor:
    if config.extraction_backend == "textract":
        return TextractExtractor(
            region=config.aws_region,
            endpoint_url=config.textract_endpoint_url,
            timeout_s=config.extraction_timeout_s,
        )
    if config.extraction_backend == "pdf":
        return PdfTextExtractor(region=config.aws_region, timeout_s=config.extraction_timeout_s)
    raise ValueError(f"Unsupported EXTRACTION_BACKEND='{config.extraction_backend}'")

from .callback import CallbackClient
from .extraction import (
    DocumentReference,
    DocumentTextExtractor,
    ExtractionError,
    PdfTextExtractor,
    TextractExtractor,
    get_document_extractor,
    is_pdf_reference,
    resolve_document_reference,
)

__all__ = [
    "CallbackClient",
    "DocumentReference",
    "DocumentTextExtractor",
    "ExtractionError",
    "PdfTextExtractor",
    "TextractExtractor",
    "get_document_extractor",
    "is_pdf_reference",
    "resolve_document_reference",
]

"""Extraction sub-package: page classification, chrome stripping, field and paragraph extraction."""

from .classify import is_event_url
from .event_info import extract_event_info
from .noise import strip_noise
from .paragraphs import ParagraphSelection, is_body_text, select_paragraphs

__all__ = [
    "extract_event_info",
    "is_body_text",
    "is_event_url",
    "select_paragraphs",
    "strip_noise",
    "ParagraphSelection",
]

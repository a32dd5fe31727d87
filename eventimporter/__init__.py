"""eventimporter - rebuild crawled event pages into importable document blocks.

Quick usage::

    from eventimporter import transform_html

    result = transform_html(html, "https://example.com/schedule-of-events/gala.html")
    print(result.path)        # /schedule-of-events/gala
    print(result.info)        # {"title": ..., "dates": ..., ...}
    print(result.to_html())   # hero section, disclaimer, metadata block

Importer contract (document already parsed)::

    from eventimporter import generate_document_path, transform_dom

    root = transform_dom(soup, url, html, params)
    path = generate_document_path(soup, url)

Site-specific transformers::

    from eventimporter import register_transformer

    register_transformer(MyTransformer())
"""

from eventimporter.importer import (
    ImportResult,
    PageImportError,
    generate_document_path,
    transform_dom,
    transform_html,
)
from eventimporter.items import EventInfo, ImportRules
from eventimporter.plugins import register_transformer

__version__ = "0.1.0"
__all__ = [
    "EventInfo",
    "ImportResult",
    "ImportRules",
    "PageImportError",
    "generate_document_path",
    "register_transformer",
    "transform_dom",
    "transform_html",
]

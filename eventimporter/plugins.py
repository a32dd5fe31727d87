"""eventimporter.plugins - registry for site-specific page transformers.

A transformer gets first refusal on every page whose URL it claims::

    from eventimporter import register_transformer

    class PressReleases:
        name = "press_releases"
        priority = 10

        def can_transform(self, url):
            return "/press/" in url

        def transform(self, document, url, params):
            body = document.body
            for aside in body.find_all("aside"):
                aside.decompose()
            return body

    register_transformer(PressReleases())

Each transformer receives its own copy of the parsed page.  Returning
``None`` from ``transform``, or raising, hands the untouched page back to the
built-in event/default handling.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from bs4 import BeautifulSoup, Tag


@runtime_checkable
class PageTransformerPlugin(Protocol):
    """Custom DOM transformer, tried before the built-in pipeline."""

    name: str
    priority: int  # Higher = tried first among registered plugins

    def can_transform(self, url: str) -> bool:
        """Return True if this plugin wants to handle *url*."""
        ...

    def transform(self, document: BeautifulSoup, url: str, params: dict[str, Any]) -> Tag | None:
        """Return the root element to convert, or None to fall through."""
        ...


_transformers: list[PageTransformerPlugin] = []


def register_transformer(plugin: PageTransformerPlugin) -> None:
    """Register a custom :class:`PageTransformerPlugin`."""
    _transformers.append(plugin)


def get_transformers() -> list[PageTransformerPlugin]:
    """Return registered transformers, highest priority first."""
    return sorted(_transformers, key=lambda p: p.priority, reverse=True)


def clear_plugins() -> None:
    """Remove all registered plugins. Primarily for use in tests."""
    _transformers.clear()

"""
Renderers module for documentation generation.

Provides renderers that turn parsed DataWeave modules into documents using
Jinja2 templates.
"""

from weavedoc.renderers.base import BaseRenderer
from weavedoc.renderers.markdown import MarkdownRenderer, order_modules

__all__ = [
    "BaseRenderer",
    "MarkdownRenderer",
    "order_modules",
]

"""Pluma renderers.

Renderers convert typed AST nodes into output formats.

Available Renderers:
- HtmlRenderer: Renders AST to HTML using HtmlBuilder

"""

from pluma.renderers.html import HtmlRenderer
from pluma.renderers.protocol import ASTRenderer

__all__ = ["ASTRenderer", "HtmlRenderer"]

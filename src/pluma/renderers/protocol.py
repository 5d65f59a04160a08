"""ASTRenderer protocol: the interface Markdown expects from a renderer.

Anything with ``render(document) -> str`` conforms. HtmlRenderer is the
bundled implementation; embedders can plug in their own tree builder.

Example:
    from pluma import Markdown
    from pluma.renderers.protocol import ASTRenderer

    class PlainText:
        def render(self, node: Document) -> str: ...

    md = Markdown(renderer=PlainText())

"""

from typing import Protocol

from pluma.nodes import Document


class ASTRenderer(Protocol):
    """Protocol for AST renderers."""

    def render(self, node: Document) -> str:
        """Render a Document AST to a string."""
        ...

"""Parse settings for Pluma.

Settings are an immutable value passed explicitly to every parse call
that can recurse. Nested blockquotes receive the very same instance as
their parent, so raw-HTML sanitization can never be relaxed by nesting.

Usage:
    from pluma import MarkdownSettings, parse

    doc = parse("<b>hi</b>", MarkdownSettings(xss_protect_raw_html=False))

    # From external configuration
    settings = MarkdownSettings.from_dict({"xss_protect_raw_html": False})

Thread Safety:
    MarkdownSettings is frozen. There is no module-level mutable state,
    so concurrent parses with different settings never interfere.

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True, slots=True)
class MarkdownSettings:
    """Immutable parse configuration.

    Attributes:
        xss_protect_raw_html: Run raw HTML blocks through the sanitizer
            before they are emitted unescaped.
        sanitizer: Optional replacement for the bundled sanitizer. Takes
            a raw HTML fragment and returns a safe, balanced fragment.
            None selects pluma.sanitize.sanitize_balance.

    """

    xss_protect_raw_html: bool = True
    sanitizer: Callable[[str], str] | None = None

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> MarkdownSettings:
        """Create settings from a mapping.

        Unknown keys are ignored so framework configuration can be passed
        through unfiltered.

        Args:
            config_dict: Mapping whose keys match MarkdownSettings fields.

        Returns:
            New MarkdownSettings instance.

        Example:
            >>> MarkdownSettings.from_dict({"xss_protect_raw_html": False, "x": 1})
            MarkdownSettings(xss_protect_raw_html=False, sanitizer=None)

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)

    def sanitize(self, fragment: str) -> str:
        """Apply the configured sanitizer to a raw HTML fragment.

        Returns the fragment untouched when protection is disabled.
        """
        if not self.xss_protect_raw_html:
            return fragment
        if self.sanitizer is not None:
            return self.sanitizer(fragment)

        from pluma.sanitize import sanitize_balance

        return sanitize_balance(fragment)


# Module-level default (reused, never recreated)
DEFAULT_SETTINGS: MarkdownSettings = MarkdownSettings()


__all__ = [
    "DEFAULT_SETTINGS",
    "MarkdownSettings",
]

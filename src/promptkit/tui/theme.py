"""
Semantic colouring for prompt output.

Widgets never pick raw colours; they ask the :class:`Theme` for a role
(``primary``, ``muted``, ``error`` ...).  A theme built with
``enabled=False`` returns text untouched, which is how ``NO_COLOR`` and
non-TTY streams are honoured.
"""

from __future__ import annotations

from promptkit.tui.ansi import style

# Role -> style keyword arguments
DEFAULT_ROLES: dict[str, dict[str, object]] = {
    "primary": {"fg": "cyan"},
    "muted": {"dim": True},
    "success": {"fg": "green"},
    "error": {"fg": "red"},
    "warning": {"fg": "yellow"},
    "title": {"bold": True},
    "match": {"fg": "cyan", "underline": True},
    "cursor": {"inverse": True},
}


class Theme:
    """
    Maps semantic roles to ANSI styles.

    Parameters
    ----------
    enabled:
        When ``False`` every method returns its input unchanged.
    roles:
        Optional overrides merged over :data:`DEFAULT_ROLES`.
    """

    def __init__(
        self,
        enabled: bool = True,
        roles: dict[str, dict[str, object]] | None = None,
    ) -> None:
        self.enabled = enabled
        self._roles = dict(DEFAULT_ROLES)
        if roles:
            self._roles.update(roles)

    def apply(self, role: str, text: str) -> str:
        """Style *text* with the named role."""
        if not self.enabled or not text:
            return text
        return style(text, **self._roles[role])  # type: ignore[arg-type]

    def primary(self, text: str) -> str:
        return self.apply("primary", text)

    def muted(self, text: str) -> str:
        return self.apply("muted", text)

    def success(self, text: str) -> str:
        return self.apply("success", text)

    def error(self, text: str) -> str:
        return self.apply("error", text)

    def warning(self, text: str) -> str:
        return self.apply("warning", text)

    def title(self, text: str) -> str:
        return self.apply("title", text)

    def match(self, text: str) -> str:
        return self.apply("match", text)

    def cursor(self, text: str) -> str:
        """Render the fake cursor cell (a space when at end of input)."""
        if not self.enabled:
            return text
        return self.apply("cursor", text or " ")

"""Holds the text of the single active uploaded document."""


class DocumentContextStore:
    """At most one document context; a new upload replaces the previous one."""

    def __init__(self) -> None:
        self._text: str | None = None

    def set_context(self, text: str) -> None:
        self._text = text

    def get_context(self) -> str | None:
        return self._text

    def clear(self) -> None:
        self._text = None

    @property
    def has_context(self) -> bool:
        return self._text is not None

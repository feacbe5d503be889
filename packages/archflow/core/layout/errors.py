"""Layout resolution errors."""

from __future__ import annotations


class LayoutReferenceError(KeyError):
    """Raised when a diagram references a node or container that does not exist.

    Unknown references are configuration errors; the element is never
    silently dropped.

    Attributes:
        kind: Kind of element referenced ("node" or "container").
        element_id: The missing id.
        referrer: Optional description of what held the reference.
    """

    def __init__(self, kind: str, element_id: str, referrer: str = "") -> None:
        self.kind = kind
        self.element_id = element_id
        self.referrer = referrer
        message = f"{kind.capitalize()} '{element_id}' not found in layout"
        if referrer:
            message = f"{message} (referenced by {referrer})"
        super().__init__(message)

    def __str__(self) -> str:
        return str(self.args[0])

"""Navigator port - redirects the operator's client."""

from typing import Protocol


class Navigator(Protocol):
    """Port for navigation side effects (sign-in redirect)."""

    def redirect(self, path: str) -> None: ...

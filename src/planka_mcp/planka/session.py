"""Agent session: login credentials plus the bearer token they buy."""

from __future__ import annotations


class PlankaSession:
    """Holds the agent's access token for the lifetime of the process.

    One session is created at startup and handed to the PlankaClient. The token
    is obtained on first use and never refreshed. Concurrent first calls may
    both log in; the last token written wins.
    """

    def __init__(self, email: str | None, password: str | None):
        self.email = email
        self.password = password
        self.token: str | None = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.email and self.password)

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def login_payload(self) -> dict[str, str]:
        return {"emailOrUsername": self.email or "", "password": self.password or ""}

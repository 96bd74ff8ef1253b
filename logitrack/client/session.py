"""
Client-side session state.

Holds the token, the signed-in user and the tenant slug. Signing out is a
single transition that clears everything and notifies listeners; when it is
caused by an expired token a one-shot notice is kept for the login screen.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

LOGIN_ROUTE = "/login"

SessionListener = Callable[["SessionStore", str], None]


class SessionStore:
    """In-memory session shared by the API client and the UI layer."""

    def __init__(self) -> None:
        self._token: Optional[str] = None
        self._user: Optional[Dict[str, Any]] = None
        self._tenant_slug: Optional[str] = None
        self._expired_notice = False
        self._listeners: List[SessionListener] = []
        # Route the UI should navigate to, set when the session ends
        self.redirect_to: Optional[str] = None

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        return self._user

    @property
    def role(self) -> Optional[str]:
        return self._user.get("role") if self._user else None

    @property
    def tenant_slug(self) -> Optional[str]:
        return self._tenant_slug

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def add_listener(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: SessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, event: str) -> None:
        for listener in list(self._listeners):
            listener(self, event)

    def login(self, token: str, user: Dict[str, Any], tenant_slug: Optional[str] = None) -> None:
        self._token = token
        self._user = dict(user)
        self._tenant_slug = tenant_slug
        self._expired_notice = False
        self.redirect_to = None
        self._notify("login")

    def set_tenant_slug(self, tenant_slug: Optional[str]) -> None:
        """Superadmins switch tenants by slug without signing in again."""
        self._tenant_slug = tenant_slug

    def logout(self, expired: bool = False) -> None:
        """
        Clear the session and signal navigation to the login route.

        Args:
            expired: True when the server rejected the token; records the
                "session expired" notice for the next login screen.
        """
        was_authenticated = self.is_authenticated
        self._token = None
        self._user = None
        self._tenant_slug = None
        self.redirect_to = LOGIN_ROUTE
        if expired:
            self._expired_notice = True
            logger.info("Session expired; redirecting to %s", LOGIN_ROUTE)
        if was_authenticated or expired:
            self._notify("expired" if expired else "logout")

    def consume_expired_notice(self) -> bool:
        """Return True once after an expiry, then False until the next one."""
        notice = self._expired_notice
        self._expired_notice = False
        return notice

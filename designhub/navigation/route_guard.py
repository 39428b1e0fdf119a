"""Authentication-aware navigation decisions."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Sequence


AUTH_ONLY_PATHS = ("/login", "/signup")


class AuthStatus(str, Enum):
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"

    @classmethod
    def from_flags(cls, is_authenticated: bool, is_loading: bool) -> "AuthStatus":
        if is_loading:
            return cls.LOADING
        return cls.AUTHENTICATED if is_authenticated else cls.UNAUTHENTICATED


class RouteAction(str, Enum):
    RENDER = "render"
    PLACEHOLDER = "placeholder"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class RouteDecision:
    """What the navigation layer should do with the requested page."""
    action: RouteAction
    target: Optional[str] = None
    state: Optional[Dict[str, Any]] = None
    replace: bool = False


@dataclass
class Location:
    """Current path plus the state the navigation layer attached to it."""
    pathname: str
    state: Dict[str, Any] = field(default_factory=dict)

    @property
    def return_path(self) -> Optional[str]:
        origin = (self.state or {}).get("from")
        if isinstance(origin, dict):
            return origin.get("pathname")
        return None


def resolve_route(
    auth_status: AuthStatus,
    require_auth: bool,
    current_path: str,
    saved_return_path: Optional[str] = None,
    redirect_to: str = "/login",
    auth_only_paths: Sequence[str] = AUTH_ONLY_PATHS,
    default_path: str = "/",
) -> RouteDecision:
    """
    Decide whether to render a page, show a placeholder or redirect.

    - While auth is loading nothing is decided; a placeholder is shown.
    - Guests asking for a protected page go to ``redirect_to``; the requested
      path travels in the redirect state as ``{"from": {"pathname": ...}}``.
    - Signed-in users on a login or signup page go back to where they were
      headed, or to ``default_path``.
    """
    auth_status = AuthStatus(auth_status)

    if auth_status is AuthStatus.LOADING:
        return RouteDecision(RouteAction.PLACEHOLDER)

    if require_auth and auth_status is AuthStatus.UNAUTHENTICATED:
        return RouteDecision(
            RouteAction.REDIRECT,
            target=redirect_to,
            state={"from": {"pathname": current_path}},
            replace=True,
        )

    if not require_auth and auth_status is AuthStatus.AUTHENTICATED and current_path in auth_only_paths:
        return RouteDecision(
            RouteAction.REDIRECT,
            target=saved_return_path or default_path,
            replace=True,
        )

    return RouteDecision(RouteAction.RENDER)


@dataclass
class AuthState:
    """Authentication context the guard reads but does not own."""
    token: Optional[str] = None
    user: Optional[Dict[str, Any]] = None
    is_loading: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None and self.user is not None


class ProtectedRoute:
    """Adapter from an auth context and a location to ``resolve_route``."""

    def __init__(self, auth: Any, require_auth: bool = True, redirect_to: str = "/login"):
        self.auth = auth
        self.require_auth = require_auth
        self.redirect_to = redirect_to

    def resolve(self, location: Location) -> RouteDecision:
        status = AuthStatus.from_flags(self.auth.is_authenticated, self.auth.is_loading)
        return resolve_route(
            status,
            self.require_auth,
            location.pathname,
            saved_return_path=location.return_path,
            redirect_to=self.redirect_to,
        )

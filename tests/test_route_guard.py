"""Route guard decisions."""

import pytest

from designhub.navigation import (
    AuthState,
    AuthStatus,
    Location,
    ProtectedRoute,
    RouteAction,
    resolve_route,
)


@pytest.mark.parametrize("require_auth", [True, False])
def test_loading_shows_placeholder(require_auth):
    decision = resolve_route(AuthStatus.LOADING, require_auth, "/dashboard")

    assert decision.action is RouteAction.PLACEHOLDER
    assert decision.target is None


def test_guest_is_sent_to_login_with_return_path():
    decision = resolve_route(AuthStatus.UNAUTHENTICATED, True, "/dashboard")

    assert decision.action is RouteAction.REDIRECT
    assert decision.target == "/login"
    assert decision.state == {"from": {"pathname": "/dashboard"}}
    assert decision.replace is True


def test_custom_redirect_target():
    decision = resolve_route("unauthenticated", True, "/orders", redirect_to="/signup")

    assert decision.target == "/signup"


@pytest.mark.parametrize("path", ["/login", "/signup"])
def test_signed_in_user_leaves_auth_pages(path):
    assert resolve_route(AuthStatus.AUTHENTICATED, False, path).target == "/"
    assert resolve_route(AuthStatus.AUTHENTICATED, False, path, saved_return_path="/cart").target == "/cart"


@pytest.mark.parametrize(
    "status, require_auth, path",
    [
        (AuthStatus.AUTHENTICATED, True, "/dashboard"),
        (AuthStatus.AUTHENTICATED, False, "/about"),
        (AuthStatus.UNAUTHENTICATED, False, "/login"),
        (AuthStatus.UNAUTHENTICATED, False, "/"),
    ],
)
def test_renders_otherwise(status, require_auth, path):
    assert resolve_route(status, require_auth, path).action is RouteAction.RENDER


def test_login_round_trip_returns_to_original_page():
    auth = AuthState()
    protected = ProtectedRoute(auth, require_auth=True)
    login_page = ProtectedRoute(auth, require_auth=False)

    decision = protected.resolve(Location("/dashboard"))
    assert decision.action is RouteAction.REDIRECT

    at_login = Location(decision.target, decision.state)
    assert login_page.resolve(at_login).action is RouteAction.RENDER

    auth.token = "token"
    auth.user = {"id": 1}
    decision = login_page.resolve(at_login)
    assert decision.action is RouteAction.REDIRECT
    assert decision.target == "/dashboard"

    assert protected.resolve(Location("/dashboard")).action is RouteAction.RENDER


def test_adapter_reports_loading():
    guard = ProtectedRoute(AuthState(is_loading=True))

    assert guard.resolve(Location("/dashboard")).action is RouteAction.PLACEHOLDER

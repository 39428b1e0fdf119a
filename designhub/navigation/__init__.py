from designhub.navigation.route_guard import (
	AUTH_ONLY_PATHS,
	AuthState,
	AuthStatus,
	Location,
	ProtectedRoute,
	RouteAction,
	RouteDecision,
	resolve_route,
)

__all__ = [
	"AUTH_ONLY_PATHS",
	"AuthState",
	"AuthStatus",
	"Location",
	"ProtectedRoute",
	"RouteAction",
	"RouteDecision",
	"resolve_route",
]

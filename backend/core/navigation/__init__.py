"""页面导航守卫。"""

from core.navigation.routes import Route, RouteTable, ROUTES
from core.navigation.guard import NavigationGuard, NavigationResult, Redirect

__all__ = ["Route", "RouteTable", "ROUTES", "NavigationGuard", "NavigationResult", "Redirect"]

from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import urlencode

from core.auth.store import SessionStore
from core.common.log import logger
from core.navigation.routes import (
    AUTHENTICATED_HOME_ROUTE,
    LOGIN_ROUTE,
    Route,
    RouteTable,
)


@dataclass(frozen=True)
class Redirect:
    name: str
    path: str
    query: Dict[str, str] = field(default_factory=dict)

    @property
    def url(self) -> str:
        if not self.query:
            return self.path
        return f"{self.path}?{urlencode(self.query)}"


@dataclass(frozen=True)
class NavigationResult:
    route: Optional[Route] = None
    redirect: Optional[Redirect] = None

    @property
    def allowed(self) -> bool:
        return self.redirect is None


class NavigationGuard:
    """路由守卫：会话初始化完成前不做任何判断，完成后按路由标记放行或重定向"""

    def __init__(self, session_store: SessionStore, routes: Optional[RouteTable] = None) -> None:
        self.session_store = session_store
        self.routes = routes or RouteTable()

    async def before_each(self, path: str, full_path: Optional[str] = None) -> NavigationResult:
        await self.session_store.wait_until_ready()

        route = self.routes.match(path)
        if route is None:
            return NavigationResult()

        authenticated = self.session_store.is_authenticated

        if route.requires_auth and not authenticated:
            login = self.routes.get(LOGIN_ROUTE)
            logger.debug(f"未登录访问 {route.path}，重定向到 {login.path}")
            return NavigationResult(
                route=route,
                redirect=Redirect(
                    name=login.name,
                    path=login.path,
                    query={"redirect": full_path or path},
                ),
            )

        if route.guest_only and authenticated:
            home = self.routes.get(AUTHENTICATED_HOME_ROUTE)
            return NavigationResult(
                route=route,
                redirect=Redirect(name=home.name, path=home.path),
            )

        return NavigationResult(route=route)

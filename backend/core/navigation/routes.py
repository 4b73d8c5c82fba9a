from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class Route:
    name: str
    path: str
    requires_auth: bool = False
    # 仅访客可见（登录、注册页），已登录用户会被引导到 dashboard
    guest_only: bool = False


ROUTES: Tuple[Route, ...] = (
    Route(name="home", path="/"),
    Route(name="login", path="/login", guest_only=True),
    Route(name="signup", path="/signup", guest_only=True),
    Route(name="dashboard", path="/dashboard", requires_auth=True),
)

LOGIN_ROUTE = "login"
AUTHENTICATED_HOME_ROUTE = "dashboard"


class RouteTable:
    def __init__(self, routes: Tuple[Route, ...] = ROUTES) -> None:
        self._by_path: Dict[str, Route] = {r.path: r for r in routes}
        self._by_name: Dict[str, Route] = {r.name: r for r in routes}

    def match(self, path: str) -> Optional[Route]:
        """按路径匹配路由，忽略查询串和末尾斜杠"""
        path = path.split("?", 1)[0]
        if len(path) > 1:
            path = path.rstrip("/")
        return self._by_path.get(path or "/")

    def get(self, name: str) -> Route:
        return self._by_name[name]

"""Route-table navigator used by the desktop shell.

Routes map to callables that raise the matching frame. The navigator keeps a
history stack so ``back`` can return to the previous screen.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from aya.domain.ports import NavigatorPort

ShowFn = Callable[[], None]


class RouteNavigator(NavigatorPort):
    def __init__(self) -> None:
        self._log = logging.getLogger(__name__)
        self._routes: Dict[str, ShowFn] = {}
        self.history: List[str] = []

    def register(self, route: str, show: ShowFn) -> None:
        self._routes[route] = show

    @property
    def current(self) -> Optional[str]:
        return self.history[-1] if self.history else None

    def push(self, route: str) -> None:
        show = self._resolve(route)
        self.history.append(route)
        show()

    def replace(self, route: str) -> None:
        show = self._resolve(route)
        if self.history:
            self.history[-1] = route
        else:
            self.history.append(route)
        show()

    def back(self) -> bool:
        if len(self.history) < 2:
            return False
        self.history.pop()
        self._routes[self.history[-1]]()
        return True

    def _resolve(self, route: str) -> ShowFn:
        try:
            return self._routes[route]
        except KeyError as exc:
            raise ValueError(f"Unknown route '{route}'") from exc


__all__ = ["RouteNavigator"]

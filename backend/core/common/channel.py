from __future__ import annotations

from typing import Callable, Generic, List, TypeVar

from core.common.log import logger

T = TypeVar("T")


class Subscription:
    """订阅句柄，调用 unsubscribe 后不再收到事件"""

    def __init__(self, channel: "Channel", handler: Callable) -> None:
        self._channel = channel
        self._handler = handler
        self.active = True

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        self._channel._remove(self._handler)


class Channel(Generic[T]):
    """进程内的类型化事件流：发布方 publish，消费方显式 subscribe/unsubscribe"""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._handlers: List[Callable[[T], None]] = []

    def subscribe(self, handler: Callable[[T], None]) -> Subscription:
        self._handlers.append(handler)
        return Subscription(self, handler)

    def _remove(self, handler: Callable[[T], None]) -> None:
        try:
            self._handlers.remove(handler)
        except ValueError:
            pass

    def publish(self, item: T) -> None:
        # 复制一份，回调中取消订阅不影响本轮分发
        for handler in list(self._handlers):
            try:
                handler(item)
            except Exception as e:
                # 单个订阅者失败不影响其它订阅者
                logger.error(f"事件分发失败 channel={self.name}: {e}")

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

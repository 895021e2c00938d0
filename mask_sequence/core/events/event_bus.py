"""
Event Bus - 回合事件总线

同步发布/订阅：publish在调用方的线程里依次执行订阅者，并保留最近的事件用于回放和测试。
"""

from __future__ import annotations
from collections import defaultdict, deque
from typing import Callable, Deque, Dict, Iterable, List, Optional, Protocol
import logging

from .domain_events import DomainEvent, EventType


class EventHandler(Protocol):
    """订阅者协议"""

    def handle(self, event: DomainEvent) -> None:
        ...

    def can_handle(self, event_type: EventType) -> bool:
        ...


class EventBus:
    """
    回合事件总线

    订阅者按事件类型登记；一个订阅者出错只会被记录，不影响其他订阅者，
    也不会撤销已经完成的行动。
    """

    def __init__(self, max_history_size: int = 1000):
        self._handlers: Dict[EventType, List[EventHandler]] = defaultdict(list)
        self._history: Deque[DomainEvent] = deque(maxlen=max_history_size)
        self._logger = logging.getLogger(__name__)

    def subscribe(self, event_types: Iterable[EventType], handler: EventHandler) -> None:
        """
        为一个或多个事件类型登记订阅者

        Args:
            event_types: 单个事件类型或事件类型集合
            handler: 订阅者
        """
        if isinstance(event_types, EventType):
            event_types = (event_types,)
        for event_type in event_types:
            self._handlers[event_type].append(handler)
            self._logger.debug(f"{handler.__class__.__name__} 订阅了 {event_type.name}")

    def publish(self, event: DomainEvent) -> None:
        self._history.append(event)
        self._logger.debug(f"发布事件 {event.event_type.name} ({event.aggregate_id})")

        for handler in list(self._handlers[event.event_type]):
            if not handler.can_handle(event.event_type):
                continue
            try:
                handler.handle(event)
            except Exception as e:
                self._logger.error(f"订阅者 {handler.__class__.__name__} 处理 {event.event_type.name} 失败: {e}",
                                   exc_info=True)

    def get_event_history(self,
                          event_type: Optional[EventType] = None,
                          aggregate_id: Optional[str] = None,
                          limit: Optional[int] = None) -> List[DomainEvent]:
        """
        按类型和聚合ID过滤最近的事件

        Args:
            event_type: 事件类型
            aggregate_id: 回合ID
            limit: 只返回最后limit个
        """
        events = [
            e for e in self._history
            if (event_type is None or e.event_type == event_type)
            and (aggregate_id is None or e.aggregate_id == aggregate_id)
        ]
        return events[-limit:] if limit else events

    def clear_history(self) -> None:
        self._history.clear()


def create_function_handler(func: Callable[[DomainEvent], None],
                            event_types: Optional[Iterable[EventType]] = None) -> EventHandler:
    """把普通函数包装成订阅者；event_types为None时接受所有类型"""
    accepted = frozenset(event_types) if event_types is not None else None

    class FunctionHandler:
        def handle(self, event: DomainEvent) -> None:
            func(event)

        def can_handle(self, event_type: EventType) -> bool:
            return accepted is None or event_type in accepted

    return FunctionHandler()


_global_event_bus: Optional[EventBus] = None


def get_event_bus() -> EventBus:
    """进程内共享的事件总线，未注入总线的服务使用它"""
    global _global_event_bus
    if _global_event_bus is None:
        _global_event_bus = EventBus()
    return _global_event_bus

"""
Events Module - 领域事件

该模块实现回合引擎的领域事件系统，包括事件定义、发布和历史记录。

Classes:
    DomainEvent: 领域事件基类
    EventBus: 同步事件总线
    EventHandler: 事件处理器协议

Functions:
    get_event_bus: 获取全局事件总线实例
    create_function_handler: 创建基于函数的事件处理器
"""

from .domain_events import (
    EventType,
    DomainEvent,
    RoundStartedEvent,
    PhaseChangedEvent,
    RoundActionEvent,
    ActionRefusedEvent,
    RoundEndedEvent,
)

from .event_bus import (
    EventHandler,
    EventBus,
    get_event_bus,
    create_function_handler,
)

__all__ = [
    "EventType",
    "DomainEvent",
    "RoundStartedEvent",
    "PhaseChangedEvent",
    "RoundActionEvent",
    "ActionRefusedEvent",
    "RoundEndedEvent",
    "EventHandler",
    "EventBus",
    "get_event_bus",
    "create_function_handler",
]

"""
Domain Events - 领域事件定义

该模块定义了回合引擎的领域事件类型。
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Any, Optional
from enum import Enum, auto
import time
import uuid


class EventType(Enum):
    """事件类型枚举"""
    # 回合生命周期事件
    ROUND_STARTED = auto()
    ROUND_ENDED = auto()

    # 阶段转换事件
    PHASE_CHANGED = auto()

    # 玩家行动事件
    CARD_PLACED = auto()
    BLIND_CAST = auto()
    CARD_SACRIFICED = auto()
    GOGGLES_USED = auto()
    BLIND_RESOLVED = auto()
    VOID_MODE_TOGGLED = auto()

    # 拒绝事件
    ACTION_REFUSED = auto()


@dataclass(frozen=True)
class DomainEvent:
    """
    领域事件基类

    Attributes:
        event_id: 事件唯一标识符
        event_type: 事件类型
        aggregate_id: 聚合根ID（round_id）
        timestamp: 事件发生时间戳
        data: 事件数据
        version: 事件版本号
        correlation_id: 关联ID，用于追踪相关事件
    """
    event_id: str
    event_type: EventType
    aggregate_id: str
    timestamp: float
    data: Dict[str, Any]
    version: int = 1
    correlation_id: Optional[str] = None

    @classmethod
    def create(
        cls,
        event_type: EventType,
        aggregate_id: str,
        data: Dict[str, Any],
        correlation_id: Optional[str] = None
    ) -> DomainEvent:
        """
        创建领域事件的工厂方法

        Args:
            event_type: 事件类型
            aggregate_id: 聚合根ID
            data: 事件数据
            correlation_id: 关联ID

        Returns:
            DomainEvent: 创建的事件实例
        """
        return cls(
            event_id=str(uuid.uuid4()),
            event_type=event_type,
            aggregate_id=aggregate_id,
            timestamp=time.time(),
            data=data,
            correlation_id=correlation_id
        )

    def to_dict(self) -> Dict[str, Any]:
        """将事件转换为字典格式"""
        return {
            'event_id': self.event_id,
            'event_type': self.event_type.name,
            'aggregate_id': self.aggregate_id,
            'timestamp': self.timestamp,
            'data': self.data,
            'version': self.version,
            'correlation_id': self.correlation_id
        }


@dataclass(frozen=True)
class RoundStartedEvent(DomainEvent):
    """回合开始事件"""

    @classmethod
    def create(
        cls,
        round_id: str,
        slot_count: int,
        deck_size: int,
        is_tutorial: bool = False,
        correlation_id: Optional[str] = None
    ) -> RoundStartedEvent:
        data = {
            'slot_count': slot_count,
            'deck_size': deck_size,
            'is_tutorial': is_tutorial
        }
        base_event = DomainEvent.create(EventType.ROUND_STARTED, round_id, data, correlation_id)
        return cls(**base_event.__dict__)


@dataclass(frozen=True)
class PhaseChangedEvent(DomainEvent):
    """阶段转换事件"""

    @classmethod
    def create(
        cls,
        round_id: str,
        from_phase: str,
        to_phase: str,
        correlation_id: Optional[str] = None
    ) -> PhaseChangedEvent:
        data = {
            'from_phase': from_phase,
            'to_phase': to_phase
        }
        base_event = DomainEvent.create(EventType.PHASE_CHANGED, round_id, data, correlation_id)
        return cls(**base_event.__dict__)


@dataclass(frozen=True)
class RoundActionEvent(DomainEvent):
    """玩家行动被接受后的事件"""

    @classmethod
    def create(
        cls,
        round_id: str,
        event_type: EventType,
        slot_index: Optional[int] = None,
        value: Optional[int] = None,
        correlation_id: Optional[str] = None
    ) -> RoundActionEvent:
        data = {
            'slot_index': slot_index,
            'value': value
        }
        base_event = DomainEvent.create(event_type, round_id, data, correlation_id)
        return cls(**base_event.__dict__)


@dataclass(frozen=True)
class ActionRefusedEvent(DomainEvent):
    """行动被拒绝事件"""

    @classmethod
    def create(
        cls,
        round_id: str,
        action_type: str,
        error_code: str,
        reason: str,
        correlation_id: Optional[str] = None
    ) -> ActionRefusedEvent:
        data = {
            'action_type': action_type,
            'error_code': error_code,
            'reason': reason
        }
        base_event = DomainEvent.create(EventType.ACTION_REFUSED, round_id, data, correlation_id)
        return cls(**base_event.__dict__)


@dataclass(frozen=True)
class RoundEndedEvent(DomainEvent):
    """回合结束事件"""

    @classmethod
    def create(
        cls,
        round_id: str,
        won: bool,
        profit: int,
        correlation_id: Optional[str] = None
    ) -> RoundEndedEvent:
        data = {
            'won': won,
            'profit': profit
        }
        base_event = DomainEvent.create(EventType.ROUND_ENDED, round_id, data, correlation_id)
        return cls(**base_event.__dict__)

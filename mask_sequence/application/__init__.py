"""
Application Layer - 应用服务层

该层实现CQRS模式，包含命令服务和查询服务。
应用层可以访问核心层，但不能被核心层访问。

Services:
    RoundCommandService: 回合命令服务（状态变更操作）
    RoundQueryService: 回合查询服务（只读操作）
    MetaSessionService: 会话层服务（档案、入场和结算）
    ConfigService: 配置服务

Types:
    CommandResult: 命令执行结果
    QueryResult: 查询结果
    RoundStartParams: 回合开始参数
    RoundExitReport: 回合结束报告
    RoundView: 回合视图
"""

from .types import ResultStatus, CommandResult, QueryResult
from .config_service import (
    ConfigService,
    ConfigType,
    RoundRulesConfig,
    LoggingConfig,
    ItemConfig,
    ItemKind,
    configure_logging,
    get_config_service,
)
from .dto import RoundStartParams, RoundExitReport, SlotView, RoundView
from .command_service import RoundCommandService, RoundSession
from .query_service import RoundQueryService
from .session_service import MetaSessionService, PlayerProfile, InventoryItem

__all__ = [
    # 类型
    "ResultStatus",
    "CommandResult",
    "QueryResult",
    "RoundStartParams",
    "RoundExitReport",
    "SlotView",
    "RoundView",

    # 配置
    "ConfigService",
    "ConfigType",
    "RoundRulesConfig",
    "LoggingConfig",
    "ItemConfig",
    "ItemKind",
    "configure_logging",
    "get_config_service",

    # 服务
    "RoundCommandService",
    "RoundSession",
    "RoundQueryService",
    "MetaSessionService",
    "PlayerProfile",
    "InventoryItem",
]

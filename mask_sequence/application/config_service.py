#!/usr/bin/env python3
"""
ConfigService - 配置管理服务

负责集中化管理所有游戏配置，包括：
- 回合规则配置
- 区域（Tier）目录
- 道具目录
- 日志配置

为Application层提供统一的配置管理接口。
"""

import logging
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, fields, replace
from enum import Enum

from ..core.deck.types import TierConfig
from .types import QueryResult


class ConfigType(Enum):
    """配置类型枚举"""
    ROUND_RULES = "round_rules"
    LOGGING = "logging"


class ItemKind(Enum):
    """道具类型"""
    PASSIVE = "PASSIVE"
    CONSUMABLE = "CONSUMABLE"


@dataclass
class RoundRulesConfig:
    """回合规则配置"""
    base_sacrifices: int = 1
    blind_multiplier: int = 5
    small_bet_bonus: int = 50
    expansion_chip_bonus: int = 5  # 每个扩容芯片增加的牌数
    jackpot_value: int = 100
    tutorial_sacrifices: int = 3
    tutorial_completion_bonus: int = 50
    initial_chips: int = 40
    freedom_cost: int = 800

    def __post_init__(self):
        """验证规则配置"""
        if self.base_sacrifices < 0:
            raise ValueError(f"base_sacrifices不能为负数，当前为: {self.base_sacrifices}")
        if self.blind_multiplier < 1:
            raise ValueError(f"blind_multiplier必须 >= 1，当前为: {self.blind_multiplier}")
        if self.expansion_chip_bonus < 0:
            raise ValueError(f"expansion_chip_bonus不能为负数，当前为: {self.expansion_chip_bonus}")
        if self.jackpot_value < 1:
            raise ValueError(f"jackpot_value必须 >= 1，当前为: {self.jackpot_value}")
        if self.tutorial_sacrifices < 0:
            raise ValueError(f"tutorial_sacrifices不能为负数，当前为: {self.tutorial_sacrifices}")
        if self.freedom_cost < 0:
            raise ValueError(f"freedom_cost不能为负数，当前为: {self.freedom_cost}")


@dataclass(frozen=True)
class ItemConfig:
    """道具配置"""
    item_id: str
    name: str
    description: str
    cost: int
    kind: ItemKind
    is_soulbound: bool


@dataclass
class LoggingConfig:
    """日志配置"""
    log_level: str = 'INFO'
    log_format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


TUTORIAL_TIER = TierConfig(tier_id="tutorial", name="模拟训练", slots=4, deck_size=10, cost=0, subtext="协议校准")

TIERS: List[TierConfig] = [
    TierConfig(tier_id="tier_1", name="贫民窟", slots=4, deck_size=15, cost=0, subtext="外围区域"),
    TierConfig(tier_id="tier_2", name="机密场", slots=5, deck_size=20, cost=50, subtext="常规博弈"),
    TierConfig(tier_id="tier_3", name="核心区", slots=6, deck_size=30, cost=100, subtext="高风险禁区"),
]

ITEM_FREEDOM_CONTRACT = "freedom_contract"
ITEM_JACKPOT_AMULET = "jackpot_amulet"
ITEM_EXPANSION_CHIP = "expansion_chip"
ITEM_EXTRA_SACRIFICE = "extra_sacrifice"
ITEM_VOID_GOGGLES = "void_goggles"
ITEM_SMALL_BET = "small_bet"

ITEMS: List[ItemConfig] = [
    ItemConfig(ITEM_FREEDOM_CONTRACT, "赎身契约", "最终目标。支付赎身费用，购回自由身，通关游戏。",
               RoundRulesConfig.freedom_cost, ItemKind.CONSUMABLE, True),
    ItemConfig(ITEM_JACKPOT_AMULET, "贪婪护符", "携带时，牌库中增加一张数字 100 的牌。灵魂绑定（死亡不掉落）。",
               100, ItemKind.PASSIVE, True),
    ItemConfig(ITEM_EXPANSION_CHIP, "扩容芯片", "被动道具。牌库上限 +5。可叠加，死亡掉落。",
               30, ItemKind.PASSIVE, False),
    ItemConfig(ITEM_EXTRA_SACRIFICE, "备用换牌", "局内增加 1 次换牌机会。",
               5, ItemKind.CONSUMABLE, False),
    ItemConfig(ITEM_VOID_GOGGLES, "虚空透镜", "消耗品。查看盲注的两张牌。",
               100, ItemKind.CONSUMABLE, False),
    ItemConfig(ITEM_SMALL_BET, "小额加注", "消耗品。本局获胜额外获得 50 筹码。",
               30, ItemKind.CONSUMABLE, False),
]


class ConfigService:
    """配置管理服务"""

    def __init__(self):
        """初始化配置服务"""
        self.logger = logging.getLogger(__name__)
        self._configs = {}
        self._tiers: Dict[str, TierConfig] = {tier.tier_id: tier for tier in TIERS}
        self._items: Dict[str, ItemConfig] = {item.item_id: item for item in ITEMS}
        self._load_default_configs()

    def _load_default_configs(self):
        """加载默认配置"""
        self._configs[ConfigType.ROUND_RULES] = {
            'default': RoundRulesConfig(),
            'generous': RoundRulesConfig(base_sacrifices=3),
            # 练习配置：正式回合和教程都多给换牌次数
            'tutorial': RoundRulesConfig(base_sacrifices=3, tutorial_sacrifices=5),
        }
        self._configs[ConfigType.LOGGING] = {
            'default': LoggingConfig(),
            'debug': LoggingConfig(log_level='DEBUG'),
            'quiet': LoggingConfig(log_level='WARNING', log_format='%(message)s'),
        }
        self.logger.debug("默认配置加载完成")

    def get_round_rules_config(self, profile: str = "default") -> QueryResult[RoundRulesConfig]:
        """
        获取回合规则配置

        Args:
            profile: 配置名 (default, generous, tutorial)

        Returns:
            查询结果，包含回合规则配置
        """
        config_profiles = self._configs.get(ConfigType.ROUND_RULES, {})
        if profile not in config_profiles:
            self.logger.warning(f"未找到回合规则配置 '{profile}'，使用默认配置")
            profile = "default"
        return QueryResult.success_result(config_profiles[profile])

    def get_logging_config(self, profile: str = "default") -> QueryResult[LoggingConfig]:
        """
        获取日志配置

        Args:
            profile: 配置名 (default, debug, quiet)
        """
        config_profiles = self._configs.get(ConfigType.LOGGING, {})
        if profile not in config_profiles:
            self.logger.warning(f"未找到日志配置 '{profile}'，使用默认配置")
            profile = "default"
        return QueryResult.success_result(config_profiles[profile])

    def get_tier(self, tier_id: str) -> QueryResult[TierConfig]:
        """按ID获取区域配置"""
        if tier_id == TUTORIAL_TIER.tier_id:
            return QueryResult.success_result(TUTORIAL_TIER)
        tier = self._tiers.get(tier_id)
        if tier is None:
            return QueryResult.failure_result(
                f"未知的区域: {tier_id}",
                error_code="TIER_NOT_FOUND"
            )
        return QueryResult.success_result(tier)

    def list_tiers(self) -> QueryResult[List[TierConfig]]:
        """获取所有可进入的区域（不含教程）"""
        return QueryResult.success_result(list(self._tiers.values()))

    def get_item(self, item_id: str) -> QueryResult[ItemConfig]:
        """按ID获取道具配置"""
        item = self._items.get(item_id)
        if item is None:
            return QueryResult.failure_result(
                f"未知的道具: {item_id}",
                error_code="ITEM_NOT_FOUND"
            )
        return QueryResult.success_result(self._apply_rules(item))

    def list_items(self) -> QueryResult[List[ItemConfig]]:
        return QueryResult.success_result([self._apply_rules(item) for item in self._items.values()])

    def update_config(self, config_type: ConfigType, profile: str, updates: Dict[str, Any]) -> QueryResult[bool]:
        """
        更新配置

        更新后的配置会重新校验，校验失败时保留原配置。

        Args:
            config_type: 配置类型
            profile: 配置名
            updates: 更新的配置项

        Returns:
            查询结果，包含更新是否成功
        """
        if config_type not in self._configs:
            return QueryResult.failure_result(
                f"配置类型 {config_type} 不存在",
                error_code="CONFIG_TYPE_NOT_FOUND"
            )

        config_profiles = self._configs[config_type]
        if profile not in config_profiles:
            return QueryResult.failure_result(
                f"配置 {profile} 不存在",
                error_code="CONFIG_PROFILE_NOT_FOUND"
            )

        current_config = config_profiles[profile]
        known = {f.name for f in fields(current_config)}
        for key in updates:
            if key not in known:
                self.logger.warning(f"配置项 {key} 不存在于 {config_type.value}.{profile} 中")

        try:
            config_profiles[profile] = replace(
                current_config, **{k: v for k, v in updates.items() if k in known}
            )
        except ValueError as e:
            return QueryResult.failure_result(
                f"更新配置失败: {e}",
                error_code="UPDATE_CONFIG_FAILED"
            )

        self.logger.info(f"配置 {config_type.value}.{profile} 更新成功")
        return QueryResult.success_result(True)

    def _apply_rules(self, item: ItemConfig) -> ItemConfig:
        """赎身契约的价格取自默认回合规则"""
        if item.item_id != ITEM_FREEDOM_CONTRACT:
            return item
        rules = self._configs[ConfigType.ROUND_RULES]['default']
        return replace(item, cost=rules.freedom_cost)


def configure_logging(config: LoggingConfig) -> None:
    """按日志配置初始化根日志器"""
    logging.basicConfig(level=getattr(logging, config.log_level.upper(), logging.INFO),
                        format=config.log_format)


# 全局配置服务实例
_config_service_instance: Optional[ConfigService] = None


def get_config_service() -> ConfigService:
    """获取全局配置服务实例"""
    global _config_service_instance
    if _config_service_instance is None:
        _config_service_instance = ConfigService()
    return _config_service_instance

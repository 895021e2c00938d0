"""
Meta Session Service - 会话层服务

回合之外的玩家档案：筹码、场次和携带的道具。
会话层只通过RoundStartParams开启回合、通过RoundExitReport结算回合，
从不读取回合内部状态。
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import List, Optional

from .config_service import (
    ITEM_EXPANSION_CHIP,
    ITEM_EXTRA_SACRIFICE,
    ITEM_FREEDOM_CONTRACT,
    ITEM_JACKPOT_AMULET,
    ITEM_SMALL_BET,
    ITEM_VOID_GOGGLES,
    ConfigService,
    get_config_service,
)
from .dto import RoundExitReport, RoundStartParams
from .types import CommandResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InventoryItem:
    """背包中的一件道具实例"""
    uuid: str
    item_id: str
    name: str
    is_soulbound: bool = False


@dataclass
class PlayerProfile:
    """玩家档案"""
    chips: int
    runs: int = 0
    loadout: List[InventoryItem] = field(default_factory=list)
    has_won: bool = False

    def count_items(self, item_id: str) -> int:
        return sum(1 for item in self.loadout if item.item_id == item_id)

    def has_item(self, item_id: str) -> bool:
        return self.count_items(item_id) > 0

    def remove_one(self, item_id: str) -> bool:
        """移除一件指定道具，返回是否找到"""
        for i, item in enumerate(self.loadout):
            if item.item_id == item_id:
                del self.loadout[i]
                return True
        return False


class MetaSessionService:
    """会话层服务"""

    def __init__(self, config_service: Optional[ConfigService] = None):
        self._config_service = config_service or get_config_service()

    def create_profile(self, chips: Optional[int] = None) -> PlayerProfile:
        """创建新档案，默认使用配置中的初始筹码"""
        if chips is None:
            chips = self._config_service.get_round_rules_config().data.initial_chips
        return PlayerProfile(chips=chips)

    def grant_item(self, profile: PlayerProfile, item_id: str) -> CommandResult:
        """不花费筹码地向背包加入一件道具"""
        item_result = self._config_service.get_item(item_id)
        if not item_result.success:
            return CommandResult.validation_error(item_result.message, error_code=item_result.error_code)

        config = item_result.data
        item = InventoryItem(
            uuid=str(uuid.uuid4()),
            item_id=config.item_id,
            name=config.name,
            is_soulbound=config.is_soulbound,
        )
        profile.loadout.append(item)
        return CommandResult.success_result(f"获得了 {config.name}", data={'item': item})

    def purchase_item(self, profile: PlayerProfile, item_id: str) -> CommandResult:
        """
        购买道具

        赎身契约不进入背包，购买即通关。

        Returns:
            命令执行结果；筹码不足时为业务规则违反
        """
        item_result = self._config_service.get_item(item_id)
        if not item_result.success:
            return CommandResult.validation_error(item_result.message, error_code=item_result.error_code)

        config = item_result.data
        if profile.chips < config.cost:
            return CommandResult.business_rule_violation(
                f"筹码不足: 需要 {config.cost}，当前 {profile.chips}",
                error_code="INSUFFICIENT_CHIPS"
            )

        profile.chips -= config.cost
        if item_id == ITEM_FREEDOM_CONTRACT:
            profile.has_won = True
            logger.info("购买了赎身契约，游戏通关")
            return CommandResult.success_result("自由了。")
        return self.grant_item(profile, item_id)

    def build_start_params(self, profile: PlayerProfile, tier_id: str) -> CommandResult:
        """
        支付区域入场费，并按背包道具生成回合参数

        Args:
            profile: 玩家档案，成功时扣除入场费
            tier_id: 区域ID

        Returns:
            命令执行结果，data['params']为RoundStartParams
        """
        tier_result = self._config_service.get_tier(tier_id)
        if not tier_result.success:
            return CommandResult.validation_error(tier_result.message, error_code=tier_result.error_code)

        tier = tier_result.data
        if profile.chips < tier.cost:
            return CommandResult.business_rule_violation(
                f"筹码不足以进入 {tier.name}: 需要 {tier.cost}，当前 {profile.chips}",
                error_code="INSUFFICIENT_CHIPS"
            )

        rules = self._config_service.get_round_rules_config().data
        params = RoundStartParams(
            tier_slots=tier.slots,
            tier_deck_size=tier.deck_size,
            expansion_bonus=profile.count_items(ITEM_EXPANSION_CHIP) * rules.expansion_chip_bonus,
            include_jackpot=profile.has_item(ITEM_JACKPOT_AMULET),
            base_sacrifices=rules.base_sacrifices,
            extra_sacrifice_granted=profile.has_item(ITEM_EXTRA_SACRIFICE),
            small_bet_granted=profile.has_item(ITEM_SMALL_BET),
            goggles_granted=profile.has_item(ITEM_VOID_GOGGLES),
        )
        profile.chips -= tier.cost
        logger.info(f"进入 {tier.name}，支付 {tier.cost} 筹码")
        return CommandResult.success_result(f"进入 {tier.name}", data={'params': params})

    def settle_round(self, profile: PlayerProfile, report: RoundExitReport) -> CommandResult:
        """
        按结束报告结算回合

        获胜：加上收益，场次+1，每件已消耗的消耗品移除一件。
        失败：只保留灵魂绑定的道具。
        教程：获胜时给予固定奖励，不改动背包。
        """
        if report.is_tutorial:
            if report.won:
                bonus = self._config_service.get_round_rules_config().data.tutorial_completion_bonus
                profile.chips += bonus
                return CommandResult.success_result(f"教程完成，获得 {bonus} 筹码", data={'chips_delta': bonus})
            return CommandResult.success_result("教程结束", data={'chips_delta': 0})

        if not report.won:
            lost = [item.name for item in profile.loadout if not item.is_soulbound]
            profile.loadout = [item for item in profile.loadout if item.is_soulbound]
            logger.info(f"回合失败，失去道具: {lost}")
            return CommandResult.success_result("回合失败", data={'chips_delta': 0, 'lost_items': lost})

        consumed = []
        for flag, item_id in (
            (report.consumed_extra_sacrifice, ITEM_EXTRA_SACRIFICE),
            (report.consumed_small_bet, ITEM_SMALL_BET),
            (report.consumed_goggles, ITEM_VOID_GOGGLES),
        ):
            if flag and profile.remove_one(item_id):
                consumed.append(item_id)

        profile.chips += report.profit
        profile.runs += 1
        logger.info(f"回合获胜，收益 {report.profit}，消耗 {consumed}")
        return CommandResult.success_result(
            f"获得 {report.profit} 筹码",
            data={'chips_delta': report.profit, 'consumed_items': consumed}
        )

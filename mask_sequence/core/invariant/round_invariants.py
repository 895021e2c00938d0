"""
回合不变量检查器

检查卡牌守恒、基座生命周期、换牌预算和阶段一致性。
"""

import time
import uuid
from typing import Dict, List, Optional

from ..round.round_state import RoundState
from ..round.types import RoundPhase
from ..slots.types import ALLOWED_SLOT_TRANSITIONS
from .types import InvariantCheckResult, InvariantError, InvariantType, InvariantViolation

__all__ = ['RoundInvariants']


class RoundInvariants:
    """回合不变量检查器

    check_all 比较一次行动前后的两个快照；没有前一快照时只检查单个快照的性质。
    """

    def check_all(self, after: RoundState, before: Optional[RoundState] = None,
                  raise_on_violation: bool = False) -> Dict[InvariantType, InvariantCheckResult]:
        """检查所有不变量

        Args:
            after: 行动后的快照
            before: 行动前的快照
            raise_on_violation: 是否在出现严重违反时抛出异常

        Returns:
            Dict[InvariantType, InvariantCheckResult]: 检查结果字典

        Raises:
            InvariantError: 当raise_on_violation=True且有严重违反时
        """
        results = {
            InvariantType.CARD_CONSERVATION: self.check_card_conservation(after),
            InvariantType.SLOT_LIFECYCLE: self.check_slot_lifecycle(before, after),
            InvariantType.SACRIFICE_BUDGET: self.check_sacrifice_budget(after),
            InvariantType.PHASE_CONSISTENCY: self.check_phase_consistency(after),
        }

        if raise_on_violation:
            critical = [
                v for result in results.values()
                for v in result.violations if v.severity == 'CRITICAL'
            ]
            if critical:
                raise InvariantError(f"发现{len(critical)}个严重不变量违反", critical)
        return results

    def check_card_conservation(self, state: RoundState) -> InvariantCheckResult:
        """每张牌恰好位于牌库、手牌、基座或弃牌堆之一"""
        start = time.time()
        violations = []
        accounted = state.cards_accounted()
        if accounted != state.total_cards:
            violations.append(self._violation(
                InvariantType.CARD_CONSERVATION,
                f"卡牌不守恒: 生成 {state.total_cards} 张，当前可追踪 {accounted} 张",
                {'total_cards': state.total_cards, 'accounted': accounted},
            ))
        return InvariantCheckResult.create(InvariantType.CARD_CONSERVATION, violations, time.time() - start)

    def check_slot_lifecycle(self, before: Optional[RoundState], after: RoundState) -> InvariantCheckResult:
        """基座只能沿 EMPTY→OPEN 或 EMPTY→BLIND_PENDING→BLIND_RESOLVED 前进"""
        start = time.time()
        violations: List[InvariantViolation] = []
        if before is not None:
            if len(before.slots) != len(after.slots):
                violations.append(self._violation(
                    InvariantType.SLOT_LIFECYCLE,
                    f"基座数量变化: {len(before.slots)} -> {len(after.slots)}",
                    {},
                ))
            for old, new in zip(before.slots, after.slots):
                if old.state == new.state:
                    if old != new:
                        violations.append(self._violation(
                            InvariantType.SLOT_LIFECYCLE,
                            f"基座 {old.index} 在状态 {old.state.name} 下内容被修改",
                            {'index': old.index},
                        ))
                elif new.state not in ALLOWED_SLOT_TRANSITIONS[old.state]:
                    violations.append(self._violation(
                        InvariantType.SLOT_LIFECYCLE,
                        f"基座 {old.index} 非法转换: {old.state.name} -> {new.state.name}",
                        {'index': old.index, 'from': old.state.name, 'to': new.state.name},
                    ))
        return InvariantCheckResult.create(InvariantType.SLOT_LIFECYCLE, violations, time.time() - start)

    def check_sacrifice_budget(self, state: RoundState) -> InvariantCheckResult:
        start = time.time()
        violations = []
        budget = state.budget
        ceiling = budget.base + (1 if budget.extra_granted else 0)
        if not 0 <= budget.remaining <= ceiling:
            violations.append(self._violation(
                InvariantType.SACRIFICE_BUDGET,
                f"换牌次数越界: {budget.remaining}，上限 {ceiling}",
                {'remaining': budget.remaining, 'ceiling': ceiling},
            ))
        return InvariantCheckResult.create(InvariantType.SACRIFICE_BUDGET, violations, time.time() - start)

    def check_phase_consistency(self, state: RoundState) -> InvariantCheckResult:
        """结果阶段不能早于盲注揭示；揭示阶段要求基座已填满"""
        start = time.time()
        violations = []
        if state.phase == RoundPhase.WON and not state.slots.is_complete():
            violations.append(self._violation(
                InvariantType.PHASE_CONSISTENCY,
                "WON 阶段存在未完成的基座",
                {'phase': state.phase.name},
            ))
        if state.phase == RoundPhase.REVELATION and not state.slots.is_filled():
            violations.append(self._violation(
                InvariantType.PHASE_CONSISTENCY,
                "REVELATION 阶段存在空基座",
                {'phase': state.phase.name},
            ))
        return InvariantCheckResult.create(InvariantType.PHASE_CONSISTENCY, violations, time.time() - start)

    @staticmethod
    def _violation(invariant_type: InvariantType, description: str,
                   context: dict, severity: str = 'CRITICAL') -> InvariantViolation:
        return InvariantViolation(
            invariant_type=invariant_type,
            violation_id=uuid.uuid4().hex[:8],
            description=description,
            severity=severity,
            timestamp=time.time(),
            context=context,
        )

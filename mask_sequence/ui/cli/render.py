"""隐藏序列CLI渲染模块.

这个模块负责将回合视图渲染为命令行文本，
实现显示逻辑与回合逻辑的分离。
"""

from typing import List

from mask_sequence.application import RoundExitReport, RoundView, SlotView

SLOT_WIDTH = 7


class CLIRenderer:
    """CLI渲染器.

    所有渲染方法都是纯函数，仅依赖传入的视图数据。
    """

    @staticmethod
    def render_header(title: str, chips: int) -> str:
        lines = [
            "=== 隐藏序列 ===",
            f"{title} | 筹码: {chips}",
        ]
        return "\n".join(lines)

    @staticmethod
    def render_slot(slot: SlotView) -> str:
        """渲染单个基座.

        Args:
            slot: 基座视图

        Returns:
            固定宽度的基座文本
        """
        if slot.state == "EMPTY":
            text = "[ ]"
        elif slot.state == "BLIND_PENDING":
            if slot.candidate_values:
                text = "[?" + "/".join(str(v) for v in slot.candidate_values) + "]"
            else:
                text = "[??]"
        elif slot.state == "BLIND_RESOLVED":
            text = f"[{slot.value}*]"
        else:
            text = f"[{slot.value}]"
        return text.center(SLOT_WIDTH)

    @staticmethod
    def render_round(view: RoundView) -> str:
        """渲染当前回合状态.

        Args:
            view: 回合视图

        Returns:
            多行文本
        """
        lines: List[str] = []
        lines.append(f"阶段: {view.phase}")
        lines.append("".join(CLIRenderer.render_slot(slot) for slot in view.slots))
        lines.append("".join(f"{slot.index + 1}".center(SLOT_WIDTH) for slot in view.slots))

        if view.hand_value is not None:
            jackpot = " (大奖)" if view.hand_is_jackpot else ""
            lines.append(f"手牌: {view.hand_value}{jackpot}")
        else:
            lines.append("手牌: 无")

        status = [
            f"牌库: {view.deck_count}",
            f"换牌: {view.sacrifices_left}",
            f"预计收益: {view.potential_profit}",
        ]
        if view.void_mode:
            status.append("隐藏模式")
        if view.goggles_available:
            status.append("透镜可用")
        lines.append(" | ".join(status))

        if view.messages:
            lines.append("")
            lines.extend(f"> {message}" for message in view.messages)
        if view.tutorial_text:
            lines.append("")
            lines.append(f"[教程] {view.tutorial_text}")
        return "\n".join(lines)

    @staticmethod
    def render_actions(actions: List[str]) -> str:
        return "可用行动: " + ", ".join(actions) if actions else "没有可用行动"

    @staticmethod
    def render_report(report: RoundExitReport) -> str:
        if report.won:
            return f"序列成立。收益: {report.profit}"
        return "序列崩溃。本回合没有收益。"

    @staticmethod
    def render_help() -> str:
        lines = [
            "命令:",
            "  place N       把手牌放入基座 N",
            "  blind N       向基座 N 隐藏出牌（盲抽两张）",
            "  select N      按当前模式选择基座 N",
            "  sacrifice     换牌",
            "  void          切换隐藏模式",
            "  peek          使用透镜查看接下来的两张牌",
            "  commit blind N | commit sacrifice   透镜查看后的决定",
            "  resolve N V   揭示基座 N，选择数值 V",
            "  quit          放弃本回合",
        ]
        return "\n".join(lines)

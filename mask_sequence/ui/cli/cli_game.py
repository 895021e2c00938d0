"""隐藏序列CLI游戏界面.

这个模块提供命令行界面的回合实现，通过应用层服务驱动回合。
"""

import logging
from typing import Optional, Sequence

import click

from mask_sequence.application import (
    CommandResult,
    MetaSessionService,
    PlayerProfile,
    ResultStatus,
    RoundCommandService,
    RoundQueryService,
    configure_logging,
    get_config_service,
)
from mask_sequence.core.events import DomainEvent, EventBus, EventType, create_function_handler

from .input_handler import CLIInputHandler, ParsedCommand
from .render import CLIRenderer

logger = logging.getLogger(__name__)


class MaskSequenceCLI:
    """隐藏序列CLI游戏界面.

    一次只运行一个回合；回合结束后通过会话层结算。
    """

    def __init__(self, profile: Optional[PlayerProfile] = None):
        """初始化CLI游戏.

        Args:
            profile: 玩家档案，None时创建新档案
        """
        config_service = get_config_service()
        event_bus = EventBus()
        event_bus.subscribe(EventType.ACTION_REFUSED, create_function_handler(self._on_refused))
        event_bus.subscribe(EventType.ROUND_ENDED, create_function_handler(self._on_round_ended))
        self.command_service = RoundCommandService(event_bus=event_bus, config_service=config_service)
        self.query_service = RoundQueryService(self.command_service)
        self.session_service = MetaSessionService(config_service)
        self.profile = profile or self.session_service.create_profile()

    def play(self, tier_id: str, seed: Optional[int] = None) -> bool:
        """进入区域并运行一个正式回合.

        Returns:
            回合是否获胜；无法进入区域时返回False
        """
        params_result = self.session_service.build_start_params(self.profile, tier_id)
        if not params_result.success:
            click.echo(f"无法进入: {params_result.message}")
            return False

        start_result = self.command_service.start_round(params_result.data['params'], seed=seed)
        if not start_result.success:
            click.echo(f"回合开始失败: {start_result.message}")
            return False

        click.echo(CLIRenderer.render_header(tier_id, self.profile.chips))
        return self._run_round(start_result.data['round_id'])

    def tutorial(self) -> bool:
        """运行教程回合"""
        start_result = self.command_service.start_tutorial()
        click.echo(CLIRenderer.render_header("模拟训练", self.profile.chips))
        return self._run_round(start_result.data['round_id'])

    def _run_round(self, round_id: str) -> bool:
        click.echo(CLIRenderer.render_help())
        try:
            while not self._show_round(round_id):
                command = CLIInputHandler.read_command()
                result = self._dispatch(round_id, command)
                # 行动被拒绝时由ACTION_REFUSED订阅者输出
                if result is not None and result.status == ResultStatus.SYSTEM_ERROR:
                    click.echo(f"错误: {result.message}")
        except click.Abort:
            click.echo("输入结束，放弃本回合")
            self.command_service.abandon(round_id)
            self._show_round(round_id)

        finish_result = self.command_service.finish_round(round_id)
        report = finish_result.data['report']
        click.echo(CLIRenderer.render_report(report))
        settle_result = self.session_service.settle_round(self.profile, report)
        click.echo(f"{settle_result.message} | 当前筹码: {self.profile.chips}")
        return report.won

    def _on_refused(self, event: DomainEvent) -> None:
        click.echo(f"拒绝: {event.data['reason']}")

    def _on_round_ended(self, event: DomainEvent) -> None:
        logger.info(f"回合 {event.aggregate_id} 结束: won={event.data['won']}, profit={event.data['profit']}")

    def _show_round(self, round_id: str) -> bool:
        """显示回合状态，返回回合是否已结束"""
        view = self.query_service.get_round_view(round_id).data
        click.echo("")
        click.echo(CLIRenderer.render_round(view))
        actions = self.query_service.get_available_actions(round_id).data
        if actions:
            click.echo(CLIRenderer.render_actions(actions))
        return view.phase in ("WON", "LOST")

    def _dispatch(self, round_id: str, command: ParsedCommand) -> Optional[CommandResult]:
        service = self.command_service
        if command.name == 'place':
            return service.place(round_id, command.args[0])
        if command.name == 'blind':
            return service.cast_blind(round_id, command.args[0])
        if command.name == 'select':
            return service.select_slot(round_id, command.args[0])
        if command.name == 'sacrifice':
            return service.sacrifice(round_id)
        if command.name == 'void':
            return service.toggle_void_mode(round_id)
        if command.name == 'resolve':
            return service.resolve_blind(round_id, command.args[0], command.args[1])
        if command.name == 'commit':
            slot_index = command.args[0] if command.args else None
            return service.commit_peek(round_id, command.use_blind, slot_index)
        if command.name == 'peek':
            result = service.peek(round_id)
            if result.success:
                click.echo(f"透镜: 接下来的两张牌是 {result.data['values']}")
            return result
        if command.name == 'quit':
            return service.abandon(round_id)
        click.echo(CLIRenderer.render_help())
        return None


@click.group()
@click.option('--log-profile', default='quiet',
              type=click.Choice(['default', 'debug', 'quiet']),
              help='日志配置')
def main(log_profile: str) -> None:
    """隐藏序列：把数字按递增顺序放入基座。"""
    configure_logging(get_config_service().get_logging_config(log_profile).data)


@main.command()
@click.option('--tier', 'tier_id', default='tier_1', help='区域ID (tier_1, tier_2, tier_3)')
@click.option('--seed', type=int, default=None, help='洗牌种子')
@click.option('--chips', type=int, default=None, help='初始筹码')
@click.option('--item', 'items', multiple=True, help='携带的道具ID，可重复')
def play(tier_id: str, seed: Optional[int], chips: Optional[int], items: Sequence[str]) -> None:
    """进入区域进行一个回合"""
    cli = MaskSequenceCLI()
    if chips is not None:
        cli.profile.chips = chips
    for item_id in items:
        result = cli.session_service.grant_item(cli.profile, item_id)
        if not result.success:
            raise click.BadParameter(result.message, param_hint='--item')
    cli.play(tier_id, seed)


@main.command()
def tutorial() -> None:
    """运行教程回合"""
    MaskSequenceCLI().tutorial()


if __name__ == "__main__":
    main()

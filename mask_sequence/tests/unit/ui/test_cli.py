"""
CLI Unit Tests

测试命令解析和通过click.testing驱动的完整回合。
"""

import pytest
from click.testing import CliRunner

from mask_sequence.application import RoundStartParams
from mask_sequence.ui.cli import CLIInputHandler, MaskSequenceCLI, ParsedCommand, main

TUTORIAL_INPUT = "place 1\nplace 2\nsacrifice\nvoid\nblind 3\nplace 4\nresolve 3 10\n"


class TestParseCommand:

    @pytest.mark.parametrize("line,expected", [
        ("place 1", ParsedCommand('place', (0,))),
        ("P 4", ParsedCommand('place', (3,))),
        ("blind 2", ParsedCommand('blind', (1,))),
        ("resolve 3 10", ParsedCommand('resolve', (2, 10))),
        ("  sacrifice ", ParsedCommand('sacrifice')),
        ("换牌", ParsedCommand('sacrifice')),
        ("commit sacrifice", ParsedCommand('commit', use_blind=False)),
        ("commit blind 2", ParsedCommand('commit', (1,), use_blind=True)),
    ])
    def test_valid_commands(self, line, expected):
        assert CLIInputHandler.parse_command(line) == expected

    @pytest.mark.parametrize("line", [
        "", "dance", "place", "place 0", "place x", "resolve 3", "commit blind 0", "commit",
    ])
    def test_invalid_commands(self, line):
        assert CLIInputHandler.parse_command(line) is None


class TestCommands:

    def test_tutorial_run(self):
        result = CliRunner().invoke(main, ['tutorial'], input=TUTORIAL_INPUT)
        assert result.exit_code == 0, result.output
        assert "序列成立。收益: 73" in result.output
        # 教程只发放固定奖励：初始40筹码 + 教程奖励50
        assert "当前筹码: 90" in result.output

    def test_ignored_tutorial_command_is_silent(self):
        result = CliRunner().invoke(main, ['tutorial'], input="sacrifice\n" + TUTORIAL_INPUT)
        assert result.exit_code == 0, result.output
        assert "拒绝" not in result.output
        assert "序列成立" in result.output

    def test_quit_loses_round(self):
        result = CliRunner().invoke(main, ['play', '--tier', 'tier_1', '--seed', '7'], input="quit\n")
        assert result.exit_code == 0, result.output
        assert "本回合没有收益" in result.output

    def test_end_of_input_abandons(self):
        result = CliRunner().invoke(main, ['play', '--seed', '7'], input="")
        assert result.exit_code == 0, result.output
        assert "输入结束" in result.output

    def test_refused_command_is_reported(self):
        result = CliRunner().invoke(main, ['play', '--seed', '7'], input="resolve 1 5\nquit\n")
        assert result.exit_code == 0, result.output
        assert "拒绝" in result.output

    def test_unknown_item(self):
        result = CliRunner().invoke(main, ['play', '--item', 'nothing'], input="quit\n")
        assert result.exit_code != 0
        assert "--item" in result.output

    def test_unaffordable_tier(self):
        result = CliRunner().invoke(main, ['play', '--tier', 'tier_3'], input="")
        assert result.exit_code == 0
        assert "无法进入" in result.output


class TestEventSubscription:

    def test_refusal_is_printed_by_subscriber(self, capsys):
        cli = MaskSequenceCLI()
        round_id = cli.command_service.start_round(RoundStartParams(tier_slots=4, tier_deck_size=15),
                                                   seed=3).data['round_id']
        result = cli.command_service.place(round_id, 9)
        assert not result.success
        assert "拒绝" in capsys.readouterr().out

    def test_ignored_tutorial_action_prints_nothing(self, capsys):
        cli = MaskSequenceCLI()
        round_id = cli.command_service.start_tutorial().data['round_id']
        cli.command_service.sacrifice(round_id)
        assert capsys.readouterr().out == ""

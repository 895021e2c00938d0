"""隐藏序列CLI输入处理模块.

这个模块负责读取和解析文本命令，
将用户输入转换为标准的ParsedCommand格式。
"""

import sys
from dataclasses import dataclass
from typing import Optional, Tuple

import click


@dataclass(frozen=True)
class ParsedCommand:
    """解析后的命令.

    Attributes:
        name: 命令名（place, blind, select, sacrifice, void, peek, commit, resolve, quit, help）
        args: 整数参数，基座编号已转换为从0开始的索引
        use_blind: commit命令是否按盲注处理
    """
    name: str
    args: Tuple[int, ...] = ()
    use_blind: bool = False


# 命令别名 -> (命令名, 参数个数)
COMMANDS = {
    'place': ('place', 1), 'p': ('place', 1), '放置': ('place', 1),
    'blind': ('blind', 1), 'b': ('blind', 1), '盲注': ('blind', 1),
    'select': ('select', 1), 's': ('select', 1),
    'sacrifice': ('sacrifice', 0), 'x': ('sacrifice', 0), '换牌': ('sacrifice', 0),
    'void': ('void', 0), 'v': ('void', 0), '隐藏': ('void', 0),
    'peek': ('peek', 0), '透镜': ('peek', 0),
    'resolve': ('resolve', 2), 'r': ('resolve', 2), '揭示': ('resolve', 2),
    'quit': ('quit', 0), 'q': ('quit', 0), '放弃': ('quit', 0),
    'help': ('help', 0), 'h': ('help', 0), '?': ('help', 0),
}

# 需要把第一个参数当作基座编号（从1开始）的命令
SLOT_COMMANDS = frozenset({'place', 'blind', 'select', 'resolve'})


class CLIInputHandler:
    """CLI输入处理器.

    交互式终端使用click.prompt读取，非交互式输入从stdin逐行读取。
    """

    @staticmethod
    def read_command(prompt: str = "> ") -> ParsedCommand:
        """读取一条有效命令.

        Raises:
            click.Abort: 输入结束或用户取消
        """
        while True:
            if sys.stdin.isatty():
                line = click.prompt(prompt, default="", show_default=False)
            else:
                line = sys.stdin.readline()
                if not line:
                    raise click.Abort()
            command = CLIInputHandler.parse_command(line)
            if command is not None:
                return command
            if line.strip():
                click.echo(f"错误: 无法识别命令 '{line.strip()}'，输入 help 查看命令")

    @staticmethod
    def parse_command(line: str) -> Optional[ParsedCommand]:
        """解析文本命令.

        Args:
            line: 用户输入的一行文本

        Returns:
            解析后的命令，无法识别时返回None
        """
        parts = line.strip().lower().split()
        if not parts:
            return None

        if parts[0] == 'commit':
            return CLIInputHandler._parse_commit(parts[1:])

        entry = COMMANDS.get(parts[0])
        if entry is None:
            return None
        name, arity = entry
        if len(parts) - 1 != arity:
            return None

        try:
            args = [int(p) for p in parts[1:]]
        except ValueError:
            return None
        if name in SLOT_COMMANDS:
            if args[0] < 1:
                return None
            args[0] -= 1
        return ParsedCommand(name, tuple(args))

    @staticmethod
    def _parse_commit(parts) -> Optional[ParsedCommand]:
        if parts == ['sacrifice']:
            return ParsedCommand('commit', use_blind=False)
        if len(parts) == 2 and parts[0] == 'blind':
            try:
                slot_number = int(parts[1])
            except ValueError:
                return None
            if slot_number < 1:
                return None
            return ParsedCommand('commit', (slot_number - 1,), use_blind=True)
        return None

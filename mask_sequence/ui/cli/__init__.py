"""隐藏序列CLI用户界面模块.

这个包提供命令行界面的回合实现，包括：
- CLI游戏主类和click命令
- 渲染器（显示逻辑）
- 输入处理器（文本命令解析）
"""

from .cli_game import MaskSequenceCLI, main
from .render import CLIRenderer
from .input_handler import CLIInputHandler, ParsedCommand

__all__ = [
    'MaskSequenceCLI',
    'main',
    'CLIRenderer',
    'CLIInputHandler',
    'ParsedCommand',
]

"""
Mask the Sequence - 隐藏序列

单人卡牌排序冒险游戏的回合引擎。

Packages:
    core: 纯领域逻辑层（牌库、基座、换牌预算、回合控制器、教程拦截器）
    application: 应用服务层（命令服务、查询服务、配置服务、会话结算）
    ui: 命令行界面
"""

__version__ = "1.0.0"

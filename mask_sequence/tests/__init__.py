"""
Mask Sequence Tests - 测试包

Test Structure:
    unit/: 核心层和应用层的单元测试
    property/: 基于hypothesis的属性测试
    integration/: 教程与正式回合的集成测试
    anti_cheat/: 反作弊检查工具
"""

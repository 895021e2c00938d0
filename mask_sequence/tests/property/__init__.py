"""
Property Tests - 属性测试

使用hypothesis生成牌序和行动序列，验证回合不变量。
"""

"""核心模块单元测试"""

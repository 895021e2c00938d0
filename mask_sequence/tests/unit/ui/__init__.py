"""CLI界面单元测试"""

"""用户界面层.

UI层只通过应用层服务驱动回合，不直接调用回合控制器。
"""

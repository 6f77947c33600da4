"""
婚礼抽奖服务
"""

__version__ = "1.0.0"

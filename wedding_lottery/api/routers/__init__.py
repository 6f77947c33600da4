"""
API 路由分组模块
"""

from .names import names_router
from .winners import winners_router
from .draw import draw_router
from .announce import announce_router
from .admin import admin_router

__all__ = [
    "names_router",
    "winners_router",
    "draw_router",
    "announce_router",
    "admin_router",
]

"""用户功能模块

封装Foursquare users相关接口
包括排行榜、用户搜索、用户信息以及各类用户子资源
"""

from .service import UserService

__all__ = ["UserService"]

"""Foursquare客户端主入口

组装配置、API客户端和各业务服务，并管理连接的生命周期
"""

from typing import Any, Optional

import httpx
from loguru import logger

from foursquare.core.client import FoursquareClient
from foursquare.core.config import Settings, get_settings
from foursquare.features.users import UserService


class Foursquare:
    """Foursquare客户端门面

    用法::

        async with Foursquare() as fsq:
            user = await fsq.users.get_user("self", access_token)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.client = FoursquareClient(
            settings=self.settings,
            http_client=http_client,
            transport=transport
        )
        self.users = UserService(self.client)

    async def __aenter__(self) -> "Foursquare":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """关闭底层连接"""
        try:
            await self.client.aclose()
        except Exception as e:
            logger.error(f"关闭Foursquare客户端时出错: {e}")
            raise


def create_foursquare(settings: Optional[Settings] = None, **kwargs: Any) -> Foursquare:
    """创建Foursquare客户端

    Args:
        settings: 配置对象，为空时从环境变量读取
        **kwargs: 透传给Foursquare（http_client、transport）

    Returns:
        Foursquare: 客户端实例
    """
    return Foursquare(settings=settings, **kwargs)

"""用户服务层

封装Foursquare users相关接口
每个方法拼接资源路径、补齐默认参数，然后交给FoursquareClient发起请求
"""

from typing import Any, Awaitable, Optional

from loguru import logger

from foursquare.core.client import FoursquareClient
from foursquare.shared.exceptions import MissingArgumentError
from foursquare.shared.schemas import Aspect, Callback, ParamBag

SELF = "self"


class UserService:
    """用户服务类

    所有方法都是协程，最后一个参数是可选的完成回调callback(error, result)：
    - 成功时调用callback(None, result)并返回result
    - 失败且传了回调时调用callback(error, None)并返回None
    - 失败且没有回调时直接抛出异常
    每次调用回调只会被触发一次
    """

    def __init__(self, client: FoursquareClient):
        """初始化用户服务

        Args:
            client: 共享的API客户端
        """
        self.client = client

    async def _complete(self, call: Awaitable[Any], callback: Optional[Callback]) -> Any:
        """等待请求完成并按回调约定返回结果

        所有失败（包括非FoursquareError的异常）都原样交给回调；
        取消（CancelledError）不经过回调，直接向上传播
        """
        try:
            result = await call
        except Exception as e:
            return self._fail(e, callback)

        if callback is not None:
            callback(None, result)
        return result

    def _fail(self, error: Exception, callback: Optional[Callback]) -> None:
        if callback is None:
            raise error
        callback(error, None)
        return None

    async def get_leaderboard(
        self,
        params: Optional[ParamBag],
        access_token: str,
        callback: Optional[Callback] = None
    ) -> Any:
        """获取当前用户的排行榜

        Args:
            params: 额外查询参数
            access_token: 访问令牌
            callback: 完成回调

        Returns:
            response.leaderboard
        """
        logger.debug("进入: Users.get_leaderboard")
        return await self._complete(
            self.client.call_api("/users/leaderboard", access_token, "leaderboard", dict(params or {})),
            callback
        )

    async def search(
        self,
        params: Optional[ParamBag],
        access_token: str,
        callback: Optional[Callback] = None
    ) -> Any:
        """搜索用户

        Args:
            params: 搜索条件（phone、email、twitter、name等）
            access_token: 访问令牌
            callback: 完成回调

        Returns:
            response.results
        """
        logger.debug("进入: Users.search")
        return await self._complete(
            self.client.call_api("/users/search", access_token, "results", dict(params or {})),
            callback
        )

    async def get_requests(self, access_token: str, callback: Optional[Callback] = None) -> Any:
        """获取当前用户收到的好友请求

        注意：沿用原有行为，请求的是 /users/search 而不是 /users/requests
        """
        logger.debug("进入: Users.get_requests")
        # TODO: 切换到 /users/requests（字段 requests），需要同步修改调用方对结果格式的处理
        return await self._complete(
            self.client.call_api("/users/search", access_token, "results", {}),
            callback
        )

    async def get_user(
        self,
        user_id: Optional[str],
        access_token: str,
        callback: Optional[Callback] = None
    ) -> Any:
        """获取单个用户

        Args:
            user_id: 用户ID，必填（可以是 self）
            access_token: 访问令牌
            callback: 完成回调

        Returns:
            response.user

        Raises:
            MissingArgumentError: user_id为空且没有传回调
        """
        logger.debug("进入: Users.get_user")

        if not user_id:
            logger.error("get_user: user_id为必填参数")
            return self._fail(MissingArgumentError("Users.get_user: user_id为必填参数"), callback)

        return await self._complete(
            self.client.call_api(f"/users/{user_id}", access_token, "user", None),
            callback
        )

    async def get_user_aspect(
        self,
        aspect: Optional[str],
        user_id: Optional[str],
        field: Optional[str],
        params: Optional[ParamBag],
        access_token: str,
        callback: Optional[Callback] = None
    ) -> Any:
        """获取用户的某个子资源

        默认值规则：user_id为空时使用 self，field为空时使用aspect本身

        Args:
            aspect: 子资源名称（badges、checkins、friends、tips、todos、venuehistory等）
            user_id: 用户ID
            field: 要从响应中取出的字段
            params: 额外查询参数
            access_token: 访问令牌
            callback: 完成回调

        Returns:
            response[field]

        Raises:
            MissingArgumentError: aspect为空且没有传回调
        """
        logger.debug("进入: Users.get_user_aspect")

        if not aspect:
            logger.error("get_user_aspect: aspect为必填参数")
            return self._fail(MissingArgumentError("Users.get_user_aspect: aspect为必填参数"), callback)

        aspect = aspect.value if isinstance(aspect, Aspect) else aspect
        field = field or aspect
        path = f"/users/{user_id or SELF}/{aspect}"

        return await self._complete(
            self.client.call_api(path, access_token, field, params),
            callback
        )

    async def get_badges(
        self,
        user_id: Optional[str],
        field: Optional[str],
        access_token: str,
        callback: Optional[Callback] = None
    ) -> Any:
        """获取用户徽章，field默认为 badges"""
        logger.debug("进入: Users.get_badges")
        return await self.get_user_aspect(
            Aspect.BADGES, user_id, field or Aspect.BADGES.value, None, access_token, callback
        )

    async def get_checkins(
        self,
        user_id: Optional[str],
        params: Optional[ParamBag],
        access_token: str,
        callback: Optional[Callback] = None
    ) -> Any:
        """获取用户签到记录"""
        logger.debug("进入: Users.get_checkins")
        return await self.get_user_aspect(Aspect.CHECKINS, user_id, None, params, access_token, callback)

    async def get_friends(
        self,
        user_id: Optional[str],
        params: Optional[ParamBag],
        access_token: str,
        callback: Optional[Callback] = None
    ) -> Any:
        """获取用户好友列表"""
        logger.debug("进入: Users.get_friends")
        return await self.get_user_aspect(Aspect.FRIENDS, user_id, None, params, access_token, callback)

    async def get_tips(
        self,
        user_id: Optional[str],
        params: Optional[ParamBag],
        access_token: str,
        callback: Optional[Callback] = None
    ) -> Any:
        """获取用户留下的tips

        params可以带lat/lng，客户端会合并为ll参数
        """
        logger.debug("进入: Users.get_tips")
        return await self.get_user_aspect(Aspect.TIPS, user_id, None, params, access_token, callback)

    async def get_todos(
        self,
        user_id: Optional[str],
        params: Optional[ParamBag],
        access_token: str,
        callback: Optional[Callback] = None
    ) -> Any:
        """获取用户待办列表

        sort参数默认为 recent，调用方传入的sort原样保留。
        调用方的params不会被修改。
        """
        logger.debug("进入: Users.get_todos")
        params = dict(params or {})
        params["sort"] = params.get("sort") or "recent"
        return await self.get_user_aspect(Aspect.TODOS, user_id, None, params, access_token, callback)

    async def get_venue_history(
        self,
        user_id: Optional[str],
        params: Optional[ParamBag],
        access_token: str,
        callback: Optional[Callback] = None
    ) -> Any:
        """获取用户去过的地点，结果字段是 venues 而不是 venuehistory"""
        logger.debug("进入: Users.get_venue_history")
        return await self.get_user_aspect(
            Aspect.VENUE_HISTORY, user_id, "venues", params, access_token, callback
        )

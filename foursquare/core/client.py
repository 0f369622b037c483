"""Foursquare API调用模块

提供共享的HTTP调用方法：拼接URL和查询参数、发起请求、
解析响应信封并取出指定字段
"""

import json
from typing import Any, Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from foursquare.shared.exceptions import MissingArgumentError, UpstreamError
from foursquare.shared.schemas import Envelope, ParamBag

from .config import Settings, get_settings


class FoursquareClient:
    """Foursquare API客户端

    管理httpx异步连接池，所有业务服务都通过call_api访问网络
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """初始化客户端

        Args:
            settings: 配置对象，为空时使用get_settings()
            http_client: 外部传入的httpx客户端，传入时由调用方负责关闭
            transport: 自定义传输层（测试时使用MockTransport）
        """
        if http_client is not None and transport is not None:
            raise ValueError("http_client和transport不能同时传入，请在http_client上配置transport")

        self.settings = settings or get_settings()
        self._owns_http_client = http_client is None

        if http_client is None:
            http_client = httpx.AsyncClient(
                timeout=self.settings.request_timeout,
                transport=transport,
                headers={"Accept": "application/json"},
            )
        self.http_client = http_client

        logger.info(f"Foursquare客户端已初始化，API地址: {self.settings.api_url}")

    async def __aenter__(self) -> "FoursquareClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """关闭HTTP连接池

        只关闭自己创建的httpx客户端
        """
        if self._owns_http_client:
            await self.http_client.aclose()
            logger.info("Foursquare客户端连接已关闭")

    def build_url(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.settings.api_url}{path}"

    def build_query(self, access_token: str, params: Optional[ParamBag] = None) -> dict[str, Any]:
        """构建查询参数

        lat和lng同时存在时合并为ll参数；只有其中一个时视为缺少参数。
        调用方传入的参数不会被修改。

        Args:
            access_token: 用户访问令牌
            params: 调用方参数

        Returns:
            dict[str, Any]: 最终查询参数

        Raises:
            MissingArgumentError: lat/lng不成对
        """
        query: dict[str, Any] = dict(self.settings.default_query)
        extra = dict(params or {})

        has_lat = extra.get("lat") not in (None, "")
        has_lng = extra.get("lng") not in (None, "")
        if has_lat != has_lng:
            logger.error("lat和lng必须同时提供")
            raise MissingArgumentError("lat和lng必须同时提供")
        if has_lat and has_lng:
            extra["ll"] = f"{extra.pop('lat')},{extra.pop('lng')}"
        else:
            extra.pop("lat", None)
            extra.pop("lng", None)

        query.update(extra)
        query["oauth_token"] = access_token
        return query

    async def call_api(
        self,
        path: str,
        access_token: str,
        result_field: Optional[str] = None,
        params: Optional[ParamBag] = None,
    ) -> Any:
        """调用Foursquare API

        Args:
            path: 资源路径，例如 /users/self
            access_token: 用户访问令牌
            result_field: 要从response中取出的字段，为空则返回整个response
            params: 查询参数

        Returns:
            Any: 取出的字段值

        Raises:
            MissingArgumentError: 参数不合法，未发起请求
            UpstreamError: 网络失败或API返回错误
        """
        url = self.build_url(path)
        query = self.build_query(access_token, params)

        logger.debug(f"请求Foursquare API: GET {url}")
        try:
            response = await self.http_client.get(url, params=query)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"请求Foursquare API失败: {path} - {e}")
            raise UpstreamError(
                detail=f"请求失败: {e}",
                error_type="network_error"
            ) from e

        return self.extract_data(path, result_field, response)

    def extract_data(self, path: str, result_field: Optional[str], response: httpx.Response) -> Any:
        """解析响应信封并取出数据

        Args:
            path: 资源路径，仅用于日志
            result_field: 要取出的字段
            response: HTTP响应

        Returns:
            Any: 取出的字段值
        """
        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"响应不是合法JSON: {path} (HTTP {response.status_code})")
            raise UpstreamError(
                detail=f"响应不是合法JSON: {e}",
                status_code=response.status_code,
                error_type="invalid_json"
            ) from e

        try:
            envelope = Envelope.model_validate(payload)
        except ValidationError as e:
            if not response.is_success:
                raise UpstreamError(
                    detail=f"HTTP {response.status_code}",
                    status_code=response.status_code
                ) from e
            logger.error(f"响应格式不正确: {path}")
            raise UpstreamError(
                detail=f"响应格式不正确: {e}",
                status_code=response.status_code,
                error_type="invalid_envelope"
            ) from e

        meta = envelope.meta
        if meta.code != 200 or not response.is_success:
            status_code = meta.code if meta.code != 200 else response.status_code
            detail = meta.error_detail or f"HTTP {status_code}"
            logger.error(f"Foursquare API返回错误: {path} - {meta.error_type}: {detail}")
            raise UpstreamError(
                detail=detail,
                status_code=status_code,
                error_type=meta.error_type
            )

        if meta.error_type == "deprecated":
            logger.warning(f"接口已废弃: {path} - {meta.error_detail}")

        for notification in envelope.notifications:
            logger.debug(f"Foursquare通知: {notification.type}")

        if not result_field:
            return envelope.response

        if result_field not in envelope.response:
            logger.warning(f"响应中没有字段 {result_field}: {path}")
        return envelope.response.get(result_field)

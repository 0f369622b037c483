"""自定义异常类定义

定义客户端使用的异常类型
本地参数校验失败和上游API失败分别对应不同的异常类
"""

from typing import Optional


class FoursquareError(Exception):
    """异常基类

    所有客户端异常都应该继承这个类
    提供统一的状态码、错误类型和错误详情
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_type: str = "FoursquareError"
    ):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail
        self.error_type = error_type

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status_code={self.status_code}, "
            f"error_type={self.error_type!r}, detail={self.detail!r})"
        )


class MissingArgumentError(FoursquareError):
    """缺少必需参数异常

    当必需的标识（userId、aspect等）为空时抛出，不会发起网络请求
    """

    def __init__(self, detail: str = "缺少必需参数"):
        super().__init__(
            status_code=400,
            detail=detail,
            error_type="MissingArgument"
        )


class UpstreamError(FoursquareError):
    """上游API异常

    网络失败、API返回错误、响应不是合法JSON时抛出
    status_code为0表示请求没有拿到HTTP响应
    """

    def __init__(
        self,
        detail: str = "Foursquare API调用失败",
        status_code: int = 0,
        error_type: Optional[str] = None
    ):
        super().__init__(
            status_code=status_code,
            detail=detail,
            error_type=error_type or "UpstreamError"
        )

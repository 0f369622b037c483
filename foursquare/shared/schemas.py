"""共享的Pydantic模式定义

定义Foursquare响应信封格式和通用类型
"""

from enum import Enum
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# 查询参数值只允许基础类型
ParamValue = Union[str, int, float]
ParamBag = Mapping[str, ParamValue]

# 完成回调: callback(error, result)
Callback = Callable[[Optional[Exception], Any], None]


class Aspect(str, Enum):
    """用户子资源

    用于拼接 /users/{userId}/{aspect} 路径，默认也是响应中要取出的字段名
    """

    BADGES = "badges"
    CHECKINS = "checkins"
    FRIENDS = "friends"
    TIPS = "tips"
    TODOS = "todos"
    VENUE_HISTORY = "venuehistory"


class Meta(BaseModel):
    """响应元信息

    code为200表示成功，否则errorType/errorDetail描述错误原因
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    code: int = Field(..., description="状态码")
    error_type: Optional[str] = Field(None, alias="errorType", description="错误类型")
    error_detail: Optional[str] = Field(None, alias="errorDetail", description="错误详情")


class Notification(BaseModel):
    """响应附带的通知"""

    model_config = ConfigDict(extra="allow")

    type: str = Field(..., description="通知类型")
    item: Optional[dict[str, Any]] = Field(None, description="通知内容")


class Envelope(BaseModel):
    """统一响应信封

    Foursquare所有接口都返回这种格式，真正的数据在response字段里
    """

    meta: Meta
    notifications: list[Notification] = Field(default_factory=list, description="通知列表")
    response: dict[str, Any] = Field(default_factory=dict, description="响应数据")

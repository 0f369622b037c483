"""核心配置模块

处理环境变量读取，提供Foursquare API访问相关配置
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """客户端配置类

    自动从环境变量（前缀 FOURSQUARE_）和 .env 文件读取配置。
    配置对象在构造客户端时显式传入，服务层不读取全局状态。
    """

    model_config = SettingsConfigDict(
        env_prefix="FOURSQUARE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # API配置
    api_url: str = Field(
        default="https://api.foursquare.com/v2",
        description="Foursquare API基础URL"
    )
    api_version: str = Field(
        default="20140806",
        description="API版本日期（v参数，YYYYMMDD）"
    )
    locale: Optional[str] = Field(
        default=None,
        description="响应语言（locale参数），为空则使用服务端默认值"
    )
    request_timeout: float = Field(default=10.0, gt=0, description="HTTP请求超时时间（秒）")

    # 日志配置
    log_level: str = Field(default="INFO", description="日志级别")
    log_file: Optional[str] = Field(default=None, description="日志文件路径，为空则只输出到stderr")
    log_serialize: bool = Field(default=False, description="文件日志是否以JSON格式输出")

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """去掉URL末尾的斜杠，路径统一以 / 开头拼接"""
        return value.rstrip("/")

    @field_validator("api_version")
    @classmethod
    def check_api_version(cls, value: str) -> str:
        if len(value) != 8 or not value.isdigit():
            raise ValueError("api_version必须是YYYYMMDD格式")
        return value

    @computed_field
    @property
    def default_query(self) -> dict[str, str]:
        """每个请求都会附带的查询参数

        Returns:
            dict[str, str]: 版本号以及可选的语言参数
        """
        query = {"v": self.api_version}
        if self.locale:
            query["locale"] = self.locale
        return query


@lru_cache
def get_settings() -> Settings:
    """获取配置单例

    使用lru_cache确保配置只被加载一次

    Returns:
        Settings: 配置实例
    """
    return Settings()

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """视频搜索API服务的配置设置，继承自Pydantic的BaseSettings。从.env或者环境变量中加载配置。"""

    # 项目基础配置
    env: str = "development"  # 应用环境，默认为'development'
    log_level: str = "INFO"  # 日志级别，默认为'INFO'

    # 新搜索(无continuation)时使用的默认搜索参数
    search_default_term: str = "BONK meme"
    search_default_limit: int = Field(default=10, ge=1)
    search_default_pages: int = Field(default=1, ge=1)

    # 搜索提供者调用超时与客户端断开检测间隔(秒)
    search_timeout_seconds: float = Field(default=15.0, gt=0)
    disconnect_poll_interval_seconds: float = Field(default=0.5, gt=0)

    # YouTube搜索配置
    youtube_base_url: str = "https://www.youtube.com"
    youtube_hl: str = "en"
    youtube_gl: str = "US"
    youtube_client_version: str = "2.20240101.00.00"
    youtube_safe_search_cookie: str = "PREF=f2=8000000"  # 开启安全搜索时附带的Cookie

    # 使用pydantic v2的写法来完成环境变量信息的告知
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    """获取应用程序的配置设置实例，使用lru_cache进行缓存以提高性能。

    Returns:
        Settings: 应用程序的配置设置实例。
    """
    return Settings()

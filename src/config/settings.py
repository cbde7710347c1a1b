"""应用配置管理模块."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """应用配置类."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    # 访问令牌，非空时进入私有模式
    token: str = Field(default="")
    # DeepL Pro 会话 cookie，为空时 /v1/translate 不可用
    dl_session: str = Field(default="")
    deepl_api_url: str = Field(default="https://www2.deepl.com/jsonrpc")
    request_timeout: int = Field(default=30, ge=1, le=300)
    cache_ttl: int = Field(default=3600, ge=1)
    cache_max_entries: int = Field(default=10000, ge=1)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=1188, ge=1, le=65535)
    log_level: str = Field(default="INFO")

    @property
    def is_private(self) -> bool:
        """Whether a token is required on translation endpoints."""
        return bool(self.token)


settings = Settings()

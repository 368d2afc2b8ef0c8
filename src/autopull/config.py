"""应用配置管理."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from autopull.errors import ConfigError

PlatformName = Literal["github", "gitee"]


class Settings(BaseSettings):
    """应用配置（环境变量 AUTOPULL_*）."""

    model_config = SettingsConfigDict(
        env_prefix="AUTOPULL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # 凭证（命令行未提供 token 时使用）
    token: str = ""

    # 同步默认值
    clone_dir: str = "cloned_repos"
    concurrency: int = 5
    timeout_ms: int = 120000

    # 日志配置
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """获取应用配置（带缓存）."""
    return Settings()


class SyncConfig(BaseModel):
    """单次同步的配置."""

    username: str = Field(min_length=1)
    token: str | None = None
    platform: PlatformName
    clone_dir: str = "cloned_repos"
    concurrency: int = Field(default=5, gt=0)
    timeout_ms: int = Field(default=120000, gt=0)

    @field_validator("token")
    @classmethod
    def _blank_token_is_missing(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @property
    def destination_root(self) -> Path:
        """仓库存放目录: {clone_dir}/{username}."""
        return Path(self.clone_dir) / self.username

    @property
    def timeout_seconds(self) -> float:
        """单个任务超时（秒）."""
        return self.timeout_ms / 1000


def build_sync_config(**values: object) -> SyncConfig:
    """构造并校验 SyncConfig，校验失败转换为 ConfigError."""
    try:
        return SyncConfig.model_validate(values)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        msg = f"配置无效: {problems}"
        raise ConfigError(msg) from e


def resolve_token(config: SyncConfig, settings: Settings | None = None) -> str:
    """
    解析访问凭证.

    优先使用配置中的 token，其次是环境变量 AUTOPULL_TOKEN，都没有则报错。
    """
    if config.token:
        return config.token

    settings = settings or get_settings()
    if settings.token.strip():
        return settings.token

    msg = "缺少访问凭证：请通过 --token 或环境变量 AUTOPULL_TOKEN 提供"
    raise ConfigError(msg)

"""RepositoryRecord 仓库元数据模型."""

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class RepositoryRecord(BaseModel):
    """平台列表接口返回的一条仓库记录（保留全部原始字段）."""

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str
    full_name: str | None = None
    clone_url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _name_from_full_name(cls, data: Any) -> Any:
        # full_name 格式为 "owner/name"
        if isinstance(data, dict) and not data.get("name"):
            full_name = data.get("full_name") or ""
            _, _, repo = full_name.partition("/")
            if repo:
                data = {**data, "name": repo}
        return data

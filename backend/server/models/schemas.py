from typing import List, Optional, Union

from pydantic import AliasChoices, BaseModel, Field

CatalogIdField = Union[int, str]


class WishlistAddRequest(BaseModel):
    """新增愿望单条目请求模型（字段缺失由服务层统一返回 400）"""
    catalogId: Optional[CatalogIdField] = Field(
        default=None,
        validation_alias=AliasChoices("catalogId", "tmdbId"),
        description="目录条目ID（TMDB id）",
    )
    title: Optional[str] = Field(default=None, description="名称")
    mediaType: Optional[str] = Field(default=None, description="类型：movie / series（兼容 tv）")
    externalId: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("externalId", "imdbId"),
        description="外部ID（IMDb id，可选）",
    )


class AdminPasswordRequest(BaseModel):
    """仅需管理员密码的请求模型"""
    password: Optional[str] = None


class WishlistRemoveManyRequest(BaseModel):
    """批量删除请求模型"""
    ids: Optional[List[CatalogIdField]] = None
    password: Optional[str] = None


class WishlistStatusRequest(BaseModel):
    """更新条目状态请求模型"""
    status: Optional[str] = Field(default=None, description="pending / on_hold / added")
    password: Optional[str] = None


class EmailConfigRequest(BaseModel):
    """邮件通知配置写入请求模型"""
    account: Optional[str] = None
    credential: Optional[str] = None
    adminPassword: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class RemoveManyResponse(BaseModel):
    message: str
    removed: int


class EmailConfigResponse(BaseModel):
    account: Optional[str] = None
    configured: bool

"""
云存储相关的Pydantic模型
用于请求校验和响应序列化，字段对外使用驼峰命名，同时接受下划线命名
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, model_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FileUploadRequest(_CamelModel):
    """文件上传请求模型"""
    file_data: str = Field(description="Base64编码的文件内容")
    filename: str = Field(description="原始文件名（含扩展名）")
    content_type: Optional[str] = Field(default=None, description="MIME类型，不提供时按扩展名推断")
    metadata: Optional[Dict[str, str]] = Field(default=None, description="附加元数据")


class FileUploadResponse(_CamelModel):
    """文件上传响应模型"""
    url: str
    key: str
    size: int
    content_type: Optional[str] = None
    metadata: Dict[str, str] = Field(default_factory=dict)


class FileDeleteRequest(_CamelModel):
    """文件删除请求模型，url 与 key 至少提供一个，同时提供时优先使用 key"""
    url: Optional[str] = Field(default=None, description="上传时返回的URL")
    key: Optional[str] = Field(default=None, description="对象键")

    @model_validator(mode="after")
    def check_target(self) -> "FileDeleteRequest":
        if not (self.url or self.key):
            raise ValueError("url 和 key 至少提供一个")
        return self

    @property
    def target(self) -> str:
        return self.key or self.url


class DownloadUrlRequest(_CamelModel):
    """下载链接请求模型"""
    key: str = Field(min_length=1, description="对象键")
    expiration_time: Optional[PositiveInt] = Field(default=None, description="有效期（秒）")


class DownloadUrlResponse(_CamelModel):
    """下载链接响应模型"""
    url: str
    expires_in: int


class BackendInfo(BaseModel):
    """存储后端信息"""
    name: str
    type: str
    capabilities: List[str]

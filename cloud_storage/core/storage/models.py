"""
存储服务数据模型
定义存储操作中使用的所有数据结构
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class UploadResult:
    """
    上传结果

    每次成功上传产生一个，返回后归调用方所有。

    Attributes:
        url: 访问URL（配置了CDN时为CDN地址）
        key: 对象存储键
        size: 文件大小（字节）
        content_type: MIME类型
        metadata: 元数据
    """
    url: str
    key: str
    size: int
    content_type: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def with_metadata(self, extra: Optional[Mapping[str, str]]) -> 'UploadResult':
        """合并调用方元数据，冲突时以调用方为准，返回新的结果"""
        if not extra:
            return self
        merged = dict(self.metadata)
        merged.update(extra)
        return replace(self, metadata=merged)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'url': self.url,
            'key': self.key,
            'size': self.size,
            'content_type': self.content_type,
            'metadata': dict(self.metadata),
        }


@dataclass(frozen=True)
class ExtractedKey:
    """
    从URL反推出的对象键

    Attributes:
        key: 对象键
        from_url: 是否由URL路径解析得到；False 表示输入无法解析为URL，整体作为键使用
    """
    key: str
    from_url: bool


__all__ = [
    'UploadResult',
    'ExtractedKey',
]

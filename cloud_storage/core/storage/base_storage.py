"""
存储抽象基类
定义统一的存储接口，各云存储适配器实现该接口
"""

import asyncio
from abc import ABC, abstractmethod
from enum import Enum
from functools import partial
from typing import Any, Callable, FrozenSet, Iterable, Optional, TypeVar

from cloud_storage.core.log_utils import get_logger
from cloud_storage.core.log_messages import log_messages
from cloud_storage.core.storage.exceptions import CapabilityUnsupportedError, ConfigurationError
from cloud_storage.core.storage.keys import (
    extract_key_from_url,
    generate_object_key,
    resolve_public_url,
)
from cloud_storage.core.storage.models import UploadResult

logger = get_logger(__name__)

T = TypeVar('T')

DEFAULT_EXPIRATION = 3600


class Capability(str, Enum):
    """存储后端能力"""

    UPLOAD = "upload"
    DELETE = "delete"
    DOWNLOAD_URL = "download_url"


class BaseStorage(ABC):
    """
    存储抽象基类

    upload 是必备能力；delete 与 get_download_url 是可选能力，
    调用前应先通过 supports() 查询，不支持时按 CapabilityUnsupportedError 处理。
    """

    # 适配器类型标识，与配置中的 type 字段一致，用于工厂注册
    ADAPTER_NAME: str = ""
    # 服务商展示名称
    name: str = ""
    capabilities: FrozenSet[Capability] = frozenset({Capability.UPLOAD})

    def __init__(self, prefix: Optional[str] = None, cdn: Optional[str] = None) -> None:
        self.prefix = prefix
        self.cdn = cdn

    def supports(self, capability: Capability) -> bool:
        """是否提供指定能力"""
        return capability in self.capabilities

    @abstractmethod
    async def upload(
        self,
        data: bytes,
        filename: str,
        content_type: Optional[str] = None
    ) -> UploadResult:
        """
        上传文件

        Args:
            data: 文件数据
            filename: 原始文件名（仅用于生成对象键的扩展名）
            content_type: MIME类型

        Returns:
            UploadResult: 上传结果

        Raises:
            UploadError: 上传失败时抛出
        """

    async def delete(self, url: str) -> None:
        """
        删除文件

        Args:
            url: 上传时返回的URL，也可以直接传对象键

        Raises:
            DeleteError: 删除失败时抛出；对象已不存在视为成功
        """
        raise CapabilityUnsupportedError(Capability.DELETE.value, self.name)

    async def get_download_url(self, key: str, expiration: int = DEFAULT_EXPIRATION) -> str:
        """
        生成带签名的下载链接

        Args:
            key: 对象键
            expiration: 有效期（秒）

        Returns:
            str: 签名URL

        Raises:
            URLError: 签名失败时抛出
        """
        raise CapabilityUnsupportedError(Capability.DOWNLOAD_URL.value, self.name)

    # ==================== 子类共用的辅助方法 ====================

    def _generate_key(self, filename: str) -> str:
        """生成对象键（带配置的前缀）"""
        return generate_object_key(filename, prefix=self.prefix)

    def _public_url(self, key: str, native_url: str) -> str:
        """CDN优先，否则使用服务商原生地址"""
        return resolve_public_url(key, native_url, self.cdn)

    def _extract_key(self, url: str) -> str:
        """从URL反推对象键"""
        extracted = extract_key_from_url(url)
        if not extracted.from_url:
            logger.debug(log_messages.KEY_FALLBACK, extra={'provider': self.name, 'key': extracted.key})
        return extracted.key

    @staticmethod
    def _require_fields(config: Any, fields: Iterable[str], provider: str) -> None:
        """
        检查必填字段，缺失或为空时立即失败

        Raises:
            ConfigurationError: 存在缺失字段时抛出
        """
        missing = [field for field in fields if not getattr(config, field, None)]
        if missing:
            raise ConfigurationError(
                "{}配置不完整，缺少字段: {}".format(provider, ', '.join(missing)),
                details={'provider': provider, 'missing': missing}
            )

    async def _run_in_executor(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """
        在线程池中运行同步SDK调用

        Args:
            func: 同步函数
            *args: 位置参数
            **kwargs: 关键字参数

        Returns:
            函数执行结果
        """
        loop = asyncio.get_event_loop()
        bound_func = partial(func, *args, **kwargs)
        return await loop.run_in_executor(None, bound_func)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} provider={self.name!r}>"


__all__ = [
    'DEFAULT_EXPIRATION',
    'Capability',
    'BaseStorage',
]

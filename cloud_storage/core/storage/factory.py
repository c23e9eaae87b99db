"""
存储适配器工厂
提供适配器注册，并按配置中的 type 字段创建唯一的适配器实例
"""

from typing import TYPE_CHECKING, Any, Dict, List, Type

from cloud_storage.core.log_utils import get_logger
from cloud_storage.core.log_messages import log_messages
from cloud_storage.core.storage.base_storage import BaseStorage
from cloud_storage.core.storage.exceptions import (
    ConfigurationError,
    StorageError,
    UnsupportedBackendError,
)

if TYPE_CHECKING:
    from cloud_storage.core.config.storage_config import BackendConfig

logger = get_logger(__name__)

# 适配器注册表
_adapter_registry: Dict[str, Type[BaseStorage]] = {}


def register_adapter(name: str, adapter_class: Type[BaseStorage]) -> None:
    """
    注册存储适配器

    Args:
        name: 适配器名称，与配置的 type 字段一致（如 'aws-s3', 'qiniu', 'alibaba-oss'）
        adapter_class: 适配器类

    Example:
        >>> register_adapter('aws-s3', AwsS3Adapter)
    """
    _adapter_registry[name] = adapter_class
    logger.debug(log_messages.BACKEND_REGISTERED, backend_type=name)


def get_adapter_class(name: str) -> Type[BaseStorage]:
    """
    获取适配器类

    Raises:
        UnsupportedBackendError: 适配器不存在时抛出
    """
    adapter_class = _adapter_registry.get(name)
    if adapter_class is None:
        raise UnsupportedBackendError(name, list_available_adapters())
    return adapter_class


def create_adapter(descriptor: "BackendConfig") -> BaseStorage:
    """
    按后端配置创建适配器实例

    只根据 descriptor.type 分派；构造过程只初始化客户端与凭证，不发起网络请求。

    Args:
        descriptor: 后端配置

    Returns:
        BaseStorage: 适配器实例

    Raises:
        UnsupportedBackendError: type 未注册时抛出，不会创建任何实例
        ConfigurationError: 必填字段缺失或客户端初始化失败时抛出
    """
    backend_type = getattr(descriptor, 'type', None)
    adapter_class = get_adapter_class(backend_type)

    try:
        adapter = adapter_class(descriptor)
    except StorageError:
        logger.error(log_messages.BACKEND_CREATE_FAILED, backend_type=backend_type)
        raise
    except Exception as e:
        logger.error(log_messages.BACKEND_CREATE_FAILED, exception=e, backend_type=backend_type)
        raise ConfigurationError(
            "创建存储适配器 '{}' 失败: {}".format(backend_type, e),
            details={'backend_type': backend_type}
        ) from e

    logger.info(log_messages.BACKEND_CREATED, provider=adapter.name)
    return adapter


def list_available_adapters() -> List[str]:
    """列出所有已注册的适配器"""
    return list(_adapter_registry.keys())


class BackendFactory:
    """后端工厂，封装注册表的类式入口"""

    @staticmethod
    def create(descriptor: Any) -> BaseStorage:
        return create_adapter(descriptor)

    @staticmethod
    def get_supported_backends() -> List[str]:
        return list_available_adapters()


__all__ = [
    'register_adapter',
    'get_adapter_class',
    'create_adapter',
    'list_available_adapters',
    'BackendFactory',
]

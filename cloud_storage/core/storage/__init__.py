"""
存储服务模块
提供统一的存储后端抽象，支持多种云存储适配器
"""

from cloud_storage.core.storage.adapters import AlibabaOssAdapter, AwsS3Adapter, QiniuAdapter
from cloud_storage.core.storage.base_storage import BaseStorage, Capability
from cloud_storage.core.storage.exceptions import *
from cloud_storage.core.storage.factory import (
    BackendFactory,
    create_adapter,
    list_available_adapters,
    register_adapter,
)
from cloud_storage.core.storage.keys import extract_key_from_url, generate_object_key
from cloud_storage.core.storage.models import *
from cloud_storage.core.storage.validator import FileValidator

# 注册内置适配器（顺序即 get_supported_backends 的返回顺序）
register_adapter(AwsS3Adapter.ADAPTER_NAME, AwsS3Adapter)
register_adapter(QiniuAdapter.ADAPTER_NAME, QiniuAdapter)
register_adapter(AlibabaOssAdapter.ADAPTER_NAME, AlibabaOssAdapter)


__all__ = [
    # 工厂
    'BackendFactory',
    'create_adapter',
    'list_available_adapters',
    'register_adapter',
    # 抽象接口
    'BaseStorage',
    'Capability',
    # 适配器类
    'AwsS3Adapter',
    'QiniuAdapter',
    'AlibabaOssAdapter',
    # 校验与对象键
    'FileValidator',
    'generate_object_key',
    'extract_key_from_url',
]

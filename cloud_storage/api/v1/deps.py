"""
API依赖项
"""

from fastapi import Depends

from cloud_storage.core.storage import StorageError
from cloud_storage.services.storage import (
    CloudStorageHandler,
    CloudStorageService,
    get_cloud_storage_service,
)
from cloud_storage.services.storage.handler import to_http_exception


def get_storage_service() -> CloudStorageService:
    """获取云存储服务，配置不可用时返回503"""
    try:
        return get_cloud_storage_service()
    except StorageError as e:
        raise to_http_exception(e) from e


def get_storage_handler(
    service: CloudStorageService = Depends(get_storage_service)
) -> CloudStorageHandler:
    return CloudStorageHandler(service)

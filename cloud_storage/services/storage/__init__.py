"""
云存储服务模块
"""

from .service import CloudStorageService
from .dependencies import get_cloud_storage_service
from .handler import CloudStorageHandler

__all__ = [
    'CloudStorageService',
    'CloudStorageHandler',
    'get_cloud_storage_service',
]

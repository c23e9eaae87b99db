"""
云存储服务实例管理
进程内只加载一次配置并创建一个服务实例
"""

from functools import lru_cache

from cloud_storage.core.config.storage_config import ConfigManager
from cloud_storage.core.log_utils import get_logger
from cloud_storage.services.storage.service import CloudStorageService

logger = get_logger(__name__)


@lru_cache()
def get_cloud_storage_service() -> CloudStorageService:
    """
    获取云存储服务（带缓存）

    配置按 配置文件参数 > CONFIG_FILE > 环境变量 的顺序加载；
    需要切换配置时调用 get_cloud_storage_service.cache_clear() 重新创建。

    Raises:
        ConfigurationError: 配置缺失或不合法时抛出
    """
    config = ConfigManager().load()
    service = CloudStorageService(config)
    logger.info("云存储服务初始化完成", extra=service.get_backend_info())
    return service

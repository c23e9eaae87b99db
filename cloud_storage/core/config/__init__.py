"""
配置模块
包含应用配置信息；存储配置结构见 storage_config 模块
"""

from cloud_storage.core.config.config import settings, get_settings

__all__ = ["settings", "get_settings"]

"""
应用配置管理模块
统一管理进程级配置信息，包括环境变量和 .env 文件
"""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import ConfigDict

from cloud_storage.utils.config_utils import get_config_path, get_workspace_path


class Settings(BaseSettings):
    """应用配置类 - 统一管理所有配置信息"""

    # ==================== 基础配置 ====================
    app_name: str = "Cloud Storage Service"
    app_version: str = "1.0.0"
    app_debug: bool = False
    app_env: str = "development"

    # ==================== API配置 ====================
    api_v1_str: str = "/api/v1"
    project_name: str = "Cloud Storage API"

    # ==================== 应用服务配置 ====================
    app_port: int = 8080
    app_host: str = "0.0.0.0"

    # ==================== 日志配置 ====================
    log_level: str = "INFO"
    log_dir: str = "log"
    log_file: str = "cloud-storage.log"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # ==================== 存储配置来源 ====================
    # JSON配置文件路径，优先于下方的独立环境变量
    config_file: Optional[str] = None
    cloud_storage_backend: Optional[str] = None

    # 通用限制
    max_file_size: Optional[int] = None
    allowed_mime_types: Optional[str] = None
    expiration_time: Optional[int] = None

    # ==================== AWS S3 ====================
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    aws_region: str = "us-east-1"
    aws_s3_bucket: str = ""
    aws_s3_endpoint: Optional[str] = None
    aws_s3_prefix: Optional[str] = None
    aws_s3_cdn: Optional[str] = None
    aws_s3_acl: Optional[str] = "public-read"

    # ==================== 七牛云 ====================
    qiniu_access_key: str = ""
    qiniu_secret_key: str = ""
    qiniu_bucket: str = ""
    qiniu_domain: str = ""
    qiniu_zone: Optional[str] = None
    qiniu_prefix: Optional[str] = None
    qiniu_cdn: Optional[str] = None

    # ==================== 阿里云OSS ====================
    alibaba_access_key_id: str = ""
    alibaba_access_key_secret: str = ""
    alibaba_oss_bucket: str = ""
    alibaba_oss_region: str = ""
    alibaba_oss_endpoint: Optional[str] = None
    alibaba_oss_prefix: Optional[str] = None
    alibaba_oss_cdn: Optional[str] = None

    # ==================== 计算属性 ====================
    @property
    def absolute_log_dir(self) -> str:
        """获取绝对日志目录路径"""
        return str(get_workspace_path(self.log_dir))

    @property
    def absolute_log_file(self) -> str:
        """获取绝对日志文件路径"""
        return str(get_workspace_path(self.log_dir) / self.log_file)

    model_config = ConfigDict(
        env_file=get_config_path(".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True
    )


def get_settings() -> Settings:
    """获取应用配置实例"""
    # 环境变量文件加载由外部环境控制（Docker Compose、launch.json等）
    # 这里只返回配置实例，不主动加载环境文件
    return Settings()


# 全局配置实例
settings = get_settings()

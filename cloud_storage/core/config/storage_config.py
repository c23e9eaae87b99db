"""
存储配置模块
定义存储后端的配置结构（按 type 区分的联合类型），以及从文件或环境变量加载配置的管理器
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Dict, FrozenSet, List, Literal, Mapping, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    TypeAdapter,
    ValidationError as PydanticValidationError,
)
from pydantic.alias_generators import to_camel

from cloud_storage.core.config.config import Settings, get_settings
from cloud_storage.core.log_utils import get_logger
from cloud_storage.core.storage.exceptions import ConfigurationError, UnsupportedBackendError
from cloud_storage.utils.config_utils import parse_list_config

logger = get_logger(__name__)

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
DEFAULT_URL_EXPIRATION = 3600


class BackendType(str, Enum):
    """存储后端类型"""

    AWS_S3 = "aws-s3"
    QINIU = "qiniu"
    ALIBABA_OSS = "alibaba-oss"


class _BackendConfigBase(BaseModel):
    """各存储后端共有的可选字段"""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore"
    )

    prefix: Optional[str] = Field(default=None, description="对象键路径前缀")
    cdn: Optional[str] = Field(default=None, description="CDN基础地址，配置后总是优先使用")


class S3BackendConfig(_BackendConfigBase):
    """S3兼容存储配置"""

    type: Literal["aws-s3"] = "aws-s3"
    access_key_id: str = Field(description="AccessKey ID")
    secret_access_key: str = Field(description="Secret AccessKey")
    region: str = Field(description="区域")
    bucket: str = Field(description="存储桶名称")
    endpoint: Optional[str] = Field(default=None, description="自定义端点，设置后使用路径风格寻址")
    acl: Optional[str] = Field(default="public-read", description="上传对象的ACL，置空则不设置")


class QiniuBackendConfig(_BackendConfigBase):
    """七牛云存储配置"""

    type: Literal["qiniu"] = "qiniu"
    access_key: str = Field(description="AccessKey")
    secret_key: str = Field(description="SecretKey")
    bucket: str = Field(description="存储空间名称")
    domain: str = Field(description="访问域名")
    zone: Optional[str] = Field(default=None, description="存储区域代码（z0/z1/z2/na0/as0）")


class AlibabaOSSBackendConfig(_BackendConfigBase):
    """阿里云OSS配置"""

    type: Literal["alibaba-oss"] = "alibaba-oss"
    access_key_id: str = Field(description="AccessKey ID")
    access_key_secret: str = Field(description="AccessKey Secret")
    bucket: str = Field(description="存储桶名称")
    region: str = Field(description="地域，例如 oss-cn-hangzhou 或 cn-hangzhou")
    endpoint: Optional[str] = Field(default=None, description="自定义Endpoint")


BackendConfig = Annotated[
    Union[S3BackendConfig, QiniuBackendConfig, AlibabaOSSBackendConfig],
    Field(discriminator="type"),
]

_backend_adapter: TypeAdapter = TypeAdapter(BackendConfig)


class StorageConfig(BaseModel):
    """
    存储服务配置

    进程启动时加载一次，之后只读。需要切换配置时应重新创建服务实例。
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    backend: BackendConfig
    max_file_size: PositiveInt = Field(
        default=DEFAULT_MAX_FILE_SIZE,
        validation_alias=AliasChoices("maxFileSize", "max_file_size"),
        description="最大文件大小（字节）"
    )
    allowed_mime_types: Optional[FrozenSet[str]] = Field(
        default=None,
        validation_alias=AliasChoices("allowedMimeTypes", "allowed_mime_types"),
        description="允许的MIME类型，不设置则不限制"
    )
    download_url_expiration_seconds: PositiveInt = Field(
        default=DEFAULT_URL_EXPIRATION,
        validation_alias=AliasChoices(
            "downloadUrlExpirationSeconds",
            "expirationTime",
            "download_url_expiration_seconds"
        ),
        description="下载链接默认有效期（秒）"
    )

    def summary(self) -> Dict[str, Any]:
        """配置摘要（不含任何密钥）"""
        return {
            'backend': self.backend.type,
            'max_file_size': self.max_file_size,
            'allowed_mime_types': sorted(self.allowed_mime_types) if self.allowed_mime_types else None,
            'download_url_expiration_seconds': self.download_url_expiration_seconds,
        }


def parse_storage_config(data: Mapping[str, Any]) -> StorageConfig:
    """
    校验原始配置数据

    Raises:
        ConfigurationError: 配置结构不合法时抛出
    """
    try:
        return StorageConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(
            "存储配置校验失败: {}".format(e),
            details={'errors': e.errors(include_url=False)}
        ) from e


class ConfigManager:
    """
    存储配置管理器

    加载优先级：
    1. 调用方传入的配置文件路径
    2. 环境变量 CONFIG_FILE 指定的配置文件
    3. 独立的环境变量
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._config: Optional[StorageConfig] = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    def load(self, config_file_path: Optional[str] = None) -> StorageConfig:
        """按优先级加载配置"""
        for candidate in (config_file_path, self.settings.config_file):
            if not candidate:
                continue
            if Path(candidate).exists():
                return self.load_from_file(candidate)
            logger.warning("配置文件不存在，继续尝试下一个配置来源", extra={'config_file': candidate})

        return self.load_from_env()

    def load_from_file(self, file_path: str) -> StorageConfig:
        """
        从JSON文件加载配置

        Raises:
            ConfigurationError: 文件无法读取或内容不合法时抛出
        """
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                "读取配置文件 {} 失败: {}".format(file_path, e),
                details={'config_file': file_path}
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                "配置文件 {} 的顶层必须是JSON对象".format(file_path),
                details={'config_file': file_path}
            )

        self._config = parse_storage_config(data)
        logger.info(
            "已从配置文件加载存储配置",
            extra={'config_file': file_path, 'backend': self._config.backend.type}
        )
        return self._config

    def load_from_env(self) -> StorageConfig:
        """
        从环境变量加载配置

        Raises:
            ConfigurationError: 未指定后端或配置不合法时抛出
            UnsupportedBackendError: 后端类型未知时抛出
        """
        s = self.settings
        backend_type = (s.cloud_storage_backend or "").strip()
        if not backend_type:
            raise ConfigurationError("缺少环境变量 CLOUD_STORAGE_BACKEND")

        data: Dict[str, Any] = {
            'backend': self._backend_from_settings(backend_type, s),
            'max_file_size': s.max_file_size,
            'allowed_mime_types': parse_list_config(s.allowed_mime_types) if s.allowed_mime_types else None,
            'download_url_expiration_seconds': s.expiration_time,
        }
        self._config = parse_storage_config({k: v for k, v in data.items() if v is not None})
        logger.info("已从环境变量加载存储配置", extra={'backend': backend_type})
        return self._config

    @staticmethod
    def _backend_from_settings(backend_type: str, s: Settings) -> Dict[str, Any]:
        if backend_type == BackendType.AWS_S3.value:
            backend = {
                'type': backend_type,
                'access_key_id': s.aws_access_key_id,
                'secret_access_key': s.aws_secret_access_key,
                'region': s.aws_region,
                'bucket': s.aws_s3_bucket,
                'endpoint': s.aws_s3_endpoint,
                'prefix': s.aws_s3_prefix,
                'cdn': s.aws_s3_cdn,
                'acl': s.aws_s3_acl,
            }
        elif backend_type == BackendType.QINIU.value:
            backend = {
                'type': backend_type,
                'access_key': s.qiniu_access_key,
                'secret_key': s.qiniu_secret_key,
                'bucket': s.qiniu_bucket,
                'domain': s.qiniu_domain,
                'zone': s.qiniu_zone,
                'prefix': s.qiniu_prefix,
                'cdn': s.qiniu_cdn,
            }
        elif backend_type == BackendType.ALIBABA_OSS.value:
            backend = {
                'type': backend_type,
                'access_key_id': s.alibaba_access_key_id,
                'access_key_secret': s.alibaba_access_key_secret,
                'bucket': s.alibaba_oss_bucket,
                'region': s.alibaba_oss_region,
                'endpoint': s.alibaba_oss_endpoint,
                'prefix': s.alibaba_oss_prefix,
                'cdn': s.alibaba_oss_cdn,
            }
        else:
            raise UnsupportedBackendError(backend_type, supported_backend_types())

        # 空字符串的可选项视为未设置（acl 置空表示不设置ACL）
        for name in ('endpoint', 'prefix', 'cdn', 'zone', 'acl'):
            if name in backend and not backend[name]:
                backend[name] = None
        return backend

    def get_config(self) -> StorageConfig:
        """获取已加载的配置"""
        if self._config is None:
            raise ConfigurationError("配置尚未加载，请先调用 load()")
        return self._config

    @staticmethod
    def validate_backend_config(data: Any) -> bool:
        """校验单个后端配置是否合法"""
        try:
            _backend_adapter.validate_python(data)
            return True
        except PydanticValidationError:
            return False


def supported_backend_types() -> List[str]:
    """支持的后端类型列表"""
    return [member.value for member in BackendType]


__all__ = [
    'DEFAULT_MAX_FILE_SIZE',
    'DEFAULT_URL_EXPIRATION',
    'BackendType',
    'S3BackendConfig',
    'QiniuBackendConfig',
    'AlibabaOSSBackendConfig',
    'BackendConfig',
    'StorageConfig',
    'ConfigManager',
    'parse_storage_config',
    'supported_backend_types',
]

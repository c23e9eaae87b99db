"""
云存储服务
组合文件校验器与存储适配器，是上层调用存储能力的唯一入口
"""

from typing import Any, Dict, Mapping, Optional

from cloud_storage.core.config.storage_config import StorageConfig
from cloud_storage.core.log_utils import get_logger
from cloud_storage.core.log_messages import log_messages
from cloud_storage.core.storage import (
    BackendFactory,
    BaseStorage,
    Capability,
    CapabilityUnsupportedError,
    DeleteError,
    FileValidator,
    UploadError,
    UploadResult,
    URLError,
    ValidationError,
    describe_error,
)

logger = get_logger(__name__)


class CloudStorageService:
    """
    云存储服务

    配置与适配器在构造后不再变化，同一实例可被并发调用。
    所有失败都包装成带原因链的单个异常抛出，不会返回部分成功的结果。
    """

    def __init__(self, config: StorageConfig, backend: Optional[BaseStorage] = None):
        self.config = config
        self.backend = backend if backend is not None else BackendFactory.create(config.backend)
        self.validator = FileValidator(config)

    async def upload_file(
        self,
        data: bytes,
        filename: str,
        content_type: Optional[str] = None,
        metadata: Optional[Mapping[str, str]] = None
    ) -> UploadResult:
        """
        上传文件

        Args:
            data: 文件内容
            filename: 原始文件名
            content_type: MIME类型，不提供时按扩展名推断
            metadata: 调用方元数据，与适配器返回的元数据合并，键冲突时以调用方为准

        Returns:
            UploadResult: 上传结果

        Raises:
            UploadError: 校验或上传失败时抛出，cause 为原始异常
        """
        effective_type = content_type or FileValidator.infer_mime_type(filename)
        logger.info(
            log_messages.FILE_UPLOAD_START,
            extra={'provider': self.backend.name, 'filename': filename, 'size': len(data)}
        )

        try:
            self.validator.validate_file(data, filename, effective_type)
        except ValidationError as e:
            logger.warning(
                log_messages.FILE_VALIDATION_FAILED,
                extra={'filename': filename, 'error_code': e.code, 'error': e.message}
            )
            raise UploadError(
                "上传失败: {}".format(e.message),
                provider=self.backend.name,
                details={'filename': filename, 'validation_code': e.code},
                cause=e
            ) from e

        try:
            result = await self.backend.upload(data, filename, effective_type)
        except Exception as e:
            raise UploadError(
                "上传失败: {}".format(describe_error(e)),
                provider=self.backend.name,
                details={'filename': filename},
                cause=e
            ) from e

        return result.with_metadata(metadata)

    async def delete_file(self, url: str) -> None:
        """
        删除文件

        Args:
            url: 上传返回的URL或对象键

        Raises:
            CapabilityUnsupportedError: 当前后端不支持删除
            DeleteError: 删除失败
        """
        self._ensure_capability(Capability.DELETE)
        logger.info(log_messages.FILE_DELETE_START, extra={'provider': self.backend.name, 'url': url})

        try:
            await self.backend.delete(url)
        except CapabilityUnsupportedError:
            raise
        except Exception as e:
            raise DeleteError(
                "删除失败: {}".format(describe_error(e)),
                provider=self.backend.name,
                details={'url': url},
                cause=e
            ) from e

    async def get_download_url(self, key: str, expiration: Optional[int] = None) -> str:
        """
        生成带签名的下载链接

        Args:
            key: 对象键
            expiration: 有效期（秒），不提供时使用配置的默认值

        Raises:
            CapabilityUnsupportedError: 当前后端不支持签名下载
            ValidationError: 有效期不是正整数
            URLError: 签名失败
        """
        self._ensure_capability(Capability.DOWNLOAD_URL)
        if expiration is None:
            expires = self.config.download_url_expiration_seconds
        elif expiration <= 0:
            raise ValidationError(
                "下载链接有效期必须为正整数: {}".format(expiration),
                code="INVALID_EXPIRATION",
                details={'expiration': expiration}
            )
        else:
            expires = expiration

        try:
            return await self.backend.get_download_url(key, expires)
        except CapabilityUnsupportedError:
            raise
        except Exception as e:
            raise URLError(
                "生成下载链接失败: {}".format(describe_error(e)),
                provider=self.backend.name,
                details={'key': key},
                cause=e
            ) from e

    def get_backend_info(self) -> Dict[str, Any]:
        """当前后端信息"""
        return {
            'name': self.backend.name,
            'type': self.config.backend.type,
            'capabilities': sorted(c.value for c in self.backend.capabilities),
        }

    def get_config_summary(self) -> Dict[str, Any]:
        """配置摘要（不含密钥）"""
        return self.config.summary()

    def _ensure_capability(self, capability: Capability) -> None:
        if not self.backend.supports(capability):
            raise CapabilityUnsupportedError(capability.value, self.backend.name)


__all__ = ['CloudStorageService']

"""
云存储业务处理器
处理请求级别的逻辑：解码文件数据，调用云存储服务，并把存储异常转换为HTTP错误
"""

from typing import Any, Dict

from fastapi import HTTPException, status

from cloud_storage.core.log_utils import get_logger
from cloud_storage.core.storage import (
    CapabilityUnsupportedError,
    ConfigurationError,
    ProviderOperationError,
    StorageError,
    ValidationError,
)
from cloud_storage.schemas.storage import (
    BackendInfo,
    DownloadUrlRequest,
    FileDeleteRequest,
    FileUploadRequest,
)
from cloud_storage.services.storage.service import CloudStorageService
from cloud_storage.utils.file_utils import decode_base64_data

logger = get_logger(__name__)


def http_status_for(error: StorageError) -> int:
    """存储异常对应的HTTP状态码"""
    # 校验失败会被包装成上传错误，按原因判断
    if isinstance(error, ValidationError) or isinstance(error.cause, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(error, CapabilityUnsupportedError):
        return status.HTTP_501_NOT_IMPLEMENTED
    if isinstance(error, ConfigurationError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    if isinstance(error, ProviderOperationError):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def to_http_exception(error: StorageError) -> HTTPException:
    return HTTPException(status_code=http_status_for(error), detail=error.message)


class CloudStorageHandler:
    """云存储业务处理器"""

    def __init__(self, service: CloudStorageService):
        self.service = service

    async def handle_upload(self, request: FileUploadRequest) -> Dict[str, Any]:
        """处理文件上传"""
        try:
            data = decode_base64_data(request.file_data)
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="fileData 不是合法的Base64数据"
            ) from e

        try:
            result = await self.service.upload_file(
                data,
                request.filename,
                content_type=request.content_type,
                metadata=request.metadata
            )
        except StorageError as e:
            logger.error("文件上传请求失败", extra={'filename': request.filename, 'error': str(e)})
            raise to_http_exception(e) from e

        return result.to_dict()

    async def handle_delete(self, request: FileDeleteRequest) -> Dict[str, Any]:
        """处理文件删除"""
        target = request.target
        try:
            await self.service.delete_file(target)
        except StorageError as e:
            logger.error("文件删除请求失败", extra={'target': target, 'error': str(e)})
            raise to_http_exception(e) from e

        return {'target': target}

    async def handle_download_url(self, request: DownloadUrlRequest) -> Dict[str, Any]:
        """处理下载链接生成"""
        expires_in = request.expiration_time or self.service.config.download_url_expiration_seconds
        try:
            url = await self.service.get_download_url(request.key, expires_in)
        except StorageError as e:
            logger.error("生成下载链接请求失败", extra={'key': request.key, 'error': str(e)})
            raise to_http_exception(e) from e

        return {'url': url, 'expires_in': expires_in}

    def handle_info(self) -> Dict[str, Any]:
        return {
            'backend': BackendInfo(**self.service.get_backend_info()).model_dump(),
            'config': self.service.get_config_summary(),
        }

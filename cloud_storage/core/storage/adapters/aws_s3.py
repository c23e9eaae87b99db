"""
S3兼容存储适配器
实现BaseStorage接口，支持AWS S3及MinIO等自定义端点的S3兼容服务
"""

from typing import TYPE_CHECKING, Optional
from urllib.parse import quote

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from cloud_storage.core.log_utils import get_logger
from cloud_storage.core.log_messages import log_messages
from cloud_storage.core.storage.base_storage import DEFAULT_EXPIRATION, BaseStorage, Capability
from cloud_storage.core.storage.exceptions import DeleteError, URLError, UploadError
from cloud_storage.core.storage.models import UploadResult

if TYPE_CHECKING:
    from cloud_storage.core.config.storage_config import S3BackendConfig

logger = get_logger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class AwsS3Adapter(BaseStorage):
    """
    S3兼容存储适配器

    - 未配置端点时使用虚拟主机风格地址 ``https://<bucket>.s3.<region>.amazonaws.com/<key>``
    - 配置了自定义端点时强制使用路径风格 ``<endpoint>/<bucket>/<key>``
    - 上传对象默认 ACL 为 public-read，可通过配置 acl 置空关闭
    """

    ADAPTER_NAME: str = "aws-s3"
    name: str = "AWS S3"
    capabilities = frozenset({Capability.UPLOAD, Capability.DELETE, Capability.DOWNLOAD_URL})

    REQUIRED_FIELDS = ("access_key_id", "secret_access_key", "region", "bucket")
    NOT_FOUND_CODES = frozenset({"NoSuchKey", "NotFound", "404"})

    def __init__(self, config: "S3BackendConfig") -> None:
        """
        初始化S3客户端

        Raises:
            ConfigurationError: 配置不完整时抛出
        """
        self._require_fields(config, self.REQUIRED_FIELDS, self.name)
        super().__init__(prefix=config.prefix, cdn=config.cdn)

        self.config = config
        self.bucket = config.bucket
        self._client = self._create_client()

    def _create_client(self):
        """创建boto3 S3客户端（仅初始化凭证，不发起网络请求）"""
        addressing_style = "path" if self.config.endpoint else "virtual"
        return boto3.client(
            "s3",
            aws_access_key_id=self.config.access_key_id,
            aws_secret_access_key=self.config.secret_access_key,
            region_name=self.config.region,
            endpoint_url=self.config.endpoint or None,
            config=Config(signature_version="s3v4", s3={"addressing_style": addressing_style}),
        )

    def native_url(self, key: str) -> str:
        """对象的原生访问地址"""
        quoted_key = quote(key, safe="/")
        if self.config.endpoint:
            return f"{self.config.endpoint.rstrip('/')}/{self.bucket}/{quoted_key}"
        return f"https://{self.bucket}.s3.{self.config.region}.amazonaws.com/{quoted_key}"

    async def upload(
        self,
        data: bytes,
        filename: str,
        content_type: Optional[str] = None
    ) -> UploadResult:
        key = self._generate_key(filename)

        upload_params = {
            'Bucket': self.bucket,
            'Key': key,
            'Body': data,
            'ContentType': content_type or DEFAULT_CONTENT_TYPE,
        }
        if self.config.acl:
            upload_params['ACL'] = self.config.acl

        try:
            response = await self._run_in_executor(self._client.put_object, **upload_params)
        except Exception as e:
            logger.error(
                log_messages.FILE_UPLOAD_FAILED,
                exception=e,
                extra={'provider': self.name, 'bucket': self.bucket, 'key': key}
            )
            raise UploadError(
                "S3 上传失败: {}".format(e),
                provider=self.name,
                details={'key': key},
                cause=e
            ) from e

        metadata = {
            'backend': self.name,
            'bucket': self.bucket,
            'key': key,
        }
        etag = (response or {}).get('ETag')
        if etag:
            metadata['etag'] = etag.strip('"')

        logger.info(
            log_messages.FILE_UPLOAD_SUCCESS,
            extra={'provider': self.name, 'bucket': self.bucket, 'key': key, 'size': len(data)}
        )
        return UploadResult(
            url=self._public_url(key, self.native_url(key)),
            key=key,
            size=len(data),
            content_type=content_type,
            metadata=metadata,
        )

    async def delete(self, url: str) -> None:
        key = self._extract_key(url)
        if not key:
            raise DeleteError("S3 删除失败: 无法从 '{}' 解析出对象键".format(url), provider=self.name)

        try:
            await self._run_in_executor(self._client.delete_object, Bucket=self.bucket, Key=key)
        except ClientError as e:
            if self._is_not_found(e):
                logger.info(log_messages.FILE_DELETE_NOT_FOUND, extra={'provider': self.name, 'key': key})
                return
            logger.error(log_messages.FILE_DELETE_FAILED, exception=e, extra={'provider': self.name, 'key': key})
            raise DeleteError("S3 删除失败: {}".format(e), provider=self.name, details={'key': key}, cause=e) from e
        except Exception as e:
            logger.error(log_messages.FILE_DELETE_FAILED, exception=e, extra={'provider': self.name, 'key': key})
            raise DeleteError("S3 删除失败: {}".format(e), provider=self.name, details={'key': key}, cause=e) from e

        logger.info(log_messages.FILE_DELETE_SUCCESS, extra={'provider': self.name, 'key': key})

    async def get_download_url(self, key: str, expiration: int = DEFAULT_EXPIRATION) -> str:
        if not key:
            raise URLError("生成下载链接失败: 对象键为空", provider=self.name)

        try:
            url = await self._run_in_executor(
                self._client.generate_presigned_url,
                'get_object',
                Params={'Bucket': self.bucket, 'Key': key},
                ExpiresIn=expiration,
            )
        except Exception as e:
            logger.error(
                log_messages.SIGNED_URL_FAILED,
                exception=e,
                extra={'provider': self.name, 'key': key, 'expires': expiration}
            )
            raise URLError("生成下载链接失败: {}".format(e), provider=self.name, details={'key': key}, cause=e) from e

        logger.info(log_messages.SIGNED_URL_SUCCESS, extra={'provider': self.name, 'key': key, 'expires': expiration})
        return url

    def _extract_key(self, url: str) -> str:
        key = super()._extract_key(url)
        # 路径风格地址的路径部分以存储桶名开头
        bucket_prefix = f"{self.bucket}/"
        if self.config.endpoint and not self.cdn and key.startswith(bucket_prefix) and "://" in url:
            return key[len(bucket_prefix):]
        return key

    def _is_not_found(self, error: ClientError) -> bool:
        response = getattr(error, 'response', None) or {}
        code = str(response.get('Error', {}).get('Code', ''))
        status = response.get('ResponseMetadata', {}).get('HTTPStatusCode')
        return code in self.NOT_FOUND_CODES or status == 404


__all__ = ['AwsS3Adapter']

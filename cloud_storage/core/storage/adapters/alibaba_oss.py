"""
阿里云OSS存储适配器
实现BaseStorage接口，提供阿里云对象存储服务
"""

from typing import TYPE_CHECKING, Optional
from urllib.parse import quote, urlparse

import oss2
from oss2.exceptions import NoSuchKey, OssError

from cloud_storage.core.log_utils import get_logger
from cloud_storage.core.log_messages import log_messages
from cloud_storage.core.storage.base_storage import DEFAULT_EXPIRATION, BaseStorage, Capability
from cloud_storage.core.storage.exceptions import DeleteError, URLError, UploadError
from cloud_storage.core.storage.models import UploadResult
from cloud_storage.utils.string_utils import ensure_url_scheme

if TYPE_CHECKING:
    from cloud_storage.core.config.storage_config import AlibabaOSSBackendConfig

logger = get_logger(__name__)


def resolve_endpoint(region: str, endpoint: Optional[str] = None) -> str:
    """
    计算OSS Endpoint

    优先使用自定义Endpoint；否则由地域推导，地域可写成 ``oss-cn-hangzhou`` 或 ``cn-hangzhou``。
    """
    if endpoint:
        return ensure_url_scheme(endpoint)
    region = region.strip()
    if not region.startswith("oss-"):
        region = f"oss-{region}"
    return f"https://{region}.aliyuncs.com"


class AlibabaOssAdapter(BaseStorage):
    """
    阿里云OSS存储适配器

    下载链接使用OSS的HMAC请求签名生成，有效期与调用方指定的过期时间绑定。
    删除既接受上传返回的URL，也接受对象键本身。
    """

    ADAPTER_NAME: str = "alibaba-oss"
    name: str = "Alibaba Cloud OSS"
    capabilities = frozenset({Capability.UPLOAD, Capability.DELETE, Capability.DOWNLOAD_URL})

    REQUIRED_FIELDS = ("access_key_id", "access_key_secret", "bucket", "region")

    def __init__(self, config: "AlibabaOSSBackendConfig") -> None:
        """
        初始化OSS客户端

        Raises:
            ConfigurationError: 配置不完整时抛出
        """
        self._require_fields(config, self.REQUIRED_FIELDS, self.name)
        super().__init__(prefix=config.prefix, cdn=config.cdn)

        self.config = config
        self.bucket_name = config.bucket
        self.endpoint = resolve_endpoint(config.region, config.endpoint)

        auth = oss2.Auth(config.access_key_id, config.access_key_secret)
        self._bucket = oss2.Bucket(auth, self.endpoint, self.bucket_name)

    def native_url(self, key: str) -> str:
        """对象的外网访问地址 ``<scheme>://<bucket>.<endpoint-host>/<key>``"""
        parsed = urlparse(self.endpoint)
        return f"{parsed.scheme}://{self.bucket_name}.{parsed.netloc}/{quote(key, safe='/')}"

    async def upload(
        self,
        data: bytes,
        filename: str,
        content_type: Optional[str] = None
    ) -> UploadResult:
        key = self._generate_key(filename)
        headers = {'Content-Type': content_type} if content_type else None

        try:
            result = await self._run_in_executor(self._bucket.put_object, key, data, headers=headers)
        except Exception as e:
            logger.error(
                log_messages.FILE_UPLOAD_FAILED,
                exception=e,
                extra={'provider': self.name, 'bucket': self.bucket_name, 'key': key}
            )
            raise UploadError(
                "OSS 上传失败: {}".format(self._describe(e)),
                provider=self.name,
                details={'key': key},
                cause=e
            ) from e

        metadata = {
            'backend': self.name,
            'bucket': self.bucket_name,
            'key': key,
        }
        etag = getattr(result, 'etag', None)
        if etag:
            metadata['etag'] = str(etag).strip('"')

        logger.info(
            log_messages.FILE_UPLOAD_SUCCESS,
            extra={'provider': self.name, 'bucket': self.bucket_name, 'key': key, 'size': len(data)}
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
            raise DeleteError("OSS 删除失败: 无法从 '{}' 解析出对象键".format(url), provider=self.name)

        try:
            await self._run_in_executor(self._bucket.delete_object, key)
        except NoSuchKey:
            logger.info(log_messages.FILE_DELETE_NOT_FOUND, extra={'provider': self.name, 'key': key})
            return
        except OssError as e:
            if getattr(e, 'status', None) == 404:
                logger.info(log_messages.FILE_DELETE_NOT_FOUND, extra={'provider': self.name, 'key': key})
                return
            logger.error(log_messages.FILE_DELETE_FAILED, exception=e, extra={'provider': self.name, 'key': key})
            raise DeleteError(
                "OSS 删除失败: {}".format(self._describe(e)),
                provider=self.name,
                details={'key': key},
                cause=e
            ) from e
        except Exception as e:
            logger.error(log_messages.FILE_DELETE_FAILED, exception=e, extra={'provider': self.name, 'key': key})
            raise DeleteError("OSS 删除失败: {}".format(e), provider=self.name, details={'key': key}, cause=e) from e

        logger.info(log_messages.FILE_DELETE_SUCCESS, extra={'provider': self.name, 'key': key})

    async def get_download_url(self, key: str, expiration: int = DEFAULT_EXPIRATION) -> str:
        if not key:
            raise URLError("生成下载链接失败: 对象键为空", provider=self.name)

        try:
            url = self._bucket.sign_url('GET', key, expiration, slash_safe=True)
        except Exception as e:
            logger.error(log_messages.SIGNED_URL_FAILED, exception=e, extra={'provider': self.name, 'key': key})
            raise URLError("生成下载链接失败: {}".format(e), provider=self.name, details={'key': key}, cause=e) from e

        logger.info(log_messages.SIGNED_URL_SUCCESS, extra={'provider': self.name, 'key': key, 'expires': expiration})
        return url

    @staticmethod
    def _describe(error: Exception) -> str:
        if isinstance(error, OssError):
            return "{} - {}".format(getattr(error, 'code', ''), getattr(error, 'message', '') or error)
        return str(error)


__all__ = ['AlibabaOssAdapter', 'resolve_endpoint']

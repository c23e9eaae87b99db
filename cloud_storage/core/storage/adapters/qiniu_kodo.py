"""
七牛云存储适配器
实现BaseStorage接口，提供七牛云Kodo对象存储服务
"""

from typing import TYPE_CHECKING, Any, Dict, Optional
from urllib.parse import quote

from qiniu import Auth, BucketManager, Zone, put_data

from cloud_storage.core.log_utils import get_logger
from cloud_storage.core.log_messages import log_messages
from cloud_storage.core.storage.base_storage import DEFAULT_EXPIRATION, BaseStorage, Capability
from cloud_storage.core.storage.exceptions import DeleteError, URLError, UploadError
from cloud_storage.core.storage.models import UploadResult
from cloud_storage.utils.string_utils import ensure_url_scheme

if TYPE_CHECKING:
    from cloud_storage.core.config.storage_config import QiniuBackendConfig

logger = get_logger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
DEFAULT_ZONE = "z0"

# 存储区域代码 -> 服务域名
ZONE_HOSTS: Dict[str, Dict[str, str]] = {
    # 华东
    "z0": {
        "up_host": "https://upload.qiniup.com",
        "up_host_backup": "https://up.qiniup.com",
        "io_host": "https://iovip.qiniuio.com",
        "rs_host": "https://rs-z0.qiniuapi.com",
        "rsf_host": "https://rsf-z0.qiniuapi.com",
        "api_host": "https://api.qiniuapi.com",
    },
    # 华北
    "z1": {
        "up_host": "https://upload-z1.qiniup.com",
        "up_host_backup": "https://up-z1.qiniup.com",
        "io_host": "https://iovip-z1.qiniuio.com",
        "rs_host": "https://rs-z1.qiniuapi.com",
        "rsf_host": "https://rsf-z1.qiniuapi.com",
        "api_host": "https://api.qiniuapi.com",
    },
    # 华南
    "z2": {
        "up_host": "https://upload-z2.qiniup.com",
        "up_host_backup": "https://up-z2.qiniup.com",
        "io_host": "https://iovip-z2.qiniuio.com",
        "rs_host": "https://rs-z2.qiniuapi.com",
        "rsf_host": "https://rsf-z2.qiniuapi.com",
        "api_host": "https://api.qiniuapi.com",
    },
    # 北美
    "na0": {
        "up_host": "https://upload-na0.qiniup.com",
        "up_host_backup": "https://up-na0.qiniup.com",
        "io_host": "https://iovip-na0.qiniuio.com",
        "rs_host": "https://rs-na0.qiniuapi.com",
        "rsf_host": "https://rsf-na0.qiniuapi.com",
        "api_host": "https://api.qiniuapi.com",
    },
    # 东南亚
    "as0": {
        "up_host": "https://upload-as0.qiniup.com",
        "up_host_backup": "https://up-as0.qiniup.com",
        "io_host": "https://iovip-as0.qiniuio.com",
        "rs_host": "https://rs-as0.qiniuapi.com",
        "rsf_host": "https://rsf-as0.qiniuapi.com",
        "api_host": "https://api.qiniuapi.com",
    },
}

# 七牛删除接口的“资源不存在”状态码
STATUS_NOT_FOUND = 612


def resolve_zone(zone: Optional[str]) -> Optional[str]:
    """
    解析存储区域代码

    未配置时返回 None（由SDK自动查询区域）；无法识别的代码回退到默认区域 z0，不会导致构造失败。
    """
    if not zone:
        return None
    code = zone.strip().lower()
    if code in ZONE_HOSTS:
        return code
    logger.warning("未知的七牛存储区域，使用默认区域", extra={'zone': zone, 'default_zone': DEFAULT_ZONE})
    return DEFAULT_ZONE


class QiniuAdapter(BaseStorage):
    """
    七牛云存储适配器

    SDK调用是阻塞的，每次上传/删除在线程池中执行一次并等待结果，
    一次调用只会得到一个成功结果或一个异常。
    上传成功需要同时满足：没有错误信息且状态码为200。
    """

    ADAPTER_NAME: str = "qiniu"
    name: str = "Qiniu Cloud Storage"
    capabilities = frozenset({Capability.UPLOAD, Capability.DELETE, Capability.DOWNLOAD_URL})

    REQUIRED_FIELDS = ("access_key", "secret_key", "bucket", "domain")

    def __init__(self, config: "QiniuBackendConfig") -> None:
        """
        初始化七牛客户端

        Raises:
            ConfigurationError: 凭证、空间或域名缺失时抛出
        """
        self._require_fields(config, self.REQUIRED_FIELDS, self.name)
        super().__init__(prefix=config.prefix, cdn=config.cdn)

        self.config = config
        self.bucket = config.bucket
        self.domain = ensure_url_scheme(config.domain)
        self.zone_code = resolve_zone(config.zone)

        self._auth = Auth(config.access_key, config.secret_key)
        self._zone = self._build_zone(self.zone_code)
        self._bucket_manager = BucketManager(self._auth, zone=self._zone)

    @staticmethod
    def _build_zone(zone_code: Optional[str]) -> Optional[Zone]:
        if zone_code is None:
            return None
        return Zone(scheme="https", **ZONE_HOSTS[zone_code])

    def native_url(self, key: str) -> str:
        """对象在绑定域名下的访问地址"""
        return f"{self.domain}/{quote(key, safe='/')}"

    def _upload_kwargs(self, content_type: Optional[str]) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {'mime_type': content_type or DEFAULT_CONTENT_TYPE}
        if self._zone is not None:
            kwargs['regions'] = [self._zone]
        return kwargs

    async def upload(
        self,
        data: bytes,
        filename: str,
        content_type: Optional[str] = None
    ) -> UploadResult:
        key = self._generate_key(filename)

        try:
            token = self._auth.upload_token(self.bucket, key)
            ret, info = await self._run_in_executor(
                put_data, token, key, data, **self._upload_kwargs(content_type)
            )
        except Exception as e:
            logger.error(log_messages.FILE_UPLOAD_FAILED, exception=e, extra={'provider': self.name, 'key': key})
            raise UploadError(
                "七牛上传失败: {}".format(e),
                provider=self.name,
                details={'key': key},
                cause=e
            ) from e

        status = getattr(info, 'status_code', None)
        error = getattr(info, 'error', None)
        if error or status != 200 or ret is None:
            logger.error(
                log_messages.FILE_UPLOAD_FAILED,
                extra={'provider': self.name, 'key': key, 'status': status, 'error': error}
            )
            raise UploadError(
                "七牛上传失败，状态码 {}: {}".format(status, error or getattr(info, 'text_body', '')),
                provider=self.name,
                details={'key': key, 'status': status}
            )

        metadata = {
            'backend': self.name,
            'bucket': self.bucket,
            'key': key,
        }
        if ret.get('hash'):
            metadata['hash'] = str(ret['hash'])

        logger.info(log_messages.FILE_UPLOAD_SUCCESS, extra={'provider': self.name, 'key': key, 'size': len(data)})
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
            raise DeleteError("七牛删除失败: 无法从 '{}' 解析出对象键".format(url), provider=self.name)

        try:
            _, info = await self._run_in_executor(self._bucket_manager.delete, self.bucket, key)
        except Exception as e:
            logger.error(log_messages.FILE_DELETE_FAILED, exception=e, extra={'provider': self.name, 'key': key})
            raise DeleteError("七牛删除失败: {}".format(e), provider=self.name, details={'key': key}, cause=e) from e

        status = getattr(info, 'status_code', None)
        if status == STATUS_NOT_FOUND:
            logger.info(log_messages.FILE_DELETE_NOT_FOUND, extra={'provider': self.name, 'key': key})
            return
        if status != 200:
            error = getattr(info, 'error', None) or getattr(info, 'text_body', '')
            logger.error(
                log_messages.FILE_DELETE_FAILED,
                extra={'provider': self.name, 'key': key, 'status': status, 'error': error}
            )
            raise DeleteError(
                "七牛删除失败，状态码 {}: {}".format(status, error),
                provider=self.name,
                details={'key': key, 'status': status}
            )

        logger.info(log_messages.FILE_DELETE_SUCCESS, extra={'provider': self.name, 'key': key})

    async def get_download_url(self, key: str, expiration: int = DEFAULT_EXPIRATION) -> str:
        if not key:
            raise URLError("生成下载链接失败: 对象键为空", provider=self.name)

        try:
            url = self._auth.private_download_url(self.native_url(key), expires=expiration)
        except Exception as e:
            logger.error(log_messages.SIGNED_URL_FAILED, exception=e, extra={'provider': self.name, 'key': key})
            raise URLError("生成下载链接失败: {}".format(e), provider=self.name, details={'key': key}, cause=e) from e

        logger.info(log_messages.SIGNED_URL_SUCCESS, extra={'provider': self.name, 'key': key, 'expires': expiration})
        return url


__all__ = ['QiniuAdapter', 'resolve_zone', 'ZONE_HOSTS', 'DEFAULT_ZONE']

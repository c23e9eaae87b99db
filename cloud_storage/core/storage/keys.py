"""
对象键工具
负责对象键生成、访问URL构建以及从URL反推对象键
"""

from datetime import date, datetime, timezone
from typing import Optional
from urllib.parse import quote, unquote, urlparse

from cloud_storage.core.storage.models import ExtractedKey
from cloud_storage.utils.file_utils import get_file_extension
from cloud_storage.utils.id_utils import generate_uuid

UPLOADS_DIR = "uploads"


def generate_object_key(
    filename: str,
    prefix: Optional[str] = None,
    today: Optional[date] = None
) -> str:
    """
    生成对象键

    格式: ``[<prefix>/]uploads/<YYYY-MM-DD>/<uuid>.<ext>``，日期取UTC。
    每次调用生成新的随机UUID，无需任何共享计数器。

    Args:
        filename: 原始文件名，仅使用其扩展名
        prefix: 可选的路径前缀
        today: 指定日期（测试用），默认当前UTC日期

    Returns:
        str: 对象键
    """
    day = (today or datetime.now(timezone.utc).date()).strftime("%Y-%m-%d")
    extension = get_file_extension(filename)
    name = f"{generate_uuid()}.{extension}" if extension else generate_uuid()
    base_key = f"{UPLOADS_DIR}/{day}/{name}"

    if prefix and prefix.strip("/"):
        return f"{prefix.strip('/')}/{base_key}"
    return base_key


def build_cdn_url(cdn_base: str, key: str) -> str:
    """拼接CDN访问地址"""
    return f"{cdn_base.rstrip('/')}/{quote(key, safe='/')}"


def resolve_public_url(key: str, native_url: str, cdn_base: Optional[str] = None) -> str:
    """
    按优先级确定对外访问URL

    配置了CDN时总是使用CDN地址，否则使用服务商原生地址。

    Args:
        key: 对象键
        native_url: 服务商原生访问地址
        cdn_base: CDN基础地址

    Returns:
        str: 访问URL
    """
    if cdn_base:
        return build_cdn_url(cdn_base, key)
    return native_url


def extract_key_from_url(url: str) -> ExtractedKey:
    """
    从URL反推对象键

    取URL的路径部分并去掉开头的分隔符；输入无法解析为URL时把整个字符串当作键。
    这只是生成规则的尽力逆运算：当CDN路径与存储桶原生路径结构不一致时，
    结果可能不正确，能拿到对象键时应直接传对象键。

    Args:
        url: 先前返回的访问URL或对象键

    Returns:
        ExtractedKey: 解析结果
    """
    try:
        parsed = urlparse(url)
    except ValueError:
        return ExtractedKey(key=url, from_url=False)

    if not (parsed.scheme and parsed.netloc):
        return ExtractedKey(key=url, from_url=False)

    path = unquote(parsed.path)
    return ExtractedKey(key=path[1:] if path.startswith("/") else path, from_url=True)


__all__ = [
    'UPLOADS_DIR',
    'generate_object_key',
    'build_cdn_url',
    'resolve_public_url',
    'extract_key_from_url',
]

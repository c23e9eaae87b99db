"""
文件校验模块
上传前的大小、MIME类型、文件名检查，以及按扩展名推断MIME类型
"""

import re
from typing import TYPE_CHECKING, Dict, Optional

from cloud_storage.core.storage.exceptions import (
    EmptyFilenameError,
    FileTooLargeError,
    FilenameTooLongError,
    InvalidFilenameError,
    MimeTypeNotAllowedError,
)
from cloud_storage.utils.file_utils import get_file_extension

if TYPE_CHECKING:
    from cloud_storage.core.config.storage_config import StorageConfig

MAX_FILENAME_LENGTH = 255
DEFAULT_MIME_TYPE = "application/octet-stream"

# 路径分隔符、Windows保留字符以及控制字符（0-31）
_INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')

MIME_TYPES: Dict[str, str] = {
    # 图片
    'jpg': 'image/jpeg',
    'jpeg': 'image/jpeg',
    'png': 'image/png',
    'gif': 'image/gif',
    'webp': 'image/webp',
    'svg': 'image/svg+xml',
    'bmp': 'image/bmp',
    'ico': 'image/x-icon',

    # 文档
    'pdf': 'application/pdf',
    'doc': 'application/msword',
    'docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'xls': 'application/vnd.ms-excel',
    'xlsx': 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    'ppt': 'application/vnd.ms-powerpoint',
    'pptx': 'application/vnd.openxmlformats-officedocument.presentationml.presentation',
    'txt': 'text/plain',
    'rtf': 'application/rtf',

    # 音频
    'mp3': 'audio/mpeg',
    'wav': 'audio/wav',
    'ogg': 'audio/ogg',
    'flac': 'audio/flac',
    'm4a': 'audio/mp4',

    # 视频
    'mp4': 'video/mp4',
    'avi': 'video/x-msvideo',
    'mov': 'video/quicktime',
    'wmv': 'video/x-ms-wmv',
    'flv': 'video/x-flv',
    'webm': 'video/webm',

    # 压缩包
    'zip': 'application/zip',
    'rar': 'application/x-rar-compressed',
    '7z': 'application/x-7z-compressed',
    'tar': 'application/x-tar',
    'gz': 'application/gzip',

    # 代码
    'js': 'application/javascript',
    'json': 'application/json',
    'xml': 'application/xml',
    'html': 'text/html',
    'css': 'text/css',
    'csv': 'text/csv',
}


class FileValidator:
    """
    上传文件校验器

    按顺序检查：大小 -> MIME类型 -> 文件名，遇到第一个失败项即抛出。
    无副作用，结果只取决于输入和当前配置。
    """

    def __init__(self, config: "StorageConfig") -> None:
        self.config = config

    def validate_file(self, data: bytes, filename: str, content_type: Optional[str] = None) -> None:
        """
        校验待上传文件

        Raises:
            FileTooLargeError: 文件大小超过限制
            MimeTypeNotAllowedError: MIME类型不在允许列表中
            EmptyFilenameError: 文件名为空
            InvalidFilenameError: 文件名含非法字符
            FilenameTooLongError: 文件名超过255个字符
        """
        self.validate_file_size(data)
        self.validate_mime_type(content_type)
        self.validate_filename(filename)

    def validate_file_size(self, data: bytes) -> None:
        size = len(data)
        if size > self.config.max_file_size:
            raise FileTooLargeError(size, self.config.max_file_size)

    def validate_mime_type(self, content_type: Optional[str]) -> None:
        allowed = self.config.allowed_mime_types
        # 未设置允许列表或未提供类型时不限制
        if not allowed or not content_type:
            return
        if content_type not in allowed:
            raise MimeTypeNotAllowedError(content_type, sorted(allowed))

    @staticmethod
    def validate_filename(filename: str) -> None:
        if not filename or not filename.strip():
            raise EmptyFilenameError()
        if _INVALID_FILENAME_CHARS.search(filename):
            raise InvalidFilenameError(filename)
        if len(filename) > MAX_FILENAME_LENGTH:
            raise FilenameTooLongError(len(filename), MAX_FILENAME_LENGTH)

    @staticmethod
    def get_file_extension(filename: str) -> str:
        return get_file_extension(filename)

    @staticmethod
    def infer_mime_type(filename: str) -> str:
        """按扩展名推断MIME类型，未知扩展名返回 application/octet-stream"""
        return MIME_TYPES.get(get_file_extension(filename), DEFAULT_MIME_TYPE)


__all__ = [
    'MAX_FILENAME_LENGTH',
    'DEFAULT_MIME_TYPE',
    'MIME_TYPES',
    'FileValidator',
]

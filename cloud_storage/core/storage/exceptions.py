"""
存储服务异常定义
定义存储模块中使用的所有异常类型
"""

from typing import Any, Dict, Optional


class StorageError(Exception):
    """
    存储操作基础异常

    所有存储相关异常的基类。

    Attributes:
        message: 错误消息
        code: 错误码
        details: 错误详情
        cause: 原始异常（可选）
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigurationError(StorageError):
    """存储配置错误（构造阶段致命）"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="CONFIG_ERROR", details=details)


class UnsupportedBackendError(StorageError):
    """不支持的存储后端类型"""

    def __init__(self, backend_type: Any, supported: Optional[list] = None) -> None:
        supported = supported or []
        super().__init__(
            "不支持的存储后端类型: {}，可用类型: {}".format(backend_type, ', '.join(supported)),
            code="UNSUPPORTED_BACKEND",
            details={'backend_type': backend_type, 'supported': supported}
        )
        self.backend_type = backend_type


class CapabilityUnsupportedError(StorageError):
    """当前存储后端未提供该操作"""

    def __init__(self, capability: str, provider: str) -> None:
        super().__init__(
            "{} 不支持 {} 操作".format(provider, capability),
            code="CAPABILITY_UNSUPPORTED",
            details={'capability': capability, 'provider': provider}
        )
        self.capability = capability
        self.provider = provider


# ==================== 文件校验异常 ====================

class ValidationError(StorageError):
    """文件校验失败，调用方修正输入后可重试"""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message, code=code, details=details)


class FileTooLargeError(ValidationError):
    """文件超过大小限制"""

    def __init__(self, size: int, max_size: int) -> None:
        super().__init__(
            "文件大小 {} 字节超过允许的最大值 {} 字节".format(size, max_size),
            code="FILE_TOO_LARGE",
            details={'size': size, 'max_size': max_size}
        )


class MimeTypeNotAllowedError(ValidationError):
    """MIME类型不在允许列表中"""

    def __init__(self, content_type: str, allowed: list) -> None:
        super().__init__(
            "不允许的内容类型 '{}'，允许的类型: {}".format(content_type, ', '.join(allowed)),
            code="MIME_NOT_ALLOWED",
            details={'content_type': content_type, 'allowed': allowed}
        )


class EmptyFilenameError(ValidationError):
    """文件名为空"""

    def __init__(self) -> None:
        super().__init__("文件名不能为空", code="EMPTY_FILENAME")


class InvalidFilenameError(ValidationError):
    """文件名包含非法字符"""

    def __init__(self, filename: str) -> None:
        super().__init__(
            "文件名包含非法字符",
            code="INVALID_FILENAME",
            details={'filename': filename}
        )


class FilenameTooLongError(ValidationError):
    """文件名过长"""

    def __init__(self, length: int, max_length: int) -> None:
        super().__init__(
            "文件名过长（最多 {} 个字符）".format(max_length),
            code="FILENAME_TOO_LONG",
            details={'length': length, 'max_length': max_length}
        )


# ==================== 服务商操作异常 ====================

class ProviderOperationError(StorageError):
    """
    服务商操作失败

    上传、删除、签名过程中由底层SDK抛出的网络、鉴权或服务错误，不做重试，
    原样携带服务商名称与原始错误信息。
    """

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        code: str = "PROVIDER_ERROR",
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None
    ) -> None:
        details = dict(details or {})
        if provider:
            details.setdefault('provider', provider)
        super().__init__(message, code=code, details=details, cause=cause)
        self.provider = provider


class UploadError(ProviderOperationError):
    """文件上传错误"""

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None
    ) -> None:
        super().__init__(message, provider, code="UPLOAD_ERROR", details=details, cause=cause)


class DeleteError(ProviderOperationError):
    """文件删除错误"""

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None
    ) -> None:
        super().__init__(message, provider, code="DELETE_ERROR", details=details, cause=cause)


class URLError(ProviderOperationError):
    """预签名URL生成错误"""

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None
    ) -> None:
        super().__init__(message, provider, code="URL_ERROR", details=details, cause=cause)


def describe_error(error: BaseException) -> str:
    """提取异常的可读信息（不带错误码前缀）"""
    if isinstance(error, StorageError):
        return error.message
    return str(error) or type(error).__name__


__all__ = [
    'StorageError',
    'ConfigurationError',
    'UnsupportedBackendError',
    'CapabilityUnsupportedError',
    'ValidationError',
    'FileTooLargeError',
    'MimeTypeNotAllowedError',
    'EmptyFilenameError',
    'InvalidFilenameError',
    'FilenameTooLongError',
    'ProviderOperationError',
    'UploadError',
    'DeleteError',
    'URLError',
    'describe_error',
]

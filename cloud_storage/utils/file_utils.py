"""
文件工具模块
提供统一的文件处理函数
"""

import base64
import binascii


def get_file_extension(filename: str) -> str:
    """
    获取文件扩展名（小写，不带点）

    取最后一个点之后的部分，没有点时返回空字符串。

    Args:
        filename: 文件名

    Returns:
        str: 文件扩展名（如：jpg, gz）
    """
    parts = filename.split('.')
    if len(parts) > 1:
        return parts[-1].lower()
    return ''


def decode_base64_data(data: str) -> bytes:
    """
    解码Base64编码的文件内容

    Args:
        data: Base64字符串

    Returns:
        bytes: 文件内容

    Raises:
        ValueError: 内容不是合法的Base64时抛出
    """
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError("文件内容不是合法的Base64编码: {}".format(e)) from e

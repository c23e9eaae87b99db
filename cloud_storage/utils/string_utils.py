"""
字符串工具模块
提供统一的字符串处理函数
"""


def ensure_url_scheme(url: str, default_scheme: str = "https") -> str:
    """
    为缺少协议的地址补上默认协议，并去掉末尾斜杠

    Args:
        url: 域名或URL
        default_scheme: 默认协议

    Returns:
        str: 带协议的URL
    """
    url = url.strip().rstrip('/')
    if '://' in url:
        return url
    return f"{default_scheme}://{url}"

"""
日志消息模板模块
统一管理所有业务日志消息模板，便于维护和国际化
"""

from typing import Dict, Any


class LogMessages:
    """日志消息模板类"""

    # ==================== 通用操作 ====================
    OPERATION_SUCCESS = "操作成功完成: {operation_name}"

    # ==================== 存储后端 ====================
    BACKEND_REGISTERED = "已注册存储适配器: {backend_type}"
    BACKEND_CREATED = "存储适配器创建成功: {provider}"
    BACKEND_CREATE_FAILED = "创建存储适配器失败: {backend_type}"

    # ==================== 文件上传相关 ====================
    FILE_UPLOAD_START = "开始文件上传"
    FILE_UPLOAD_SUCCESS = "文件上传成功"
    FILE_UPLOAD_FAILED = "文件上传失败"
    FILE_VALIDATION_FAILED = "文件验证失败"

    # ==================== 文件删除相关 ====================
    FILE_DELETE_START = "开始删除文件"
    FILE_DELETE_SUCCESS = "文件删除成功"
    FILE_DELETE_NOT_FOUND = "文件不存在，按删除成功处理"
    FILE_DELETE_FAILED = "文件删除失败"

    # ==================== 下载链接相关 ====================
    SIGNED_URL_SUCCESS = "成功生成下载链接"
    SIGNED_URL_FAILED = "生成下载链接失败"

    # ==================== 对象键相关 ====================
    KEY_FALLBACK = "无法解析为URL，整体作为对象键使用"

    @classmethod
    def format_message(cls, message_template: str, **kwargs: Any) -> str:
        """格式化日志消息模板"""
        return message_template.format(**kwargs)

    @classmethod
    def get_structured_data(cls, **kwargs: Any) -> Dict[str, Any]:
        """获取结构化日志数据"""
        return kwargs


# 全局实例
log_messages = LogMessages()

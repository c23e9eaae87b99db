"""
配置工具模块
处理配置加载、路径计算等工具方法
"""

from pathlib import Path
from typing import List


def get_project_root() -> Path:
    """获取项目根目录路径"""
    return Path(__file__).parent.parent.parent


def get_config_path(sub_path: str = "") -> Path:
    """获取config目录路径"""
    config_dir = get_project_root() / "config"
    if sub_path:
        return config_dir / sub_path
    return config_dir


def get_workspace_path(sub_path: str = "") -> Path:
    """获取workspace目录路径"""
    workspace_dir = get_project_root() / "workspace"
    if sub_path:
        return workspace_dir / sub_path
    return workspace_dir


def parse_list_config(value: str, separator: str = ",") -> List[str]:
    """解析逗号分隔的配置字符串为列表（保留大小写，去掉空项）"""
    if not value:
        return []
    return [item.strip() for item in value.split(separator) if item.strip()]

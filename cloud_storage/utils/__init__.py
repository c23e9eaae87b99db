"""
通用工具模块包
提供项目通用的工具函数和辅助类
"""

from .config_utils import (
    get_project_root,
    get_config_path,
    get_workspace_path,
    parse_list_config
)

from .id_utils import generate_uuid

from .string_utils import ensure_url_scheme

from .file_utils import (
    get_file_extension,
    decode_base64_data
)

__all__ = [
    # config_utils
    'get_project_root', 'get_config_path', 'get_workspace_path', 'parse_list_config',

    # id_utils
    'generate_uuid',

    # string_utils
    'ensure_url_scheme',

    # file_utils
    'get_file_extension', 'decode_base64_data',
]

#!/usr/bin/env python3
"""
单元测试运行脚本
专门用于运行单元测试，设置独立的环境配置
"""

import os
import sys
import subprocess

# 单元测试不能受本机云存储配置影响
STORAGE_ENV_PREFIXES = ("CLOUD_STORAGE_", "AWS_", "QINIU_", "ALIBABA_")
STORAGE_ENV_NAMES = ("CONFIG_FILE", "MAX_FILE_SIZE", "ALLOWED_MIME_TYPES", "EXPIRATION_TIME")


def main():
    """主函数"""
    env = {
        name: value for name, value in os.environ.items()
        if not name.startswith(STORAGE_ENV_PREFIXES) and name not in STORAGE_ENV_NAMES
    }
    env["APP_DEBUG"] = "true"
    env["LOG_LEVEL"] = "ERROR"

    # 构建pytest命令 - 只运行单元测试
    cmd = [
        sys.executable, "-m", "pytest",
        "tests/unit/",
        "-m", "unit",
        "-v",
        "--tb=short"
    ]

    # 添加额外的参数
    if len(sys.argv) > 1:
        cmd.extend(sys.argv[1:])

    result = subprocess.run(cmd, env=env, cwd=os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

    sys.exit(result.returncode)


if __name__ == "__main__":
    main()

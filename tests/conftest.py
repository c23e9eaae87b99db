"""
测试配置和fixtures
为所有测试提供共享的配置和fixtures

单元测试不访问任何云服务，SDK客户端一律用 unittest.mock 替换
"""

import pytest

from cloud_storage.core.config.config import Settings
from cloud_storage.core.config.storage_config import (
    AlibabaOSSBackendConfig,
    QiniuBackendConfig,
    S3BackendConfig,
    StorageConfig,
)


@pytest.fixture
def s3_backend_config():
    """S3后端配置"""
    return S3BackendConfig(
        access_key_id="test-access-key",
        secret_access_key="test-secret-key",
        region="us-east-1",
        bucket="test-bucket",
    )


@pytest.fixture
def qiniu_backend_config():
    """七牛后端配置"""
    return QiniuBackendConfig(
        access_key="test-access-key",
        secret_key="test-secret-key",
        bucket="test-bucket",
        domain="cdn.qiniu.example.com",
        zone="z0",
    )


@pytest.fixture
def oss_backend_config():
    """阿里云OSS后端配置"""
    return AlibabaOSSBackendConfig(
        access_key_id="test-access-key",
        access_key_secret="test-secret-key",
        bucket="test-bucket",
        region="cn-hangzhou",
    )


@pytest.fixture
def storage_config(s3_backend_config):
    """默认限制下的S3存储配置"""
    return StorageConfig(backend=s3_backend_config)


@pytest.fixture
def make_settings():
    """创建不读取 .env 文件的 Settings"""
    def _make(**overrides):
        return Settings(_env_file=None, **overrides)
    return _make


def pytest_configure(config):
    """配置pytest标记"""
    config.addinivalue_line("markers", "unit: 单元测试")
    config.addinivalue_line("markers", "storage: 存储抽象层测试")
    config.addinivalue_line("markers", "adapters: 存储适配器测试")
    config.addinivalue_line("markers", "config: 配置加载测试")
    config.addinivalue_line("markers", "service: 云存储服务测试")
    config.addinivalue_line("markers", "api: HTTP接口测试")
    config.addinivalue_line("markers", "logging: 日志系统测试")
    config.addinivalue_line("markers", "imports: 模块导入测试")

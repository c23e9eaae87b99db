"""
模块导入测试
测试所有模块的导入是否正常
"""

import pytest


@pytest.mark.unit
@pytest.mark.imports
class TestModuleImports:
    """模块导入测试类"""

    def test_config_import(self):
        from cloud_storage.core.config import settings
        from cloud_storage.core.config.storage_config import ConfigManager
        assert settings is not None
        assert ConfigManager is not None

    def test_storage_imports(self):
        from cloud_storage.core.storage import (
            AlibabaOssAdapter,
            AwsS3Adapter,
            BackendFactory,
            FileValidator,
            QiniuAdapter,
        )
        assert {AwsS3Adapter.ADAPTER_NAME, QiniuAdapter.ADAPTER_NAME, AlibabaOssAdapter.ADAPTER_NAME} == {
            "aws-s3", "qiniu", "alibaba-oss"
        }
        assert BackendFactory is not None
        assert FileValidator is not None

    def test_service_imports(self):
        from cloud_storage.services.storage import CloudStorageHandler, CloudStorageService
        assert CloudStorageService is not None
        assert CloudStorageHandler is not None

    def test_api_imports(self):
        from cloud_storage.api.v1.endpoints.files import router as files_router
        from cloud_storage.api.v1.router import api_router
        assert files_router is not None
        assert api_router is not None

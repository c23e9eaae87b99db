"""
阿里云OSS适配器单元测试
使用MagicMock替换oss2.Bucket，不访问真实服务
"""

import pytest
from unittest.mock import MagicMock

from oss2.exceptions import NoSuchKey, ServerError

from cloud_storage.core.storage import AlibabaOssAdapter
from cloud_storage.core.storage.adapters.alibaba_oss import resolve_endpoint
from cloud_storage.core.storage.exceptions import ConfigurationError, DeleteError, UploadError


def _oss_error(error_cls, status, code):
    return error_cls(status, {}, b"", {'Code': code, 'Message': code})


@pytest.mark.unit
@pytest.mark.adapters
class TestAlibabaOssAdapter:
    """阿里云OSS适配器测试类"""

    @pytest.fixture
    def adapter(self, oss_backend_config):
        adapter = AlibabaOssAdapter(oss_backend_config)
        adapter._bucket = MagicMock()
        adapter._bucket.put_object.return_value = MagicMock(etag='"ABC123"')
        return adapter

    @pytest.mark.parametrize("region,endpoint,expected", [
        ("cn-hangzhou", None, "https://oss-cn-hangzhou.aliyuncs.com"),
        ("oss-cn-beijing", None, "https://oss-cn-beijing.aliyuncs.com"),
        ("cn-hangzhou", "oss-accelerate.aliyuncs.com", "https://oss-accelerate.aliyuncs.com"),
        ("cn-hangzhou", "http://internal.example.com/", "http://internal.example.com"),
    ])
    def test_resolve_endpoint(self, region, endpoint, expected):
        assert resolve_endpoint(region, endpoint) == expected

    def test_init_missing_region(self, oss_backend_config):
        with pytest.raises(ConfigurationError):
            AlibabaOssAdapter(oss_backend_config.model_copy(update={'region': ""}))

    @pytest.mark.asyncio
    async def test_upload_success(self, adapter):
        result = await adapter.upload(b"hello", "pic.png", "image/png")

        assert result.url == f"https://test-bucket.oss-cn-hangzhou.aliyuncs.com/{result.key}"
        assert result.metadata['etag'] == "ABC123"
        assert result.metadata['backend'] == "Alibaba Cloud OSS"

        args, kwargs = adapter._bucket.put_object.call_args
        assert args == (result.key, b"hello")
        assert kwargs['headers'] == {'Content-Type': 'image/png'}

    @pytest.mark.asyncio
    async def test_upload_prefix_and_cdn(self, oss_backend_config):
        config = oss_backend_config.model_copy(update={'prefix': "media", 'cdn': "https://cdn.example.com"})
        adapter = AlibabaOssAdapter(config)
        adapter._bucket = MagicMock()

        result = await adapter.upload(b"x", "a.mp4", "video/mp4")

        assert result.key.startswith("media/uploads/")
        assert result.url == f"https://cdn.example.com/{result.key}"

    @pytest.mark.asyncio
    async def test_upload_failure(self, adapter):
        adapter._bucket.put_object.side_effect = _oss_error(ServerError, 403, "AccessDenied")

        with pytest.raises(UploadError) as exc_info:
            await adapter.upload(b"x", "a.png", "image/png")

        assert "AccessDenied" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_delete_accepts_key_or_url(self, adapter):
        await adapter.delete("uploads/2024-01-01/abc.png")
        await adapter.delete("https://test-bucket.oss-cn-hangzhou.aliyuncs.com/uploads/2024-01-01/abc.png")

        keys = [c.args[0] for c in adapter._bucket.delete_object.call_args_list]
        assert keys == ["uploads/2024-01-01/abc.png", "uploads/2024-01-01/abc.png"]

    @pytest.mark.asyncio
    async def test_delete_not_found_is_success(self, adapter):
        adapter._bucket.delete_object.side_effect = _oss_error(NoSuchKey, 404, "NoSuchKey")

        await adapter.delete("uploads/missing.png")

    @pytest.mark.asyncio
    async def test_delete_failure(self, adapter):
        adapter._bucket.delete_object.side_effect = _oss_error(ServerError, 500, "InternalError")

        with pytest.raises(DeleteError) as exc_info:
            await adapter.delete("uploads/a.png")

        assert exc_info.value.provider == "Alibaba Cloud OSS"

    @pytest.mark.asyncio
    async def test_get_download_url(self, adapter):
        adapter._bucket.sign_url.return_value = "https://signed"

        assert await adapter.get_download_url("uploads/a.png", 120) == "https://signed"
        adapter._bucket.sign_url.assert_called_once_with('GET', "uploads/a.png", 120, slash_safe=True)

    @pytest.mark.asyncio
    async def test_get_download_url_real_signature(self, oss_backend_config):
        """oss2本地HMAC签名，不发起网络请求"""
        adapter = AlibabaOssAdapter(oss_backend_config)

        url = await adapter.get_download_url("uploads/a.png", 120)

        assert url.startswith("https://test-bucket.oss-cn-hangzhou.aliyuncs.com/uploads/a.png?")
        assert "Signature=" in url

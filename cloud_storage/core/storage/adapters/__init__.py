"""
存储适配器模块
提供各种对象存储服务的适配器实现
"""

from cloud_storage.core.storage.adapters.alibaba_oss import AlibabaOssAdapter
from cloud_storage.core.storage.adapters.aws_s3 import AwsS3Adapter
from cloud_storage.core.storage.adapters.qiniu_kodo import QiniuAdapter

__all__ = [
    'AwsS3Adapter',
    'QiniuAdapter',
    'AlibabaOssAdapter',
]

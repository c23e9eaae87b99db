"""
文件操作API端点
上传、删除文件以及生成下载链接
采用薄路由、重服务的架构设计
"""

from fastapi import APIRouter, Depends

from cloud_storage.api.v1.deps import get_storage_handler
from cloud_storage.schemas.common import StandardResponse
from cloud_storage.schemas.storage import (
    DownloadUrlRequest,
    DownloadUrlResponse,
    FileDeleteRequest,
    FileUploadRequest,
    FileUploadResponse,
)
from cloud_storage.services.storage import CloudStorageHandler

router = APIRouter(tags=["文件操作"])


@router.post(
    "/upload",
    response_model=StandardResponse,
    summary="上传文件",
    description="上传Base64编码的文件到当前配置的云存储"
)
async def upload_file(
    request: FileUploadRequest,
    handler: CloudStorageHandler = Depends(get_storage_handler)
) -> StandardResponse:
    """
    上传文件

    功能流程：
    1. 解码文件内容
    2. 推断MIME类型并校验文件
    3. 上传到云存储
    4. 返回访问URL和对象键
    """
    result = await handler.handle_upload(request)
    return StandardResponse(
        status="success",
        message="文件上传成功",
        data=FileUploadResponse(**result).model_dump(by_alias=True)
    )


@router.post(
    "/delete",
    response_model=StandardResponse,
    summary="删除文件",
    description="按上传返回的URL或对象键删除文件，文件不存在也视为成功"
)
async def delete_file(
    request: FileDeleteRequest,
    handler: CloudStorageHandler = Depends(get_storage_handler)
) -> StandardResponse:
    result = await handler.handle_delete(request)
    return StandardResponse(status="success", message="文件删除成功", data=result)


@router.post(
    "/download-url",
    response_model=StandardResponse,
    summary="生成下载链接",
    description="为对象键生成带签名的下载链接"
)
async def get_download_url(
    request: DownloadUrlRequest,
    handler: CloudStorageHandler = Depends(get_storage_handler)
) -> StandardResponse:
    result = await handler.handle_download_url(request)
    return StandardResponse(
        status="success",
        message="成功生成下载链接",
        data=DownloadUrlResponse(**result).model_dump(by_alias=True)
    )

"""
存储信息API端点
"""

from fastapi import APIRouter, Depends

from cloud_storage.api.v1.deps import get_storage_handler
from cloud_storage.schemas.common import StandardResponse
from cloud_storage.services.storage import CloudStorageHandler

router = APIRouter(tags=["存储信息"])


@router.get(
    "/info",
    response_model=StandardResponse,
    summary="获取存储后端信息",
    description="返回当前后端类型、支持的操作以及配置摘要（不含密钥）"
)
async def get_storage_info(
    handler: CloudStorageHandler = Depends(get_storage_handler)
) -> StandardResponse:
    return StandardResponse(status="success", message="获取存储信息成功", data=handler.handle_info())

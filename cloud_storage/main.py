"""
Cloud Storage Service - FastAPI主应用
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cloud_storage.core.config import settings
from cloud_storage.api.v1.router import api_router
from cloud_storage.core.log_utils import setup_logging, get_logger
from cloud_storage.core.storage import StorageError
from cloud_storage.services.storage import get_cloud_storage_service

# 初始化日志系统
setup_logging()

# 在导入其他模块之前完成日志设置
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """应用生命周期管理"""
    logger.info("应用启动中...")

    # 配置有误时只记录日志，请求时返回503
    try:
        service = get_cloud_storage_service()
        logger.info("存储后端已就绪", extra=service.get_backend_info())
    except StorageError as e:
        logger.error("存储后端初始化失败", exception=e)

    logger.info("应用启动完成")

    yield

    logger.info("应用关闭")


# 创建FastAPI应用实例
app = FastAPI(
    title=settings.project_name,
    version=settings.app_version,
    description="多云对象存储服务：统一的上传、删除与签名下载接口",
    openapi_url=f"{settings.api_v1_str}/openapi.json",
    docs_url=f"{settings.api_v1_str}/docs",
    redoc_url=f"{settings.api_v1_str}/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 注册API路由
app.include_router(api_router, prefix=settings.api_v1_str)


@app.get("/")
def read_root():
    """根路径"""
    return {
        "message": "Cloud Storage Service API",
        "version": settings.app_version,
        "docs": f"{settings.api_v1_str}/docs"
    }


@app.get("/health")
def health_check():
    """健康检查"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "cloud_storage.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_debug,
        log_level=settings.log_level.lower()
    )

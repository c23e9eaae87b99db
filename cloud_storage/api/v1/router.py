"""
API路由聚合模块
将所有v1版本的路由统一注册

路由管理规范：
1. 所有路由文件内部使用相对路径（不以/开头）
2. 所有前缀统一在router.py中管理
3. Tags统一使用中文，与端点文件定义保持一致
"""

from fastapi import APIRouter

from cloud_storage.api.v1.endpoints import files, storage

api_router = APIRouter()

# ==================== 文件操作路由 ====================
api_router.include_router(files.router, prefix="/files", tags=["文件操作"])

# ==================== 存储信息路由 ====================
api_router.include_router(storage.router, prefix="/storage", tags=["存储信息"])

"""
API routes and endpoints.
"""

from fastapi import APIRouter
from .v1 import auth, menu, reservations, site, users

api_router = APIRouter()

# 所有路由直接挂在 /api 下，与前端约定的路径保持一致
api_router.include_router(auth.router, prefix="", tags=["认证"])
api_router.include_router(menu.router, prefix="", tags=["菜单"])
api_router.include_router(reservations.router, prefix="", tags=["预订"])
api_router.include_router(site.router, prefix="", tags=["站点"])
api_router.include_router(users.router, prefix="", tags=["用户"])

"""
LLAMAS! 餐厅网站
FastAPI 后端（菜单、预订、站点配置）以及购物车、预订表单等客户端组件
"""

__version__ = "1.0.0"

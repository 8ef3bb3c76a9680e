"""HTTP 接口层：FastAPI 路由与对外服务函数。"""

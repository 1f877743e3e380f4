# HTTP 入口：FastAPI 应用

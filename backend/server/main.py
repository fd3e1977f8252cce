import uvicorn
from fastapi import FastAPI
from server.api_router import api_router
from config.settings import UVICORN_CONFIG
from server.api.rest.dependencies import shutdown_dependencies
from server.api.rest.errors import install_error_handlers

# 初始化 FastAPI 应用
app = FastAPI(title="愿望单服务", description="影视搜索与愿望单管理后端API")

# 统一错误响应格式 {"message": ...}
install_error_handlers(app)

# 添加路由
app.include_router(api_router)


@app.on_event("shutdown")
async def shutdown_event():
    """应用关闭时清理资源"""
    await shutdown_dependencies()


# 启动服务器
if __name__ == "__main__":
    uvicorn.run("server.main:app", **UVICORN_CONFIG)

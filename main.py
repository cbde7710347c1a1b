"""DeepLX Proxy 主入口."""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from api.routes import router
from api.dependencies import get_translator
from api.errors import register_exception_handlers
from config.settings import settings
from config.logging_config import setup_logging, get_logger

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"DeepLX Proxy starting (private mode: {settings.is_private})")
    yield
    # 关闭前等待未完成的缓存写入
    await get_translator().drain()


# 创建FastAPI应用实例
app = FastAPI(
    title="DeepLX Proxy",
    description="模拟 DeepL 客户端协议的翻译代理，带结果缓存",
    version="1.0.0",
    lifespan=lifespan,
)

# 添加CORS中间件
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# 包含路由
app.include_router(router)


@app.get("/")
async def root():
    """根路径，返回服务信息"""
    return {
        "code": 200,
        "message": "DeepLX Proxy: a DeepL translation proxy with result caching.",
        "repository": "https://github.com/OwO-Network/DeepLX",
    }


if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.host, port=settings.port)

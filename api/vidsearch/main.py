import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from vidsearch.core.config import get_settings
from vidsearch.infrastructure.logging import setup_logging
from vidsearch.interfaces.endpoints.routes import router as api_router
from vidsearch.interfaces.errors.exception_handlers import register_exception_handlers

# 加载配置信息
settings = get_settings()

# 初始化日志记录
setup_logging()
logger = logging.getLogger()

logger.info("应用程序启动中...")

# 定义FastApi路由tags标签
openapi_tags = [
    {
        "name": "状态模块",
        "description": "包含 **状态监测** 等API 接口，用于监测系统的运行状态。",
    },
    {
        "name": "视频模块",
        "description": "包含 **视频搜索** API 接口，使用continuation令牌进行无状态分页。",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """创建FastAPI应用生命周期上下文管理器"""
    # 1.服务本身无状态，无需初始化外部客户端
    logger.info(
        "视频搜索服务正在初始化, 默认搜索词: %s, 环境: %s",
        settings.search_default_term,
        settings.env,
    )

    try:
        # 2.lifespan分界点
        yield
    finally:
        # 3.应用关闭
        logger.info("视频搜索服务关闭成功")


app = FastAPI(
    title="视频搜索API",
    description="视频搜索API服务，通过自描述的continuation令牌实现无服务端会话的分页搜索",
    lifespan=lifespan,
    openapi_tags=openapi_tags,
    version="1.0.0",
)

# 配置CORS中间件，解决跨域问题
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # 允许所有来源
    allow_credentials=True,
    allow_methods=["*"],  # 允许所有方法
    allow_headers=["*"],  # 允许所有头部
)

# 注册全局异常处理器
register_exception_handlers(app)

app.include_router(api_router, prefix="/api")

logger.info("FastAPI应用程序实例已创建。")

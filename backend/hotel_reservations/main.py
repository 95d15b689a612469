"""
Hotel Reservations 主应用入口
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from hotel_reservations.config import settings
from hotel_reservations.database import init_db, SessionLocal
from hotel_reservations.exceptions import ReservationError, http_status_for
from hotel_reservations.logging_config import setup_logging
from hotel_reservations.routers import clients, reservations

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    setup_logging(settings.LOG_LEVEL)
    init_db()

    if settings.SEED_SAMPLE_DATA:
        from hotel_reservations.init_data import seed_sample_data
        db = SessionLocal()
        try:
            stats = seed_sample_data(db)
            if any(stats.values()):
                logger.info(f"Sample data seeded: {stats}")
        finally:
            db.close()

    yield


# 创建应用
app = FastAPI(
    title=settings.APP_NAME,
    description="Hotel client and room reservation management",
    version="1.0.0",
    lifespan=lifespan
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ReservationError)
async def reservation_error_handler(request: Request, exc: ReservationError):
    """路由未显式处理的业务异常"""
    return JSONResponse(status_code=http_status_for(exc), content={"detail": exc.message})


# 注册路由
app.include_router(clients.router)
app.include_router(reservations.router)


@app.get("/")
def root():
    """根路径"""
    return {
        "name": settings.APP_NAME,
        "version": "1.0.0",
        "description": "Hotel client and room reservation management"
    }


@app.get("/health")
def health_check():
    """健康检查"""
    return {"status": "healthy"}


def run():
    import uvicorn
    uvicorn.run("hotel_reservations.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)


if __name__ == "__main__":
    run()

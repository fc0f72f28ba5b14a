# -*- coding: utf-8 -*-
"""
Точка входа FastAPI приложения админ-панели.

Запуск:
    uvicorn nutrition_admin.backend.main:app --host 0.0.0.0 --port 3001 --reload
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from logging.handlers import RotatingFileHandler

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, FileResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from nutrition_admin.backend.config import admin_settings
from nutrition_admin.backend.database import init_db, close_db
from nutrition_admin.backend.auth.dependencies import require_init_data
from nutrition_admin.backend.models.system import ErrorResponse


# Настройка логирования
def setup_logging() -> None:
    """Настраивает логирование для админ-панели."""

    # Создаём директорию для логов
    log_dir = Path(admin_settings.ADMIN_LOG_FILE).parent
    log_dir.mkdir(parents=True, exist_ok=True)

    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    formatter = logging.Formatter(log_format)

    log_level = getattr(logging, admin_settings.ADMIN_LOG_LEVEL.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Консольный хэндлер
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    # Файловый хэндлер с ротацией
    file_handler = RotatingFileHandler(
        admin_settings.ADMIN_LOG_FILE,
        maxBytes=admin_settings.ADMIN_LOG_MAX_SIZE_MB * 1024 * 1024,
        backupCount=admin_settings.ADMIN_LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(log_level)
    root_logger.addHandler(file_handler)

    logging.getLogger("admin").setLevel(log_level)


setup_logging()
logger = logging.getLogger("admin.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Контекстный менеджер жизненного цикла приложения.

    Проверяет БД при старте и закрывает пул при остановке.
    """
    logger.info("Запуск админ-панели...")
    logger.info(f"Версия: {admin_settings.APP_VERSION}")
    if not admin_settings.auth_enabled:
        logger.warning("BOT_TOKEN не задан - проверка initData отключена")

    try:
        await init_db()
    except Exception as e:
        logger.error(f"Ошибка инициализации БД: {e}")
        raise

    logger.info(f"Админ-панель запущена на http://{admin_settings.ADMIN_HOST}:{admin_settings.PORT}")

    yield

    logger.info("Остановка админ-панели...")
    await close_db()
    logger.info("Админ-панель остановлена")


app = FastAPI(
    title=admin_settings.APP_NAME,
    version=admin_settings.APP_VERSION,
    description="REST API админ-панели бота-нутрициолога",
    docs_url="/api/docs" if admin_settings.DEBUG else None,
    redoc_url="/api/redoc" if admin_settings.DEBUG else None,
    openapi_url="/api/openapi.json" if admin_settings.DEBUG else None,
    lifespan=lifespan,
)


# CORS: без явного списка отражаем Origin запроса
if admin_settings.cors_origins_list:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=admin_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=".*",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# Все ошибки API отдаются как {"error": "..."}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=422, content={"error": f"Invalid request: {message}"})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Глобальный обработчик необработанных исключений."""
    logger.error(f"Необработанное исключение: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
    )


def register_routers():
    """Регистрирует все API роутеры."""
    from nutrition_admin.backend.routers import system, users, chat, events, stats

    protected = [Depends(require_init_data)]
    errors = {
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    }

    app.include_router(system.router, tags=["System"])
    app.include_router(users.router, prefix="/api/users", tags=["Users"], dependencies=protected, responses=errors)
    app.include_router(chat.router, prefix="/api/chat", tags=["Chat"], dependencies=protected, responses=errors)
    app.include_router(stats.router, prefix="/api/stats", tags=["Statistics"], dependencies=protected, responses=errors)
    app.include_router(events.router, prefix="/api/events", tags=["Events"], dependencies=protected, responses=errors)


register_routers()


# =============================================================================
# Раздача статических файлов фронтенда (production)
# =============================================================================

FRONTEND_DIST = Path(admin_settings.FRONTEND_DIST)

if FRONTEND_DIST.exists() and FRONTEND_DIST.is_dir():
    logger.info(f"Раздача статических файлов из: {FRONTEND_DIST}")

    assets_path = FRONTEND_DIST / "assets"
    if assets_path.exists():
        app.mount("/assets", StaticFiles(directory=str(assets_path)), name="assets")

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_spa(full_path: str):
        """
        Отдаёт index.html для всех маршрутов, кроме /api и /health.
        """
        if full_path.startswith(("api", "health")):
            return JSONResponse(status_code=404, content={"error": "Not found"})

        file_path = (FRONTEND_DIST / full_path).resolve()
        if file_path.is_file() and FRONTEND_DIST.resolve() in file_path.parents:
            return FileResponse(file_path)

        index_path = FRONTEND_DIST / "index.html"
        if index_path.exists():
            return FileResponse(index_path)

        return JSONResponse(status_code=404, content={"error": "Not found"})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "nutrition_admin.backend.main:app",
        host=admin_settings.ADMIN_HOST,
        port=admin_settings.PORT,
        reload=admin_settings.DEBUG,
        log_level=admin_settings.ADMIN_LOG_LEVEL.lower(),
    )

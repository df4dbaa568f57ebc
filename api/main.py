"""
Punto de entrada de la API de PortLink.

Arma la aplicacion FastAPI: CORS, manejo de errores, eventos de ciclo de
vida y el router /api/v1.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portlink.api.exception_handlers import register_exception_handlers
from portlink.api.middlewares.error_handler import ErrorHandlerMiddleware
from portlink.api.v1.router import api_router
from portlink.core.config import get_cors_origins, settings
from portlink.core.events import shutdown_handler, startup_handler


def create_application() -> FastAPI:
    """
    Factory de la aplicacion.

    Los tests la usan con dependency_overrides; los eventos de inicio
    (tablas, scheduler, log a archivo) solo corren bajo uvicorn.
    """
    application = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Backend de permisos, conductores y sincronizacion de buques",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(settings.CORS_ORIGINS),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(ErrorHandlerMiddleware)

    application.add_event_handler("startup", startup_handler(application))
    application.add_event_handler("shutdown", shutdown_handler(application))

    application.include_router(api_router, prefix="/api")
    register_exception_handlers(application)

    @application.get("/health", tags=["Health"])
    async def health_check():
        return {
            "status": "healthy",
            "app_name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
        }

    return application


app = create_application()


if __name__ == "__main__":
    import uvicorn
    from loguru import logger

    host = "localhost" if settings.HOST == "0.0.0.0" else settings.HOST
    logger.info(f"Swagger UI:  http://{host}:{settings.PORT}/docs")
    logger.info(f"Cron Mawani: http://{host}:{settings.PORT}/api/v1/cron/sync-mawani-vessels")

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )

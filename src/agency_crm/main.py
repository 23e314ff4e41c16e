"""
Agency CRM API.

    uvicorn agency_crm.main:app --reload

Startup creates the connection pool and any missing tables. Lead, client
and policy routes live under settings.api_v1_str.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from agency_crm.core.config import settings
from agency_crm.api.v1.router import api_router
from agency_crm.database.connection import DatabasePool
from agency_crm.database.session import init_db, init_session_factory
from agency_crm.utils.logging import get_logger, app_logger

logger = get_logger(__name__)


def _conversion_mode() -> str:
    return "eager" if settings.sync.eager_conversion else "lazy"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the pool and create tables on startup, close the pool on shutdown."""
    app_logger.info(f"🚀 [bold green]Starting {settings.project_name} {settings.version}[/bold green]")
    try:
        DatabasePool.initialize()
        init_session_factory()
        init_db()
        app_logger.info(
            f"🔗 [cyan]Lead to client conversion:[/cyan] [bold]{_conversion_mode()}[/bold], "
            f"[cyan]placeholder emails @{settings.sync.placeholder_email_domain}[/cyan]"
        )
    except Exception as e:
        app_logger.error(f"❌ [bold red]Startup failed:[/bold red] {e}")
        raise

    yield

    app_logger.info("🛑 [yellow]Shutting down...[/yellow]")
    DatabasePool.close()


app = FastAPI(
    title=settings.project_name,
    version=settings.version,
    description=settings.description,
    openapi_url=f"{settings.api_v1_str}/openapi.json",
    lifespan=lifespan,
)

if settings.backend_cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.backend_cors_origins],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(api_router, prefix=settings.api_v1_str)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """Storage failures that escaped a service become a plain 500."""
    logger.error(f"[red]Database error on {request.method} {request.url.path}:[/red] {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database error"},
    )


@app.get("/")
async def root():
    return {"message": f"{settings.project_name} is running", "version": settings.version}


@app.get("/health")
async def health_check():
    """Pool status plus the active synchronization settings"""
    try:
        pool_status = DatabasePool.get_pool_status()
        return {
            "status": "healthy",
            "database": {
                "pool_initialized": pool_status["initialized"],
                "pool_size": pool_status["size"],
                "connections_checked_out": pool_status["checked_out"],
            },
            "sync": {"conversion": _conversion_mode()},
        }
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return {"status": "unhealthy", "error": str(e)}

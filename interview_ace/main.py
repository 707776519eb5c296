from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from interview_ace import __version__
from interview_ace.utils.logging_config import setup_logging
from interview_ace.utils.logger import get_logger
from interview_ace.middleware.logging_middleware import log_requests
from interview_ace.middleware.security_middleware import SecurityHeadersMiddleware
from interview_ace.config import get_settings
from interview_ace.database.connection import init_db, check_db_connection

# Setup logging configuration
setup_logging()
logger = get_logger(__name__)
settings = get_settings()

app = FastAPI(
    title="Interview Ace API",
    description="""
    AI mock interview coaching.

    Upload a resume, get personalized interview questions, record spoken answers
    and receive a scored evaluation with a follow-up question and feedback on
    on-camera presence.
    """,
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.cors_config["allow_credentials"],
    allow_methods=settings.cors_config["allow_methods"],
    allow_headers=settings.cors_config["allow_headers"],
    expose_headers=settings.cors_config["expose_headers"],
    max_age=settings.cors_config["max_age"]
)

app.add_middleware(SecurityHeadersMiddleware)


def load_routers():
    """Include all API routers."""
    from interview_ace.routers import interview, sessions

    routers = [
        ("interview", interview.router),
        ("sessions", sessions.router),
    ]
    for router_name, router in routers:
        app.include_router(router)
        logger.info(f"Loaded {router_name} router")

load_routers()


@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    return await log_requests(request, call_next)


@app.on_event("startup")
async def startup_event():
    """Create tables and report configuration problems."""
    init_db()
    for issue in settings.validate_configuration():
        logger.warning(f"Configuration issue: {issue}")
    logger.info(f"Interview Ace API {__version__} started (LLM provider: {settings.LLM_PROVIDER})")


@app.on_event("shutdown")
async def shutdown_event():
    from interview_ace.dependencies import get_llm_client
    await get_llm_client().close()


@app.get("/")
async def root():
    return {
        "message": "Interview Ace API",
        "version": __version__,
        "docs": "/docs",
        "features": "Resume-driven mock interviews with AI answer evaluation"
    }


@app.get("/health")
async def health_check():
    """Report database connectivity and LLM provider configuration."""
    from interview_ace.dependencies import get_llm_client

    database_ok = check_db_connection()
    llm_status = get_llm_client().health_check()
    issues = settings.validate_configuration()
    healthy = database_ok and llm_status["status"] == "configured"

    return {
        "status": "healthy" if healthy else "degraded",
        "version": __version__,
        "database": {"status": "healthy" if database_ok else "unhealthy"},
        "llm": llm_status,
        "transcription": {"provider": settings.TRANSCRIPTION_PROVIDER},
        "configuration_issues": issues
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

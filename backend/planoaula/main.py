from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from planoaula.lesson_plan.router import router as lesson_plan_router
from planoaula.export.router import router as export_router
from planoaula.core.exceptions import PlanoAulaException
from planoaula.core.exception_handlers import (
    plano_aula_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from planoaula.core.middleware import SecurityHeadersMiddleware, RequestLoggingMiddleware
from planoaula.core.settings import settings
from planoaula.core.logging import setup_logging, get_logger

# Configura o sistema de logging estruturado
setup_logging(
    log_level=settings.LOG_LEVEL,
    is_development=settings.is_development
)

# Logger para o módulo main
logger = get_logger("main")

# Sem a chave o servidor sobe, mas toda geração responde 500
if not settings.GEMINI_API_KEY:
    logger.critical(
        "GEMINI_API_KEY is not configured; lesson plan generation will fail",
        environment=settings.ENVIRONMENT
    )

app = FastAPI(
    title="Plano de Aula AI API",
    description="Geração de planos de aula alinhados à BNCC e ao SAEB, com exportação em PDF, DOCX e TXT.",
    version="0.1.0"
)

logger.info("Configuring CORS middleware", allowed_origins=settings.CORS_ORIGINS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request logging middleware (deve ser adicionado antes de outros middlewares)
logger.info("Adding request logging middleware")
app.add_middleware(RequestLoggingMiddleware)

# Security headers middleware
logger.info("Adding security headers middleware")
app.add_middleware(SecurityHeadersMiddleware)

# Exception handlers
logger.info("Configuring exception handlers")
app.add_exception_handler(PlanoAulaException, plano_aula_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

logger.info("Registering API routers")
app.include_router(lesson_plan_router, prefix="/api/v1/lesson-plans", tags=["Lesson Plans"])
app.include_router(export_router, prefix="/api/v1/lesson-plans", tags=["Export"])

# Healthcheck
@app.get("/health")
def health_check():
    logger.debug("Health check requested")
    return {"status": "ok"}

logger.info(
    "FastAPI application initialized successfully",
    environment=settings.ENVIRONMENT,
    log_level=settings.LOG_LEVEL,
    model=settings.GEMINI_MODEL
)

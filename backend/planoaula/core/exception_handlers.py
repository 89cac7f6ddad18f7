# backend/planoaula/core/exception_handlers.py

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .error_codes import ERROR_CODES
from .exceptions import (
    PlanoAulaException,
    ConfigurationError,
    ValidationError as DomainValidationError,
    RateLimitError,
    AIProcessingError,
)
from .logging import get_logger

logger = get_logger("exception_handlers")

METHOD_NOT_ALLOWED_MESSAGE = "Método não permitido"


def get_status_code_for_exception(exc: PlanoAulaException) -> int:
    """Mapeia tipos de exceção para códigos HTTP apropriados"""
    if isinstance(exc, DomainValidationError):
        return status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, RateLimitError):
        return status.HTTP_429_TOO_MANY_REQUESTS
    elif isinstance(exc, (ConfigurationError, AIProcessingError)):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    else:
        return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str, headers: dict = None, **extra) -> JSONResponse:
    """Corpo de erro padrão: um objeto JSON com o campo 'error'."""
    return JSONResponse(
        status_code=status_code,
        content={"error": message, **extra},
        headers=headers,
    )


async def plano_aula_exception_handler(request: Request, exc: PlanoAulaException):
    """Handler para todas as exceções customizadas do projeto"""
    status_code = get_status_code_for_exception(exc)

    # Detalhes técnicos ficam só no log do servidor
    logger.error(
        "PlanoAula exception",
        error_code=exc.error_code,
        error_description=ERROR_CODES.get(exc.error_code, ERROR_CODES["GENERIC_ERROR"]),
        message=exc.message,
        details=exc.details,
        status_code=status_code,
        path=request.url.path,
        method=request.method,
    )

    return error_response(status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Converte erros HTTP do roteamento (404, 405...) para o corpo de erro padrão"""
    logger.warning(
        "HTTP error",
        status_code=exc.status_code,
        path=request.url.path,
        method=request.method,
    )

    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = METHOD_NOT_ALLOWED_MESSAGE
    else:
        message = str(exc.detail)

    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


def get_user_friendly_validation_message(error: dict) -> str:
    """Converte erros técnicos do Pydantic em mensagens user-friendly"""
    error_type = error.get("type", "")

    if error_type in {"string_too_short", "string_too_long"}:
        return "Tamanho de texto inválido"
    elif error_type in {"missing", "value_error.missing"}:
        return "Campo obrigatório ausente"
    elif error_type in {"int_parsing", "int_type", "int_from_float"}:
        return "Número inteiro inválido"
    elif error_type in {"greater_than", "greater_than_equal"}:
        return "Valor deve ser positivo"
    elif error_type in {"float_parsing", "float_type"}:
        return "Número decimal inválido"
    elif error_type == "enum":
        return "Opção inválida"
    elif "url" in error_type.lower():
        return "Formato de URL inválido"
    else:
        return error.get("msg", "Valor inválido")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handler para erros de validação do corpo/parâmetros da requisição"""
    logger.warning(
        "Request validation error",
        errors_count=len(exc.errors()),
        path=request.url.path,
        method=request.method,
    )

    field_errors = []
    for error in exc.errors():
        field_name = " > ".join(str(loc) for loc in error["loc"])
        field_errors.append({
            "field": field_name,
            "message": get_user_friendly_validation_message(error),
        })

    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Dados enviados contêm erros",
        field_errors=jsonable_encoder(field_errors),
    )

"""
Logging estruturado do gerador de planos de aula, com structlog.

Cada evento carrega o request_id da requisição em andamento (via
contextvars), um campo severity legível pelo Google Cloud Logging e tem
chaves de API e tokens mascarados antes de ser renderizado. Em
desenvolvimento a saída é colorida no console; em produção, um JSON por linha.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import List, Optional

import structlog

from .constants import LoggingConstants

request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)

SEVERITY_BY_LEVEL = {
    'debug': 'DEBUG',
    'info': 'INFO',
    'warning': 'WARNING',
    'warn': 'WARNING',
    'error': 'ERROR',
    'exception': 'ERROR',
    'critical': 'CRITICAL',
}

REDACTED = '[REDACTED]'


def set_request_context(request_id: str) -> None:
    request_id_var.set(request_id)


def clear_request_context() -> None:
    request_id_var.set(None)


def generate_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:8]}"


# --- processors ---

def add_request_context(logger, method_name, event_dict):
    """Anexa o request_id da requisição corrente, quando houver."""
    if not isinstance(event_dict, dict):
        return event_dict

    request_id = request_id_var.get()
    if request_id:
        event_dict['request_id'] = request_id
    return event_dict


def add_severity_level(logger, method_name, event_dict):
    if not isinstance(event_dict, dict):
        return event_dict

    level = str(event_dict.get('level') or method_name or '')
    if level:
        event_dict['severity'] = SEVERITY_BY_LEVEL.get(level.lower(), level.upper())
    return event_dict


def _is_sensitive(key) -> bool:
    lowered = str(key).lower()
    return any(field in lowered for field in LoggingConstants.SENSITIVE_FIELDS)


def _redact(data):
    if isinstance(data, dict):
        return {key: REDACTED if _is_sensitive(key) else _redact(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [_redact(item) for item in data]
    return data


def filter_sensitive_data(logger, method_name, event_dict):
    """Mascara qualquer campo cujo nome lembre uma credencial (api_key, token...)."""
    if not isinstance(event_dict, dict):
        return event_dict
    return _redact(event_dict)


def build_processors(is_development: bool) -> List:
    processors = [
        add_request_context,
        structlog.stdlib.add_log_level,
        add_severity_level,
        filter_sensitive_data,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]
    if is_development:
        processors += [structlog.processors.StackInfoRenderer(), structlog.dev.ConsoleRenderer(colors=True)]
    else:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return processors


def setup_logging(log_level: str = "INFO", is_development: bool = True) -> None:
    """Configura structlog sobre o logging da biblioteca padrão.

    Args:
        log_level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        is_development: Console colorido quando True; JSON quando False
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=build_processors(is_development),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Servidor, cliente HTTP e SDK do Gemini só registram avisos
    for name in LoggingConstants.QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


class LogContext:
    """Logger com contexto fixo durante um bloco, ex: uma validação de plano."""

    def __init__(self, logger_name: str = None, **context):
        self.context = context
        self.logger = get_logger(logger_name)

    def __enter__(self):
        return self.logger.bind(**self.context)

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False

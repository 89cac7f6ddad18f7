# backend/planoaula/core/exceptions.py

class PlanoAulaException(Exception):
    """Base exception para todas as exceções customizadas do projeto"""
    def __init__(self, message: str, error_code: str = None, details: dict = None):
        self.message = message
        self.error_code = error_code or "GENERIC_ERROR"
        self.details = details or {}
        super().__init__(self.message)

# === EXCEÇÕES DE CONFIGURAÇÃO ===
class ConfigurationError(PlanoAulaException):
    """Servidor sem a configuração necessária para atender a requisição"""
    pass

class MissingAPIKeyError(ConfigurationError):
    def __init__(self):
        super().__init__(
            message="Chave de API não configurada no servidor.",
            error_code="MISSING_API_KEY"
        )

class ReferenceDataError(ConfigurationError):
    def __init__(self, path: str, reason: str):
        super().__init__(
            message="Base de referência curricular indisponível no servidor.",
            error_code="REFERENCE_DATA_UNAVAILABLE",
            details={"path": path, "reason": reason}
        )

# === EXCEÇÕES DE VALIDAÇÃO ===
class ValidationError(PlanoAulaException):
    """Requisição rejeitada por conteúdo inválido ou bloqueado"""
    pass

class SafetyBlockedError(ValidationError):
    def __init__(self, api_error: str = ""):
        super().__init__(
            message="A solicitação foi bloqueada por questões de segurança. Tente reformular o conteúdo.",
            error_code="SAFETY_BLOCKED",
            details={"api_error": api_error}
        )

# === EXCEÇÕES DE LIMITE DE REQUISIÇÕES ===
class RateLimitError(PlanoAulaException):
    """Limite de requisições atingido; a requisição pode ser repetida depois"""
    pass

class ModelRateLimitError(RateLimitError):
    def __init__(self, api_error: str = ""):
        super().__init__(
            message="Limite de requisições atingido. Por favor, aguarde um momento antes de tentar novamente.",
            error_code="RATE_LIMITED",
            details={"api_error": api_error}
        )

# === EXCEÇÕES DE IA ===
class AIProcessingError(PlanoAulaException):
    """Erros relacionados ao processamento com IA"""
    pass

class GenerationFailedError(AIProcessingError):
    def __init__(self, api_error: str = ""):
        super().__init__(
            message="Ocorreu um erro ao gerar o plano de aula no servidor.",
            error_code="GENERATION_FAILED",
            details={"api_error": api_error}
        )

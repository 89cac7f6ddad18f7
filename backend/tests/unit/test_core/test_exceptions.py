# backend/tests/unit/test_core/test_exceptions.py

import json

import pytest
from unittest.mock import Mock, patch
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from planoaula.core.error_codes import ERROR_CODES
from planoaula.core.exceptions import (
    PlanoAulaException,
    ConfigurationError,
    MissingAPIKeyError,
    ReferenceDataError,
    ValidationError as DomainValidationError,
    SafetyBlockedError,
    RateLimitError,
    ModelRateLimitError,
    AIProcessingError,
    GenerationFailedError,
)
from planoaula.core.exception_handlers import (
    plano_aula_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    get_status_code_for_exception,
    get_user_friendly_validation_message,
)


def _mock_request(path="/api/test", method="POST"):
    mock_request = Mock(spec=Request)
    mock_request.url.path = path
    mock_request.method = method
    return mock_request


class TestExceptionHierarchy:
    """Testa a hierarquia de exceções customizadas"""

    def test_base_exception_properties(self):
        """Testa propriedades básicas da exceção base"""
        exc = PlanoAulaException("Test message", "TEST_CODE", {"key": "value"})
        assert exc.message == "Test message"
        assert exc.error_code == "TEST_CODE"
        assert exc.details == {"key": "value"}
        assert str(exc) == "Test message"

    def test_base_exception_defaults(self):
        """Testa valores padrão da exceção base"""
        exc = PlanoAulaException("Test message")
        assert exc.error_code == "GENERIC_ERROR"
        assert exc.details == {}

    def test_configuration_error_hierarchy(self):
        """Testa hierarquia de erros de configuração"""
        key_exc = MissingAPIKeyError()
        assert isinstance(key_exc, ConfigurationError)
        assert isinstance(key_exc, PlanoAulaException)
        assert key_exc.error_code == "MISSING_API_KEY"
        assert key_exc.message == "Chave de API não configurada no servidor."

        data_exc = ReferenceDataError("/tmp/bncc.json", "arquivo não encontrado")
        assert isinstance(data_exc, ConfigurationError)
        assert data_exc.details["path"] == "/tmp/bncc.json"
        assert data_exc.details["reason"] == "arquivo não encontrado"

    def test_model_error_hierarchy(self):
        """Testa as falhas do modelo e suas mensagens fixas"""
        safety = SafetyBlockedError("finish_reason: SAFETY")
        assert isinstance(safety, DomainValidationError)
        assert safety.message == (
            "A solicitação foi bloqueada por questões de segurança. Tente reformular o conteúdo."
        )
        assert safety.details["api_error"] == "finish_reason: SAFETY"

        rate = ModelRateLimitError("429 Too Many Requests")
        assert isinstance(rate, RateLimitError)
        assert "Limite de requisições atingido" in rate.message

        failed = GenerationFailedError("boom")
        assert isinstance(failed, AIProcessingError)
        assert failed.message == "Ocorreu um erro ao gerar o plano de aula no servidor."

    def test_every_error_code_is_cataloged(self):
        """Todo error_code emitido deve constar no catálogo do frontend"""
        raised = [
            MissingAPIKeyError(),
            ReferenceDataError("p", "r"),
            SafetyBlockedError(),
            ModelRateLimitError(),
            GenerationFailedError(),
        ]
        for exc in raised:
            assert exc.error_code in ERROR_CODES


class TestStatusCodeMapping:
    """Testa o mapeamento de exceções para códigos HTTP"""

    def test_configuration_error_status(self):
        assert get_status_code_for_exception(MissingAPIKeyError()) == 500
        assert get_status_code_for_exception(ReferenceDataError("p", "r")) == 500

    def test_validation_error_status(self):
        assert get_status_code_for_exception(SafetyBlockedError()) == 400

    def test_rate_limit_status(self):
        assert get_status_code_for_exception(ModelRateLimitError()) == 429

    def test_ai_processing_error_status(self):
        assert get_status_code_for_exception(GenerationFailedError()) == 500

    def test_generic_error_status(self):
        assert get_status_code_for_exception(PlanoAulaException("Generic error")) == 500


class TestValidationMessageMapping:
    """Testa a conversão de mensagens de validação do Pydantic"""

    def test_missing_field_messages(self):
        assert get_user_friendly_validation_message({"type": "missing"}) == "Campo obrigatório ausente"

    def test_number_validation_messages(self):
        assert get_user_friendly_validation_message({"type": "int_parsing"}) == "Número inteiro inválido"
        assert get_user_friendly_validation_message({"type": "greater_than"}) == "Valor deve ser positivo"

    def test_enum_message(self):
        assert get_user_friendly_validation_message({"type": "enum"}) == "Opção inválida"

    def test_fallback_message(self):
        assert get_user_friendly_validation_message({"type": "unknown", "msg": "Custom message"}) == "Custom message"
        assert get_user_friendly_validation_message({"type": "unknown"}) == "Valor inválido"


@pytest.mark.asyncio
class TestExceptionHandlers:
    """Testa os handlers de exceções"""

    async def test_plano_aula_exception_handler_response_format(self):
        """O corpo de erro tem um único campo 'error' com a mensagem fixa"""
        exc = ModelRateLimitError("429 RESOURCE_EXHAUSTED")

        with patch('planoaula.core.exception_handlers.logger') as mock_logger:
            response = await plano_aula_exception_handler(_mock_request(), exc)

        assert response.status_code == 429
        response_data = json.loads(response.body.decode())
        assert response_data == {"error": exc.message}
        # Detalhes técnicos ficam só no log
        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.kwargs["details"] == {"api_error": "429 RESOURCE_EXHAUSTED"}

    async def test_plano_aula_exception_handler_logs_catalog_description(self):
        with patch('planoaula.core.exception_handlers.logger') as mock_logger:
            await plano_aula_exception_handler(_mock_request(), SafetyBlockedError("SAFETY"))
            await plano_aula_exception_handler(_mock_request(), PlanoAulaException("x", error_code="NOT_IN_CATALOG"))

        first, second = mock_logger.error.call_args_list
        assert first.kwargs["error_description"] == "Conteúdo bloqueado pelos filtros de segurança"
        assert second.kwargs["error_description"] == ERROR_CODES["GENERIC_ERROR"]

    async def test_http_exception_handler_method_not_allowed(self):
        exc = StarletteHTTPException(status_code=405, headers={"Allow": "POST"})

        with patch('planoaula.core.exception_handlers.logger'):
            response = await http_exception_handler(_mock_request(method="GET"), exc)

        assert response.status_code == 405
        assert json.loads(response.body.decode()) == {"error": "Método não permitido"}
        assert response.headers["allow"] == "POST"

    async def test_validation_exception_handler_response_format(self):
        """Testa o formato da resposta do handler de validação"""
        mock_exc = Mock(spec=RequestValidationError)
        mock_exc.errors.return_value = [
            {
                "loc": ("body", "serie_turma"),
                "msg": "field required",
                "type": "missing",
                "input": {},
            },
            {
                "loc": ("body", "duracao_aula_min"),
                "msg": "value is not a valid integer",
                "type": "int_parsing",
                "input": "abc",
            },
        ]

        with patch('planoaula.core.exception_handlers.logger'):
            response = await validation_exception_handler(_mock_request(), mock_exc)

        assert response.status_code == 422
        response_data = json.loads(response.body.decode())
        assert response_data["error"] == "Dados enviados contêm erros"

        field_errors = response_data["field_errors"]
        assert len(field_errors) == 2
        assert field_errors[0] == {"field": "body > serie_turma", "message": "Campo obrigatório ausente"}
        assert field_errors[1]["message"] == "Número inteiro inválido"

UNKNOWN_ERROR_MESSAGE = "Ocorreu um erro desconhecido ao se comunicar com o servidor."
EMPTY_BODY_MESSAGE = "O corpo da resposta está vazio."
INVALID_PLAN_MESSAGE = "A resposta do servidor não é um plano de aula válido."


class PlanClientError(Exception):
    """Exceção base do cliente do gerador de planos de aula."""
    def __init__(self, message: str = UNKNOWN_ERROR_MESSAGE):
        self.message = message
        super().__init__(message)


class PlanTransportError(PlanClientError):
    """Falha de rede antes ou durante a leitura da resposta."""
    pass


class PlanServerError(PlanClientError):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(message)


class EmptyResponseBodyError(PlanClientError):
    def __init__(self):
        super().__init__(EMPTY_BODY_MESSAGE)


class PlanDecodeError(PlanClientError):
    def __init__(self, message: str = INVALID_PLAN_MESSAGE):
        super().__init__(message)

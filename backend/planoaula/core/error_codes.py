# backend/planoaula/core/error_codes.py

"""
Catálogo de códigos de erro para integração com frontend.
Este arquivo documenta todos os error_code disponíveis no sistema;
a descrição acompanha o código nos logs de erro.
"""

ERROR_CODES = {
    # Genéricos
    "GENERIC_ERROR": "Erro genérico",
    "METHOD_NOT_ALLOWED": "Método HTTP não permitido",

    # Configuração
    "MISSING_API_KEY": "Chave de API do provedor de IA ausente",
    "REFERENCE_DATA_UNAVAILABLE": "Base BNCC/SAEB indisponível",

    # Validação
    "VALIDATION_ERROR": "Erros de validação de dados",
    "SAFETY_BLOCKED": "Conteúdo bloqueado pelos filtros de segurança",

    # Limites
    "RATE_LIMITED": "Limite de requisições do provedor de IA atingido",

    # IA e Processamento
    "GENERATION_FAILED": "Falha ao gerar o plano de aula",
}

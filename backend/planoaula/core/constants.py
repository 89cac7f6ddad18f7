# backend/planoaula/core/constants.py

"""
Constantes centralizadas para eliminar magic numbers no projeto.

Os valores estão organizados por área: chamada ao modelo, exportação de
documentos e logging.
"""


class AIConstants:
    """Constantes para a chamada ao modelo generativo"""
    DEFAULT_MODEL = "gemini-flash-latest"
    TEMPERATURE_LESSON_PLAN = 0.7  # Criatividade moderada para planos de aula
    RESPONSE_MIME_TYPE = "application/json"
    OUTPUT_LANGUAGE = "pt-BR"
    MAX_RETRIES = 1  # Uma única tentativa; erros do modelo nunca são repetidos


class LessonPlanConstants:
    """Regras de conteúdo esperadas do plano gerado"""
    MIN_SKILLS = 1
    MAX_SKILLS = 3
    VIDEO_SEARCH_URL = "https://www.youtube.com/results?search_query="
    SEARCH_QUERY_PARAMS = ("search_query", "q", "query", "search")
    DEFAULT_FILE_NAME = "plano-de-aula"


class PDFConstants:
    """Métricas de layout do PDF (A4, unidades em mm e pontos)"""
    MARGIN_MM = 15
    INDENT_MM = 5

    FONT_REGULAR = "Helvetica"
    FONT_BOLD = "Helvetica-Bold"
    FONT_ITALIC = "Helvetica-Oblique"

    TITLE_FONT_SIZE = 22
    TITLE_LEADING_MM = 9
    SECTION_FONT_SIZE = 14
    SECTION_LEADING_MM = 8
    STEP_FONT_SIZE = 11
    STEP_LEADING_MM = 6
    BODY_FONT_SIZE = 10
    BODY_LEADING_MM = 5

    SPACER_MM = 4
    SECTION_RULE_WIDTH_MM = 50
    SECTION_RULE_COLOR = (22 / 255, 163 / 255, 74 / 255)  # emerald-500
    BULLET_PREFIX = "•  "


class TextExportConstants:
    """Marcadores do layout em texto puro"""
    TITLE_PREFIX = "PLANO DE AULA: "
    DIVIDER = "=" * 40
    BULLET_PREFIX = "- "


class ExportMediaTypes:
    """Content-Type de cada formato de exportação"""
    PDF = "application/pdf"
    DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    TXT = "text/plain; charset=utf-8"


class LoggingConstants:
    """Constantes para configuração de logs"""
    SLOW_REQUEST_THRESHOLD_MS = 5000
    SKIP_PATHS = ("/health", "/favicon.ico")
    SENSITIVE_FIELDS = ("password", "token", "api_key", "secret")
    QUIET_LOGGERS = ("uvicorn", "uvicorn.access", "httpx", "httpcore", "google.genai")

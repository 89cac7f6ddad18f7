import time
from typing import AsyncIterator, List

from langchain_core.messages import BaseMessageChunk
from langchain_google_genai import ChatGoogleGenerativeAI

from planoaula.lesson_plan.ai_schemas import LESSON_PLAN_SCHEMA
from planoaula.lesson_plan.prompts import LessonPlanPrompt
from .constants import AIConstants
from .exceptions import (
    PlanoAulaException,
    SafetyBlockedError,
    ModelRateLimitError,
    GenerationFailedError,
)
from .logging import get_logger

logger = get_logger("ai_service")

RATE_LIMIT_MARKERS = ("429", "RESOURCE_EXHAUSTED")


def classify_model_error(error: Exception) -> PlanoAulaException:
    """Traduz uma falha do provedor de IA para a exceção de domínio correspondente."""
    if isinstance(error, PlanoAulaException):
        return error

    message = str(error)
    if "SAFETY" in message:
        return SafetyBlockedError(api_error=message)
    if any(marker in message for marker in RATE_LIMIT_MARKERS):
        return ModelRateLimitError(api_error=message)
    return GenerationFailedError(api_error=message)


def chunk_text(chunk: BaseMessageChunk) -> str:
    """Extrai o texto de um fragmento do modelo (string ou lista de partes)."""
    content = getattr(chunk, "content", "")
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type", "text") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return ""


class ModelTextStream:
    """
    Canal de fragmentos de texto do modelo: um produtor, um consumidor,
    ordem preservada e fechamento explícito.

    ``prime()`` aguarda o primeiro fragmento antes de a resposta HTTP
    começar, para que falhas da chamada ao modelo virem erros HTTP. Depois
    disso o canal apenas repassa os fragmentos, sem acumular.
    """

    def __init__(self, chunks: AsyncIterator[BaseMessageChunk], model_name: str):
        self._chunks = chunks
        self._pending: List[str] = []
        self._exhausted = False
        self._closed = False
        self.model_name = model_name
        self.fragment_count = 0
        self.char_count = 0
        self._start_time = time.time()

    async def _next_text(self) -> str:
        while True:
            chunk = await self._chunks.__anext__()
            text = chunk_text(chunk)
            if text:
                return text

    async def prime(self) -> None:
        try:
            self._pending.append(await self._next_text())
        except StopAsyncIteration:
            self._exhausted = True
            logger.warning("Model stream ended without content", model=self.model_name)
            return
        except Exception as e:
            await self.aclose()
            domain_error = classify_model_error(e)
            logger.error(
                "Lesson plan generation failed",
                model=self.model_name,
                error=str(e),
                error_type=type(e).__name__,
                error_code=domain_error.error_code,
            )
            raise domain_error from e

        logger.info(
            "First lesson plan fragment received",
            model=self.model_name,
            latency_ms=round((time.time() - self._start_time) * 1000, 2),
        )

    def __aiter__(self) -> "ModelTextStream":
        return self

    async def __anext__(self) -> str:
        if self._pending:
            text = self._pending.pop(0)
        elif self._exhausted or self._closed:
            raise StopAsyncIteration
        else:
            try:
                text = await self._next_text()
            except StopAsyncIteration:
                self._exhausted = True
                logger.info(
                    "Lesson plan stream completed",
                    model=self.model_name,
                    fragments=self.fragment_count,
                    chars=self.char_count,
                    duration_ms=round((time.time() - self._start_time) * 1000, 2),
                )
                raise

        self.fragment_count += 1
        self.char_count += len(text)
        return text

    async def aclose(self) -> None:
        """Interrompe o produtor e libera a conexão com o provedor."""
        if self._closed:
            return
        self._closed = True
        if not self._exhausted:
            logger.info(
                "Lesson plan stream closed before completion",
                model=self.model_name,
                fragments=self.fragment_count,
            )
        close = getattr(self._chunks, "aclose", None)
        if close is not None:
            await close()


class LessonPlanAIService:
    def __init__(
        self,
        api_key: str,
        model_name: str = AIConstants.DEFAULT_MODEL,
        temperature: float = AIConstants.TEMPERATURE_LESSON_PLAN,
    ):
        """
        Inicializa o serviço de geração de planos de aula.

        Args:
            api_key (str): A chave de API do Gemini.
            model_name (str): O nome do modelo a ser usado.
            temperature (float): A criatividade do modelo (0.0 = determinístico).
        """
        self.model_name = model_name
        self.temperature = temperature
        self._api_key = api_key
        self._llm = None

        logger.info(
            "Initializing AI service",
            provider="google",
            model=model_name,
            temperature=temperature
        )

    @property
    def llm(self) -> ChatGoogleGenerativeAI:
        """Cliente do modelo, criado na primeira geração."""
        if self._llm is None:
            # Saída restrita a JSON conforme o schema do plano de aula
            self._llm = ChatGoogleGenerativeAI(
                model=self.model_name,
                google_api_key=self._api_key,
                temperature=self.temperature,
                max_retries=AIConstants.MAX_RETRIES,
                response_mime_type=AIConstants.RESPONSE_MIME_TYPE,
                response_schema=LESSON_PLAN_SCHEMA,
            )
        return self._llm

    async def open_lesson_plan_stream(self, prompt: LessonPlanPrompt) -> ModelTextStream:
        """
        Inicia a geração em streaming e aguarda o primeiro fragmento.

        Raises:
            SafetyBlockedError, ModelRateLimitError, GenerationFailedError
        """
        logger.info(
            "Starting lesson plan generation",
            model=self.model_name,
            temperature=self.temperature,
            system_instruction_chars=len(prompt.system_instruction),
            user_prompt_chars=len(prompt.user_prompt),
        )

        # Criação do cliente e abertura do stream passam pela mesma classificação
        try:
            chunks = self.llm.astream(prompt.to_messages())
        except Exception as e:
            raise classify_model_error(e) from e

        stream = ModelTextStream(chunks, model_name=self.model_name)
        await stream.prime()
        return stream

"""
Cliente assíncrono do endpoint de geração de planos de aula.

O servidor devolve o JSON do plano em fragmentos de texto. ``LessonPlanStream``
entrega cada fragmento assim que ele chega, na ordem recebida, sem acumular;
quem consome decide se monta o documento completo
(``PlanoAulaClient.generate_lesson_plan`` faz isso).
"""
import codecs
import json
from typing import AsyncIterator, Optional

import httpx
from pydantic import ValidationError

from planoaula.core.logging import get_logger
from planoaula.lesson_plan.ai_schemas import LessonPlanResponse
from planoaula.lesson_plan.schemas import LessonPlanRequest
from .exceptions import (
    PlanClientError,
    PlanTransportError,
    PlanServerError,
    EmptyResponseBodyError,
    PlanDecodeError,
    UNKNOWN_ERROR_MESSAGE,
)

logger = get_logger("client")

GENERATE_PATH = "/api/v1/lesson-plans/generate"


def server_error_message(response: httpx.Response, body: bytes) -> str:
    """Usa o campo ``error`` do corpo JSON; sem ele, a mensagem vem do status."""
    fallback = f"Erro do servidor: {response.status_code} {response.reason_phrase}"
    try:
        data = json.loads(body)
    except ValueError:
        return fallback
    if isinstance(data, dict) and isinstance(data.get("error"), str) and data["error"]:
        return data["error"]
    return fallback


class LessonPlanStream:
    """
    Canal explícito de fragmentos da resposta: um consumidor, não reiniciável.

    Uso:
        async with client.stream_lesson_plan(request) as stream:
            async for fragment in stream:
                ...
    """

    def __init__(self, http_client: httpx.AsyncClient, url: str, payload: dict):
        self._http_client = http_client
        self._url = url
        self._payload = payload
        self._response: Optional[httpx.Response] = None
        self._fragments: Optional[AsyncIterator[str]] = None
        self._closed = False

    @property
    def status_code(self) -> Optional[int]:
        return self._response.status_code if self._response is not None else None

    async def open(self) -> "LessonPlanStream":
        if self._closed or self._response is not None:
            raise PlanClientError("O stream do plano de aula não pode ser reaberto.")

        request = self._http_client.build_request("POST", self._url, json=self._payload)
        try:
            self._response = await self._http_client.send(request, stream=True)
        except httpx.TransportError as e:
            self._closed = True
            logger.error("Lesson plan request failed", url=self._url, error=str(e), error_type=type(e).__name__)
            raise PlanTransportError(str(e) or UNKNOWN_ERROR_MESSAGE) from e
        except Exception as e:
            self._closed = True
            logger.error("Lesson plan request failed", url=self._url, error=str(e), error_type=type(e).__name__)
            raise PlanClientError() from e

        response = self._response
        if not response.is_success:
            try:
                body = await response.aread()
            except httpx.TransportError as e:
                logger.error(
                    "Lesson plan error body unreadable",
                    status_code=response.status_code,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise PlanTransportError(str(e) or UNKNOWN_ERROR_MESSAGE) from e
            finally:
                await self.aclose()
            message = server_error_message(response, body)
            logger.error("Lesson plan server error", status_code=response.status_code, message=message)
            raise PlanServerError(response.status_code, message)

        if response.status_code == 204 or response.headers.get("content-length") == "0":
            await self.aclose()
            raise EmptyResponseBodyError()

        self._fragments = self._decode_fragments(response)
        return self

    async def _decode_fragments(self, response: httpx.Response) -> AsyncIterator[str]:
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        received = 0
        try:
            async for chunk in response.aiter_bytes():
                received += len(chunk)
                text = decoder.decode(chunk)
                if text:
                    yield text
        except httpx.TransportError as e:
            raise PlanTransportError(str(e) or UNKNOWN_ERROR_MESSAGE) from e

        # Bytes de um caractere incompleto no fim do stream
        tail = decoder.decode(b"", final=True)
        if tail:
            yield tail
        if received == 0:
            raise EmptyResponseBodyError()

    def __aiter__(self) -> "LessonPlanStream":
        return self

    async def __anext__(self) -> str:
        if self._fragments is None:
            if self._closed:
                raise StopAsyncIteration
            await self.open()
        try:
            return await self._fragments.__anext__()
        except StopAsyncIteration:
            await self.aclose()
            raise
        except PlanClientError:
            await self.aclose()
            raise
        except Exception as e:
            await self.aclose()
            logger.error("Lesson plan stream failed", error=str(e), error_type=type(e).__name__)
            raise PlanClientError() from e

    async def aclose(self) -> None:
        """Libera a conexão; chamadas repetidas não têm efeito."""
        if self._closed:
            return
        self._closed = True
        if self._fragments is not None:
            await self._fragments.aclose()
        if self._response is not None:
            await self._response.aclose()

    async def __aenter__(self) -> "LessonPlanStream":
        return await self.open()

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
        return False


class PlanoAulaClient:
    def __init__(self, base_url: str, http_client: Optional[httpx.AsyncClient] = None):
        """
        Args:
            base_url (str): Endereço do servidor, ex: 'http://localhost:8000'.
            http_client (httpx.AsyncClient): Cliente opcional; sem ele, um cliente
                sem timeout é criado e fechado por ``aclose``.
        """
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(timeout=None)

    def stream_lesson_plan(self, request: LessonPlanRequest) -> LessonPlanStream:
        return LessonPlanStream(
            self._http_client,
            f"{self.base_url}{GENERATE_PATH}",
            request.model_dump(),
        )

    async def generate_lesson_plan(self, request: LessonPlanRequest) -> LessonPlanResponse:
        """Acumula todos os fragmentos e valida o plano completo."""
        fragments = []
        async with self.stream_lesson_plan(request) as stream:
            async for fragment in stream:
                fragments.append(fragment)

        text = "".join(fragments)
        try:
            return LessonPlanResponse.model_validate_json(text)
        except ValidationError as e:
            logger.error("Invalid lesson plan received", chars=len(text), error_count=e.error_count())
            raise PlanDecodeError() from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "PlanoAulaClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
        return False

"""Gemini completion client with retry and exponential backoff."""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import httpx
import structlog

from manas_mitra.config import Settings
from .errors import (
    CompletionError,
    ConfigurationError,
    MalformedResponse,
    ServiceRefusal,
    TransientTransportError,
)
from .persona import (
    CONFIGURATION_ERROR_MESSAGE,
    CONNECTION_APOLOGY_MESSAGE,
    MALFORMED_RESPONSE_MESSAGE,
    PERSONA_INSTRUCTION,
    REFUSAL_TEMPLATE,
)
from .responses import GenerateContentRequest, Malformed, Refusal, Success, decode_response

logger = structlog.get_logger()

Sleep = Callable[[float], Awaitable[None]]


@dataclass
class CompletionRequest:
    """One logical request and its remaining retry budget."""

    prompt: str
    system_instruction: str
    retries_left: int
    delay: float
    attempt: int = 1


class ResilientCompletionClient:
    """
    Gets a completion for a prompt, masking transient failures.

    - Missing API key: fixed configuration message, no network call
    - Transport failure or non-2xx status: retried with exponential backoff
    - 2xx with a finish reason and no text: refusal message, not retried
    - 2xx of any other unexpected shape: generic message, not retried

    `complete()` never raises. `generate()` is the strict variant and raises
    CompletionError subclasses instead.
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.settings = settings
        self._api_key = settings.api_key or None
        self._transport = transport
        self._sleep = sleep
        self._http: httpx.AsyncClient | None = None

    @property
    def is_configured(self) -> bool:
        return self._api_key is not None

    def _get_http(self) -> httpx.AsyncClient:
        """Get or create the pooled HTTP client."""
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(
                transport=self._transport, timeout=self.settings.timeout
            )
        return self._http

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def complete(
        self,
        prompt: str,
        system_instruction: str = PERSONA_INSTRUCTION,
        max_retries: int | None = None,
        initial_delay: float | None = None,
    ) -> str:
        """Return generated text, or a user-displayable message on failure."""
        try:
            return await self.generate(prompt, system_instruction, max_retries, initial_delay)
        except ConfigurationError:
            return CONFIGURATION_ERROR_MESSAGE
        except ServiceRefusal as e:
            return REFUSAL_TEMPLATE.format(reason=e.reason)
        except MalformedResponse:
            return MALFORMED_RESPONSE_MESSAGE
        except TransientTransportError:
            return CONNECTION_APOLOGY_MESSAGE
        except Exception:
            logger.exception("completion_unexpected_error")
            return CONNECTION_APOLOGY_MESSAGE

    async def generate(
        self,
        prompt: str,
        system_instruction: str = PERSONA_INSTRUCTION,
        max_retries: int | None = None,
        initial_delay: float | None = None,
    ) -> str:
        """
        Return generated text.

        Args:
            prompt: User-facing prompt text
            system_instruction: Persona instruction sent alongside the prompt
            max_retries: Retries after the first attempt (default from settings)
            initial_delay: Seconds to wait before the first retry, doubled each time

        Raises:
            ConfigurationError: No API key configured
            ServiceRefusal: Service returned a finish reason instead of text
            MalformedResponse: Service returned an unexpected payload
            TransientTransportError: All attempts failed at the transport level
        """
        if not self.is_configured:
            logger.error("completion_api_key_missing")
            raise ConfigurationError("GEMINI_API_KEY is not configured")

        request = CompletionRequest(
            prompt=prompt,
            system_instruction=system_instruction,
            retries_left=self.settings.max_retries if max_retries is None else max_retries,
            delay=self.settings.initial_delay if initial_delay is None else initial_delay,
        )

        while True:
            try:
                payload = await self._post(request)
            except TransientTransportError as e:
                if request.retries_left <= 0:
                    logger.error(
                        "completion_retries_exhausted",
                        attempts=request.attempt,
                        error=str(e),
                    )
                    raise
                logger.warning(
                    "completion_attempt_failed",
                    attempt=request.attempt,
                    retries_left=request.retries_left,
                    retry_in=request.delay,
                    status_code=e.status_code,
                    error=str(e),
                )
                await self._sleep(request.delay)
                request.retries_left -= 1
                request.delay *= 2
                request.attempt += 1
                continue

            return self._unwrap(payload, request)

    async def _post(self, request: CompletionRequest) -> object:
        """Send one attempt. Returns the decoded JSON body of a 2xx response."""
        body = GenerateContentRequest.build(request.prompt, request.system_instruction)

        try:
            response = await self._get_http().post(
                self.settings.endpoint,
                params={"key": self._api_key},
                json=body.to_payload(),
            )
        except httpx.HTTPError as e:
            raise TransientTransportError(f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            raise TransientTransportError(
                f"API request failed with status {response.status_code}: "
                f"{_error_message(response)}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError:
            # Body is not JSON; decode_response reports it as malformed
            return None

    def _unwrap(self, payload: object, request: CompletionRequest) -> str:
        result = decode_response(payload)

        match result:
            case Success(text=text):
                logger.info(
                    "completion_succeeded",
                    attempt=request.attempt,
                    prompt_length=len(request.prompt),
                    response_length=len(text),
                )
                return text
            case Refusal(reason=reason):
                logger.warning("completion_refused", reason=reason, attempt=request.attempt)
                raise ServiceRefusal(reason)
            case Malformed(detail=detail):
                logger.error("completion_malformed_response", detail=detail, attempt=request.attempt)
                raise MalformedResponse(detail)

        raise CompletionError(f"Unhandled result: {result!r}")


def _error_message(response: httpx.Response) -> str:
    try:
        error = response.json().get("error") or {}
        return error.get("message") or "Unknown error"
    except (ValueError, AttributeError):
        return "Unknown error"

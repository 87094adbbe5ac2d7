# Same send() contract as ChatCompletionsClient, backed by the OpenAI SDK.
# SDK exceptions are mapped onto ErrorKind so the pipelines cannot tell them apart.

from typing import Optional

import httpx
import openai
from openai import AsyncOpenAI

from zenpath.log import get_logger
from ..credentials import CredentialResolver
from ..types import Err, ErrorKind, GenerationRequest, GenerationResult, Ok

logger = get_logger("openai_client")


class OpenAIClient:
    def __init__(
        self,
        credentials: CredentialResolver,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.credentials = credentials
        self.base_url = base_url
        self.http_client = http_client
        self._client: Optional[AsyncOpenAI] = None
        self._key: Optional[str] = None

    def _sdk(self, api_key: str) -> AsyncOpenAI:
        # rebuilt only when the resolved key changes
        if self._client is None or self._key != api_key:
            self._client = AsyncOpenAI(
                api_key=api_key, base_url=self.base_url, http_client=self.http_client, max_retries=0
            )
            self._key = api_key
        return self._client

    async def send(self, req: GenerationRequest) -> GenerationResult:
        api_key = self.credentials.resolve()
        if not api_key:
            return Err(ErrorKind.CREDENTIAL_MISSING, "API key not configured")

        formatted = [{"role": m.role, "content": m.content} for m in req.messages()]
        logger.info(
            "Sending request: model=%s, temperature=%s, promptLen=%d",
            req.model, req.temperature, len(req.prompt),
        )
        try:
            resp = await self._sdk(api_key).chat.completions.create(
                model=req.model,
                messages=formatted,
                temperature=req.temperature,
                max_tokens=req.max_tokens,
                timeout=req.timeout,
            )
        except openai.APITimeoutError:
            logger.error("Request timed out after %ss", req.timeout)
            return Err(ErrorKind.TRANSPORT_FAILURE, f"timeout after {req.timeout}s")
        except openai.APIConnectionError as e:
            logger.error("Transport error: %s", e)
            return Err(ErrorKind.TRANSPORT_FAILURE, str(e))
        except openai.APIStatusError as e:
            logger.error("API error %s: %s", e.status_code, e.message)
            return Err(ErrorKind.SERVER_ERROR, f"API error: {e.message}", status=e.status_code)
        except openai.APIError as e:
            logger.error("Failed to parse response: %s", e)
            return Err(ErrorKind.MALFORMED_ENVELOPE, f"failed to parse response: {e}")
        except ValueError as e:
            # a 2xx JSON content-type with an undecodable body
            logger.error("Undecodable response body: %s", e)
            return Err(ErrorKind.MALFORMED_ENVELOPE, f"failed to parse response: {e}")

        choices = getattr(resp, "choices", None) or []
        message = getattr(choices[0], "message", None) if choices else None
        content = getattr(message, "content", None)
        if not isinstance(content, str):
            logger.error("Unexpected response shape from SDK: %r", resp)
            return Err(ErrorKind.MALFORMED_ENVELOPE, "unexpected response shape: no choices[0].message.content")
        return Ok(content.strip())

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None

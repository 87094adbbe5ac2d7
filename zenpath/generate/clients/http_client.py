# Raw HTTPS client for an OpenAI-compatible chat-completions endpoint.
# One POST per send(), no retries, failures returned as Err values.

from __future__ import annotations
from typing import Any, Dict, Optional

import httpx

from zenpath.log import get_logger
from ..credentials import CredentialResolver
from ..types import Err, ErrorKind, GenerationRequest, GenerationResult, Ok

logger = get_logger("http_client")

DEFAULT_ENDPOINT = "https://api.openai.com/v1/chat/completions"


def extract_content(data: Any) -> Optional[str]:
    """Pull choices[0].message.content out of a decoded body, None if absent."""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    if not isinstance(content, str):
        return None
    return content


def extract_error_detail(resp: httpx.Response) -> Optional[str]:
    try:
        data = resp.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        err = data.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
        if isinstance(err, str) and err:
            return err
    return None


class ChatCompletionsClient:
    def __init__(
        self,
        credentials: CredentialResolver,
        endpoint: str = DEFAULT_ENDPOINT,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.credentials = credentials
        self.endpoint = endpoint
        self._http = http
        self._owns_http = http is None

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient()
        return self._http

    def _payload(self, req: GenerationRequest) -> Dict[str, Any]:
        return {
            "model": req.model,
            "messages": [{"role": m.role, "content": m.content} for m in req.messages()],
            "temperature": req.temperature,
            "max_tokens": req.max_tokens,
        }

    async def send(self, req: GenerationRequest) -> GenerationResult:
        api_key = self.credentials.resolve()
        if not api_key:
            return Err(ErrorKind.CREDENTIAL_MISSING, "API key not configured")

        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        logger.info(
            "Sending request: model=%s, temperature=%s, promptLen=%d",
            req.model, req.temperature, len(req.prompt),
        )
        try:
            resp = await self._client().post(
                self.endpoint, json=self._payload(req), headers=headers, timeout=req.timeout
            )
        except httpx.TimeoutException as e:
            logger.error("Request timed out after %ss: %s", req.timeout, e)
            return Err(ErrorKind.TRANSPORT_FAILURE, f"timeout after {req.timeout}s")
        except httpx.HTTPError as e:
            logger.error("Transport error: %s", e)
            return Err(ErrorKind.TRANSPORT_FAILURE, str(e) or e.__class__.__name__)

        if not resp.is_success:
            detail = extract_error_detail(resp)
            logger.error("API error %s: %s", resp.status_code, detail or resp.text[:500])
            message = f"API error: {detail}" if detail else f"HTTP {resp.status_code}: {resp.reason_phrase}"
            return Err(ErrorKind.SERVER_ERROR, message, status=resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            logger.error("Undecodable response body: %s", e)
            return Err(ErrorKind.MALFORMED_ENVELOPE, f"failed to parse response: {e}")

        content = extract_content(data)
        if content is None:
            logger.error("Unexpected response shape; full body: %s", resp.text[:1000])
            return Err(ErrorKind.MALFORMED_ENVELOPE, "unexpected response shape: no choices[0].message.content")
        return Ok(content.strip())

    async def aclose(self) -> None:
        if self._owns_http and self._http is not None:
            await self._http.aclose()
            self._http = None

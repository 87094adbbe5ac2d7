# Quote of the day: one request, a fixed line on any failure.

from zenpath.generate.types import Err, ErrorKind, GenerationRequest, ModelClient
from zenpath.log import get_logger
from zenpath.prompts import QUOTE_PROMPT

logger = get_logger("quote")

QUOTE_FALLBACK = "Quote of the Day: Unable to fetch quote at this time."
QUOTE_UNCONFIGURED = "Quote of the Day: Unable to load quote."


def clean_quote(text: str) -> str:
    quote = text.strip()
    if len(quote) >= 2 and quote.startswith('"') and quote.endswith('"'):
        quote = quote[1:-1].strip()
    return quote


class QuoteOfTheDay:
    def __init__(
        self,
        client: ModelClient,
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        max_tokens: int = 150,
        timeout: float = 20.0,
    ):
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout

    async def fetch(self) -> str:
        req = GenerationRequest(
            prompt=QUOTE_PROMPT,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            timeout=self.timeout,
        )
        result = await self.client.send(req)
        if isinstance(result, Err):
            logger.error("Quote request failed (%s): %s", result.kind.value, result.message)
            if result.kind is ErrorKind.CREDENTIAL_MISSING:
                return QUOTE_UNCONFIGURED
            return QUOTE_FALLBACK
        quote = clean_quote(result.text)
        return quote or QUOTE_FALLBACK

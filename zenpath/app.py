# ============================================================
# Zenpath FastAPI App
# ------------------------------------------------------------
# Wires the content core to HTTP:
#   - one model client (http, openai SDK, or echo)
#   - one ContentBroadcaster shared by every route
#   - thought / chat / quote pipelines built on top
# ============================================================

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

# --- Local imports ---
from zenpath.settings import Settings, settings
from zenpath.broadcast import ContentBroadcaster
from zenpath.generate import CredentialResolver, EchoDevClient, ChatCompletionsClient, ModelClient
from zenpath.log import get_logger
from zenpath.pipeline import (
    ChatPipeline,
    Complete,
    QuoteOfTheDay,
    ThoughtMode,
    ThoughtPipeline,
)
from zenpath.safety import SafetyClassifier, load_patterns

logger = get_logger("app")


# ------------------------------------------------------------
# 🔧 Model client selection
# ------------------------------------------------------------
def build_model_client(cfg: Settings) -> ModelClient:
    credentials = CredentialResolver(override=cfg.OPENAI_API_KEY, secret_paths=cfg.SECRETS_PATHS)
    kind = cfg.GENERATION_CLIENT.lower()
    if kind == "echo":
        return EchoDevClient()
    if kind == "openai":
        from zenpath.generate.clients.openai_client import OpenAIClient
        base_url = cfg.OPENAI_ENDPOINT.rsplit("/chat/completions", 1)[0]
        return OpenAIClient(credentials=credentials, base_url=base_url)
    if kind == "http":
        return ChatCompletionsClient(credentials=credentials, endpoint=cfg.OPENAI_ENDPOINT)
    raise ValueError(f"Unknown GENERATION_CLIENT: {cfg.GENERATION_CLIENT}")


@dataclass
class Services:
    client: ModelClient
    broadcaster: ContentBroadcaster
    thought: ThoughtPipeline
    chat: ChatPipeline
    quote: QuoteOfTheDay


def build_services(cfg: Settings, client: Optional[ModelClient] = None) -> Services:
    client = client or build_model_client(cfg)
    broadcaster = ContentBroadcaster()
    common = dict(model=cfg.OPENAI_MODEL, temperature=cfg.TEMPERATURE, timeout=cfg.REQUEST_TIMEOUT)
    return Services(
        client=client,
        broadcaster=broadcaster,
        thought=ThoughtPipeline(
            client,
            broadcaster,
            max_tokens=cfg.THOUGHT_MAX_TOKENS,
            mode=ThoughtMode(cfg.THOUGHT_MODE.lower()),
            include_explanations=cfg.INCLUDE_EXPLANATIONS,
            **common,
        ),
        chat=ChatPipeline(
            client,
            SafetyClassifier(load_patterns(cfg.SAFETY_PATTERNS_PATH)),
            max_tokens=cfg.CHAT_MAX_TOKENS,
            wait_ceiling=cfg.CHAT_WAIT_CEILING,
            **common,
        ),
        quote=QuoteOfTheDay(client, max_tokens=cfg.QUOTE_MAX_TOKENS, **common),
    )


# ------------------------------------------------------------
# 📦 Pydantic models
# ------------------------------------------------------------
class OptionPayload(BaseModel):
    title: str
    theme: str
    explanation: str
    optimal: bool


class BundlePayload(BaseModel):
    thought: str
    intro_dialogue: str
    options: List[OptionPayload]


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1)


class ChatPayload(BaseModel):
    reply: str
    safety_triggered: bool


class DialoguePayload(BaseModel):
    index: int
    dialogue: str


def create_app(services: Optional[Services] = None, cfg: Settings = settings) -> FastAPI:
    svc = services or build_services(cfg)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting %s (client=%s)", cfg.app_name, type(svc.client).__name__)
        yield
        close = getattr(svc.client, "aclose", None)
        if close is not None:
            await close()
        logger.info("Shutting down %s", cfg.app_name)

    app = FastAPI(title=f"{cfg.app_name} API", version="0.1", lifespan=lifespan)
    app.state.services = svc

    # --------------------------------------------------------
    # 💭 Thought bundle routes
    # --------------------------------------------------------
    @app.post("/thought", response_model=BundlePayload)
    async def generate_thought():
        outcome = await svc.thought.run()
        if isinstance(outcome, Complete):
            return outcome.bundle.to_dict()
        # generation errors are logged by the pipeline, never shown verbatim
        raise HTTPException(
            status_code=503,
            detail={"stage": outcome.stage.value, "kind": outcome.kind.value, "message": "try again"},
        )

    @app.get("/thought/current", response_model=BundlePayload)
    def current_thought():
        bundle = svc.broadcaster.current()
        if bundle is None:
            raise HTTPException(status_code=404, detail="No thought generated yet")
        return bundle.to_dict()

    @app.get("/thought/options/{index}/dialogue", response_model=DialoguePayload)
    def option_dialogue(index: int):
        dialogue = svc.broadcaster.option_dialogue(index)
        if dialogue is None:
            raise HTTPException(status_code=404, detail=f"No dialogue for option {index}")
        return {"index": index, "dialogue": dialogue}

    # --------------------------------------------------------
    # 💬 Chat route
    # --------------------------------------------------------
    @app.post("/chat", response_model=ChatPayload)
    async def chat(req: ChatRequest):
        if not req.message.strip():
            raise HTTPException(status_code=422, detail="message must not be blank")
        turn = await svc.chat.converse(req.message)
        return ChatPayload(reply=turn.reply, safety_triggered=turn.was_safety_triggered)

    # --------------------------------------------------------
    # 🌱 Quote of the day
    # --------------------------------------------------------
    @app.get("/quote")
    async def quote() -> Dict[str, Any]:
        return {"quote": await svc.quote.fetch()}

    # --------------------------------------------------------
    # 🧭 Health checks
    # --------------------------------------------------------
    @app.get("/healthz")
    def healthz():
        return {
            "ok": True,
            "env": cfg.ENV,
            "debug": cfg.DEBUG,
            "app": cfg.app_name,
            "engine": type(svc.client).__name__,
        }

    @app.get("/health")
    def health():
        return {"status": "ok", "env": cfg.ENV}

    @app.get("/")
    def hello():
        return {"message": f"{cfg.app_name} service running."}

    return app


app = create_app()

# Offline client for local dev and demos: no network, no key.
# Replies are shaped so the line-based and structured parsers accept them.

import json

from ..types import GenerationRequest, GenerationResult, Ok


class EchoDevClient:
    def __init__(self):
        self.model = "echo-dev"
        self.calls = 0

    async def send(self, req: GenerationRequest) -> GenerationResult:
        self.calls += 1
        prompt = req.prompt.lower()
        if "json" in prompt and "options" in prompt:
            return Ok(json.dumps(_STRUCTURED_SAMPLE))
        if "bullet" in prompt:
            return Ok("\n".join(f"- [ECHO] option {i}" for i in range(1, 5)))
        return Ok(f"[ECHO RESPONSE] {req.prompt.strip().splitlines()[-1] if req.prompt.strip() else '(no input)'}")

    async def aclose(self) -> None:
        return None


_STRUCTURED_SAMPLE = {
    "thought": "[ECHO] I'm going to fail this exam.",
    "introDialogue": "[ECHO] That worry sounds heavy. Let's look at some ways to respond.",
    "options": [
        {"title": "[ECHO] Skip studying.", "theme": "avoidance", "dialogue": "[ECHO] This path is blocked.", "optimal": False},
        {"title": "[ECHO] I'm hopeless at this.", "theme": "self_criticism", "dialogue": "[ECHO] This invites trouble.", "optimal": False},
        {"title": "[ECHO] Study all night, every night.", "theme": "over_control", "dialogue": "[ECHO] This is a long road.", "optimal": False},
        {"title": "[ECHO] I've prepared; I'll do my best.", "theme": "reframe", "dialogue": "[ECHO] A kind, direct way forward.", "optimal": True},
    ],
}

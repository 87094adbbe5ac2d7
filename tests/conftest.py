# ===============================================
# tests/conftest.py
# Shared fakes: scripted model clients and text slots.
# ===============================================

import asyncio
import json

import pytest

from zenpath.generate.types import Err, ErrorKind, Ok


class ScriptedClient:
    """Returns queued results in order and records every request it saw."""

    def __init__(self, results):
        self.results = list(results)
        self.requests = []

    @property
    def calls(self):
        return len(self.requests)

    async def send(self, req):
        self.requests.append(req)
        if not self.results:
            raise AssertionError("ScriptedClient ran out of results")
        result = self.results.pop(0)
        if isinstance(result, str):
            return Ok(result)
        if isinstance(result, Exception):
            raise result
        return result


class HangingClient:
    """Never resolves on its own; records whether it got cancelled."""

    def __init__(self):
        self.calls = 0
        self.cancelled = False

    async def send(self, req):
        self.calls += 1
        try:
            await asyncio.sleep(3600)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return Ok("too late")


class RecordingSlot:
    def __init__(self):
        self.text = None
        self.writes = 0

    def set_text(self, text):
        self.text = text
        self.writes += 1


OPTIONS_RAW = (
    "- Avoid the meeting entirely.\n"
    "- I always mess this up.\n"
    "- Triple-check everything ten times.\n"
    "- Take a breath; one step is enough."
)

EXPLANATIONS_RAW = (
    "- Avoiding it blocks the path. Try one small step.\n"
    "- Harsh words add weight. Try kindness.\n"
    "- Checking works but is exhausting. Try trusting yourself.\n"
    "- A calm, direct way forward. Well done!"
)


def structured_payload(options=None, **overrides):
    data = {
        "thought": "I'm going to fail this exam.",
        "introDialogue": "That sounds stressful. Let's explore some ways to respond.",
        "options": options if options is not None else [
            {"title": "Skip studying.", "theme": "avoidance", "dialogue": "Blocked path.", "optimal": False},
            {"title": "I'm useless.", "theme": "self_criticism", "dialogue": "Invites trouble.", "optimal": False},
            {"title": "Study all night.", "theme": "over_control", "dialogue": "Long road.", "optimal": False},
            {"title": "I prepared; I'll do my best.", "theme": "reframe", "dialogue": "Healthy choice.", "optimal": True},
        ],
    }
    data.update(overrides)
    return json.dumps(data)


@pytest.fixture
def scripted():
    return ScriptedClient


@pytest.fixture
def hanging():
    return HangingClient()


@pytest.fixture
def server_down():
    return Err(ErrorKind.SERVER_ERROR, "API error: server exploded", status=500)

import json
from typing import Any


def sse_event(event: str, data: Any) -> str:
    payload = json.dumps(data) if not isinstance(data, str) else data
    return f"event: {event}\ndata: {payload}\n\n"


def sse_stage_change(stage: str) -> str:
    return sse_event("stage_change", {"stage": stage})


def sse_intent(intent: dict) -> str:
    return sse_event("intent", intent)


def sse_token(token: str) -> str:
    return sse_event("token", {"token": token})


def sse_plan(message_id: int, plan: dict, source: str) -> str:
    return sse_event("plan", {"message_id": message_id, "plan": plan, "source": source})


def sse_error(message: str, code: str = "error") -> str:
    return sse_event("error", {"message": message, "code": code})


def sse_done(message_id: int | None = None) -> str:
    return sse_event("done", {"message_id": message_id})

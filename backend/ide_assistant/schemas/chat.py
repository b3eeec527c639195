from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, computed_field

from ide_assistant.schemas.pipeline import ApplicationPlan, GeneratedFile

PlanStatus = Literal["pending", "approved", "rejected", "superseded"]


class ChatThreadCreate(BaseModel):
    title: str = "New Chat"
    project_id: int | None = None


class ChatThreadResponse(BaseModel):
    id: int
    project_id: int | None
    title: str
    created_at: datetime

    model_config = {"from_attributes": True}


class ChatSendRequest(BaseModel):
    message: str = Field(min_length=1)
    project_id: int | None = None
    code: str | None = None
    language: str | None = None


class _MessageBase(BaseModel):
    id: int
    thread_id: int
    role: str
    content: str
    created_at: datetime


class PlainMessage(_MessageBase):
    kind: Literal["plain"] = "plain"


class PlanMessage(_MessageBase):
    kind: Literal["plan"] = "plan"
    plan: ApplicationPlan
    plan_status: PlanStatus
    plan_source: Literal["backend", "heuristic"]

    @computed_field
    @property
    def is_waiting_for_approval(self) -> bool:
        return self.plan_status == "pending"


class BuildResultMessage(_MessageBase):
    kind: Literal["build_result"] = "build_result"
    success: bool
    plan_message_id: int | None
    files: list[GeneratedFile] = []


ChatMessageResponse = Annotated[
    Union[PlainMessage, PlanMessage, BuildResultMessage],
    Field(discriminator="kind"),
]

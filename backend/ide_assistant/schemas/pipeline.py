from typing import Literal

from pydantic import BaseModel, Field

IntentType = Literal["create_app", "modify_code", "debug", "explain", "generate_feature"]
Complexity = Literal["simple", "moderate", "complex"]


class AssistRequest(BaseModel):
    message: str
    project_id: int | None = None
    code: str | None = None
    language: str | None = None


class UserIntent(BaseModel):
    type: IntentType = "create_app"
    description: str = ""
    app_type: str | None = None  # None means nothing matched; consumers fall back to "web-app"
    domain: str = "general"
    technologies: list[str] = []
    features: list[str] = []
    complexity: Complexity = "moderate"

    model_config = {"frozen": True}


class AssembledPrompts(BaseModel):
    system_prompt: str
    user_prompt: str


class PlanPreview(BaseModel):
    title: str = Field(min_length=1)
    description: str
    sections: list[str] = Field(min_length=1)

    model_config = {"frozen": True}


class ApplicationPlan(BaseModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    type: str = Field(min_length=1)
    features: list[str] = Field(min_length=1)
    technologies: list[str] = Field(min_length=1)
    preview: PlanPreview

    model_config = {"frozen": True}


class PlanResponse(BaseModel):
    plan: ApplicationPlan
    source: Literal["backend", "heuristic"]
    intent: UserIntent


class GeneratedFile(BaseModel):
    name: str
    path: str
    content: str
    language: str = "text"


class GenerationRequest(BaseModel):
    description: str
    plan: ApplicationPlan | None = None


class GenerationResult(BaseModel):
    files: list[GeneratedFile] = []
    message: str = ""

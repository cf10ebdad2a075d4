"""Parameter models for the methods that take structured ``params``."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class InitializeParams(BaseModel):
    """What the client announces in ``initialize``. Only logged, never negotiated."""

    model_config = {"populate_by_name": True}

    protocol_version: str | None = Field(default=None, alias="protocolVersion")
    capabilities: dict[str, Any] = Field(default_factory=dict)
    client_info: dict[str, Any] = Field(default_factory=dict, alias="clientInfo")


class CallToolParams(BaseModel):
    name: str
    arguments: dict[str, Any] | None = None


class ReadResourceParams(BaseModel):
    uri: str


class GetPromptParams(BaseModel):
    name: str
    arguments: dict[str, str] | None = None


class CompletionReference(BaseModel):
    """``ref/prompt`` carries ``name``; ``ref/resource`` carries ``uri``."""

    type: str
    name: str | None = None
    uri: str | None = None


class CompletionArgument(BaseModel):
    name: str
    value: str = ""


class CompleteParams(BaseModel):
    ref: CompletionReference
    argument: CompletionArgument


class SetLevelParams(BaseModel):
    level: Any = None

# Copyright (c) Syntropy Systems
"""Provider-neutral request, response and capability records for LLM backends.

Messages, content parts and completion choices are plain dicts so that
provider-specific keys survive untouched. The shapes are:

* message: ``{"role", "content", "name"?, "tool_calls"?, "tool_call_id"?}``
  where ``content`` is a string or a list of content parts
* content part: ``{"type": "text", "text"}``, ``{"type": "image", "url" | "base64",
  "media_type"?}``, ``{"type": "audio", "url", "format"}`` or
  ``{"type": "tool_result", "tool_call_id", "content"}``
* choice: ``{"index", "message", "finish_reason", "thinking"?}``
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import Field, SkipValidation

from .base import IRModel, JSONObject, Vocabulary


class Role(Vocabulary):
    """Author of a chat message (closed)."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class ContentPartType(Vocabulary):
    """Kind of a multimodal content part (closed)."""

    TEXT = "text"
    IMAGE = "image"
    AUDIO = "audio"
    TOOL_RESULT = "tool_result"


class ToolChoiceMode(Vocabulary):
    """Tool selection directive (closed); a ``{"name": ...}`` dict forces one tool."""

    AUTO = "auto"
    NONE = "none"
    REQUIRED = "required"


class ResponseFormat(Vocabulary):
    """Requested output format (closed)."""

    TEXT = "text"
    JSON = "json"
    JSON_SCHEMA = "json_schema"


class CacheControl(Vocabulary):
    """Prompt caching policy (closed)."""

    EPHEMERAL = "ephemeral"


class FinishReason(Vocabulary):
    """Why generation stopped (closed)."""

    STOP = "stop"
    LENGTH = "length"
    TOOL_CALLS = "tool_calls"
    CONTENT_FILTER = "content_filter"
    ERROR = "error"


class BackendOptions(IRModel):
    """Generation parameters normalized across providers.

    ``extra`` carries provider-specific settings verbatim.
    """

    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: SkipValidation[Optional[int]] = None
    top_p: Optional[float] = None
    top_k: SkipValidation[Optional[int]] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    stop: SkipValidation[Optional[list[str]]] = None
    response_format: Union[ResponseFormat, str, None] = None
    json_schema: Optional[JSONObject] = None
    stream: Optional[bool] = False
    cache_control: Union[CacheControl, str, None] = None
    extended_thinking: Optional[bool] = False
    thinking_budget_tokens: SkipValidation[Optional[int]] = None
    seed: Optional[int] = None
    timeout_ms: SkipValidation[Optional[int]] = None
    extra: Optional[JSONObject] = Field(default_factory=dict)


class Prompt(IRModel):
    """A chat request in provider-neutral form."""

    messages: SkipValidation[list[dict[str, Any]]] = Field(default_factory=list)
    system: Optional[str] = None
    tools: Optional[list[JSONObject]] = None
    tool_choice: SkipValidation[Union[ToolChoiceMode, str, dict[str, str], None]] = None
    options: Optional[BackendOptions] = Field(default_factory=BackendOptions)
    request_id: Optional[str] = None
    trace_id: Optional[str] = None
    metadata: Optional[JSONObject] = Field(default_factory=dict)


class Completion(IRModel):
    """A backend response in provider-neutral form.

    ``raw_response`` keeps the provider payload for debugging.
    """

    choices: SkipValidation[list[dict[str, Any]]] = Field(default_factory=list)
    model: Optional[str] = None
    usage: Optional[JSONObject] = None
    latency_ms: Optional[int] = None
    time_to_first_token_ms: Optional[int] = None
    request_id: Optional[str] = None
    trace_id: Optional[str] = None
    raw_response: Optional[JSONObject] = None
    metadata: Optional[JSONObject] = Field(default_factory=dict)


class Capabilities(IRModel):
    """What a backend supports, its limits and its prices."""

    backend_id: Optional[str]
    provider: Optional[str]
    models: Optional[list[str]] = Field(default_factory=list)
    default_model: Optional[str] = None
    supports_streaming: SkipValidation[bool] = True
    supports_tools: SkipValidation[bool] = True
    supports_vision: SkipValidation[bool] = False
    supports_audio: SkipValidation[bool] = False
    supports_json_mode: SkipValidation[bool] = True
    supports_extended_thinking: SkipValidation[bool] = False
    supports_caching: SkipValidation[bool] = False
    max_tokens: Optional[int] = None
    max_context_length: Optional[int] = None
    max_images_per_request: Optional[int] = None
    requests_per_minute: Optional[int] = None
    tokens_per_minute: Optional[int] = None
    cost_per_million_input: Optional[float] = None
    cost_per_million_output: Optional[float] = None
    metadata: Optional[JSONObject] = Field(default_factory=dict)


# Copyright (c) Syntropy Systems
"""JSON encoding and decoding for IR entities.

Encoding is total: every entity dumps to JSON through pydantic, with
vocabulary members written as their lowercase string and timestamps as
ISO-8601.

Decoding goes through a per-kind :class:`DecodeSpec`. The incoming mapping
is cut down to the fields the kind declares (unknown keys are dropped), each
declared field is run through its converter, and the result is handed to the
model constructor. Converters never invent vocabulary members: a string the
vocabulary does not know stays a string. Decoding never raises; failures are
returned as ``Err(DecodeError)``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union

from pydantic import JsonValue, TypeAdapter, ValidationError
from typing_extensions import TypeAlias

from crucible_ir.errors import DecodeError
from crucible_ir.models import (
    Architecture,
    BackendOptions,
    BackendRef,
    CacheControl,
    Capabilities,
    Completion,
    ContentPartType,
    Correction,
    DatasetProvider,
    DatasetRef,
    DatasetSplit,
    DeploymentConfig,
    DeploymentState,
    DeploymentStatus,
    DeploymentStrategy,
    Device,
    EffectSize,
    Ensemble,
    EnsembleStrategy,
    Environment,
    ExecutionMode,
    Experiment,
    ExperimentType,
    Fairness,
    FairnessMetric,
    FeedbackConfig,
    FeedbackEvent,
    FeedbackStorage,
    FeedbackType,
    FinishReason,
    Framework,
    Guardrail,
    GuardrailProfile,
    Health,
    Hedging,
    HedgingStrategy,
    IRModel,
    LossFunction,
    ModelProvider,
    ModelRef,
    ModelStage,
    ModelVersion,
    Optimizer,
    OutputFormat,
    OutputSink,
    OutputSpec,
    Prompt,
    ReliabilityConfig,
    ResponseFormat,
    Role,
    StageDef,
    StatTest,
    Stats,
    Task,
    ToolChoiceMode,
    TrainingConfig,
    TrainingRun,
    TrainingStatus,
    Vocabulary,
)
from crucible_ir.result import Err, Ok, Result

logger = logging.getLogger(__name__)

MAX_FALLBACK_DEPTH = 32

# Date and time of day are both required; "2024" or "1700000000" are not timestamps.
ISO_DATETIME = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}")

DecodeResult: TypeAlias = Result[IRModel, DecodeError]
Converter: TypeAlias = Callable[[Any], Any]
Kind: TypeAlias = Union[type[IRModel], str]

_JSON_OBJECT_ADAPTER: TypeAdapter[dict[str, JsonValue]] = TypeAdapter(
    dict[str, JsonValue]
)


# --- Encoding ---


def to_json(
    entity: IRModel,
    *,
    indent: Optional[int] = None,
    exclude_none: bool = False,
) -> str:
    """Serialize an entity to JSON text."""
    return entity.model_dump_json(
        by_alias=True,
        indent=indent,
        exclude_none=exclude_none,
        warnings=False,
    )


def to_map(entity: IRModel, *, exclude_none: bool = False) -> dict[str, Any]:
    """Return the JSON-compatible dict form of an entity."""
    return entity.model_dump(
        mode="json",
        by_alias=True,
        exclude_none=exclude_none,
        warnings=False,
    )


# --- Key and value converters ---


def _wire_key(key: object) -> Optional[str]:
    if isinstance(key, Enum):
        value = key.value
        return value if isinstance(value, str) else None
    if isinstance(key, str):
        return key
    return None


def _string_keys(data: Mapping[Any, Any]) -> dict[str, Any]:
    """Copy a mapping, turning enum keys into their string value."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        name = _wire_key(key)
        if name is None:
            logger.debug("Dropping non-string key %r", key)
            continue
        result[name] = value
    return result


def _symbol(vocabulary: type[Vocabulary]) -> Converter:
    """Map a string to a vocabulary member, keeping unknown strings as-is."""

    def convert(value: Any) -> Any:
        if not isinstance(value, str) or isinstance(value, Enum):
            return value
        member = vocabulary.lookup(value)
        if member is None:
            logger.debug(
                "Keeping unrecognized %s value %r as a string",
                vocabulary.__name__,
                value,
            )
            return value
        return member

    return convert


def _symbols(vocabulary: type[Vocabulary]) -> Converter:
    convert_one = _symbol(vocabulary)

    def convert(value: Any) -> Any:
        if not isinstance(value, list):
            return value
        return [convert_one(item) for item in value]

    return convert


def _timestamp(value: Any) -> Any:
    """Parse an ISO-8601 datetime string; any other string is kept verbatim.

    Bare numbers such as ``"1700000000"`` are not read as epoch seconds.
    """
    if not isinstance(value, str):
        return value
    if not ISO_DATETIME.match(value):
        logger.debug("Keeping non-ISO timestamp %r as a string", value)
        return value
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Keeping unparseable timestamp %r as a string", value)
        return value


def _nested(kind: type[IRModel]) -> Converter:
    def convert(value: Any) -> Any:
        if isinstance(value, kind):
            return value
        return _decode(value, kind)

    return convert


def _nested_list(kind: type[IRModel]) -> Converter:
    convert_one = _nested(kind)

    def convert(value: Any) -> Any:
        # Non-list values are left for construction or validation to report.
        if not isinstance(value, list):
            return value
        return [convert_one(item) for item in value]

    return convert


def _content_part(value: Any) -> Any:
    if not isinstance(value, Mapping):
        return value
    part = _string_keys(value)
    if "type" in part:
        part["type"] = _symbol(ContentPartType)(part["type"])
    return part


def _message(value: Any) -> Any:
    """Normalize one chat message: symbolic role and content-part types."""
    if not isinstance(value, Mapping):
        return value
    message = _string_keys(value)
    if "role" in message:
        message["role"] = _symbol(Role)(message["role"])
    content = message.get("content")
    if isinstance(content, list):
        message["content"] = [_content_part(part) for part in content]
    return message


def _messages(value: Any) -> Any:
    if not isinstance(value, list):
        return value
    return [_message(item) for item in value]


def _choice(value: Any) -> Any:
    if not isinstance(value, Mapping):
        return value
    choice = _string_keys(value)
    if "finish_reason" in choice:
        choice["finish_reason"] = _symbol(FinishReason)(choice["finish_reason"])
    if "message" in choice:
        choice["message"] = _message(choice["message"])
    return choice


def _choices(value: Any) -> Any:
    if not isinstance(value, list):
        return value
    return [_choice(item) for item in value]


def _tool_choice(value: Any) -> Any:
    """A bare string becomes a mode; a mapping becomes ``{"name": ...}``."""
    if isinstance(value, str):
        return _symbol(ToolChoiceMode)(value)
    if isinstance(value, Mapping):
        return {"name": _string_keys(value).get("name")}
    return value


def _check_fallback_depth(fields: Mapping[str, Any]) -> None:
    depth = 0
    current = fields.get("fallback")
    while isinstance(current, Mapping):
        depth += 1
        if depth > MAX_FALLBACK_DEPTH:
            msg = f"fallback chain is deeper than {MAX_FALLBACK_DEPTH} backends"
            raise DecodeError("fallback_too_deep", msg)
        current = _string_keys(current).get("fallback")


# --- Decode specs ---


@dataclass(frozen=True)
class DecodeSpec:
    """How to decode one entity kind.

    The allow-list is the set of field names (and aliases) the model
    declares. ``converters`` maps a field name to the function applied to
    its raw value; fields without a converter are passed through.
    """

    model: type[IRModel]
    converters: Mapping[str, Converter] = field(default_factory=dict)
    check: Optional[Callable[[Mapping[str, Any]], None]] = None

    def allowed(self) -> frozenset[str]:
        names: set[str] = set()
        for name, info in self.model.model_fields.items():
            names.add(name)
            if info.alias:
                names.add(info.alias)
        return frozenset(names)

    def select(self, data: Mapping[Any, Any]) -> dict[str, Any]:
        """Keep only declared fields, converting enum keys to strings."""
        allowed = self.allowed()
        fields: dict[str, Any] = {}
        for key, value in _string_keys(data).items():
            if key in allowed:
                fields[key] = value
            else:
                logger.debug("Dropping unknown %s field %r", self.model.__name__, key)
        return fields


_DECODE_SPECS: dict[type[IRModel], DecodeSpec] = {
    spec.model: spec
    for spec in (
        DecodeSpec(
            Experiment,
            {
                "backend": _nested(BackendRef),
                "pipeline": _nested_list(StageDef),
                "dataset": _nested(DatasetRef),
                "reliability": _nested(ReliabilityConfig),
                "outputs": _nested_list(OutputSpec),
                "created_at": _timestamp,
                "updated_at": _timestamp,
                "experiment_type": _symbol(ExperimentType),
                "model_version": _nested(ModelVersion),
                "training_config": _nested(TrainingConfig),
                "baseline": _nested(ModelRef),
            },
        ),
        DecodeSpec(
            BackendRef,
            {"fallback": _nested(BackendRef)},
            check=_check_fallback_depth,
        ),
        DecodeSpec(StageDef),
        # DatasetRef.name is kept verbatim: registry ids and display names
        # share the field.
        DecodeSpec(
            DatasetRef,
            {
                "provider": _symbol(DatasetProvider),
                "split": _symbol(DatasetSplit),
            },
        ),
        DecodeSpec(
            OutputSpec,
            {
                "formats": _symbols(OutputFormat),
                "sink": _symbol(OutputSink),
            },
        ),
        DecodeSpec(
            ReliabilityConfig,
            {
                "ensemble": _nested(Ensemble),
                "hedging": _nested(Hedging),
                "guardrails": _nested(Guardrail),
                "stats": _nested(Stats),
                "fairness": _nested(Fairness),
                "feedback": _nested(FeedbackConfig),
            },
        ),
        DecodeSpec(
            Ensemble,
            {
                "strategy": _symbol(EnsembleStrategy),
                "execution_mode": _symbol(ExecutionMode),
            },
        ),
        DecodeSpec(Hedging, {"strategy": _symbol(HedgingStrategy)}),
        DecodeSpec(
            Stats,
            {
                "tests": _symbols(StatTest),
                "effect_size_type": _symbol(EffectSize),
                "multiple_testing_correction": _symbol(Correction),
            },
        ),
        DecodeSpec(Fairness, {"metrics": _symbols(FairnessMetric)}),
        DecodeSpec(Guardrail, {"profiles": _symbols(GuardrailProfile)}),
        DecodeSpec(
            Prompt,
            {
                "messages": _messages,
                "tool_choice": _tool_choice,
                "options": _nested(BackendOptions),
            },
        ),
        DecodeSpec(
            BackendOptions,
            {
                "response_format": _symbol(ResponseFormat),
                "cache_control": _symbol(CacheControl),
            },
        ),
        DecodeSpec(Completion, {"choices": _choices}),
        DecodeSpec(Capabilities),
        DecodeSpec(
            ModelRef,
            {
                "provider": _symbol(ModelProvider),
                "framework": _symbol(Framework),
                "architecture": _symbol(Architecture),
                "task": _symbol(Task),
            },
        ),
        DecodeSpec(
            ModelVersion,
            {"stage": _symbol(ModelStage), "created_at": _timestamp},
        ),
        DecodeSpec(
            TrainingConfig,
            {
                "model_ref": _nested(ModelRef),
                "dataset_ref": _nested(DatasetRef),
                "optimizer": _symbol(Optimizer),
                "loss_function": _symbol(LossFunction),
                "device": _symbol(Device),
            },
        ),
        DecodeSpec(
            TrainingRun,
            {
                "config": _nested(TrainingConfig),
                "status": _symbol(TrainingStatus),
                "started_at": _timestamp,
                "completed_at": _timestamp,
            },
        ),
        DecodeSpec(
            DeploymentConfig,
            {
                "environment": _symbol(Environment),
                "strategy": _symbol(DeploymentStrategy),
            },
        ),
        DecodeSpec(
            DeploymentStatus,
            {
                "state": _symbol(DeploymentState),
                "health": _symbol(Health),
                "last_health_check": _timestamp,
                "created_at": _timestamp,
                "updated_at": _timestamp,
            },
        ),
        DecodeSpec(
            FeedbackEvent,
            {"feedback_type": _symbol(FeedbackType), "timestamp": _timestamp},
        ),
        DecodeSpec(
            FeedbackConfig,
            {
                "feedback_types": _symbols(FeedbackType),
                "storage": _symbol(FeedbackStorage),
            },
        ),
    )
}

KINDS: dict[str, type[IRModel]] = {
    "experiment": Experiment,
    "backend_ref": BackendRef,
    "stage_def": StageDef,
    "dataset_ref": DatasetRef,
    "output_spec": OutputSpec,
    "reliability_config": ReliabilityConfig,
    "ensemble": Ensemble,
    "hedging": Hedging,
    "stats": Stats,
    "fairness": Fairness,
    "guardrail": Guardrail,
    "prompt": Prompt,
    "backend_options": BackendOptions,
    "completion": Completion,
    "capabilities": Capabilities,
    "model_ref": ModelRef,
    "model_version": ModelVersion,
    "training_config": TrainingConfig,
    "training_run": TrainingRun,
    "deployment_config": DeploymentConfig,
    "deployment_status": DeploymentStatus,
    "feedback_event": FeedbackEvent,
    "feedback_config": FeedbackConfig,
}


def kind_for_name(name: str) -> Optional[type[IRModel]]:
    """Resolve a wire kind name such as ``"backend_ref"`` to its class."""
    return KINDS.get(name.strip().lower().replace("-", "_"))


# --- Decoding ---


def _resolve_kind(kind: Kind) -> type[IRModel]:
    if isinstance(kind, str):
        resolved = kind_for_name(kind)
        if resolved is None:
            raise DecodeError("unsupported_kind", f"unknown entity kind {kind!r}")
        return resolved
    if kind not in _DECODE_SPECS:
        raise DecodeError("unsupported_kind", f"cannot decode {kind!r}")
    return kind


def _decode(data: Any, kind: type[IRModel]) -> IRModel:
    """Decode one mapping into ``kind``, raising DecodeError on failure."""
    spec = _DECODE_SPECS[kind]
    if not isinstance(data, Mapping):
        msg = f"{kind.__name__} payload must be an object, got {type(data).__name__}"
        raise DecodeError("not_an_object", msg)

    fields = spec.select(data)
    if spec.check is not None:
        spec.check(fields)
    for name, convert in spec.converters.items():
        value = fields.get(name)
        if value is not None:
            fields[name] = convert(value)

    try:
        return kind.model_validate(fields)
    except ValidationError as exc:
        failures = exc.errors()
        missing = [_location(error["loc"]) for error in failures if error["type"] == "missing"]
        if missing:
            msg = f"{kind.__name__} is missing required field(s): {', '.join(missing)}"
        else:
            # A union failure reports one entry per member; name each field once.
            invalid = list(dict.fromkeys(_location(error["loc"][:1]) for error in failures))
            msg = f"invalid {kind.__name__} field(s): {', '.join(invalid)}"
        raise DecodeError("invalid_payload", msg, cause=exc) from exc


def _location(loc: tuple[Union[int, str], ...]) -> str:
    return ".".join(str(part) for part in loc)


def from_map(data: Mapping[Any, Any], kind: Kind) -> DecodeResult:
    """Decode an already-parsed mapping into an entity.

    Args:
        data: Mapping with string (or vocabulary member) keys.
        kind: Entity class, or a wire kind name from :data:`KINDS`.

    Returns:
        ``Ok(entity)`` or ``Err(DecodeError)``. Never raises.
    """
    try:
        return Ok(_decode(data, _resolve_kind(kind)))
    except DecodeError as exc:
        logger.debug("Decode failed: %s", exc.message, exc_info=exc.cause)
        return Err(exc)
    except (TypeError, ValueError) as exc:
        logger.debug("Decode failed", exc_info=exc)
        return Err(DecodeError("invalid_payload", str(exc), cause=exc))


def from_json(text: Union[str, bytes], kind: Kind) -> DecodeResult:
    """Parse JSON text and decode it into an entity.

    Returns ``Err(DecodeError)`` with reason ``malformed_json`` for text that
    is not JSON and ``not_an_object`` for a document that is not an object.
    """
    try:
        data = _JSON_OBJECT_ADAPTER.validate_json(text)
    except ValidationError as exc:
        malformed = any(error["type"] == "json_invalid" for error in exc.errors())
        if malformed:
            error = DecodeError("malformed_json", "text is not valid JSON", cause=exc)
        else:
            error = DecodeError(
                "not_an_object", "JSON document must be an object", cause=exc
            )
        logger.debug("Decode failed: %s", error.message)
        return Err(error)
    except TypeError as exc:
        return Err(DecodeError("malformed_json", str(exc), cause=exc))
    return from_map(data, kind)

# Copyright (c) Syntropy Systems
"""Structural validation for IR entities.

Every entity kind has one checker returning the list of problems found in
discovery order. Nested entities are checked recursively and their messages
are prefixed with the containing field (``"backend.id must be ..."``).
Validation never raises for bad data; an unknown entity type is a
programming error and raises ``TypeError``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any, Callable, Union

from typing_extensions import TypeAlias

from crucible_ir.models import (
    BackendOptions,
    BackendRef,
    CacheControl,
    Capabilities,
    Completion,
    ContentPartType,
    DatasetRef,
    DeploymentConfig,
    DeploymentState,
    DeploymentStatus,
    Ensemble,
    EnsembleStrategy,
    ExecutionMode,
    Experiment,
    Fairness,
    FeedbackConfig,
    FeedbackEvent,
    FinishReason,
    Guardrail,
    Hedging,
    HedgingStrategy,
    IRModel,
    ModelRef,
    ModelVersion,
    OutputSpec,
    Prompt,
    ReliabilityConfig,
    ResponseFormat,
    Role,
    StageDef,
    Stats,
    ToolChoiceMode,
    TrainingConfig,
    TrainingRun,
    TrainingStatus,
)
from crucible_ir.result import Err, Ok

ValidationResult: TypeAlias = Union[Ok[IRModel], Err[list[str]]]
Checker: TypeAlias = Callable[[Any], list[str]]

SEMVER_PREFIX = re.compile(r"^\d+\.\d+\.\d+")

# exponential_backoff is recognized on the wire but not accepted yet.
ACCEPTED_HEDGING_STRATEGIES = (
    HedgingStrategy.OFF,
    HedgingStrategy.FIXED,
    HedgingStrategy.PERCENTILE,
    HedgingStrategy.ADAPTIVE,
    HedgingStrategy.WORKLOAD_AWARE,
)

NON_NEGATIVE_INT_OPTIONS = ("max_tokens", "top_k", "thinking_budget_tokens", "timeout_ms")

TOOL_CHOICE_MESSAGE = "tool_choice must be one of: auto, none, required, or {name: string}"


def validate(entity: IRModel) -> ValidationResult:
    """Validate an entity.

    Returns ``Ok(entity)`` when no problems are found, otherwise
    ``Err(messages)`` with every problem found.

    Raises:
        TypeError: If ``entity`` is not an IR entity.
    """
    problems = _check(entity)
    if problems:
        return Err(problems)
    return Ok(entity)


def is_valid(entity: IRModel) -> bool:
    """Return True when ``entity`` has no validation errors."""
    return not _check(entity)


def errors(entity: IRModel) -> list[str]:
    """Return the validation errors for ``entity`` (empty when valid)."""
    return _check(entity)


def _check(entity: object) -> list[str]:
    checker = _CHECKERS.get(type(entity))
    if checker is None:
        msg = f"cannot validate {type(entity).__name__}: not an IR entity"
        raise TypeError(msg)
    return checker(entity)


def _nested(prefix: str, entity: object) -> list[str]:
    return [f"{prefix}{problem}" for problem in _check(entity)]


def _one_of(field: str, allowed: Iterable[str]) -> str:
    values = [getattr(value, "value", value) for value in allowed]
    return f"{field} must be one of: {', '.join(values)}"


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _within_unit_interval(value: object) -> bool:
    return _is_number(value) and 0 <= value <= 1  # pyright: ignore[reportOperatorIssue]


def _required(entity: IRModel, *fields: str) -> list[str]:
    return [f"{field} is required" for field in fields if getattr(entity, field) is None]


# --- Experiment and references ---


def _check_experiment(exp: Experiment) -> list[str]:
    problems: list[str] = []

    if exp.id is None or exp.id == "":
        problems.append("id must be non-empty atom")

    if exp.backend is None:
        problems.append("backend is required")
    else:
        problems.extend(_nested("backend.", exp.backend))

    pipeline = exp.pipeline
    if not isinstance(pipeline, list):
        problems.append("pipeline must be a list")
    elif not pipeline:
        problems.append("pipeline must contain at least one stage")
    else:
        for stage in pipeline:
            if isinstance(stage, StageDef):
                problems.extend(_nested("pipeline stage ", stage))
            else:
                problems.append("pipeline stage must be a StageDef")

    # Reliability messages already carry their own field prefix.
    if exp.reliability is not None:
        problems.extend(_check(exp.reliability))

    for field in ("dataset", "model_version", "training_config", "baseline"):
        nested = getattr(exp, field)
        if nested is not None:
            problems.extend(_nested(f"{field}.", nested))

    for output in exp.outputs or []:
        problems.extend(_nested("outputs.", output))

    return problems


def _check_backend_ref(backend: BackendRef) -> list[str]:
    problems: list[str] = []
    if backend.id is None:
        problems.append("id must be a non-nil atom")
    if backend.fallback is not None:
        problems.extend(_nested("fallback.", backend.fallback))
    return problems


def _check_stage_def(stage: StageDef) -> list[str]:
    if stage.name is None:
        return ["name must be a non-nil atom"]
    return []


def _check_dataset_ref(dataset: DatasetRef) -> list[str]:
    # A missing name is allowed; an empty string is not.
    if dataset.name == "":
        return ["name must be non-empty when set"]
    return []


def _check_output_spec(output: OutputSpec) -> list[str]:
    if output.name is None:
        return ["name must be a non-nil atom"]
    return []


# --- Reliability ---


def _check_reliability_config(config: ReliabilityConfig) -> list[str]:
    problems: list[str] = []
    for field in ("ensemble", "hedging", "stats", "fairness", "guardrails", "feedback"):
        nested = getattr(config, field)
        if nested is not None:
            problems.extend(_nested(f"{field}.", nested))
    return problems


def _check_ensemble(ensemble: Ensemble) -> list[str]:
    problems: list[str] = []
    if ensemble.strategy not in tuple(EnsembleStrategy):
        problems.append(_one_of("strategy", EnsembleStrategy))
    if ensemble.execution_mode not in tuple(ExecutionMode):
        problems.append(_one_of("execution_mode", ExecutionMode))
    return problems


def _check_hedging(hedging: Hedging) -> list[str]:
    if hedging.strategy not in ACCEPTED_HEDGING_STRATEGIES:
        return [_one_of("strategy", ACCEPTED_HEDGING_STRATEGIES)]
    return []


def _check_stats(stats: Stats) -> list[str]:
    if stats.alpha is not None and not _within_unit_interval(stats.alpha):
        return ["alpha must be between 0 and 1"]
    return []


def _no_constraints(_entity: IRModel) -> list[str]:
    return []


# --- Model registry, training, deployment, feedback ---


def _check_model_ref(model: ModelRef) -> list[str]:
    return _required(model, "id")


def _check_model_version(version: ModelVersion) -> list[str]:
    problems = _required(version, "id", "model_id", "version")
    if version.version == "":
        problems.append("version must be non-empty")
    elif version.version is not None and (
        not isinstance(version.version, str)
        or SEMVER_PREFIX.match(version.version) is None
    ):
        problems.append("version must follow semantic versioning (e.g. 1.0.0)")
    return problems


def _check_training_config(config: TrainingConfig) -> list[str]:
    problems = _required(config, "id", "model_ref", "dataset_ref")
    for field in ("model_ref", "dataset_ref"):
        nested = getattr(config, field)
        if nested is not None:
            problems.extend(_nested(f"{field}.", nested))
    if config.epochs is not None and not (_is_int(config.epochs) and config.epochs >= 1):
        problems.append("epochs must be at least 1")
    if config.batch_size is not None and not (
        _is_int(config.batch_size) and config.batch_size >= 1
    ):
        problems.append("batch_size must be at least 1")
    if config.learning_rate is not None and not (
        _is_number(config.learning_rate) and config.learning_rate > 0
    ):
        problems.append("learning_rate must be positive")
    return problems


def _check_training_run(run: TrainingRun) -> list[str]:
    problems = _required(run, "id", "config")
    if run.config is not None:
        problems.extend(_nested("config.", run.config))
    if run.status not in tuple(TrainingStatus):
        problems.append(_one_of("status", TrainingStatus))
    return problems


def _check_deployment_config(config: DeploymentConfig) -> list[str]:
    problems = _required(config, "id", "model_version_id")
    if config.replicas is not None and not (_is_int(config.replicas) and config.replicas >= 1):
        problems.append("replicas must be at least 1")
    return problems


def _check_deployment_status(status: DeploymentStatus) -> list[str]:
    problems = _required(status, "id", "deployment_id")
    if status.state not in tuple(DeploymentState):
        problems.append(_one_of("state", DeploymentState))
    return problems


def _check_feedback_event(event: FeedbackEvent) -> list[str]:
    if not isinstance(event.id, str) or event.id == "":
        return ["id must be a non-empty string"]
    return []


def _check_feedback_config(config: FeedbackConfig) -> list[str]:
    if config.sampling_rate is not None and not _within_unit_interval(config.sampling_rate):
        return ["sampling_rate must be between 0 and 1"]
    return []


# --- Backend IR ---


def _check_prompt(prompt: Prompt) -> list[str]:
    problems: list[str] = []

    if not isinstance(prompt.messages, list):
        problems.append("messages must be a list")
    else:
        for index, message in enumerate(prompt.messages):
            problems.extend(_message_problems(f"messages[{index}]", message))

    if prompt.tool_choice is not None and not _is_tool_choice(prompt.tool_choice):
        problems.append(TOOL_CHOICE_MESSAGE)

    if prompt.options is not None:
        problems.extend(_nested("options.", prompt.options))

    return problems


def _message_problems(path: str, message: object) -> list[str]:
    if not isinstance(message, dict):
        return [f"{path} must be a map"]

    problems: list[str] = []
    role = message.get("role")
    if role is None:
        problems.append(f"{path}.role is required")
    elif role not in tuple(Role):
        problems.append(_one_of(f"{path}.role", Role))

    content = message.get("content")
    if isinstance(content, list):
        for index, part in enumerate(content):
            problems.extend(_content_part_problems(f"{path}.content[{index}]", part))
    elif not isinstance(content, str):
        problems.append(f"{path}.content must be a string or a list of content parts")

    return problems


def _content_part_problems(path: str, part: object) -> list[str]:
    if not isinstance(part, dict):
        return [f"{path} must be a map"]
    part_type = part.get("type")
    if part_type is None:
        return [f"{path}.type is required"]
    if part_type not in tuple(ContentPartType):
        return [_one_of(f"{path}.type", ContentPartType)]
    return []


def _is_tool_choice(value: object) -> bool:
    if isinstance(value, dict):
        return isinstance(value.get("name"), str)
    return value in tuple(ToolChoiceMode)


def _check_backend_options(options: BackendOptions) -> list[str]:
    problems: list[str] = []

    if options.response_format is not None and options.response_format not in tuple(
        ResponseFormat
    ):
        problems.append(_one_of("response_format", ResponseFormat))

    if options.cache_control is not None and options.cache_control not in tuple(CacheControl):
        problems.append(_one_of("cache_control", CacheControl))

    for field in NON_NEGATIVE_INT_OPTIONS:
        value = getattr(options, field)
        if value is not None and not (_is_int(value) and value >= 0):
            problems.append(f"{field} must be a non-negative integer")

    stop = options.stop
    if stop is not None and not (
        isinstance(stop, list) and all(isinstance(item, str) for item in stop)
    ):
        problems.append("stop must be a list of strings")

    if options.response_format == ResponseFormat.JSON_SCHEMA and options.json_schema is None:
        problems.append("json_schema is required when response_format is json_schema")

    return problems


def _check_completion(completion: Completion) -> list[str]:
    if not isinstance(completion.choices, list):
        return ["choices must be a list"]

    problems: list[str] = []
    for index, choice in enumerate(completion.choices):
        path = f"choices[{index}]"
        if not isinstance(choice, dict):
            problems.append(f"{path} must be a map")
            continue
        finish_reason = choice.get("finish_reason")
        if finish_reason is not None and finish_reason not in tuple(FinishReason):
            problems.append(_one_of(f"{path}.finish_reason", FinishReason))
    return problems


def _check_capabilities(capabilities: Capabilities) -> list[str]:
    problems = _required(capabilities, "backend_id", "provider")
    for field in type(capabilities).model_fields:
        if not field.startswith("supports_"):
            continue
        value = getattr(capabilities, field)
        if value is not None and not isinstance(value, bool):
            problems.append(f"{field} must be a boolean")
    return problems


_CHECKERS: dict[type, Checker] = {
    Experiment: _check_experiment,
    BackendRef: _check_backend_ref,
    StageDef: _check_stage_def,
    DatasetRef: _check_dataset_ref,
    OutputSpec: _check_output_spec,
    ReliabilityConfig: _check_reliability_config,
    Ensemble: _check_ensemble,
    Hedging: _check_hedging,
    Stats: _check_stats,
    Fairness: _no_constraints,
    Guardrail: _no_constraints,
    ModelRef: _check_model_ref,
    ModelVersion: _check_model_version,
    TrainingConfig: _check_training_config,
    TrainingRun: _check_training_run,
    DeploymentConfig: _check_deployment_config,
    DeploymentStatus: _check_deployment_status,
    FeedbackEvent: _check_feedback_event,
    FeedbackConfig: _check_feedback_config,
    Prompt: _check_prompt,
    BackendOptions: _check_backend_options,
    Completion: _check_completion,
    Capabilities: _check_capabilities,
}

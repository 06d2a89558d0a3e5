# Copyright (c) Syntropy Systems
"""Typed IR entities."""

from .backend import (
    BackendOptions,
    CacheControl,
    Capabilities,
    Completion,
    ContentPartType,
    FinishReason,
    Prompt,
    ResponseFormat,
    Role,
    ToolChoiceMode,
)
from .base import IRModel, JSONObject, JSONValue, Vocabulary
from .deployment import (
    DeploymentConfig,
    DeploymentState,
    DeploymentStatus,
    DeploymentStrategy,
    Environment,
    Health,
)
from .experiment import Experiment, ExperimentType, new_experiment
from .feedback import FeedbackConfig, FeedbackEvent, FeedbackStorage, FeedbackType
from .refs import (
    BackendRef,
    DatasetProvider,
    DatasetRef,
    DatasetSplit,
    OutputFormat,
    OutputSink,
    OutputSpec,
    StageDef,
)
from .registry import (
    Architecture,
    Framework,
    ModelProvider,
    ModelRef,
    ModelStage,
    ModelVersion,
    Task,
)
from .reliability import (
    Correction,
    EffectSize,
    Ensemble,
    EnsembleStrategy,
    ExecutionMode,
    Fairness,
    FairnessMetric,
    Guardrail,
    GuardrailProfile,
    Hedging,
    HedgingStrategy,
    ReliabilityConfig,
    StatTest,
    Stats,
)
from .training import (
    Device,
    LossFunction,
    Optimizer,
    TrainingConfig,
    TrainingRun,
    TrainingStatus,
)

__all__ = [
    "Architecture",
    "BackendOptions",
    "BackendRef",
    "CacheControl",
    "Capabilities",
    "Completion",
    "ContentPartType",
    "Correction",
    "DatasetProvider",
    "DatasetRef",
    "DatasetSplit",
    "DeploymentConfig",
    "DeploymentState",
    "DeploymentStatus",
    "DeploymentStrategy",
    "Device",
    "EffectSize",
    "Ensemble",
    "EnsembleStrategy",
    "Environment",
    "ExecutionMode",
    "Experiment",
    "ExperimentType",
    "Fairness",
    "FairnessMetric",
    "FeedbackConfig",
    "FeedbackEvent",
    "FeedbackStorage",
    "FeedbackType",
    "FinishReason",
    "Framework",
    "Guardrail",
    "GuardrailProfile",
    "Health",
    "Hedging",
    "HedgingStrategy",
    "IRModel",
    "JSONObject",
    "JSONValue",
    "LossFunction",
    "ModelProvider",
    "ModelRef",
    "ModelStage",
    "ModelVersion",
    "Optimizer",
    "OutputFormat",
    "OutputSink",
    "OutputSpec",
    "Prompt",
    "ReliabilityConfig",
    "ResponseFormat",
    "Role",
    "StageDef",
    "StatTest",
    "Stats",
    "Task",
    "ToolChoiceMode",
    "TrainingConfig",
    "TrainingRun",
    "TrainingStatus",
    "Vocabulary",
    "new_experiment",
]

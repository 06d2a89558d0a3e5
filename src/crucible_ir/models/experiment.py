# Copyright (c) Syntropy Systems
"""Top-level experiment definition."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import SkipValidation, field_validator

from .base import IRModel, JSONObject, Vocabulary
from .refs import BackendRef, DatasetRef, OutputSpec, StageDef
from .registry import ModelRef, ModelVersion
from .reliability import ReliabilityConfig
from .training import TrainingConfig


class ExperimentType(Vocabulary):
    """Known experiment kinds (open)."""

    EVALUATION = "evaluation"
    TRAINING = "training"
    COMPARISON = "comparison"
    ABLATION = "ablation"


class Experiment(IRModel):
    """Top-level experiment specification.

    Required: ``id``, ``backend`` and a non-empty ``pipeline``. Construction
    only checks that the required fields were passed; use
    :func:`crucible_ir.validation.validate` for everything else.
    """

    id: Optional[str]
    backend: Optional[BackendRef]
    pipeline: SkipValidation[list[StageDef]]
    description: Optional[str] = None
    owner: Optional[str] = None
    tags: Optional[list[str]] = None
    metadata: Optional[JSONObject] = None
    dataset: Optional[DatasetRef] = None
    reliability: Optional[ReliabilityConfig] = None
    outputs: Optional[list[OutputSpec]] = None
    created_at: Union[datetime, str, None] = None
    updated_at: Union[datetime, str, None] = None
    experiment_type: Union[ExperimentType, str, None] = None
    model_version: Optional[ModelVersion] = None
    training_config: Optional[TrainingConfig] = None
    baseline: Optional[ModelRef] = None

    @field_validator("pipeline", mode="before")
    @classmethod
    def _build_stages(cls, value: object) -> object:
        # Non-list pipelines are kept as given and reported by validation.
        if not isinstance(value, list):
            return value
        return [
            StageDef.model_validate(stage) if isinstance(stage, dict) else stage
            for stage in value
        ]


def new_experiment(**fields: object) -> Experiment:
    """Construct an Experiment from keyword fields without validating it."""
    return Experiment(**fields)  # pyright: ignore[reportArgumentType]

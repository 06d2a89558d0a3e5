# Copyright (c) Syntropy Systems
"""Model registry references and immutable model versions."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from .base import IRModel, JSONObject, Vocabulary


class ModelProvider(Vocabulary):
    """Known model sources (open)."""

    LOCAL = "local"
    HUGGINGFACE = "huggingface"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    S3 = "s3"
    GCS = "gcs"


class Framework(Vocabulary):
    """Known model frameworks and weight formats (open)."""

    NX = "nx"
    PYTORCH = "pytorch"
    TENSORFLOW = "tensorflow"
    ONNX = "onnx"
    SAFETENSORS = "safetensors"


class Architecture(Vocabulary):
    """Known model architectures (open)."""

    TRANSFORMER = "transformer"
    LSTM = "lstm"
    CNN = "cnn"
    MLP = "mlp"


class Task(Vocabulary):
    """Known model tasks (open)."""

    TEXT_CLASSIFICATION = "text_classification"
    TEXT_GENERATION = "text_generation"
    EMBEDDING = "embedding"
    QA = "qa"
    SUMMARIZATION = "summarization"


class ModelStage(Vocabulary):
    """Promotion stage of a model version (open)."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    ARCHIVED = "archived"


class ModelRef(IRModel):
    """Pointer to a model in a registry."""

    id: Optional[str]
    name: Optional[str] = None
    version: Optional[str] = None
    provider: Union[ModelProvider, str, None] = ModelProvider.LOCAL
    framework: Union[Framework, str, None] = Framework.NX
    architecture: Union[Architecture, str, None] = None
    task: Union[Task, str, None] = None
    artifact_uri: Optional[str] = None
    metadata: Optional[JSONObject] = None
    options: Optional[JSONObject] = None


class ModelVersion(IRModel):
    """Immutable snapshot of a model, identified by a semantic version."""

    id: Optional[str]
    model_id: Optional[str]
    version: Optional[str]
    stage: Union[ModelStage, str, None] = ModelStage.DEVELOPMENT
    training_run_id: Optional[str] = None
    metrics: Optional[JSONObject] = None
    artifact_uri: Optional[str] = None
    parent_version: Optional[str] = None
    description: Optional[str] = None
    created_at: Union[datetime, str, None] = None
    created_by: Optional[str] = None
    options: Optional[JSONObject] = None

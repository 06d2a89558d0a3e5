# Copyright (c) Syntropy Systems
"""Training configuration and training run records."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import Field

from .base import IRModel, JSONObject, Vocabulary
from .refs import DatasetRef
from .registry import ModelRef


class Optimizer(Vocabulary):
    """Known optimizers (open)."""

    ADAM = "adam"
    SGD = "sgd"
    ADAMW = "adamw"
    RMSPROP = "rmsprop"


class LossFunction(Vocabulary):
    """Known loss functions (open)."""

    CROSS_ENTROPY = "cross_entropy"
    MSE = "mse"
    MAE = "mae"
    BCE = "bce"


class Device(Vocabulary):
    """Known training devices (open)."""

    CPU = "cpu"
    CUDA = "cuda"
    MPS = "mps"
    TPU = "tpu"


class TrainingStatus(Vocabulary):
    """Lifecycle of a training run (closed)."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class TrainingConfig(IRModel):
    """Hyperparameters and inputs for a training job."""

    id: Optional[str]
    model_ref: Optional[ModelRef]
    dataset_ref: Optional[DatasetRef]
    epochs: Optional[int] = 1
    batch_size: Optional[int] = 32
    learning_rate: Optional[float] = 0.001
    optimizer: Union[Optimizer, str, None] = Optimizer.ADAM
    loss_function: Union[LossFunction, str, None] = LossFunction.CROSS_ENTROPY
    metrics: Optional[list[str]] = Field(default_factory=lambda: ["loss", "accuracy"])
    validation_split: Optional[float] = None
    device: Union[Device, str, None] = Device.CPU
    seed: Optional[int] = None
    mixed_precision: Optional[bool] = False
    gradient_clipping: Optional[float] = None
    early_stopping: Optional[JSONObject] = None
    checkpoint_every: Optional[int] = None
    options: Optional[JSONObject] = None


class TrainingRun(IRModel):
    """Record of one execution of a training config."""

    id: Optional[str]
    config: Optional[TrainingConfig]
    status: Union[TrainingStatus, str, None] = TrainingStatus.PENDING
    current_epoch: Optional[int] = None
    metrics_history: Optional[list[JSONObject]] = None
    best_metrics: Optional[JSONObject] = None
    checkpoint_uris: Optional[list[str]] = None
    final_model_version: Optional[str] = None
    started_at: Union[datetime, str, None] = None
    completed_at: Union[datetime, str, None] = None
    error_message: Optional[str] = None
    options: Optional[JSONObject] = None

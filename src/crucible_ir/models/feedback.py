# Copyright (c) Syntropy Systems
"""Feedback collected from deployed models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import Field

from .base import IRModel, JSONObject, JSONValue, Vocabulary


class FeedbackType(Vocabulary):
    """Known kinds of feedback (open)."""

    THUMBS = "thumbs"
    RATING = "rating"
    CORRECTION = "correction"
    LABEL = "label"
    FLAG = "flag"


class FeedbackStorage(Vocabulary):
    """Known feedback stores (open)."""

    POSTGRES = "postgres"
    S3 = "s3"
    BIGQUERY = "bigquery"
    LOCAL = "local"


class FeedbackEvent(IRModel):
    """A single feedback data point for one model response."""

    id: Optional[JSONValue]
    deployment_id: Optional[str] = None
    model_version: Optional[str] = None
    input: Optional[JSONObject] = None
    output: Optional[JSONObject] = None
    feedback_type: Union[FeedbackType, str, None] = FeedbackType.THUMBS
    feedback_value: JSONValue = None
    user_id: Optional[str] = None
    session_id: Optional[str] = None
    latency_ms: Optional[int] = None
    timestamp: Union[datetime, str, None] = None
    metadata: Optional[JSONObject] = None


class FeedbackConfig(IRModel):
    """Feedback collection policy for a deployment."""

    enabled: Optional[bool] = False
    sampling_rate: Optional[float] = 1.0
    feedback_types: Optional[list[Union[FeedbackType, str]]] = Field(
        default_factory=lambda: [FeedbackType.THUMBS, FeedbackType.CORRECTION]
    )
    storage: Union[FeedbackStorage, str, None] = FeedbackStorage.POSTGRES
    retention_days: Optional[int] = None
    anonymize_pii: Optional[bool] = True
    drift_detection: Optional[JSONObject] = None
    retraining_trigger: Optional[JSONObject] = None
    options: Optional[JSONObject] = None

# Copyright (c) Syntropy Systems
"""Deployment specification and live deployment status."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from .base import IRModel, JSONObject, Vocabulary


class Environment(Vocabulary):
    """Known deployment environments (open)."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class DeploymentStrategy(Vocabulary):
    """Known rollout strategies (open)."""

    ROLLING = "rolling"
    BLUE_GREEN = "blue_green"
    CANARY = "canary"
    RECREATE = "recreate"


class DeploymentState(Vocabulary):
    """Lifecycle of a deployment (closed)."""

    PENDING = "pending"
    DEPLOYING = "deploying"
    ACTIVE = "active"
    DEGRADED = "degraded"
    FAILED = "failed"
    TERMINATED = "terminated"


class Health(Vocabulary):
    """Health check outcome (open)."""

    UNKNOWN = "unknown"
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


class DeploymentConfig(IRModel):
    """How a model version is served."""

    id: Optional[str]
    model_version_id: Optional[str]
    target: Optional[JSONObject] = None
    replicas: Optional[int] = 1
    resources: Optional[JSONObject] = None
    scaling: Optional[JSONObject] = None
    environment: Union[Environment, str, None] = Environment.DEVELOPMENT
    strategy: Union[DeploymentStrategy, str, None] = DeploymentStrategy.ROLLING
    health_check: Optional[JSONObject] = None
    endpoint: Optional[JSONObject] = None
    metadata: Optional[JSONObject] = None
    options: Optional[JSONObject] = None


class DeploymentStatus(IRModel):
    """Observed state of a running deployment."""

    id: Optional[str]
    deployment_id: Optional[str]
    state: Union[DeploymentState, str, None] = DeploymentState.PENDING
    ready_replicas: Optional[int] = None
    total_replicas: Optional[int] = None
    endpoint_url: Optional[str] = None
    traffic_percent: Optional[float] = None
    health: Union[Health, str, None] = Health.UNKNOWN
    last_health_check: Union[datetime, str, None] = None
    error_message: Optional[str] = None
    created_at: Union[datetime, str, None] = None
    updated_at: Union[datetime, str, None] = None

# Copyright (c) Syntropy Systems
"""Reliability mechanisms: ensembles, hedging, statistics, fairness and guardrails."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import Field

from .base import IRModel, JSONObject, Vocabulary
from .feedback import FeedbackConfig


class EnsembleStrategy(Vocabulary):
    """How ensemble votes are combined (closed)."""

    NONE = "none"
    MAJORITY = "majority"
    WEIGHTED = "weighted"
    BEST_CONFIDENCE = "best_confidence"
    UNANIMOUS = "unanimous"


class ExecutionMode(Vocabulary):
    """How ensemble members are called (closed)."""

    PARALLEL = "parallel"
    SEQUENTIAL = "sequential"
    HEDGED = "hedged"
    CASCADE = "cascade"


class HedgingStrategy(Vocabulary):
    """When a hedged request is sent.

    ``EXPONENTIAL_BACKOFF`` is recognized on the wire but not yet accepted
    by validation.
    """

    OFF = "off"
    FIXED = "fixed"
    PERCENTILE = "percentile"
    ADAPTIVE = "adaptive"
    WORKLOAD_AWARE = "workload_aware"
    EXPONENTIAL_BACKOFF = "exponential_backoff"


class StatTest(Vocabulary):
    """Known statistical tests (open)."""

    TTEST = "ttest"
    BOOTSTRAP = "bootstrap"
    ANOVA = "anova"
    MANNWHITNEY = "mannwhitney"
    WILCOXON = "wilcoxon"
    KRUSKAL = "kruskal"


class EffectSize(Vocabulary):
    """Known effect size measures (open)."""

    COHENS_D = "cohens_d"
    ETA_SQUARED = "eta_squared"
    OMEGA_SQUARED = "omega_squared"


class Correction(Vocabulary):
    """Known multiple-testing corrections (open)."""

    BONFERRONI = "bonferroni"
    HOLM = "holm"
    FDR = "fdr"


class FairnessMetric(Vocabulary):
    """Known fairness metrics (open)."""

    DEMOGRAPHIC_PARITY = "demographic_parity"
    EQUALIZED_ODDS = "equalized_odds"
    EQUAL_OPPORTUNITY = "equal_opportunity"
    PREDICTIVE_PARITY = "predictive_parity"


class GuardrailProfile(Vocabulary):
    """Known guardrail profiles (open)."""

    DEFAULT = "default"
    STRICT = "strict"
    MODERATE = "moderate"
    PERMISSIVE = "permissive"


class Ensemble(IRModel):
    """Multi-model voting configuration."""

    strategy: Union[EnsembleStrategy, str, None] = EnsembleStrategy.NONE
    execution_mode: Union[ExecutionMode, str, None] = ExecutionMode.PARALLEL
    models: Optional[list[str]] = None
    weights: Optional[dict[str, float]] = None
    min_agreement: Optional[float] = None
    timeout_ms: Optional[int] = None
    options: Optional[JSONObject] = None


class Hedging(IRModel):
    """Tail-latency mitigation by sending backup requests."""

    strategy: Union[HedgingStrategy, str, None] = HedgingStrategy.OFF
    delay_ms: Optional[int] = None
    percentile: Optional[float] = None
    max_hedges: Optional[int] = None
    budget_percent: Optional[float] = None
    options: Optional[JSONObject] = None


class Stats(IRModel):
    """Statistical testing applied to experiment results."""

    tests: Optional[list[Union[StatTest, str]]] = Field(
        default_factory=lambda: [StatTest.TTEST, StatTest.BOOTSTRAP]
    )
    alpha: Optional[float] = 0.05
    confidence_level: Optional[float] = None
    effect_size_type: Union[EffectSize, str, None] = None
    multiple_testing_correction: Union[Correction, str, None] = None
    bootstrap_iterations: Optional[int] = None
    options: Optional[JSONObject] = None


class Fairness(IRModel):
    """Bias checks across population groups."""

    enabled: Optional[bool] = False
    metrics: Optional[list[Union[FairnessMetric, str]]] = None
    group_by: Optional[str] = None
    threshold: Optional[float] = None
    fail_on_violation: Optional[bool] = None
    options: Optional[JSONObject] = None


class Guardrail(IRModel):
    """Safety checks applied to prompts and completions."""

    profiles: Optional[list[Union[GuardrailProfile, str]]] = Field(
        default_factory=lambda: [GuardrailProfile.DEFAULT]
    )
    prompt_injection_detection: Optional[bool] = None
    jailbreak_detection: Optional[bool] = None
    pii_detection: Optional[bool] = None
    pii_redaction: Optional[bool] = None
    content_moderation: Optional[bool] = None
    fail_on_detection: Optional[bool] = None
    options: Optional[JSONObject] = None


class ReliabilityConfig(IRModel):
    """All reliability mechanisms attached to an experiment.

    ``monitoring``, ``drift`` and ``circuit_breaker`` are opaque settings
    owned by the execution side.
    """

    ensemble: Optional[Ensemble] = None
    hedging: Optional[Hedging] = None
    guardrails: Optional[Guardrail] = None
    stats: Optional[Stats] = None
    fairness: Optional[Fairness] = None
    monitoring: Optional[JSONObject] = None
    drift: Optional[JSONObject] = None
    circuit_breaker: Optional[JSONObject] = None
    feedback: Optional[FeedbackConfig] = None

# Copyright (c) Syntropy Systems
"""Step-by-step construction of an Experiment.

Each function takes an Experiment and returns a new one; nothing is
mutated. Finish with :func:`build`, which validates the result::

    result = build(
        add_stage(with_backend(experiment("smoke"), "gpt4"), "run")
    )
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional, Union

from crucible_ir.models import (
    BackendRef,
    DatasetProvider,
    DatasetRef,
    DatasetSplit,
    Ensemble,
    EnsembleStrategy,
    ExecutionMode,
    Experiment,
    Fairness,
    FairnessMetric,
    Guardrail,
    GuardrailProfile,
    Hedging,
    HedgingStrategy,
    JSONObject,
    JSONValue,
    OutputFormat,
    OutputSink,
    OutputSpec,
    ReliabilityConfig,
    StageDef,
    Stats,
    StatTest,
)
from crucible_ir.result import Result
from crucible_ir.validation import validate


def experiment(id: str) -> Experiment:
    """Start an experiment with no backend and an empty pipeline."""
    return Experiment(id=id, backend=None, pipeline=[])


def with_description(exp: Experiment, description: str) -> Experiment:
    return exp.model_copy(update={"description": description})


def with_owner(exp: Experiment, owner: str) -> Experiment:
    return exp.model_copy(update={"owner": owner})


def with_tags(exp: Experiment, tags: Sequence[str]) -> Experiment:
    return exp.model_copy(update={"tags": list(tags)})


def with_backend(
    exp: Experiment,
    backend_id: str,
    *,
    profile: str = "default",
    options: Optional[JSONObject] = None,
    fallback: Optional[BackendRef] = None,
) -> Experiment:
    """Set the backend the experiment calls."""
    backend = BackendRef(
        id=backend_id, profile=profile, options=options, fallback=fallback
    )
    return exp.model_copy(update={"backend": backend})


def add_stage(
    exp: Experiment,
    name: str,
    *,
    module: Optional[str] = None,
    options: Optional[JSONObject] = None,
    enabled: bool = True,
) -> Experiment:
    """Append a stage to the end of the pipeline."""
    stage = StageDef(name=name, module=module, options=options, enabled=enabled)
    pipeline = list(exp.pipeline) if isinstance(exp.pipeline, list) else []
    return exp.model_copy(update={"pipeline": [*pipeline, stage]})


def with_dataset(
    exp: Experiment,
    name: JSONValue,
    *,
    provider: Union[DatasetProvider, str] = DatasetProvider.CRUCIBLE_DATASETS,
    split: Union[DatasetSplit, str] = DatasetSplit.TRAIN,
    options: Optional[JSONObject] = None,
) -> Experiment:
    """Set the dataset. ``name`` may be a registry id or a display name."""
    dataset = DatasetRef(name=name, provider=provider, split=split, options=options)
    return exp.model_copy(update={"dataset": dataset})


def _with_reliability(exp: Experiment, **update: object) -> Experiment:
    reliability = exp.reliability or ReliabilityConfig()
    return exp.model_copy(update={"reliability": reliability.model_copy(update=update)})


def with_ensemble(
    exp: Experiment,
    strategy: Union[EnsembleStrategy, str],
    *,
    execution_mode: Union[ExecutionMode, str] = ExecutionMode.PARALLEL,
    models: Optional[Sequence[str]] = None,
    weights: Optional[dict[str, float]] = None,
    min_agreement: Optional[float] = None,
    timeout_ms: Optional[int] = None,
    options: Optional[JSONObject] = None,
) -> Experiment:
    """Configure multi-model voting."""
    ensemble = Ensemble(
        strategy=strategy,
        execution_mode=execution_mode,
        models=list(models) if models is not None else None,
        weights=weights,
        min_agreement=min_agreement,
        timeout_ms=timeout_ms,
        options=options,
    )
    return _with_reliability(exp, ensemble=ensemble)


def with_hedging(
    exp: Experiment,
    strategy: Union[HedgingStrategy, str],
    *,
    delay_ms: Optional[int] = None,
    percentile: Optional[float] = None,
    max_hedges: Optional[int] = None,
    budget_percent: Optional[float] = None,
    options: Optional[JSONObject] = None,
) -> Experiment:
    """Configure request hedging."""
    hedging = Hedging(
        strategy=strategy,
        delay_ms=delay_ms,
        percentile=percentile,
        max_hedges=max_hedges,
        budget_percent=budget_percent,
        options=options,
    )
    return _with_reliability(exp, hedging=hedging)


def with_stats(
    exp: Experiment,
    tests: Sequence[Union[StatTest, str]],
    *,
    alpha: Optional[float] = 0.05,
    confidence_level: Optional[float] = None,
    effect_size_type: Optional[str] = None,
    multiple_testing_correction: Optional[str] = None,
    bootstrap_iterations: Optional[int] = None,
    options: Optional[JSONObject] = None,
) -> Experiment:
    """Configure statistical testing of results."""
    stats = Stats(
        tests=list(tests),
        alpha=alpha,
        confidence_level=confidence_level,
        effect_size_type=effect_size_type,
        multiple_testing_correction=multiple_testing_correction,
        bootstrap_iterations=bootstrap_iterations,
        options=options,
    )
    return _with_reliability(exp, stats=stats)


def with_fairness(
    exp: Experiment,
    *,
    enabled: bool = True,
    metrics: Optional[Sequence[Union[FairnessMetric, str]]] = None,
    group_by: Optional[str] = None,
    threshold: Optional[float] = None,
    fail_on_violation: Optional[bool] = None,
    options: Optional[JSONObject] = None,
) -> Experiment:
    """Configure fairness checks. Enabled unless ``enabled=False`` is given."""
    fairness = Fairness(
        enabled=enabled,
        metrics=list(metrics) if metrics is not None else None,
        group_by=group_by,
        threshold=threshold,
        fail_on_violation=fail_on_violation,
        options=options,
    )
    return _with_reliability(exp, fairness=fairness)


def with_guardrails(
    exp: Experiment,
    *,
    profiles: Sequence[Union[GuardrailProfile, str]] = (GuardrailProfile.DEFAULT,),
    prompt_injection_detection: Optional[bool] = None,
    jailbreak_detection: Optional[bool] = None,
    pii_detection: Optional[bool] = None,
    pii_redaction: Optional[bool] = None,
    content_moderation: Optional[bool] = None,
    fail_on_detection: Optional[bool] = None,
    options: Optional[JSONObject] = None,
) -> Experiment:
    """Configure safety guardrails."""
    guardrail = Guardrail(
        profiles=list(profiles),
        prompt_injection_detection=prompt_injection_detection,
        jailbreak_detection=jailbreak_detection,
        pii_detection=pii_detection,
        pii_redaction=pii_redaction,
        content_moderation=content_moderation,
        fail_on_detection=fail_on_detection,
        options=options,
    )
    return _with_reliability(exp, guardrails=guardrail)


def add_output(
    exp: Experiment,
    name: str,
    *,
    formats: Sequence[Union[OutputFormat, str]] = (OutputFormat.MARKDOWN,),
    sink: Union[OutputSink, str] = OutputSink.FILE,
    options: Optional[JSONObject] = None,
) -> Experiment:
    """Append an output specification."""
    output = OutputSpec(name=name, formats=list(formats), sink=sink, options=options)
    return exp.model_copy(update={"outputs": [*(exp.outputs or []), output]})


def build(exp: Experiment) -> Result[Experiment, list[str]]:
    """Validate the assembled experiment."""
    return validate(exp)

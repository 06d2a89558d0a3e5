# Copyright (c) Syntropy Systems
"""Tests for the experiment builder."""

from crucible_ir import builder
from crucible_ir.models import (
    BackendRef,
    DatasetProvider,
    DatasetSplit,
    EnsembleStrategy,
    ExecutionMode,
    Experiment,
    GuardrailProfile,
    HedgingStrategy,
    OutputFormat,
    OutputSink,
    StageDef,
    StatTest,
)
from crucible_ir.result import Err, Ok


def _runnable(exp_id: str = "test") -> Experiment:
    return builder.add_stage(builder.with_backend(builder.experiment(exp_id), "gpt4"), "run")


class TestExperiment:
    """Starting and describing an experiment."""

    def test_new_experiment_is_empty(self):
        exp = builder.experiment("test_exp")
        assert exp.id == "test_exp"
        assert exp.backend is None
        assert exp.pipeline == []

    def test_description_owner_tags(self):
        exp = builder.experiment("test")
        exp = builder.with_description(exp, "Test experiment")
        exp = builder.with_owner(exp, "research")
        exp = builder.with_tags(exp, ("nightly", "ensemble"))
        assert exp.description == "Test experiment"
        assert exp.owner == "research"
        assert exp.tags == ["nightly", "ensemble"]

    def test_steps_do_not_mutate(self):
        base = builder.experiment("test")
        _ = builder.with_description(base, "changed")
        assert base.description is None


class TestBackendAndStages:
    """Backend and pipeline steps."""

    def test_backend_defaults(self):
        exp = builder.with_backend(builder.experiment("test"), "gpt4")
        assert exp.backend == BackendRef(id="gpt4")
        assert exp.backend.profile == "default"

    def test_backend_options(self):
        exp = builder.with_backend(
            builder.experiment("test"),
            "gpt4",
            profile="fast",
            options={"temperature": 0.7},
            fallback=BackendRef(id="claude"),
        )
        assert exp.backend.profile == "fast"
        assert exp.backend.options == {"temperature": 0.7}
        assert exp.backend.fallback == BackendRef(id="claude")

    def test_stages_append_in_order(self):
        exp = builder.experiment("test")
        exp = builder.add_stage(exp, "preprocessing")
        exp = builder.add_stage(exp, "inference", enabled=False, options={"normalize": True})
        assert [stage.name for stage in exp.pipeline] == ["preprocessing", "inference"]
        assert exp.pipeline[1] == StageDef(
            name="inference", enabled=False, options={"normalize": True}
        )

    def test_dataset(self):
        exp = builder.with_dataset(builder.experiment("test"), "mmlu", split="test")
        assert exp.dataset.name == "mmlu"
        assert exp.dataset.split == DatasetSplit.TEST
        assert exp.dataset.provider == DatasetProvider.CRUCIBLE_DATASETS


class TestReliability:
    """Reliability steps share one ReliabilityConfig."""

    def test_ensemble(self):
        exp = builder.with_ensemble(
            builder.experiment("test"), "weighted", models=["gpt4", "claude"]
        )
        ensemble = exp.reliability.ensemble
        assert ensemble.strategy == EnsembleStrategy.WEIGHTED
        assert ensemble.execution_mode == ExecutionMode.PARALLEL
        assert ensemble.models == ["gpt4", "claude"]

    def test_hedging(self):
        exp = builder.with_hedging(builder.experiment("test"), "percentile", delay_ms=100)
        assert exp.reliability.hedging.strategy == HedgingStrategy.PERCENTILE
        assert exp.reliability.hedging.delay_ms == 100

    def test_stats(self):
        exp = builder.with_stats(builder.experiment("test"), ["ttest", "bootstrap"], alpha=0.01)
        assert exp.reliability.stats.tests == [StatTest.TTEST, StatTest.BOOTSTRAP]
        assert exp.reliability.stats.alpha == 0.01

    def test_fairness_enabled_by_default(self):
        exp = builder.with_fairness(
            builder.experiment("test"), metrics=["demographic_parity"], threshold=0.8
        )
        assert exp.reliability.fairness.enabled is True
        assert exp.reliability.fairness.metrics == ["demographic_parity"]
        assert exp.reliability.fairness.threshold == 0.8

    def test_guardrails(self):
        exp = builder.with_guardrails(builder.experiment("test"), pii_detection=True)
        assert exp.reliability.guardrails.profiles == [GuardrailProfile.DEFAULT]
        assert exp.reliability.guardrails.pii_detection is True

    def test_sections_accumulate(self):
        exp = builder.with_ensemble(builder.experiment("test"), "majority")
        exp = builder.with_hedging(exp, "fixed")
        exp = builder.with_stats(exp, ["ttest"])
        assert exp.reliability.ensemble.strategy == EnsembleStrategy.MAJORITY
        assert exp.reliability.hedging.strategy == HedgingStrategy.FIXED
        assert exp.reliability.stats.tests == ["ttest"]


class TestOutputs:
    """Output steps."""

    def test_add_output_defaults(self):
        exp = builder.add_output(builder.experiment("test"), "results")
        assert exp.outputs[0].name == "results"
        assert exp.outputs[0].formats == [OutputFormat.MARKDOWN]
        assert exp.outputs[0].sink == OutputSink.FILE

    def test_outputs_append(self):
        exp = builder.add_output(builder.experiment("test"), "results", formats=["json", "html"])
        exp = builder.add_output(exp, "dump", sink="stdout")
        assert [output.name for output in exp.outputs] == ["results", "dump"]
        assert exp.outputs[0].formats == ["json", "html"]


class TestBuild:
    """build validates the assembled experiment."""

    def test_build_ok(self):
        exp = _runnable()
        assert builder.build(exp) == Ok(exp)

    def test_build_without_backend_or_stages(self):
        result = builder.build(builder.experiment("test"))
        assert isinstance(result, Err)
        assert result.error == [
            "backend is required",
            "pipeline must contain at least one stage",
        ]

    def test_build_reports_reliability_errors(self):
        exp = builder.with_ensemble(_runnable(), "invalid_strategy")
        result = builder.build(exp)
        assert isinstance(result, Err)
        assert result.error == [
            "ensemble.strategy must be one of: "
            "none, majority, weighted, best_confidence, unanimous"
        ]

        fixed = builder.with_ensemble(exp, "majority")
        assert builder.build(fixed) == Ok(fixed)

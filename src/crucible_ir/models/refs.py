# Copyright (c) Syntropy Systems
"""References an experiment is assembled from: backend, stages, dataset, outputs."""

from __future__ import annotations

import re
from typing import Optional, Union

from pydantic import Field

from .base import IRModel, JSONObject, JSONValue, Vocabulary

REGISTRY_ID_PATTERN = re.compile(r"^[a-z_][a-z0-9_]*$")


class DatasetProvider(Vocabulary):
    """Known dataset providers (open: any provider name is accepted)."""

    CRUCIBLE_DATASETS = "crucible_datasets"
    HUGGINGFACE = "huggingface"


class DatasetSplit(Vocabulary):
    """Known dataset splits (open)."""

    TRAIN = "train"
    TEST = "test"
    VALIDATION = "validation"


class OutputFormat(Vocabulary):
    """Known report formats (open)."""

    MARKDOWN = "markdown"
    JSON = "json"
    HTML = "html"
    LATEX = "latex"
    CSV = "csv"


class OutputSink(Vocabulary):
    """Known result sinks (open)."""

    FILE = "file"
    STDOUT = "stdout"
    S3 = "s3"
    POSTGRES = "postgres"


class BackendRef(IRModel):
    """Reference to the LLM backend an experiment calls.

    ``fallback`` names the backend to use when this one is unavailable; it
    may itself carry a fallback, forming a finite chain.
    """

    id: Optional[str]
    profile: Optional[str] = "default"
    options: Optional[JSONObject] = None
    model_version: Optional[str] = None
    endpoint_url: Optional[str] = None
    deployment_id: Optional[str] = None
    fallback: Optional[BackendRef] = None

    def fallback_chain(self) -> list[BackendRef]:
        """Return the fallback backends in the order they would be tried."""
        chain: list[BackendRef] = []
        current = self.fallback
        while current is not None:
            chain.append(current)
            current = current.fallback
        return chain


class StageDef(IRModel):
    """One pipeline stage.

    ``module`` is the dotted path of the stage implementation; ``options`` is
    handed to it untouched.
    """

    name: Optional[str]
    module: Optional[str] = None
    options: Optional[JSONObject] = None
    enabled: Optional[bool] = True


class DatasetRef(IRModel):
    """Pointer to a dataset.

    ``name`` is either a registry identifier such as ``"mmlu"`` or a free-form
    display name such as ``"Custom Dataset 2024"``.
    """

    name: Optional[JSONValue]
    provider: Union[DatasetProvider, str, None] = DatasetProvider.CRUCIBLE_DATASETS
    split: Union[DatasetSplit, str, None] = DatasetSplit.TRAIN
    options: Optional[JSONObject] = None
    version: Optional[str] = None
    format: Optional[str] = None
    schema_: Optional[JSONObject] = Field(default=None, alias="schema")

    @property
    def is_registry_id(self) -> bool:
        """True when ``name`` is a lowercase identifier rather than a display name."""
        return (
            isinstance(self.name, str)
            and REGISTRY_ID_PATTERN.match(self.name) is not None
        )


class OutputSpec(IRModel):
    """Where and in which formats experiment results are written."""

    name: Optional[str]
    formats: Optional[list[Union[OutputFormat, str]]] = Field(
        default_factory=lambda: [OutputFormat.MARKDOWN]
    )
    sink: Union[OutputSink, str, None] = OutputSink.FILE
    options: Optional[JSONObject] = None


_ = BackendRef.model_rebuild()

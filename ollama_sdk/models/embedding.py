"""
Request and response models for ``/api/embed`` and the legacy
``/api/embeddings`` endpoint.
"""

from __future__ import annotations

import math
from typing import Any, Sequence, Union

from pydantic import BaseModel, ConfigDict

from .common import KeepAlive, Options

EmbedInput = Union[str, list[str]]


class EmbedRequest(BaseModel):
    """Body of a batch embedding request."""

    model: str = ""
    input: EmbedInput = ""
    options: Options | None = None
    keep_alive: KeepAlive | None = None
    truncate: bool | None = None

    @property
    def input_count(self) -> int:
        return 1 if isinstance(self.input, str) else len(self.input)

    def inputs_as_list(self) -> list[str]:
        return [self.input] if isinstance(self.input, str) else list(self.input)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class EmbedResponse(BaseModel):
    """Embeddings in input order, one vector per input."""

    model_config = ConfigDict(frozen=True)

    model: str
    embeddings: list[list[float]]
    total_duration: int | None = None
    load_duration: int | None = None
    prompt_eval_count: int | None = None

    @property
    def count(self) -> int:
        return len(self.embeddings)

    @property
    def dimensions(self) -> int | None:
        return len(self.embeddings[0]) if self.embeddings else None

    def get_embedding(self, index: int) -> list[float] | None:
        if 0 <= index < len(self.embeddings):
            return self.embeddings[index]
        return None

    @staticmethod
    def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float | None:
        """Cosine similarity, or None when the vectors differ in length.

        A zero vector has similarity 0.0 with anything.
        """
        if len(a) != len(b):
            return None
        dot = sum(x * y for x, y in zip(a, b))
        norm_a = math.sqrt(sum(x * x for x in a))
        norm_b = math.sqrt(sum(y * y for y in b))
        if norm_a == 0.0 or norm_b == 0.0:
            return 0.0
        return dot / (norm_a * norm_b)

    @staticmethod
    def euclidean_distance(a: Sequence[float], b: Sequence[float]) -> float | None:
        if len(a) != len(b):
            return None
        return math.sqrt(sum((x - y) ** 2 for x, y in zip(a, b)))


class LegacyEmbeddingRequest(BaseModel):
    """Body of a single-prompt ``/api/embeddings`` request."""

    model: str
    prompt: str
    options: Options | None = None
    keep_alive: KeepAlive | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class LegacyEmbeddingResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    embedding: list[float]
    model: str | None = None
    total_duration: int | None = None
    load_duration: int | None = None
    prompt_eval_count: int | None = None

"""
Model management structures: listings, details, pull/create progress and
the bodies of the management requests.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Sequence

from pydantic import BaseModel, ConfigDict

from .chat import ChatMessage

_BYTE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_bytes(size: int) -> str:
    """Human-readable size in binary units, e.g. ``4.7 GB``."""
    if size == 0:
        return "0 B"
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(_BYTE_UNITS) - 1:
        value /= 1024
        unit += 1
    if unit == 0:
        return f"{int(value)} {_BYTE_UNITS[unit]}"
    return f"{value:.1f} {_BYTE_UNITS[unit]}"


class ModelDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    family: str = ""
    format: str = ""
    parameter_size: str = ""
    quantization_level: str = ""
    families: list[str] | None = None
    parent_model: str | None = None


class Model(BaseModel):
    """A locally available model, as listed by ``/api/tags``."""

    model_config = ConfigDict(frozen=True)

    name: str
    size: int
    digest: str
    modified_at: datetime | None = None
    details: ModelDetails | None = None

    @property
    def size_string(self) -> str:
        return format_bytes(self.size)

    @property
    def base_name(self) -> str:
        return self.name.split(":", 1)[0]

    @property
    def tag(self) -> str | None:
        parts = self.name.split(":", 1)
        return parts[1] if len(parts) == 2 else None

    @property
    def is_custom(self) -> bool:
        """Tagged with something other than ``latest``."""
        return ":" in self.name and "latest" not in self.name


class ModelList(BaseModel):
    models: list[Model] = []


class ModelInfo(BaseModel):
    """Details returned by ``/api/show``."""

    model_config = ConfigDict(frozen=True)

    license: str | None = None
    modelfile: str | None = None
    parameters: str | None = None
    template: str | None = None
    system: str | None = None
    details: ModelDetails | None = None
    messages: list[ChatMessage] | None = None


class RunningModel(BaseModel):
    """A model currently loaded in memory, as listed by ``/api/ps``."""

    model_config = ConfigDict(frozen=True)

    name: str
    size: int
    digest: str
    details: ModelDetails | None = None
    expires_at: datetime | None = None
    size_vram: int | None = None

    @property
    def size_string(self) -> str:
        return format_bytes(self.size)

    @property
    def vram_string(self) -> str:
        return format_bytes(self.size_vram) if self.size_vram is not None else "Unknown"

    def expires_soon(self, now: datetime | None = None) -> bool:
        """Whether the model unloads within the next minute."""
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at - now <= timedelta(minutes=1)


class RunningModels(BaseModel):
    models: list[RunningModel] = []


class PullProgress(BaseModel):
    """One line of a pull stream."""

    model_config = ConfigDict(frozen=True)

    status: str
    digest: str | None = None
    total: int | None = None
    completed: int | None = None

    @property
    def percentage(self) -> float | None:
        if self.completed is None or not self.total:
            return None
        return self.completed / self.total * 100.0

    @property
    def is_complete(self) -> bool:
        status = self.status.lower()
        if "success" in status or "complete" in status:
            return True
        return self.completed is not None and self.total is not None and self.completed == self.total

    @property
    def done(self) -> bool:
        """True on the ``success`` line that ends a pull stream."""
        return self.status == "success"

    @property
    def text_delta(self) -> str:
        return ""

    def finalize(self, text: str, earlier: Sequence["PullProgress"] = ()) -> "PullProgress":
        """The terminal status line is the whole result of a pull."""
        return self


class CreateProgress(BaseModel):
    """One line of a create stream."""

    model_config = ConfigDict(frozen=True)

    status: str
    detail: str | None = None

    @property
    def done(self) -> bool:
        """True on the ``success`` line that ends a create stream."""
        return self.status == "success"

    @property
    def text_delta(self) -> str:
        return ""

    def finalize(self, text: str, earlier: Sequence["CreateProgress"] = ()) -> "CreateProgress":
        return self


class VersionInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str
    build: str | None = None
    commit: str | None = None


class ShowRequest(BaseModel):
    name: str
    verbose: bool | None = None


class PullRequest(BaseModel):
    name: str
    stream: bool | None = None
    insecure: bool | None = None


class CreateRequest(BaseModel):
    name: str
    modelfile: str
    stream: bool | None = None
    quantize: str | None = None


class CopyRequest(BaseModel):
    source: str
    destination: str


class DeleteRequest(BaseModel):
    name: str

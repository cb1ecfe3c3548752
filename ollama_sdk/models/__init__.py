"""Request and response types mirroring the Ollama wire format."""

from .chat import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    FunctionChoice,
    MessageRole,
    SpecificToolChoice,
    ToolChoice,
)
from .common import (
    FunctionCall,
    KeepAlive,
    Options,
    ResponseFormat,
    Tool,
    ToolCall,
    ToolFunction,
    Usage,
)
from .embedding import (
    EmbedInput,
    EmbedRequest,
    EmbedResponse,
    LegacyEmbeddingRequest,
    LegacyEmbeddingResponse,
)
from .generation import GenerateRequest, GenerateResponse
from .model_info import (
    CopyRequest,
    CreateProgress,
    CreateRequest,
    DeleteRequest,
    Model,
    ModelDetails,
    ModelInfo,
    ModelList,
    PullProgress,
    PullRequest,
    RunningModel,
    RunningModels,
    ShowRequest,
    VersionInfo,
    format_bytes,
)

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "FunctionChoice",
    "MessageRole",
    "SpecificToolChoice",
    "ToolChoice",
    "FunctionCall",
    "KeepAlive",
    "Options",
    "ResponseFormat",
    "Tool",
    "ToolCall",
    "ToolFunction",
    "Usage",
    "EmbedInput",
    "EmbedRequest",
    "EmbedResponse",
    "LegacyEmbeddingRequest",
    "LegacyEmbeddingResponse",
    "GenerateRequest",
    "GenerateResponse",
    "CopyRequest",
    "CreateProgress",
    "CreateRequest",
    "DeleteRequest",
    "Model",
    "ModelDetails",
    "ModelInfo",
    "ModelList",
    "PullProgress",
    "PullRequest",
    "RunningModel",
    "RunningModels",
    "ShowRequest",
    "VersionInfo",
    "format_bytes",
]

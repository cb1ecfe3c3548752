"""Fluent request builders returned by ``OllamaClient``."""

from .chat_builder import ChatBuilder
from .embed_builder import EmbedBuilder
from .generate_builder import GenerateBuilder
from .options_mixin import MAX_NUM_PREDICT

__all__ = ["ChatBuilder", "EmbedBuilder", "GenerateBuilder", "MAX_NUM_PREDICT"]

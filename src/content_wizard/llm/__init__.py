"""
Model client layer.

Includes:
- BaseLLMClient / ChatSession: the interface the facade depends on
- GeminiClient: google-genai implementation
- TextStream: single-pass streaming text
- PromptBuilder: Jinja2 prompt templates
"""

from content_wizard.llm.base_client import BaseLLMClient, ChatSession
from content_wizard.llm.gemini_client import GeminiClient
from content_wizard.llm.prompt_builder import PromptBuilder, instruction_for_action
from content_wizard.llm.streaming import TextStream

__all__ = [
    "BaseLLMClient",
    "ChatSession",
    "GeminiClient",
    "PromptBuilder",
    "TextStream",
    "instruction_for_action",
]

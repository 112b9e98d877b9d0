from .assistant import AssistantError, NoteAssistant
from .parsing import clean_json_response, fallback_extraction

__all__ = ["NoteAssistant", "AssistantError", "clean_json_response", "fallback_extraction"]

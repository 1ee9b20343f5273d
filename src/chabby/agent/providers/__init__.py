from .http import HttpAgentClient
from .openai import OpenAIAgentClient

__all__ = ["HttpAgentClient", "OpenAIAgentClient"]

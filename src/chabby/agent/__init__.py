"""Agent module for chabby.

Hides how the single conversational agent is reached and how its loosely
shaped results are turned into display text.
"""

from .base import AgentClient
from .extractor import DEFAULT_RESPONSE_TEXT, EXTRACTION_ERROR_TEXT, extract_response_text
from .factory import create_agent_client
from .models import CHAT_AGENT_ID, AgentResponse, AgentResult

__all__ = [
    "CHAT_AGENT_ID",
    "DEFAULT_RESPONSE_TEXT",
    "EXTRACTION_ERROR_TEXT",
    "AgentClient",
    "AgentResponse",
    "AgentResult",
    "create_agent_client",
    "extract_response_text",
]

"""
Chabby: a terminal chat client for a single conversational agent.

Each module hides one design decision:
- ids: how identifiers are generated
- markup: how agent markup becomes display blocks
- agent: how the agent is reached and how its results become text
- conversation: how conversations are stored and overlaid with samples
- session: the send pipeline state machine
"""

__version__ = "0.1.0"

from .agent import CHAT_AGENT_ID, AgentClient, AgentResult, create_agent_client, extract_response_text
from .conversation import Conversation, ConversationStore, Message, MessageRole
from .markup import DisplayBlock, render
from .session import ChatSession, SendState

__all__ = [
    "CHAT_AGENT_ID",
    "AgentClient",
    "AgentResult",
    "ChatSession",
    "Conversation",
    "ConversationStore",
    "DisplayBlock",
    "Message",
    "MessageRole",
    "SendState",
    "create_agent_client",
    "extract_response_text",
    "render",
]

"""Fixed demonstration conversations.

Shown read-only when the sample view is enabled and no live conversation
exists. Timestamps are relative to the moment the dataset is built.
"""

from datetime import datetime, timedelta

from .models import Conversation, Message, MessageRole

_CAPABILITIES_ANSWER = (
    "I can help you with a wide range of tasks! Here are some things I can assist with:\n"
    "\n"
    "## Research & Information\n"
    "- Answering questions on various topics\n"
    "- Explaining complex concepts in simple terms\n"
    "- Providing summaries and analyses\n"
    "\n"
    "## Writing & Communication\n"
    "- Drafting emails, messages, and documents\n"
    "- Proofreading and improving text\n"
    "- Creative writing assistance\n"
    "\n"
    "## Problem Solving\n"
    "- Breaking down complex problems\n"
    "- Brainstorming ideas and solutions\n"
    "- Technical troubleshooting guidance\n"
    "\n"
    "Feel free to ask me anything!"
)

_QUANTUM_ANSWER = (
    "**Quantum computing** is a type of computing that uses the principles of "
    "quantum mechanics to process information.\n"
    "\n"
    "### Classical vs Quantum\n"
    "- **Classical computers** use bits that are either 0 or 1\n"
    "- **Quantum computers** use **qubits** that can be 0, 1, or both at the same time (superposition)\n"
    "\n"
    "### Key Concepts\n"
    "1. **Superposition** - A qubit can exist in multiple states simultaneously\n"
    "2. **Entanglement** - Qubits can be linked so that the state of one instantly affects the other\n"
    "3. **Interference** - Quantum states can combine to amplify correct answers and cancel wrong ones\n"
    "\n"
    "### Why It Matters\n"
    "Quantum computers can solve certain problems exponentially faster than classical computers, such as:\n"
    "- Drug discovery and molecular simulation\n"
    "- Cryptography and security\n"
    "- Optimization problems\n"
    "- Machine learning enhancements\n"
    "\n"
    "Think of it like this: if a classical computer tries every path in a maze one by one, "
    "a quantum computer can explore many paths simultaneously."
)

_JOKE_ANSWER = "Why do programmers prefer dark mode?\n\nBecause light attracts bugs!"

# (conversation id, title, question, answer, age of question in seconds)
_SAMPLES = (
    ("sample-1", "What can you help me with?", "What can you help me with?", _CAPABILITIES_ANSWER, 300),
    ("sample-2", "Explain quantum computing", "Explain quantum computing in simple terms", _QUANTUM_ANSWER, 600),
    ("sample-3", "Tell me a joke", "Tell me a joke", _JOKE_ANSWER, 120),
)


def build_sample_conversations(now: datetime | None = None) -> tuple[Conversation, ...]:
    """Build the sample dataset.

    Args:
        now: Reference time for relative timestamps (defaults to the current time)

    Returns:
        Immutable sample conversations in display order
    """
    now = now or datetime.now()
    conversations = []
    for index, (conv_id, title, question, answer, age) in enumerate(_SAMPLES, 1):
        asked_at = now - timedelta(seconds=age)
        conversations.append(Conversation(
            id=conv_id,
            title=title,
            created_at=asked_at,
            messages=(
                Message(id=f"s{index}-m1", role=MessageRole.USER, content=question, timestamp=asked_at),
                Message(
                    id=f"s{index}-m2",
                    role=MessageRole.ASSISTANT,
                    content=answer,
                    timestamp=asked_at + timedelta(seconds=2),
                ),
            ),
        ))
    return tuple(conversations)

"""Assembly of the initial conversation for a request."""

from typing import List, Optional, Sequence

from .models import Message, SystemMessage, UserMessage


def build_conversation(
    system_prompt: Optional[str] = None,
    context: Optional[str] = None,
    messages: Optional[Sequence[Message]] = None,
) -> List[Message]:
    """Build the ordered message list sent with the first completion request.

    The system prompt comes first, then the context as a user message, then the
    prior messages in their original order. Nothing is deduplicated or truncated.

    Args:
        system_prompt: Optional system instruction.
        context: Optional context, sent as a user message.
        messages: Optional prior conversation.

    Returns:
        A new list; the inputs are not modified.
    """
    conversation: List[Message] = []
    if system_prompt:
        conversation.append(SystemMessage(content=system_prompt))
    if context:
        conversation.append(UserMessage(content=context))
    if messages:
        conversation.extend(messages)
    return conversation

"""Per-user conversation history."""

from venture_hub.store.memory import InMemoryStore
from venture_hub.store.models import ConversationMessage, MessageRole


class ConversationRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store
        self.table = store.messages

    def add_message(
        self,
        user_id: str,
        role: MessageRole,
        content: str,
        task_type: str | None = None,
    ) -> ConversationMessage:
        return self.table.create({
            "user_id": user_id,
            "role": role,
            "content": content,
            "task_type": task_type,
        })

    def history(self, user_id: str) -> list[ConversationMessage]:
        return self.table.by_owner(user_id)

    def recent(self, user_id: str, limit: int) -> list[ConversationMessage]:
        """The last ``limit`` messages for a user, oldest first."""
        if limit <= 0:
            return []
        return self.history(user_id)[-limit:]

import enum
import uuid
from tortoise import fields, models


class ChatRole(str, enum.Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(models.Model):
    # Auto-increment key doubles as the chronological order of a user's history
    seq = fields.BigIntField(pk=True)
    uid = fields.UUIDField(unique=True, default=uuid.uuid4)  # Public message id
    user = fields.ForeignKeyField("models.User", related_name="chats", on_delete=fields.CASCADE)

    role = fields.CharEnumField(ChatRole, max_length=16)
    content = fields.TextField()

    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "chat_messages"
        ordering = ["seq"]

    def to_dict(self) -> dict:
        return {
            "id": str(self.uid),
            "role": self.role.value,
            "content": self.content,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

"""Transport-neutral request models for the opinion pipeline."""

from pydantic import BaseModel, ConfigDict


class MessageRef(BaseModel):
    """Identifies one chat message. Immutable, supplied by the transport layer."""

    model_config = ConfigDict(frozen=True)

    chat_id: int
    message_id: int

    @property
    def idempotency_key(self) -> str:
        return f"idempotency:{self.chat_id}:{self.message_id}"

    @property
    def token(self) -> str:
        return f"{self.chat_id}:{self.message_id}"


class OpinionRequest(BaseModel):
    """One /opinion invocation, already unwrapped from the Telegram update."""

    command_ref: MessageRef  # the /opinion message itself
    quoted_ref: MessageRef  # the message it replies to
    user_id: int
    quoted_text: str = ""

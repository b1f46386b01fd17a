"""Transcript state for the chat UI.

The session holds one conversation for one browser tab. It allows a single
outstanding relay call: ``begin_submit`` claims it, ``settle`` releases it.
Nothing here talks to Streamlit, so the same object can be driven from
tests or any other front end.
"""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from .models import ChatMessage, Sender
from .relay_client import FALLBACK_ERROR_MESSAGE, RelayCallError, RelayReply

logger = logging.getLogger(__name__)


class RelayTransport(Protocol):
    def send_message(self, message: str) -> RelayReply: ...


@dataclass
class ChatSession:
    messages: list[ChatMessage] = field(default_factory=list)
    input_text: str = ""
    pending: bool = False
    # Bumped on every transcript change; the view keys its scroll anchor on it.
    revision: int = 0

    def _append(self, message: ChatMessage) -> None:
        self.messages.append(message)
        self.revision += 1

    def begin_submit(self) -> str | None:
        """Record the user's message and claim the in-flight slot.

        Returns the text to send, or None when there is nothing to send or a
        reply is still pending.
        """
        text = self.input_text.strip()
        if not text or self.pending:
            return None
        self._append(ChatMessage(text=text, sender=Sender.USER))
        self.input_text = ""
        self.pending = True
        return text

    def settle(self, outcome: RelayReply | RelayCallError) -> None:
        try:
            if isinstance(outcome, RelayReply):
                self._append(
                    ChatMessage(text=outcome.message, sender=Sender.AI, timestamp=outcome.timestamp)
                )
            else:
                self._append(ChatMessage(text=outcome.message, sender=Sender.ERROR))
        finally:
            self.pending = False

    def complete(self, client: RelayTransport, text: str) -> None:
        """Make the relay call for a claimed submission and settle it."""
        outcome: RelayReply | RelayCallError
        try:
            outcome = client.send_message(text)
        except RelayCallError as exc:
            outcome = exc
        except Exception:
            logger.exception("Unexpected failure sending message")
            outcome = RelayCallError(FALLBACK_ERROR_MESSAGE)
        self.settle(outcome)

    def submit(self, client: RelayTransport) -> bool:
        """Send the current input through ``client``. Returns False when it was a no-op."""
        text = self.begin_submit()
        if text is None:
            return False
        self.complete(client, text)
        return True

    def clear(self) -> None:
        self.messages = []
        self.revision += 1

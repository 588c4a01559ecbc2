"""Message delivery sinks used outside a live chat client."""

from __future__ import annotations

import json
import sys
from typing import TextIO

from helperbot.connectors.base import MessageDelivery
from helperbot.models import MessageEvent, OutgoingMessage


class ConsoleDelivery(MessageDelivery):
    """Writes each reply as one JSON document per line."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream or sys.stdout

    def respond(self, event: MessageEvent, message: OutgoingMessage) -> None:
        payload = {
            "channel_id": event.channel_id,
            "reply_to": event.message_id,
            "message": message.model_dump(mode="json"),
        }
        self.stream.write(json.dumps(payload) + "\n")
        self.stream.flush()


class CollectingDelivery(MessageDelivery):
    def __init__(self) -> None:
        self.sent: list[tuple[MessageEvent, OutgoingMessage]] = []

    def respond(self, event: MessageEvent, message: OutgoingMessage) -> None:
        self.sent.append((event, message))

    def messages_for(self, event: MessageEvent) -> list[OutgoingMessage]:
        return [message for sent_event, message in self.sent if sent_event.message_id == event.message_id]

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from umbra import colors, config
from umbra.events import MessageEvent, subscribe_to_event, unsubscribe_from_event


@dataclass(slots=True)
class Message:
    """A single narrated message, tagged with the turn it happened on."""

    plain_text: str
    turn: int
    fg: colors.Color = colors.MESSAGE_DEFAULT
    count: int = 1
    sequence_number: int = 0

    @property
    def full_text(self) -> str:
        """The full text of this message, including the count if > 1."""
        text = self.plain_text
        if self.count > 1:
            text = f"{text} (x{self.count})"
        if config.SHOW_MESSAGE_SEQUENCE_NUMBERS:
            return f"[{self.sequence_number}] {text}"
        return text


class MessageLog:
    """Ordered log of narrated messages, most recent last.

    Identical consecutive messages from the same turn stack into one entry
    with a repeat count. A stacked entry takes the newest sequence number so
    ``since()`` reports it as new again.

    Only one log listens to the global bus at a time: subscribing a new log
    closes the previous one, so a second game never narrates into the first.
    """

    _listening: ClassVar[MessageLog | None] = None

    def __init__(self, *, subscribe: bool = True) -> None:
        self.messages: list[Message] = []
        # revision increments whenever a message is added or stacked.
        # Render layers use this to redraw only when the log changes.
        self.revision = 0
        self.message_sequence = 0
        # Turn used for messages published without an explicit turn.
        self.current_turn = 0
        self._subscribed = subscribe

        if subscribe:
            if MessageLog._listening is not None:
                MessageLog._listening.close()
            subscribe_to_event(MessageEvent, self._handle_message_event)
            MessageLog._listening = self

    def close(self) -> None:
        """Stop listening to the global event bus."""
        if self._subscribed:
            unsubscribe_from_event(MessageEvent, self._handle_message_event)
            self._subscribed = False
        if MessageLog._listening is self:
            MessageLog._listening = None

    def _handle_message_event(self, event: MessageEvent) -> None:
        """Handle message events from the global event bus."""
        self.add_message(event.text, event.color, turn=event.turn, stack=event.stack)

    def add_message(
        self,
        text: str,
        fg: colors.Color = colors.MESSAGE_DEFAULT,
        *,
        turn: int | None = None,
        stack: bool = True,
    ) -> Message:
        """Add a message to this log and return the entry it landed in."""
        if turn is None:
            turn = self.current_turn
        self.message_sequence += 1
        if (
            stack
            and self.messages
            and self.messages[-1].plain_text == text
            and self.messages[-1].fg == fg
            and self.messages[-1].turn == turn
        ):
            message = self.messages[-1]
            message.count += 1
            message.sequence_number = self.message_sequence
        else:
            message = Message(text, turn, fg, sequence_number=self.message_sequence)
            self.messages.append(message)
        if config.PRINT_MESSAGES_TO_CONSOLE:
            print(message.full_text)
        self.revision += 1
        return message

    def since(self, sequence_number: int) -> list[Message]:
        """Messages added or stacked after ``sequence_number``, oldest first."""
        return [m for m in self.messages if m.sequence_number > sequence_number]

    def recent(self, wanted: int = config.DEFAULT_MESSAGES_WANTED) -> list[Message]:
        """The last ``wanted`` messages, oldest first."""
        if wanted <= 0:
            return []
        return self.messages[-wanted:]

    def __len__(self) -> int:
        return len(self.messages)

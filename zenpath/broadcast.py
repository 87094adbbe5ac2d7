# Single-slot holder for the latest ContentBundle.
# Constructed once by the app and handed to whoever needs it.
# Consumers pull: bind_consumer() pushes the current bundle into the handles
# it is given, and does nothing (no queue) if nothing was published yet.

from __future__ import annotations
import threading
from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence

from zenpath.generate.types import ContentBundle
from zenpath.log import get_logger

logger = get_logger("broadcast")


class TextSlot(Protocol):
    def set_text(self, text: str) -> None: ...


@dataclass
class ContentConsumer:
    """UI handles for one level: the headline (the thought) and one slot per option."""
    headline: Optional[TextSlot] = None
    options: Sequence[Optional[TextSlot]] = field(default_factory=list)
    name: str = "consumer"


class ContentBroadcaster:
    def __init__(self):
        self._lock = threading.Lock()
        self._bundle: Optional[ContentBundle] = None

    def publish(self, bundle: ContentBundle) -> None:
        with self._lock:
            self._bundle = bundle
        logger.info("Published bundle: %r", bundle.core_text)

    def current(self) -> Optional[ContentBundle]:
        with self._lock:
            return self._bundle

    def bind_consumer(self, consumer: ContentConsumer) -> bool:
        """Push the current bundle into the consumer. False if nothing is published yet."""
        bundle = self.current()
        if bundle is None:
            logger.warning("No current bundle to bind to '%s'", consumer.name)
            return False

        if consumer.headline is not None:
            consumer.headline.set_text(bundle.core_text)
        else:
            logger.warning("'%s' has no headline slot", consumer.name)

        strategies = bundle.strategies()
        for i, slot in enumerate(consumer.options):
            if i >= len(strategies):
                break
            if slot is None:
                logger.warning("'%s' is missing option slot %d", consumer.name, i + 1)
                continue
            slot.set_text(strategies[i])

        logger.info("Bound '%s' to current bundle", consumer.name)
        return True

    def option_dialogue(self, index: int) -> Optional[str]:
        bundle = self.current()
        if bundle is None:
            return None
        return bundle.explanation(index)

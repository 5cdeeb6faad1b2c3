"""
In-process event broadcaster.
Components publish here after every committed mutation; transport
collaborators (the WebSocket manager, tests) subscribe.
"""
from typing import Any, Callable, List, Tuple
from itertools import count
import logging

from bedflow.models.enums import EventTopicEnum

logger = logging.getLogger("bedflow.events")

Subscriber = Callable[[EventTopicEnum, Any], None]


class EventBroadcaster:
    """
    Synchronous publish/subscribe sink.

    Characteristics:
    - Delivery in subscription order, on the publishing thread
    - No retry and no replay for late subscribers
    - A failing subscriber never prevents delivery to the others
    """

    def __init__(self):
        self._subscribers: List[Tuple[int, Subscriber]] = []
        self._tokens = count(1)

    def subscribe(self, callback: Subscriber) -> int:
        """
        Registers an observer.

        Args:
            callback: Called as ``callback(topic, payload)``

        Returns:
            Token to pass to ``unsubscribe``
        """
        token = next(self._tokens)
        self._subscribers.append((token, callback))
        logger.debug(f"Subscriber {token} registered. Total: {len(self._subscribers)}")
        return token

    def unsubscribe(self, token: int) -> bool:
        """Removes an observer. Returns False if the token is unknown."""
        for index, (current, _) in enumerate(self._subscribers):
            if current == token:
                del self._subscribers[index]
                return True
        return False

    def publish(self, topic: EventTopicEnum, payload: Any) -> int:
        """
        Notifies every current subscriber.

        Args:
            topic: Event topic
            payload: Event data

        Returns:
            Number of subscribers that received the event without error
        """
        delivered = 0
        for token, callback in list(self._subscribers):
            try:
                callback(topic, payload)
                delivered += 1
            except Exception as e:
                logger.warning(f"Subscriber {token} failed on {topic.value}: {e}")
        return delivered

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)


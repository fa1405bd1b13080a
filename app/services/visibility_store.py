"""
Visibility store.

Holds the reveal flags of one viewer session:
- per-image overrides keyed by image id
- per-connection overrides keyed by connection key

Entries are only ever flipped or set, never removed. Subscribers are notified
synchronously once a mutation is fully applied, and every subscriber of one
update receives the same snapshot.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from app.core.logging import get_logger
from app.schemas.guard import ConnectionIdentity

logger = get_logger(__name__)


def connection_key(connection: ConnectionIdentity) -> str:
    """
    Derive the store key for a connection.

    The entity type never contains an underscore, so distinct
    (entity_id, entity_type) pairs never share a key.
    """
    return f"{connection.entity_id}_{connection.entity_type.value}"


@dataclass(frozen=True)
class StoreSnapshot:
    """Read-only view of the store at one point in time"""

    image_reveals: Mapping[int, bool]
    connection_reveals: Mapping[str, bool]


Listener = Callable[[StoreSnapshot], None]


class VisibilityStore:
    """Session-scoped reveal state shared by every consumer of the session."""

    def __init__(self) -> None:
        self._image_reveals: dict[int, bool] = {}
        self._connection_reveals: dict[str, bool] = {}
        self._listeners: list[Listener] = []
        self._snapshot = self._take_snapshot()

    def _take_snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            image_reveals=MappingProxyType(dict(self._image_reveals)),
            connection_reveals=MappingProxyType(dict(self._connection_reveals)),
        )

    def _commit(self) -> StoreSnapshot:
        self._snapshot = self._take_snapshot()
        for listener in list(self._listeners):
            listener(self._snapshot)
        return self._snapshot

    def snapshot(self) -> StoreSnapshot:
        return self._snapshot

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called after every mutation.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def toggle_image(self, image_id: int) -> bool:
        """Flip the reveal flag of one image. Absent counts as hidden."""
        revealed = not self._image_reveals.get(image_id, False)
        self._image_reveals[image_id] = revealed
        logger.debug("image_toggled", image_id=image_id, revealed=revealed)
        self._commit()
        return revealed

    def reveal_images(self, image_ids: Iterable[int]) -> None:
        """Mark every given image as revealed. Idempotent."""
        ids = list(image_ids)
        for image_id in ids:
            self._image_reveals[image_id] = True
        logger.debug("images_revealed", image_ids=ids)
        self._commit()

    def toggle_connection(self, connection: ConnectionIdentity) -> bool:
        """Flip the reveal flag of a connection. Absent counts as hidden."""
        key = connection_key(connection)
        revealed = not self._connection_reveals.get(key, False)
        self._connection_reveals[key] = revealed
        logger.debug("connection_toggled", connection_key=key, revealed=revealed)
        self._commit()
        return revealed

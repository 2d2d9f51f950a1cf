"""PresenceRegistry implementation."""

from typing import Protocol


class IPresenceRegistry(Protocol):
    """Mapping from user identity to a live connection handle."""

    def register(self, identity: str, handle: str) -> None:
        """Map identity to handle, replacing any previous handle."""
        ...

    def lookup(self, identity: str) -> str | None:
        """Get the handle for identity, None if not connected."""
        ...

    def unregister(self, identity: str, handle: str | None = None) -> bool:
        """Remove identity's mapping (only if it still points at handle, when given)."""
        ...

    def unregister_handle(self, handle: str) -> list[str]:
        """Remove every identity mapped to handle."""
        ...


class PresenceRegistry:
    """In-process presence table.

    One handle per identity: re-registering moves the identity to the new
    connection. Not guarded; callers run on a single event loop.
    """

    def __init__(self):
        self._handles: dict[str, str] = {}  # identity -> handle
        self._identities: dict[str, set[str]] = {}  # handle -> identities

    def register(self, identity: str, handle: str) -> None:
        previous = self._handles.get(identity)
        if previous is not None and previous != handle:
            self._forget(previous, identity)

        self._handles[identity] = handle
        self._identities.setdefault(handle, set()).add(identity)

    def lookup(self, identity: str) -> str | None:
        return self._handles.get(identity)

    def unregister(self, identity: str, handle: str | None = None) -> bool:
        current = self._handles.get(identity)
        if current is None or (handle is not None and current != handle):
            return False

        del self._handles[identity]
        self._forget(current, identity)
        return True

    def unregister_handle(self, handle: str) -> list[str]:
        identities = sorted(self._identities.pop(handle, set()))
        for identity in identities:
            if self._handles.get(identity) == handle:
                del self._handles[identity]
        return identities

    def identities(self) -> list[str]:
        return list(self._handles)

    def _forget(self, handle: str, identity: str) -> None:
        bucket = self._identities.get(handle)
        if bucket is None:
            return
        bucket.discard(identity)
        if not bucket:
            del self._identities[handle]

    def __contains__(self, identity: object) -> bool:
        return identity in self._handles

    def __len__(self) -> int:
        return len(self._handles)

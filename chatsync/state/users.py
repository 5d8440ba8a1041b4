import logging

from chatsync.schemas.user import UserRef

logger = logging.getLogger(__name__)


class UserRegistry:
    """Participants currently visible to the local session, keyed by user id."""

    def __init__(self) -> None:
        self._users: dict[str, UserRef] = {}

    def add(self, user: UserRef) -> bool:
        """Register *user*.  A second add for the same id is a no-op."""
        if user.id in self._users:
            return False
        self._users[user.id] = user
        logger.debug("User %r (%s) online", user.name, user.id)
        return True

    def remove_by_id(self, user_id: str) -> UserRef | None:
        user = self._users.pop(user_id, None)
        if user is not None:
            logger.debug("User %r (%s) offline", user.name, user_id)
        return user

    def find_by_id(self, user_id: str) -> UserRef | None:
        return self._users.get(user_id)

    def list(self) -> frozenset[UserRef]:
        return frozenset(self._users.values())

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._users

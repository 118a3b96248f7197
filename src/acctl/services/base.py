"""BaseService: foundation for store-backed services.

Every service receives a :class:`Store` at construction time and owns its
transaction boundaries via ``self._store.transaction()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from acctl.infrastructure.store import Store


class BaseService:
    """Base for service-layer classes that talk to the store.

    Usage::

        class SqlAccountService(BaseService):
            def delete_account(self, user_id: str) -> None:
                with self._store.transaction() as conn:
                    ...
    """

    def __init__(self, store: Store) -> None:
        self._store = store

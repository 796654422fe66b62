"""Per-account mutual exclusion for balance mutations."""

from __future__ import annotations

import asyncio
import logging
import weakref
from collections.abc import AsyncIterator
from contextlib import AsyncExitStack, asynccontextmanager

logger = logging.getLogger(__name__)


class AccountLockRegistry:
    """Maps account numbers to ``asyncio.Lock`` objects.

    Entries are weakly referenced, so a lock disappears once no transfer is
    holding or waiting on it.
    """

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()

    def lock_for(self, account_number: str) -> asyncio.Lock:
        lock = self._locks.get(account_number)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[account_number] = lock
        return lock

    def is_locked(self, account_number: str) -> bool:
        lock = self._locks.get(account_number)
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def hold(self, *account_numbers: str) -> AsyncIterator[None]:
        """Acquire the locks of all given accounts in sorted order."""
        locks = [(number, self.lock_for(number)) for number in sorted(set(account_numbers))]
        async with AsyncExitStack() as stack:
            for number, lock in locks:
                await stack.enter_async_context(lock)
                logger.debug("Lock acquired for account %s", number)
            yield


account_locks = AccountLockRegistry()

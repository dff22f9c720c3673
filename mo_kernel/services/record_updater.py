"""
RecordUpdater -- locked read-modify-write of one manufacturing-order header.

Responsibility:
    Builds the unique key from validated parameters and the facility,
    asks the store for a read-with-lock, and inside the lock scope sets
    the documents-printed flag and the change metadata.

Architecture position:
    Kernel > Services -- imperative shell.  Depends only on the
    ``OrderHeaderStore`` port, a ``Clock`` and the ``UserContext``.

Invariants enforced:
    - change_sequence is read under the lock and written back as +1.
    - All four fields are written with a single ``update()`` call.
    - No retry: one store call per invocation.

States:
    NotStarted -> Located(locked) -> Mutated -> Committed, or Failed
    from NotStarted/Located.

Failure modes:
    - UpdateFailedError when the store reports False (no record, lock
      contention, commit failure).  The store's reason is not exposed.
"""

from mo_kernel.domain.clock import Clock
from mo_kernel.domain.context import UserContext
from mo_kernel.domain.parameters import InputParameters, OrderHeaderKey
from mo_kernel.domain.ports import LockedOrderHeader, OrderHeaderStore
from mo_kernel.exceptions import UpdateFailedError
from mo_kernel.logging_config import get_logger

logger = get_logger("services.record_updater")


class RecordUpdater:
    """Sets the documents-printed flag on one header under a row lock."""

    def __init__(
        self,
        store: OrderHeaderStore,
        clock: Clock,
        user_context: UserContext,
    ):
        self._store = store
        self._clock = clock
        self._user_context = user_context

    def update(self, params: InputParameters, facility: str) -> OrderHeaderKey:
        """
        Update the header identified by ``params`` and ``facility``.

        Returns:
            The key of the updated header.

        Raises:
            UpdateFailedError: If the store did not commit the change.
        """
        key = OrderHeaderKey(
            company=params.company,
            facility=facility,
            product=params.product,
            order_number=params.order_number,
        )
        change_date = self._clock.today_y8()
        user = self._user_context.user

        def mutate(locked: LockedOrderHeader) -> None:
            locked.set("documents_printed", params.documents_printed)
            locked.set("last_modified_date", change_date)
            locked.set("change_sequence", locked.get_int("change_sequence") + 1)
            locked.set("changed_by", user)
            locked.update()

        if not self._store.read_lock(key, mutate):
            logger.info("order_header_update_failed", extra={"key": str(key)})
            raise UpdateFailedError()

        logger.info(
            "order_header_updated",
            extra={
                "key": str(key),
                "documents_printed": params.documents_printed,
                "last_modified_date": change_date,
            },
        )
        return key

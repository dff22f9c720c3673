"""
SqlOrderHeaderStore -- read-with-lock over the order-header unique key.

Responsibility:
    SQLAlchemy implementation of the ``OrderHeaderStore`` port.  Locks one
    manufacturing-order header row with ``SELECT ... FOR UPDATE``, hands
    a ``LockedOrderHeader`` to the caller's mutation callback, and commits
    the callback's changes before the lock is released.

Architecture position:
    Kernel > DB -- imperative shell infrastructure.  Consumed by
    ``RecordUpdater``; never called by the domain layer.

Invariants enforced:
    - The lock is taken BEFORE the change sequence is read, and held
      until commit, so concurrent read-modify-writes on one key are
      serialised by the database.  PostgreSQL locks the row with
      FOR UPDATE; SQLite locks the whole database at BEGIN IMMEDIATE
      (see db/engine.py).
    - Each call runs in its own session and transaction.  The session is
      closed (and the lock released) on every exit path.
    - Only the key fields and LOCKED_FIELDS are selected.

Failure modes:
    - No matching row: returns False.
    - Lock not available with ``nowait=True``: OperationalError from the
      database, returns False.
    - Any other SQLAlchemyError during read, flush or commit: rolled back,
      returns False.
    - Non-database exceptions raised by the callback: rolled back and
      re-raised.
"""

from collections.abc import Callable
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from mo_kernel.domain.parameters import OrderHeaderKey
from mo_kernel.domain.ports import LockedOrderHeader
from mo_kernel.logging_config import get_logger
from mo_kernel.models.mo_header import ManufacturingOrderHeader

logger = get_logger("db.locking")

_H = ManufacturingOrderHeader


class SqlOrderHeaderStore:
    """
    Order-header store backed by a relational database.

    Contract:
        ``read_lock`` returns True only after a successful commit of the
        callback's changes.  It never retries.

    Non-goals:
        - Does NOT create or delete headers.
        - Does NOT implement any locking itself; it relies on the
          database's row-level lock.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        nowait: bool = False,
    ):
        """
        Args:
            session_factory: Factory producing sessions bound to the store.
            nowait: If True, fail immediately when another transaction
                holds the row lock instead of waiting for it.
        """
        self._session_factory = session_factory
        self._nowait = nowait

    def _locked_select(self, key: OrderHeaderKey):
        return (
            select(
                _H.id,
                _H.company,
                _H.facility,
                _H.product,
                _H.order_number,
                _H.documents_printed,
                _H.last_modified_date,
                _H.change_sequence,
                _H.changed_by,
            )
            .where(
                _H.company == key.company,
                _H.facility == key.facility,
                _H.product == key.product,
                _H.order_number == key.order_number,
            )
            .with_for_update(nowait=self._nowait)
        )

    def read_lock(
        self,
        key: OrderHeaderKey,
        callback: Callable[[LockedOrderHeader], None],
    ) -> bool:
        """
        Lock the header for ``key``, run ``callback``, commit.

        Args:
            key: Unique key of the header.
            callback: Mutation to run while the lock is held.  It must
                call ``locked.update()`` for its changes to be written.

        Returns:
            True if the record was found and the transaction committed.
        """
        session = self._session_factory()
        try:
            with session.begin():
                row = session.execute(self._locked_select(key)).one_or_none()
                if row is None:
                    logger.info("locked_read_no_record", extra={"key": str(key)})
                    return False

                def _apply(values: dict[str, Any]) -> None:
                    session.execute(
                        update(_H)
                        .where(_H.id == row.id)
                        .values(**values)
                        .execution_options(synchronize_session=False)
                    )

                locked = LockedOrderHeader(key, row._mapping, _apply)
                logger.debug(
                    "record_locked",
                    extra={
                        "key": str(key),
                        "row_id": row.id,
                        "change_sequence": locked.get("change_sequence"),
                    },
                )
                callback(locked)
        except SQLAlchemyError:
            logger.warning(
                "locked_update_failed",
                extra={"key": str(key), "nowait": self._nowait},
                exc_info=True,
            )
            return False
        finally:
            session.close()

        logger.debug(
            "locked_update_committed",
            extra={"key": str(key), "updated": locked.updated},
        )
        return True

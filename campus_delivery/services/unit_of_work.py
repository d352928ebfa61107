"""Transaction script helper with explicit compensation steps."""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType

from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

Action = Callable[[], object]


class UnitOfWork:
    """Commit a session as one unit and run side-effect cleanup around it.

    Usage::

        with UnitOfWork(db) as uow:
            uow.on_rollback(lambda: delete_image(new_logo))
            uow.after_commit(lambda: delete_image(old_logo))
            ...

    On a clean exit the session is committed and ``after_commit`` actions run
    in registration order. If the block raises, the session is rolled back,
    ``on_rollback`` actions run in reverse order and the exception
    propagates. Failures inside either kind of action are logged and
    collected in ``warnings``; they never change the outcome.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.warnings: list[str] = []
        self.committed = False
        self._compensations: list[tuple[str, Action]] = []
        self._cleanups: list[tuple[str, Action]] = []

    def on_rollback(self, action: Action, description: str = "") -> None:
        self._compensations.append((description or getattr(action, "__name__", "compensation"), action))

    def after_commit(self, action: Action, description: str = "") -> None:
        self._cleanups.append((description or getattr(action, "__name__", "cleanup"), action))

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if exc_type is None:
            try:
                self.db.commit()
            except Exception:
                self._rollback()
                raise
            self.committed = True
            self._run(self._cleanups, "[CLEANUP]")
            return False

        self._rollback()
        return False

    def _rollback(self) -> None:
        self.db.rollback()
        self._run(list(reversed(self._compensations)), "[COMPENSATE]")

    def _run(self, actions: list[tuple[str, Action]], tag: str) -> None:
        for description, action in actions:
            try:
                result = action()
            except Exception as exc:
                logger.exception("%s %s failed", tag, description)
                self.warnings.append(f"{description} failed: {exc}")
                continue
            if result is False:
                logger.warning("%s %s did not complete", tag, description)
                self.warnings.append(f"{description} did not complete")

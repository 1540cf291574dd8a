"""
➡️ But : Une "unité de travail" = une transaction tout-ou-rien avec une échéance.

Les repositories sont appelés avec commit=False à l'intérieur du bloc,
le commit n'a lieu qu'à la sortie, si tout s'est bien passé et si
l'échéance n'est pas dépassée.

    with unit_of_work(session, timeout=2.0):
        repo.create(commit=False, ...)
        repo.update(entity, commit=False, ...)

🔹 Garanties :

Toute exception => rollback, rien n'est visible.

SQLAlchemyError => StorageError (opaque pour l'appelant).

Échéance dépassée avant le commit => rollback + OperationTimeoutError.
"""

import time
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.config import settings
from app.core.errors import BingoError, OperationTimeoutError, StorageError
from app.core.logger import logger


class Deadline:
    """Échéance absolue calculée à partir d'un timeout en secondes (None = pas de limite)."""

    def __init__(self, timeout: Optional[float]):
        self.timeout = timeout
        self._expires_at = None if timeout is None else time.monotonic() + timeout

    @property
    def expired(self) -> bool:
        return self._expires_at is not None and time.monotonic() > self._expires_at

    def check(self) -> None:
        if self.expired:
            raise OperationTimeoutError(f"Operation exceeded its {self.timeout:.2f}s deadline")


@contextmanager
def unit_of_work(session: Session, *, timeout: Optional[float] = None) -> Iterator[Deadline]:
    if timeout is None:
        timeout = settings.COMMAND_TIMEOUT_SECONDS
    deadline = Deadline(timeout)

    try:
        yield deadline
        deadline.check()
        session.commit()
    except BingoError:
        session.rollback()
        raise
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Storage failure, transaction rolled back")
        raise StorageError() from exc
    except Exception:
        session.rollback()
        raise

"""Transaction — атомарная область и защита от повторного входа.

AtomicScope:
- на входе снимает снапшот агрегата контроллера и checkpoint каждого
  Transactional участника
- при любом исключении откатывает участников в обратном порядке, затем
  восстанавливает агрегат, и пробрасывает исключение дальше
- ошибка rollback одного участника не прерывает откат остальных и
  восстановление агрегата; наружу выходит CollaboratorCallError
- при успехе ничего не делает (изменения уже применены)

ReentrancyGuard:
- флаг держится на протяжении всей точки входа, включая вложенные вызовы
  hook/token/vault
- вложенный вход → ReentrancyError
"""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple

from src.controller.collaborators import Transactional
from src.core.errors import CollaboratorCallError, ReentrancyError

logger = logging.getLogger(__name__)


class ReentrancyGuard:
    """Флаг nonReentrant для одного экземпляра контроллера."""

    def __init__(self):
        self._entered = False

    @property
    def entered(self) -> bool:
        return self._entered

    @contextmanager
    def hold(self) -> Iterator[None]:
        """
        Raises:
            ReentrancyError: флаг уже удерживается
        """
        if self._entered:
            raise ReentrancyError()

        self._entered = True
        try:
            yield
        finally:
            self._entered = False


class AtomicScope:
    """Контекст all-or-nothing для одной мутирующей операции."""

    def __init__(
        self,
        operation: str,
        snapshot: Callable[[], Any],
        restore: Callable[[Any], None],
        participants: Iterable[object] = (),
    ):
        """
        Args:
            operation: имя операции (для логов)
            snapshot: снимок агрегата
            restore: восстановление агрегата из снимка
            participants: коллабораторы; учитываются только Transactional
        """
        self.operation = operation
        self._snapshot = snapshot
        self._restore = restore
        self._participants = _unique_transactional(participants)
        self._state: Any = None
        self._checkpoints: List[Tuple[Transactional, Any]] = []

    def __enter__(self) -> "AtomicScope":
        self._state = self._snapshot()
        self._checkpoints = [
            (participant, participant.checkpoint()) for participant in self._participants
        ]
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            return False

        rollback_error: Optional[CollaboratorCallError] = None
        try:
            for participant, token in reversed(self._checkpoints):
                try:
                    participant.rollback(token)
                except Exception as error:
                    logger.error(
                        "%s: rollback of %s failed: %s",
                        self.operation,
                        type(participant).__name__,
                        error,
                    )
                    if rollback_error is None:
                        rollback_error = CollaboratorCallError(
                            type(participant).__name__, "rollback", error
                        )
        finally:
            self._restore(self._state)

        logger.warning(
            "%s aborted, state rolled back: %s: %s",
            self.operation,
            exc_type.__name__,
            exc,
        )
        if rollback_error is not None:
            raise rollback_error from exc
        return False


def _unique_transactional(participants: Iterable[object]) -> List[Transactional]:
    seen = set()
    unique = []
    for participant in participants:
        if participant is None or id(participant) in seen:
            continue
        if isinstance(participant, Transactional):
            seen.add(id(participant))
            unique.append(participant)
    return unique

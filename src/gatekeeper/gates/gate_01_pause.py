"""GATE 1: External Pause

- Второй gate в цепочке (после GATE 0)
- Блокирует вход, пока внешний Pauser сообщает paused == True
- Логика срабатывания паузы принадлежит Pauser и здесь не моделируется
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Gate01Result:
    """Результат GATE 1."""

    entry_allowed: bool
    block_reason: str

    paused: bool

    details: str


class Gate01Pause:
    """GATE 1: External Pause."""

    def evaluate(self, paused: bool) -> Gate01Result:
        if paused:
            return Gate01Result(
                entry_allowed=False,
                block_reason="paused",
                paused=paused,
                details="External pauser reports paused"
            )

        return Gate01Result(
            entry_allowed=True,
            block_reason="",
            paused=paused,
            details="PASS: not paused"
        )

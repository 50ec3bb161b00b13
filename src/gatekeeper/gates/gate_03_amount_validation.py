"""GATE 3: Amount Validation

- Последний gate в цепочке
- Блокирует нулевую сумму депозита или вывода
- Тип и диапазон uint256 проверяются контроллером до запуска цепочки
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Gate03Result:
    """Результат GATE 3."""

    entry_allowed: bool
    block_reason: str

    # Входные параметры для диагностики
    amount: int
    amount_name: str

    details: str


class Gate03AmountValidation:
    """GATE 3: Amount Validation."""

    def evaluate(self, amount: int, amount_name: str = "amount") -> Gate03Result:
        """Оценка GATE 3.

        Args:
            amount: сумма операции
            amount_name: имя параметра (для сообщения об ошибке)
        """
        if amount <= 0:
            return Gate03Result(
                entry_allowed=False,
                block_reason="zero_amount",
                amount=amount,
                amount_name=amount_name,
                details=f"{amount_name} must be greater than zero, got {amount}"
            )

        return Gate03Result(
            entry_allowed=True,
            block_reason="",
            amount=amount,
            amount_name=amount_name,
            details=f"PASS: {amount_name}={amount}"
        )

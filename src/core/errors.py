"""
Errors — таксономия ошибок bonding-curve движка

Каждое условие отказа имеет собственный тип, чтобы вызывающий код (UI,
скрипты, тесты) мог ветвиться по причине, а не по тексту сообщения.

Иерархия:
    CurveEngineError
    ├── ValidationError        — нулевые/отрицательные/вне диапазона входы
    ├── StateError             — goals не заданы, locked, paused, vault не одобрен
    ├── AuthorizationError     — вызов owner-only операции не владельцем
    ├── SlippageError          — результат хуже caller minimum
    ├── ExternalCallFailure    — hook/token/vault вызов завершился ошибкой
    └── InvariantViolation     — дрейф virtual_k за пределами толерантности

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Любая ошибка прерывает операцию целиком (без частичных мутаций)
2. InvariantViolation — это баг реализации, а не ошибка пользователя
"""


class CurveEngineError(Exception):
    """Базовый класс всех ошибок движка."""


# =============================================================================
# VALIDATION
# =============================================================================


class ValidationError(CurveEngineError):
    """Входные параметры вне допустимого домена."""


class ZeroAmountError(ValidationError):
    """Нулевая сумма там, где требуется положительная."""

    def __init__(self, name: str):
        super().__init__(f"{name} must be greater than zero")
        self.name = name


class InvalidAmountError(ValidationError):
    """Сумма не является int в диапазоне uint256 (отрицательная, переполнение, не int)."""

    def __init__(self, name: str, value: object, reason: str):
        super().__init__(f"{name} {reason}, got {value!r}")
        self.name = name
        self.value = value
        self.reason = reason


class PriceOutOfRangeError(ValidationError):
    """desired_average_price вне [sqrt(0.75), 1) в масштабе 1e18."""

    def __init__(self, price: int, min_price: int, max_price_exclusive: int):
        super().__init__(
            f"desired_average_price {price} outside "
            f"[{min_price}, {max_price_exclusive})"
        )
        self.price = price
        self.min_price = min_price
        self.max_price_exclusive = max_price_exclusive


class FundingGoalError(ValidationError):
    """funding_goal не превышает seed_input."""

    def __init__(self, funding_goal: int, seed_input: int):
        super().__init__(
            f"funding_goal {funding_goal} must be greater than seed_input {seed_input}"
        )
        self.funding_goal = funding_goal
        self.seed_input = seed_input


class FeeOutOfRangeError(ValidationError):
    """Withdrawal fee за пределами [0, 10000] basis points."""

    def __init__(self, basis_points: int, max_basis_points: int):
        super().__init__(
            f"withdrawal fee {basis_points} bps outside [0, {max_basis_points}]"
        )
        self.basis_points = basis_points
        self.max_basis_points = max_basis_points


class PenaltyConfigError(ValidationError):
    """Параметры early-sell penalty не позволяют fee дойти до нуля."""


class CurveCapacityError(ValidationError):
    """Депозит выкупил бы виртуальный резерв claim token целиком."""

    def __init__(self, input_amount: int, max_input: int):
        super().__init__(
            f"input_amount {input_amount} exceeds curve capacity {max_input}"
        )
        self.input_amount = input_amount
        self.max_input = max_input


# =============================================================================
# STATE
# =============================================================================


class StateError(CurveEngineError):
    """Операция недопустима в текущем состоянии lifecycle."""


class GoalsNotSetError(StateError):
    def __init__(self):
        super().__init__("goals not set: virtual_k is zero")


class GoalsAlreadySetError(StateError):
    def __init__(self):
        super().__init__("goals already set: curve parameters are one-time")


class LockedError(StateError):
    def __init__(self):
        super().__init__("contract is locked")


class PausedError(StateError):
    def __init__(self):
        super().__init__("contract is paused")


class VaultNotApprovedError(StateError):
    def __init__(self):
        super().__init__("vault approval not initialized")


class ReentrancyError(StateError):
    def __init__(self):
        super().__init__("reentrant call")


class InsufficientReservesError(StateError):
    """Выплата превышает накопленные virtual_input_tokens."""

    def __init__(self, requested: int, available: int):
        super().__init__(
            f"withdrawal of {requested} exceeds available reserves {available}"
        )
        self.requested = requested
        self.available = available


class InvalidTransitionError(StateError):
    """Переход lifecycle state machine не определён."""


# =============================================================================
# AUTHORIZATION
# =============================================================================


class AuthorizationError(CurveEngineError):
    """Вызывающий не имеет прав на операцию."""

    def __init__(self, caller: str, action: str):
        super().__init__(f"{caller} is not authorized to {action}")
        self.caller = caller
        self.action = action


# =============================================================================
# SLIPPAGE
# =============================================================================


class SlippageError(CurveEngineError):
    """Фактический результат хуже caller minimum (slippage/MEV guard)."""

    def __init__(self, leg: str, required: int, actual: int):
        super().__init__(
            f"{leg} slippage: required at least {required}, got {actual}"
        )
        self.leg = leg
        self.required = required
        self.actual = actual


# =============================================================================
# EXTERNAL CALLS
# =============================================================================


class ExternalCallFailure(CurveEngineError):
    """Ошибка внешнего коллаборатора (hook, token, vault)."""


class HookCallError(ExternalCallFailure):
    """Hook выбросил исключение во время buy/sell."""

    def __init__(self, side: str, cause: BaseException):
        super().__init__(f"hook {side} failed: {cause}")
        self.side = side
        self.cause = cause


class HookResultError(ExternalCallFailure):
    """Hook вернул результат вне допустимого домена."""


class CollaboratorCallError(ExternalCallFailure):
    """Token/vault вызов завершился ошибкой."""

    def __init__(self, collaborator: str, operation: str, cause: BaseException):
        super().__init__(f"{collaborator}.{operation} failed: {cause}")
        self.collaborator = collaborator
        self.operation = operation
        self.cause = cause


# =============================================================================
# INVARIANT
# =============================================================================


class InvariantViolation(CurveEngineError):
    """
    Нарушение инварианта virtual_k == (x + alpha) * (L + beta).

    Никогда не должно возникать при корректной реализации. При возникновении
    операция откатывается целиком.
    """

    def __init__(self, expected: int, actual: int, tolerance: int):
        super().__init__(
            f"virtual_k drift: expected {expected}, actual {actual}, "
            f"tolerance {tolerance}"
        )
        self.expected = expected
        self.actual = actual
        self.tolerance = tolerance

"""LiquidityController — оркестрация депозитов и выводов bonding curve.

Поток add_liquidity:
    guard → gates → base quote → hook.buy → slippage → commit reserves
    → funding token transfer_from → vault.deposit → claim token mint → event

Поток remove_liquidity:
    guard → gates → withdrawal fee → base quote → hook.sell → slippage
    → commit reserves → claim token burn (полная сумма) → vault.withdraw → events

Внутреннее состояние фиксируется до внешних вызовов; любое исключение
(включая ошибку token/vault после commit) откатывает агрегат и всех
Transactional коллабораторов через AtomicScope.

Все owner-only операции принимают sender первым аргументом: в Python нет
msg.sender, поэтому вызывающий передаётся явно.

ReentrancyGuard удерживается каждой мутирующей точкой входа, включая
owner-only конфигурацию: вложенный вызов из hook или коллаборатора
→ ReentrancyError.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from src.controller.collaborators import ClaimToken, FundingToken, Pauser, Vault
from src.controller.transaction import AtomicScope, ReentrancyGuard
from src.core.contracts.validators import validate_engine_state
from src.core.domain.events import (
    CollaboratorUpdated,
    CurveEvent,
    FeeCollected,
    GoalsSet,
    HookUpdated,
    LiquidityAdded,
    LiquidityRemoved,
    LockStateChanged,
    OwnershipTransferred,
    VaultApprovalChanged,
    WithdrawalFeeUpdated,
)
from src.core.domain.lifecycle import CurveState, LifecycleState, WithdrawalFeeConfig
from src.core.domain.reserves import Goals, VirtualPair, VirtualReserves
from src.core.errors import (
    AuthorizationError,
    CollaboratorCallError,
    CurveEngineError,
    SlippageError,
    ValidationError,
)
from src.core.math.curve_math import CurveParameters
from src.core.math.fixed_point import UINT256_MAX, validate_uint
from src.curve.goal_configurator import GoalConfigurator
from src.curve.virtual_pair import VirtualPairEngine
from src.curve.withdrawal_fee import WithdrawalFeeModule
from src.gatekeeper.gatekeeper import Gatekeeper
from src.hooks.base import BondingCurveHook, HookPipeline
from src.lifecycle.state_machine import LifecycleAction, LifecycleStateMachine

logger = logging.getLogger(__name__)

ENGINE_STATE_SCHEMA_VERSION = "1"


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class ControllerConfig:
    """Конфигурация контроллера.

    address — собственный адрес контроллера в ledger коллабораторов
    (получатель transfer_from, владелец позиции в vault).
    """

    address: str = "bonding_curve"
    withdrawal_fee_basis_points: int = 0


@dataclass(frozen=True)
class _ControllerSnapshot:
    engine: Tuple[VirtualReserves, Optional[Goals]]
    lifecycle: LifecycleState
    fee_config: WithdrawalFeeConfig
    hook: BondingCurveHook
    owner: str
    claim_token: ClaimToken
    input_token: FundingToken
    vault: Vault
    pauser: Optional[Pauser]
    event_count: int


# =============================================================================
# CONTROLLER
# =============================================================================


class LiquidityController:
    """Единственная точка входа для мутаций bonding curve.

    Журнал событий хранится в памяти процесса и не ограничен по размеру;
    потребитель периодически забирает его через drain_events().
    """

    def __init__(
        self,
        owner: str,
        claim_token: ClaimToken,
        input_token: FundingToken,
        vault: Vault,
        pauser: Optional[Pauser] = None,
        hook: Optional[BondingCurveHook] = None,
        config: Optional[ControllerConfig] = None,
    ):
        """
        Args:
            owner: адрес владельца (owner-only операции)
            claim_token: выпускаемый claim token
            input_token: funding token
            vault: vault для депозитов funding token
            pauser: внешний механизм паузы (None — пауза невозможна)
            hook: hook котировок (None — NoOpHook)
            config: ControllerConfig (default ControllerConfig())
        """
        self.config = config or ControllerConfig()
        self.address = self.config.address

        self._owner = owner
        self._claim_token = claim_token
        self._input_token = input_token
        self._vault = vault
        self._pauser = pauser

        self._engine = VirtualPairEngine()
        self._configurator = GoalConfigurator()
        self._fees = WithdrawalFeeModule()
        self._fees.set_fee(self.config.withdrawal_fee_basis_points)
        self._hooks = HookPipeline(hook)
        self._lifecycle = LifecycleState()
        self._state_machine = LifecycleStateMachine()
        self._gatekeeper = Gatekeeper()
        self._guard = ReentrancyGuard()

        self._events: List[CurveEvent] = []

    # =========================================================================
    # OWNER-ONLY CONFIGURATION
    # =========================================================================

    def set_goals(
        self, sender: str, funding_goal: int, desired_average_price: int
    ) -> CurveParameters:
        """Одноразовая установка параметров кривой.

        Raises:
            AuthorizationError: sender не owner
            GoalsAlreadySetError: повторный вызов
            FundingGoalError, PriceOutOfRangeError: goals вне домена
        """
        self._require_owner(sender, "set goals")

        with self._guard.hold(), self._atomic("set_goals"):
            transition = self._state_machine.evaluate_transition(
                self._lifecycle.curve_state, LifecycleAction.SET_GOALS
            )
            configuration = self._configurator.configure(funding_goal, desired_average_price)
            self._engine.initialize(configuration)
            self._lifecycle = self._lifecycle.model_copy(
                update={"curve_state": transition.new_state}
            )

            parameters = configuration.parameters
            self._emit(
                GoalsSet(
                    funding_goal=funding_goal,
                    desired_average_price=desired_average_price,
                    alpha=parameters.alpha,
                    beta=parameters.beta,
                    virtual_k=parameters.virtual_k,
                    virtual_l=parameters.virtual_l,
                )
            )

        self._state_machine.record(transition)
        logger.info(
            "goals set: funding_goal=%d desired_average_price=%d virtual_k=%d",
            funding_goal,
            desired_average_price,
            parameters.virtual_k,
        )
        return parameters

    def set_withdrawal_fee(self, sender: str, basis_points: int) -> None:
        """
        Raises:
            AuthorizationError: sender не owner
            FeeOutOfRangeError: basis_points вне [0, 10000]
        """
        self._require_owner(sender, "set withdrawal fee")

        with self._guard.hold(), self._atomic("set_withdrawal_fee"):
            previous = self._fees.set_fee(basis_points)
            self._emit(
                WithdrawalFeeUpdated(
                    old_fee_basis_points=previous.fee_basis_points,
                    new_fee_basis_points=basis_points,
                )
            )

        logger.info(
            "withdrawal fee updated: %d -> %d bps", previous.fee_basis_points, basis_points
        )

    def lock(self, sender: str) -> None:
        """ACTIVE → LOCKED; повторный lock — no-op."""
        self._apply_lock_action(sender, LifecycleAction.LOCK, "lock")

    def unlock(self, sender: str) -> None:
        """LOCKED → ACTIVE; unlock в ACTIVE — no-op."""
        self._apply_lock_action(sender, LifecycleAction.UNLOCK, "unlock")

    def set_hook(self, sender: str, hook: Optional[BondingCurveHook]) -> None:
        """Замена hook; None восстанавливает NoOpHook."""
        self._require_owner(sender, "set hook")

        with self._guard.hold(), self._atomic("set_hook"):
            self._hooks.set_hook(hook)
            self._emit(HookUpdated(hook=self.hook_name))

        logger.info("hook updated: %s", self.hook_name)

    def initialize_vault_approval(self, sender: str) -> None:
        """Бесконечный allowance vault на funding token контроллера."""
        self._require_owner(sender, "initialize vault approval")

        with self._guard.hold(), self._atomic("initialize_vault_approval"):
            self._external(
                "funding_token",
                "approve",
                self._input_token.approve,
                self.address,
                self._vault.address,
                UINT256_MAX,
            )
            self._set_vault_approval(True)

        logger.info("vault approval initialized for %s", self._vault.address)

    def disable_token(self, sender: str) -> None:
        """Отзыв allowance vault; депозиты и выводы блокируются до повторного одобрения."""
        self._require_owner(sender, "disable token")

        with self._guard.hold(), self._atomic("disable_token"):
            self._revoke_vault_allowance()
            self._set_vault_approval(False)

        logger.info("funding token disabled for vault %s", self._vault.address)

    def set_vault(self, sender: str, vault: Vault) -> None:
        """Замена vault. Новый vault требует initialize_vault_approval."""
        self._require_owner(sender, "set vault")

        with self._guard.hold(), self._atomic("set_vault"):
            if self._lifecycle.vault_approval_initialized:
                self._revoke_vault_allowance()
            self._vault = vault
            self._set_vault_approval(False)
            self._emit(CollaboratorUpdated(role="vault", address=vault.address))

        logger.info("vault updated: %s", vault.address)

    def set_input_token(self, sender: str, token: FundingToken) -> None:
        """Замена funding token. Новый token требует initialize_vault_approval."""
        self._require_owner(sender, "set input token")

        with self._guard.hold(), self._atomic("set_input_token"):
            if self._lifecycle.vault_approval_initialized:
                self._revoke_vault_allowance()
            self._input_token = token
            self._set_vault_approval(False)
            self._emit(CollaboratorUpdated(role="input_token", address=token.address))

        logger.info("input token updated: %s", token.address)

    def set_pauser(self, sender: str, pauser: Optional[Pauser]) -> None:
        self._require_owner(sender, "set pauser")

        with self._guard.hold(), self._atomic("set_pauser"):
            self._pauser = pauser
            self._emit(
                CollaboratorUpdated(
                    role="pauser",
                    address=type(pauser).__name__ if pauser is not None else None,
                )
            )

        logger.info("pauser updated: %s", pauser)

    def transfer_ownership(self, sender: str, new_owner: str) -> None:
        """
        Raises:
            AuthorizationError: sender не owner
            ValidationError: new_owner пустой
        """
        self._require_owner(sender, "transfer ownership")
        if not isinstance(new_owner, str) or not new_owner:
            raise ValidationError("new_owner must be a non-empty address")

        with self._guard.hold(), self._atomic("transfer_ownership"):
            previous = self._owner
            self._owner = new_owner
            self._emit(OwnershipTransferred(previous_owner=previous, new_owner=new_owner))

        logger.info("ownership transferred: %s -> %s", previous, new_owner)

    # =========================================================================
    # MUTATING ENTRYPOINTS
    # =========================================================================

    def add_liquidity(self, sender: str, input_amount: int, min_bonding_tokens: int) -> int:
        """Депозит funding token в обмен на claim token.

        Args:
            sender: депозитор
            input_amount: сумма funding token
            min_bonding_tokens: минимум claim token (slippage/MEV guard)

        Returns:
            Фактически выпущенное количество claim token

        Raises:
            ReentrancyError, LockedError, PausedError, VaultNotApprovedError,
            GoalsNotSetError, ZeroAmountError, CurveCapacityError,
            HookCallError, HookResultError, SlippageError,
            CollaboratorCallError, InvariantViolation
        """
        validate_uint(input_amount, "input_amount")
        validate_uint(min_bonding_tokens, "min_bonding_tokens")

        with self._guard.hold(), self._atomic("add_liquidity"):
            self._run_gates(input_amount, "input_amount")

            base_bonding_tokens = self._engine.quote_add_liquidity(input_amount)
            adjustment = self._hooks.run_buy(sender, base_bonding_tokens, input_amount)
            bonding_tokens_out = adjustment.bonding_tokens_out
            if bonding_tokens_out < min_bonding_tokens:
                raise SlippageError("bonding_tokens_out", min_bonding_tokens, bonding_tokens_out)

            self._engine.commit(self._engine.apply_deposit(input_amount))

            self._external(
                "funding_token",
                "transfer_from",
                self._input_token.transfer_from,
                self.address,
                sender,
                self.address,
                input_amount,
            )
            self._external(
                "vault",
                "deposit",
                self._vault.deposit,
                self._input_token,
                input_amount,
                self.address,
                self.address,
            )
            self._external(
                "claim_token", "mint", self._claim_token.mint, sender, bonding_tokens_out
            )

            self._emit(
                LiquidityAdded(
                    user=sender,
                    input_amount=input_amount,
                    bonding_tokens_out=bonding_tokens_out,
                    hook_fee=adjustment.hook_result.fee,
                    delta_bonding_token=adjustment.hook_result.delta_bonding_token,
                )
            )

        logger.info(
            "liquidity added: user=%s input=%d bonding_out=%d (base=%d)",
            sender,
            input_amount,
            bonding_tokens_out,
            base_bonding_tokens,
        )
        return bonding_tokens_out

    def remove_liquidity(
        self, sender: str, bonding_token_amount: int, min_input_tokens: int
    ) -> int:
        """Сжигание claim token в обмен на funding token.

        Полное bonding_token_amount сжигается всегда; withdrawal fee лишь
        уменьшает количество, которое видит кривая.

        Returns:
            Фактически выплаченное количество funding token

        Raises:
            ReentrancyError, LockedError, PausedError, VaultNotApprovedError,
            GoalsNotSetError, ZeroAmountError, HookCallError, HookResultError,
            SlippageError, InsufficientReservesError, CollaboratorCallError,
            InvariantViolation
        """
        validate_uint(bonding_token_amount, "bonding_token_amount")
        validate_uint(min_input_tokens, "min_input_tokens")

        with self._guard.hold(), self._atomic("remove_liquidity"):
            self._run_gates(bonding_token_amount, "bonding_token_amount")

            fee_basis_points = self._fees.fee_basis_points
            effective = self._fees.effective_bonding_tokens(bonding_token_amount)
            base_input_tokens = self._engine.quote_remove_effective(effective)

            adjustment = self._hooks.run_sell(
                sender,
                bonding_token_amount,
                effective,
                base_input_tokens,
                self._engine.quote_remove_effective,
            )
            input_tokens_out = adjustment.input_tokens_out
            if input_tokens_out < min_input_tokens:
                raise SlippageError("input_tokens_out", min_input_tokens, input_tokens_out)

            self._engine.commit(self._engine.apply_withdrawal(input_tokens_out))

            self._external(
                "claim_token", "burn", self._claim_token.burn, sender, bonding_token_amount
            )
            self._external(
                "vault",
                "withdraw",
                self._vault.withdraw,
                self._input_token,
                input_tokens_out,
                sender,
                self.address,
            )

            self._emit(
                LiquidityRemoved(
                    user=sender,
                    bonding_token_amount=bonding_token_amount,
                    input_tokens_out=input_tokens_out,
                    hook_fee=adjustment.hook_result.fee,
                    delta_bonding_token=adjustment.hook_result.delta_bonding_token,
                )
            )
            if fee_basis_points > 0:
                self._emit(
                    FeeCollected(
                        user=sender,
                        fee_basis_points=fee_basis_points,
                        bonding_token_amount=bonding_token_amount,
                        fee_amount=self._fees.fee_amount(bonding_token_amount),
                    )
                )

        logger.info(
            "liquidity removed: user=%s burned=%d input_out=%d (base=%d, fee=%d bps)",
            sender,
            bonding_token_amount,
            input_tokens_out,
            base_input_tokens,
            fee_basis_points,
        )
        return input_tokens_out

    # =========================================================================
    # QUERIES
    # =========================================================================

    def quote_add_liquidity(self, input_amount: int) -> int:
        """Базовая котировка депозита (без hook)."""
        return self._engine.quote_add_liquidity(input_amount)

    def quote_remove_liquidity(self, bonding_token_amount: int) -> int:
        """Базовая котировка вывода с текущим withdrawal fee (без hook)."""
        return self._engine.quote_remove_liquidity(
            bonding_token_amount, self._fees.fee_basis_points
        )

    def get_current_marginal_price(self) -> int:
        return self._engine.get_current_marginal_price()

    def get_initial_marginal_price(self) -> int:
        return self._engine.get_initial_marginal_price()

    def get_final_marginal_price(self) -> int:
        return self._engine.get_final_marginal_price()

    def get_average_price(self) -> int:
        return self._engine.get_average_price()

    def get_total_raised(self) -> int:
        return self._engine.get_total_raised()

    def get_virtual_pair(self) -> VirtualPair:
        return self._engine.get_virtual_pair()

    # --- state getters -------------------------------------------------------

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def curve_state(self) -> CurveState:
        return self._lifecycle.curve_state

    @property
    def locked(self) -> bool:
        return self._lifecycle.locked

    @property
    def paused(self) -> bool:
        if self._pauser is None:
            return False
        return self._external("pauser", "paused", lambda: self._pauser.paused)

    @property
    def vault_approval_initialized(self) -> bool:
        return self._lifecycle.vault_approval_initialized

    @property
    def withdrawal_fee_basis_points(self) -> int:
        return self._fees.fee_basis_points

    @property
    def reserves(self) -> VirtualReserves:
        return self._engine.reserves

    @property
    def goals(self) -> Optional[Goals]:
        return self._engine.goals

    @property
    def virtual_input_tokens(self) -> int:
        return self._engine.reserves.virtual_input_tokens

    @property
    def virtual_l(self) -> int:
        return self._engine.reserves.virtual_l

    @property
    def virtual_k(self) -> int:
        return self._engine.reserves.virtual_k

    @property
    def alpha(self) -> int:
        return self._engine.reserves.alpha

    @property
    def beta(self) -> int:
        return self._engine.reserves.beta

    @property
    def hook(self) -> BondingCurveHook:
        return self._hooks.hook

    @property
    def hook_name(self) -> str:
        return type(self._hooks.hook).__name__

    @property
    def claim_token(self) -> ClaimToken:
        return self._claim_token

    @property
    def input_token(self) -> FundingToken:
        return self._input_token

    @property
    def vault(self) -> Vault:
        return self._vault

    @property
    def events(self) -> Tuple[CurveEvent, ...]:
        return tuple(self._events)

    @property
    def transition_history(self):
        return self._state_machine.transition_history

    def drain_events(self) -> Tuple[CurveEvent, ...]:
        """Забрать накопленные события и очистить журнал.

        Raises:
            ReentrancyError: вызов изнутри мутирующей операции
        """
        with self._guard.hold():
            drained = tuple(self._events)
            self._events.clear()
        logger.debug("drained %d events", len(drained))
        return drained

    def snapshot(self) -> dict[str, Any]:
        """JSON-совместимый снапшот, валидированный контрактом engine_state."""
        reserves = self._engine.reserves
        goals = self._engine.goals
        state = {
            "schema_version": ENGINE_STATE_SCHEMA_VERSION,
            "owner": self._owner,
            "curve_state": self._lifecycle.curve_state.value,
            "reserves": reserves.model_dump(),
            "goals": goals.model_dump() if goals is not None else None,
            "withdrawal_fee_basis_points": self._fees.fee_basis_points,
            "vault_approval_initialized": self._lifecycle.vault_approval_initialized,
            "paused": self.paused,
            "hook": self.hook_name,
        }
        validate_engine_state(state)
        return state

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _run_gates(self, amount: int, amount_name: str) -> None:
        self._gatekeeper.enforce(
            curve_state=self._lifecycle.curve_state,
            paused=self.paused,
            vault_approval_initialized=self._lifecycle.vault_approval_initialized,
            amount=amount,
            amount_name=amount_name,
        )

    def _apply_lock_action(self, sender: str, action: LifecycleAction, name: str) -> None:
        self._require_owner(sender, name)

        with self._guard.hold(), self._atomic(name):
            transition = self._state_machine.evaluate_transition(
                self._lifecycle.curve_state, action
            )
            if transition.transition_occurred:
                self._lifecycle = self._lifecycle.model_copy(
                    update={"curve_state": transition.new_state}
                )
                self._emit(LockStateChanged(locked=self._lifecycle.locked))

        self._state_machine.record(transition)

    def _set_vault_approval(self, initialized: bool) -> None:
        if self._lifecycle.vault_approval_initialized == initialized:
            return
        self._lifecycle = self._lifecycle.model_copy(
            update={"vault_approval_initialized": initialized}
        )
        self._emit(VaultApprovalChanged(initialized=initialized))

    def _revoke_vault_allowance(self) -> None:
        self._external(
            "funding_token",
            "approve",
            self._input_token.approve,
            self.address,
            self._vault.address,
            0,
        )

    def _require_owner(self, sender: str, action: str) -> None:
        if sender != self._owner:
            raise AuthorizationError(sender, action)

    def _emit(self, event: CurveEvent) -> None:
        self._events.append(event)

    @staticmethod
    def _external(collaborator: str, operation: str, call: Callable[..., Any], *args) -> Any:
        """Вызов коллаборатора; нативные исключения → CollaboratorCallError."""
        try:
            return call(*args)
        except CurveEngineError:
            raise
        except Exception as exc:
            raise CollaboratorCallError(collaborator, operation, exc) from exc

    # --- atomicity -----------------------------------------------------------

    def _atomic(self, operation: str) -> AtomicScope:
        return AtomicScope(
            operation=operation,
            snapshot=self._take_snapshot,
            restore=self._restore_snapshot,
            participants=(
                self._claim_token,
                self._input_token,
                self._vault,
                self._pauser,
                self._hooks.hook,
            ),
        )

    def _take_snapshot(self) -> _ControllerSnapshot:
        return _ControllerSnapshot(
            engine=self._engine.snapshot(),
            lifecycle=self._lifecycle,
            fee_config=self._fees.config,
            hook=self._hooks.hook,
            owner=self._owner,
            claim_token=self._claim_token,
            input_token=self._input_token,
            vault=self._vault,
            pauser=self._pauser,
            event_count=len(self._events),
        )

    def _restore_snapshot(self, snapshot: _ControllerSnapshot) -> None:
        self._engine.restore(snapshot.engine)
        self._lifecycle = snapshot.lifecycle
        self._fees.restore(snapshot.fee_config)
        self._hooks.set_hook(snapshot.hook)
        self._owner = snapshot.owner
        self._claim_token = snapshot.claim_token
        self._input_token = snapshot.input_token
        self._vault = snapshot.vault
        self._pauser = snapshot.pauser
        del self._events[snapshot.event_count:]

"""GATE 2: Vault Approval

- Третий gate в цепочке
- Блокирует вход, пока vault не получил allowance на funding token
  (initialize_vault_approval не вызывался, либо vault/token был заменён
  или отключён через disable_token)
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Gate02Result:
    """Результат GATE 2."""

    entry_allowed: bool
    block_reason: str

    vault_approval_initialized: bool

    details: str


class Gate02VaultApproval:
    """GATE 2: Vault Approval."""

    def evaluate(self, vault_approval_initialized: bool) -> Gate02Result:
        if not vault_approval_initialized:
            return Gate02Result(
                entry_allowed=False,
                block_reason="vault_not_approved",
                vault_approval_initialized=vault_approval_initialized,
                details="Vault approval not initialized: call initialize_vault_approval"
            )

        return Gate02Result(
            entry_allowed=True,
            block_reason="",
            vault_approval_initialized=vault_approval_initialized,
            details="PASS: vault approved"
        )

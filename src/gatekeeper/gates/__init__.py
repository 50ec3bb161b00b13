"""Gates — индивидуальные гейты цепочки допуска мутирующих операций.

- GATE 0: Lifecycle (goals set, not locked)
- GATE 1: External Pause
- GATE 2: Vault Approval
- GATE 3: Amount Validation
"""

from .gate_00_lifecycle import Gate00Lifecycle, Gate00Result
from .gate_01_pause import Gate01Pause, Gate01Result
from .gate_02_vault_approval import Gate02Result, Gate02VaultApproval
from .gate_03_amount_validation import Gate03AmountValidation, Gate03Result

__all__ = [
    "Gate00Lifecycle",
    "Gate00Result",
    "Gate01Pause",
    "Gate01Result",
    "Gate02VaultApproval",
    "Gate02Result",
    "Gate03AmountValidation",
    "Gate03Result",
]

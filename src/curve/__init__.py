"""Curve — virtual-pair bonding curve.

- GoalConfigurator: одноразовый вывод alpha/beta/K/L0
- VirtualPairEngine: резервы, инвариант, котировки, цены
- WithdrawalFeeModule: fee на вывод в basis points
"""

from .goal_configurator import GoalConfiguration, GoalConfigurator
from .virtual_pair import VirtualPairEngine
from .withdrawal_fee import WithdrawalFeeModule

__all__ = [
    "GoalConfiguration",
    "GoalConfigurator",
    "VirtualPairEngine",
    "WithdrawalFeeModule",
]

"""
Pool operations.
"""

import time
from typing import Sequence

from ..core.events import EventType, PoolsUpdatedEvent
from ..normalizer.presentation import format_eth_amount
from ..schemas import OperationResult, OperationType, PoolInfo, PoolsData
from .base import BaseOperations
from .lifecycle import OperationPlan

# Order of the values returned by the contract's pool data read
POOL_FIELDS = (
    ("prize_pool", "Rewards for top players each epoch"),
    ("equipment_pool", "Funding for equipment drops"),
    ("gas_refund_pool", "Gas fee reimbursements"),
    ("developer_pool", "Development funding"),
    ("next_epoch_pool", "Reserved for next epoch rewards"),
    ("emergency_pool", "Emergency funds and contingency"),
)


def build_pools_data(
    values: Sequence[int],
    decimals: int = 18,
    symbol: str = "CFX",
    last_updated: float = 0.0,
) -> PoolsData:
    """Turn the six raw pool balances into PoolsData with shares of the total."""
    amounts = [int(value) for value in list(values)[:len(POOL_FIELDS)]]
    amounts += [0] * (len(POOL_FIELDS) - len(amounts))
    total = sum(amounts)

    pools = {}
    for (name, description), amount in zip(POOL_FIELDS, amounts):
        pools[name] = PoolInfo(
            value=amount,
            formatted=format_eth_amount(amount, decimals, symbol),
            description=description,
            percentage=(amount * 100 // total) if total > 0 else 0,
        )

    return PoolsData(total_value=total, last_updated=last_updated, **pools)


class PoolsOperations(BaseOperations):

    async def load_pools(self) -> OperationResult[PoolsData]:
        ledger_config = self.config.ledger

        async def execute() -> PoolsData:
            values = await self.ledger.get_all_pool_data()
            return build_pools_data(
                values,
                decimals=ledger_config.currency_decimals,
                symbol=ledger_config.currency_symbol,
                last_updated=time.time(),
            )

        return await self.lifecycle.run(OperationPlan(
            operation_type=OperationType.LOAD_POOLS,
            execute=execute,
            progress="Loading pools...",
            success_event=EventType.POOLS_UPDATED,
            success_message="Pools loaded",
            requires_player=False,
            success_payload=lambda pools: PoolsUpdatedEvent(pools=pools),
            on_success=self.store.update_pools,
        ))

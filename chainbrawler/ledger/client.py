"""
Interface the ledger collaborator must expose.

The core never talks to a chain directly; the host supplies an object that
satisfies LedgerClient. Reads return plain values or mappings that the raw
records in ``records.py`` can validate. Mutations return an opaque
transaction handle or raise. Watch streams call back with batches of raw logs
(at-least-once, unordered across streams) and return an unwatch callable.
"""

from typing import Any, Callable, List, Mapping, Optional, Protocol, Sequence, runtime_checkable

RawLogBatch = List[Mapping[str, Any]]
LogCallback = Callable[[RawLogBatch], None]
Unwatch = Callable[[], None]


@runtime_checkable
class LedgerClient(Protocol):

    # Reads

    async def get_character(self, address: str) -> Optional[Mapping[str, Any]]: ...

    async def get_combat_state(self, address: str) -> Optional[Mapping[str, Any]]: ...

    async def is_character_in_combat(self, address: str) -> bool: ...

    async def get_scaled_enemy_stats(self, enemy_id: int, enemy_level: int) -> Mapping[str, Any]: ...

    async def get_creation_fee(self) -> int: ...

    async def get_healing_fee(self) -> int: ...

    async def get_resurrection_fee(self) -> int: ...

    async def get_all_pool_data(self) -> Sequence[int]: ...

    async def get_current_epoch(self) -> int: ...

    async def get_epoch_score(self, address: str, epoch: int) -> int: ...

    async def get_total_player_count(self) -> int: ...

    async def get_player_by_index(self, index: int) -> Optional[str]: ...

    async def get_epoch_time_remaining(self) -> int: ...

    async def is_claimed(self, epoch: int, index: int) -> bool: ...

    async def get_merkle_proof_for_player(self, address: str, epoch: int) -> Optional[Mapping[str, Any]]: ...

    # Mutations

    async def create_character(self, class_id: int, fee: int) -> str: ...

    async def fight_enemy(self, enemy_id: int, enemy_level: int) -> str: ...

    async def continue_fight(self) -> str: ...

    async def flee_round(self) -> str: ...

    async def heal_character(self, fee: int) -> str: ...

    async def resurrect_character(self, fee: int) -> str: ...

    async def claim_prize(self, epoch: int, index: int, amount: int, proof: List[str]) -> str: ...

    # Watch streams

    def watch_fight_summary_event(self, on_logs: LogCallback) -> Unwatch: ...

    def watch_character_healed_event(self, on_logs: LogCallback) -> Unwatch: ...

    def watch_character_resurrected_event(self, on_logs: LogCallback) -> Unwatch: ...

    def watch_equipment_dropped_event(self, on_logs: LogCallback) -> Unwatch: ...

"""
BrawlerClient: the facade a host application talks to.

Wires one StateStore, EventBus, EventHandler and menu sync to a ledger
collaborator, ingests the ledger's watch streams and exposes the action
surface. Each instance is one isolated session.
"""

import asyncio
from collections import OrderedDict, deque
from typing import Callable, Deque, List, Optional, Set, Tuple

from pydantic import ValidationError

from .config import BrawlerConfig, get_config
from .core.errors import describe_ledger_error
from .core.event_bus import EventBus
from .core.event_handler import EventHandler
from .core.events import (
    EquipmentDroppedEvent,
    ErrorEvent,
    EventType,
    FightCompletedEvent,
    HealingCompletedEvent,
    ResurrectionCompletedEvent,
)
from .core.state_store import StateListener, StateStore
from .game.derived_state import READY_MESSAGE, DerivedStateSync, status_message_for
from .ledger.client import LedgerClient, RawLogBatch, Unwatch
from .ledger.records import RawEquipmentDrop, RawHealingEvent, RawLog, RawResurrectionEvent
from .logging_config import get_logger
from .normalizer.fight_data import normalize_equipment_drop, normalize_fight_summary, validate_fight_summary
from .operations import (
    CharacterOperations,
    ClaimsOperations,
    CombatOperations,
    LeaderboardOperations,
    OperationLifecycle,
    PoolsOperations,
)
from .schemas import (
    CharacterData,
    ClaimsData,
    FightSummaryData,
    HealingData,
    LeaderboardData,
    MenuState,
    OperationErrorCodes,
    OperationResult,
    OperationState,
    PoolsData,
    ResurrectionData,
    UXState,
)
from .validation import ValidationManager

logger = get_logger(__name__)

LogKey = Tuple[str, str, Optional[int]]

FIGHT_SUMMARY_STREAM = "fight_summary"
CHARACTER_HEALED_STREAM = "character_healed"
CHARACTER_RESURRECTED_STREAM = "character_resurrected"
EQUIPMENT_DROPPED_STREAM = "equipment_dropped"


class BrawlerClient:
    """
    Session facade over the ledger collaborator.

    Actions return OperationResult and never raise for expected failures.
    Ledger logs are filtered to the session's player, de-duplicated and
    normalized before they reach the event bus.
    """

    def __init__(self, ledger: LedgerClient, config: Optional[BrawlerConfig] = None):
        self.config = config or get_config()
        self.ledger = ledger

        self.store = StateStore()
        self.events = EventBus()
        self.validator = ValidationManager(self.config.validation)
        self.lifecycle = OperationLifecycle(self.store, self.events, self.validator)
        self._event_handler = EventHandler(self.store, self.events)
        self._menu_sync = DerivedStateSync(self.store)

        family_args = (ledger, self.store, self.events, self.lifecycle, self.validator, self.config)
        self.character = CharacterOperations(*family_args)
        self.combat = CombatOperations(*family_args)
        self.pools = PoolsOperations(*family_args)
        self.leaderboard = LeaderboardOperations(*family_args)
        self.claims = ClaimsOperations(*family_args)

        window = max(1, self.config.session.event_dedupe_window)
        self._seen_order: Deque[LogKey] = deque(maxlen=window)
        self._seen: Set[LogKey] = set()
        self._pending_drops: "OrderedDict[str, RawEquipmentDrop]" = OrderedDict()
        self._pending_drop_limit = window

        self._unwatchers: List[Unwatch] = []
        self._tasks: Set[asyncio.Task] = set()

    # =========================================================================
    # Session
    # =========================================================================

    async def initialize(self) -> OperationResult[None]:
        """Start the watch streams, leave loading and load the pools."""
        logger.info("Initializing client session")
        self.store.set_loading(True)

        try:
            self._start_watchers()
        except Exception as e:
            self.store.set_loading(False)
            return self._session_failure("Failed to start event watchers", e)

        self.store.set_loading(False)

        pools = await self.pools.load_pools()
        if not pools.success:
            logger.warning(f"Initial pool load failed: {pools.error}")

        self.store.set_status_message(READY_MESSAGE)
        return OperationResult.ok()

    async def initialize_player(self, address: str) -> OperationResult[CharacterData]:
        """Bind the session to a player and load their character, standings and rewards."""
        check = self.validator.check_player_address(address)
        if not check:
            return OperationResult.failure(check.reason, code=OperationErrorCodes.INVALID_INPUT)

        self.store.set_player_address(address)
        self._pending_drops.clear()

        try:
            character = await self.character.load_character(address)
        except Exception as e:
            return self._session_failure("Failed to load character", e)

        leaderboard = await self.leaderboard.load_leaderboard(address)
        if not leaderboard.success:
            logger.warning(f"Leaderboard load failed: {leaderboard.error}")

        if character is not None and character.exists:
            claims = await self.claims.load_claims(address)
            if not claims.success:
                logger.warning(f"Claims load failed: {claims.error}")

        return OperationResult.ok(character)

    async def refresh_all(self) -> OperationResult[List[OperationResult]]:
        """Reload pools, then the leaderboard and claims for a player session."""
        results: List[OperationResult] = [await self.pools.load_pools()]

        if self.store.get_player_address():
            results.append(await self.leaderboard.load_leaderboard())
            character = self.store.get_character()
            if character is not None and character.exists:
                results.append(await self.claims.load_claims())

        failed = [result for result in results if not result.success]
        if failed:
            result = OperationResult.failure(failed[0].error, code=failed[0].code, ledger_code=failed[0].ledger_code)
            result.data = results
            return result
        return OperationResult.ok(results)

    def _session_failure(self, context: str, error: Exception) -> OperationResult:
        info = describe_ledger_error(error)
        message = f"{context}: {info.message}"
        logger.error(message)
        self.events.emit(EventType.ERROR_OCCURRED, ErrorEvent(
            message=message,
            code=info.code,
            category=info.category.name,
            retryable=info.retryable,
        ))
        return OperationResult.failure(message, code=OperationErrorCodes.LEDGER_ERROR, ledger_code=info.code)

    def set_healing_cooldown(self, seconds: int) -> None:
        self._menu_sync.set_healing_cooldown(seconds)

    def clear_error(self) -> None:
        self.store.clear_error()
        self.store.set_status_message(status_message_for(self.store.get_state()))

    def clear_operation(self) -> bool:
        """Return the tracker to idle. An active operation cannot be cleared."""
        operation = self.store.get_operation()
        if operation is not None and operation.is_active:
            logger.warning("Refusing to clear an active operation")
            return False
        self.store.clear_operation()
        return True

    def reset(self) -> None:
        """Drop all session state. Watch streams stay attached."""
        self._seen.clear()
        self._seen_order.clear()
        self._pending_drops.clear()
        self._menu_sync.set_healing_cooldown(0)
        self.store.reset()

    async def close(self) -> None:
        """Stop watching, wait for background refreshes and detach listeners."""
        for unwatch in self._unwatchers:
            try:
                unwatch()
            except Exception as e:
                logger.warning(f"Error while unwatching: {e}")
        self._unwatchers.clear()

        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

        self._menu_sync.close()
        self._event_handler.close()
        logger.info("Client session closed")

    # =========================================================================
    # Actions
    # =========================================================================

    async def create_character(self, class_id: int) -> OperationResult[str]:
        return await self.character.create_character(class_id)

    async def fight_enemy(self, enemy_id: int, enemy_level: int) -> OperationResult[str]:
        return await self.combat.fight_enemy(enemy_id, enemy_level)

    async def continue_fight(self) -> OperationResult[str]:
        return await self.combat.continue_fight()

    async def flee_round(self) -> OperationResult[str]:
        return await self.combat.flee_round()

    async def heal_character(self) -> OperationResult[str]:
        return await self.character.heal_character()

    async def resurrect_character(self) -> OperationResult[str]:
        return await self.character.resurrect_character()

    async def claim_prize(self, epoch: int, index: int, amount: int, proof: List[str]) -> OperationResult[str]:
        return await self.claims.claim_prize(epoch, index, amount, proof)

    async def load_pools(self) -> OperationResult[PoolsData]:
        return await self.pools.load_pools()

    async def load_leaderboard(self) -> OperationResult[LeaderboardData]:
        return await self.leaderboard.load_leaderboard()

    async def load_claims(self) -> OperationResult[ClaimsData]:
        return await self.claims.load_claims()

    # =========================================================================
    # Read accessors
    # =========================================================================

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        return self.store.subscribe(listener)

    def get_state(self) -> UXState:
        return self.store.get_state()

    def get_player_address(self) -> Optional[str]:
        return self.store.get_player_address()

    def get_character(self) -> Optional[CharacterData]:
        return self.store.get_character()

    def get_menu(self) -> Optional[MenuState]:
        return self.store.get_menu()

    def get_operation(self) -> Optional[OperationState]:
        return self.store.get_operation()

    def get_pools(self) -> Optional[PoolsData]:
        return self.store.get_pools()

    def get_leaderboard(self) -> Optional[LeaderboardData]:
        return self.store.get_leaderboard()

    def get_claims(self) -> Optional[ClaimsData]:
        return self.store.get_claims()

    def get_status_message(self) -> str:
        return self.store.get_status_message()

    def get_last_fight_summary(self) -> Optional[FightSummaryData]:
        return self.store.get_last_fight_summary()

    # =========================================================================
    # Ledger event ingestion
    # =========================================================================

    def _start_watchers(self) -> None:
        if self._unwatchers:
            return
        streams = (
            (self.ledger.watch_fight_summary_event, FIGHT_SUMMARY_STREAM, self._on_fight_summary),
            (self.ledger.watch_character_healed_event, CHARACTER_HEALED_STREAM, self._on_character_healed),
            (self.ledger.watch_character_resurrected_event, CHARACTER_RESURRECTED_STREAM, self._on_character_resurrected),
            (self.ledger.watch_equipment_dropped_event, EQUIPMENT_DROPPED_STREAM, self._on_equipment_dropped),
        )
        for watch, stream, handler in streams:
            self._unwatchers.append(watch(self._log_callback(stream, handler)))
        logger.info(f"Watching {len(streams)} ledger event streams")

    def _log_callback(self, stream: str, handler: Callable[[RawLog], None]) -> Callable[[RawLogBatch], None]:
        def on_logs(logs: RawLogBatch) -> None:
            self.ingest_logs(stream, logs, handler)
        return on_logs

    def ingest_logs(self, stream: str, logs: RawLogBatch, handler: Callable[[RawLog], None]) -> None:
        """Filter, de-duplicate and dispatch one batch of raw logs."""
        for raw in logs:
            try:
                log = RawLog.model_validate(dict(raw))
            except (ValidationError, TypeError, ValueError) as e:
                logger.warning(f"Malformed {stream} log ignored: {e}")
                continue

            if not self._is_for_player(log):
                continue
            if self._already_seen(stream, log):
                logger.debug(f"Duplicate {stream} log {log.transaction_hash}:{log.log_index} ignored")
                continue

            try:
                handler(log)
            except Exception:
                logger.exception(f"Error handling {stream} log {log.transaction_hash}")

    def _is_for_player(self, log: RawLog) -> bool:
        address = self.store.get_player_address()
        if not address:
            return False
        player = log.args.get("player")
        if player is None:
            return True
        return str(player).lower() == address.lower()

    def _already_seen(self, stream: str, log: RawLog) -> bool:
        if not log.transaction_hash:
            return False
        key = (stream, log.transaction_hash.lower(), log.log_index)
        if key in self._seen:
            return True
        if len(self._seen_order) == self._seen_order.maxlen:
            self._seen.discard(self._seen_order[0])
        self._seen_order.append(key)
        self._seen.add(key)
        return False

    def _on_fight_summary(self, log: RawLog) -> None:
        tx = log.transaction_hash
        drop = self._pending_drops.pop(tx, None) if tx else None
        summary = normalize_fight_summary(log.args, drop, transaction_hash=tx)

        validation = validate_fight_summary(summary, self.config.validation.max_summary_enemy_level)
        if not validation.is_valid:
            logger.warning(f"Fight summary {tx} has problems: {'; '.join(validation.errors)}")

        self.events.emit(EventType.FIGHT_COMPLETED, FightCompletedEvent(summary=summary))
        self._schedule_refresh()

    def _on_equipment_dropped(self, log: RawLog) -> None:
        tx = log.transaction_hash
        record = RawEquipmentDrop.model_validate(log.args)
        equipment = normalize_equipment_drop(record)

        last = self.store.get_last_fight_summary()
        if tx and (last is None or last.transaction_hash != tx):
            # The matching summary has not arrived yet
            self._pending_drops[tx] = record
            while len(self._pending_drops) > self._pending_drop_limit:
                self._pending_drops.popitem(last=False)

        self.events.emit(EventType.EQUIPMENT_DROPPED, EquipmentDroppedEvent(equipment=equipment, transaction_hash=tx))

    def _on_character_healed(self, log: RawLog) -> None:
        record = RawHealingEvent.model_validate(log.args)
        healing = HealingData(new_endurance=record.new_endurance, cost=record.cost, transaction_hash=log.transaction_hash)
        self.events.emit(EventType.HEALING_COMPLETED, HealingCompletedEvent(healing=healing))
        self._schedule_refresh()

    def _on_character_resurrected(self, log: RawLog) -> None:
        record = RawResurrectionEvent.model_validate(log.args)
        resurrection = ResurrectionData(
            new_endurance=record.new_endurance,
            cost=record.cost,
            transaction_hash=log.transaction_hash,
        )
        self.events.emit(EventType.RESURRECTION_COMPLETED, ResurrectionCompletedEvent(resurrection=resurrection))
        self._schedule_refresh()

    def _schedule_refresh(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; character refresh skipped")
            return
        task = loop.create_task(self.character.refresh_quietly())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

"""
Ledger error decoding.

The contract reverts with numeric error codes. This module extracts a code
from whatever exception the ledger collaborator raised and maps it to a
human readable message, a category and a retryable flag.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ChainBrawlerError(Exception):
    """Base class for errors raised by the client core."""


class MissingEventHandlerError(ChainBrawlerError):
    """An event type has no handler registered."""


class ErrorCategory(str, Enum):
    NETWORK_ERROR = "Network connection failed"
    CONTRACT_ERROR = "Contract interaction failed"
    VALIDATION_ERROR = "Invalid operation"
    COOLDOWN_ERROR = "Operation on cooldown"
    CHARACTER_ERROR = "Character state error"
    TRANSACTION_ERROR = "Transaction failed"
    POOL_ERROR = "Pool operation failed"
    LEADERBOARD_ERROR = "Leaderboard operation failed"
    CLAIM_ERROR = "Prize claim failed"
    UNKNOWN_ERROR = "Unknown error occurred"


UNKNOWN_ERROR_CODE = 5000

LEDGER_ERROR_MESSAGES: Dict[int, str] = {
    # Access control
    1001: "Only owner",
    1002: "Only owner or test helper",
    # Fees and payment
    1101: "Insufficient fee",
    1102: "Already at full health",
    1103: "Healing on cooldown",
    # Character
    1201: "Character does not exist",
    1202: "Character is not alive",
    1203: "Invalid address",
    1204: "Character is in combat",
    1205: "Character is not in combat",
    1206: "Character already exists",
    1207: "Invalid class",
    1208: "Character is already alive",
    # Combat
    1301: "Invalid enemy level",
    # Batch operations
    1401: "Empty players array",
    1402: "Batch size too large",
    1403: "Invalid player address",
    # Treasury
    1501: "Drop rate too high",
    1502: "No funds to withdraw",
    1503: "Transfer failed",
    1504: "cached dropRate exceeds MAX_DROP_RATE_BP",
    # Enemies
    1601: "Enemy does not exist",
    1602: "No active combat state",
    # Leaderboard and claims
    1701: "Invalid epoch",
    1702: "No funds provided",
    1703: "Array length mismatch",
    1704: "Insufficient contract balance",
    1705: "Invalid root",
    1706: "Epoch already published",
    1707: "Unfunded epoch",
    1708: "No root available",
    1709: "Dispute window not expired",
    1710: "Claim window expired",
    1711: "Already claimed",
    1712: "Insufficient epoch funds",
    1713: "Not published",
    1714: "Claim window still active",
    1715: "No unclaimed funds",
    1716: "Invalid recipient address",
    1717: "Invalid treasury address",
    1718: "Transfer failed",
    1719: "Invalid proof",
    1720: "Withdraw failed",
    # Bit-packed storage overflow
    2001: "BitPackedCharacterLib: combat overflow",
    2002: "BitPackedCharacterLib: endurance overflow",
    2003: "BitPackedCharacterLib: defense overflow",
    2004: "BitPackedCharacterLib: luck overflow",
    2101: "BitPackedEnemyLib: baseCombat overflow",
    2102: "BitPackedEnemyLib: baseEndurance overflow",
    2103: "BitPackedEnemyLib: baseDefense overflow",
    2104: "BitPackedEnemyLib: baseLuck overflow",
    2105: "BitPackedEnemyLib: xpReward overflow",
    2106: "BitPackedEnemyLib: dropRate overflow",
}

RETRYABLE_CODES = frozenset({1503, 1704, 1718})

_ERROR_CODE_PATTERN = re.compile(r"error code: (\d+)", re.IGNORECASE)


@dataclass(frozen=True)
class LedgerErrorInfo:
    code: int
    message: str
    category: ErrorCategory
    retryable: bool


def get_error_message(code: int) -> str:
    return LEDGER_ERROR_MESSAGES.get(code, f"Unknown error: {code}")


def _as_code(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


def extract_error_code(error: Any) -> Optional[int]:
    """
    Pull a numeric contract error code out of an exception or value.

    Looks at, in order: a plain int, a ``code`` attribute, a nested
    ``error.code`` and finally an ``error code: N`` fragment of the message.
    """
    code = _as_code(error)
    if code is not None:
        return code

    code = _as_code(getattr(error, "code", None))
    if code is not None:
        return code

    nested = getattr(error, "error", None)
    code = _as_code(getattr(nested, "code", None))
    if code is not None:
        return code

    match = _ERROR_CODE_PATTERN.search(str(error))
    if match:
        return int(match.group(1))
    return None


def categorize_error(code: int) -> ErrorCategory:
    if code == UNKNOWN_ERROR_CODE:
        return ErrorCategory.UNKNOWN_ERROR
    if 1000 <= code < 1100:
        return ErrorCategory.VALIDATION_ERROR
    if 1100 <= code < 1200:
        return ErrorCategory.CONTRACT_ERROR
    if 1200 <= code < 1300:
        return ErrorCategory.CHARACTER_ERROR
    if 1300 <= code < 1400:
        return ErrorCategory.CONTRACT_ERROR
    if 1400 <= code < 1500:
        return ErrorCategory.VALIDATION_ERROR
    if 1500 <= code < 1600:
        return ErrorCategory.POOL_ERROR
    if 1600 <= code < 1700:
        return ErrorCategory.CONTRACT_ERROR
    if 1700 <= code < 1800:
        return ErrorCategory.LEADERBOARD_ERROR
    if code >= 2000:
        return ErrorCategory.CONTRACT_ERROR
    return ErrorCategory.UNKNOWN_ERROR


def is_retryable_error(code: int) -> bool:
    return code in RETRYABLE_CODES


def describe_ledger_error(error: Any) -> LedgerErrorInfo:
    """
    Decode an exception raised by the ledger collaborator.

    Errors without a known code keep their own text so no information is lost.
    """
    code = extract_error_code(error)
    if code is not None and code in LEDGER_ERROR_MESSAGES:
        message = LEDGER_ERROR_MESSAGES[code]
    else:
        message = str(error) or type(error).__name__
        if code is None:
            code = UNKNOWN_ERROR_CODE

    return LedgerErrorInfo(
        code=code,
        message=message,
        category=categorize_error(code),
        retryable=is_retryable_error(code),
    )

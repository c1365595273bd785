"""
Intent results shared by the handlers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..state.combat import GameState, LogType

logger = logging.getLogger(__name__)


@dataclass
class IntentResult:
    """Outcome of a player intent."""
    success: bool
    message: str = ""


def accept(state: GameState, message: str, log_type: LogType = LogType.SKILL_USE) -> IntentResult:
    state.log(log_type, message)
    return IntentResult(success=True, message=message)


def reject(state: GameState, message: str, log_type: LogType = LogType.PLAYER_HIT) -> IntentResult:
    """Log a refused intent to the combat log. State is left untouched."""
    logger.info("Intent rejected: %s", message)
    state.log(log_type, message)
    return IntentResult(success=False, message=message)


def ignore(reason: str) -> IntentResult:
    """Silent no-op (unknown ids, empty slots)."""
    logger.debug("Intent ignored: %s", reason)
    return IntentResult(success=False, message=reason)

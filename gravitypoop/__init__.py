# gravitypoop: idle clicker progression engine

from gravitypoop._types import compare
from gravitypoop.errors import GameError, InsufficientFunds, InvalidAmount, SaveLoadFailure
from gravitypoop.requirement import Requirement, Req
from gravitypoop.cost_scaling import CostScaling
from gravitypoop.producer import ProducerDef, ProducerState, ProducerStatus
from gravitypoop.achievement import AchievementDef
from gravitypoop.prestige import PrestigeStatus, PrestigeResult
from gravitypoop.definition import GameDefinition, GameConfig
from gravitypoop.state import PlayerState, PlayerSnapshot
from gravitypoop.pipeline import ProductionPipeline
from gravitypoop.scheduler import Scheduler, ScheduledTask
from gravitypoop.bonus import BonusEvent, BonusEventEngine, BonusStatus
from gravitypoop.collaborators import Confirmer, Notifier, AutoConfirmer, LogNotifier
from gravitypoop.persistence import SaveStore, MemoryStore, JsonFileStore
from gravitypoop.runtime import GameRuntime, PurchaseResult
from gravitypoop.catalog import define_game
from gravitypoop.formatting import format_number, format_status

__all__ = [
    # Types
    "compare",
    # Errors
    "GameError",
    "InsufficientFunds",
    "InvalidAmount",
    "SaveLoadFailure",
    # Requirements
    "Requirement",
    "Req",
    # Cost
    "CostScaling",
    # Data model
    "ProducerDef",
    "ProducerState",
    "ProducerStatus",
    "AchievementDef",
    "PrestigeStatus",
    "PrestigeResult",
    # Definition
    "GameDefinition",
    "GameConfig",
    "define_game",
    # State
    "PlayerState",
    "PlayerSnapshot",
    # Pipeline
    "ProductionPipeline",
    # Scheduling
    "Scheduler",
    "ScheduledTask",
    # Bonus events
    "BonusEvent",
    "BonusEventEngine",
    "BonusStatus",
    # Collaborators
    "Confirmer",
    "Notifier",
    "AutoConfirmer",
    "LogNotifier",
    # Persistence
    "SaveStore",
    "MemoryStore",
    "JsonFileStore",
    # Runtime
    "GameRuntime",
    "PurchaseResult",
    # Formatting
    "format_number",
    "format_status",
]

from __future__ import annotations

from abc import ABC, abstractmethod

from loguru import logger


class Confirmer(ABC):
    """Presentation hook answering yes/no questions such as "prestige now?"."""

    @abstractmethod
    def confirm(self, message: str) -> bool: ...


class Notifier(ABC):
    """Presentation hook for achievement, bonus and prestige announcements."""

    @abstractmethod
    def notify(self, title: str, message: str = "") -> None: ...


class AutoConfirmer(Confirmer):
    """Answers every question with a fixed reply."""

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer

    def confirm(self, message: str) -> bool:
        return self.answer


class LogNotifier(Notifier):
    """Writes notifications to the log."""

    def notify(self, title: str, message: str = "") -> None:
        if message:
            logger.info("{}: {}", title, message)
        else:
            logger.info("{}", title)

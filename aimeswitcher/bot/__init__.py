"""Chat command handling."""

from aimeswitcher.bot.commands import CardChoice, CommandHandlers, CommandReply
from aimeswitcher.bot.notifier import DesktopNotifier, NullNotifier

__all__ = ["CardChoice", "CommandHandlers", "CommandReply", "DesktopNotifier", "NullNotifier"]

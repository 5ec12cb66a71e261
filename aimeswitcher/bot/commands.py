"""Chat command handlers for switching and reporting the active AIME card."""

from dataclasses import dataclass
from typing import Any

import structlog

from aimeswitcher.bot.notifier import Notifier, NullNotifier
from aimeswitcher.cards.active_card import ActiveCardStore
from aimeswitcher.cards.directory import CardDirectory, redact_card_number
from aimeswitcher.errors import CommandError

log = structlog.stdlib.get_logger()

UNKNOWN_NAME = "(unknown)"
UNKNOWN_COMMAND_REPLY = "Unknown command"
UNKNOWN_AUTOCOMPLETE_REPLY = "Unknown autocomplete command"
INTERNAL_ERROR_REPLY = "Something went wrong while handling the command"


@dataclass(frozen=True)
class CardChoice:
    """Autocomplete suggestion for the switch command."""

    name: str
    value: str


@dataclass(frozen=True)
class CommandReply:
    """Reply text for a command and whether a switch notification should follow it."""

    text: str
    notify: bool = False


class CommandHandlers:
    """Platform independent implementation of the bot's commands."""

    def __init__(
        self,
        directory: CardDirectory,
        store: ActiveCardStore,
        game_name: str,
        notifier: Notifier | None = None,
    ):
        """
        Initialize command handlers.

        Args:
            directory: Card directory used for name lookups and autocomplete
            store: Active card file
            game_name: Game name shown in replies
            notifier: Desktop notifier (notifications are skipped if None)
        """
        self._directory = directory
        self._store = store
        self._game_name = game_name
        self._notifier: Notifier = notifier or NullNotifier()

    @property
    def directory(self) -> CardDirectory:
        return self._directory

    def replace_directory(self, directory: CardDirectory) -> None:
        """Swap in a reloaded card directory."""
        self._directory = directory
        log.info("card_directory_replaced", cards=len(directory))

    def switch(self, card_number: str) -> str:
        """
        Make a card the active one.

        Args:
            card_number: Card number to activate

        Returns:
            Confirmation message

        Raises:
            CommandError: If the active card file cannot be written
        """
        try:
            self._store.write(card_number)
        except OSError as e:
            log.error("active_card_write_failed", path=str(self._store.path), error=str(e))
            raise CommandError(f"Failed to write to {self._store.path.name}: {e}") from e

        name = self._display_name(card_number)
        log.info("card_switched", game=self._game_name, name=name, card=card_number)
        return f"Switched active AIME on **{self._game_name}** to **{name}** (`{card_number}`)"

    def send_notification(self, reply: CommandReply) -> None:
        """
        Show the desktop notification for a reply that asks for one.

        Called after the reply has been delivered. Notification failures are
        logged and never raised.
        """
        if not reply.notify:
            return
        try:
            self._notifier.notify(f"{self._game_name} AIME Switched", reply.text)
        except Exception as e:
            log.warning("desktop_notification_failed", error=str(e))

    def whoami(self) -> str:
        """
        Report the active card.

        Raises:
            CommandError: If the active card file cannot be read
        """
        try:
            card_number = self._store.read().strip()
        except OSError as e:
            log.error("active_card_read_failed", path=str(self._store.path), error=str(e))
            raise CommandError(f"Failed to read from {self._store.path.name}: {e}") from e

        name = self._display_name(card_number)
        log.info("whoami_responding", name=name, card=card_number)
        return f"Active AIME on **{self._game_name}** is **{name}** (`{card_number}`)"

    def autocomplete_switch(self, current: str = "") -> list[CardChoice]:
        """
        Known cards as suggestions, card numbers redacted in the label.

        Args:
            current: Text typed so far; only names containing it (ignoring
                case) are suggested. Empty matches every card.
        """
        needle = current.strip().casefold()
        choices = [
            CardChoice(name=f"{name} ({redact_card_number(card_number)})", value=card_number)
            for name, card_number in self._directory.items()
            if needle in name.casefold()
        ]
        log.debug("autocomplete_responding", current=current, choices=len(choices))
        return choices

    def dispatch(self, command: str, options: dict[str, Any] | None = None) -> CommandReply:
        """
        Run a command and turn every outcome into a reply.

        Command errors are returned as their message; unexpected exceptions are
        logged and answered with a generic reply so the caller never fails.

        Args:
            command: Command name
            options: Command options by name

        Returns:
            Reply to send; a successful switch also asks for a notification
        """
        options = options or {}
        try:
            if command == "switch":
                return CommandReply(self.switch(str(options["card"])), notify=True)
            if command == "whoami":
                return CommandReply(self.whoami())
            log.warning("unknown_command", command=command)
            return CommandReply(UNKNOWN_COMMAND_REPLY)
        except CommandError as e:
            return CommandReply(str(e))
        except Exception:
            log.exception("command_failed", command=command)
            return CommandReply(INTERNAL_ERROR_REPLY)

    def dispatch_autocomplete(self, command: str, current: str = "") -> list[CardChoice]:
        """
        Suggestions for a command's autocomplete request.

        Raises:
            CommandError: If the command has no autocomplete
        """
        if command == "switch":
            return self.autocomplete_switch(current)
        raise CommandError(UNKNOWN_AUTOCOMPLETE_REPLY)

    def _display_name(self, card_number: str) -> str:
        return self._directory.name_for(card_number) or UNKNOWN_NAME

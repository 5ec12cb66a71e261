"""Discord client exposing the switch and whoami slash commands."""

import asyncio
from typing import Any

import discord
import structlog
from discord import app_commands

from aimeswitcher.bot.commands import INTERNAL_ERROR_REPLY, CommandHandlers

log = structlog.stdlib.get_logger()

# Discord rejects autocomplete responses with more choices than this
MAX_AUTOCOMPLETE_CHOICES = 25


class SwitcherBot(discord.Client):
    """Discord client forwarding slash command interactions to CommandHandlers."""

    def __init__(self, handlers: CommandHandlers, game_name: str, application_id: int):
        super().__init__(intents=discord.Intents.default(), application_id=application_id)
        self._handlers = handlers
        self._game_name = game_name
        self.tree = app_commands.CommandTree(self)
        self.tree.on_error = self._on_tree_error
        self._register_commands()

    def _register_commands(self) -> None:
        @self.tree.command(name="switch", description=f"Switch active AIME of {self._game_name}")
        @app_commands.describe(card="AIME card")
        async def switch(interaction: discord.Interaction, card: str) -> None:
            await self._respond(interaction, "switch", {"card": card})

        @switch.autocomplete("card")
        async def switch_card_autocomplete(
            interaction: discord.Interaction, current: str
        ) -> list[app_commands.Choice[str]]:
            return await self.autocomplete_cards(current)

        @self.tree.command(
            name="whoami", description=f"Get current active AIME of {self._game_name}"
        )
        async def whoami(interaction: discord.Interaction) -> None:
            await self._respond(interaction, "whoami")

    async def autocomplete_cards(self, current: str) -> list[app_commands.Choice[str]]:
        """Suggestions for the switch command's card option, at most the platform limit."""
        choices = await asyncio.to_thread(self._handlers.dispatch_autocomplete, "switch", current)
        log.info("autocomplete_received", command="switch", current=current, choices=len(choices))
        return [
            app_commands.Choice(name=choice.name, value=choice.value)
            for choice in choices[:MAX_AUTOCOMPLETE_CHOICES]
        ]

    async def setup_hook(self) -> None:
        # Replaces every global command registered for the application
        synced = await self.tree.sync()
        log.info("commands_registered", commands=[command.name for command in synced])

    async def on_ready(self) -> None:
        log.info("bot_running", user=str(self.user))

    async def _respond(
        self,
        interaction: discord.Interaction,
        command: str,
        options: dict[str, Any] | None = None,
    ) -> None:
        log.info("command_received", command=command, user=str(interaction.user))
        reply = await asyncio.to_thread(self._handlers.dispatch, command, options)
        await interaction.response.send_message(reply.text)
        # Notify only once the interaction has been answered
        await asyncio.to_thread(self._handlers.send_notification, reply)

    async def _on_tree_error(
        self, interaction: discord.Interaction, error: app_commands.AppCommandError
    ) -> None:
        log.error(
            "interaction_failed",
            command=interaction.command.name if interaction.command else None,
            error=str(error),
        )
        if interaction.response.is_done():
            return
        try:
            await interaction.response.send_message(INTERNAL_ERROR_REPLY, ephemeral=True)
        except discord.DiscordException as e:
            log.warning("error_reply_failed", error=str(e))


def run_bot(handlers: CommandHandlers, game_name: str, token: str, application_id: int) -> None:
    """
    Connect to Discord and serve commands until the client is closed.

    Raises:
        discord.DiscordException: If login or command registration fails
    """
    bot = SwitcherBot(handlers, game_name=game_name, application_id=application_id)
    # log_handler=None keeps the structlog configuration in place
    bot.run(token, log_handler=None)

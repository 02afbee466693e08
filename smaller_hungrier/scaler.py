"""Event handlers that push computed scales into the host's attribute system."""
from __future__ import annotations

import logging
from typing import Optional

from .configuration import Configuration
from .errors import MissingAttributeError
from .host_api import AttributeTypes, JoinEvent, RespawnPostEvent, ServerPlayer, ValueChangeEvent
from .logging_utils import LOGGER_NAME


class PlayerScaler:
    """Keeps each player's scale attribute in step with the configured metric.

    The configuration is fixed for the lifetime of the instance; a new
    configuration means a new scaler.
    """

    def __init__(self, configuration: Configuration, logger: Optional[logging.Logger] = None) -> None:
        self.configuration = configuration
        self._logger = logger or logging.getLogger(LOGGER_NAME)

    # Host events ----------------------------------------------------------

    def handle_join(self, event: JoinEvent) -> None:
        self.update_scale(event.player)

    def handle_respawn(self, event: RespawnPostEvent) -> None:
        # Respawning resets vitals, so the previous scale is stale.
        self.update_scale(event.entity)

    def handle_value_change(self, event: ValueChangeEvent) -> bool:
        holder = event.target_holder
        if not isinstance(holder, ServerPlayer):
            return False
        scale = self.configuration.scale_for_transaction(event.end_result)
        if scale is None:
            return False
        self.update_scale(holder, scale)
        return True

    # Helpers --------------------------------------------------------------

    def update_scale(self, player: ServerPlayer, scale: Optional[float] = None) -> float:
        """Set ``player``'s scale attribute, computing it from the player when ``scale`` is None."""
        if scale is None:
            scale = self.configuration.scale_for_player(player)
        attribute = player.attribute(AttributeTypes.GENERIC_SCALE)
        if attribute is None:
            raise MissingAttributeError(
                f"Could not find '{AttributeTypes.GENERIC_SCALE}' attribute for player '{player.name()}'"
            )
        attribute.set_base_value(scale)
        self._logger.debug("Applied scale %.4f to player %s", scale, player.name())
        return scale

"""Shapes of the host server objects the plugin reads from and writes to.

The game server owns players, attributes and events. These protocols describe
only the surface the plugin touches so a host adapter (or a test double) can
stand in for the real server objects.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class Key:
    """Identifies a data value on a data holder, e.g. a player's food level."""

    name: str

    def __str__(self) -> str:
        return self.name


class Keys:
    FOOD_LEVEL = Key("food_level")
    HEALTH = Key("health")


class AttributeTypes:
    GENERIC_SCALE = "generic.scale"


class Attribute(Protocol):
    """Attribute instance for a living entity."""

    def set_base_value(self, value: float) -> Any: ...


@runtime_checkable
class DataHolder(Protocol):
    def get(self, key: Key) -> Optional[Any]: ...


@runtime_checkable
class ServerPlayer(Protocol):
    """A connected player. Mobs and other data holders have no connection."""

    def name(self) -> str: ...

    def get(self, key: Key) -> Optional[Any]: ...

    def attribute(self, attribute_type: str) -> Optional[Attribute]: ...

    def connection(self) -> Any: ...


class DataTransactionResult(Protocol):
    def successful_value(self, key: Key) -> Optional[Any]: ...


class JoinEvent(Protocol):
    @property
    def player(self) -> ServerPlayer: ...


class RespawnPostEvent(Protocol):
    @property
    def entity(self) -> ServerPlayer: ...


class ValueChangeEvent(Protocol):
    @property
    def target_holder(self) -> DataHolder: ...

    @property
    def end_result(self) -> DataTransactionResult: ...

# Area: Room
"""
colorpass._room.inputs — Action input models
============================================

pydantic models for the payload of every action. Input is checked and
normalised here, before any storage is touched; pydantic failures are
re-raised as ``colorpass.errors.ValidationError``.
"""

from __future__ import annotations
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from pydantic import ValidationError as PydanticValidationError

from .room_ids import ROOM_ID_LENGTH, is_valid_room_id, normalize_room_id
from ..errors import ValidationError

MAX_NAME_LENGTH = 40

ModelT = TypeVar("ModelT", bound=BaseModel)


class _ActionInput(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class _RoomRef(_ActionInput):
    room_id: str = Field(alias="roomId")

    @field_validator("room_id", mode="before")
    @classmethod
    def _normalize_room_id(cls, value: Any) -> Any:
        if isinstance(value, str):
            return normalize_room_id(value)
        return value

    @field_validator("room_id")
    @classmethod
    def _check_room_id(cls, value: str) -> str:
        if not is_valid_room_id(value):
            raise ValueError(
                f"room id must be {ROOM_ID_LENGTH} characters from A-Z and 0-9"
            )
        return value


class _Named(_ActionInput):
    player_name: str = Field(alias="playerName")

    @field_validator("player_name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("player name must not be empty")
        if len(value) > MAX_NAME_LENGTH:
            raise ValueError(f"player name must be at most {MAX_NAME_LENGTH} characters")
        return value


class CreateRoomInput(_Named):
    pass


class JoinRoomInput(_RoomRef, _Named):
    pass


class RoomRefInput(_RoomRef):
    pass


class StartGameInput(_RoomRef):
    caller_player_id: StrictInt = Field(alias="callerPlayerId", ge=0)


class PlayCardInput(_RoomRef):
    caller_player_id: StrictInt = Field(alias="callerPlayerId", ge=0)
    card_id: str = Field(alias="cardId")

    @field_validator("card_id")
    @classmethod
    def _check_card_id(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("card id must not be empty")
        return value


class GetStateInput(_RoomRef):
    viewer_player_id: Optional[StrictInt] = Field(default=None, alias="viewerPlayerId", ge=0)


def parse_input(model: Type[ModelT], data: Dict[str, Any]) -> ModelT:
    """
    Validate raw action input.

    Args:
        model: Input model class
        data: Raw values, by field name or camelCase alias

    Returns:
        The validated, normalised input

    Raises:
        ValidationError: With one message per failing field
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in err['loc']) or 'input'}: {err['msg']}"
            for err in e.errors()
        ]
        raise ValidationError(f"Invalid input for {model.__name__}", errors) from e

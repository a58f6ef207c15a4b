"""Object definitions for the published state tree."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from pyautodarts._constants import CAMERA_SLOTS


class ObjectKind(StrEnum):
    CHANNEL = "channel"
    STATE = "state"


class ValueType(StrEnum):
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"


class StateId(StrEnum):
    VISIT_SCORE = "visit.score"
    THROW_CURRENT = "throw.current"
    THROW_IS_TRIPLE = "throw.isTriple"
    ONLINE = "online"
    BOARD_VERSION = "system.boardVersion"
    CAM0 = "system.cam0"
    CAM1 = "system.cam1"
    CAM2 = "system.cam2"


CAMERA_STATE_IDS: tuple[StateId, ...] = (StateId.CAM0, StateId.CAM1, StateId.CAM2)


class StateDefinition(BaseModel):
    """Schema of one node in the state tree (a channel or a state)."""

    model_config = ConfigDict(frozen=True)

    id: str
    kind: ObjectKind = ObjectKind.STATE
    name: dict[str, str] = Field(default_factory=dict, description="Display name per language")
    value_type: ValueType | None = None
    role: str | None = None
    read: bool = True
    write: bool = False
    desc: dict[str, str] = Field(default_factory=dict, description="Description per language")


def _channel(object_id: str, en: str, de: str) -> StateDefinition:
    return StateDefinition(id=object_id, kind=ObjectKind.CHANNEL, name={"en": en, "de": de})


def _camera(slot: int) -> StateDefinition:
    return StateDefinition(
        id=f"system.cam{slot}",
        name={"en": f"Camera {slot} config", "de": f"Kamera {slot} Konfiguration"},
        value_type=ValueType.STRING,
        role="json",
        desc={
            "en": f"JSON with camera {slot} parameters (width, height, fps)",
            "de": f"JSON mit Kamera-{slot}-Parametern (width, height, fps)",
        },
    )


OBJECT_DEFINITIONS: tuple[StateDefinition, ...] = (
    _channel("visit", "Current visit", "Aktuelle Aufnahme"),
    StateDefinition(
        id=StateId.VISIT_SCORE,
        name={"en": "Visit score (Total of 3 darts)", "de": "Aufnahme (Summe dreier Darts)"},
        value_type=ValueType.NUMBER,
        role="value",
        desc={
            "en": "Total of the last complete visit",
            "de": "Summe der letzten vollständigen Aufnahme",
        },
    ),
    _channel("throw", "Current throw", "Aktueller Wurf"),
    StateDefinition(
        id=StateId.THROW_CURRENT,
        name={"en": "Current dart score", "de": "Punkte aktueller Pfeil"},
        value_type=ValueType.NUMBER,
        role="value",
        desc={"en": "Score of the last dart", "de": "Punktzahl des letzten Pfeils"},
    ),
    StateDefinition(
        id=StateId.THROW_IS_TRIPLE,
        name={"en": "Triple hit", "de": "Triple getroffen"},
        value_type=ValueType.BOOLEAN,
        role="indicator",
        desc={
            "en": "true if the last dart hit a triple segment (and passes score threshold)",
            "de": "true, wenn der letzte Pfeil ein Triple-Segment getroffen hat (und die Punktschwelle erfüllt)",
        },
    ),
    StateDefinition(
        id=StateId.ONLINE,
        name={"en": "Autodarts board online", "de": "Autodarts Board online"},
        value_type=ValueType.BOOLEAN,
        role="indicator.reachable",
        desc={
            "en": "true = Board reachable, false = Board not reachable",
            "de": "true = Board erreichbar, false = Board nicht erreichbar",
        },
    ),
    _channel("system", "Information about the system", "Informationen zum System"),
    StateDefinition(
        id=StateId.BOARD_VERSION,
        name={"en": "Board manager version", "de": "Version des Board-Manager"},
        value_type=ValueType.STRING,
        role="info.version",
        desc={"en": "Version of the board manager", "de": "Version des Board-Manager"},
    ),
    *(_camera(slot) for slot in CAMERA_SLOTS),
)

"""
Key dispatch through pynput.

Kept apart from the rest of the control package because importing pynput
needs a desktop session (an X display on Linux).
"""

import logging
from typing import Dict, Optional, Union

from pynput.keyboard import Controller, Key, KeyCode

from posemario.config import KeyConfig
from posemario.control.keys import KeyDispatcher
from posemario.control.types import KeyId

logger = logging.getLogger(__name__)

PynputKey = Union[Key, KeyCode]


def string_to_key(key_str: str) -> PynputKey:
    """
    Convert a key name from the configuration to a pynput key.

    Args:
        key_str (str): Single character ('d') or special key name ('space', 'shift', 'left')

    Returns:
        Key or KeyCode

    Raises:
        ValueError: If the name is not a known key
    """
    key_str = key_str.lower().strip()
    if len(key_str) == 1:
        return KeyCode.from_char(key_str)
    try:
        return getattr(Key, key_str)
    except AttributeError:
        raise ValueError(f"Unknown key name: {key_str!r}") from None


def default_key_mapping() -> Dict[KeyId, str]:
    """Key names from KeyConfig."""
    return {
        KeyId.FORWARD: KeyConfig.FORWARD,
        KeyId.BACK: KeyConfig.BACK,
        KeyId.SPRINT: KeyConfig.SPRINT,
        KeyId.JUMP: KeyConfig.JUMP,
        KeyId.DUCK: KeyConfig.DUCK,
    }


class PynputKeyDispatcher(KeyDispatcher):
    """
    Sends key events to the focused window with pynput.
    """

    def __init__(self, mapping: Optional[Dict[KeyId, str]] = None, controller: Optional[Controller] = None):
        mapping = mapping if mapping is not None else default_key_mapping()
        self.keys: Dict[KeyId, PynputKey] = {key_id: string_to_key(name) for key_id, name in mapping.items()}
        self.controller = controller if controller is not None else Controller()

        for key_id, name in mapping.items():
            logger.info(f"  {key_id.value}: {name}")

    def press(self, key: KeyId) -> None:
        self.controller.press(self.keys[key])

    def release(self, key: KeyId) -> None:
        self.controller.release(self.keys[key])

# src/evaluation/love_chain.py
from enum import Enum
from typing import Dict


class PersonalityType(str, Enum):
    EGEN_BOY = "egen-boy"
    EGEN_GIRL = "egen-girl"
    TETO_BOY = "teto-boy"
    TETO_GIRL = "teto-girl"


# Love Food Chain: each type is attracted to the next one in the cycle.
LOVE_CHAIN_ORDER = (
    PersonalityType.EGEN_GIRL,
    PersonalityType.EGEN_BOY,
    PersonalityType.TETO_GIRL,
    PersonalityType.TETO_BOY,
)

LOVE_CHAIN_SUCCESSOR: Dict[PersonalityType, PersonalityType] = {
    current: LOVE_CHAIN_ORDER[(index + 1) % len(LOVE_CHAIN_ORDER)]
    for index, current in enumerate(LOVE_CHAIN_ORDER)
}


def next_type(personality_type) -> PersonalityType:
    """Returns the type `personality_type` is drawn to in the Love Food Chain."""
    return LOVE_CHAIN_SUCCESSOR[PersonalityType(personality_type)]


def describe_chain() -> str:
    """Renders the cycle as 'a → b → c → d → a'."""
    names = [member.value for member in LOVE_CHAIN_ORDER]
    return " → ".join(names + [names[0]])

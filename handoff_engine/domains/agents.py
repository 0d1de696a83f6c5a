"""
Domain models for catalog agents and access tiers.

Agents are owned by an external catalog; the engine only reads them.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from handoff_engine.domains.errors import InvalidTierError


class Tier(str, Enum):
    """Access tiers, declared from lowest to highest privilege."""
    CLIENT = "client"
    STARTER = "starter"
    STAR = "star"
    ALL_STAR = "all_star"
    ADMIN = "admin"

    @property
    def rank(self) -> int:
        """Ordinal position of the tier in the hierarchy."""
        return list(Tier).index(self)

    @classmethod
    def parse(cls, value) -> "Tier":
        """Parse a tier string, failing loudly on unknown values.

        Args:
            value: Tier name (case and surrounding whitespace are ignored)

        Returns:
            The matching Tier

        Raises:
            InvalidTierError: If the value is not a known tier
        """
        if isinstance(value, Tier):
            return value
        if not isinstance(value, str):
            raise InvalidTierError(value)
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise InvalidTierError(value) from None


def tier_allows(user_tier: str, required_tier: str) -> bool:
    """Check whether a user tier is at or above a required tier.

    Raises:
        InvalidTierError: If either tier is unknown
    """
    return Tier.parse(user_tier).rank >= Tier.parse(required_tier).rank


class Agent(BaseModel):
    """Agent metadata as exposed by the agent catalog."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique agent identifier")
    name: str = Field(..., description="Display name")
    superhero_name: Optional[str] = Field(
        None, description="Persona label shown in the UI")
    category: str = Field("", description="Agent specialty category")
    description: str = Field("", description="Free-text description")
    capabilities: List[str] = Field(
        default_factory=list, description="Capability tags")
    required_tier: str = Field(
        Tier.STARTER.value, description="Minimum tier needed to use the agent")

    @field_validator("id", "name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        """Validate that identifying fields are not empty."""
        if not v.strip():
            raise ValueError("Field cannot be empty")
        return v

    @property
    def display_name(self) -> str:
        return self.superhero_name or self.name

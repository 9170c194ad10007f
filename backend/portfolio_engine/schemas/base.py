from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

RiskTier = Literal["low", "medium", "high"]
RiskTolerance = Literal["low", "medium", "high"]
Impact = Literal["positive", "negative", "neutral"]


class CamelModel(BaseModel):
    """Immutable model serialised with the camelCase field names consumers expect."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

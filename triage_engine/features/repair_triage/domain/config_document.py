"""
Operator configuration document models.
Parses the weights/rules document edited on the configuration surface.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .models import PriorityConfig, PriorityRule, PriorityWeights, RuleCondition, RuleEffect


class PriorityConfigError(ValueError):
    """Raised when an operator configuration document cannot be parsed."""


class _DocumentModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class WeightsDocument(_DocumentModel):
    urgency: float = Field(default=0.4, alias="urgencyWeight")
    wait_time: float = Field(default=0.3, alias="waitTimeWeight")
    historical_value: float = Field(default=0.2, alias="historicalValueWeight")
    technical_complexity: float = Field(default=0.1, alias="technicalComplexityWeight")


class ConditionDocument(_DocumentModel):
    stage: str | None = Field(default=None, description="Exact pipeline stage")
    device_model_includes: str | None = Field(default=None, alias="deviceModelIncludes")
    issue_includes: str | None = Field(default=None, alias="issueIncludes")
    min_urgency: int | None = Field(default=None, alias="minUrgency")


class EffectDocument(_DocumentModel):
    bonus: float | None = None
    multiplier: float | None = None


class RuleDocument(_DocumentModel):
    id: str
    name: str = ""
    condition: ConditionDocument = Field(default_factory=ConditionDocument)
    effect: EffectDocument = Field(default_factory=EffectDocument)


class PriorityConfigDocument(_DocumentModel):
    weights: WeightsDocument = Field(default_factory=WeightsDocument)
    rules: list[RuleDocument] = Field(default_factory=list)

    def to_config(self) -> PriorityConfig:
        return PriorityConfig(
            weights=PriorityWeights(**self.weights.model_dump()),
            rules=[
                PriorityRule(
                    id=rule.id,
                    name=rule.name or rule.id,
                    condition=RuleCondition(**rule.condition.model_dump()),
                    effect=RuleEffect(**rule.effect.model_dump()),
                )
                for rule in self.rules
            ],
        )


def load_priority_config(document: Mapping[str, Any]) -> PriorityConfig:
    """
    Build a PriorityConfig from an operator document.

    Only shapes and types are checked; weights and rule effects are taken
    as given, including negative or out-of-range values.

    Raises:
        PriorityConfigError: if the document does not have the expected shape
    """
    try:
        parsed = PriorityConfigDocument.model_validate(document)
    except ValidationError as exc:
        raise PriorityConfigError(f"Invalid priority configuration: {exc}") from exc
    return parsed.to_config()

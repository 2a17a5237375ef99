"""
Recommendation output — one ranked algorithm with its accumulated evidence.

Produced fresh by ``algo_advisor.recommendations.engine.evaluate()`` and never
mutated afterwards.  JSON shape::

    {"output": "LDA", "score": 0.9, "rationale": ["Gaussian data allows ..."]}
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class Recommendation(BaseModel):
    """A ranked candidate output.

    Attributes:
        output:    Algorithm name.
        score:     Sum of the weights of every matching rule naming ``output``.
        rationale: One line per matching rule, in knowledge-base order.
    """

    model_config = ConfigDict(frozen=True)

    output: str
    score: float
    rationale: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "output":    self.output,
            "score":     self.score,
            "rationale": list(self.rationale),
        }

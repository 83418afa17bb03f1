from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

MAX_IDEA_LENGTH = 1000


class AnalyzeRequest(BaseModel):
    # Checked in the router: empty or oversized ideas are a 400, not a 422
    idea: Optional[Any] = None


class IdeaAnalysis(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    feasibility_score: int
    target_audience: str
    competitors: list[str]
    monetization_strategies: list[str]
    suggested_tech_stack: list[str]


class AnalysisResult(IdeaAnalysis):
    timestamp: datetime
    original_idea: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None

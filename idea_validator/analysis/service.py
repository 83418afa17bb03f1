"""
Idea analysis pipeline: prompt → provider → normalizer.

The provider is chosen once (see providers.select_provider) and handed in
at construction. get_pipeline() builds the process-wide instance from settings.
"""

import logging
import time
from datetime import datetime, timezone
from functools import lru_cache
from typing import Optional

from idea_validator.config import Settings, get_settings
from idea_validator.analysis.normalizer import normalize_response
from idea_validator.analysis.prompts import build_analysis_prompt
from idea_validator.analysis.providers import (
    ChatProvider,
    ProviderNotConfiguredError,
    select_provider,
)
from idea_validator.analysis.schemas import AnalysisResult

logger = logging.getLogger(__name__)


class AnalysisPipeline:
    def __init__(self, provider: Optional[ChatProvider]):
        self.provider = provider

    @classmethod
    def from_settings(cls, settings: Settings) -> "AnalysisPipeline":
        return cls(select_provider(settings))

    @property
    def provider_name(self) -> Optional[str]:
        return self.provider.name if self.provider else None

    async def analyze(self, idea: str) -> AnalysisResult:
        """Analyze one idea.

        Raises ProviderNotConfiguredError before any network call when no
        provider key is set, and lets ProviderCallError through. Unparseable
        model output is not an error: it resolves to the fallback analysis.
        """
        if self.provider is None:
            raise ProviderNotConfiguredError()

        idea = idea.strip()
        start = time.time()
        logger.info(f"Analyzing startup idea ({len(idea)} chars) with {self.provider.name}")

        raw = await self.provider.complete(build_analysis_prompt(idea))
        analysis = normalize_response(raw)

        logger.info(
            f"Analysis done in {time.time() - start:.1f}s, feasibility score {analysis.feasibility_score}"
        )
        return AnalysisResult(
            **analysis.model_dump(),
            timestamp=datetime.now(timezone.utc),
            original_idea=idea,
        )

    async def aclose(self) -> None:
        if self.provider:
            await self.provider.aclose()


@lru_cache
def get_pipeline() -> AnalysisPipeline:
    """Process-wide pipeline, built on first use from the cached settings."""
    return AnalysisPipeline.from_settings(get_settings())

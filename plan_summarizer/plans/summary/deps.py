from __future__ import annotations

from plan_summarizer.core.settings import load_settings
from plan_summarizer.plans.summary.service import PlanSummarizer, SummarizerConfig


def get_plan_summarizer() -> PlanSummarizer:
    """
    Dependency provider for PlanSummarizer.

    Settings are re-read for every request so a rotated OPENROUTER_API_KEY is
    picked up without a restart. A missing key is not an error here; the
    summarizer reports it as a `disabled` outcome.
    """

    return PlanSummarizer(config=SummarizerConfig.from_settings(load_settings()))

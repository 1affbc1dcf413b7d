from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, Field

SummaryStatus = Literal["disabled", "failed", "summarized"]


@dataclass(frozen=True)
class SummaryOutcome:
    """Result of one summarization attempt.

    `text` is non-empty only when `status == "summarized"`; callers that only
    want a string can use `text` directly and get "" for every other status.
    """

    status: SummaryStatus
    text: str = ""
    reason: str | None = None

    @classmethod
    def disabled(cls, reason: str) -> SummaryOutcome:
        return cls(status="disabled", reason=reason)

    @classmethod
    def failed(cls, reason: str) -> SummaryOutcome:
        return cls(status="failed", reason=reason)

    @classmethod
    def summarized(cls, text: str) -> SummaryOutcome:
        return cls(status="summarized", text=text)

    @property
    def ok(self) -> bool:
        return self.status == "summarized"


class PlanSummaryIn(BaseModel):
    plan_outputs: list[str] = Field(
        description="Terraform plan outputs, one per project/workspace, in display order.",
        examples=[["Plan: 1 to add, 0 to change, 0 to destroy."]],
    )


class PlanSummaryOut(BaseModel):
    status: SummaryStatus = Field(
        description=(
            "`summarized` when a summary was produced; `disabled` when there was nothing to "
            "summarize or no API key is configured; `failed` when the upstream call failed."
        ),
    )
    summary: str = Field(
        default="",
        description="Plain-text summary. Empty unless status is `summarized`.",
    )
    reason: str | None = Field(
        default=None,
        description="Short reason for a `disabled` or `failed` status.",
    )

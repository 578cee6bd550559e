"""Normalize untrusted lead candidates into canonical drafts."""

import math
from typing import Any, Optional

from transcript_triage.application.dtos.generation import LeadOpportunityDraft
from transcript_triage.domain.value_objects.outreach_channel import OutreachChannel

DEFAULT_LEAD_SCORE = 0.5
DEFAULT_DUE_IN_DAYS = 3
MAX_DUE_IN_DAYS = 30
MAX_DRAFTS = 1


def _finite_number(value: Any) -> Optional[float]:
    # bool is an int subclass but never a valid score or day count
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        # ints beyond float range behave like JSON infinity
        return None
    if not math.isfinite(number):
        return None
    return number


def _clean_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def normalize_lead_score(value: Any) -> float:
    """
    Clamp a lead score into [0.0, 1.0].

    Args:
        value: Raw score (any type)

    Returns:
        Clamped score, DEFAULT_LEAD_SCORE for non-numeric or non-finite input
    """
    score = _finite_number(value)
    if score is None:
        score = DEFAULT_LEAD_SCORE
    return max(0.0, min(1.0, score))


def normalize_due_in_days(value: Any) -> int:
    """
    Round and clamp a due offset into [0, 30] days.

    Halves round up, so 2.5 becomes 3.

    Args:
        value: Raw day count (any type)

    Returns:
        Integer day count, DEFAULT_DUE_IN_DAYS for non-numeric or non-finite input
    """
    days = _finite_number(value)
    if days is None:
        return DEFAULT_DUE_IN_DAYS
    return max(0, min(MAX_DUE_IN_DAYS, math.floor(days + 0.5)))


def normalize_candidate(candidate: Any) -> Optional[LeadOpportunityDraft]:
    """
    Validate and coerce one candidate.

    Args:
        candidate: One element of the parsed model output

    Returns:
        Draft, or None if title, reason or next_action is missing or blank
    """
    if not isinstance(candidate, dict):
        return None

    title = _clean_text(candidate.get("title"))
    reason = _clean_text(candidate.get("reason"))
    next_action = _clean_text(candidate.get("next_action"))
    if not title or not reason or not next_action:
        return None

    return LeadOpportunityDraft(
        title=title,
        reason=reason,
        next_action=next_action,
        outreach_channel=OutreachChannel.normalize(candidate.get("outreach_channel")).value,
        lead_score=normalize_lead_score(candidate.get("lead_score")),
        due_in_days=normalize_due_in_days(candidate.get("due_in_days")),
    )


def normalize_lead_drafts(candidates: list[Any]) -> list[LeadOpportunityDraft]:
    """
    Normalize parsed candidates, keeping only the first valid one.

    The backend is told to return at most one lead; this holds regardless of
    what it actually returns.

    Args:
        candidates: Parsed, untrusted candidate list

    Returns:
        Zero or one draft
    """
    drafts: list[LeadOpportunityDraft] = []
    for candidate in candidates:
        draft = normalize_candidate(candidate)
        if draft is not None:
            drafts.append(draft)
        if len(drafts) >= MAX_DRAFTS:
            break
    return drafts

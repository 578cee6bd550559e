"""Unit tests for prompt construction."""

from transcript_triage.application.use_cases.prompt_builder import (
    LEAD_EXTRACTION_INSTRUCTIONS,
    SUMMARY_INSTRUCTIONS,
    PromptTask,
    build_lead_extraction_prompt,
    build_prompt,
    build_summary_prompt,
)

TRANSCRIPT = "Provider: How is your sleep?\nPatient: Still waking up at 3am."


def test_summary_prompt_appends_transcript_verbatim():
    """Test that the transcript follows the fixed instructions unchanged."""
    prompt = build_summary_prompt(TRANSCRIPT)

    assert prompt.startswith(SUMMARY_INSTRUCTIONS)
    assert prompt.endswith(f"\nTranscript:\n{TRANSCRIPT}")


def test_summary_prompt_asks_for_strict_json_summary():
    prompt = build_summary_prompt(TRANSCRIPT)

    assert '{"summary":"..."}' in prompt
    assert "do not include PHI" in prompt


def test_lead_prompt_lists_required_keys_and_limits():
    """Test that the lead prompt states the schema and the single-lead rule."""
    prompt = build_lead_extraction_prompt(TRANSCRIPT)

    for key in ("title", "reason", "next_action", "outreach_channel", "lead_score", "due_in_days"):
        assert f'"{key}"' in prompt
    assert '"call", "text", "email"' in prompt
    assert "0.0 to 1.0" in prompt
    assert "0 to 30" in prompt
    assert "at most one best lead" in prompt
    assert "otherwise return []" in prompt


def test_lead_prompt_includes_next_action_examples():
    assert LEAD_EXTRACTION_INSTRUCTIONS.count("- \"") >= 3
    assert "schedule only if they request it" in LEAD_EXTRACTION_INSTRUCTIONS


def test_build_prompt_accepts_task_values():
    """Test that plain task strings select the same instructions."""
    assert build_prompt("extract_leads", TRANSCRIPT) == build_prompt(
        PromptTask.EXTRACT_LEADS, TRANSCRIPT
    )

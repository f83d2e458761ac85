"""Unit tests for prompt construction"""

import json
from dataclasses import replace
from tuition_risk.domain.prompts import SYSTEM_PROMPT, build_prompt, prompt_mode


def test_plain_prompt_lists_profile(sample_profile):
    """Natural-language mode renders every profile field"""
    prompt = build_prompt(sample_profile)

    assert "Name: Carolina Méndez" in prompt
    assert "Total overdue amount: 3000.00" in prompt
    assert "% of payments made on time: 70%" in prompt
    assert "Average delay days on previous payments: 8" in prompt
    assert "Group name: 3A" in prompt
    assert "School level: Secondary" in prompt
    assert prompt_mode(sample_profile) == "plain"


def test_prompt_demands_bare_json(sample_profile):
    """Both modes require a single JSON object with a fixed shape"""
    structured = replace(sample_profile, structured_prompt=json.dumps({"student_data": {}}))

    for profile in (sample_profile, structured):
        prompt = build_prompt(profile)
        assert '{"risk_level": "low|medium|high", "justification": "Your justification here"}' in prompt
        assert "Reply ONLY with the JSON object" in prompt
        assert "```" not in prompt


def test_structured_prompt_embeds_payload(sample_profile):
    """Structured mode embeds the caller's payload verbatim"""
    payload = json.dumps({"student_data": {"name": "Carolina Méndez", "payment_history": []}}, ensure_ascii=False)
    profile = replace(sample_profile, structured_prompt=payload)

    prompt = build_prompt(profile)

    assert payload in prompt
    assert "Group name:" not in prompt
    assert prompt_mode(profile) == "structured"


def test_system_prompt_forbids_markdown():
    """System instruction reinforces JSON-only output"""
    assert "JSON" in SYSTEM_PROMPT
    assert "markdown" in SYSTEM_PROMPT

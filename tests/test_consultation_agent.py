"""
Tests for the AI consultation client.

Run: pytest tests/test_consultation_agent.py -v
"""

import json

import pytest
from openai import OpenAIError

from clinic.core.config import Settings
from clinic.models import FALLBACK_CONSULTATION, ActionCategory, ConsultationInput, UrgencyLevel
from clinic.services.consultation_agent import (
    ConsultationAgent,
    build_user_prompt,
    extract_json_object,
)
from conftest import FakeAIClient, make_output, output_json, run


@pytest.fixture
def report(consultation_input):
    return ConsultationInput.model_validate(consultation_input)


def _assert_fallback(result):
    assert result == FALLBACK_CONSULTATION
    assert result.urgency_level == UrgencyLevel.MEDIUM
    assert result.doctor_referral_needed is True
    assert result.recommended_specialist == "General Practitioner"
    assert result.primary_action.category == ActionCategory.DOCTOR_CONSULT
    assert result.possible_conditions == ["System Error"]


def test_parses_backend_json(report):
    client = FakeAIClient(content=output_json(doctor_referral_needed=True, recommended_specialist="Pediatrician"))
    agent = ConsultationAgent(client)

    result = run(agent.assess(report))

    assert result == make_output(doctor_referral_needed=True, recommended_specialist="Pediatrician")


def test_request_carries_prompt_and_schema(report):
    client = FakeAIClient(content=output_json())
    agent = ConsultationAgent(client, config=Settings(AZURE_CHAT_DEPLOYMENT="triage-model", AI_TEMPERATURE=0.2))

    run(agent.assess(report))

    request = client.completions.calls[0]
    assert request["model"] == "triage-model"
    assert request["temperature"] == 0.2
    assert request["response_format"]["type"] == "json_schema"
    schema = json.dumps(request["response_format"]["json_schema"]["schema"])
    assert "CRITICAL" in schema
    assert "OTC_MEDICATION" in schema

    system, user = request["messages"]
    assert "EMERGENCY" in system["content"]
    assert "SELF_CARE" in system["content"]
    assert "Symptoms: fever, cough" in user["content"]


def test_user_prompt_marks_missing_history_and_notes(report):
    prompt = build_user_prompt(report)

    assert "Age: 30" in prompt
    assert "History: None" in prompt
    assert "Pain level: 3/10" in prompt
    assert "Duration: 2 days" in prompt
    assert "Additional notes: None" in prompt


def test_tolerates_code_fences_and_chatter(report):
    content = "Here is my assessment:\n```json\n" + output_json() + "\n```\nStay safe!"
    agent = ConsultationAgent(FakeAIClient(content=content))

    assert run(agent.assess(report)) == make_output()


def test_null_string_specialist_becomes_none(report):
    content = output_json().replace('"recommended_specialist": null', '"recommended_specialist": "null"')
    agent = ConsultationAgent(FakeAIClient(content=content))

    assert run(agent.assess(report)).recommended_specialist is None


@pytest.mark.parametrize(
    "content",
    [
        None,
        "",
        "I cannot help with that.",
        '{"analysis": "truncated"',
        output_json().replace('"LOW"', '"SEVERE"'),
        json.dumps({"analysis": "missing everything else"}),
    ],
)
def test_bad_replies_fall_back(report, content):
    agent = ConsultationAgent(FakeAIClient(content=content))

    _assert_fallback(run(agent.assess(report)))


def test_backend_error_falls_back(report):
    agent = ConsultationAgent(FakeAIClient(error=OpenAIError("connection reset")))

    _assert_fallback(run(agent.assess(report)))


def test_timeout_falls_back(report):
    client = FakeAIClient(content=output_json(), delay=0.5)
    agent = ConsultationAgent(client, config=Settings(AI_TIMEOUT_SECONDS=0.05))

    _assert_fallback(run(agent.assess(report)))


def test_unconfigured_backend_falls_back(report):
    _assert_fallback(run(ConsultationAgent(None).assess(report)))


def test_fallback_is_a_fresh_copy(report):
    result = run(ConsultationAgent(None).assess(report))
    result.possible_conditions.append("mutated")

    assert FALLBACK_CONSULTATION.possible_conditions == ["System Error"]


def test_unexpected_errors_propagate(report):
    agent = ConsultationAgent(FakeAIClient(error=RuntimeError("bug")))

    with pytest.raises(RuntimeError):
        run(agent.assess(report))


def test_extract_json_object():
    assert extract_json_object('noise {"a": {"b": 1}} tail') == '{"a": {"b": 1}}'
    with pytest.raises(ValueError):
        extract_json_object("no braces here")

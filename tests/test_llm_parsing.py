import asyncio
from types import SimpleNamespace

import httpx
import pytest

from inspire.engine.policy import SelectionRequest, derive_policy
from inspire.llm import (
    CandidateGenerator,
    GeneratorUnavailable,
    UpstreamParseError,
    UpstreamTimeout,
    UpstreamTransportError,
    build_candidate_prompt,
    extract_json_payload,
    parse_candidates,
)


def _envelope(text):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=text))])


def _client(create):
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))


def test_extracts_bare_fenced_and_embedded_json():
    assert extract_json_payload('{"candidates": []}') == {"candidates": []}
    fenced = 'Sure!\n```json\n{"candidates": [{"city": "Rome"}]}\n```\nEnjoy.'
    assert extract_json_payload(fenced) == {"candidates": [{"city": "Rome"}]}
    prose = 'Here you go: {"candidates": [{"city": "Nice", "summary": "a {curly} town"}]} hope it helps'
    assert extract_json_payload(prose)["candidates"][0]["summary"] == "a {curly} town"


@pytest.mark.parametrize("text", [None, "", "no json here", '{"candidates": ['])
def test_unparseable_text_raises(text):
    with pytest.raises(UpstreamParseError):
        extract_json_payload(text)


def test_braces_in_leading_prose_do_not_hide_the_payload():
    text = 'Here are ideas for {your trip}:\n{"candidates": [{"city": "Oslo", "country": "Norway"}]}'
    assert parse_candidates(text) == [{"city": "Oslo", "country": "Norway"}]
    nested = 'Options {a} and {b {c}} below {"candidates": [{"city": "Bergen"}]} done'
    assert parse_candidates(nested) == [{"city": "Bergen"}]


def test_parse_candidates_accepts_list_or_renamed_key():
    assert parse_candidates('[{"city": "Oslo"}]') == [{"city": "Oslo"}]
    assert parse_candidates('{"destinations": [{"city": "Oslo"}]}') == [{"city": "Oslo"}]
    with pytest.raises(UpstreamParseError):
        parse_candidates('{"candidates": []}')


def test_prompt_carries_cap_exclusions_and_avoid_list():
    request = SelectionRequest(user_hours=12.0, exclusions=["Paris"], interests=frozenset({"beach"}))
    prompt = build_candidate_prompt(request, derive_policy(12.0), count=14, avoid=["Rome|Italy"])
    assert "exactly 14" in prompt
    assert "at most 12.0 hours" in prompt
    assert "Paris; Rome|Italy" in prompt
    assert "include at least 3 long-haul ideas" in prompt
    assert "interests: beach" in prompt


def test_short_ceiling_prompt_has_no_long_haul_line():
    prompt = build_candidate_prompt(SelectionRequest(user_hours=3.0), derive_policy(3.0))
    assert "long-haul" not in prompt
    assert "do not suggest: nothing" in prompt


def test_generate_candidates_parses_model_output():
    async def create(**kwargs):
        assert kwargs["model"] == "primary-model"
        assert kwargs["messages"][1]["content"] == "prompt"
        return _envelope('{"candidates": [{"city": "Lisbon", "country": "Portugal"}]}')

    generator = CandidateGenerator(_client(create), timeout=1.0)
    result = asyncio.run(generator.generate_candidates("prompt", model="primary-model"))
    assert result == [{"city": "Lisbon", "country": "Portugal"}]


def test_slow_model_is_cancelled_as_timeout():
    cancelled = []

    async def create(**kwargs):
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            cancelled.append(True)
            raise
        return _envelope("{}")

    generator = CandidateGenerator(_client(create), timeout=0.05)
    with pytest.raises(UpstreamTimeout):
        asyncio.run(generator.complete("prompt", model="slow"))
    assert cancelled == [True]


def test_transport_errors_are_mapped():
    async def create(**kwargs):
        raise httpx.ConnectError("connection refused")

    generator = CandidateGenerator(_client(create), timeout=1.0)
    with pytest.raises(UpstreamTransportError):
        asyncio.run(generator.complete("prompt", model="m"))


def test_bad_envelope_is_a_parse_error():
    async def create(**kwargs):
        return SimpleNamespace(choices=[])

    generator = CandidateGenerator(_client(create), timeout=1.0)
    with pytest.raises(UpstreamParseError):
        asyncio.run(generator.complete("prompt", model="m"))


def test_generator_without_key_is_disabled():
    generator = CandidateGenerator(api_key=None)
    assert generator.enabled is False
    with pytest.raises(GeneratorUnavailable):
        asyncio.run(generator.complete("prompt", model="m"))

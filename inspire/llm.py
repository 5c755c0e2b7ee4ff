# inspire/llm.py
import asyncio
import json
import logging
import os
import re
from typing import Any, Iterable, Iterator, List, Optional

import httpx
from openai import APIError, APITimeoutError, AsyncOpenAI

from inspire.engine.policy import SelectionPolicy, SelectionRequest, days_from_duration

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("INSPIRE_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False


class GeneratorError(RuntimeError):
    """Base class for anything that goes wrong talking to the text generator."""


class GeneratorUnavailable(GeneratorError):
    """No client configured (missing API key)."""


class UpstreamTimeout(GeneratorError):
    pass


class UpstreamTransportError(GeneratorError):
    pass


class UpstreamParseError(GeneratorError):
    pass


SYSTEM_PROMPT = """You are a travel inspiration engine for travellers departing the UK and Ireland.
Suggest real, specific destinations. Never invent places.
Return ONLY valid JSON, no commentary.
"""

CANDIDATE_TEMPLATE = """Suggest exactly {count} destination candidates as JSON:
{{"candidates": [{{"city": str, "country": str, "region": str, "type": str, "themes": [str],
"best_seasons": [str], "approx_nonstop_hours": number, "summary": str, "highlights": [str, str, str]}}]}}

Traveller profile:
- departing from: {origin}
- travelling as: {group}
- trip length: about {days} days
- interests: {interests}
- season: {season}

Hard constraints (do not break these):
- non-stop flight time must be at most {max_hours:.1f} hours; give your honest estimate in approx_nonstop_hours
- do not suggest: {excluded}
- cover at least {min_countries} different countries and a mix of types
{priority_line}
Field rules:
- region is one of: {regions}
- type is one of: city, beach, nature, culture
- best_seasons uses: spring, summer, autumn, winter
- summary is 1-2 sentences on why it fits this traveller
- highlights are exactly 3 short strings, each naming a concrete place plus one sensory or specific detail
"""

REGION_CHOICES = (
    "europe, north_africa, atlantic_islands, middle_east, sub_saharan_africa, north_america, "
    "caribbean, central_america, south_america, south_asia, indian_ocean, southeast_asia, east_asia, oceania"
)

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.IGNORECASE | re.DOTALL)


def build_candidate_prompt(
    request: SelectionRequest,
    policy: SelectionPolicy,
    *,
    count: int = 16,
    avoid: Iterable[str] = (),
) -> str:
    """Render the candidate request. ``avoid`` adds ``City|Country`` keys already seen."""
    excluded = [item for item in (*request.exclusions, *avoid) if item]
    priority_line = ""
    if policy.min_priority_quota and policy.priority_regions:
        regions = ", ".join(sorted(region.value for region in policy.priority_regions))
        priority_line = f"- include at least {policy.min_priority_quota} long-haul ideas from: {regions}\n"
    return CANDIDATE_TEMPLATE.format(
        count=count,
        origin=request.origin or "London, UK",
        group=request.group.value,
        days=days_from_duration(request.duration),
        interests=", ".join(sorted(request.interests)) if request.interests else "open to anything",
        season=request.season.value if request.season else "flexible",
        max_hours=request.user_hours,
        excluded="; ".join(excluded) if excluded else "nothing",
        min_countries=request.size,
        regions=REGION_CHOICES,
        priority_line=priority_line,
    )


def _balanced_objects(text: str) -> Iterator[str]:
    """Yield every brace-balanced ``{...}`` span in order of its opening brace."""
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for pos in range(start, len(text)):
            ch = text[pos]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    yield text[start:pos + 1]
                    break
        start = text.find("{", start + 1)


def extract_json_payload(text: Optional[str]) -> Any:
    """Parse model output that may be bare JSON, fenced, or wrapped in prose."""
    if not isinstance(text, str) or not text.strip():
        raise UpstreamParseError("empty response")

    attempts: List[str] = [text.strip()]
    attempts.extend(match.strip() for match in _FENCE_RE.findall(text))
    attempts.extend(_balanced_objects(text))

    for attempt in attempts:
        try:
            return json.loads(attempt)
        except (TypeError, ValueError):
            continue
    raise UpstreamParseError("response did not contain a JSON object")


def parse_candidates(text: Optional[str]) -> List[Any]:
    payload = extract_json_payload(text)
    if isinstance(payload, dict):
        candidates = payload.get("candidates")
        if candidates is None:
            # Some models rename the key ("destinations", "results").
            candidates = next((value for value in payload.values() if isinstance(value, list)), None)
    else:
        candidates = payload
    if not isinstance(candidates, list) or not candidates:
        raise UpstreamParseError("response has no candidate list")
    return candidates


class CandidateGenerator:
    """Thin async wrapper around the hosted chat model.

    Every call is bounded by ``timeout``; when it elapses the in-flight
    request task is cancelled, which closes the underlying HTTP request.
    """

    def __init__(self, client: Any = None, *, api_key: Optional[str] = None, timeout: float = 15.0):
        if client is None and api_key:
            client = AsyncOpenAI(api_key=api_key, max_retries=0)
        self._client = client
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return self._client is not None

    async def complete(self, prompt: str, *, model: str, system: str = SYSTEM_PROMPT) -> str:
        if self._client is None:
            raise GeneratorUnavailable("no generator client configured")

        logger.info("Invoking generator model %s (timeout %.1fs)", model, self.timeout)
        try:
            resp = await asyncio.wait_for(
                self._client.chat.completions.create(
                    model=model,
                    messages=[
                        {"role": "system", "content": system},
                        {"role": "user", "content": prompt},
                    ],
                    temperature=0.7,
                    response_format={"type": "json_object"},
                ),
                timeout=self.timeout,
            )
        except (asyncio.TimeoutError, APITimeoutError) as exc:
            raise UpstreamTimeout(f"{model} did not answer within {self.timeout:.1f}s") from exc
        except (APIError, httpx.HTTPError) as exc:
            raise UpstreamTransportError(f"{model}: {type(exc).__name__}") from exc

        try:
            return resp.choices[0].message.content or ""
        except (AttributeError, IndexError) as exc:
            raise UpstreamParseError(f"{model} returned an unexpected envelope") from exc

    async def generate_candidates(self, prompt: str, *, model: str) -> List[Any]:
        raw = await self.complete(prompt, model=model)
        candidates = parse_candidates(raw)
        logger.info("Generator model %s returned %d raw candidate(s)", model, len(candidates))
        return candidates

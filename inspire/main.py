from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from inspire.orchestrator import get_ladder, orchestrate_inspire
from inspire.settings import get_settings

app = FastAPI(title="Destination Inspiration API")

# Quiz front-ends are served from elsewhere; scope with INSPIRE_ALLOWED_ORIGINS.
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


async def _read_payload(request: Request) -> Dict[str, Any]:
    """Anything that is not a JSON object becomes an empty request (all defaults)."""
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


@app.post("/api/inspire")
async def api_inspire(request: Request) -> Dict[str, Any]:
    """Shortlist of destinations, or a day plan when ``buildItineraryFor`` is set."""
    payload = await _read_payload(request)
    return await orchestrate_inspire(payload)


@app.get("/api/inspire", include_in_schema=False)
async def api_inspire_get() -> Dict[str, Any]:
    raise HTTPException(status_code=405, detail="Use POST", headers={"Allow": "POST"})


@app.get("/healthz")
async def healthz() -> Dict[str, Any]:
    ladder = get_ladder()
    return {
        "status": "ok",
        "generator": "enabled" if ladder.generator is not None and ladder.generator.enabled else "disabled",
        "recency_size": len(ladder.recency),
    }

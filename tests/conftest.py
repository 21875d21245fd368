"""Shared fixtures: in-memory Supabase, scripted Gemini, and a wired pipeline."""

from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone

import pytest

from fakes import FakeSupabase, ScriptedGemini
from moodjournal.features.database.client import DatabaseClient
from moodjournal.features.journaling.pipeline import JournalPipeline
from moodjournal.features.mood.extraction import SentimentExtractor
from moodjournal.features.mood.support import SupportMessageGenerator
from moodjournal.services.gemini import GeminiClient


def ticking_clock(start: datetime = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)):
    """A clock that advances one minute per call, so ordering is deterministic."""
    minutes = itertools.count()
    return lambda: start + timedelta(minutes=next(minutes))


@pytest.fixture
def supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def db(supabase: FakeSupabase) -> DatabaseClient:
    client = DatabaseClient(client=supabase)
    clock = ticking_clock()
    client.journals._now = clock
    client.mood_analyses._now = clock
    return client


@pytest.fixture
def gemini_api() -> ScriptedGemini:
    return ScriptedGemini()


@pytest.fixture
def sleeps() -> list:
    return []


@pytest.fixture
def gemini(gemini_api: ScriptedGemini, sleeps: list) -> GeminiClient:
    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    return GeminiClient(
        api_key="test-key",
        model="gemini-test",
        base_url="https://gemini.test/v1beta",
        http_client=gemini_api.client(),
        sleep=fake_sleep,
    )


@pytest.fixture
def pipeline(db: DatabaseClient, gemini: GeminiClient) -> JournalPipeline:
    return JournalPipeline(
        db=db,
        extractor=SentimentExtractor(gemini),
        support=SupportMessageGenerator(gemini),
    )

"""Shared fixtures (no network, no API keys)."""

from __future__ import annotations

import random

import pytest
from fastapi.testclient import TestClient

from docchat.api.main import create_app
from docchat.config import Settings
from docchat.services import Services, build_services

from tests.fakes import VIDEO_ID, FakeFetcher, FakeGenerator, make_events


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, supabase_url="", supabase_key="")  # type: ignore[call-arg]


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher(
        captions={
            VIDEO_ID: make_events(
                "In this video we configure Grafana alerting with Slack notifications. "
                "Alert rules fire when a threshold is crossed and Grafana sends the alert."
            ),
        }
    )


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def services(settings: Settings, fetcher: FakeFetcher, generator: FakeGenerator) -> Services:
    return build_services(settings, generator=generator, fetcher=fetcher, rng=random.Random(7))


@pytest.fixture
def client(services: Services) -> TestClient:
    return TestClient(create_app(services=services))

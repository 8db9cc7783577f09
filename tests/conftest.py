"""Configuration for pytest."""

import pytest


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


@pytest.fixture
def scheduler():
    """A virtual clock starting at t=0."""
    from globe_tour.modules.stubs import ManualScheduler

    return ManualScheduler()


@pytest.fixture
def four_locations():
    """Four distinct locations A-D."""
    from globe_tour.schemas import Location

    return [
        Location(name="A", lat=10.0, lng=10.0),
        Location(name="B", lat=20.0, lng=20.0),
        Location(name="C", lat=30.0, lng=30.0),
        Location(name="D", lat=40.0, lng=40.0),
    ]


@pytest.fixture
def example_dataset():
    """The bundled example tour (five locations with ports)."""
    from globe_tour.sample_data import example_dataset as build

    return build()


@pytest.fixture
def make_engine(scheduler):
    """Factory for engines on the virtual clock with recording sinks.

    The created sinks are collected on ``factory.sinks``.
    """
    from globe_tour import TourEngine
    from globe_tour.modules.providers import StaticLocationProvider
    from globe_tour.modules.stubs import RecordingRenderSink

    def factory(locations, points=(), config=None, viewport=None, **kwargs):
        sinks = []

        def sink_factory(profile):
            sink = RecordingRenderSink()
            sinks.append(sink)
            return sink

        engine = TourEngine(
            sink_factory=sink_factory,
            provider=StaticLocationProvider(locations, points),
            scheduler=scheduler,
            config=config,
            viewport=viewport,
            **kwargs,
        )
        factory.sinks = sinks
        return engine

    factory.sinks = []
    return factory

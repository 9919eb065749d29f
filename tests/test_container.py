import pytest

from astropulse.container import create_test_container, get_container, init_container, reset_container
from astropulse.infrastructure.external.approximate_event_source import ApproximateEventSource
from astropulse.shared.config.settings import Settings


def test_shared_objects_are_built_once():
    container = create_test_container()

    assert container.correlation_cache is container.correlation_cache
    assert container.event_binner is container.event_binner
    assert container.time_sync is container.time_sync
    assert isinstance(container.event_source, ApproximateEventSource)


def test_settings_flow_into_engine_objects():
    settings = Settings(series_cache_capacity=3, horizon_cache_capacity=7, default_bin_size_ms=60_000)
    container = create_test_container(settings=settings)

    stats = container.correlation_cache.stats
    assert stats["series"]["capacity"] == 3
    assert stats["horizon"]["capacity"] == 7
    assert container.event_binner.bin_size == 60_000


def test_override_replaces_dependency_and_rejects_unknown_names():
    sentinel = ApproximateEventSource(include_planetary=False)
    container = create_test_container(event_source=sentinel)

    assert container.event_source is sentinel
    with pytest.raises(ValueError):
        container.override("database", object())


def test_global_container_lifecycle():
    first = init_container(Settings())
    assert get_container() is first

    reset_container()
    assert get_container() is not first
    reset_container()


def test_use_case_factories_share_state():
    container = create_test_container()

    a = container.get_build_series_usecase()
    b = container.get_build_series_usecase()
    assert a is not b
    assert a._cache is b._cache is container.correlation_cache

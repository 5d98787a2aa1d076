from __future__ import annotations

import pytest

from mini_vi.runtime import telemetry
from mini_vi.runtime.settings import Settings


def test_configure_rejects_config_and_settings_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), settings=Settings())


def test_loggers_are_cached_per_name() -> None:
    telemetry.configure(settings=Settings())

    first = telemetry.get_logger("mini_vi.tests")

    assert telemetry.get_logger("mini_vi.tests") is first
    assert telemetry.get_logger() is telemetry.get_logger(telemetry.DEFAULT_LOGGER_NAME)


def test_span_collects_metadata_and_reraises() -> None:
    telemetry.configure(settings=Settings())

    with pytest.raises(RuntimeError, match="boom"):
        with telemetry.span(
            "tests::span", component=True, metadata={"cursor": (1, 2)}
        ) as handle:
            handle.add_metadata("status", "started")
            raise RuntimeError("boom")

    assert handle.component == "tests::span"
    assert handle.metadata == {"cursor": "(1, 2)", "status": "started"}


def test_record_event_rejects_unknown_level() -> None:
    telemetry.configure(settings=Settings())

    with pytest.raises(ValueError):
        telemetry.record_event("tests.event", level="shout")

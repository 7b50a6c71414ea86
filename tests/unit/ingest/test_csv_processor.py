"""Unit tests for the stateful CSV processor."""

from __future__ import annotations

import threading

import pytest

from core.errors import SluiceConfigError, SluiceSchemaError, SluiceValidationError
from core.types import Observation
from ingest.csv_processor import CsvProcessor
from tests.fixture_paths import fixture_path

_FIRST_OHLC_OBSERVATION = Observation(
    timestamp=1605312000,
    fields={
        "open": 16339.56,
        "high": 16339.6,
        "low": 16240,
        "close": 16254.51,
        "volume": 274.42607,
    },
)


def _processor_with(relative_path: str, params: dict[str, str] | None = None) -> CsvProcessor:
    processor = CsvProcessor()
    processor.init(params)
    processor.on_data(fixture_path(relative_path).read_bytes())
    return processor


def test_init_accepts_empty_params() -> None:
    """Init should accept an empty option mapping."""
    processor = CsvProcessor()

    processor.init({})

    assert processor.config.time_format is None


def test_init_raises_for_invalid_time_format() -> None:
    """Init should reject a non-string time format."""
    processor = CsvProcessor()

    with pytest.raises(SluiceConfigError):
        processor.init({"time_format": 42})


def test_on_data_returns_payload() -> None:
    """OnData should hand the payload back to the caller."""
    processor = CsvProcessor()
    payload = fixture_path("csv/coinbase_btcusd_30.csv").read_bytes()

    assert processor.on_data(payload) is payload


def test_get_observations_first_observation() -> None:
    """Flat extraction should produce the expected first observation."""
    processor = _processor_with("csv/coinbase_btcusd_30.csv")

    result = processor.get_observations()

    assert result is not None and result.observations[0] == _FIRST_OHLC_OBSERVATION


def test_get_observations_with_tags() -> None:
    """Tag columns should populate observation tags, not fields."""
    processor = _processor_with("csv/local_tag_data.csv")

    result = processor.get_observations()

    assert result is not None
    first = result.observations[0]
    assert first.fields == _FIRST_OHLC_OBSERVATION.fields
    assert first.tags == ("elon_tweet", "market_open")
    assert result.observations[1].tags == ()


def test_get_observations_custom_time_format() -> None:
    """Configured time formats should drive timestamp parsing."""
    processor = _processor_with(
        "csv/custom_time.csv",
        {"time_format": "%Y-%m-%d %H:%M:%S%z"},
    )

    result = processor.get_observations()

    assert result is not None
    assert result.observations[0] == Observation(timestamp=1547575074, fields={"val": 34})


def test_get_observations_called_twice_returns_none() -> None:
    """A second extraction without new data should return None."""
    processor = _processor_with("csv/coinbase_btcusd_30.csv")
    processor.get_observations()

    assert processor.get_observations() is None


def test_get_observations_same_data_is_not_reaccepted() -> None:
    """Re-delivering identical bytes should not mark data as pending."""
    payload = fixture_path("csv/coinbase_btcusd_30.csv").read_bytes()
    processor = CsvProcessor()
    processor.on_data(payload)
    fingerprint = processor.fingerprint
    processor.get_observations()

    processor.on_data(bytes(bytearray(payload)))

    assert processor.get_observations() is None
    assert processor.fingerprint == fingerprint


def test_same_data_does_not_evict_pending_payload() -> None:
    """Equal updates must keep an unconsumed payload available."""
    payload = fixture_path("csv/coinbase_btcusd_30.csv").read_bytes()
    processor = CsvProcessor()
    processor.on_data(payload)

    processor.on_data(payload)

    assert processor.has_pending_data is True


def test_changed_data_replaces_pending_payload() -> None:
    """A new payload should replace the pending one and its fingerprint."""
    processor = _processor_with("csv/coinbase_btcusd_30.csv")
    first_fingerprint = processor.fingerprint

    processor.on_data(fixture_path("csv/local_tag_data.csv").read_bytes())
    result = processor.get_observations()

    assert processor.fingerprint != first_fingerprint
    assert result is not None and len(result.observations) == 3


def test_get_state_splits_paths() -> None:
    """Grouped extraction should return one state per path."""
    processor = _processor_with("csv/trader_input.csv")

    result = processor.get_state()

    assert result is not None
    states = sorted(result.states, key=lambda state: state.path)
    assert [state.path for state in states] == ["coinbase.btcusd", "local.portfolio"]
    assert states[0].observations[0] == Observation(
        timestamp=1626697480,
        fields={"price": 31232.709090909084},
    )
    assert len(states[0].observations) == 4
    assert states[1].observations == ()
    assert states[1].field_names == ("usd_balance", "btc_balance")


def test_get_state_called_twice_returns_none() -> None:
    """A second grouped extraction without new data should return None."""
    processor = _processor_with("csv/trader_input.csv")
    processor.get_state()

    assert processor.get_state() is None


def test_get_state_rejects_unknown_field() -> None:
    """An allow-list missing a header should fail before parsing rows."""
    processor = _processor_with("csv/trader_input.csv")

    with pytest.raises(SluiceValidationError, match="unknown field"):
        processor.get_state(["coinbase.btcusd.price"])


def test_failed_extraction_keeps_pending_payload() -> None:
    """Schema failures should not consume the pending payload."""
    processor = _processor_with("csv/unqualified_header.csv")

    with pytest.raises(SluiceSchemaError):
        processor.get_state()

    assert processor.has_pending_data is True


def test_concurrent_updates_accept_each_payload_once() -> None:
    """Concurrent identical deliveries should leave one pending payload."""
    payload = fixture_path("csv/coinbase_btcusd_30.csv").read_bytes()
    processor = CsvProcessor()
    threads = [threading.Thread(target=processor.on_data, args=(payload,)) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    first = processor.get_observations()
    second = processor.get_observations()

    assert first is not None and second is None


def test_init_accepts_empty_time_format(csv_payload) -> None:
    """An empty time format should keep default timestamp parsing."""
    processor = CsvProcessor()
    processor.init({"time_format": ""})
    processor.on_data(csv_payload("coinbase_btcusd_30.csv"))

    result = processor.get_observations()

    assert result is not None and result.observations[0] == _FIRST_OHLC_OBSERVATION

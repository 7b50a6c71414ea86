"""Integration tests for the processor lifecycle."""

from __future__ import annotations

from sluice import CsvProcessor, create_data_processor


def test_processor_lifecycle_across_updates(csv_payload) -> None:
    """Updates, extraction, and dedup should interact as a host expects."""
    processor = create_data_processor("csv")
    trader_payload = csv_payload("trader_input.csv")

    processor.on_data(trader_payload)
    first = processor.get_state()
    processor.on_data(trader_payload)
    repeated = processor.get_state()
    processor.on_data(csv_payload("global_tag_data.csv"))
    updated = processor.get_state()

    assert first is not None and len(first.states) == 2
    assert repeated is None
    assert updated is not None and len(updated.states) == 5


def test_processor_switches_extraction_modes(csv_payload) -> None:
    """Flat and grouped extraction share one pending payload.

    Flat extraction only treats a bare ``_tags`` header as tags, so the
    qualified tag columns surface as invalid numeric fields.
    """
    processor = CsvProcessor()
    processor.on_data(csv_payload("global_tag_data.csv"))

    observations = processor.get_observations()
    states = processor.get_state()

    assert observations is not None and len(observations.observations) == 4
    assert observations.observations[0].tags == ()
    assert len(observations.diagnostics) == 6
    assert states is None


def test_tagged_observations_round_through_sdk(csv_payload) -> None:
    """The SDK surface should expose tag-aware flat extraction."""
    processor = create_data_processor("csv", {"unused": "option"})
    processor.on_data(csv_payload("local_tag_data.csv"))

    result = processor.get_observations()

    assert result is not None
    assert [observation.tags for observation in result.observations] == [
        ("elon_tweet", "market_open"),
        (),
        ("market_close",),
    ]

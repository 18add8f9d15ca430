"""
Tests for timezone catalog construction.

This module tests identifier enumeration, offset bucket labels and the
region/offset groupings, using fixed instants so offsets are deterministic.
"""

from datetime import datetime

import pytest

from tzstamp.core.catalog import (
    StaticTimezoneProvider,
    SystemTimezoneProvider,
    build_catalog,
    compute_offset_minutes,
)
from tzstamp.core.models import (
    GroupBy,
    TimezoneCatalog,
    format_offset_label,
    parse_offset_label,
)
from tests.utils.test_helpers import SAMPLE_IDENTIFIERS


class TestOffsetLabel:
    """Test offset bucket label arithmetic."""

    @pytest.mark.parametrize(
        ("offset_minutes", "expected"),
        [
            (0, "UTC+0:00"),
            (480, "UTC+8:00"),
            (330, "UTC+5:30"),
            (345, "UTC+5:45"),
            (765, "UTC+12:45"),
            (840, "UTC+14:00"),
            (-240, "UTC-4:00"),
            (-270, "UTC-4:30"),
            (-150, "UTC-2:30"),
            (-570, "UTC-9:30"),
            (-720, "UTC-12:00"),
            (-30, "UTC-0:30"),
        ],
    )
    def test_format_offset_label(self, offset_minutes: int, expected: str) -> None:
        """Test labels for whole-hour, half-hour and 45-minute offsets."""
        assert format_offset_label(offset_minutes) == expected

    def test_negative_hours_are_truncated_toward_zero(self) -> None:
        """Test that -270 minutes splits into 4 hours and 30 minutes, not 5 and 30."""
        label = format_offset_label(-270)

        assert label.startswith("UTC-4:")
        assert not label.startswith("UTC-5:")

    def test_sign_appears_once(self) -> None:
        """Test that negative labels carry a single minus sign."""
        for offset in range(-720, 0, 15):
            assert format_offset_label(offset).count("-") == 1

    def test_parse_offset_label_reconstructs_offset(self) -> None:
        """Test that every quarter-hour label re-parses to within 59 minutes of its offset."""
        for offset in range(-720, 841, 15):
            parsed = parse_offset_label(format_offset_label(offset))
            assert abs(parsed - offset) <= 59
            assert parsed == offset

    @pytest.mark.parametrize("label", ["", "GMT+1:00", "UTC5:30", "UTC+5", "UTC+5:3", "UTC+5:60", "UTC+a:00"])
    def test_parse_offset_label_rejects_malformed(self, label: str) -> None:
        """Test that malformed labels are rejected."""
        with pytest.raises(ValueError):
            _ = parse_offset_label(label)


class TestComputeOffset:
    """Test offset evaluation at a fixed instant."""

    @pytest.mark.parametrize(
        ("identifier", "expected"),
        [
            ("UTC", 0),
            ("Asia/Kolkata", 330),
            ("Asia/Kathmandu", 345),
            ("America/St_Johns", -150),
            ("America/New_York", -240),
            ("Europe/London", 60),
            ("Pacific/Chatham", 765),
        ],
    )
    def test_summer_offsets(self, identifier: str, expected: int, summer_instant: datetime) -> None:
        """Test offsets in July, including daylight-saving zones."""
        assert compute_offset_minutes(identifier, summer_instant) == expected

    @pytest.mark.parametrize(
        ("identifier", "expected"),
        [
            ("America/St_Johns", -210),
            ("America/New_York", -300),
            ("Europe/London", 0),
            ("Pacific/Chatham", 825),
        ],
    )
    def test_winter_offsets(self, identifier: str, expected: int, winter_instant: datetime) -> None:
        """Test that offsets follow daylight-saving transitions."""
        assert compute_offset_minutes(identifier, winter_instant) == expected


class TestBuildCatalog:
    """Test catalog grouping over a fixed identifier list."""

    def test_region_grouping_keeps_provider_order(
        self, sample_provider: StaticTimezoneProvider, summer_instant: datetime
    ) -> None:
        """Test that regions appear in first-seen order and keep entry order."""
        catalog = build_catalog(sample_provider, now=summer_instant)

        assert list(catalog.by_region) == ["America", "Asia", "Europe", "UTC", "Pacific"]
        assert [entry.identifier for entry in catalog.by_region["America"]] == [
            "America/New_York",
            "America/St_Johns",
            "America/Argentina/Buenos_Aires",
            "America/Caracas",
        ]
        assert [entry.identifier for entry in catalog.by_region["Asia"]] == [
            "Asia/Kolkata",
            "Asia/Kathmandu",
            "Asia/Taipei",
        ]

    def test_offset_grouping(
        self, sample_provider: StaticTimezoneProvider, summer_instant: datetime
    ) -> None:
        """Test that zones sharing an offset share a bucket."""
        catalog = build_catalog(sample_provider, now=summer_instant)

        assert [entry.identifier for entry in catalog.by_offset["UTC-4:00"]] == [
            "America/New_York",
            "America/Caracas",
        ]
        assert [entry.identifier for entry in catalog.by_offset["UTC+5:30"]] == ["Asia/Kolkata"]
        assert [entry.identifier for entry in catalog.by_offset["UTC+5:45"]] == ["Asia/Kathmandu"]
        assert [entry.identifier for entry in catalog.by_offset["UTC-2:30"]] == ["America/St_Johns"]
        assert [entry.identifier for entry in catalog.by_offset["UTC-9:30"]] == ["Pacific/Marquesas"]
        assert [entry.identifier for entry in catalog.by_offset["UTC+12:45"]] == ["Pacific/Chatham"]
        assert [entry.identifier for entry in catalog.by_offset["UTC+0:00"]] == ["UTC"]

    def test_offset_buckets_move_with_daylight_saving(
        self, sample_provider: StaticTimezoneProvider, winter_instant: datetime
    ) -> None:
        """Test that a winter snapshot buckets London with UTC."""
        catalog = build_catalog(sample_provider, now=winter_instant)

        assert [entry.identifier for entry in catalog.by_offset["UTC+0:00"]] == [
            "Europe/London",
            "UTC",
        ]
        assert "UTC-3:30" in catalog.by_offset
        assert "UTC-2:30" not in catalog.by_offset

    def test_region_and_locality_split(
        self, sample_provider: StaticTimezoneProvider, summer_instant: datetime
    ) -> None:
        """Test the region/locality rule for deep and segment-less identifiers."""
        catalog = build_catalog(sample_provider, now=summer_instant)

        buenos_aires = catalog.find("America/Argentina/Buenos_Aires")
        assert buenos_aires is not None
        assert buenos_aires.region == "America"
        assert buenos_aires.locality == "Argentina"

        utc = catalog.find("UTC")
        assert utc is not None
        assert utc.region == "UTC"
        assert utc.locality == ""

    def test_entries_in_provider_order(
        self, sample_provider: StaticTimezoneProvider, summer_instant: datetime
    ) -> None:
        """Test the flat entry list."""
        catalog = build_catalog(sample_provider, now=summer_instant)

        assert [entry.identifier for entry in catalog.entries] == list(SAMPLE_IDENTIFIERS)
        assert len(catalog) == len(SAMPLE_IDENTIFIERS)

    def test_entry_labels(
        self, sample_provider: StaticTimezoneProvider, summer_instant: datetime
    ) -> None:
        """Test option labels combine identifier and offset bucket."""
        catalog = build_catalog(sample_provider, now=summer_instant)

        kolkata = catalog.find("Asia/Kolkata")
        assert kolkata is not None
        assert kolkata.offset_label == "UTC+5:30"
        assert kolkata.label == "Asia/Kolkata (UTC+5:30)"

    def test_empty_provider(self, summer_instant: datetime) -> None:
        """Test that no identifiers produce empty groupings."""
        catalog = build_catalog(StaticTimezoneProvider([]), now=summer_instant)

        assert catalog.by_region == {}
        assert catalog.by_offset == {}
        assert catalog.entries == []

    def test_unloadable_identifiers_are_skipped(
        self, summer_instant: datetime, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that identifiers zoneinfo cannot load are skipped with a warning."""
        provider = StaticTimezoneProvider(["Asia/Taipei", "Nowhere/Fake", "UTC"])

        catalog = build_catalog(provider, now=summer_instant)

        assert [entry.identifier for entry in catalog.entries] == ["Asia/Taipei", "UTC"]
        assert "Nowhere/Fake" in caplog.text

    def test_duplicate_identifiers_are_listed_once(self, summer_instant: datetime) -> None:
        """Test that a provider repeating an identifier does not break the partition."""
        provider = StaticTimezoneProvider(["UTC", "Asia/Taipei", "UTC"])

        catalog = build_catalog(provider, now=summer_instant)

        assert [entry.identifier for entry in catalog.entries] == ["UTC", "Asia/Taipei"]

    def test_build_is_idempotent_for_same_instant(
        self, sample_provider: StaticTimezoneProvider, summer_instant: datetime
    ) -> None:
        """Test that building twice at the same instant gives equal catalogs."""
        first = build_catalog(sample_provider, now=summer_instant)
        second = TimezoneCatalog.build(sample_provider, now=summer_instant)

        assert first == second
        assert first.built_at == summer_instant

    def test_naive_now_is_treated_as_local(self, sample_provider: StaticTimezoneProvider) -> None:
        """Test that a naive instant is accepted."""
        catalog = build_catalog(sample_provider, now=datetime(2024, 7, 15, 12, 0, 0))

        assert catalog.built_at.tzinfo is not None
        assert len(catalog) == len(SAMPLE_IDENTIFIERS)

    def test_groups_selects_layout(
        self, sample_provider: StaticTimezoneProvider, summer_instant: datetime
    ) -> None:
        """Test choosing the grouping by layout."""
        catalog = build_catalog(sample_provider, now=summer_instant)

        assert catalog.groups(GroupBy.LOCATION) is catalog.by_region
        assert catalog.groups(GroupBy.UTC) is catalog.by_offset

    def test_find_missing_identifier(
        self, sample_provider: StaticTimezoneProvider, summer_instant: datetime
    ) -> None:
        """Test looking up an identifier that is not in the catalog."""
        catalog = build_catalog(sample_provider, now=summer_instant)

        assert catalog.find("Europe/Paris") is None


class TestSystemCatalog:
    """Test the catalog built from the platform's timezone database."""

    def test_system_provider_is_sorted_and_unique(self) -> None:
        """Test that the system provider lists every zone once, in sorted order."""
        identifiers = list(SystemTimezoneProvider().list_supported_timezones())

        assert identifiers
        assert identifiers == sorted(identifiers)
        assert len(identifiers) == len(set(identifiers))

    def test_partitions_cover_every_identifier(self) -> None:
        """Test that both groupings partition the full system list."""
        provider = SystemTimezoneProvider()
        identifiers = list(provider.list_supported_timezones())
        catalog = build_catalog(provider)

        region_ids = [entry.identifier for bucket in catalog.by_region.values() for entry in bucket]
        offset_ids = [entry.identifier for bucket in catalog.by_offset.values() for entry in bucket]

        assert sorted(region_ids) == sorted(identifiers)
        assert sorted(offset_ids) == sorted(identifiers)

    def test_sample_partitions_keep_provider_list(
        self, sample_provider: StaticTimezoneProvider, summer_instant: datetime
    ) -> None:
        """Test that each grouping, flattened, is a reordering of the provider list."""
        catalog = build_catalog(sample_provider, now=summer_instant)

        for groups in (catalog.by_region, catalog.by_offset):
            flattened = [entry.identifier for bucket in groups.values() for entry in bucket]
            assert sorted(flattened) == sorted(sample_provider.list_supported_timezones())

    def test_every_label_matches_its_offset(self) -> None:
        """Test that each entry's bucket label re-parses to its offset."""
        catalog = build_catalog(SystemTimezoneProvider())

        for label, bucket in catalog.by_offset.items():
            for entry in bucket:
                assert entry.offset_label == label
                assert abs(parse_offset_label(label) - entry.utc_offset_minutes) <= 59

    def test_default_provider_is_system(self) -> None:
        """Test that build_catalog uses the system database by default."""
        catalog = build_catalog()

        assert catalog.find("Asia/Taipei") is not None
        assert catalog.find("UTC") is not None

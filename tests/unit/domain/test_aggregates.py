import math

import pytest

from sales_analytics.domain import (
    AggregatedData,
    AggregatedDataCollection,
    AggregatedDataPoint,
    Err,
    ErrorKind,
    Ok,
    unwrap,
)


def bucket(key, total, count=1):
    return unwrap(AggregatedData.create(key, total, count))


def collection(*items):
    return unwrap(AggregatedDataCollection.create(items))


class TestAggregatedData:
    def test_average(self):
        # 5.125 rounds half-up
        assert bucket("2024-01-15", 10.25, 2).average == 5.13

    @pytest.mark.parametrize(
        "key,total,count",
        [
            ("2024/01/15", 10, 1),
            ("2024-13", 10, 1),
            ("2024-02-30", 10, 1),
            ("2024-01", -1, 1),
            ("2024-01", math.nan, 1),
            ("2024-01", 10, 0),
            ("2024-01", 10, True),
        ],
    )
    def test_create_rejects(self, key, total, count):
        result = AggregatedData.create(key, total, count)
        assert isinstance(result, Err)
        assert result.error.kind is ErrorKind.INVALID_AGGREGATE

    def test_combine_same_period(self):
        combined = unwrap(bucket("2024-01", 100.111, 1).combine(bucket("2024-01", 100.116, 3)))
        assert (combined.total, combined.count) == (200.23, 4)

    def test_combine_different_periods(self):
        result = bucket("2024-01", 1).combine(bucket("2024-02", 1))
        assert isinstance(result, Err)
        assert result.error.details == {"left": "2024-01", "right": "2024-02"}

    def test_to_point_keeps_wire_shape(self):
        point = bucket("2024-02", 650.33, 2).to_point()
        assert point == AggregatedDataPoint(period_key="2024-02", total=650.33)
        assert point.model_dump(by_alias=True) == {"date": "2024-02", "total": 650.33}


class TestAggregatedDataCollection:
    def test_sorted_by_key(self):
        items = collection(bucket("2024-03", 1), bucket("2024-01", 2), bucket("2024-02", 3))
        assert [i.period_key for i in items] == ["2024-01", "2024-02", "2024-03"]

    def test_rejects_duplicate_keys(self):
        result = AggregatedDataCollection.create([bucket("2024-01", 1), bucket("2024-01", 2)])
        assert isinstance(result, Err)
        assert result.error.kind is ErrorKind.INVALID_AGGREGATE
        assert result.error.details == {"duplicates": ["2024-01"]}

    def test_summaries(self):
        items = collection(bucket("2024-01", 750.55, 4), bucket("2024-02", 650.33, 2))
        assert items.total_sum() == 1400.88
        assert items.grand_average() == 233.48
        assert items.max_total() == 750.55
        assert items.min_total() == 650.33
        assert items.event_count == 6

    def test_empty_summaries_are_zero(self):
        empty = AggregatedDataCollection.empty()
        assert empty.is_empty
        assert len(empty) == 0
        assert empty.summary() == {
            "total_sum": 0,
            "grand_average": 0,
            "max_total": 0,
            "min_total": 0,
            "event_count": 0,
        }

    def test_top_n_returns_key_order(self):
        items = collection(
            bucket("2024-01", 10), bucket("2024-02", 30), bucket("2024-03", 20), bucket("2024-04", 5)
        )
        top = items.top_n(2)
        assert [(i.period_key, i.total) for i in top] == [("2024-02", 30), ("2024-03", 20)]
        assert items.top_n(0).is_empty

    def test_filter_by_range_inclusive(self):
        items = collection(bucket("2024-01-14", 1), bucket("2024-01-15", 2), bucket("2024-01-22", 3))
        kept = items.filter_by_range("2024-01-15", "2024-01-22")
        assert [i.period_key for i in kept] == ["2024-01-15", "2024-01-22"]

    def test_add(self):
        items = collection(bucket("2024-02", 1))
        assert [i.period_key for i in unwrap(items.add(bucket("2024-01", 1)))] == [
            "2024-01",
            "2024-02",
        ]
        assert isinstance(items.add(bucket("2024-02", 5)), Err)

    def test_merge_combines_shared_keys(self):
        left = collection(bucket("2024-01", 100, 1), bucket("2024-02", 50, 1))
        right = collection(bucket("2024-02", 25.5, 2), bucket("2024-03", 10, 1))

        merged = left.merge(right)

        assert isinstance(merged, Ok)
        assert [(i.period_key, i.total, i.count) for i in merged.value] == [
            ("2024-01", 100, 1),
            ("2024-02", 75.5, 3),
            ("2024-03", 10, 1),
        ]

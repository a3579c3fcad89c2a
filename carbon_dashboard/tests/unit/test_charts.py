"""
Unit tests for the analytics charts.
"""

from carbon_dashboard.charts import (
    NO_DATA_TEXT,
    create_category_average_chart,
    create_category_breakdown_chart,
    create_emission_trend_chart,
)


def annotation_texts(fig):
    return [annotation.text for annotation in fig.layout.annotations]


class TestEmissionTrendChart:

    def test_empty(self):
        fig = create_emission_trend_chart([])
        assert NO_DATA_TEXT in annotation_texts(fig)
        assert len(fig.data) == 0

    def test_undated_records_only(self, make_record):
        fig = create_emission_trend_chart([make_record(created_at=None)])
        assert NO_DATA_TEXT in annotation_texts(fig)

    def test_points_are_chronological(self, make_record):
        records = [make_record(total=30.0, days_ago=0), make_record(total=50.0, days_ago=3)]

        fig = create_emission_trend_chart(records)

        assert len(fig.data) == 1
        assert list(fig.data[0].y) == [50.0, 30.0]


class TestCategoryBreakdownChart:

    def test_no_latest(self):
        assert NO_DATA_TEXT in annotation_texts(create_category_breakdown_chart(None))

    def test_skips_missing_and_zero_categories(self, make_record):
        latest = make_record(water_score=0.0, pets_score=1.5)

        fig = create_category_breakdown_chart(latest)

        labels = list(fig.data[0].labels)
        assert "Water" not in labels
        assert "Garden" not in labels
        assert labels[0] == "Transportation"
        assert labels[-1] == "Pets"


class TestCategoryAverageChart:

    def test_empty(self):
        assert NO_DATA_TEXT in annotation_texts(create_category_average_chart([]))

    def test_bars_keep_given_order(self):
        data = [{"category": "Energy", "average": 2.3}, {"category": "Water", "average": 1.0}]

        fig = create_category_average_chart(data)

        assert list(fig.data[0].x) == ["Energy", "Water"]
        assert list(fig.data[0].y) == [2.3, 1.0]

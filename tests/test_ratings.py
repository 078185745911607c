"""
Tests for the Rating Aggregate Validator
"""

import pytest

from catalog.exceptions import RangeError, ShapeError
from catalog.schemas import RatingsIn
from catalog.services.ratings import RatingViolation, check_ratings, validate_ratings

VALID = {
    "average": 4.13,
    "count": 97536,
    "rating_1": 2009,
    "rating_2": 4587,
    "rating_3": 17427,
    "rating_4": 33578,
    "rating_5": 39935,
}


class TestValidateRatings:
    """Tests for validate_ratings()."""

    def test_validate_ratings_valid(self):
        assert validate_ratings(VALID) is None

    def test_validate_ratings_accepts_model(self):
        assert validate_ratings(RatingsIn.model_validate(VALID)) is None

    def test_validate_ratings_accepts_compact_keys(self):
        ratings = {
            "average": 3, "count": 5,
            "rating1": 1, "rating2": 1, "rating3": 1, "rating4": 1, "rating5": 1,
        }
        assert validate_ratings(ratings) is None

    def test_validate_ratings_none(self):
        assert validate_ratings(None) is RatingViolation.MISSING_FIELD

    @pytest.mark.parametrize("field", ["average", "count", "rating_1", "rating_5"])
    def test_validate_ratings_missing_field(self, field):
        ratings = {key: value for key, value in VALID.items() if key != field}
        assert validate_ratings(ratings) is RatingViolation.MISSING_FIELD

    def test_validate_ratings_non_numeric(self):
        assert validate_ratings({**VALID, "count": "lots"}) is RatingViolation.MISSING_FIELD

    def test_validate_ratings_boolean_is_not_a_number(self):
        assert validate_ratings({**VALID, "rating_2": True}) is RatingViolation.MISSING_FIELD

    @pytest.mark.parametrize("average", [0, 0.99, 5.01, 10])
    def test_validate_ratings_average_out_of_range(self, average):
        assert validate_ratings({**VALID, "average": average}) is RatingViolation.OUT_OF_RANGE_AVERAGE

    @pytest.mark.parametrize("average", [1, 5])
    def test_validate_ratings_average_bounds_inclusive(self, average):
        assert validate_ratings({**VALID, "average": average}) is None

    @pytest.mark.parametrize("field", ["count", "rating_3"])
    def test_validate_ratings_negative_count(self, field):
        assert validate_ratings({**VALID, field: -1}) is RatingViolation.NEGATIVE_COUNT

    def test_validate_ratings_first_failure_wins(self):
        """An out-of-range average is reported before a negative count."""
        ratings = {**VALID, "average": 9, "count": -1}
        assert validate_ratings(ratings) is RatingViolation.OUT_OF_RANGE_AVERAGE

    def test_validate_ratings_count_not_recomputed(self):
        """Star counts do not have to add up to count."""
        assert validate_ratings({**VALID, "count": 1}) is None


class TestCheckRatings:
    """Tests for check_ratings()."""

    def test_check_ratings_maps_columns(self):
        assert check_ratings(VALID) == {
            "rating_avg": 4.13,
            "rating_count": 97536,
            "rating_1_star": 2009,
            "rating_2_star": 4587,
            "rating_3_star": 17427,
            "rating_4_star": 33578,
            "rating_5_star": 39935,
        }

    def test_check_ratings_missing_raises_shape_error(self):
        with pytest.raises(ShapeError) as exc_info:
            check_ratings(None)
        assert exc_info.value.status_code == 400

    def test_check_ratings_average_raises_range_error(self):
        with pytest.raises(RangeError, match="not in range of 1 to 5"):
            check_ratings({**VALID, "average": 0})

    def test_check_ratings_negative_raises_range_error(self):
        with pytest.raises(RangeError, match="must be positive"):
            check_ratings({**VALID, "rating_4": -3})

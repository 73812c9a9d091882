import pytest
from lazyiter import Pipeline


class TestForEach:
    """Test for_each"""

    def test_visits_every_value_in_order(self, numbers):
        seen = []
        result = Pipeline(numbers).for_each(seen.append)

        assert seen == numbers
        assert result is None

    def test_receives_transformed_values(self, numbers, is_odd):
        seen = []
        Pipeline(numbers).filter(is_odd).map(lambda v, i: v * 100).for_each(seen.append)
        assert seen == [100, 300, 500]


class TestFind:
    """Test find"""

    def test_finds_first_match(self, numbers):
        assert Pipeline(numbers).find(lambda v, i: v > 4) == 5
        assert Pipeline(numbers).find(lambda v, i: v > 2) == 3

    def test_not_found_returns_none(self):
        assert Pipeline([1, 2, 3]).find(lambda v, i: v > 10) is None

    def test_index_is_output_position(self, numbers, is_odd):
        seen = []

        def record(value, index):
            seen.append((value, index))
            return False

        Pipeline(numbers).filter(is_odd).find(record)
        assert seen == [(1, 0), (3, 1), (5, 2)], f"Unexpected callback args: {seen}"

    def test_short_circuits(self, numbers):
        visited = []

        def track(value, index):
            visited.append(value)
            return value

        assert Pipeline(numbers).map(track).find(lambda v, i: v == 2) == 2
        assert visited == [1, 2], f"find should stop pulling after a match: {visited}"


class TestReduce:
    """Test reduce"""

    def test_sum(self, numbers):
        assert Pipeline(numbers).reduce(lambda acc, v, i: acc + v, 0) == 15

    def test_initial_returned_when_nothing_yielded(self, numbers):
        marker = object()
        result = Pipeline(numbers).filter(lambda v, i: False).reduce(lambda acc, v, i: v, marker)
        assert result is marker

    def test_index_is_output_position(self, numbers, is_odd):
        result = Pipeline(numbers).filter(is_odd).reduce(lambda acc, v, i: acc + [i], [])
        assert result == [0, 1, 2]

    def test_initial_is_required(self, numbers):
        with pytest.raises(TypeError):
            Pipeline(numbers).reduce(lambda acc, v, i: acc + v)

    def test_fold_is_left_to_right(self):
        result = Pipeline(["a", "b", "c"]).reduce(lambda acc, v, i: acc + v, "")
        assert result == "abc"

    def test_product_over_filtered_pipeline(self):
        result = (
            Pipeline(list(range(1, 11)))
            .filter(lambda v, i: v % 3 == 0)
            .reduce(lambda acc, v, i: acc * v, 1)
        )
        assert result == 3 * 6 * 9


class TestCollect:
    """Test collect and external iteration"""

    def test_collect_returns_new_list(self, numbers):
        result = Pipeline(numbers).collect()
        assert result == numbers
        assert result is not numbers, "collect should build a fresh list"

    def test_collect_twice_gives_same_result(self, numbers, is_odd):
        pipeline = Pipeline(numbers).filter(is_odd).map(lambda v, i: v * 2)
        assert pipeline.collect() == pipeline.collect() == [2, 6, 10]

    def test_pipeline_is_iterable(self, numbers):
        pipeline = Pipeline(numbers).map(lambda v, i: -v)
        assert [v for v in pipeline] == [-1, -2, -3, -4, -5]
        assert sum(pipeline) == -15

    def test_independent_iterators(self, numbers):
        pipeline = Pipeline(numbers)
        first = iter(pipeline)
        second = iter(pipeline)

        assert next(first) == 1
        assert next(first) == 2
        assert next(second) == 1, "Each iter() call should start a new pass"

    def test_consumers_leave_pipeline_unchanged(self, numbers):
        pipeline = Pipeline(numbers).take(3)
        ops_before = pipeline.operations

        pipeline.collect()
        pipeline.find(lambda v, i: True)
        pipeline.reduce(lambda acc, v, i: acc, None)
        pipeline.for_each(lambda v: None)

        assert pipeline.operations == ops_before
        assert numbers == [1, 2, 3, 4, 5], "Backing sequence must not change"

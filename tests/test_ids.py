from unittest import mock

from signalws.ids import ID_MAX, ID_MIN, new_id


def test_ids_fall_in_six_digit_range():
    values = [new_id() for _ in range(2000)]
    assert all(ID_MIN <= value <= ID_MAX for value in values)


def test_ids_never_need_padding():
    assert all(len(str(new_id())) == 6 for _ in range(500))


def test_lowest_and_highest_draws_hit_the_documented_bounds():
    with mock.patch("random.randrange", side_effect=lambda start, stop: start):
        assert new_id() == 100_000
    with mock.patch("random.randrange", side_effect=lambda start, stop: stop - 1):
        assert new_id() == 999_999


def test_random_source_is_asked_for_full_range():
    with mock.patch("random.randrange", return_value=123_456) as fake:
        assert new_id() == 123_456
    fake.assert_called_once_with(100_000, 1_000_000)


def test_ids_vary():
    assert len({new_id() for _ in range(200)}) > 1
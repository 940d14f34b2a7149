import pytest

from soarpkg.progress import calculate_speed, format_speed, format_transfer, human_bytes


def test_human_bytes_pinned_values():
    assert human_bytes(0) == "0 B"
    assert human_bytes(1024) == "1.00 KiB"
    assert human_bytes(1_048_576) == "1.00 MiB"


def test_small_sizes_are_plain_bytes():
    assert human_bytes(500) == "500 B"
    assert human_bytes(1023) == "1023 B"


@pytest.mark.parametrize(
    "size, unit",
    [(1024**2 * 5, "MiB"), (1024**3, "GiB"), (1024**4, "TiB"), (1024**9, "YiB")],
)
def test_units_scale(size, unit):
    assert human_bytes(size).endswith(" " + unit)


def test_speed_zero_when_no_time():
    assert calculate_speed(100, 0.0) == 0
    assert calculate_speed(100, -1.0) == 0


def test_speed_over_one_second_equals_position():
    assert calculate_speed(4096, 1.0) == 4096


def test_speed_is_truncated_integer():
    speed = calculate_speed(10, 3.0)
    assert isinstance(speed, int) and speed * 3 <= 10 < (speed + 1) * 3


def test_transfer_without_length_repeats_position():
    assert format_transfer(2048, None) == f"{human_bytes(2048)}/{human_bytes(2048)}"


def test_transfer_with_length():
    text = format_transfer(0, 1024)
    done, total = text.split("/")
    assert done == human_bytes(0)
    assert total == human_bytes(1024)


def test_format_speed_suffix():
    text = format_speed(2048, 1.0)
    assert text.endswith("/s")
    assert text[:-2] == human_bytes(2048)
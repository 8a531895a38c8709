import pytest

from ringbuffer.config_manager.helpers import parse_size


@pytest.mark.parametrize(
    "value, expected",
    [
        (128, 128),
        ("2", 2),
        ("128", 128),
        ("1k", 1024),
        ("4k", 4 * 1024),
        ("4K", 4 * 1024),
        ("  8k  ", 8 * 1024),
        ("1m", 1024 * 1024),
        ("3M", 3 * 1024 * 1024),
    ],
)
def test_parse_size_valid(value: int | str, expected: int) -> None:
    assert parse_size(value) == expected


@pytest.mark.parametrize(
    "value",
    [
        "",
        "   ",
        "nope",
        "k",
        "1kb",
        "1g",
        "-1k",
        "1.5k",
        "1k2",
        True,
    ],
)
def test_parse_size_invalid_raises(value: str) -> None:
    with pytest.raises(ValueError):
        parse_size(value)

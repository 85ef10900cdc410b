import pytest

from fyne_doctor.utils.version import short_version, truncate


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("go version go1.21.5 linux/amd64", "go1.21.5"),
        ("v20.11.0", "v20.11.0"),
        ("fyne cli version v2.4.1", "v2.4.1"),
        ("gcc (GCC) 13.2.1 20230801", "13.2.1"),
        ("gcc (Ubuntu 11.4.0-1ubuntu1~22.04) 11.4.0", "11.4.0-1..."),
        ("pacman v6.0.2 - libalpm v13.0.2", "v6.0.2"),
        ("Found", "Found"),
        ("/opt/android", "/opt/and..."),
        ("", ""),
        ("   ", ""),
    ],
)
def test_short_version(raw, expected):
    assert short_version(raw, 11) == expected


def test_short_version_uses_first_line_without_a_version():
    assert short_version("wayland\nsecond line", 20) == "wayland"


def test_short_version_respects_width():
    assert short_version("/Library/Developer/CommandLineTools", 16) == "/Library/Deve..."


def test_truncate():
    assert truncate("short", 10) == "short"
    assert truncate("exactly ten", 11) == "exactly ten"
    assert truncate("Android Studio IDE (recommended for mobile dev)", 35) == "Android Studio IDE (recommended ..."
    assert len(truncate("x" * 100, 35)) == 35


def test_truncate_narrower_than_marker():
    assert truncate("abcdef", 2) == "ab"
    assert truncate("abcdef", 4, marker="~") == "abc~"

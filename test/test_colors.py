import pytest

from colored_httpx_logger.colors import ANSI_CODES, Color, resolve


@pytest.mark.parametrize("color", list(Color))
@pytest.mark.parametrize("supports_ansi", [True, False])
def test_every_color_resolves_to_a_code(color: Color, supports_ansi: bool):
    assert resolve(color, supports_ansi) != ""


def test_ansi_codes():
    assert resolve(Color.RED, True) == "\x1b[31m"
    assert resolve(Color.RESET, True) == "\x1b[0m"


def test_unknown_color_resolves_to_reset():
    assert resolve("purple", True) == ANSI_CODES[Color.RESET]
    assert resolve(None, False) == resolve(Color.RESET, False)

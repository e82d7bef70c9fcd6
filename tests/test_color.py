import pytest

from plotview.color import BLUE, GREEN, RED, WHITE, Color


def test_from_gray_sets_all_channels():
    assert Color.from_gray(7) == Color(7, 7, 7, 255)


def test_with_alpha_keeps_rgb():
    c = Color(10, 20, 30).with_alpha(40)
    assert (c.r, c.g, c.b, c.a) == (10, 20, 30, 40)


def test_primary_hues():
    assert Color.from_hue(0.0) == Color(255, 0, 0)
    assert Color.from_hue(2.0) == Color(0, 255, 0)
    assert Color.from_hue(4.0) == Color(0, 0, 255)


def test_named_constants_match_hues():
    assert RED == Color.from_hue(0.0)
    assert GREEN.hue() == pytest.approx(2.0)
    assert BLUE.hue() == pytest.approx(4.0)


@pytest.mark.parametrize("h", [0.0, 0.5, 1.0, 1.5, 2.0, 2.5, 3.0, 3.5, 4.0, 4.5, 5.0, 5.5])
def test_hue_round_trip(h):
    assert Color.from_hue(h).hue() == pytest.approx(h, abs=0.01)


def test_gray_has_zero_hue():
    assert Color.from_gray(100).hue() == 0.0


def test_gamma_keeps_extremes_and_alpha():
    assert WHITE.gamma(2.2) == WHITE
    assert Color(0, 0, 0, 9).gamma(2.2) == Color(0, 0, 0, 9)


def test_gamma_brightens_midtones():
    c = Color.from_gray(128).gamma(2.2)
    assert c.r > 128 and c.r == c.g == c.b


def test_cos_red_dominant_at_zero():
    c = Color.cos(0.0)
    assert c.r > c.g and c.r > c.b


def test_index_without_avoid_is_cos():
    assert Color.index(0, 16, 0.0, 2.0) == Color.cos(0.0)
    assert Color.index(4, 12, 0.0, 2.0) == Color.cos(2.0)


def test_index_wraps_by_density_without_avoid():
    for i in range(8):
        assert Color.index(i, 8, 0.0, 2.0) == Color.index(i + 8, 8, 0.0, 2.0)


def test_index_zero_density_raises():
    with pytest.raises(ValueError):
        Color.index(3, 0)


def test_hash_is_deterministic_and_an_index_colour():
    a = Color.hash("series-label")
    assert a == Color.hash("series-label")
    assert any(a == Color.index(k) for k in range(256))


def test_uniq_is_stable_and_sequential():
    first = Color.uniq("uniq-test-first")
    second = Color.uniq("uniq-test-second")
    assert Color.uniq("uniq-test-first") == first
    assert any(
        first == Color.index(k) and second == Color.index(k + 1) for k in range(255)
    )


def test_invalid_channel_raises():
    with pytest.raises(ValueError):
        Color(256, 0, 0)
    with pytest.raises(ValueError):
        Color(0, -1, 0)
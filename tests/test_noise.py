import pytest

from voxelcore.noise import Noise, flip_coin, get_random


def _sample_points():
    for i in range(12):
        for j in range(12):
            yield (i * 1.37 + 0.11, j * 0.73 - 5.2, (i - j) * 2.19 + 0.5)


def test_get_random_covers_inclusive_range():
    seen = {get_random(0, 2) for _ in range(600)}
    assert seen == {0, 1, 2}


def test_get_random_single_value():
    assert get_random(5, 5) == 5


def test_get_random_rejects_empty_range():
    with pytest.raises(ValueError):
        get_random(3, 1)


def test_flip_coin_gives_both_outcomes():
    seen = {flip_coin() for _ in range(300)}
    assert seen == {True, False}


def test_noise_values_in_unit_interval():
    noise = Noise(42)
    for x, y, z in _sample_points():
        value = noise.get(x, y, z, 3.0)
        assert 0.0 <= value <= 1.0


def test_noise_is_half_on_lattice_points():
    noise = Noise(7)
    assert noise.get(3.0, 4.0, 5.0, 1.0) == 0.5


def test_noise_is_deterministic_for_seed():
    first = Noise(1234)
    second = Noise(1234)
    for x, y, z in _sample_points():
        assert first.get(x, y, z, 2.5) == second.get(x, y, z, 2.5)


def test_different_seeds_give_different_noise():
    first = Noise(1)
    second = Noise(2)
    values_a = [first.get(x, y, z, 1.0) for x, y, z in _sample_points()]
    values_b = [second.get(x, y, z, 1.0) for x, y, z in _sample_points()]
    assert values_a != values_b


def test_noise_varies_in_space():
    noise = Noise(99)
    values = {noise.get(x, y, z, 1.0) for x, y, z in _sample_points()}
    assert len(values) > 10


def test_octaves_in_unit_interval():
    noise = Noise(5)
    for x, y, z in _sample_points():
        value = noise.get_octaves(x * 10, y * 10, z * 10, 8.0, 3)
        assert 0.0 <= value <= 1.0


def test_octaves_at_origin_is_half():
    assert Noise(11).get_octaves(0.0, 0.0, 0.0, 8.0, 3) == 0.5


def test_zero_octaves_is_nan():
    result = Noise(3).get_octaves(1.0, 2.0, 3.0, 4.0, 0)
    assert str(result) == "nan"
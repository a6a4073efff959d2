import numpy as np

from plasmanoise.config import DEFAULT_LACUNARITY, DEFAULT_PERSISTENCE
from plasmanoise.fbm import NoiseConfiguration, NoiseGenerator, fbm2, fbm3, spectral_weights
from plasmanoise.noise_2d import Perlin2D
from plasmanoise.noise_3d import Perlin3D

X = np.array([0.13, 1.7, 4.25, -2.6])
Y = np.array([0.41, 3.3, 0.5, 1.9])
Z = np.array([0.77, 0.0, 2.2, -0.3])


def test_spectral_weights_formula():
    cfg = NoiseConfiguration(octaves=4, lacunarity=2.0, persistence=0.5)
    w = spectral_weights(cfg)
    assert len(w) == 4
    assert np.allclose(w, [2.0 ** (-0.5 * i) for i in range(4)])
    assert w[0] == 1.0


def test_spectral_weights_memoised_per_value():
    a = spectral_weights(NoiseConfiguration(octaves=6, lacunarity=1.9, persistence=0.7))
    b = spectral_weights(NoiseConfiguration(octaves=6, lacunarity=1.9, persistence=0.7))
    assert a is b


def test_non_positive_octaves_give_empty_sum():
    assert spectral_weights(NoiseConfiguration(octaves=0)) == ()
    assert spectral_weights(NoiseConfiguration(octaves=-3)) == ()
    gen = NoiseGenerator(7, NoiseConfiguration(octaves=0))
    assert np.all(gen.fbm3d(X, Y, Z) == 0.0)
    assert np.all(gen.fbm2d(X, Y) == 0.0)


def test_default_configuration():
    gen = NoiseGenerator(1)
    assert gen.octaves == 1
    assert gen.lacunarity == DEFAULT_LACUNARITY
    assert gen.persistence == DEFAULT_PERSISTENCE


def test_fbm3d_at_origin_is_zero_for_single_octave():
    gen = NoiseGenerator(42)
    gen.set_octaves(1)
    assert float(gen.fbm3d(0.0, 0.0, 0.0)) == 0.0
    assert float(gen.noise3d(0.0, 0.0, 0.0)) == 0.0


def test_fbm_single_octave_equals_noise():
    gen = NoiseGenerator(3)
    assert np.array_equal(gen.fbm3d(X, Y, Z), gen.noise3d(X, Y, Z))
    assert np.array_equal(gen.fbm2d(X, Y), gen.noise2d(X, Y))


def test_fbm3d_sums_exactly_current_octaves():
    gen = NoiseGenerator(11)
    gen.set_octaves(5)
    five = gen.fbm3d(X, Y, Z)
    gen.set_octaves(3)
    three = gen.fbm3d(X, Y, Z)

    lac = gen.lacunarity
    weights = gen.weights()
    assert len(weights) == 3
    x, y, z = X.copy(), Y.copy(), Z.copy()
    expected = np.zeros_like(X)
    for w in weights:
        expected = expected + gen.noise3d(x, y, z) * w
        x, y, z = x * lac, y * lac, z * lac

    assert np.allclose(three, expected)
    assert not np.allclose(three, five)


def test_setters_change_outputs():
    gen = NoiseGenerator(21)
    gen.set_octaves(4)
    base = gen.fbm3d(X, Y, Z)

    gen.set_lacunarity(1.5)
    assert gen.lacunarity == 1.5
    lac_changed = gen.fbm3d(X, Y, Z)
    assert not np.allclose(base, lac_changed)

    gen.set_persistence(0.2)
    assert gen.persistence == 0.2
    assert not np.allclose(lac_changed, gen.fbm3d(X, Y, Z))


def test_per_call_overrides_leave_configuration_untouched():
    gen = NoiseGenerator(5, NoiseConfiguration(octaves=4))
    before = gen.config
    out = gen.fbm2d(X, Y, lacunarity=2.0, persistence=0.5)
    assert gen.config == before

    ref = NoiseGenerator(5, NoiseConfiguration(octaves=4, lacunarity=2.0, persistence=0.5))
    assert np.array_equal(out, ref.fbm2d(X, Y))
    assert np.array_equal(gen.fbm3d(X, Y, Z, 2.0, 0.5), ref.fbm3d(X, Y, Z))


def test_generators_do_not_share_configuration():
    a = NoiseGenerator(1)
    b = NoiseGenerator(1)
    a.set_lacunarity(3.0)
    assert b.lacunarity == DEFAULT_LACUNARITY


def test_fbm_deterministic_for_seed():
    cfg = NoiseConfiguration(octaves=6)
    a = NoiseGenerator(99, cfg)
    b = NoiseGenerator(99, cfg)
    assert np.array_equal(a.fbm3d(X, Y, Z), b.fbm3d(X, Y, Z))
    assert np.array_equal(a.fbm2d(X, Y), b.fbm2d(X, Y))


def test_fbm2_two_octaves_by_hand():
    p = Perlin2D(seed=0)
    cfg = NoiseConfiguration(octaves=2, lacunarity=2.0, persistence=1.0)
    out = fbm2(p, X, Y, cfg)
    expected = p.noise(X, Y) + p.noise(X * 2.0, Y * 2.0) * 0.5
    assert np.allclose(out, expected)


def test_fbm3_grid_shape_and_finite():
    p = Perlin3D(seed=0)
    xg, yg = np.meshgrid(np.linspace(0, 3, 64), np.linspace(0, 3, 32))
    out = fbm3(p, xg, np.zeros_like(xg), yg, NoiseConfiguration(octaves=5))
    assert out.shape == xg.shape
    assert np.isfinite(out).all()


def test_zero_lacunarity_gives_nan_instead_of_raising():
    gen = NoiseGenerator(42)
    gen.set_lacunarity(0.0)
    assert np.allclose(gen.fbm3d(0.3, 0.4, 0.5), gen.noise3d(0.3, 0.4, 0.5))

    gen.set_octaves(3)
    w = gen.weights()
    assert w[0] == 1.0
    assert np.isinf(w[1]) and np.isinf(w[2])
    out = gen.fbm3d(0.3, 0.4, 0.5)
    assert np.isnan(out)
    assert np.isnan(gen.fbm2d(0.3, 0.4))


def test_negative_lacunarity_gives_real_nan():
    gen = NoiseGenerator(42, NoiseConfiguration(octaves=3))
    gen.set_lacunarity(-2.0)
    w = gen.weights()
    assert all(isinstance(v, float) for v in w)
    assert w[0] == 1.0
    assert np.isnan(w[1])
    out = gen.fbm3d([0.3], [0.4], [0.5])
    assert out.dtype == np.float64
    assert np.isnan(out).all()

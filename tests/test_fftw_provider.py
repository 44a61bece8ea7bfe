import numpy as np
import numpy.testing as npt
import pytest

pytest.importorskip("pyfftw")

from fftplan import Effort, TransformKind, build  # noqa: E402


def test_fftw_impulse_and_round_trip() -> None:
    with build(4, "fft", provider="fftw") as plan:
        assert plan.provider == "fftw"
        npt.assert_allclose(plan.execute([1, 0, 0, 0]), [1, 1, 1, 1], atol=1e-12)
        x = np.array([1 + 2j, -1j, 3.0, 0.5])
        npt.assert_allclose(plan.execute(plan.execute(x), inverse=True), 4 * x, atol=1e-10)


@pytest.mark.parametrize("kind", [TransformKind.DCT1, TransformKind.DCT2, TransformKind.DCT3, TransformKind.DCT4])
def test_fftw_matches_scipy_provider(kind: TransformKind) -> None:
    x = np.random.default_rng(5).standard_normal(10)
    with build(10, kind, Effort.MEASURE, provider="fftw") as native, build(10, kind, provider="scipy") as reference:
        npt.assert_allclose(native.execute(x), reference.execute(x), atol=1e-10)
        npt.assert_allclose(native.execute(x, inverse=True), reference.execute(x, inverse=True), atol=1e-10)


def test_fftw_dct2_of_constant() -> None:
    with build(4, "dct2", provider="fftw") as plan:
        npt.assert_allclose(plan.execute([1, 1, 1, 1]), [4, 0, 0, 0], atol=1e-12)


def test_fftw_buffers_are_bound_across_calls() -> None:
    with build(8, "fft", Effort.MEASURE, provider="fftw") as plan:
        first = plan.execute(np.zeros(8))
        second = plan.execute(np.ones(8))
    npt.assert_allclose(first, np.zeros(8), atol=1e-12)
    npt.assert_allclose(second, np.fft.fft(np.ones(8)), atol=1e-12)

import numpy.testing as npt

from fftplan import Effort, PlanCache, TransformKind


def test_cache_reuses_plans_for_same_configuration() -> None:
    with PlanCache() as cache:
        first = cache.get(8, "fft")
        second = cache.get(8, TransformKind.FFT, Effort.ESTIMATE)
        other_size = cache.get(16, "fft")
        other_effort = cache.get(8, "fft", "measure")
        assert first is second
        assert first is not other_size
        assert first is not other_effort
        assert len(cache) == 3
        assert (cache.hits, cache.misses) == (1, 3)
    assert first.disposed and other_size.disposed and other_effort.disposed
    assert len(cache) == 0


def test_cache_keys_on_kind() -> None:
    cache = PlanCache(provider="scipy")
    dct2 = cache.get(4, 2)
    dct3 = cache.get(4, 3)
    assert dct2 is not dct3
    npt.assert_allclose(dct2.execute([1, 1, 1, 1]), [4, 0, 0, 0], atol=1e-12)
    assert {plan.kind for plan in cache} == {TransformKind.DCT2, TransformKind.DCT3}
    cache.close()
    cache.close()
    assert dct2.disposed


def test_cache_rebuilds_plans_disposed_by_caller() -> None:
    with PlanCache() as cache:
        first = cache.get(4, "dct2")
        first.dispose()
        second = cache.get(4, "dct2")
        assert second is not first
        assert not second.disposed
        npt.assert_allclose(second.execute([1, 1, 1, 1]), [4, 0, 0, 0], atol=1e-12)
        assert (cache.hits, cache.misses) == (0, 2)
        assert cache.get(4, "dct2") is second
        assert len(cache) == 1

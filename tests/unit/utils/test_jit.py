"""Tests for JIT compilation helpers."""

import numpy as np
from ordinfo.utils import jit
from ordinfo.utils.jit import conditional_njit, is_jit_enabled, jit_info


def test_decorator_without_arguments():
    """A decorated function computes the same result as the plain one."""

    @conditional_njit
    def total(x):
        s = 0
        for v in x:
            s += v
        return s

    assert total(np.arange(10)) == 45


def test_decorator_with_arguments():
    @conditional_njit(cache=False)
    def square(x):
        return x * x

    assert square(3) == 9


def test_is_jit_enabled_follows_flag():
    assert is_jit_enabled() is (not jit.ORDINFO_DISABLE_NUMBA)


def test_disabled_returns_original(monkeypatch):
    """With JIT disabled the function is returned undecorated."""
    monkeypatch.setattr(jit, "ORDINFO_DISABLE_NUMBA", True)

    def f(x):
        return x + 1

    assert jit.conditional_njit(f) is f
    assert jit.conditional_njit(cache=True)(f) is f
    assert not jit.is_jit_enabled()


def test_jit_info(capsys):
    jit_info()
    out = capsys.readouterr().out
    assert "JIT enabled" in out
    assert "Numba version" in out

## flagspy — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import sys
import threading

import pytest

from flagspy import spy as spy_module
from flagspy.spy import FlagSpy
from flagspy.errors import FlagspyReleasedError, FlagspyError


def test_get_present_and_absent():
    spy = FlagSpy(["-one", "val1", "-two"])
    assert spy.get("one") == ("val1", True)
    assert spy.get("two") == ("", True)
    assert spy.get("three") == ("", False)


def test_repeated_get_is_stable():
    spy = FlagSpy(["-a='x'"])
    assert spy.get("a") == spy.get("a") == ("x", True)


def test_terminator_hides_later_flags():
    spy = FlagSpy(["-one", "--", "val1", "-two"])
    assert spy.get("one") == ("", True)
    assert spy.get("two") == ("", False)


def test_lazy_scan_and_states():
    spy = FlagSpy(["-a"])
    assert spy.state == 'uninitialized' and not spy.scanned
    spy.get("a")
    assert spy.state == 'ready' and spy.scanned
    spy.free()
    assert spy.state == 'released'


def test_scan_runs_once(monkeypatch):
    calls = []
    def counting_scan(tokens):
        calls.append(tokens)
        return {"a": "1"}
    monkeypatch.setattr(spy_module, "scan", counting_scan)

    spy = FlagSpy(["-a", "1"])
    for _ in range(5):
        assert spy.get("a") == ("1", True)
    spy.flags()
    assert len(calls) == 1


def test_argv_is_read_when_scanning(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["prog", "-early"])
    spy = FlagSpy()
    monkeypatch.setattr(sys, "argv", ["prog", "-late=1"])
    assert spy.get("late") == ("1", True)
    assert spy.get("early") == ("", False)


def test_table_is_fixed_after_scan():
    argv = ["-a", "1"]
    spy = FlagSpy(argv)
    assert spy.get("a") == ("1", True)
    argv.append("-b")
    assert spy.get("b") == ("", False)


def test_concurrent_first_calls_scan_once(monkeypatch):
    calls = []
    gate = threading.Event()
    real_scan = spy_module.scan
    def slow_scan(tokens):
        calls.append(1)
        gate.wait(timeout=5)
        return real_scan(tokens)
    monkeypatch.setattr(spy_module, "scan", slow_scan)

    spy = FlagSpy(["-name", "value"])
    results = []
    def worker():
        results.append(spy.get("name"))
    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads: t.start()
    gate.set()
    for t in threads: t.join(timeout=10)

    assert len(calls) == 1
    assert results == [("value", True)] * 8


def test_get_after_free_raises():
    spy = FlagSpy(["-a"])
    spy.get("a")
    spy.free()
    with pytest.raises(FlagspyReleasedError):
        spy.get("a")
    with pytest.raises(FlagspyError):
        spy.flags()


def test_free_before_scan_never_scans(monkeypatch):
    calls = []
    monkeypatch.setattr(spy_module, "scan", lambda tokens: calls.append(tokens) or {})
    spy = FlagSpy(["-a"])
    spy.free()
    with pytest.raises(FlagspyReleasedError):
        spy.get("a")
    assert calls == []


def test_free_is_idempotent():
    spy = FlagSpy([])
    spy.free()
    spy.free()
    assert spy.state == 'released'


def test_released_error_is_runtime_error():
    spy = FlagSpy([])
    spy.free()
    with pytest.raises(RuntimeError):
        spy.get("x")


def test_context_manager_frees_on_exit():
    with FlagSpy(["-v"]) as spy:
        assert spy.get("v") == ("", True)
    assert spy.state == 'released'
    assert repr(spy) == "<FlagSpy released>"


def test_flags_returns_copy():
    spy = FlagSpy(["-a=1"])
    table = spy.flags()
    table["b"] = "2"
    assert spy.get("b") == ("", False)

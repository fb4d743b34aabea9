from __future__ import annotations

import pytest

from socialnet.runtime import metrics


@pytest.fixture(autouse=True)
def _fresh_metrics():
    metrics.reset()
    yield
    metrics.reset()


def test_metrics_enabled_env(monkeypatch) -> None:
    monkeypatch.delenv("SOCIALNET_METRICS_ENABLED", raising=False)
    assert metrics.metrics_enabled() is False
    monkeypatch.setenv("SOCIALNET_METRICS_ENABLED", "yes")
    assert metrics.metrics_enabled() is True


def test_ledger_records_counters_and_gauges(make_ledger) -> None:
    lg = make_ledger(metrics_on=True)
    lg.register_user("0xA", "alice", "")
    lg.create_post("0xA", "hi")
    with pytest.raises(Exception):
        lg.toggle_like("0xA", 1)

    snap = metrics.snapshot()
    assert snap["counters"]["tx_applied_total"] == 2
    assert snap["counters"]["tx_user_register_total"] == 1
    assert snap["counters"]["tx_post_create_total"] == 1
    assert snap["counters"]["tx_rejected_self_like_forbidden_total"] == 1
    assert snap["gauges"] == {"total_users": 1, "total_posts": 1}


def test_ledger_without_metrics_records_nothing(make_ledger) -> None:
    lg = make_ledger(metrics_on=False)
    lg.register_user("0xA", "alice", "")
    assert metrics.snapshot()["counters"] == {}


def test_prometheus_text_is_sorted() -> None:
    metrics.inc_counter("b_total", 2)
    metrics.inc_counter("a_total")
    metrics.set_gauge("total_posts", 7)
    metrics.inc_counter("  ")

    lines = metrics.format_prometheus().splitlines()
    assert lines[0].startswith("socialnet_uptime_ms ")
    assert lines[1:] == ["socialnet_a_total 1", "socialnet_b_total 2", "socialnet_total_posts 7"]

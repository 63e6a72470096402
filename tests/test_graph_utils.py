import logging

from scalar_grad import Tape, get_graph_stats, leaf, log_graph_summary


def test_empty_tape_stats():
    stats = get_graph_stats(Tape())
    assert stats["nodes"] == 0
    assert stats["edges"] == 0
    assert stats["operations"] == {}


def test_stats_counts():
    t = Tape()
    x = leaf(2.0, tape=t)
    y = leaf(3.0, tape=t)
    a = x * x
    _ = a + y
    stats = get_graph_stats(t)
    assert stats["nodes"] == 4
    assert stats["leaves"] == 2
    assert stats["edges"] == 4
    assert stats["max_fan_out"] == 2  # x feeds both operands of a
    assert stats["avg_fan_out"] == 1.0
    assert stats["operations"] == {"mul": 1, "add": 1}


def test_log_graph_summary(caplog):
    t = Tape()
    x = leaf(2.0, tape=t)
    _ = x * x
    with caplog.at_level(logging.INFO, logger="scalar_grad.core.graph_utils"):
        stats = log_graph_summary(t, detailed=True)
    text = caplog.text
    assert stats["nodes"] == 2
    assert "2 nodes" in text
    assert "Node   1: mul" in text
    assert "[leaf]" in text


def test_log_empty_graph(caplog):
    with caplog.at_level(logging.INFO, logger="scalar_grad.core.graph_utils"):
        log_graph_summary(Tape())
    assert "empty computation graph" in caplog.text

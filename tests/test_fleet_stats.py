import pytest

from device_store import with_defaults
from fleet_stats import summarize


def test_summarize_defaults():
    stats = summarize(with_defaults())
    assert stats.total_devices == 3
    assert stats.deployed_devices == 2
    assert stats.undeployed_devices == 1
    assert stats.total_coverage == 20
    assert stats.total_cost == 150000
    assert stats.average_price == 50000
    assert stats.average_coverage == 10
    assert sum(stats.devices_by_type.values()) == 3
    assert stats.deployment_rate == pytest.approx(200 / 3)


def test_summarize_empty():
    stats = summarize([])
    assert stats.total_devices == 0
    assert stats.average_price == 0
    assert stats.average_coverage == 0
    assert stats.devices_by_type == {}
    assert stats.deployment_rate == 0

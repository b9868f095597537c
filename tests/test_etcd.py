import pytest

from sealkube.etcd import (
    backup_plan,
    health_endpoints,
    reformat_host_to_ip,
    trim_path_for_oss,
)


@pytest.mark.parametrize(
    "host, want",
    [("192.168.0.22:22", "192.168.0.22"), ("192.168.0.22", "192.168.0.22")],
)
def test_reformat_host_to_ip(host, want):
    assert reformat_host_to_ip(host) == want


def test_trim_path_for_oss():
    assert trim_path_for_oss("/sealos//snapshot-1598146449") == "sealos/snapshot-1598146449"


def test_trim_path_for_oss_root_only():
    assert trim_path_for_oss("//snapshot") == "snapshot"


def test_backup_plan_outside_docker():
    plan = backup_plan(
        ["192.168.0.22:22", "192.168.0.23"], "/opt/sealos/etcd-backup", "snapshot", "/sealos/"
    )
    assert plan.name == "snapshot"
    assert plan.long_name == "/opt/sealos/etcd-backup/snapshot"
    assert plan.etcd_hosts == ["192.168.0.22", "192.168.0.23"]
    assert plan.endpoints == ["192.168.0.22:2379"]
    assert plan.object_path == "sealos/snapshot"


def test_backup_plan_in_docker_adds_timestamp():
    plan = backup_plan(
        ["192.168.0.22"], "/opt/sealos/etcd-backup", "snapshot", "/sealos/",
        in_docker=True, timestamp=1598146449,
    )
    assert plan.name == "snapshot-1598146449"
    assert plan.long_name == "/opt/sealos/etcd-backup/snapshot-1598146449"
    assert plan.object_path == "sealos/snapshot-1598146449"


def test_backup_plan_requires_masters():
    with pytest.raises(ValueError):
        backup_plan([], "/opt/sealos/etcd-backup", "snapshot")


def test_health_endpoints():
    hosts, endpoints = health_endpoints(["192.168.0.22:22", "192.168.0.23"])
    assert hosts == ["192.168.0.22", "192.168.0.23"]
    assert endpoints == ["192.168.0.22:2379", "192.168.0.23:2379"]
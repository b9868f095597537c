import pytest

from sealkube.bootstrap import (
    calico_interface,
    default_sans,
    kubeconfig_fix_command,
    master0_hosts_command,
)
from sealkube.kubeadm import (
    KUBE_CONTROLLER_CONFIG_FILE,
    KUBE_SCHEDULER_CONFIG_FILE,
    ClusterSettings,
)

APISERVER = "apiserver.cluster.local"


def test_default_sans_order_and_content():
    settings = ClusterSettings(
        master_ips=["10.0.0.1:22", "10.0.0.2"],
        vip="10.103.97.2",
        apiserver=APISERVER,
        cert_sans=["extra.example.com"],
    )
    sans = default_sans(settings)
    assert sans[:3] == ["127.0.0.1", APISERVER, "10.103.97.2"]
    assert sans[3] == "extra.example.com"
    assert sans[4:] == ["10.0.0.1", "10.0.0.2"]


def test_default_sans_without_extra_names():
    settings = ClusterSettings(master_ips=["10.0.0.1"], vip="10.103.97.2", apiserver=APISERVER)
    sans = default_sans(settings)
    assert len(sans) == 4
    assert sans[-1] == "10.0.0.1"


@pytest.mark.parametrize("version", ["v1.19.1", "v1.19.2", "1.19.2"])
def test_kubeconfig_fix_command_in_range(version):
    cmd = kubeconfig_fix_command(version, APISERVER, "10.0.0.5:22")
    assert cmd is not None
    assert cmd.startswith(f'grep -qF "{APISERVER}" {KUBE_SCHEDULER_CONFIG_FILE}')
    assert f"sed -i 's/{APISERVER}/10.0.0.5/' {KUBE_CONTROLLER_CONFIG_FILE}" in cmd
    assert cmd.endswith(f"sed -i 's/{APISERVER}/10.0.0.5/' {KUBE_SCHEDULER_CONFIG_FILE}")
    assert "10.0.0.5:22" not in cmd


@pytest.mark.parametrize("version", ["v1.19.0", "v1.19.3", "v1.20.1", "v1.18.9", "", "latest"])
def test_kubeconfig_fix_command_out_of_range(version):
    assert kubeconfig_fix_command(version, APISERVER, "10.0.0.5") is None


def test_calico_interface_ipv4_uses_can_reach():
    assert calico_interface("192.168.0.1") == "can-reach=192.168.0.1"


@pytest.mark.parametrize("value", ["eth0", "eth.*|en.*", "::1"])
def test_calico_interface_other_values_name_interface(value):
    assert calico_interface(value) == "interface=" + value


def test_master0_hosts_command():
    cmd = master0_hosts_command("10.0.0.1:22", APISERVER)
    assert cmd == (
        f"grep -qF '10.0.0.1 {APISERVER}' /etc/hosts || "
        f"echo 10.0.0.1 {APISERVER} >> /etc/hosts"
    )
"""Shell commands for joining, cleaning and routing cluster nodes."""

from __future__ import annotations

import re
from collections.abc import Iterable

from sealkube.kubeadm import ip_format

_API_PORT = 6443
_ROUTE_ACTIONS = ("add", "del")
_CERT_KEY_PATTERN = re.compile(r"Using certificate key:\r?\n([^\r\n]*)")

_COPY_KUBECONFIG = (
    "rm -rf .kube/config && mkdir -p /root/.kube && "
    "cp /etc/kubernetes/admin.conf /root/.kube/config && chmod 600 /root/.kube/config"
)
_CLEAN_INSTALL_DIR = "rm -rf /root/kube || :"


def clean_commands(apiserver: str, vlog: str = "") -> list[str]:
    """Return, in order, the commands that wipe kubernetes from a host."""
    return [
        "kubeadm reset -f " + vlog,
        "sed -i '/kubectl/d;/sealos/d' /root/.bashrc",
        "modprobe -r ipip  && lsmod",
        "rm -rf ~/.kube/ && rm -rf /etc/kubernetes/",
        "rm -rf /etc/systemd/system/kubelet.service.d && rm -rf /etc/systemd/system/kubelet.service",
        "rm -rf /usr/bin/kube* && rm -rf /usr/bin/crictl",
        "rm -rf /etc/cni && rm -rf /opt/cni",
        "rm -rf /var/lib/etcd && rm -rf /var/etcd",
        f'sed -i "/{apiserver}/d" /etc/hosts ',
        "rm -rf ~/kube",
        "rm -rf /etc/kubernetes/pki",
        "ps -ef |grep -v 'grep'|grep sealos >/dev/null || rm -rf /usr/bin/sealos",
    ]


def route_check_command(node: str) -> str:
    """Return the command that reports ``ok`` when ``node`` holds the default route."""
    return f"sealos route --host {ip_format(node)}"


def route_change_command(action: str, vip: str, node: str) -> str:
    """Return the command that adds or deletes the route to ``vip`` via ``node``."""
    if action not in _ROUTE_ACTIONS:
        raise ValueError(f"unknown route action: {action!r}")
    return f"sealos route {action} --host {vip} --gateway {ip_format(node)}"


def ipvs_command(vip: str, masters: Iterable[str]) -> str:
    """Return the one-shot command that creates IPVS rules from ``vip`` to the masters."""
    real_servers = "".join(f" --rs {ip_format(m)}:{_API_PORT}" for m in masters)
    return (
        f"sealos ipvs --vs {vip}:{_API_PORT} {real_servers} "
        "--health-path /healthz --health-schem https --run-once"
    )


def apiserver_host_entry(ip: str, apiserver: str) -> str:
    """Return the /etc/hosts line that maps ``apiserver`` to ``ip``."""
    return f"{ip} {apiserver}"


def join_master_commands(master: str, master0: str, apiserver: str, join_command: str) -> list[str]:
    """Return, in order, the commands run on a master joining the control plane.

    The apiserver name first points at the first master for the join and is then
    switched to the joining master itself.
    """
    first_entry = apiserver_host_entry(ip_format(master0), apiserver)
    own_entry = apiserver_host_entry(ip_format(master), apiserver)
    return [
        f"echo {first_entry} >> /etc/hosts",
        join_command,
        f'sed "s/{first_entry}/{own_entry}/g" -i /etc/hosts',
        _COPY_KUBECONFIG,
        _CLEAN_INSTALL_DIR,
    ]


def parse_certificate_key(output: str) -> str:
    """Extract the key printed by ``kubeadm init phase upload-certs``."""
    match = _CERT_KEY_PATTERN.search(output)
    if match is None:
        raise ValueError("certificate key not found in upload-certs output")
    return match.group(1)


def progress_line(*args: str) -> str:
    """Join installation stage names into a ``==>stage==>stage`` trail."""
    return "".join(f"==>{stage}" for stage in args)
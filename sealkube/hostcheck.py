"""Host preparation commands and pre-flight checks."""

from __future__ import annotations

from collections.abc import Iterable

from sealkube.kubeadm import ip_format


def cert_command(
    alt_names: Iterable[str],
    host_ip: str = "",
    host_name: str = "",
    service_cidr: str = "",
    dns_domain: str = "",
) -> str:
    """Return the ``sealos cert`` command line for a node."""
    cmd = "sealos cert "
    if host_ip:
        cmd += f" --node-ip {host_ip}"
    if host_name:
        cmd += f" --node-name {host_name}"
    if service_cidr:
        cmd += f" --service-cidr {service_cidr}"
    if dns_domain:
        cmd += f" --dns-domain {dns_domain}"
    for name in alt_names:
        if name:
            cmd += f" --alt-names {name}"
    return cmd


def set_hosts_command(host_ip: str, host_name: str) -> str:
    """Return the command that adds ``host_name`` to /etc/hosts when missing."""
    return (
        f"cat /etc/hosts |grep {host_name} || "
        f"echo '{ip_format(host_ip)} {host_name}' >> /etc/hosts"
    )


def find_duplicate_hostnames(hostnames: Iterable[str]) -> list[str]:
    """Return each host name that occurs more than once, in order of first repeat."""
    seen: set[str] = set()
    duplicates: list[str] = []
    for name in hostnames:
        if name in seen:
            if name not in duplicates:
                duplicates.append(name)
        else:
            seen.add(name)
    return duplicates
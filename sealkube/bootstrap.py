"""Values and commands used while bootstrapping the first control-plane node."""

from __future__ import annotations

import ipaddress

from sealkube.kubeadm import (
    KUBE_CONTROLLER_CONFIG_FILE,
    KUBE_SCHEDULER_CONFIG_FILE,
    ClusterSettings,
    ip_format,
)

_LOOPBACK = "127.0.0.1"
_FIX_RANGE = (1191, 1192)


def default_sans(settings: ClusterSettings) -> list[str]:
    """Return the API server certificate SANs used when none can be read from config."""
    sans = [_LOOPBACK, settings.apiserver, settings.vip]
    sans.extend(settings.cert_sans)
    sans.extend(ip_format(master) for master in settings.master_ips)
    return sans


def _version_all_digits(version: str) -> int | None:
    parts = version.strip().lstrip("vV").split(".")
    if not parts or not all(part.isdigit() for part in parts):
        return None
    return int("".join(parts))


def kubeconfig_fix_command(version: str, apiserver: str, master: str) -> str | None:
    """Return the command that points controller-manager and scheduler at ``master``.

    Kubernetes 1.19.1 and 1.19.2 make these components use the local API endpoint
    instead of the control-plane endpoint; for any other version None is returned.
    """
    number = _version_all_digits(version)
    if number is None or not _FIX_RANGE[0] <= number <= _FIX_RANGE[1]:
        return None
    ip = ip_format(master)
    return (
        f'grep -qF "{apiserver}" {KUBE_SCHEDULER_CONFIG_FILE}  && \\\n'
        f"sed -i 's/{apiserver}/{ip}/' {KUBE_CONTROLLER_CONFIG_FILE} && \\\n"
        f"sed -i 's/{apiserver}/{ip}/' {KUBE_SCHEDULER_CONFIG_FILE}"
    )


def _is_ipv4(value: str) -> bool:
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return False
    return True


def calico_interface(interface: str) -> str:
    """Return calico's autodetection setting for ``interface``.

    An IPv4 address selects ``can-reach``; anything else names an interface.
    """
    if _is_ipv4(interface):
        return "can-reach=" + interface
    return "interface=" + interface


def master0_hosts_command(master0: str, apiserver: str) -> str:
    """Return the command that maps ``apiserver`` to the first master in /etc/hosts."""
    ip = ip_format(master0)
    return f"grep -qF '{ip} {apiserver}' /etc/hosts || echo {ip} {apiserver} >> /etc/hosts"
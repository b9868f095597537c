"""Commands and host bookkeeping for upgrading a running cluster."""

from __future__ import annotations

import posixpath
from collections.abc import Iterable, Mapping

_UPGRADE_NODE = "kubeadm upgrade node --certificate-renewal=false"
_DELETE_KUBECTL = "sed -i '/kubectl/d;/sealos/d' /root/.bashrc "
_COMPLETION = (
    "echo 'command -v kubectl &>/dev/null && source <(kubectl completion bash)' >> /root/.bashrc"
    " && echo '[ -x /usr/bin/sealos ] && source <(sealos completion bash)' >> /root/.bashrc"
    " && source /root/.bashrc"
)


class HostMap:
    """Two-way lookup between node addresses and their host names."""

    def __init__(self, ip_to_hostname: Mapping[str, str]) -> None:
        self.ip_to_hostname = dict(ip_to_hostname)

    def hostnames_for(self, ips: Iterable[str]) -> list[str]:
        """Return the host names of ``ips`` in order, skipping unknown addresses."""
        return [self.ip_to_hostname[ip] for ip in ips if ip in self.ip_to_hostname]

    def ip_for(self, hostname: str) -> str | None:
        """Return the address whose host name is ``hostname``, or None."""
        return next(
            (ip for ip, name in self.ip_to_hostname.items() if name == hostname),
            None,
        )


def check_upgrade_args(version: str, pkg_url: str) -> None:
    """Raise ValueError when the target version or package location is missing."""
    if not pkg_url or not version:
        raise ValueError("version or pkg-url is required, Exit")


def drain_command(hostname: str) -> str:
    """Return the command that drains ``hostname`` before it is upgraded."""
    return f"kubectl drain {hostname} --ignore-daemonsets --delete-local-data"


def upgrade_command(ip: str, master0: str, new_version: str) -> str:
    """Return the kubeadm upgrade command for the node at ``ip``.

    The first master applies the new version; every other node follows it.
    """
    if ip == master0:
        return f"kubeadm upgrade apply --certificate-renewal=false  --yes {new_version}"
    return _UPGRADE_NODE


def _base(path: str) -> str:
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return posixpath.basename(stripped)


def package_hook(pkg_url: str) -> str:
    """Return the shell run on each host after the install package arrives."""
    pkg = _base(pkg_url)
    kube_hook = (
        f"cd /root && rm -rf kube && tar zxvf {pkg}  && cd /root/kube/shell"
        " && rm -f ../bin/sealos && bash init.sh"
    )
    return f"{kube_hook} && {_DELETE_KUBECTL} && {_COMPLETION}"


def upgrade_package_hook(pkg_url: str, containerd: bool) -> str:
    """Return the shell that unpacks an upgrade package and loads its images."""
    pkg = _base(pkg_url)
    if containerd:
        loader = "ctr -n=k8s.io image import ../images/images.tar || true"
    else:
        loader = "docker load -i ../images/images.tar || true"
    return (
        f"cd /root && rm -rf kube && tar zxvf {pkg}  && cd /root/kube/shell"
        f" && rm -f ../bin/sealos && ({loader}) && cp -f ../bin/* /usr/bin/ "
    )
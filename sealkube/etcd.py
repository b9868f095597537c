"""Planning of etcd snapshot backups and health endpoints."""

from __future__ import annotations

import os
import posixpath
import time
from dataclasses import dataclass, field

ETCD_CLIENT_PORT = 2379


@dataclass
class EtcdBackupPlan:
    """Where a snapshot is written and which etcd members are involved."""

    name: str
    back_dir: str
    long_name: str
    object_path: str
    etcd_hosts: list[str] = field(default_factory=list)
    endpoints: list[str] = field(default_factory=list)


def reformat_host_to_ip(host: str) -> str:
    """Drop a ``:port`` suffix from ``host``."""
    if ":" in host:
        return host.split(":")[0]
    return host


def trim_path_for_oss(path: str) -> str:
    """Clean ``path`` to an absolute path and drop its leading slash."""
    if not path.startswith("/"):
        path = posixpath.join(os.getcwd(), path)
    cleaned = posixpath.normpath(path)
    return cleaned.lstrip("/")


def backup_plan(
    masters: list[str],
    back_dir: str,
    snapshot_name: str,
    object_path: str = "",
    in_docker: bool = False,
    timestamp: int | None = None,
) -> EtcdBackupPlan:
    """Build the backup plan; inside docker the snapshot name gets a unix timestamp."""
    if not masters:
        raise ValueError("no master hosts to take an etcd snapshot from")
    name = snapshot_name
    long_name = f"{back_dir}/{snapshot_name}"
    if in_docker:
        stamp = str(int(time.time()) if timestamp is None else timestamp)
        name = f"{name}-{stamp}"
        long_name = f"{long_name}-{stamp}"
    hosts = [reformat_host_to_ip(h) for h in masters]
    # a snapshot must be requested from one selected member only
    endpoints = [f"{hosts[0]}:{ETCD_CLIENT_PORT}"]
    return EtcdBackupPlan(
        name=name,
        back_dir=back_dir,
        long_name=long_name,
        object_path=trim_path_for_oss(f"{object_path}/{name}"),
        etcd_hosts=hosts,
        endpoints=endpoints,
    )


def health_endpoints(masters: list[str]) -> tuple[list[str], list[str]]:
    """Return the etcd host addresses and their client endpoints."""
    hosts = [reformat_host_to_ip(h) for h in masters]
    return hosts, [f"{h}:{ETCD_CLIENT_PORT}" for h in hosts]
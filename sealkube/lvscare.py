"""Static pod manifest for the lvscare IPVS health keeper."""

from __future__ import annotations

from dataclasses import dataclass

import yaml

_CONTAINER_NAME = "kube-sealyun-lvscare"
_MOUNT_NAME = "lib-modules"
_MODULES_PATH = "/lib/modules"


@dataclass(frozen=True)
class LvscareImage:
    """Container image reference for lvscare."""

    image: str
    tag: str

    def image_name(self) -> str:
        """Return ``image:tag``."""
        return f"{self.image}:{self.tag}"


class _PodDumper(yaml.SafeDumper):
    """Dumper that writes empty strings as ``""``, as the cluster tooling does."""


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if data == "":
        return dumper.represent_scalar("tag:yaml.org,2002:str", "", style='"')
    return dumper.represent_str(data)


_PodDumper.add_representer(str, _represent_str)


def _component_pod(container: dict) -> dict:
    container = dict(container)
    container["volumeMounts"] = [
        {"name": _MOUNT_NAME, "readOnly": True, "mountPath": _MODULES_PATH},
    ]
    container.setdefault("resources", {})
    name = container["name"]
    return {
        "apiVersion": "v1",
        "kind": "Pod",
        "metadata": {
            "name": name,
            "namespace": "kube-system",
            "creationTimestamp": None,
            "labels": {"component": name, "tier": "control-plane"},
        },
        "spec": {
            "containers": [container],
            "priorityClassName": "system-cluster-critical",
            "hostNetwork": True,
            "volumes": [
                {
                    "name": _MOUNT_NAME,
                    "hostPath": {"path": _MODULES_PATH, "type": ""},
                },
            ],
        },
        "status": {},
    }


def lvs_static_pod_yaml(vip: str, masters: list[str], image: LvscareImage) -> str:
    """Return the lvscare static pod YAML; empty when ``vip`` or ``masters`` is empty."""
    if not vip or not masters:
        return ""
    args = ["care", "--vs", f"{vip}:6443", "--health-path", "/healthz", "--health-schem", "https"]
    for master in masters:
        host = master.split(":")[0] if ":" in master else master
        args.extend(["--rs", f"{host}:6443"])
    pod = _component_pod(
        {
            "name": _CONTAINER_NAME,
            "image": image.image_name(),
            "command": ["/usr/bin/lvscare"],
            "args": args,
            "imagePullPolicy": "IfNotPresent",
            "securityContext": {"privileged": True},
        }
    )
    return yaml.dump(
        pod,
        Dumper=_PodDumper,
        default_flow_style=False,
        sort_keys=True,
        allow_unicode=True,
    )
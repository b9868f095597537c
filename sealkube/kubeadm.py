"""Kubeadm configuration templates, rendering and parsing."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field

import jinja2
import yaml

ERROR_EXIT_OS_CASE = -1

ERROR_MASTER_EMPTY = "your master is empty."
ERROR_VERSION_EMPTY = "your kubernetes version is empty."
ERROR_FILE_NOT_EXIST = "your package file is not exist."

ETCD_SNAPSHOT_DEFAULT_NAME = "snapshot"
ETCD_DEFAULT_BACKUP_DIR = "/opt/sealos/etcd-backup"
ETCD_DEFAULT_RESTORE_DIR = "/opt/sealos/etcd-restore"
ETCD_DATA_DIR = "/var/lib/etcd"
TMP_DIR = "/tmp"

KUBE_CONTROLLER_CONFIG_FILE = "/etc/kubernetes/controller-manager.conf"
KUBE_SCHEDULER_CONFIG_FILE = "/etc/kubernetes/scheduler.conf"

DEFAULT_DOCKER_CRI_SOCKET = "/var/run/dockershim.sock"
DEFAULT_CONTAINERD_CRI_SOCKET = "/run/containerd/containerd.sock"
DEFAULT_CGROUP_DRIVER = "cgroupfs"
DEFAULT_SYSTEMD_CGROUP_DRIVER = "systemd"

KUBEADM_V1BETA1 = "kubeadm.k8s.io/v1beta1"
KUBEADM_V1BETA2 = "kubeadm.k8s.io/v1beta2"
KUBEADM_V1BETA3 = "kubeadm.k8s.io/v1beta3"

CONTAINERD_SHELL = """if grep "SystemdCgroup = true"  /etc/containerd/config.toml &> /dev/null; then  
driver=systemd
else
driver=cgroupfs
fi
echo ${driver}"""

DOCKER_SHELL = """driver=$(docker info -f "{{.CgroupDriver}}")
	echo "${driver}\""""

_DISCOVERY_SECTION = """apiVersion: {{ KubeadmApi }}
caCertPath: /etc/kubernetes/pki/ca.crt
discovery:
  bootstrapToken:
    {%- if Master %}
    apiServerEndpoint: {{ Master0 }}:6443
    {% else %}
    apiServerEndpoint: {{ VIP }}:6443
    {% endif -%}
    token: {{ TokenDiscovery }}
    caCertHashes:
    - {{ TokenDiscoveryCAHash }}
  timeout: 5m0s
"""

_INIT_CONFIGURATION = """apiVersion: {{ KubeadmApi }}
kind: InitConfiguration
localAPIEndpoint:
  advertiseAddress: {{ Master0 }}
  bindPort: 6443
nodeRegistration:
  criSocket: {{ CriSocket }}
"""

_JOIN_CONFIGURATION = """
kind: JoinConfiguration
{%- if Master %}
controlPlane:
  localAPIEndpoint:
    advertiseAddress: {{ Master }}
    bindPort: 6443
{%- endif %}
nodeRegistration:
  criSocket: {{ CriSocket }}
"""

_CLUSTER_CONFIGURATION = """---
apiVersion: {{ KubeadmApi }}
kind: ClusterConfiguration
kubernetesVersion: {{ Version }}
controlPlaneEndpoint: "{{ ApiServer }}:6443"
imageRepository: {{ Repo }}
networking:
  # dnsDomain: cluster.local
  podSubnet: {{ PodCIDR }}
  serviceSubnet: {{ SvcCIDR }}
apiServer:
  certSANs:
  - 127.0.0.1
  - {{ ApiServer }}
  {% for item in Masters -%}
  - {{ item }}
  {% endfor -%}
  {% for item in CertSANS -%}
  - {{ item }}
  {% endfor -%}
  - {{ VIP }}
  extraArgs:
    feature-gates: TTLAfterFinished=true
  extraVolumes:
  - name: localtime
    hostPath: /etc/localtime
    mountPath: /etc/localtime
    readOnly: true
    pathType: File
controllerManager:
  extraArgs:
    feature-gates: TTLAfterFinished=true
    experimental-cluster-signing-duration: 876000h
{%- if Network == "cilium" %}
    allocate-node-cidrs: \\"true\\"
{%- endif %}
  extraVolumes:
  - hostPath: /etc/localtime
    mountPath: /etc/localtime
    name: localtime
    readOnly: true
    pathType: File
scheduler:
  extraArgs:
    feature-gates: TTLAfterFinished=true
  extraVolumes:
  - hostPath: /etc/localtime
    mountPath: /etc/localtime
    name: localtime
    readOnly: true
    pathType: File
"""

_KUBEPROXY_CONFIG = """
---
apiVersion: kubeproxy.config.k8s.io/v1alpha1
kind: KubeProxyConfiguration
mode: "ipvs"
ipvs:
  excludeCIDRs:
  - "{{ VIP }}/32"
"""

_KUBELET_CONFIG = """
---
apiVersion: kubelet.config.k8s.io/v1beta1
kind: KubeletConfiguration
authentication:
  anonymous:
    enabled: false
  webhook:
    cacheTTL: 2m0s
    enabled: true
  x509:
    clientCAFile: /etc/kubernetes/pki/ca.crt
authorization:
  mode: Webhook
  webhook:
    cacheAuthorizedTTL: 5m0s
    cacheUnauthorizedTTL: 30s
cgroupDriver: {{ CgroupDriver }}
cgroupsPerQOS: true
clusterDomain: cluster.local
configMapAndSecretChangeDetectionStrategy: Watch
containerLogMaxFiles: 5
containerLogMaxSize: 10Mi
contentType: application/vnd.kubernetes.protobuf
cpuCFSQuota: true
cpuCFSQuotaPeriod: 100ms
cpuManagerPolicy: none
cpuManagerReconcilePeriod: 10s
enableControllerAttachDetach: true
enableDebuggingHandlers: true
enforceNodeAllocatable:
- pods
eventBurst: 10
eventRecordQPS: 5
evictionHard:
  imagefs.available: 15%
  memory.available: 100Mi
  nodefs.available: 10%
  nodefs.inodesFree: 5%
evictionPressureTransitionPeriod: 5m0s
failSwapOn: true
fileCheckFrequency: 20s
hairpinMode: promiscuous-bridge
healthzBindAddress: 127.0.0.1
healthzPort: 10248
httpCheckFrequency: 20s
imageGCHighThresholdPercent: 85
imageGCLowThresholdPercent: 80
imageMinimumGCAge: 2m0s
iptablesDropBit: 15
iptablesMasqueradeBit: 14
kubeAPIBurst: 10
kubeAPIQPS: 5
makeIPTablesUtilChains: true
maxOpenFiles: 1000000
maxPods: 110
nodeLeaseDurationSeconds: 40
nodeStatusReportFrequency: 10s
nodeStatusUpdateFrequency: 10s
oomScoreAdj: -999
podPidsLimit: -1
port: 10250
registryBurst: 10
registryPullQPS: 5
rotateCertificates: true
runtimeRequestTimeout: 2m0s
serializeImagePulls: true
staticPodPath: /etc/kubernetes/manifests
streamingConnectionIdleTimeout: 4h0m0s
syncFrequency: 1m0s
volumeStatsAggPeriod: 1m0s"""

_ENV = jinja2.Environment(keep_trailing_newline=True, autoescape=False)


@dataclass
class ClusterSettings:
    """Cluster-wide values that feed the kubeadm templates."""

    version: str = ""
    master_ips: list[str] = field(default_factory=list)
    vip: str = ""
    apiserver: str = ""
    pod_cidr: str = ""
    svc_cidr: str = ""
    repo: str = ""
    network: str = ""
    cgroup_driver: str = ""
    cert_sans: list[str] = field(default_factory=list)
    join_token: str = field(default_factory=str)
    token_ca_cert_hash: str = field(default_factory=str)


@dataclass
class KubeadmInfo:
    """The parts of a ClusterConfiguration document the installer reads."""

    kind: str = ""
    cert_sans: list[str] = field(default_factory=list)
    dns_domain: str = ""


def ip_format(host: str) -> str:
    """Return the address part of ``host``, dropping any port."""
    host = host.strip()
    try:
        ipaddress.ip_address(host)
        return host
    except ValueError:
        pass
    if host.startswith("[") and "]" in host:
        return host[1:host.index("]")]
    return host.split(":", 1)[0]


def version_number(version: str) -> int:
    """Return major and minor joined as an integer: ``v1.20.4`` gives 120."""
    parts = version.strip().lstrip("vV").split(".")
    if len(parts) < 2 or not (parts[0].isdigit() and parts[1].isdigit()):
        raise ValueError(f"invalid kubernetes version: {version!r}")
    return int(parts[0] + parts[1])


def kubeadm_api_for(version: str) -> tuple[str, str]:
    """Return the kubeadm API version and CRI socket suited to ``version``."""
    try:
        number = version_number(version)
    except ValueError:
        number = 0
    if number < 120:
        return KUBEADM_V1BETA1, DEFAULT_DOCKER_CRI_SOCKET
    if number < 123:
        return KUBEADM_V1BETA2, DEFAULT_CONTAINERD_CRI_SOCKET
    return KUBEADM_V1BETA3, DEFAULT_CONTAINERD_CRI_SOCKET


def init_template_text() -> str:
    """Return the template for ``kubeadm init``."""
    return _INIT_CONFIGURATION + _CLUSTER_CONFIGURATION + _KUBEPROXY_CONFIG + _KUBELET_CONFIG


def join_template_text() -> str:
    """Return the template for ``kubeadm join``."""
    return _DISCOVERY_SECTION + _JOIN_CONFIGURATION + _KUBELET_CONFIG


def _render(template_text: str, context: dict) -> str:
    try:
        template = _ENV.from_string(template_text)
    except jinja2.TemplateSyntaxError as exc:
        raise ValueError(f"template parse failed: {exc}") from exc
    return template.render(context)


def _master0(settings: ClusterSettings) -> str:
    if not settings.master_ips:
        raise ValueError(ERROR_MASTER_EMPTY)
    return ip_format(settings.master_ips[0])


def render_init_config(settings: ClusterSettings, template_text: str | None = None) -> str:
    """Render the init configuration, by default from :func:`init_template_text`."""
    if template_text is None:
        template_text = init_template_text()
    api, cri_socket = kubeadm_api_for(settings.version)
    context = {
        "CertSANS": list(settings.cert_sans),
        "VIP": settings.vip,
        "Masters": [ip_format(m) for m in settings.master_ips],
        "Version": settings.version,
        "ApiServer": settings.apiserver,
        "PodCIDR": settings.pod_cidr,
        "SvcCIDR": settings.svc_cidr,
        "Repo": settings.repo,
        "Master0": _master0(settings),
        "Network": settings.network,
        "CgroupDriver": settings.cgroup_driver,
        "KubeadmApi": api,
        "CriSocket": cri_socket,
    }
    return _render(template_text, context)


def render_join_config(settings: ClusterSettings, master: str, cgroup_driver: str) -> str:
    """Render the join configuration; an empty ``master`` means a worker node."""
    api, cri_socket = kubeadm_api_for(settings.version)
    context = {
        "Master0": _master0(settings),
        "Master": master,
        "TokenDiscovery": settings.join_token,
        "TokenDiscoveryCAHash": settings.token_ca_cert_hash,
        "VIP": settings.vip,
        "KubeadmApi": api,
        "CriSocket": cri_socket,
        "CgroupDriver": cgroup_driver,
    }
    return _render(join_template_text(), context)


def kubeadm_data_from_yaml(content: str) -> KubeadmInfo | None:
    """Find the ClusterConfiguration document in ``content``; None if absent."""
    for chunk in content.split("---"):
        chunk = chunk.strip()
        if not chunk:
            continue
        try:
            doc = yaml.safe_load(chunk)
        except yaml.YAMLError:
            continue
        if not isinstance(doc, dict) or doc.get("kind") != "ClusterConfiguration":
            continue
        api_server = doc.get("apiServer") or {}
        networking = doc.get("networking") or {}
        if not isinstance(api_server, dict) or not isinstance(networking, dict):
            continue
        sans = api_server.get("certSANs") or []
        if not isinstance(sans, list):
            continue
        dns_domain = networking.get("dnsDomain") or "cluster.local"
        return KubeadmInfo(
            kind="ClusterConfiguration",
            cert_sans=[str(s) for s in sans],
            dns_domain=str(dns_domain),
        )
    return None
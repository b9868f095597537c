import yaml

from sealkube.lvscare import LvscareImage, lvs_static_pod_yaml

MASTERS = ["116.31.96.134:6443", "116.31.96.135:6443", "116.31.96.136:6443"]
IMAGE = LvscareImage("fanux/lvscare", "latest")


def _expected_args(vip, rs_list):
    args = ["care", "--vs", f"{vip}:6443", "--health-path", "/healthz", "--health-schem", "https"]
    for rs in rs_list:
        args += ["--rs", rs]
    return args


EXPECTED_DOC = {
    "apiVersion": "v1",
    "kind": "Pod",
    "metadata": {
        "creationTimestamp": None,
        "labels": {"component": "kube-sealyun-lvscare", "tier": "control-plane"},
        "name": "kube-sealyun-lvscare",
        "namespace": "kube-system",
    },
    "spec": {
        "containers": [
            {
                "args": _expected_args("10.10.10.10", MASTERS),
                "command": ["/usr/bin/lvscare"],
                "image": "fanux/lvscare:latest",
                "imagePullPolicy": "IfNotPresent",
                "name": "kube-sealyun-lvscare",
                "resources": {},
                "securityContext": {"privileged": True},
                "volumeMounts": [
                    {"mountPath": "/lib/modules", "name": "lib-modules", "readOnly": True}
                ],
            }
        ],
        "hostNetwork": True,
        "priorityClassName": "system-cluster-critical",
        "volumes": [{"hostPath": {"path": "/lib/modules", "type": ""}, "name": "lib-modules"}],
    },
    "status": {},
}


def test_generate_lvscare_static_pod():
    got = lvs_static_pod_yaml("10.10.10.10", MASTERS, IMAGE)
    assert yaml.safe_load(got) == EXPECTED_DOC


def test_generated_text_layout():
    got = lvs_static_pod_yaml("10.10.10.10", MASTERS, IMAGE)
    lines = got.splitlines()
    assert lines[:3] == ["apiVersion: v1", "kind: Pod", "metadata:"]
    assert lines[-1] == "status: {}"
    assert got.endswith("\n")
    assert "  creationTimestamp: null" in lines
    assert '      type: ""' in lines
    assert "    resources: {}" in lines
    top_level = [line.split(":")[0] for line in lines if line and not line.startswith(" ")]
    assert top_level == ["apiVersion", "kind", "metadata", "spec", "status"]


def test_masters_without_port_give_same_yaml():
    bare = [m.split(":")[0] for m in MASTERS]
    with_port = lvs_static_pod_yaml("10.10.10.10", MASTERS, IMAGE)
    without_port = lvs_static_pod_yaml("10.10.10.10", bare, IMAGE)
    assert without_port == with_port


def test_empty_vip_gives_empty_string():
    assert lvs_static_pod_yaml("", MASTERS, IMAGE) == ""


def test_no_masters_gives_empty_string():
    assert lvs_static_pod_yaml("10.10.10.10", [], IMAGE) == ""


def test_image_name():
    assert IMAGE.image_name() == "fanux/lvscare:latest"


def test_single_master_args():
    got = lvs_static_pod_yaml("10.10.10.10", MASTERS[:1], IMAGE)
    doc = yaml.safe_load(got)
    container = doc["spec"]["containers"][0]
    assert container["args"][-2:] == ["--rs", "116.31.96.134:6443"]
    assert doc["spec"]["volumes"][0]["hostPath"]["type"] == ""
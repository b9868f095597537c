# sealkube

Building blocks for installing and maintaining a kubeadm-based Kubernetes
cluster. The package produces configuration text and shell command strings.
It does not run them. You pass the results to whatever remote-execution
layer you already use.

## Installation

```
pip install sealkube
```

## Modules

- `sealkube.kubeadm`
  - `ClusterSettings` holds the cluster values: `version`, `master_ips`,
    `vip`, `apiserver`, `pod_cidr`, `svc_cidr`, `repo`, `network`,
    `cgroup_driver`, `cert_sans`, `join_token` and `token_ca_cert_hash`.
  - `render_init_config(settings, template_text=None)` renders the init
    configuration. With no template it uses `init_template_text()`.
  - `render_join_config(settings, master, cgroup_driver)` renders the join
    configuration. An empty `master` renders a worker-node join.
  - `kubeadm_api_for(version)` returns the kubeadm API version and the CRI
    socket:
    - below 1.20: `v1beta1` with the docker socket;
    - 1.20 to 1.22: `v1beta2` with containerd;
    - 1.23 and later: `v1beta3` with containerd.
  - `version_number(version)` turns `v1.20.4` into `120` and raises
    `ValueError` on a malformed version.
  - `kubeadm_data_from_yaml(content)` finds the ClusterConfiguration document
    and returns a `KubeadmInfo` with its cert SANs and DNS domain. The DNS
    domain defaults to `cluster.local`. It returns `None` when there is no
    such document.
  - `ip_format(host)` strips a port from an address.
- `sealkube.lvscare`
  - `LvscareImage(image, tag)`, whose `image_name()` gives `image:tag`.
  - `lvs_static_pod_yaml(vip, masters, image)` builds the static pod manifest
    that keeps the IPVS rules from the VIP to each master on port 6443. It
    returns an empty string when `vip` or `masters` is empty.
- `sealkube.etcd`
  - `backup_plan(masters, back_dir, snapshot_name, object_path="", in_docker=False, timestamp=None)`
    returns an `EtcdBackupPlan`. The plan holds:
    - the snapshot name and full path; with `in_docker` both get a unix
      timestamp suffix;
    - the etcd hosts;
    - one snapshot endpoint;
    - the object-storage path, cleaned by `trim_path_for_oss`.
  - `health_endpoints(masters)` returns the hosts and their `:2379`
    endpoints.
  - `reformat_host_to_ip(host)` drops a `:port` suffix.
- `sealkube.pool`
  - `Pool(size)` is a wait group that admits at most `size` tasks at once.
    It has `add(delta)`, `done()` and `wait()`.
- `sealkube.upgrade`
  - `HostMap` maps addresses to host names. `hostnames_for(ips)` and
    `ip_for(hostname)` look up in each direction.
  - `check_upgrade_args(version, pkg_url)` raises `ValueError` when either
    argument is empty.
  - `drain_command(hostname)` builds the drain command.
  - `upgrade_command(ip, master0, new_version)` returns `kubeadm upgrade apply`
    on the first master and `kubeadm upgrade node` on every other node.
  - `package_hook(pkg_url)` and `upgrade_package_hook(pkg_url, containerd)`
    return the shell run after a package is copied to a host.
- `sealkube.hostcheck`
  - `cert_command(...)` builds the `sealos cert` command line.
  - `set_hosts_command(host_ip, host_name)` builds the command that adds an
    `/etc/hosts` entry when it is missing.
  - `find_duplicate_hostnames(hostnames)` lists the host names that occur
    more than once.
- `sealkube.nodeops`
  - `clean_commands(apiserver, vlog="")` lists the commands that wipe
    Kubernetes from a host.
  - `route_check_command(node)` and `route_change_command(action, vip, node)`
    build the route commands. `action` is `add` or `del`.
  - `ipvs_command(vip, masters)` builds the one-shot IPVS command.
  - `apiserver_host_entry(ip, apiserver)` builds an `/etc/hosts` line.
  - `join_master_commands(master, master0, apiserver, join_command)` lists the
    commands run on a joining master.
  - `parse_certificate_key(output)` extracts the key from
    `kubeadm init phase upload-certs` output.
  - `progress_line(*stages)` builds a `==>stage` trail.
- `sealkube.bootstrap`
  - `default_sans(settings)` returns the default SANs.
  - `kubeconfig_fix_command(version, apiserver, master)` returns the
    controller-manager and scheduler fix. It applies only to 1.19.1 and
    1.19.2 and returns `None` for any other version.
  - `calico_interface(interface)` returns the calico interface setting:
    `can-reach=` for an IPv4 address and `interface=` for anything else.
  - `master0_hosts_command(master0, apiserver)` maps the apiserver name to
    the first master in `/etc/hosts`.

## Example

```python
from sealkube.kubeadm import ClusterSettings, render_init_config
from sealkube.lvscare import LvscareImage, lvs_static_pod_yaml

settings = ClusterSettings(
    version="v1.22.0",
    master_ips=["192.168.0.2", "192.168.0.3"],
    vip="10.103.97.2",
    apiserver="apiserver.cluster.local",
)
print(render_init_config(settings))

manifest = lvs_static_pod_yaml(
    "10.103.97.2",
    ["192.168.0.2:22", "192.168.0.3:22"],
    LvscareImage("fanux/lvscare", "latest"),
)
print(manifest)
```

## What it does not do

The package has no command-line program. It does not:

- connect to hosts or execute the commands it builds;
- copy files;
- generate certificates;
- take etcd snapshots or upload them to object storage;
- talk to the Kubernetes API;
- change routes on the local machine.

Those steps are left to the caller.

## Running the tests

```
pip install -e ".[test]"
pytest
```
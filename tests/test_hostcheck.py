from sealkube.hostcheck import cert_command, find_duplicate_hostnames, set_hosts_command


def test_cert_command_bare():
    assert cert_command([]) == "sealos cert "


def test_cert_command_flags_in_order():
    cmd = cert_command(["a.example.com"], "10.0.0.1", "node1", "10.96.0.0/12", "cluster.local")
    order = ["--node-ip 10.0.0.1", "--node-name node1", "--service-cidr 10.96.0.0/12",
             "--dns-domain cluster.local", "--alt-names a.example.com"]
    positions = [cmd.index(part) for part in order]
    assert positions == sorted(positions)


def test_cert_command_skips_empty_alt_names():
    cmd = cert_command(["", "x.example.com", "", "y.example.com"])
    assert cmd.count("--alt-names") == 2
    assert cmd.endswith(" --alt-names y.example.com")


def test_cert_command_skips_empty_fields():
    cmd = cert_command([], host_name="node1")
    assert "--node-ip" not in cmd
    assert "--service-cidr" not in cmd
    assert cmd.startswith("sealos cert  --node-name node1")


def test_set_hosts_command_strips_port():
    cmd = set_hosts_command("10.0.0.1:22", "node1")
    assert "echo '10.0.0.1 node1' >> /etc/hosts" in cmd
    assert cmd.startswith("cat /etc/hosts |grep node1 ||")
    assert ":22" not in cmd


def test_find_duplicate_hostnames_none():
    assert find_duplicate_hostnames(["a", "b", "c"]) == []


def test_find_duplicate_hostnames_reports_each_once():
    assert find_duplicate_hostnames(["a", "b", "a", "b", "a"]) == ["a", "b"]


def test_find_duplicate_hostnames_empty():
    assert find_duplicate_hostnames([]) == []
[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sealkube"
version = "0.1.0"
description = "Builders for kubeadm configuration, lvscare static pods, etcd backup plans and node shell commands for Kubernetes clusters"
requires-python = ">=3.10"
keywords = ["kubernetes", "kubeadm", "cluster", "lvscare", "etcd", "installer"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]
dependencies = [
    "jinja2",
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["sealkube"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

"""Builders for kubeadm configuration, lvscare pods, etcd backup plans and node commands."""

__version__ = "0.1.0"
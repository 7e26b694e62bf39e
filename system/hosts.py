# system/hosts.py
from __future__ import annotations
from pathlib import Path

from logger import log


def server_host(server_url: str) -> str:
    """Host part of a server URL: no scheme, no path."""
    host = server_url.split("://", 1)[-1]
    return host.split("/", 1)[0]


def add_host_lookup(hosts_file: Path, server_ip: str, server_url: str) -> bool:
    """Point the server host (and its s3. alias) at server_ip in hosts_file.

    Nothing is written when a line already mentions the host. Failures
    are logged, never raised. Returns True when a line was added.
    """
    host = server_host(server_url)
    route = f"{server_ip:<15} {host} s3.{host}"
    try:
        content = hosts_file.read_text()
    except OSError as e:
        log.warning('Unable to open "%s" for appending local route "%s": %s', hosts_file, route, e)
        return False

    if any(host in line for line in content.splitlines()):
        log.info("%s already has an entry for %s", hosts_file, host)
        return False

    prefix = "" if content == "" or content.endswith("\n") else "\n"
    try:
        with open(hosts_file, "a") as f:
            f.write(f"{prefix}{route}\n")
    except OSError as e:
        log.warning('Unable to add route "%s" to "%s": %s', route, hosts_file, e)
        return False
    log.info('Added route "%s" to %s', route, hosts_file)
    return True

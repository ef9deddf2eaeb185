"""
Mock Registry Data for Development and Testing

Serves the same contract as RegistryClient without any network access.

Used by --mock for offline development and by the test suite. The default
catalog is long enough to scroll the list pane; tag lists depend on the
repository name.
"""

from typing import Dict, List, Optional

from registry_client import NetworkError, RegistryError


DEFAULT_REPOSITORIES = [
    "alpine", "nginx", "redis", "postgres", "ubuntu", "debian", "node", "python", "golang", "mysql",
    "coreos/etcd", "prometheus/prometheus", "grafana/grafana", "bitnami/kafka",
]


def generate_large_repo_list() -> List[str]:
    """A long catalog so the viewport has to scroll"""
    repos = list(DEFAULT_REPOSITORIES)

    services = ["auth-service", "user-service", "order-service", "payment-service",
                "notification-service", "catalog-service", "inventory-service"]
    for service in services:
        for env in ["prod", "staging", "dev"]:
            repos.append(f"{service}/{env}")

    tools = ["jenkins", "sonarqube", "nexus", "vault"]
    for tool in tools:
        repos.append(f"tools/{tool}")

    return sorted(set(repos))


def generate_tags(repository: str) -> List[str]:
    """Deterministic tag list depending on the repository name"""
    base_tags = ["latest", "stable"]

    if any(name in repository for name in ["alpine", "ubuntu", "debian"]):
        base_tags.extend(["3.18", "3.17", "3.16", "jammy", "focal", "bullseye", "slim"])
    elif "nginx" in repository:
        base_tags.extend(["1.25", "1.24", "1.23", "alpine", "mainline", "stable-alpine"])
    elif any(name in repository for name in ["postgres", "mysql"]):
        base_tags.extend(["15", "14", "13", "alpine", "15-alpine", "14-alpine"])
    elif "redis" in repository:
        base_tags.extend(["7.2", "7.0", "6.2", "alpine", "7.2-alpine"])
    elif any(name in repository for name in ["node", "python"]):
        base_tags.extend(["18", "16", "3.11", "3.10", "alpine", "slim"])
        # Plenty of patch versions to page through
        for major in [18, 19, 20]:
            for minor in range(5):
                base_tags.append(f"{major}.{minor}.0")
    elif "golang" in repository:
        base_tags.extend(["1.21", "1.20", "1.19", "alpine", "1.21-alpine"])
    elif "prometheus" in repository or "grafana" in repository:
        base_tags.extend(["v2.45.0", "v2.44.0", "main", "latest-ubuntu"])
    elif repository.startswith("empty"):
        return []
    else:
        # Generic service tags
        base_tags.extend(["v1.2.3", "v1.2.2", "v1.1.0", "dev", "test"])

    return base_tags


class MockRegistryClient:
    """In-memory registry used by --mock and by tests"""

    def __init__(self, repositories: Optional[List[str]] = None,
                 tags: Optional[Dict[str, List[str]]] = None,
                 fail_with: Optional[RegistryError] = None):
        self.repositories = list(repositories) if repositories is not None else generate_large_repo_list()
        self.tags = dict(tags or {})
        self.fail_with = fail_with
        self.calls: List[tuple] = []

    def fetch_catalog(self) -> List[str]:
        self.calls.append(("catalog",))
        if self.fail_with:
            raise self.fail_with
        return list(self.repositories)

    def fetch_tags(self, repository: str) -> List[str]:
        self.calls.append(("tags", repository))
        if self.fail_with:
            raise self.fail_with
        if repository in self.tags:
            return list(self.tags[repository])
        if repository not in self.repositories:
            raise NetworkError(f"mock://registry/v2/{repository}/tags/list: HTTP 404 Not Found")
        return generate_tags(repository)

    def close(self) -> None:
        """Nothing to release"""

"""Test configuration and fixtures."""

import datetime
from typing import Dict, List, Optional
from unittest.mock import Mock

import boto3
import pytest
from botocore.exceptions import ClientError

from eks_models import ClusterRecord, VersionSupportEntry

UTC = datetime.timezone.utc


class FakeSession:
    """Stands in for boto3.Session, handing out one client per (service, region)."""

    def __init__(self, clients: Optional[Dict] = None):
        self.clients = clients or {}
        self.requested = []

    def client(self, service_name, region_name=None, **kwargs):
        self.requested.append((service_name, region_name))
        key = (service_name, region_name)
        if key not in self.clients:
            self.clients[key] = Mock(name=f"{service_name}-{region_name}")
        return self.clients[key]


def client_error(operation: str, code: str = "AccessDeniedException") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": f"{operation} failed"}}, operation)


def set_pages(client: Mock, operation: str, pages: List[Dict]) -> Mock:
    """Serves `pages` from client.get_paginator(operation).paginate() on a mock client."""
    if not isinstance(getattr(client, "fake_pages", None), dict):
        client.fake_pages = {}
        client.get_paginator.side_effect = lambda name: Mock(
            **{"paginate.return_value": client.fake_pages.get(name, [])}
        )
    client.fake_pages[operation] = pages
    return client


def configure_eks_region(eks_client: Mock, region_clusters: Dict[str, str]) -> Mock:
    """Makes a mock EKS client answer for the given {cluster name: version} map."""
    names = list(region_clusters)
    eks_client.list_clusters.return_value = {"clusters": names[:1]}
    set_pages(eks_client, "list_clusters", [{"clusters": names}])

    def describe_cluster(name):
        return {"cluster": {"name": name, "version": region_clusters[name]}}

    eks_client.describe_cluster.side_effect = describe_cluster
    return eks_client


@pytest.fixture
def aws_credentials(monkeypatch):
    """Dummy credentials so real botocore clients can be built for Stubber."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.delenv("AWS_PROFILE", raising=False)


@pytest.fixture
def real_client(aws_credentials):
    def _make(service: str, region: str = "us-west-2"):
        return boto3.client(service, region_name=region)

    return _make


@pytest.fixture(autouse=True)
def clear_namespace(monkeypatch):
    monkeypatch.delenv("CLOUDWATCH_NAMESPACE", raising=False)


@pytest.fixture
def now():
    return datetime.datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture
def support_items() -> List[Dict]:
    """DescribeClusterVersions items as boto3 returns them."""
    return [
        {
            "clusterVersion": "1.29",
            "versionStatus": "STANDARD_SUPPORT",
            "endOfStandardSupportDate": datetime.datetime(2024, 6, 1, tzinfo=UTC),
            "endOfExtendedSupportDate": datetime.datetime(2025, 6, 1, tzinfo=UTC),
        },
        {
            "clusterVersion": "1.26",
            "versionStatus": "EXTENDED_SUPPORT",
            "endOfStandardSupportDate": datetime.datetime(2023, 6, 11, tzinfo=UTC),
            "endOfExtendedSupportDate": datetime.datetime(2024, 1, 10, tzinfo=UTC),
        },
    ]


@pytest.fixture
def fake_account(support_items):
    """
    Builds a FakeSession for an account with the given clusters.

    `layout` maps region -> {cluster name: version}; regions with an empty map
    have no clusters.
    """

    def _make(layout: Dict[str, Dict[str, str]]) -> FakeSession:
        session = FakeSession()
        ec2 = session.client("ec2", region_name="us-west-2")
        ec2.describe_regions.return_value = {"Regions": [{"RegionName": region} for region in layout]}
        for region, region_clusters in layout.items():
            configure_eks_region(session.client("eks", region_name=region), region_clusters)
        set_pages(
            session.client("eks", region_name="us-west-2"),
            "describe_cluster_versions",
            [{"clusterVersions": support_items}],
        )
        session.requested.clear()
        return session

    return _make


@pytest.fixture
def sample_support_table() -> List[VersionSupportEntry]:
    return [
        VersionSupportEntry("1.27", "STANDARD_SUPPORT", datetime.datetime(2024, 6, 1, tzinfo=UTC)),
    ]


@pytest.fixture
def sample_clusters() -> List[ClusterRecord]:
    return [
        ClusterRecord("us-east-1", "payments", "1.27"),
        ClusterRecord("eu-west-1", "legacy", "1.19"),
    ]

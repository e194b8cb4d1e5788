"""Typed records for the EKS version check, built from AWS SDK responses."""

import datetime
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

STANDARD_SUPPORT = "STANDARD_SUPPORT"
EXTENDED_SUPPORT = "EXTENDED_SUPPORT"
UNSUPPORTED = "UNSUPPORTED"


class ResponseValidationError(ValueError):
    """Raised when an AWS response is missing a field the check relies on."""


def _require(data: Dict[str, Any], key: str, source: str) -> Any:
    value = data.get(key)
    if value is None or value == "":
        raise ResponseValidationError(f"{source} response is missing required field '{key}'")
    return value


def parse_timestamp(value) -> Optional[datetime.datetime]:
    """Normalizes a boto3 datetime or an ISO-8601 string to an aware UTC datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime.datetime):
        parsed = value
    elif isinstance(value, datetime.date):
        parsed = datetime.datetime(value.year, value.month, value.day)
    else:
        parsed = datetime.datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed


@dataclass(frozen=True)
class ClusterRef:
    region: str
    name: str


@dataclass(frozen=True)
class ClusterRecord:
    region: str
    name: str
    version: str

    @classmethod
    def from_describe_cluster(cls, ref: ClusterRef, response: Dict[str, Any]) -> "ClusterRecord":
        cluster = _require(response, "cluster", "DescribeCluster")
        return cls(
            region=ref.region,
            name=cluster.get("name") or ref.name,
            version=_require(cluster, "version", "DescribeCluster"),
        )

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class VersionSupportEntry:
    version: str
    status: str
    end_of_standard_support: Optional[datetime.datetime] = None
    end_of_extended_support: Optional[datetime.datetime] = None

    @classmethod
    def from_response(cls, item: Dict[str, Any]) -> "VersionSupportEntry":
        """
        Builds an entry from one DescribeClusterVersions item.

        `versionStatus` carries the upper-case lifecycle enum; older responses
        only have the lower-case `status` field (e.g. 'standard-support').
        """
        status = item.get("versionStatus")
        if not status:
            legacy = _require(item, "status", "DescribeClusterVersions")
            status = legacy.upper().replace("-", "_")
        return cls(
            version=_require(item, "clusterVersion", "DescribeClusterVersions"),
            status=status,
            end_of_standard_support=parse_timestamp(item.get("endOfStandardSupportDate")),
            end_of_extended_support=parse_timestamp(item.get("endOfExtendedSupportDate")),
        )


@dataclass
class MetricsTally:
    ok: int = 0
    soon_extended: int = 0
    extended: int = 0
    soon_deprecated: int = 0
    deprecated: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "ok": self.ok,
            "soonExtended": self.soon_extended,
            "extended": self.extended,
            "soonDeprecated": self.soon_deprecated,
            "deprecated": self.deprecated,
        }

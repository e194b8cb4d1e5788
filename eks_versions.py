import datetime
import logging

import boto3

from eks_config import HOME_REGION, SUPPORT_WINDOW
from eks_models import EXTENDED_SUPPORT, STANDARD_SUPPORT, MetricsTally, VersionSupportEntry, parse_timestamp


def get_eks_supported_versions(session=None):
    """Fetches the EKS version support table published by AWS."""
    session = session or boto3.Session()
    try:
        eks_client = session.client('eks', region_name=HOME_REGION)
        entries = []
        paginator = eks_client.get_paginator('describe_cluster_versions')
        for page in paginator.paginate():
            entries.extend(VersionSupportEntry.from_response(item) for item in page.get('clusterVersions', []))
        logging.info("Loaded %d EKS versions from the support table.", len(entries))
        return entries
    except Exception as e:
        logging.error("Error getting supported EKS versions: %s", e)
        raise


def _find_entry(support_table, version):
    return next((entry for entry in support_table if entry.version == version), None)


def _has_time_left(end_date, now):
    # A missing end date never counts as having time left.
    return end_date is not None and end_date - now > SUPPORT_WINDOW


def check_eks_versions(support_table, clusters, now=None):
    """Buckets clusters by how urgently their Kubernetes version needs an upgrade."""
    now = parse_timestamp(now) or datetime.datetime.now(datetime.timezone.utc)
    tally = MetricsTally()
    for cluster in clusters:
        entry = _find_entry(support_table, cluster.version)

        # Versions missing from the table are past end of life. A listed
        # UNSUPPORTED version is not counted in any bucket.
        if entry is None:
            tally.deprecated += 1
        elif entry.status == STANDARD_SUPPORT:
            if _has_time_left(entry.end_of_standard_support, now):
                tally.ok += 1
            else:
                tally.soon_extended += 1
        elif entry.status == EXTENDED_SUPPORT:
            if _has_time_left(entry.end_of_extended_support, now):
                tally.extended += 1
            else:
                tally.soon_deprecated += 1
        else:
            logging.warning("Cluster '%s' in %s runs version %s with status %s; not counted.",
                            cluster.name, cluster.region, cluster.version, entry.status)
    return tally

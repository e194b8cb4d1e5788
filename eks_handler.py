"""
EKS version check - Lambda handler.
Counts clusters by Kubernetes version support status and publishes the counts to CloudWatch.
"""

import logging

import boto3

import eks_discovery
import eks_versions
import eks_metrics

logging.getLogger().setLevel(logging.INFO)


def run_version_check(session=None, now=None):
    """Runs discovery, classification and metric publishing once. Returns the MetricsTally."""
    session = session or boto3.Session()

    regions = eks_discovery.get_aws_regions(session)
    eks_regions = eks_discovery.get_eks_regions(session, regions)
    support_table = eks_versions.get_eks_supported_versions(session)
    clusters = eks_discovery.run_eks_discovery(session, eks_regions)

    tally = eks_versions.check_eks_versions(support_table, clusters, now=now)
    logging.info("EKS version check result: %s", tally.to_dict())

    eks_metrics.publish_metrics(tally, session)
    return tally


def lambda_handler(event, context):
    """Scheduled entry point; the event payload is not used."""
    tally = run_version_check()
    return {"metrics": tally.to_dict()}

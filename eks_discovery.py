import logging
from concurrent.futures import ThreadPoolExecutor, as_completed

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from eks_config import HOME_REGION
from eks_models import ClusterRecord, ClusterRef, ResponseValidationError

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')


def get_aws_regions(session=None):
    """Lists every region enabled for the account. Any failure here aborts the run."""
    session = session or boto3.Session()
    try:
        ec2_client = session.client('ec2', region_name=HOME_REGION)
        regions = []
        for region in ec2_client.describe_regions()['Regions']:
            if not region.get('RegionName'):
                raise ResponseValidationError("DescribeRegions response is missing required field 'RegionName'")
            regions.append(region['RegionName'])
        logging.info("Found %d AWS regions.", len(regions))
        return regions
    except Exception as e:
        logging.error("Error fetching all AWS regions: %s", e)
        raise


def region_has_clusters(eks_client):
    response = eks_client.list_clusters(maxResults=1)
    return len(response.get('clusters', [])) > 0


def get_eks_regions(session, regions):
    """
    Checks every region in parallel and returns those holding at least one EKS cluster.

    A region whose check fails is logged and left out; it never aborts discovery.
    """
    if not regions:
        return []

    # One client per region, built on the calling thread.
    clients = {region: session.client('eks', region_name=region) for region in regions}
    eks_regions = []
    with ThreadPoolExecutor(max_workers=len(regions)) as executor:
        future_to_region = {
            executor.submit(region_has_clusters, client): region
            for region, client in clients.items()
        }
        for future in as_completed(future_to_region):
            region = future_to_region[future]
            try:
                if future.result():
                    eks_regions.append(region)
            except (ClientError, BotoCoreError) as e:
                logging.warning("Could not access EKS in region %s. Skipping. Error: %s", region, e)
            except Exception as e:
                logging.error("Error fetching EKS clusters in %s: %s", region, e)

    # Keep the account's region order regardless of completion order.
    eks_regions.sort(key=regions.index)
    logging.info("Regions with EKS clusters: %s", eks_regions)
    return eks_regions


def list_cluster_names(eks_client):
    names = []
    paginator = eks_client.get_paginator('list_clusters')
    for page in paginator.paginate():
        names.extend(page.get('clusters', []))
    return names


def get_cluster_version(eks_client, ref):
    logging.info("Getting version of cluster '%s' in %s...", ref.name, ref.region)
    response = eks_client.describe_cluster(name=ref.name)
    return ClusterRecord.from_describe_cluster(ref, response)


def get_eks_clusters(eks_client, region):
    """
    Returns a ClusterRecord for every cluster in the region.

    Versions are fetched in parallel; a single failed describe aborts the region.
    """
    logging.info("Scanning EKS clusters in region: %s", region)
    try:
        refs = [ClusterRef(region=region, name=name) for name in list_cluster_names(eks_client)]
        if not refs:
            return []
        with ThreadPoolExecutor(max_workers=len(refs)) as executor:
            return list(executor.map(lambda ref: get_cluster_version(eks_client, ref), refs))
    except Exception as e:
        logging.error("Error fetching EKS cluster versions in %s: %s", region, e)
        raise


def run_eks_discovery(session, regions):
    """Enumerates the clusters of all given regions in parallel. Errors propagate."""
    if not regions:
        return []

    clients = {region: session.client('eks', region_name=region) for region in regions}
    with ThreadPoolExecutor(max_workers=len(regions)) as executor:
        results = executor.map(lambda region: get_eks_clusters(clients[region], region), regions)
        all_clusters = [cluster for clusters in results for cluster in clusters]

    logging.info("Found a total of %d EKS clusters across %d regions.", len(all_clusters), len(regions))
    return all_clusters

import logging

import boto3

from eks_config import HOME_REGION, get_namespace

# CloudWatch metric name for each MetricsTally counter, in publishing order.
METRIC_NAMES = (
    ("OK", "ok"),
    ("SoonExtended", "soon_extended"),
    ("Extended", "extended"),
    ("SoonDeprecated", "soon_deprecated"),
    ("Deprecated", "deprecated"),
)


def build_metric_data(tally, namespace=None):
    """Builds the PutMetricData parameters for a tally. Five points fit in one request."""
    return {
        "Namespace": namespace or get_namespace(),
        "MetricData": [
            {"MetricName": metric_name, "Value": getattr(tally, field), "Unit": "Count"}
            for metric_name, field in METRIC_NAMES
        ],
    }


def publish_metrics(tally, session=None, namespace=None):
    session = session or boto3.Session()
    params = build_metric_data(tally, namespace)
    try:
        cloudwatch = session.client("cloudwatch", region_name=HOME_REGION)
        cloudwatch.put_metric_data(**params)
        logging.info("Published %d metrics to CloudWatch namespace %s", len(params["MetricData"]), params["Namespace"])
    except Exception as e:
        logging.error("Failed to publish metrics: %s", e)
        raise
    return params

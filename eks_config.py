import datetime
import os

# Account-wide calls (region listing, support table, metrics) go through this region.
HOME_REGION = "us-west-2"

NAMESPACE_ENV_VAR = "CLOUDWATCH_NAMESPACE"
DEFAULT_NAMESPACE = "EKS/ClusterVersions"

# 15 days by default; 30, 45 or 60 days also work depending on how early you want warnings.
SUPPORT_WINDOW = datetime.timedelta(days=15)


def get_namespace():
    """Returns the CloudWatch namespace, honouring the environment override."""
    return os.environ.get(NAMESPACE_ENV_VAR) or DEFAULT_NAMESPACE

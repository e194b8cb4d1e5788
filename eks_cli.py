import logging

import boto3
import typer

import eks_common
import eks_discovery
import eks_handler

app = typer.Typer(
    no_args_is_help=True
)

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)


@app.command()
def run(
    output_file: str = typer.Option(None, help="Optional path to also save the resulting counts as JSON.")
):
    """
    Count EKS clusters by version support status and publish the counts to CloudWatch.
    """
    tally = eks_handler.run_version_check(boto3.Session())
    typer.echo(eks_common.to_json(tally))
    if output_file:
        eks_common.save_to_json(tally, output_file)


@app.command()
def regions():
    """
    List the AWS regions that hold at least one EKS cluster.
    """
    session = boto3.Session()
    eks_regions = eks_discovery.get_eks_regions(session, eks_discovery.get_aws_regions(session))
    if not eks_regions:
        logging.info("No EKS clusters found in any region.")
    for region in eks_regions:
        typer.echo(region)


@app.command()
def clusters(
    output_file: str = typer.Option(None, help="Optional path to save the cluster list as JSON.")
):
    """
    List every EKS cluster with its Kubernetes version, without publishing metrics.
    """
    session = boto3.Session()
    eks_regions = eks_discovery.get_eks_regions(session, eks_discovery.get_aws_regions(session))
    all_clusters = eks_discovery.run_eks_discovery(session, eks_regions)

    typer.echo(eks_common.to_json(all_clusters))
    if output_file:
        eks_common.save_to_json(all_clusters, output_file)


if __name__ == "__main__":
    app()

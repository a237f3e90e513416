#!/usr/bin/env python3
"""
simplebackup - EC2 snapshot and AMI backup CLI

Run it from a scheduler (cron, systemd timer, EventBridge) to snapshot an
instance's volumes, keep the newest N, and manage whole-machine images.
"""

import click

from simplebackup import __version__
from simplebackup.utils.config import ConfigManager
from simplebackup.utils.decorators import (
    handle_operation_error,
    image_operation,
    snapshot_operation,
)
from simplebackup.utils.exceptions import CLIError
from simplebackup.utils.logger import setup_logger


def setup_logging(level: str, log_dir: str):
    return setup_logger("simplebackup_cli", "cli.log", level, log_dir=log_dir)


def keep_option(func):
    return click.option(
        "--keep",
        "-k",
        type=int,
        default=None,
        help="Number of snapshots to keep per volume (default: backup.keep from settings)",
    )(func)


@click.group()
@click.option("--region", help="AWS region (default: aws.region from settings)")
@click.option("--profile", help="AWS named profile")
@click.option("--marker", help="Ownership marker for created snapshots and images")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    help="Path to settings.yaml",
)
@click.option("--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx, region, profile, marker, config_file, verbose):
    """simplebackup - EC2 snapshot rotation and AMI backups"""
    ctx.ensure_object(dict)

    try:
        config = ConfigManager(config_file=config_file)
        log_level = "DEBUG" if verbose else config.get_logging_level()
        log_dir = config.get_logging_path()
    except CLIError as e:
        handle_operation_error("config", e)
        ctx.exit(1)

    ctx.obj["config"] = config
    ctx.obj["region"] = region
    ctx.obj["profile"] = profile
    ctx.obj["marker"] = marker
    ctx.obj["log_level"] = log_level
    ctx.obj["log_dir"] = log_dir

    logger = setup_logging(log_level, log_dir)
    logger.debug(f"Using settings from {config.settings_file}")


@cli.command()
@click.argument("instance_id")
@click.pass_context
@snapshot_operation()
def create_snapshots(ctx, instance_id):
    """Snapshot every volume attached to INSTANCE_ID"""
    pass


@cli.command()
@click.argument("volume_id")
@keep_option
@click.pass_context
@snapshot_operation()
def rotate_snapshot(ctx, volume_id, keep):
    """Keep the newest snapshots of VOLUME_ID and delete the rest"""
    pass


@cli.command()
@click.argument("instance_id")
@keep_option
@click.pass_context
@snapshot_operation()
def rotate_snapshots(ctx, instance_id, keep):
    """Rotate snapshots of every volume attached to INSTANCE_ID"""
    pass


@cli.command()
@click.argument("instance_id")
@click.option(
    "--no-reboot/--reboot",
    default=True,
    help="Create the image without stopping the instance (default: --no-reboot)",
)
@click.pass_context
@image_operation()
def register_image(ctx, instance_id, no_reboot):
    """Create an AMI from INSTANCE_ID"""
    pass


@cli.command()
@click.argument("image_id")
@click.pass_context
@image_operation()
def deregister_image(ctx, image_id):
    """Deregister IMAGE_ID (its snapshots are kept)"""
    pass


@cli.command()
def version():
    """Show version information"""
    click.echo(f"simplebackup {__version__}")
    click.echo("EC2 snapshot rotation and AMI backups")


if __name__ == "__main__":
    cli()

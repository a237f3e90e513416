"""Decorator patterns wiring CLI commands to backup jobs."""

import importlib
from functools import wraps
from typing import Any, Callable, Optional, Type

import click

from simplebackup.core.models import ImageResult
from simplebackup.jobs.base import BaseJob
from simplebackup.utils.exceptions import BackupError, CLIError
from simplebackup.utils.logger import setup_logger
from simplebackup.utils.session import connect

# Centralized job registry, keyed by CLI command function name
JOB_REGISTRY = {
    "snapshot": {
        "create_snapshots": "simplebackup.jobs.create_snapshots.CreateSnapshotsJob",
        "rotate_snapshot": "simplebackup.jobs.rotate_snapshots.RotateSnapshotJob",
        "rotate_snapshots": "simplebackup.jobs.rotate_snapshots.RotateSnapshotsJob",
    },
    "image": {
        "register_image": "simplebackup.jobs.register_image.RegisterImageJob",
        "deregister_image": "simplebackup.jobs.deregister_image.DeregisterImageJob",
    },
}


def get_job_class(operation_type: str, func_name: str) -> Type[BaseJob]:
    """Dynamically resolve job class based on operation type and function name.

    Raises:
        ValueError: If operation type or function name is not recognized
    """
    job_path = JOB_REGISTRY.get(operation_type, {}).get(func_name)
    if job_path is None:
        raise ValueError(f"Unknown {operation_type} operation: {func_name}")

    module_path, class_name = job_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)


def handle_operation_error(
    operation_name: str, error: Exception, log_dir: Optional[str] = None
) -> None:
    """Report a failed operation on stderr and in the error log."""
    error_msg = f"Error in {operation_name}: {error}"
    click.echo(error_msg, err=True)

    logger = setup_logger("simplebackup.errors", "errors.log", log_dir=log_dir)
    logger.error(
        error_msg,
        extra={"operation": operation_name, "error_type": type(error).__name__},
    )


def handle_output(
    operation_name: str, result: Any, log_dir: Optional[str] = None
) -> bool:
    """Echo an operation's result. Returns False when it carries an error."""
    if isinstance(result, ImageResult):
        click.echo(result.image_id)
        if result.tag_error is not None:
            handle_operation_error(operation_name, result.tag_error, log_dir)
            return False
        return True

    if isinstance(result, list):
        for resource_id in result:
            click.echo(resource_id)
    return True


def _build_manager(obj: dict):
    config = obj["config"]
    return connect(
        region=obj.get("region") or config.get_aws_region(),
        profile=obj.get("profile") or config.get_aws_profile(),
        max_attempts=config.get_max_attempts(),
        log_dir=obj.get("log_dir"),
        level=obj.get("log_level", "INFO"),
    )


def backup_operation(
    job_class: Type[BaseJob], manager_factory: Optional[Callable] = None
):
    """Decorator running a click command through its backup job.

    The command's parameters are passed to ``job.execute``. Any BackupError
    or CLIError is reported and turned into exit code 1.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(ctx, **kwargs):
            operation_name = func.__name__.replace("_", "-")
            obj = ctx.obj

            try:
                if "keep" in kwargs and kwargs["keep"] is None:
                    kwargs["keep"] = obj["config"].get_keep()

                ec2 = (manager_factory or _build_manager)(obj)
                marker = obj.get("marker") or obj["config"].get_marker()
                job = job_class(
                    ec2,
                    marker=marker,
                    log_dir=obj.get("log_dir"),
                    level=obj.get("log_level", "INFO"),
                )
                result = job.execute(**kwargs)
            except (BackupError, CLIError) as e:
                handle_operation_error(operation_name, e, obj.get("log_dir"))
                ctx.exit(1)

            if not handle_output(operation_name, result, obj.get("log_dir")):
                ctx.exit(1)
            return result

        return wrapper

    return decorator


def operation_decorator(operation_type: str):
    """Generic decorator resolving the job class from the command name."""

    def decorator(func: Callable) -> Callable:
        job_class = get_job_class(operation_type, func.__name__)
        return backup_operation(job_class=job_class)(func)

    return decorator


def snapshot_operation():
    """Decorator for snapshot-related operations."""
    return operation_decorator("snapshot")


def image_operation():
    """Decorator for image-related operations."""
    return operation_decorator("image")

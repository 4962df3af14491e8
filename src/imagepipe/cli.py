# cli.py
from __future__ import annotations

import functools
import sys

import click

from imagepipe.catalog.client import HTTPCatalogClient
from imagepipe.config import Settings
from imagepipe.context import StepContext
from imagepipe.model import ImageStreamTagReference, JobSpec, OutputImageTagStepConfiguration
from imagepipe.runner import failed_steps, resolve_parameters, run_steps
from imagepipe.steps.output_image_tag import OutputImageTagStep
from imagepipe.ui.console import Console, get_console, set_console


def target_options(f):
    """Options shared by every command that addresses one output tag."""
    options = [
        click.option("--from", "from_", required=True, help="Pipeline image to tag (e.g. 'bin')"),
        click.option("--to-name", required=True, help="Target image stream name"),
        click.option("--to-tag", required=True, help="Target tag"),
        click.option("--as", "as_", default="", help="Short alias later steps can refer to"),
        click.option("--to-namespace", default="", help="Target namespace (defaults to the job namespace)"),
        click.option("--namespace", default=None, help="Job namespace [env: IMAGEPIPE_NAMESPACE]"),
        click.option("--api", default=None, help="API server URL [env: IMAGEPIPE_API_URL]"),
        click.option("--token", default=None, help="Bearer token [env: IMAGEPIPE_TOKEN]"),
        click.option("--timeout", default=None, type=float, help="Per-call timeout in seconds [env: IMAGEPIPE_TIMEOUT]"),
    ]
    return functools.reduce(lambda acc, opt: opt(acc), reversed(options), f)


def build_step(
    *,
    from_: str,
    to_name: str,
    to_tag: str,
    as_: str,
    to_namespace: str,
    namespace: str | None,
    api: str | None,
    token: str | None,
    timeout: float | None,
    dry: bool = False,
) -> OutputImageTagStep:
    """
    Build the output tag step from CLI options, falling back to the
    environment settings for anything not given.

    Raises:
        click.UsageError: if the job namespace or (outside dry-run) the API URL is missing
    """
    settings = Settings.from_env()
    namespace = namespace or settings.namespace
    if not namespace:
        raise click.UsageError("No job namespace: pass --namespace or set IMAGEPIPE_NAMESPACE")
    api = api or settings.api_url
    if not api and not dry:
        raise click.UsageError("No API server: pass --api or set IMAGEPIPE_API_URL")

    client = HTTPCatalogClient(
        api or "",
        token or settings.token,
        timeout=timeout if timeout is not None else settings.timeout,
        verify_tls=settings.verify_tls,
    )
    config = OutputImageTagStepConfiguration(
        from_=from_,
        to=ImageStreamTagReference(name=to_name, tag=to_tag, as_=as_, namespace=to_namespace),
    )
    return OutputImageTagStep(config, client, JobSpec(namespace=namespace))


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """Promote pipeline images into image stream tags."""
    # stdout carries only what a command produces (dry-run objects,
    # parameter values); progress goes to stderr
    console = Console(debug=debug, progress_to_stderr=True)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@target_options
@click.option("--dry-run", is_flag=True, default=False, help="Print the objects instead of creating them")
@click.option(
    "--skip-done/--no-skip-done",
    default=False,
    help="Leave the target tag alone if it already exists (default: always re-tag)",
)
def tag(from_, to_name, to_tag, as_, to_namespace, namespace, api, token, timeout, dry_run, skip_done):
    """Tag a pipeline image into an image stream tag."""
    console = get_console()
    step = build_step(
        from_=from_, to_name=to_name, to_tag=to_tag, as_=as_, to_namespace=to_namespace,
        namespace=namespace, api=api, token=token, timeout=timeout, dry=dry_run,
    )

    run_ctx = StepContext()
    try:
        console.print_run_started(step.job_spec.namespace, 1, dry=dry_run)
        # this step runs alone, so whatever it requires is taken as present
        results = run_steps(
            [step],
            run_ctx,
            dry=dry_run,
            max_workers=1,
            available=step.requires(),
            skip_done=skip_done,
        )
        console.print_results(results)
        if failed_steps(results):
            sys.exit(1)
    except KeyboardInterrupt:
        run_ctx.cancel()
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)


@cli.command()
@target_options
def params(from_, to_name, to_tag, as_, to_namespace, namespace, api, token, timeout):
    """Print the parameters the output tag provides (requires --as)."""
    console = get_console()
    step = build_step(
        from_=from_, to_name=to_name, to_tag=to_tag, as_=as_, to_namespace=to_namespace,
        namespace=namespace, api=api, token=token, timeout=timeout,
    )

    values, errors = resolve_parameters([step])
    for name, value in sorted(values.items()):
        console.print_parameter(name, value)
    for name, err in sorted(errors.items()):
        console.print_error(f"Could not resolve {name}", str(err))
    if errors:
        sys.exit(1)


@cli.command()
@target_options
def done(from_, to_name, to_tag, as_, to_namespace, namespace, api, token, timeout):
    """Exit 0 if the target tag exists, 1 if it does not."""
    console = get_console()
    step = build_step(
        from_=from_, to_name=to_name, to_tag=to_tag, as_=as_, to_namespace=to_namespace,
        namespace=namespace, api=api, token=token, timeout=timeout,
    )

    try:
        exists = step.done(StepContext())
    except Exception as e:
        console.print_exception(e)
        sys.exit(2)

    console.print_info("done" if exists else "not done")
    sys.exit(0 if exists else 1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()

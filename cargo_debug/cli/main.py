"""Click-based CLI implementing ``cargo debug``."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence
from pathlib import Path

import click

from cargo_debug import __version__
from cargo_debug.config import load_launcher_config
from cargo_debug.errors import LauncherError
from cargo_debug.launcher import DebugRequest, Launcher
from cargo_debug.logs import configure_logging
from cargo_debug.runner import render_command

_PASSTHROUGH = "cargo_debug.passthrough"


class PassthroughCommand(click.Command):
    """Keep everything after the first ``--`` away from click's parser.

    Without this a bare ``cargo debug -- foo`` would bind ``foo`` to the
    optional DEBUGGER argument.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        args = list(args)
        if "--" in args:
            index = args.index("--")
            ctx.meta[_PASSTHROUGH] = tuple(args[index + 1 :])
            args = args[:index]
        return super().parse_args(ctx, args)


def _split_features(entries: Iterable[str]) -> tuple[str, ...]:
    features: list[str] = []
    for entry in entries:
        features.extend(part for part in entry.replace(" ", ",").split(",") if part)
    return tuple(features)


@click.command(
    cls=PassthroughCommand,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.argument("debugger", required=False)
@click.option("--bin", "bin_name", metavar="NAME", help="Debug the named binary target.")
@click.option("--example", metavar="NAME", help="Debug the named example target.")
@click.option("-p", "--package", metavar="SPEC", help="Package containing the target.")
@click.option(
    "--manifest-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to Cargo.toml.",
)
@click.option("--release", is_flag=True, help="Build with the release profile.")
@click.option("--profile", metavar="NAME", help="Build with the given cargo profile.")
@click.option(
    "-F",
    "--features",
    multiple=True,
    metavar="FEATURES",
    help="Space or comma separated features to activate.",
)
@click.option("--all-features", is_flag=True, help="Activate all available features.")
@click.option("--no-default-features", is_flag=True, help="Do not activate the default feature.")
@click.option("--target", metavar="TRIPLE", help="Build for the target triple.")
@click.option(
    "--command-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Script passed to the debugger (gdb --command, lldb --source).",
)
@click.option("--address", metavar="HOST:PORT", help="Listen address for gdbserver.")
@click.option("--no-run", is_flag=True, help="Print the debugger command instead of running it.")
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v, -vv).")
@click.version_option(__version__, prog_name="cargo-debug")
@click.pass_context
def app(
    ctx: click.Context,
    debugger: str | None,
    bin_name: str | None,
    example: str | None,
    package: str | None,
    manifest_path: Path | None,
    release: bool,
    profile: str | None,
    features: Sequence[str],
    all_features: bool,
    no_default_features: bool,
    target: str | None,
    command_file: Path | None,
    address: str | None,
    no_run: bool,
    verbose: int,
) -> None:
    """Build a cargo target and run DEBUGGER on it.

    DEBUGGER defaults to $CARGO_DEBUGGER, then the configured debugger, then
    the platform default. Arguments after -- are passed to the program being
    debugged.
    """

    configure_logging(verbose)
    if bin_name and example:
        raise click.UsageError("--bin and --example are mutually exclusive.")
    if release and profile:
        raise click.UsageError("--release and --profile are mutually exclusive.")

    request = DebugRequest(
        debugger=debugger,
        bin=bin_name,
        example=example,
        package=package,
        manifest_path=manifest_path,
        release=release,
        profile=profile,
        features=_split_features(features),
        all_features=all_features,
        no_default_features=no_default_features,
        target=target,
        command_file=command_file,
        address=address,
        args=tuple(ctx.meta.get(_PASSTHROUGH, ())),
    )

    try:
        launcher = Launcher(load_launcher_config())
        plan = launcher.plan(request)
        if no_run:
            click.echo(render_command(plan.command))
            return
        exit_code = launcher.launch(plan)
    except LauncherError as exc:
        click.echo(f"error: {exc}", err=True)
        ctx.exit(exc.exit_code)
    ctx.exit(exit_code)


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for console_scripts.

    Cargo invokes ``cargo-debug debug ARGS...`` for ``cargo debug ARGS...``;
    the leading subcommand name is dropped so the binary also works directly.
    """

    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] == "debug":
        args = args[1:]
    app.main(args=args, prog_name="cargo debug", standalone_mode=True)

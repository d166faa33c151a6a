"""Config commands -- view and modify global configuration.

Provides the ``sumi config`` sub-command group for reading, updating, and
resetting the user's global configuration file
(:class:`~sumi.models.GlobalConfig`). Settings are persisted in the sumi
config directory and provide the defaults for ``sumi generate``.
"""

from __future__ import annotations

import typer

from sumi.commands import exit_on_error
from sumi.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show current configuration.

    Example::

        sumi config show
        sumi --json config show
    """
    from sumi.config import get_config_dir, load_global_config

    with exit_on_error():
        config = load_global_config()
    info(f"Config directory: {get_config_dir()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g., 'generator.evm_id')."
    ),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    Uses dot notation for nested keys. The updated config is validated
    against :class:`~sumi.models.GlobalConfig` before saving, so an EVM id
    that does not fit in a u8 is rejected.

    Raises:
        typer.Exit: With code 2 if the key path is invalid or validation
            fails.

    Example::

        sumi config set generator.module_name erc20
        sumi config set generator.evm_id 0x0F
        sumi config set output.format plain
    """
    from sumi.config import load_global_config, save_global_config
    from sumi.models import GlobalConfig

    with exit_on_error():
        config = load_global_config()
    data = config.model_dump(mode="json")

    # Navigate the dot-separated key path.
    keys = key.split(".")
    target = data
    for k in keys[:-1]:
        if k not in target or not isinstance(target[k], dict):
            error(f"Invalid config key: {key}")
            raise typer.Exit(code=2)
        target = target[k]

    final_key = keys[-1]
    if final_key not in target or isinstance(target[final_key], dict):
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=2)

    target[final_key] = value

    try:
        new_config = GlobalConfig.model_validate(data)
    except ValueError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=2) from None

    save_global_config(new_config)
    success(f"Set {key} = {value}")


@config_app.command("reset")
def config_reset(
    ctx: typer.Context,
) -> None:
    """Reset configuration to defaults.

    Asks for confirmation unless ``--force`` is active.

    Example::

        sumi config reset
        sumi --force config reset
    """
    from sumi.config import save_global_config
    from sumi.models import GlobalConfig

    force = ctx.obj.get("force", False) if ctx.obj else False
    if not force:
        confirmed = typer.confirm("Reset all config to defaults?")
        if not confirmed:
            info("Cancelled.")
            raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")

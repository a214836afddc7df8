"""Kida environment setup and app binding.

Creates a kida Environment from perch's AppConfig and binds the app's
template globals. The environment is created once during ``App._freeze()``
and shared by every page render.
"""

from typing import Any

from kida import Environment, FileSystemLoader

from perch.config import AppConfig


def create_environment(config: AppConfig, globals_: dict[str, Any]) -> Environment:
    """Create a kida Environment from app configuration.

    Pages with a ``template_name`` load from ``config.template_dir``;
    without one, only inline ``template`` sources can be rendered.
    """
    kwargs: dict[str, Any] = {}
    if config.template_dir is not None:
        kwargs["loader"] = FileSystemLoader(str(config.template_dir))

    env = Environment(
        autoescape=config.autoescape,
        auto_reload=config.debug,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
        **kwargs,
    )

    for name, value in globals_.items():
        env.add_global(name, value)

    return env

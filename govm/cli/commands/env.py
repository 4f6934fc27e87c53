"""Env command implementation."""

from govm.cli.utils import build_config


def run(args) -> int:
    config = build_config(args)
    print(f'export {config.root_env_var}="{config.root_path}"')
    return 0

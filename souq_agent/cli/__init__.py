"""CLI 모듈"""
from .commands import CLI, CLIConfig, create_parser, run_cli

__all__ = ["CLI", "CLIConfig", "create_parser", "run_cli"]

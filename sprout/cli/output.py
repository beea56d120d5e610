"""CLI output utilities and formatting."""

import click
from colorama import Fore, Style

BANNER = f"""
{Fore.GREEN}{Style.BRIGHT}  sprout{Style.RESET_ALL} {Fore.WHITE}- a tiny local version control system{Style.RESET_ALL}
"""


def success(message: str) -> str:
    """Format success message in green."""
    return f"{Fore.GREEN}✓ {message}{Style.RESET_ALL}"


def info(message: str) -> str:
    """Format info message in cyan."""
    return f"{Fore.CYAN}→ {message}{Style.RESET_ALL}"


def warning(message: str) -> str:
    """Format warning message in yellow."""
    return f"{Fore.YELLOW}⚠ {message}{Style.RESET_ALL}"


def error(message: str) -> str:
    """Format error message in red."""
    return f"{Fore.RED}✗ {message}{Style.RESET_ALL}"


def fail(message: str):
    """Print an error to stderr and abort with a non-zero exit code."""
    click.echo(error(message), err=True)
    raise click.Abort()

from rich.console import Console
from rich.markup import escape

# soft_wrap keeps long docker commands on one line
console: Console = Console(highlight=False, soft_wrap=True)

GOOD = "[[bright_green]++[/]]"
BAD  = "[[bright_red]--[/]]"
INFO = "[[bright_yellow]+-[/]]"


def success(msg: str) -> None:
    console.print(f"{GOOD} {escape(msg)}")


def failure(msg: str) -> None:
    console.print(f"{BAD} {escape(msg)}")


def info(msg: str) -> None:
    console.print(f"{INFO} {escape(msg)}")

__all__ = ["app"]

import logging
from typing import Annotated

import typer
from returns.result import Failure, Success

from .chain import ChainOrder, plan_chain
from .cost import left_to_right_cost

app = typer.Typer()


def format_cost_table(order: ChainOrder) -> str:
    width = max(len(str(cost)) for row in order.costs for cost in row)
    lines = []
    for i, row in enumerate(order.costs):
        cells = [str(cost).rjust(width) if j >= i else " " * width for j, cost in enumerate(row)]
        lines.append("  ".join(cells).rstrip())
    return "\n".join(lines)


@app.command()
def matchain(
    dimensions: Annotated[
        list[int],
        typer.Argument(
            show_default=False,
            help=(
                "The boundary dimensions of the chain, e.g. 400 300 30 500 400 for matrices of "
                "shape 400x300, 300x30, 30x500, and 500x400."
            ),
        ),
    ],
    names: Annotated[
        list[str],
        typer.Option(
            "--name",
            "-n",
            help=(
                "The name of an operand in the printed parenthesization. Mention once per operand "
                "in order. Defaults to A1, A2, and so on."
            ),
        ),
    ] = [],  # noqa: B006; Typer does not support Sequence or tuple
    table: Annotated[
        bool,
        typer.Option("--table", help="Also print the table of minimum sub-chain costs."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debugging information to standard error."),
    ] = False,
):
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    match plan_chain(dimensions):
        case Failure(error):
            typer.echo(str(error), err=True)
            raise typer.Exit(1)
        case Success(order):
            pass
        case _:
            raise NotImplementedError()

    if len(names) == 0:
        names = None
    elif len(names) != order.length:
        typer.echo(
            f"Expected one name per operand, but found {len(names)} names for {order.length} "
            f"operands",
            err=True,
        )
        raise typer.Exit(1)

    typer.echo(order.parenthesize(names))
    typer.echo(f"optimal cost: {order.cost}")
    typer.echo(f"left-to-right cost: {left_to_right_cost(order.dimensions)}")

    if table:
        typer.echo("cost table:")
        typer.echo(format_cost_table(order))

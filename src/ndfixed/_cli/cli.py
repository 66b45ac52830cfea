import logging
from enum import Enum
from typing import Annotated, Literal, cast

import typer

import ndfixed
from ndfixed.errors import IndexOutOfRangeError, InvalidShapeError

app = typer.Typer()

logger = logging.getLogger(__name__)


def _set_logging_level(*, verbose: bool) -> None:
    if verbose:
        lvl = "DEBUG"
    else:
        lvl = "WARNING"
    ndfixed.set_log_level(cast(Literal["DEBUG", "WARNING"], lvl))
    ndfixed.set_format("%(message)s")


class Order(str, Enum):
    C = "C"
    F = "F"


def _format_elements(array: ndfixed.NDArray, order: Literal["C", "F"]) -> str:
    return " ".join(str(value) for value in array.elements(order))


@app.command()  # type: ignore[misc]
def demo(
    shape: Annotated[
        list[int] | None,
        typer.Argument(help="Shape of the arrays to exercise. Defaults to 2 3 4."),
    ] = None,
) -> None:
    """Exercise indexing, assignment and both traversal orders on sample arrays."""
    shape = shape or [2, 3, 4]
    try:
        arr1 = ndfixed.make_array(shape, dtype="int32")
    except InvalidShapeError as e:
        raise typer.BadParameter(str(e), param_hint="SHAPE") from e
    arr2 = ndfixed.make_array(shape, dtype="int32")
    arr3 = ndfixed.make_array(shape, dtype="int16")

    it, end = arr1.row_major_begin(), arr1.row_major_end()
    value = 0
    while it != end:
        arr1[it.position] = arr2[it.position] = value
        arr3[it.position] = value
        value += 1
        it.advance()
    logger.info("filled arrays of shape %s with 0..%s", tuple(shape), arr1.size - 1)

    # one past the end of the second dimension, when there is one
    bad_index = [0] * len(shape)
    bad_level = 1 if len(shape) > 1 else 0
    bad_index[bad_level] = shape[bad_level]
    try:
        arr1[tuple(bad_index)] = 1
    except IndexOutOfRangeError as e:
        typer.echo(f"{type(e).__name__}: {e}")
    else:
        raise RuntimeError(f"index {tuple(bad_index)} was not rejected")

    arr1.assign(arr1)
    arr2.assign(arr1)
    arr1.assign(arr3)

    row_equal = arr1.row_major_begin() == arr1.row_major_begin()
    col_equal = arr2.col_major_begin() == arr2.col_major_begin()
    typer.echo(f"row-major begin iterators equal: {row_equal}")
    typer.echo(f"col-major begin iterators equal: {col_equal}")

    typer.echo("Array elements in row-major order:")
    typer.echo(_format_elements(arr1, "C"))
    typer.echo("Array elements in column-major order:")
    typer.echo(_format_elements(arr1, "F"))
    typer.echo(f"value type: {arr1.value_type.__name__}")


@app.command()  # type: ignore[misc]
def info(
    shape: Annotated[list[int], typer.Argument(help="Size of each dimension.")],
    dtype: Annotated[str | None, typer.Option(help="Element type, e.g. int16.")] = None,
    order: Annotated[Order | None, typer.Option(help="Traversal order to report.")] = None,
) -> None:
    """Print a summary of an array of the given shape."""
    try:
        array = ndfixed.make_array(shape, dtype=dtype)
    except InvalidShapeError as e:
        raise typer.BadParameter(str(e), param_hint="SHAPE") from e
    if order is None:
        typer.echo(repr(array.info))
    else:
        with ndfixed.config.set({"array.order": order.value}):
            typer.echo(repr(array.info))


@app.callback()  # type: ignore[misc]
def main(
    verbose: Annotated[
        bool,
        typer.Option(help="enable verbose logging - will print info about arrays being created."),
    ] = False,
) -> None:
    """
    See available commands below - access help for individual commands with ndfixed COMMAND --help.
    """
    _set_logging_level(verbose=verbose)


if __name__ == "__main__":
    app()

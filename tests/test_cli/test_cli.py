import logging

import pytest

from ndfixed.errors import InvalidShapeError

typer_testing = pytest.importorskip(
    "typer.testing", reason="optional cli dependencies aren't installed"
)
cli = pytest.importorskip("ndfixed._cli.cli", reason="optional cli dependencies aren't installed")

runner = typer_testing.CliRunner()


def test_demo() -> None:
    result = runner.invoke(cli.app, ["demo"])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert "IndexOutOfRangeError: index 3 is out of range for dimension 1 with length 3" in lines
    assert "row-major begin iterators equal: True" in lines
    assert "col-major begin iterators equal: True" in lines

    row_major = lines[lines.index("Array elements in row-major order:") + 1]
    assert row_major.split() == [str(v) for v in range(24)]
    col_major = lines[lines.index("Array elements in column-major order:") + 1]
    assert col_major.split()[:6] == ["0", "12", "4", "16", "8", "20"]
    assert sorted(int(v) for v in col_major.split()) == list(range(24))
    assert lines[-1] == "value type: int32"


def test_demo_custom_shape() -> None:
    result = runner.invoke(cli.app, ["demo", "2", "2"])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert "IndexOutOfRangeError: index 2 is out of range for dimension 1 with length 2" in lines
    assert lines[lines.index("Array elements in row-major order:") + 1] == "0 1 2 3"
    assert lines[lines.index("Array elements in column-major order:") + 1] == "0 2 1 3"


def test_demo_one_dimension() -> None:
    result = runner.invoke(cli.app, ["demo", "3"])
    assert result.exit_code == 0
    assert "IndexOutOfRangeError: index 3 is out of range for dimension 0 with length 3" in (
        result.output
    )


@pytest.mark.parametrize("shape", [["2", "0"], ["0"], ["3", "0", "2"]])
def test_demo_invalid_shape(shape: list[str]) -> None:
    result = runner.invoke(cli.app, ["demo", *shape])
    assert result.exit_code == 2
    assert not isinstance(result.exception, InvalidShapeError)


def test_info() -> None:
    result = runner.invoke(cli.app, ["info", "2", "3", "--dtype", "int16", "--order", "F"])
    assert result.exit_code == 0
    assert "Data type          : int16" in result.output
    assert "Shape              : (2, 3)" in result.output
    assert "Order              : C" in result.output
    assert "Traversal order    : F" in result.output
    assert "No. bytes          : 12" in result.output


def test_info_invalid_shape() -> None:
    result = runner.invoke(cli.app, ["info", "2", "0"])
    assert result.exit_code == 2


def test_verbose_sets_log_level() -> None:
    result = runner.invoke(cli.app, ["--verbose", "info", "2"])
    assert result.exit_code == 0
    assert logging.getLogger("ndfixed").level == logging.DEBUG
    runner.invoke(cli.app, ["info", "2"])
    assert logging.getLogger("ndfixed").level == logging.WARNING

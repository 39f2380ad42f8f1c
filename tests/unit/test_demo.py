import logging

import pytest

from cpsparse import parse_all
from cpsparse.demo import hello_or_world, hello_world, main


def test_grammars() -> None:
    assert parse_all(hello_or_world(), "World") == ["World"]
    assert parse_all(hello_world(), "HelloWorld") == ["HelloWorld"]
    assert parse_all(hello_world(), "Goodbye") == []


def test_main_default_inputs(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "World hello_or_world: World",
        "HelloWorld hello_or_world: Hello",
        "HelloWorld hello_world: HelloWorld",
    ]


def test_main_no_match_prints_nothing(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["Goodbye"]) == 0
    assert capsys.readouterr().out == ""


def test_main_verbose_logs_steps(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="cpsparse.main")
    main(["--verbose", "HelloWorld"])
    assert "literal('Hello') matched at 0" in caplog.text
    assert "seq: second parser matched at 5..10" in caplog.text


def test_main_labels_each_input(capsys: pytest.CaptureFixture[str]) -> None:
    main(["Hello", "World"])
    assert capsys.readouterr().out.splitlines() == [
        "Hello hello_or_world: Hello",
        "World hello_or_world: World",
    ]

"""Tests for the re-prompting console readers."""


def test_read_int_reprompts_until_in_range(scripted) -> None:
    io = scripted(["abc", "9", "2"])

    assert io.read_int("Choose an option", 1, 3) == 2
    assert "Invalid input. Please enter a valid number." in io.lines
    assert "Please enter a number between 1 and 3" in io.lines


def test_read_int_back_sentinel(scripted) -> None:
    assert scripted(["0"]).read_int("Select", 1, 5, allow_back=True) is None


def test_read_int_zero_is_invalid_without_back(scripted) -> None:
    io = scripted(["0", "1"])

    assert io.read_int("Select", 1, 5) == 1


def test_read_float(scripted) -> None:
    io = scripted(["cheap", "0.001", "12.5"])

    assert io.read_float("Enter price", 0.01) == 12.5
    assert "Please enter a number greater than or equal to 0.01" in io.lines


def test_read_float_back_sentinel(scripted) -> None:
    assert scripted(["0"]).read_float("Enter price", 0.01, allow_back=True) is None


def test_read_string_min_length_and_back(scripted) -> None:
    io = scripted(["a", "  Cluj  "])
    assert io.read_string("Enter station name", 2) == "Cluj"
    assert "Input must be at least 2 characters long." in io.lines

    assert scripted(["BACK"]).read_string("Enter station name", 2, allow_back=True) is None


def test_read_string_allow_empty(scripted) -> None:
    assert scripted([""]).read_string("Optional", 3, allow_empty=True) == ""


def test_read_time(scripted) -> None:
    io = scripted(["25:00", "7:45"])

    assert io.read_time("Enter departure time") == "07:45"
    assert "Invalid time format. Please use HH:MM (24-hour format)." in io.lines

    assert scripted(["back"]).read_time("Enter departure time", allow_back=True) is None


def test_read_yes_no(scripted) -> None:
    io = scripted(["maybe", "y", "N"])

    assert io.read_yes_no("Confirm?") is True
    assert io.read_yes_no("Confirm?") is False
    assert "Please enter Y for Yes or N for No." in io.lines


def test_read_float_rejects_inf_and_nan(scripted) -> None:
    io = scripted(["inf", "nan", "-inf", "42"])

    assert io.read_float("Enter price", 0.01) == 42.0
    assert io.lines.count("Invalid input. Please enter a valid number.") == 3

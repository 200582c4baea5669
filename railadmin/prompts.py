import math

from pydantic import ValidationError

from .schemas import normalize_time


BACK_NUMBER = "0"
BACK_WORD = "back"


class Prompter:
    """Console readers that keep asking until the answer is valid.

    With allow_back, "0" (numbers) or "back" (text) returns None so the
    caller can abandon the current operation.
    """

    def __init__(self, input_fn=input, output_fn=print):
        self.input = input_fn
        self.output = output_fn


    def say(self, message=""):
        self.output(message)


    def pause(self):
        self.output("Press Enter to continue...")
        self.input("")


    def read_int(self, prompt, minimum, maximum, allow_back=False):
        while True:
            raw = self.input(prompt + (" (0 to go back): " if allow_back else ": ")).strip()

            if allow_back and raw == BACK_NUMBER:
                return None
            try:
                value = int(raw)
            except ValueError:
                self.output("Invalid input. Please enter a valid number.")
                continue

            if minimum <= value <= maximum:
                return value
            self.output(f"Please enter a number between {minimum} and {maximum}")


    def read_float(self, prompt, minimum, allow_back=False):
        while True:
            raw = self.input(prompt + (" (0 to go back): " if allow_back else ": ")).strip()

            if allow_back and raw == BACK_NUMBER:
                return None
            try:
                value = float(raw)
            except ValueError:
                value = math.nan

            # "inf" and "nan" parse as floats but are not prices
            if not math.isfinite(value):
                self.output("Invalid input. Please enter a valid number.")
                continue

            if value >= minimum:
                return value
            self.output(f"Please enter a number greater than or equal to {minimum}")


    def read_string(self, prompt, min_length=1, allow_empty=False, allow_back=False):
        while True:
            raw = self.input(prompt + (" (enter 'back' to return): " if allow_back else ": ")).strip()

            if allow_back and raw.lower() == BACK_WORD:
                return None
            if (allow_empty and raw == "") or len(raw) >= min_length:
                return raw
            self.output(f"Input must be at least {min_length} characters long.")


    def read_time(self, prompt, allow_back=False):
        while True:
            suffix = " (HH:MM, enter 'back' to return): " if allow_back else " (HH:MM): "
            raw = self.input(prompt + suffix).strip()

            if allow_back and raw.lower() == BACK_WORD:
                return None
            try:
                return normalize_time(raw)
            except ValueError as e:
                self.output(str(e))


    def read_yes_no(self, prompt):
        while True:
            raw = self.input(prompt + " (Y/N): ").strip().upper()
            if raw == "Y":
                return True
            if raw == "N":
                return False
            self.output("Please enter Y for Yes or N for No.")


    def show_errors(self, error: ValidationError):
        for item in error.errors():
            # pydantic prefixes custom messages with "Value error, "
            self.output(item["msg"].removeprefix("Value error, "))

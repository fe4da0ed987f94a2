"""Zip modes -- sequences of unequal length in one repetition.

A repetition zips every sequence referenced directly in its body. By
default the lengths must agree. ``Environment(zip_mode="shortest")`` stops
at the shortest sequence instead, which makes a hidden counter handy for
limiting output.

Run:
    python app.py
"""

from extfmt import Environment, ZipLengthError

SOURCE = "Top picks:\n$(@counter  $items)\\n*"
bindings = {"items": ["apple", "banana", "cherry"], "counter": [1, 2]}

strict = Environment()
try:
    strict_output = strict.render(SOURCE, bindings)
except ZipLengthError as e:
    strict_output = None
    strict_error = e

shortest = Environment(zip_mode="shortest")
shortest_output = shortest.render(SOURCE, bindings)


def main() -> None:
    print("strict:")
    print(f"  {strict_error.message}")
    print()
    print("shortest:")
    print(shortest_output)


if __name__ == "__main__":
    main()

"""Hello World -- the simplest extfmt example.

Parse a template from a string and render it with bindings.

Run:
    python app.py
"""

from extfmt import Environment

env = Environment()

# Parse from string
template = env.from_string("Hello, $name!")

# Render with bindings
output = template.render(name="World")

# Repetitions join each element with the separator
numbers = env.render("Numbers: $($numbers)(, )*", numbers=[1, 2, 3])


def main() -> None:
    print(output)
    print(numbers)
    print()

    # Multiple renders with different bindings
    for name in ["extfmt", "Python"]:
        print(template.render(name=name))


if __name__ == "__main__":
    main()

"""Template introspection -- static analysis API.

Demonstrates referenced_names(), required_names() and control_names().
They let a caller check its bindings before rendering, without executing
the template.

Run:
    python app.py
"""

from extfmt import Environment

env = Environment()

template = env.from_string(
    "$(@{rows:row}${label:name}: $($row)(, )* [$name])\\n*",
    name="report.txt",
)

# Every name read anywhere in the template
referenced = template.referenced_names()

# Names the caller has to bind (renames are introduced by the template)
required = template.required_names()

# Names used only as hidden repetition drivers
controls = template.control_names()

bindings = {"rows": [[1, 2], [3]], "label": ["a", "b"]}
missing = required - set(bindings)
output = template.render(bindings) if not missing else ""

lines = [
    f"Referenced: {sorted(referenced)}",
    f"Required: {sorted(required)}",
    f"Controls: {sorted(controls)}",
    f"Missing: {sorted(missing)}",
]


def main() -> None:
    print("=== Template Introspection ===\n")
    for line in lines:
        print(f"  {line}")
    print()
    print(output)


if __name__ == "__main__":
    main()

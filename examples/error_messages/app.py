"""Error messages -- what extfmt reports when a template or its data is wrong.

Every failure is a TemplateError. Parse errors point at the offending
character; runtime errors carry the template location, a source snippet,
the repetition iterations being rendered and a suggestion.

Colors are enabled automatically on a TTY; set NO_COLOR=1 to disable them.

Run:
    python app.py
"""

from extfmt import Environment, TemplateError

env = Environment()

CASES = {
    "typo": ("Hello, $nmae!", {"name": "World"}),
    "unterminated": ("Items: $($items, ", {"items": [1]}),
    "missing star": ("Items: $($items),", {"items": [1]}),
    "bare sequence": ("Items: $items", {"items": [1, 2]}),
    "zip lengths": ("$(@{rows:r}$($r $cols) *)\\n*", {"rows": [[1], [2, 3]], "cols": ["x"]}),
    "nothing to iterate": ("$( $title )*", {"title": "Report"}),
}

errors: dict[str, TemplateError] = {}
for label, (source, bindings) in CASES.items():
    try:
        env.from_string(source, name=f"{label.replace(' ', '_')}.txt").render(bindings)
    except TemplateError as e:
        errors[label] = e


def main() -> None:
    for label, error in errors.items():
        print("=" * 72)
        print(label)
        print("=" * 72)
        print(error.format_compact())
        print()


if __name__ == "__main__":
    main()

"""Code generation -- emit a C function from nested data.

Shows the features that make extfmt fit for generating source code:
zipped repetitions for parameter lists, a hidden control variable with a
rename to walk a matrix row by row, and unindent so the template can be
written at the indentation of the surrounding Python code.

Run:
    python app.py
"""

from extfmt import render_template_unindented

SOURCE = """
    $ret $name($($types $args)(, )*) {
        $(@{matrix:row}printf("$($row) *\\\\n");)(\\n    )*
        return $($args)( + )*;
    }
"""

bindings = {
    "ret": "int",
    "name": "dump",
    "types": ["int", "int"],
    "args": ["a", "b"],
    "matrix": [[1, 2, 3], [4, 5, 6], [7, 8, 9]],
}

output = render_template_unindented(SOURCE, bindings)


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()

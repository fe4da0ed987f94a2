"""Concurrent rendering -- one template shared by 8 threads.

Templates are immutable and every render builds its own scope chain, so
threads never see each other's bindings. Diagnostic state lives in a
ContextVar per thread.

Run:
    python app.py
"""

from concurrent.futures import ThreadPoolExecutor

from extfmt import Environment

env = Environment(unindent=True)

# Each thread renders the same template with different bindings
TEMPLATE_SOURCE = """\
    section $page_id: $title
    $(  - $tags)\\n*"""

template = env.from_string(TEMPLATE_SOURCE)

pages = [
    {"page_id": i, "title": f"Page {i}", "tags": [f"tag-{i}-a", f"tag-{i}-b", f"tag-{i}-c"]}
    for i in range(8)
]


def render_page(page: dict) -> str:
    """Render a single page -- called from a worker thread."""
    return template.render(page)


with ThreadPoolExecutor(max_workers=8) as pool:
    results = list(pool.map(render_page, pages))

output = "\n".join(results)


def main() -> None:
    print(f"Rendered {len(results)} pages across 8 threads:\n")
    for i, text in enumerate(results):
        print(f"--- Thread {i} ---")
        print(text)
        print()


if __name__ == "__main__":
    main()

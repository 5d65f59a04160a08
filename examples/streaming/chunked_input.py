"""Feed Markdown in arbitrary fragments, e.g. straight off a socket."""

import io

from pluma import markdown, parse, parse_chunks

SOURCE = """\
# Release notes\r
\r
* **faster** parsing\r
* [docs](https://example.com/docs "Docs")\r
\r
> Fragments may split a token anywhere.\r
"""


def read_in_pieces(size: int):
    """Yield the document a few characters at a time."""
    buf = io.StringIO(SOURCE, newline="")
    while piece := buf.read(size):
        yield piece


chunked = parse_chunks(read_in_pieces(3))
assert chunked == parse(SOURCE)

print(markdown(read_in_pieces(5)))

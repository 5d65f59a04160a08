"""Immutable settings and ASTs: parse 1000 docs across threads."""

from concurrent.futures import ThreadPoolExecutor

from pluma import Markdown

md = Markdown()
docs = ["# Doc " + str(i) + "\n\n* item " + str(i) for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(md.parse, docs))

print(f"Parsed {len(results)} documents in parallel")
print("First doc children:", len(results[0].children))
print("Last doc children:", len(results[-1].children))

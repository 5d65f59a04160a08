"""Raw HTML is sanitized by default; opt out only for trusted input."""

from pluma import Markdown, MarkdownSettings

untrusted = '<div onclick="steal()">hi<script>alert(1)</script>\n<a href="javascript:x">link'

print(Markdown()(untrusted))

trusted = Markdown(MarkdownSettings(xss_protect_raw_html=False))
print(trusted("<details><summary>More</summary>Body</details>"))

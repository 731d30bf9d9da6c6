import re

__all__ = ['get_snippets', 'first_snippet']

# A fenced code block tagged as rust. Blocks may not contain backticks,
# which is good enough for the typical MCVE.
CODEBLOCK_RE = re.compile(r'```rust(?P<snippet>[^`]+)```')


def get_snippets(body):
    'Iterate through the stripped contents of rust code blocks in body.'

    return (m.group('snippet').strip() for m in CODEBLOCK_RE.finditer(body))


def first_snippet(body):
    'The first code block in body, which is taken as the MCVE. May be None.'

    return next(get_snippets(body), None)

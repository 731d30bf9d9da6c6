import pystache
from rich.console import Console
from rich.markup import escape

from run_rustc import Outcome
from utils import pad
from config import HEADER_EVERY, URL_WIDTH, CELL_WIDTH

# (label, rich style) of each outcome cell
OUTCOME_CELLS = {
    Outcome.compiled: ('compiled', 'green'),
    Outcome.failed: ('failed', 'yellow'),
    Outcome.ice: ('ICE', 'red'),
    Outcome.toolchain_missing: ('missing', 'magenta'),
    Outcome.runner_error: ('error', 'bold red'),
}

CHANGED_STYLE = 'blue'

# Templates produce rich markup; everything substituted is already
# escaped for rich, so no HTML escaping.
HEADER_TEMPLATE = pystache.parse(
    '{{blank}}{{#toolchains}} {{name}}{{/toolchains}}')
ROW_TEMPLATE = pystache.parse('{{url}}{{#cells}} {{cell}}{{/cells}}')
MISSING_TEMPLATE = pystache.parse(
    '\nIssues without MCVEs:\n{{#urls}}{{url}}\n{{/urls}}')

RENDERER = pystache.Renderer(escape=lambda s: s)


def row_changed(outcomes):
    'True if not all outcomes are the same.'

    return any(a != b for a, b in zip(outcomes, outcomes[1:]))


def styled(text, style):
    return '[{style}]{text}[/{style}]'.format(style=style, text=escape(text))


def outcome_cell(outcome):
    label, style = OUTCOME_CELLS[outcome]
    return styled(pad(label, CELL_WIDTH), style)


def render_header(toolchains):
    context = {'blank': pad('', URL_WIDTH),
               'toolchains': [{'name': escape(pad(x, CELL_WIDTH))}
                              for x in toolchains]}
    return RENDERER.render(HEADER_TEMPLATE, context)


def render_row(html_url, outcomes):
    url = pad(html_url, URL_WIDTH)
    if row_changed(outcomes):
        url = styled(url, CHANGED_STYLE)
    else:
        url = escape(url)
    context = {'url': url,
               'cells': [{'cell': outcome_cell(x)} for x in outcomes]}
    return RENDERER.render(ROW_TEMPLATE, context)


def render_missing(urls):
    context = {'urls': [{'url': escape(x)} for x in urls]}
    return RENDERER.render(MISSING_TEMPLATE, context)


class TriageReport(object):
    'Console report of a triage run, printed a row at a time.'

    def __init__(self, toolchains, console=None):
        self.toolchains = tuple(toolchains)
        self.console = console or Console(highlight=False)
        self.num_rows = 0
        self.without_mcve = []

    def _print(self, markup, end='\n'):
        self.console.print(markup, end=end, soft_wrap=True)

    def addRow(self, html_url, outcomes):
        '''Print a row of outcomes, one per toolchain. The header is
        repeated every HEADER_EVERY rows.'''

        assert len(outcomes) == len(self.toolchains), (html_url, outcomes)
        if self.num_rows % HEADER_EVERY == 0:
            self._print(render_header(self.toolchains))
        self._print(render_row(html_url, outcomes))
        self.num_rows += 1

    def addWithoutMcve(self, html_url):
        'Remember an issue without an MCVE, to be listed by finish().'
        self.without_mcve.append(html_url)

    def finish(self):
        'Print the issues without an MCVE.'
        self._print(render_missing(self.without_mcve), end='')

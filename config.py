from collections import namedtuple

##### These are probably the most important variables to change:

# Open issues labeled as internal compiler errors. Further pages are
# found through the Link header of each response.
ISSUES_URL = ('https://api.github.com/repos/rust-lang/rust/issues'
              '?labels=I-ice&state=open')

# Toolchains given on the command line are prefixed with this channel,
# so that `2019-09-01` becomes `nightly-2019-09-01`.
TOOLCHAIN_CHANNEL = 'nightly'

# seconds to wait for the issue tracker to answer
HTTP_TIMEOUT = 30

# Toolchains to test with if none are given on the command line.
DEFAULT_TOOLCHAINS = (
    'nightly-2019-02-01',
    'nightly-2019-09-01',
    'nightly-2019-10-01',
    'nightly',
)

##### You might get away without changing these:

# The toolchain manager used to select a toolchain for each compilation.
RUSTUP_COMMAND = 'rustup'

# seconds; None waits for the compiler forever. A compiler still running
# after this is killed and reported as a runner error.
COMPILE_TIMEOUT = None

# Substring in rustc's output that marks a crash rather than an error
# in the input.
ICE_MARKER = 'internal compiler error'

# Print the toolchain header again after this many rows.
HEADER_EVERY = 10

# Column widths of the console report.
URL_WIDTH = 50
CELL_WIDTH = 20


TriageConfig = namedtuple('TriageConfig',
                          ['toolchains', 'issues_url', 'timeout'])


def expand_toolchain(name):
    'Expand a date (or other suffix) to a full toolchain name.'
    return '{}-{}'.format(TOOLCHAIN_CHANNEL, name)


def make_config(names=None, issues_url=ISSUES_URL, timeout=COMPILE_TIMEOUT):
    '''Build the configuration of a run. names are suffixes given on the
    command line; if there are none, DEFAULT_TOOLCHAINS is used.'''

    if names:
        toolchains = tuple(expand_toolchain(x) for x in names)
    else:
        toolchains = DEFAULT_TOOLCHAINS
    return TriageConfig(toolchains=toolchains, issues_url=issues_url,
                        timeout=timeout)

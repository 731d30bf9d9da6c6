import subprocess as subp
import os
import sys
import tempfile
from collections import namedtuple
from enum import Enum
from multiprocessing.pool import ThreadPool

from utils import env_with_tmpdir
from config import RUSTUP_COMMAND, ICE_MARKER, COMPILE_TIMEOUT


class Outcome(Enum):
    'The result of compiling an MCVE with one toolchain.'

    compiled = 1           # rustc exited with success
    failed = 2             # rejected the input, no crash
    ice = 3                # internal compiler error
    toolchain_missing = 4  # rustup does not have the toolchain
    runner_error = 5       # could not run the compiler at all


class ToolchainResult(namedtuple('ToolchainResult', ['index', 'outcome'])):
    'An outcome tagged with the position of its toolchain.'

    __slots__ = ()


def classify(retval, output):
    '''Classify a finished compilation by its exit status and combined
    stdout/stderr.

    rustc has no machine-readable way of telling a crash from a
    rejected input, so this looks for the conventional marker strings.
    It is a heuristic and can be fooled by an input that prints them.'''

    if retval == 0:
        return Outcome.compiled
    # rustup: error: toolchain 'nightly-...' is not installed
    if 'toolchain' in output and 'is not installed' in output:
        return Outcome.toolchain_missing
    if ICE_MARKER in output:
        return Outcome.ice
    return Outcome.failed


def compile_command(toolchain, artifact_path):
    'The command to compile stdin with toolchain into artifact_path.'

    return [RUSTUP_COMMAND, 'run', toolchain, 'rustc', '-',
            '-o', artifact_path]


def _run_compiler(toolchain, snippet, tmpdir, timeout):
    input_fname = os.path.join(tmpdir, 'input.rs')
    artifact_fname = os.path.join(tmpdir, 'artifact')
    output_fname = os.path.join(tmpdir, 'output.txt')

    # Issue bodies may carry lone surrogates, which rustc would reject
    # anyway; replace them rather than fail to write the input.
    with open(input_fname, 'wb') as f:
        f.write(snippet.encode('utf-8', errors='replace'))

    # rustc may leave its own temporaries around; keep them in tmpdir.
    env_tmpdir = os.path.join(tmpdir, 'tmp')
    os.mkdir(env_tmpdir)

    CMD = compile_command(toolchain, artifact_fname)
    with open(input_fname, 'rb') as stdin, \
            open(output_fname, 'wb') as stdout:
        with subp.Popen(CMD, stdin=stdin, stdout=stdout,
                        stderr=subp.STDOUT, cwd=tmpdir,
                        env=env_with_tmpdir(env_tmpdir)) as p:
            try:
                retval = p.wait(timeout=timeout)
            except subp.TimeoutExpired:
                p.kill()
                p.wait()
                raise

    # Only read the output once the compiler can no longer write to it.
    with open(output_fname, 'rb') as f:
        output = f.read().decode('utf-8', errors='replace')
    return retval, output


def try_toolchain(toolchain, snippet, timeout=COMPILE_TIMEOUT):
    '''Compile snippet with toolchain and return its Outcome. Failures
    to run the compiler are reported as Outcome.runner_error.'''

    try:
        with tempfile.TemporaryDirectory(prefix='rust_ice_triage') as tmpdir:
            retval, output = _run_compiler(toolchain, snippet, tmpdir,
                                           timeout)
    except (OSError, ValueError, subp.SubprocessError) as e:
        print('Running {} failed: {}'.format(toolchain, e), file=sys.stderr)
        return Outcome.runner_error
    return classify(retval, output)


def run_toolchains(snippet, toolchains, try_func=try_toolchain):
    '''Test snippet with all toolchains concurrently. Returns a list of
    Outcomes in the order of toolchains, whichever finishes first.'''

    if not toolchains:
        return []

    def try_one(index_toolchain):
        index, toolchain = index_toolchain
        try:
            outcome = try_func(toolchain, snippet)
        except Exception as e:
            print('Running {} failed: {!r}'.format(toolchain, e),
                  file=sys.stderr)
            outcome = Outcome.runner_error
        return ToolchainResult(index, outcome)

    with ThreadPool(len(toolchains)) as pool:
        results = list(pool.imap_unordered(try_one, enumerate(toolchains)))

    results.sort(key=lambda x: x.index)
    return [x.outcome for x in results]

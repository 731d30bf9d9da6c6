import io
import sys
import tempfile

import pytest
from rich.console import Console

import run_rustc

# Stands in for `rustup run TOOLCHAIN rustc - -o ARTIFACT`. The
# toolchain name decides what it does.
FAKE_RUSTUP = r'''
import sys
import time

toolchain = sys.argv[1]
source = sys.stdin.read()
if toolchain.endswith('good'):
    sys.exit(0)
if toolchain.endswith('ice'):
    sys.stderr.write("error: internal compiler error: unexpected panic\n")
    sys.exit(101)
if toolchain.endswith('missing'):
    sys.stderr.write("error: toolchain '%s' is not installed\n" % toolchain)
    sys.exit(1)
if toolchain.endswith('echo'):
    sys.stdout.write(source)
    sys.exit(1)
if toolchain.endswith('hang'):
    time.sleep(60)
sys.stderr.write("error[E0425]: cannot find value `x` in this scope\n")
sys.exit(1)
'''


@pytest.fixture
def fake_rustup(monkeypatch, tmp_path):
    '''Replace rustup with FAKE_RUSTUP. Toolchains ending in "broken"
    point to a nonexistent binary. Temporary directories are created
    under tmp_path / "tmp".'''

    def compile_command(toolchain, artifact_path):
        if toolchain.endswith('broken'):
            return [str(tmp_path / 'no-such-rustup')]
        return [sys.executable, '-c', FAKE_RUSTUP, toolchain]

    tmp = tmp_path / 'tmp'
    tmp.mkdir()
    monkeypatch.setattr(run_rustc, 'compile_command', compile_command)
    monkeypatch.setattr(tempfile, 'tempdir', str(tmp))
    return tmp


@pytest.fixture
def console():
    return Console(file=io.StringIO(), color_system=None, width=300,
                   highlight=False)

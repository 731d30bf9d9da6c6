#!/usr/bin/env python3

import sys
import functools
import argparse as argp
import shutil

import requests

from issues import get_issues
from snippets import first_snippet
from run_rustc import run_toolchains, try_toolchain
from triage_report import TriageReport

from config import make_config, RUSTUP_COMMAND, TOOLCHAIN_CHANNEL


def triage(config, issues=None, try_func=None, report=None):
    '''Test the MCVE of every issue with every toolchain and print the
    report. Returns the exit status: 0 on success, 1 if fetching the
    issues failed.'''

    if issues is None:
        issues = get_issues(config.issues_url)
    if try_func is None:
        try_func = functools.partial(try_toolchain, timeout=config.timeout)
    if report is None:
        report = TriageReport(config.toolchains)

    status = 0
    issues = iter(issues)
    while True:
        # Only fetching is fatal; compilation failures end up in the report.
        try:
            issue = next(issues)
        except StopIteration:
            break
        except (requests.RequestException, ValueError) as e:
            print('Error: Fetching issues failed: {}'.format(e),
                  file=sys.stderr)
            status = 1
            break

        mcve = first_snippet(issue.body)
        if mcve is None:
            report.addWithoutMcve(issue.html_url)
            continue
        print('Testing {}...'.format(issue.html_url), file=sys.stderr)
        outcomes = run_toolchains(mcve, config.toolchains, try_func)
        report.addRow(issue.html_url, outcomes)

    report.finish()
    return status


def check_prereqs():
    if shutil.which(RUSTUP_COMMAND) is None:
        print('Error: No {} in PATH.'.format(RUSTUP_COMMAND), file=sys.stderr)
        sys.exit(1)


def main():
    parser = argp.ArgumentParser(
        description='Test the MCVEs of open rustc ICE issues with '
        'several toolchains and show where the outcome changes.')
    parser.add_argument(
        'toolchains', metavar='DATE', nargs='*',
        help='Toolchain to test, without the "{}-" prefix. Can be given '
        'several times.'.format(TOOLCHAIN_CHANNEL))
    args = parser.parse_args()

    check_prereqs()

    config = make_config(args.toolchains)
    sys.exit(triage(config))


if __name__ == '__main__':
    main()

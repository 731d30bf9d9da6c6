import os
import copy


def env_with_tmpdir(path):
    'Return a copy of os.environ with TMPDIR & friends set.'
    env = copy.copy(os.environ)
    env['TMPDIR'] = path
    env['TMP'] = path
    env['TEMP'] = path
    return env


def pad(s, width):
    'Left-justify s to width columns, never truncating.'
    return '{:{width}}'.format(s, width=width)

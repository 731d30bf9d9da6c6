from collections import namedtuple

import requests

from config import HTTP_TIMEOUT

__all__ = ['Issue', 'get_issues', 'next_link']

ACCEPT = 'application/vnd.github.v3+json'


class Issue(namedtuple('Issue', ['html_url', 'body'])):
    'An issue in the bug tracker.'

    __slots__ = ()

    @classmethod
    def from_json(cls, obj):
        '''Make an Issue from a decoded JSON object. Raises ValueError
        if it does not look like an issue.'''

        if not isinstance(obj, dict) or 'html_url' not in obj:
            raise ValueError('Not an issue: {!r}'.format(obj))
        # The API gives null for an empty description.
        return cls(html_url=obj['html_url'], body=obj.get('body') or '')


def next_link(response):
    'The URL of the next page from the Link header, or None.'

    return response.links.get('next', {}).get('url')


def get_issues(url, session=None):
    '''Iterate through the issues at url, following rel="next" links
    until there are none. Network and HTTP errors propagate as
    requests.RequestException, undecodable pages as ValueError.'''

    if session is None:
        session = requests.Session()

    while url:
        response = session.get(url, headers={'Accept': ACCEPT},
                               timeout=HTTP_TIMEOUT)
        response.raise_for_status()
        page = response.json()
        if not isinstance(page, list):
            raise ValueError('Expected a list of issues from ' + url)
        for obj in page:
            yield Issue.from_json(obj)
        url = next_link(response)

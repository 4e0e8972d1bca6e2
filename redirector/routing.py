# -*- coding: utf-8 -
#
# This file is part of redirector released under the MIT license.
# See the NOTICE for more information.

"""\
Turn the operator supplied ``listen`` and ``redirect`` strings into a
validated listen address and a routing table.

A redirect rule has the form::

    from-domain:[scheme://]to-host[/path][:code]

for example ``domain.com:https://vm1.dev.test.com/test:302``. The scheme
is ``http`` or ``https`` and may be omitted, in which case the scheme of
the incoming request is reused. The code defaults to 301.
"""

import collections
import logging
import re

from redirector.errors import (InvalidListenAddress, InvalidRedirectCode,
                               InvalidRedirectRule)

DEFAULT_CODE = 301

LISTEN_PATTERN = r"^[a-zA-Z0-9_\.-]*:\d{2,5}$"
REDIRECT_PATTERN = (r"^(\w*\.\w*):((http|https):\/\/)?"
                    r"((\w+\.)?(\w+\.)?\w+\.\w+(/.*?)?)(:([0-9]{3}))?$")

LISTEN_RE = re.compile(LISTEN_PATTERN, re.ASCII)
# groups:
#   1  from domain          domain.com
#   3  scheme               http
#   4  destination + path   vm1.dev.test.com/test
#   9  code                 301
REDIRECT_RE = re.compile(REDIRECT_PATTERN, re.ASCII)

RedirectEntry = collections.namedtuple("RedirectEntry",
                                       ["scheme", "url", "code"])


def validate_listen_address(raw):
    """Return ``raw`` unchanged if it is a ``[host]:port`` string."""
    if not isinstance(raw, str) or LISTEN_RE.fullmatch(raw) is None:
        raise InvalidListenAddress(raw)
    return raw


def parse_redirect_rule(raw):
    """Parse one redirect rule into a ``(domain, RedirectEntry)`` pair."""
    match = None
    if isinstance(raw, str):
        match = REDIRECT_RE.fullmatch(raw)
    if match is None:
        raise InvalidRedirectRule(raw, REDIRECT_PATTERN)

    code = DEFAULT_CODE
    if match.group(9):
        try:
            code = int(match.group(9))
        except ValueError:
            raise InvalidRedirectCode(match.group(9))

    entry = RedirectEntry(scheme=match.group(3) or "",
                          url=match.group(4),
                          code=code)
    return match.group(1), entry


class RoutingTable(object):
    """\
    Base domain to ``RedirectEntry`` mapping.

    The table is filled once while the configuration is loaded and then
    frozen. Request handlers only ever read from it, so no locking is
    needed.
    """

    def __init__(self):
        self._entries = {}
        self.frozen = False

    def __len__(self):
        return len(self._entries)

    def get(self, domain, default=None):
        return self._entries.get(domain, default)

    def as_dict(self):
        return dict(self._entries)

    def set(self, domain, entry):
        if self.frozen:
            raise RuntimeError("routing table is frozen")
        self._entries[domain] = entry

    def add(self, raw, log=None):
        """Parse ``raw`` and store it, replacing any rule for that domain."""
        log = log or logging.getLogger("redirector.error")
        domain, entry = parse_redirect_rule(raw)
        self.set(domain, entry)
        log.info("redirect %s => %s with code %d and scheme %s",
                 domain, entry.url, entry.code, entry.scheme)
        return domain, entry

    def freeze(self):
        self.frozen = True
        return self


def parse_all(listen, redirects, table=None, log=None):
    """\
    Validate the listen address, then every redirect rule in order.

    The first invalid value raises. Rules parsed before it stay in
    ``table``, nothing is rolled back.
    """
    if table is None:
        table = RoutingTable()
    listen = validate_listen_address(listen)
    for raw in redirects or ():
        table.add(raw, log=log)
    return listen, table

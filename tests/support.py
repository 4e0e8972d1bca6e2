#
# This file is part of redirector released under the MIT license.
# See the NOTICE for more information.

import io

from redirector.routing import RedirectEntry, RoutingTable


class MockLog(object):
    """Records what is logged instead of writing it."""

    def __init__(self):
        self.records = []

    def _record(self, level, msg, *args):
        self.records.append((level, msg % args))

    def debug(self, msg, *args):
        self._record("debug", msg, *args)

    def info(self, msg, *args):
        self._record("info", msg, *args)

    def error(self, msg, *args):
        self._record("error", msg, *args)

    def levels(self):
        return [level for level, _ in self.records]


class StartResponse(object):

    def __init__(self):
        self.status = None
        self.headers = None
        self.calls = 0

    def __call__(self, status, headers, exc_info=None):
        self.status = status
        self.headers = dict(headers)
        self.calls += 1


def make_environ(host="example.com", path="/", query="", scheme="http",
                 method="GET", raw_uri=True):
    environ = {
        "REQUEST_METHOD": method,
        "SCRIPT_NAME": "",
        "PATH_INFO": path,
        "QUERY_STRING": query,
        "SERVER_NAME": "localhost",
        "SERVER_PORT": "8080",
        "SERVER_PROTOCOL": "HTTP/1.1",
        "wsgi.version": (1, 0),
        "wsgi.url_scheme": scheme,
        "wsgi.input": io.BytesIO(),
        "wsgi.errors": io.StringIO(),
        "wsgi.multithread": False,
        "wsgi.multiprocess": True,
        "wsgi.run_once": False,
    }
    if host is not None:
        environ["HTTP_HOST"] = host
    if raw_uri:
        environ["RAW_URI"] = path + ("?" + query if query else "")
    return environ


def make_table(rules):
    """make_table({"example.com": ("", "dest.com", 301)})"""
    table = RoutingTable()
    for domain, (scheme, url, code) in rules.items():
        table.set(domain, RedirectEntry(scheme, url, code))
    return table.freeze()

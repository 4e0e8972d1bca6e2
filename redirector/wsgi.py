# -*- coding: utf-8 -
#
# This file is part of redirector released under the MIT license.
# See the NOTICE for more information.

import html
import logging
from http import HTTPStatus

HEALTH_CHECK_PATH = "/hc"

EMPTY_HEADERS = [
    ("Content-Type", "text/plain; charset=utf-8"),
    ("Content-Length", "0"),
]

log = logging.getLogger("redirector.error")


def request_uri(environ):
    """ the raw request target, path plus query string """
    uri = environ.get("RAW_URI")
    if uri is not None:
        return uri
    uri = environ.get("PATH_INFO", "")
    if environ.get("QUERY_STRING"):
        uri = "%s?%s" % (uri, environ["QUERY_STRING"])
    return uri


def reason_phrase(code):
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return "Unknown"


def status_line(code):
    return "%d %s" % (code, reason_phrase(code))


class RedirectApp(object):
    """\
    WSGI application redirecting every request according to its Host
    header.
    """

    def __init__(self, resolver, log=log):
        self.resolver = resolver
        self.log = log

    def __call__(self, environ, start_response):
        if request_uri(environ) == HEALTH_CHECK_PATH:
            start_response("200 OK", list(EMPTY_HEADERS))
            return [b""]

        host = environ.get("HTTP_HOST", "")
        scheme = environ.get("wsgi.url_scheme", "http")
        target = self.resolver.resolve(host, scheme)
        if target is None:
            self.log.debug("no redirect for host %r", host)
            start_response("404 Not Found", list(EMPTY_HEADERS))
            return [b""]

        location, code = target
        self.log.debug("redirect %r to %s (%d)", host, location, code)
        return self.redirect(environ, start_response, location, code)

    def redirect(self, environ, start_response, location, code):
        method = environ.get("REQUEST_METHOD", "GET")
        headers = [
            ("Location", location),
            ("Content-Type", "text/html; charset=utf-8"),
        ]
        body = b""
        if method == "GET":
            body = ('<a href="%s">%s</a>.\n' % (
                html.escape(location), reason_phrase(code))).encode("utf-8")
        headers.append(("Content-Length", str(len(body))))
        start_response(status_line(code), headers)
        return [body]

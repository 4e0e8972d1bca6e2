# -*- coding: utf-8 -
#
# This file is part of redirector released under the MIT license.
# See the NOTICE for more information.


def base_domain(host):
    """\
    Return the last two labels of ``host``, ignoring any port.

    ``vm1.dev.example.com:8080`` gives ``example.com``. A host made of a
    single label (``localhost``) has no base domain and gives ``None``.
    """
    if not host:
        return None
    if host.startswith("["):
        # IPv6 literal
        return None
    host = host.rsplit(":", 1)[0]
    parts = host.split(".")
    if len(parts) < 2:
        return None
    return ".".join(parts[-2:])


class Resolver(object):

    def __init__(self, table):
        self.table = table

    def resolve(self, host, scheme):
        """\
        Return ``(location, code)`` for a request to ``host`` made over
        ``scheme``, or ``None`` when no rule matches.
        """
        domain = base_domain(host)
        if domain is None:
            return None

        entry = self.table.get(domain)
        if entry is None:
            return None

        location = "%s://%s" % (entry.scheme or scheme, entry.url)
        return location, entry.code

# -*- coding: utf-8 -
#
# This file is part of redirector released under the MIT license.
# See the NOTICE for more information.

# We don't need to call super() in __init__ methods of our
# Exception classes because we also define our own __str__ methods
# so there is no need to pass 'message' to the base class to get a
# meaningful output from 'str(exc)'.
# pylint: disable=super-init-not-called


class ConfigError(Exception):
    """ Exception raised on config error """


class InvalidListenAddress(ConfigError):
    def __init__(self, address):
        self.address = address

    def __str__(self):
        return ("invalid value for listen. Expected [host]:port, got %r"
                % self.address)


class InvalidRedirectRule(ConfigError):
    def __init__(self, rule, pattern):
        self.rule = rule
        self.pattern = pattern

    def __str__(self):
        return ("invalid value for redirect %r. Must match this regex %s"
                % (self.rule, self.pattern))


class InvalidRedirectCode(ConfigError):
    def __init__(self, code):
        self.code = code

    def __str__(self):
        return "invalid value for code. Cannot convert %r to int" % self.code
